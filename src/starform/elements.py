"""Extracting (field name, value) pairs from input-element-like objects."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .core.utils import FieldValue


@dataclass
class InputElement:
    """Minimal stand-in for an HTML input element"""
    name: str = ""
    value: Optional[str] = ""
    type: str = "text"
    checked: bool = False
    id: str = ""

    def get_attribute(self, attribute: str) -> Any:
        return getattr(self, attribute, None)


@dataclass
class ChangeEvent:
    """Event-like wrapper around the element that changed"""
    target: Any


def _read(element: Any, attribute: str, default: Any = None) -> Any:
    if isinstance(element, Mapping):
        return element.get(attribute, default)
    return getattr(element, attribute, default)


def is_checkbox(element: Any) -> bool:
    get_attribute = _read(element, "get_attribute")
    if callable(get_attribute):
        return get_attribute("type") == "checkbox"
    return _read(element, "type") == "checkbox"


def field_from_element(element: Any) -> Tuple[str, FieldValue]:
    """
    Name and value of an element.

    The name falls back to the element id. Checkboxes yield their checked
    state, everything else its value.
    """
    field = _read(element, "name") or _read(element, "id")
    if not field:
        raise ValueError(f"Element has neither a name nor an id: {element!r}")

    if is_checkbox(element):
        return field, bool(_read(element, "checked", False))
    return field, _read(element, "value")


def event_target(event: Any) -> Any:
    return _read(event, "target")


__all__ = ["InputElement", "ChangeEvent", "is_checkbox", "field_from_element", "event_target"]
