"""
Validation Schemas - Whole-Form and Single-Field Schema Validation

✅ Structured Rejection:
A schema validates the complete value map, or one named field against the
complete value map, and raises SchemaValidationError listing every
violation it found. PydanticSchema adapts a pydantic model to this
interface.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .result import FieldError, SchemaValidationError

logger = logging.getLogger(__name__)

# pydantic error types whose context carries the exception a validator raised
_RAISED_ERROR_TYPES = ("value_error", "assertion_error")


class ValidationSchema(ABC):
    """
    Abstract interface for schema validation.

    Both calls are asynchronous and raise SchemaValidationError on rejection.
    Any other exception is treated as a fault of the schema itself.
    """

    @abstractmethod
    async def validate(self, values: Mapping[str, Any]) -> Any:
        """Validate the whole value map, collecting every violation"""
        pass

    @abstractmethod
    async def validate_at(self, field: str, values: Mapping[str, Any]) -> Any:
        """Validate one field against the whole value map"""
        pass


class PydanticSchema(ValidationSchema):
    """
    Schema backed by a pydantic model class.

    pydantic reports all violations in one pass, so whole-form validation
    is a single ``model_validate`` call. Single-field validation also
    validates the whole map and keeps only the violations located at the
    requested field; cross-field rules written as ``field_validator``s that
    read ``info.data`` therefore see the live values of the other fields.

    Example:
        class Signup(BaseModel):
            password: str
            password_confirmation: str

            @field_validator("password_confirmation")
            @classmethod
            def matches(cls, value, info):
                if value != info.data.get("password"):
                    raise ValueError("passwords must match")
                return value

        schema = PydanticSchema(Signup)
    """

    def __init__(self, model: Type[BaseModel]):
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise TypeError(f"PydanticSchema expects a pydantic model class, got {model!r}")
        self.model = model

    async def validate(self, values: Mapping[str, Any]) -> BaseModel:
        try:
            return self.model.model_validate(dict(values))
        except PydanticValidationError as exc:
            raise SchemaValidationError(self._violations(exc)) from exc

    async def validate_at(self, field: str, values: Mapping[str, Any]) -> Any:
        try:
            instance = self.model.model_validate(dict(values))
        except PydanticValidationError as exc:
            violations = [v for v in self._violations(exc) if v.field == field]
            if violations:
                raise SchemaValidationError(violations) from exc
            return values.get(field)
        return getattr(instance, field, values.get(field))

    def _violations(self, exc: PydanticValidationError) -> List[FieldError]:
        violations = []
        for error in exc.errors():
            loc = error.get("loc") or ()
            if not loc:
                logger.warning(f"Skipping schema violation without a field location: {error.get('msg')}")
                continue
            violations.append(FieldError(str(loc[0]), self._message(error)))
        return violations

    @staticmethod
    def _message(error: Dict[str, Any]) -> str:
        """Readable message; raised validator errors keep their own text"""
        ctx = error.get("ctx") or {}
        if error.get("type") in _RAISED_ERROR_TYPES and "error" in ctx:
            return str(ctx["error"])
        return error.get("msg", "Invalid value")

    def __repr__(self):
        return f"PydanticSchema({self.model.__name__})"


def as_schema(schema: Any) -> ValidationSchema:
    """Accept a ValidationSchema as is, or wrap a pydantic model class"""
    if isinstance(schema, ValidationSchema):
        return schema
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return PydanticSchema(schema)
    raise TypeError(f"Unsupported validation schema: {schema!r}")


# Export main components
__all__ = ["ValidationSchema", "PydanticSchema", "as_schema"]
