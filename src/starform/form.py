"""
Form - Reactive Form State and Lifecycle

📝 Observable Form State:
A Form owns one writable store per piece of state (values, errors, touched,
submitting, validating) and derives everything else from them (validity,
per-field modification, the combined snapshot). UI bindings subscribe to
the stores; user interaction goes through the lifecycle operations.

Direct writes to ``form``, ``errors`` and ``touched`` are allowed, but they
bypass touch tracking and validation. Prefer the operations below.

Example:
    form = Form(
        initial_values={"email": "", "terms": False},
        validation_schema=Signup,
        on_submit=save,
    )
    form.is_valid.subscribe(render_submit_button)

    await form.update_validate_field("email", "me@example.com")
    await form.handle_submit()
"""

import inspect
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictStr

from .core.utils import FieldValue, assign, clone_values, subscribe_once
from .elements import event_target, field_from_element
from .reactivity.store import Derived, Writable, batch, derived, writable
from .validation.result import NO_ERROR, ValidationResult
from .validation.service import FormValidator, resolve_validator

logger = logging.getLogger(__name__)

FormValues = Dict[str, FieldValue]
FormErrors = Dict[str, str]
FormFlags = Dict[str, bool]

SubmitHandler = Callable[[FormValues, Writable, Writable], Any]


class FormConfig(BaseModel):
    """Form configuration, immutable once created"""
    model_config = {
        "arbitrary_types_allowed": True,
        "frozen": True,
        "populate_by_name": True,
    }

    initial_values: Dict[str, Optional[Union[StrictBool, StrictStr]]] = Field(default_factory=dict)
    validation_schema: Optional[Any] = None
    # ``validate`` would shadow BaseModel.validate
    validate_fn: Optional[Callable[..., Any]] = Field(default=None, alias="validate")
    on_submit: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class FormState:
    """Snapshot of every observable piece of form state"""
    form: FormValues
    errors: FormErrors
    touched: FormFlags
    modified: FormFlags
    is_valid: bool
    is_validating: bool
    is_submitting: bool
    is_modified: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Form:
    """
    Reactive form state engine.

    Stores:
        form, errors, touched: writable per-field maps
        is_submitting, is_validating: writable flags
        is_valid, modified, is_modified, state: derived, read-only
    """

    NO_ERROR = NO_ERROR
    IS_TOUCHED = True

    def __init__(self, config: Optional[FormConfig] = None, **kwargs):
        if config is None:
            config = FormConfig(**kwargs)
        elif kwargs:
            raise TypeError("Pass either a FormConfig or keyword arguments, not both")

        self.config = config
        self._is_initial_values_valid(config.initial_values)
        self._initial_values: FormValues = clone_values(config.initial_values)
        self._validator: FormValidator = resolve_validator(config.validate_fn, config.validation_schema)
        self._on_submit: Optional[SubmitHandler] = config.on_submit

        self.form: Writable[FormValues] = writable(self._initial_form())
        self.errors: Writable[FormErrors] = writable(self._initial_errors())
        self.touched: Writable[FormFlags] = writable(self._initial_touched())
        self.is_submitting: Writable[bool] = writable(False)
        self.is_validating: Writable[bool] = writable(False)

        self.is_valid: Derived[bool] = derived([self.errors, self.touched], self._compute_is_valid)
        self.modified: Derived[FormFlags] = derived(self.form, self._compute_modified)
        self.is_modified: Derived[bool] = derived(
            self.modified, lambda modified: any(flag is True for flag in modified.values())
        )
        self.state: Derived[FormState] = derived(
            [
                self.form,
                self.errors,
                self.touched,
                self.modified,
                self.is_valid,
                self.is_validating,
                self.is_submitting,
                self.is_modified,
            ],
            lambda values: FormState(*values),
        )

    @property
    def initial_values(self) -> FormValues:
        """Copy of the snapshot that reset restores"""
        return clone_values(self._initial_values)

    @property
    def validator(self) -> FormValidator:
        return self._validator

    # Derived computations

    def _compute_is_valid(self, values) -> bool:
        errors, touched = values
        all_touched = all(flag is Form.IS_TOUCHED for flag in touched.values())
        no_errors = all(message == Form.NO_ERROR for message in errors.values())
        return all_touched and no_errors

    def _compute_modified(self, form: FormValues) -> FormFlags:
        return {
            field: form.get(field) != initial
            for field, initial in self._initial_values.items()
        }

    # Initial snapshots

    def _initial_form(self) -> FormValues:
        return clone_values(self._initial_values)

    def _initial_errors(self) -> FormErrors:
        return assign(self._initial_values, Form.NO_ERROR)

    def _initial_touched(self) -> FormFlags:
        return assign(self._initial_values, not Form.IS_TOUCHED)

    # Lifecycle operations

    async def handle_change(self, event: Any) -> None:
        """Update and validate the field behind an input change event"""
        element = event_target(event)
        if element is None:
            return
        field, value = field_from_element(element)
        await self.update_validate_field(field, value)

    def handle_reset(self) -> None:
        """Restore values, errors and touched flags to the initial snapshot"""
        with batch():
            self.form.set(self._initial_form())
            self.errors.set(self._initial_errors())
            self.touched.set(self._initial_touched())

    async def handle_submit(self, event: Any = None) -> None:
        """
        Validate the whole form and call ``on_submit`` when it passes.

        Rejections end up in ``errors``. ``is_submitting`` is always released,
        even when the validator itself fails and its exception propagates.
        """
        prevent_default = getattr(event, "prevent_default", None)
        if callable(prevent_default):
            prevent_default()

        self.is_submitting.set(True)
        try:
            values = dict(await subscribe_once(self.form))
            result = await self._run_validation(self._validator.validate_form, values)

            if result.is_valid:
                await self._clear_errors_and_submit(values)
            else:
                logger.debug(f"Submit rejected: {result.as_dict()}")
                self._write_errors(result)
        finally:
            self.is_submitting.set(False)

    async def validate_field(self, field: str) -> None:
        """Touch and validate a field using its current value"""
        values = await subscribe_once(self.form)
        await self._validate_field_value(field, values.get(field))

    def update_field(self, field: str, value: FieldValue) -> None:
        """
        Store a field value.

        ``None`` and the empty string mean the input carried no value and
        are not written; ``False`` is a real value and is.
        """
        if value is None or value == "":
            return
        self._update_key(self.form, field, value)

    def update_touched(self, field: str, value: bool) -> None:
        self._update_key(self.touched, field, value)

    async def update_validate_field(self, field: str, value: FieldValue) -> None:
        """Store a value, mark the field touched and validate it"""
        self.update_field(field, value)
        await self._validate_field_value(field, value)

    def update_initial_values(self, new_values: Mapping[str, FieldValue]) -> None:
        """Replace the initial snapshot and reset the form to it"""
        if not self._is_initial_values_valid(new_values):
            return
        self._initial_values = clone_values(dict(new_values))
        self.handle_reset()

    # Internals

    async def _validate_field_value(self, field: str, value: FieldValue) -> None:
        self.update_touched(field, Form.IS_TOUCHED)
        # Live values plus the validated value, which update_field may have skipped
        values = dict(self.form.get())
        values[field] = value
        result = await self._run_validation(self._validator.validate_field, field, values)
        self._update_key(self.errors, field, result.message_for(field))

    async def _run_validation(self, validation: Callable, *args) -> ValidationResult:
        if not self._validator.active:
            return await validation(*args)

        self.is_validating.set(True)
        try:
            return await validation(*args)
        finally:
            self.is_validating.set(False)

    async def _clear_errors_and_submit(self, values: FormValues) -> None:
        self.errors.set(self._initial_errors())
        if self._on_submit is None:
            return
        outcome = self._on_submit(values, self.form, self.errors)
        if inspect.isawaitable(outcome):
            await outcome

    def _write_errors(self, result: ValidationResult) -> None:
        errors = dict(self.errors.get())
        for error in result.errors:
            if error.field not in self._initial_values:
                logger.debug(f"Adding error for field outside initial values: {error.field!r}")
            errors[error.field] = error.message
        self.errors.set(errors)

    def _update_key(self, store: Writable, field: str, value: Any) -> None:
        store.update(lambda record: {**record, field: value})

    def _is_initial_values_valid(self, initial_values: Optional[Mapping[str, FieldValue]]) -> bool:
        if not initial_values:
            logger.warning(f"initial_values need to be a non empty mapping, provided {initial_values!r}")
            return False
        return True

    def __repr__(self):
        return f"Form(fields={list(self._initial_values)!r})"


# Export main components
__all__ = [
    "Form", "FormConfig", "FormState",
    "FormValues", "FormErrors", "FormFlags", "SubmitHandler",
]
