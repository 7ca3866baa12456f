"""
Validation Service - One Contract for Every Validator Shape

✅ Clean Validation Interface:
A form is configured with a custom validation function, a schema, or
neither. The matching FormValidator is resolved once at construction and
the form controller only ever calls ``validate_field`` and
``validate_form``; it never inspects which kind it holds.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional

from .result import NO_ERROR, FieldError, SchemaValidationError, ValidationResult
from .schema import ValidationSchema, as_schema

logger = logging.getLogger(__name__)

ValidateFn = Callable[[Dict[str, Any]], Optional[Dict[str, str]]]


class FormValidator(ABC):
    """
    Abstract interface for form validation.

    ``active`` tells the controller whether a validation pass is actually
    performed, which is what drives the ``is_validating`` flag.
    """

    active: bool = True

    @abstractmethod
    async def validate_field(self, field: str, values: Mapping[str, Any]) -> ValidationResult:
        """Validate a single field; the result holds one entry for ``field``"""
        pass

    @abstractmethod
    async def validate_form(self, values: Mapping[str, Any]) -> ValidationResult:
        """Validate every field at once"""
        pass


class NoValidator(FormValidator):
    """Used when neither a function nor a schema is configured"""

    active = False

    async def validate_field(self, field: str, values: Mapping[str, Any]) -> ValidationResult:
        return ValidationResult(is_valid=True, errors=[FieldError(field, NO_ERROR)])

    async def validate_form(self, values: Mapping[str, Any]) -> ValidationResult:
        return ValidationResult.ok()


class CustomValidator(FormValidator):
    """
    Adapter for a user supplied validation function.

    The function receives a value map and returns ``None``/an empty mapping
    when valid, otherwise a partial mapping of field name to message. It may
    be a coroutine function.
    """

    def __init__(self, fn: ValidateFn):
        self.fn = fn

    async def _call(self, values: Dict[str, Any]) -> Dict[str, str]:
        outcome = self.fn(values)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        return dict(outcome or {})

    async def validate_field(self, field: str, values: Mapping[str, Any]) -> ValidationResult:
        # Scoped call: the function only sees the field under validation
        errors = await self._call({field: values.get(field)})
        message = errors.get(field) or NO_ERROR
        return ValidationResult.from_errors([FieldError(field, message)])

    async def validate_form(self, values: Mapping[str, Any]) -> ValidationResult:
        errors = await self._call(dict(values))
        if not errors:
            return ValidationResult.ok()

        # Fields the function did not mention passed
        entries = [FieldError(field, errors.get(field) or NO_ERROR) for field in values]
        entries.extend(
            FieldError(field, message or NO_ERROR)
            for field, message in errors.items() if field not in values
        )
        return ValidationResult.from_errors(entries)


class SchemaValidator(FormValidator):
    """
    Adapter for a ValidationSchema.

    Only SchemaValidationError is interpreted as a rejection; anything else
    raised by the schema propagates to the caller.
    """

    def __init__(self, schema: ValidationSchema):
        self.schema = schema

    async def validate_field(self, field: str, values: Mapping[str, Any]) -> ValidationResult:
        try:
            await self.schema.validate_at(field, values)
        except SchemaValidationError as exc:
            return ValidationResult.from_errors([FieldError(field, exc.message or str(exc))])
        return ValidationResult(is_valid=True, errors=[FieldError(field, NO_ERROR)])

    async def validate_form(self, values: Mapping[str, Any]) -> ValidationResult:
        try:
            await self.schema.validate(values)
        except SchemaValidationError as exc:
            result = ValidationResult(is_valid=False, errors=[])
            for violation in exc.violations:
                result.add_error(violation.field, violation.message)
            return result
        return ValidationResult.ok()


def resolve_validator(validate: Optional[ValidateFn] = None, validation_schema: Any = None) -> FormValidator:
    """
    Pick the validator variant for a form configuration.

    A custom function takes precedence over a schema. A pydantic model class
    passed as schema is wrapped in PydanticSchema.
    """
    if validate is not None:
        if validation_schema is not None:
            logger.debug("Both validate and validation_schema configured, using validate")
        return CustomValidator(validate)
    if validation_schema is not None:
        return SchemaValidator(as_schema(validation_schema))
    return NoValidator()


# Export main components
__all__ = [
    "FormValidator", "NoValidator", "CustomValidator", "SchemaValidator",
    "resolve_validator", "ValidateFn",
]
