"""
Validation - Normalizing Custom Functions and Schemas

Structure:
- result.py: FieldError, ValidationResult and SchemaValidationError
- schema.py: ValidationSchema interface and the pydantic adapter
- service.py: FormValidator variants and their resolution
"""

from .result import NO_ERROR, FieldError, ValidationResult, SchemaValidationError
from .schema import ValidationSchema, PydanticSchema, as_schema
from .service import (
    FormValidator, NoValidator, CustomValidator, SchemaValidator,
    resolve_validator, ValidateFn,
)

__all__ = [
    "NO_ERROR", "FieldError", "ValidationResult", "SchemaValidationError",
    "ValidationSchema", "PydanticSchema", "as_schema",
    "FormValidator", "NoValidator", "CustomValidator", "SchemaValidator",
    "resolve_validator", "ValidateFn",
]
