"""
Validation Results - Field Errors as Data

✅ Expected Rejections Are Values:
Validators report rejections as FieldError entries collected in a
ValidationResult. Schemas signal rejection by raising SchemaValidationError,
which the schema validator converts back into a result.
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field

NO_ERROR = ""

@dataclass
class FieldError:
    """Represents the outcome for one field; an empty message means no error"""
    field: str
    message: str = NO_ERROR

    @property
    def is_error(self) -> bool:
        return self.message != NO_ERROR

@dataclass
class ValidationResult:
    """Result of validation operations"""
    is_valid: bool = True
    errors: List[FieldError] = field(default_factory=list)

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(is_valid=True, errors=[])

    @classmethod
    def from_errors(cls, errors: List[FieldError]) -> 'ValidationResult':
        """Valid unless at least one entry carries a message"""
        return cls(is_valid=not any(e.is_error for e in errors), errors=list(errors))

    def add_error(self, field: str, message: str):
        """Add a field error"""
        self.errors.append(FieldError(field, message))
        if message != NO_ERROR:
            self.is_valid = False

    def has_errors(self) -> bool:
        """Check if any entry carries a message"""
        return any(e.is_error for e in self.errors)

    def get_errors_by_field(self, field: str) -> List[FieldError]:
        """Get entries for a specific field"""
        return [e for e in self.errors if e.field == field]

    def message_for(self, field: str) -> str:
        """First non-empty message for a field, or the empty string"""
        for error in self.get_errors_by_field(field):
            if error.is_error:
                return error.message
        return NO_ERROR

    def as_dict(self) -> Dict[str, str]:
        """Field name to message; the first message reported for a field wins"""
        messages: Dict[str, str] = {}
        for error in self.errors:
            if error.field not in messages or not messages[error.field]:
                messages[error.field] = error.message
        return messages

class SchemaValidationError(Exception):
    """Raised by a schema when one or more fields are rejected"""

    def __init__(self, violations: List[FieldError], message: Optional[str] = None):
        self.violations = list(violations)
        if message is None:
            message = self.violations[0].message if self.violations else "Validation failed"
        super().__init__(message)
        self.message = message

# Export main components
__all__ = [
    "NO_ERROR", "FieldError", "ValidationResult", "SchemaValidationError"
]
