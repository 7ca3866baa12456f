"""
StarForm - Reactive Form State for Python

Observable stores for form values, errors and touched flags, derived
validity and modification state, and a submit pipeline that validates
with either a custom function or a pydantic schema.
"""

from .form import Form, FormConfig, FormState
from .reactivity import Readable, Writable, Derived, writable, derived, get, batch
from .validation import (
    NO_ERROR,
    FieldError,
    ValidationResult,
    SchemaValidationError,
    ValidationSchema,
    PydanticSchema,
    FormValidator,
    resolve_validator,
)
from .elements import InputElement, ChangeEvent, field_from_element
from .config import StarFormConfig, Environment, LoggingConfig, configure_logging, get_config, set_config

__version__ = "0.1.0"

__all__ = [
    # Form
    'Form',
    'FormConfig',
    'FormState',

    # Stores
    'Readable',
    'Writable',
    'Derived',
    'writable',
    'derived',
    'get',
    'batch',

    # Validation
    'NO_ERROR',
    'FieldError',
    'ValidationResult',
    'SchemaValidationError',
    'ValidationSchema',
    'PydanticSchema',
    'FormValidator',
    'resolve_validator',

    # Input elements
    'InputElement',
    'ChangeEvent',
    'field_from_element',

    # Configuration
    'StarFormConfig',
    'Environment',
    'LoggingConfig',
    'configure_logging',
    'get_config',
    'set_config',
]
