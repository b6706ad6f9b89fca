"""
tag_validator: custom field rules for pydantic models.

Rules (int, float, date, RFC 3339 timestamps, notNull) are attached to model
fields with ``Annotated[..., Tag("rule")]`` and evaluated by a shared,
pre-configured validator. Nullable SQL-style scalar wrappers are validated on
their underlying value.
"""

from tag_validator.errors import RegistrationError, TagValidatorError, UndefinedRuleError
from tag_validator.nullable import (
    NullBool,
    NullFloat64,
    NullInt64,
    NullScalar,
    NullString,
    Valuer,
    validate_valuer,
)
from tag_validator.rules import (
    is_date,
    is_datetime,
    is_float,
    is_int,
    is_rfc3339,
    is_rfc3339_without_zone,
    not_null,
)
from tag_validator.validator import Tag, Validator, get_validator, new_validator

__all__ = [
    "NullBool",
    "NullFloat64",
    "NullInt64",
    "NullScalar",
    "NullString",
    "RegistrationError",
    "Tag",
    "TagValidatorError",
    "UndefinedRuleError",
    "Validator",
    "Valuer",
    "get_validator",
    "is_date",
    "is_datetime",
    "is_float",
    "is_int",
    "is_rfc3339",
    "is_rfc3339_without_zone",
    "new_validator",
    "not_null",
    "validate_valuer",
]
