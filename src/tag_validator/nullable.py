"""
Nullable scalar wrappers, modelled on SQL nullable columns.

Each wrapper holds one scalar plus a ``valid`` flag and exposes ``value()``,
which returns the scalar or None. Wrappers accept raw input when used as
pydantic field types: ``None`` becomes an invalid (absent) wrapper and a
scalar becomes a valid one.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator


@runtime_checkable
class Valuer(Protocol):
    """Anything that can report its underlying value, None when absent."""

    def value(self) -> Any: ...


class NullScalar(BaseModel):
    """Base for the Null* wrappers. Subclasses name their scalar field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    scalar_field: ClassVar[str]

    valid: bool = Field(default=False, description="True when the scalar is present")

    @model_validator(mode="before")
    @classmethod
    def _wrap_scalar(cls, data: Any) -> Any:
        if isinstance(data, (dict, NullScalar)):
            return data
        if data is None:
            return {"valid": False}
        return {cls.scalar_field: data, "valid": True}

    def value(self) -> Any:
        if not self.valid:
            return None
        return getattr(self, self.scalar_field)


class NullString(NullScalar):
    """A string that may be null."""

    scalar_field: ClassVar[str] = "string"

    string: str = ""


class NullInt64(NullScalar):
    """An integer that may be null."""

    scalar_field: ClassVar[str] = "int64"

    int64: int = 0


class NullBool(NullScalar):
    """A bool that may be null."""

    scalar_field: ClassVar[str] = "bool_"

    bool_: bool = Field(default=False, alias="bool")


class NullFloat64(NullScalar):
    """A float that may be null."""

    scalar_field: ClassVar[str] = "float64"

    float64: float = 0.0


NULL_TYPES = (NullString, NullInt64, NullBool, NullFloat64)


def validate_valuer(field: Valuer) -> Optional[Any]:
    """
    Custom type function for Valuer wrappers.

    Returns the underlying value, or None when the wrapper is absent or its
    value cannot be extracted.
    """
    try:
        return field.value()
    except (TypeError, ValueError):
        return None
