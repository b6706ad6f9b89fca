"""
Errors raised by tag_validator.

Field-level validation failures are not represented here; they surface as
pydantic ``ValidationError`` entries of type ``tag``. These exceptions cover
misuse of the validator itself (unknown rule names, bad registrations).
"""

from __future__ import annotations


class TagValidatorError(Exception):
    """Base class for tag_validator errors."""


class UndefinedRuleError(TagValidatorError, LookupError):
    """Raised when a tag names a rule that was never registered."""

    def __init__(self, tag: str, message: str = "") -> None:
        self.tag = tag
        self._message = message or f"Undefined validation function '{tag}'"
        super().__init__(self._message)

    def __str__(self) -> str:
        return self._message


class RegistrationError(TagValidatorError, ValueError):
    """Raised when a rule or custom type function cannot be registered."""
