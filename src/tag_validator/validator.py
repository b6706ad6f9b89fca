"""
Validator: a rule table plugged into pydantic.

A ``Validator`` maps rule names to predicates and wrapper types to coercion
functions. ``Tag`` is ``Annotated`` metadata that hands a field's value to a
validator after pydantic's own type validation, so models declare their rules
next to their types:

    class Row(BaseModel):
        quantity: Annotated[str, Tag("int")]
        shipped_at: Annotated[NullString, Tag("notNull", "datetime")]

Traversal and error aggregation stay with pydantic; a failing rule becomes an
error of type ``tag`` with the rule name in its context.

``get_validator()`` returns the shared, frozen instance with every built-in
rule registered.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Annotated, Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

import structlog
from pydantic import BaseModel, GetCoreSchemaHandler, TypeAdapter
from pydantic_core import PydanticCustomError, core_schema

from tag_validator.config.settings import get_settings
from tag_validator.errors import RegistrationError, UndefinedRuleError
from tag_validator.nullable import NULL_TYPES, validate_valuer
from tag_validator.rules import BUILTIN_RULES

logger = structlog.get_logger(__name__)

RuleFunc = Callable[[Any], bool]
CustomTypeFunc = Callable[[Any], Any]
ModelT = TypeVar("ModelT", bound=BaseModel)

# Characters with meaning in tag expressions; never allowed in a rule name
RESTRICTED_TAG_CHARS = frozenset(",|= \t\n")


class Validator:
    """Rule table and custom type coercion consulted by ``Tag`` metadata."""

    def __init__(self) -> None:
        self._validations: Dict[str, RuleFunc] = {}
        self._custom_types: Dict[type, CustomTypeFunc] = {}
        self._adapters: Dict[Tuple[str, ...], TypeAdapter[Any]] = {}
        self._frozen = False

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_validation(self, tag: str, fn: RuleFunc) -> None:
        """
        Bind a rule name to a predicate. Registering an existing name replaces it.

        :raises RegistrationError: If the validator is frozen, the name is empty
            or contains a restricted character, or ``fn`` is not callable.
        """
        self._check_mutable()
        if not tag:
            raise RegistrationError("Function Key cannot be empty")
        if any(c in RESTRICTED_TAG_CHARS for c in tag):
            raise RegistrationError(f"Tag '{tag}' contains restricted characters")
        if not callable(fn):
            raise RegistrationError(f"Function cannot be empty for tag '{tag}'")
        self._validations[tag] = fn

    def register_custom_type_func(self, fn: CustomTypeFunc, *types: type) -> None:
        """Use ``fn`` to extract the value to validate from instances of ``types``."""
        self._check_mutable()
        if not callable(fn):
            raise RegistrationError("Custom type function must be callable")
        if not types:
            raise RegistrationError("At least one type is required")
        for t in types:
            self._custom_types[t] = fn

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def rules(self) -> Mapping[str, RuleFunc]:
        """Read-only view of the registered rules."""
        return MappingProxyType(self._validations)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RegistrationError("Validator is frozen; rules can no longer be registered")

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def extract_type(self, value: Any) -> Any:
        """Apply the custom type function registered for ``value``'s type, if any."""
        for t in type(value).__mro__:
            fn = self._custom_types.get(t)
            if fn is not None:
                return fn(value)
        return value

    def ensure_defined(self, *tags: str) -> None:
        for tag in tags:
            if tag not in self._validations:
                raise UndefinedRuleError(tag)

    def check(self, value: Any, *tags: str) -> Optional[str]:
        """
        Run ``tags`` in order against ``value``.

        Returns the first tag that fails, or None when all pass. An absent
        value (None after coercion) fails on the first tag without running
        any predicate.

        :raises UndefinedRuleError: If a tag has no registered rule.
        """
        self.ensure_defined(*tags)
        current = self.extract_type(value)
        if current is None:
            return tags[0] if tags else None
        for tag in tags:
            if not self._validations[tag](current):
                return tag
        return None

    def tag(self, *names: str) -> "Tag":
        """Annotated metadata bound to this validator rather than the shared one."""
        return Tag(*names, validator=self)

    def var(self, value: Any, *tags: str) -> Any:
        """
        Validate a single value against ``tags``.

        :raises pydantic.ValidationError: If a rule fails.
        """
        adapter = self._adapters.get(tags)
        if adapter is None:
            adapter = TypeAdapter(Annotated[Any, Tag(*tags, validator=self)])
            self._adapters[tags] = adapter
        return adapter.validate_python(value)

    def struct(self, model: Type[ModelT], data: Any) -> ModelT:
        """
        Validate ``data`` against a model whose fields carry ``Tag`` metadata.

        :raises pydantic.ValidationError: If any field fails its type or rules.
        """
        return model.model_validate(data)


class Tag:
    """
    ``Annotated`` metadata naming the rules a field must pass.

    Rules run in order after pydantic has validated the field's type. Without
    an explicit ``validator`` the shared instance from ``get_validator()`` is
    used. Unknown rule names are reported when the model is built.
    """

    __slots__ = ("names", "validator")

    def __init__(self, *names: str, validator: Optional[Validator] = None) -> None:
        self.names: Tuple[str, ...] = names
        self.validator = validator

    def __repr__(self) -> str:
        return f"Tag({', '.join(repr(n) for n in self.names)})"

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        validator = self.validator or get_validator()
        validator.ensure_defined(*self.names)
        names = self.names

        def run_rules(value: Any) -> Any:
            failed = validator.check(value, *names)
            if failed is not None:
                raise PydanticCustomError(
                    "tag",
                    "Field validation failed on the '{tag}' tag",
                    {"tag": failed},
                )
            return value

        return core_schema.no_info_after_validator_function(run_rules, handler(source_type))


def new_validator() -> Validator:
    """Build an unfrozen validator with all built-in rules and wrapper types."""
    validate = Validator()
    for name, fn in BUILTIN_RULES.items():
        validate.register_validation(name, fn)

    # Null* wrappers are validated on their underlying value
    validate.register_custom_type_func(validate_valuer, *NULL_TYPES)
    return validate


_validator: Optional[Validator] = None
_validator_lock = threading.Lock()


def get_validator() -> Validator:
    """Get or create the shared validator. Safe to call from several threads."""
    global _validator
    if _validator is not None:
        return _validator
    with _validator_lock:
        if _validator is None:
            validate = new_validator()
            validate.freeze()
            _validator = validate
            if get_settings().log_initialization:
                logger.info("validator_initialized", rules=sorted(validate.rules))
    return _validator
