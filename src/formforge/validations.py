"""Validation rules and the catalog that resolves validation directives.

A directive is a ``kind: argument`` entry under a field's ``validate`` key.

Built-in kinds:
- regexp: argument is a pattern source, compiled at load time
- unique: stateless marker, checked across answers elsewhere
- nonblank: stateless marker
- exec: argument is an opaque command name, never run by formforge

Anything else is looked up in the catalog's extension registry.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping

from formforge.exceptions import MalformedPatternError, UnsupportedValidationKindError
from formforge.registry import ExtensionRegistry

logger = logging.getLogger(__name__)


class Validation:
    """Base class for built-in validation rules."""

    kind: ClassVar[str] = ""


@dataclass(frozen=True)
class RegexpValidation(Validation):
    """Value must match ``pattern``."""

    kind: ClassVar[str] = "regexp"
    pattern: re.Pattern[str]

    @classmethod
    def compile(cls, source: Any) -> "RegexpValidation":
        if not isinstance(source, str):
            raise MalformedPatternError(repr(source), "pattern source must be a string")
        try:
            return cls(pattern=re.compile(source))
        except re.error as exc:
            raise MalformedPatternError(source, str(exc)) from exc


@dataclass(frozen=True)
class UniqueValidation(Validation):
    kind: ClassVar[str] = "unique"


@dataclass(frozen=True)
class NonBlankValidation(Validation):
    kind: ClassVar[str] = "nonblank"


@dataclass(frozen=True)
class ExecValidation(Validation):
    """Named external check, carried as data."""

    kind: ClassVar[str] = "exec"
    command: str


# Stateless markers are shared; they hold nothing derived from the argument.
UNIQUE = UniqueValidation()
NONBLANK = NonBlankValidation()

_BUILTINS: dict[str, Callable[[Any], Validation]] = {
    RegexpValidation.kind: RegexpValidation.compile,
    UniqueValidation.kind: lambda _argument: UNIQUE,
    NonBlankValidation.kind: lambda _argument: NONBLANK,
    ExecValidation.kind: lambda argument: ExecValidation(command=argument),
}

BUILTIN_KINDS = tuple(_BUILTINS)


class ValidationCatalog:
    """Resolves validation directives to rule instances.

    Built-in kinds are checked first, then ``extensions``. A registered
    extension cannot shadow a built-in kind.
    """

    def __init__(self, extensions: ExtensionRegistry | None = None):
        self.extensions = extensions if extensions is not None else ExtensionRegistry("validation")

    def parse(self, kind: str, argument: Any = None) -> Any:
        """Build the rule for one directive.

        Raises:
            MalformedPatternError: For a regexp that does not compile
            UnsupportedValidationKindError: If the kind is unknown
        """
        builtin = _BUILTINS.get(kind)
        if builtin is not None:
            return builtin(argument)

        producer = self.extensions.get(kind)
        if producer is not None:
            logger.debug("Resolved validation '%s' from extensions", kind)
            return producer(argument)

        raise UnsupportedValidationKindError(kind)

    def parse_all(self, directives: Mapping[str, Any] | None) -> list[Any]:
        """Build rules for a ``validate`` mapping, keeping its order."""
        return [self.parse(kind, argument) for kind, argument in (directives or {}).items()]

    def supports(self, kind: str) -> bool:
        return kind in _BUILTINS or self.extensions.supports(kind)
