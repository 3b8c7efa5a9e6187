"""Normalization rules and the catalog that resolves normalization directives.

A directive is a ``kind: argument`` entry under a field's ``normalize`` key.
Rules are applied in declaration order, each one receiving the output of the
previous one.

Built-in kinds:
- downcase: lower-case text
- trim: strip leading and trailing whitespace
- squeeze: collapse runs of whitespace to a single space
- exec: argument is an opaque command name, never run by formforge

Anything else is looked up in the catalog's extension registry. Extension
rules must provide a ``normalize(value)`` method; ``FormField.normalize``
raises TypeError for a rule without one.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Mapping

from formforge.exceptions import UnsupportedNormalizationKindError
from formforge.registry import ExtensionRegistry

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


class Normalization:
    """Base class for built-in normalization rules.

    Text rules leave non-string values untouched.
    """

    kind: ClassVar[str] = ""

    def normalize(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        return self.normalize_text(value)

    def normalize_text(self, value: str) -> str:
        raise NotImplementedError("Subclasses must implement normalize_text()")


@dataclass(frozen=True)
class DowncaseNormalization(Normalization):
    kind: ClassVar[str] = "downcase"

    def normalize_text(self, value: str) -> str:
        return value.lower()


@dataclass(frozen=True)
class TrimNormalization(Normalization):
    kind: ClassVar[str] = "trim"

    def normalize_text(self, value: str) -> str:
        return value.strip()


@dataclass(frozen=True)
class SqueezeNormalization(Normalization):
    kind: ClassVar[str] = "squeeze"

    def normalize_text(self, value: str) -> str:
        return _WHITESPACE_RUN.sub(" ", value)


@dataclass(frozen=True)
class ExecNormalization(Normalization):
    """Named external transform, carried as data.

    formforge never runs the command, so the value passes through unchanged.
    """

    kind: ClassVar[str] = "exec"
    command: str

    def normalize(self, value: Any) -> Any:
        logger.debug("Passing value through exec normalization '%s' unchanged", self.command)
        return value


DOWNCASE = DowncaseNormalization()
TRIM = TrimNormalization()
SQUEEZE = SqueezeNormalization()

_BUILTINS: dict[str, Callable[[Any], Normalization]] = {
    DowncaseNormalization.kind: lambda _argument: DOWNCASE,
    TrimNormalization.kind: lambda _argument: TRIM,
    SqueezeNormalization.kind: lambda _argument: SQUEEZE,
    ExecNormalization.kind: lambda argument: ExecNormalization(command=argument),
}

BUILTIN_KINDS = tuple(_BUILTINS)


class NormalizationCatalog:
    """Resolves normalization directives to rule instances.

    Built-in kinds are checked first, then ``extensions``. Extension
    producers must build objects with a ``normalize(value)`` method.
    """

    def __init__(self, extensions: ExtensionRegistry | None = None):
        self.extensions = extensions if extensions is not None else ExtensionRegistry("normalization")

    def parse(self, kind: str, argument: Any = None) -> Any:
        """Build the rule for one directive.

        Raises:
            UnsupportedNormalizationKindError: If the kind is unknown
        """
        builtin = _BUILTINS.get(kind)
        if builtin is not None:
            return builtin(argument)

        producer = self.extensions.get(kind)
        if producer is not None:
            logger.debug("Resolved normalization '%s' from extensions", kind)
            return producer(argument)

        raise UnsupportedNormalizationKindError(kind)

    def parse_all(self, directives: Mapping[str, Any] | None) -> list[Any]:
        """Build rules for a ``normalize`` mapping, keeping its order."""
        return [self.parse(kind, argument) for kind, argument in (directives or {}).items()]

    def supports(self, kind: str) -> bool:
        return kind in _BUILTINS or self.extensions.supports(kind)
