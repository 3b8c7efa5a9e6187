"""Form field types and the catalog that builds them from field specs.

Built-in field types:
- text: single-line text
- number: numeric input
- text_area: multi-line text

Extension field types are registered on ``FieldCatalog.extensions``. They are
constructed with the same keyword arguments as the built-ins, so subclassing
FormField is the simplest way to write one:

    @catalog.extensions.extension("email")
    class EmailField(FormField):
        field_type = "email"
"""

from dataclasses import dataclass
from functools import reduce
from typing import Any, ClassVar, Mapping

from formforge.exceptions import (
    InvalidFieldFlagError,
    MissingFieldNameError,
    UnsupportedFieldTypeError,
)
from formforge.normalizations import NormalizationCatalog
from formforge.registry import ExtensionRegistry
from formforge.validations import ValidationCatalog


@dataclass(frozen=True)
class FormField:
    """A named input of a form with its rules.

    Attributes:
        name: Answer key for this field (required, non-empty)
        required: Whether an answer must be given
        confirm: Whether the input is paired with a confirmation input
        validations: Validation rules in declaration order
        normalizations: Normalization rules in declaration order
    """

    field_type: ClassVar[str] = ""

    name: str
    required: bool = False
    confirm: bool = False
    validations: tuple[Any, ...] = ()
    normalizations: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        _check_name(self.name)
        object.__setattr__(self, "validations", tuple(self.validations))
        object.__setattr__(self, "normalizations", tuple(self.normalizations))

    def normalize(self, value: Any) -> Any:
        """Apply every normalization in order, feeding each the previous output.

        Raises:
            TypeError: If a rule has no ``normalize(value)`` method
        """
        return reduce(_apply_normalization, self.normalizations, value)


@dataclass(frozen=True)
class TextField(FormField):
    field_type: ClassVar[str] = "text"


@dataclass(frozen=True)
class NumberField(FormField):
    field_type: ClassVar[str] = "number"


@dataclass(frozen=True)
class TextAreaField(FormField):
    field_type: ClassVar[str] = "text_area"


FIELD_TYPES: dict[str, type[FormField]] = {
    TextField.field_type: TextField,
    NumberField.field_type: NumberField,
    TextAreaField.field_type: TextAreaField,
}


def _check_name(name: Any) -> None:
    if name is None or name == "":
        raise MissingFieldNameError()


def _flag(spec: Mapping[str, Any], key: str) -> bool:
    value = spec.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidFieldFlagError(spec.get("name"), key, value)
    return value


def _apply_normalization(value: Any, rule: Any) -> Any:
    normalize = getattr(rule, "normalize", None)
    if normalize is None:
        raise TypeError(
            f"Normalization {type(rule).__name__} does not implement normalize(value)"
        )
    return normalize(value)


class FieldCatalog:
    """Builds fields from field specs.

    Field types resolve against the built-ins first, then ``extensions``.
    Directives under ``validate`` and ``normalize`` resolve through the
    validation and normalization catalogs, keeping their declared order.
    """

    def __init__(
        self,
        validations: ValidationCatalog | None = None,
        normalizations: NormalizationCatalog | None = None,
        extensions: ExtensionRegistry | None = None,
    ):
        self.validations = validations if validations is not None else ValidationCatalog()
        self.normalizations = normalizations if normalizations is not None else NormalizationCatalog()
        self.extensions = extensions if extensions is not None else ExtensionRegistry("field")

    def class_for(self, field_type: str) -> Any:
        """Resolve a declared type to the class that builds it.

        Raises:
            UnsupportedFieldTypeError: If the type is unknown
        """
        if field_type in FIELD_TYPES:
            return FIELD_TYPES[field_type]

        producer = self.extensions.get(field_type)
        if producer is None:
            raise UnsupportedFieldTypeError(field_type)
        return producer

    def load(self, spec: Mapping[str, Any]) -> Any:
        """Build a fully resolved field from its spec.

        Raises:
            UnsupportedFieldTypeError: If ``type`` is unknown
            MissingFieldNameError: If ``name`` is absent or empty
            InvalidFieldFlagError: If ``required`` or ``confirm`` is not a boolean
            UnsupportedValidationKindError: For an unknown ``validate`` kind
            UnsupportedNormalizationKindError: For an unknown ``normalize`` kind
        """
        field_class = self.class_for(spec.get("type"))
        name = spec.get("name")
        # Extension producers need not subclass FormField, so check here too.
        _check_name(name)

        return field_class(
            name=name,
            required=_flag(spec, "required"),
            confirm=_flag(spec, "confirm"),
            validations=self.validations.parse_all(spec.get("validate")),
            normalizations=self.normalizations.parse_all(spec.get("normalize")),
        )

    def supports(self, field_type: str) -> bool:
        return field_type in FIELD_TYPES or self.extensions.supports(field_type)
