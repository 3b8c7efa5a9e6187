"""The Form aggregate produced by the loader."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from formforge.exceptions import UnknownAnswerFieldError
from formforge.fields import FormField

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Form:
    """A loaded form definition.

    Attributes:
        fields: Fields in declaration order (names need not be unique)
        name: Identifier of the form
        display_name: Human-readable title
        max_answers: Limit on accepted submissions
        start_date: When the form opens
        end_date: When the form closes
    """

    fields: tuple[FormField, ...] = ()
    name: str | None = None
    display_name: str | None = None
    max_answers: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def size(self) -> int:
        """Number of fields."""
        return len(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: Any) -> FormField | None:
        """Get the first field declared with ``name``.

        Names are compared as strings, so an integer answer key finds a
        field declared as ``"1"``.
        """
        key = str(name)
        for f in self.fields:
            if str(f.name) == key:
                return f
        return None

    def normalize(self, answers: Mapping[Any, Any]) -> dict[Any, Any]:
        """Apply each field's normalizations to its answer.

        Returns a new mapping with the same keys.

        Raises:
            UnknownAnswerFieldError: If a key names no field
        """
        normalized: dict[Any, Any] = {}
        for key, value in answers.items():
            form_field = self.get_field(key)
            if form_field is None:
                raise UnknownAnswerFieldError(key)
            normalized[key] = form_field.normalize(value)
        return normalized

    def validate(self, answers: Mapping[Any, Any]) -> dict[str, str]:
        """Map each failing field name to an error description.

        Answer validation is not enforced yet: this always returns an empty
        mapping. The resolved rules are available on ``fields[i].validations``.
        """
        # TODO: run each field's validations once rule predicates exist.
        logger.debug("Form.validate called for %d answers; validation not enforced", len(answers))
        return {}
