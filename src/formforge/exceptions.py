"""Error types for formforge.

Load-time failures derive from FormSpecError (also a ValueError) so callers
can treat any bad form spec uniformly. Errors raised by registered extension
producers are never wrapped.
"""


class FormforgeError(Exception):
    """Root exception for the package."""
    pass


class FormSpecError(FormforgeError, ValueError):
    """A form spec could not be loaded."""
    pass


class MissingFieldNameError(FormSpecError):
    """A field spec has no name."""

    def __init__(self, message: str = "Missing field name"):
        super().__init__(message)


class UnsupportedKindError(FormSpecError):
    """A kind is neither built-in nor registered."""

    label = "kind"

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported {self.label} '{kind}'")


class UnsupportedFieldTypeError(UnsupportedKindError):
    label = "field type"


class UnsupportedValidationKindError(UnsupportedKindError):
    label = "validation"


class UnsupportedNormalizationKindError(UnsupportedKindError):
    label = "normalization"


class InvalidFieldFlagError(FormSpecError):
    """A field's ``required`` or ``confirm`` flag is not a boolean."""

    def __init__(self, name: object, key: str, value: object):
        self.name = name
        self.key = key
        self.value = value
        super().__init__(f"Field '{name}': {key} must be true or false, got {value!r}")


class MalformedPatternError(FormSpecError):
    """A regexp validation source does not compile."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Malformed pattern {pattern!r}: {reason}")


class InvalidDateError(FormSpecError):
    """A scheduling date is not ISO 8601 text or a date value."""

    def __init__(self, key: str, value: object):
        self.key = key
        self.value = value
        super().__init__(f"Invalid {key}: {value!r} is not an ISO 8601 date-time")


class FormFileError(FormforgeError):
    """A form file cannot be read or does not hold a form mapping."""
    pass


class AnswerError(FormforgeError, KeyError):
    """An answer mapping does not fit the form."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class UnknownAnswerFieldError(AnswerError):
    """An answer key names no field of the form."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"No field named '{name}' in form")
