"""formforge — load declarative form specs into typed Form objects.

Usage:
    import formforge

    form = formforge.load({
        "name": "signup",
        "fields": [
            {"type": "text", "name": "username", "normalize": {"downcase": True, "trim": True}},
        ],
    })
    form.normalize({"username": " FooO "})  # {"username": "fooo"}

Extensions are registered per catalog:

    formforge.field_catalog.extensions.register("email", EmailField)
    formforge.validation_catalog.extensions.register("even", EvenValidation)
    formforge.normalization_catalog.extensions.register("titlecase", TitleCase)

Build a FormLoader around fresh catalogs to keep registrations isolated.
"""

from formforge.exceptions import (
    AnswerError,
    FormFileError,
    FormforgeError,
    FormSpecError,
    InvalidDateError,
    InvalidFieldFlagError,
    MalformedPatternError,
    MissingFieldNameError,
    UnknownAnswerFieldError,
    UnsupportedFieldTypeError,
    UnsupportedKindError,
    UnsupportedNormalizationKindError,
    UnsupportedValidationKindError,
)
from formforge.fields import (
    FieldCatalog,
    FormField,
    NumberField,
    TextAreaField,
    TextField,
)
from formforge.form import Form
from formforge.loader import (
    FormDirectoryLoader,
    FormLoader,
    default_loader,
    load,
    load_file,
)
from formforge.normalizations import (
    DowncaseNormalization,
    ExecNormalization,
    Normalization,
    NormalizationCatalog,
    SqueezeNormalization,
    TrimNormalization,
)
from formforge.registry import ExtensionRegistry
from formforge.validations import (
    ExecValidation,
    NonBlankValidation,
    RegexpValidation,
    UniqueValidation,
    Validation,
    ValidationCatalog,
)

__version__ = "0.1.0"

field_catalog = default_loader.fields
validation_catalog = default_loader.validations
normalization_catalog = default_loader.normalizations

__all__ = [
    # Loading
    "Form",
    "FormDirectoryLoader",
    "FormLoader",
    "default_loader",
    "load",
    "load_file",
    # Catalogs
    "ExtensionRegistry",
    "FieldCatalog",
    "NormalizationCatalog",
    "ValidationCatalog",
    "field_catalog",
    "normalization_catalog",
    "validation_catalog",
    # Fields
    "FormField",
    "NumberField",
    "TextAreaField",
    "TextField",
    # Rules
    "DowncaseNormalization",
    "ExecNormalization",
    "ExecValidation",
    "NonBlankValidation",
    "Normalization",
    "RegexpValidation",
    "SqueezeNormalization",
    "TrimNormalization",
    "UniqueValidation",
    "Validation",
    # Errors
    "AnswerError",
    "FormFileError",
    "FormforgeError",
    "FormSpecError",
    "InvalidDateError",
    "InvalidFieldFlagError",
    "MalformedPatternError",
    "MissingFieldNameError",
    "UnknownAnswerFieldError",
    "UnsupportedFieldTypeError",
    "UnsupportedKindError",
    "UnsupportedNormalizationKindError",
    "UnsupportedValidationKindError",
    "__version__",
]
