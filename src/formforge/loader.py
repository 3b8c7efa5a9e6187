"""Load form specs into Form objects.

A form spec is a nested mapping:

    name: signup
    display_name: Sign up
    max_answers: 100
    start_date: "2020-01-05"
    end_date: "2020-01-15T23:59:00-03"
    fields:
      - type: text
        name: username
        validate: {regexp: '\\w{4}', unique: true}
        normalize: {downcase: true, trim: true}

Any failure aborts the whole load; there is no partial Form.
"""

import logging
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from formforge.exceptions import FormFileError, InvalidDateError
from formforge.fields import FieldCatalog
from formforge.form import Form

logger = logging.getLogger(__name__)

# Accepted in form specs but not modeled on Form yet.
UNMODELED_KEYS = ("allow_edit", "captcha", "save")


def parse_datetime(key: str, value: Any) -> datetime | None:
    """Parse an ISO 8601 date-time, passing typed values through.

    A plain date (as produced by YAML for unquoted ``2020-01-05``) becomes
    midnight of that day. Values without an offset are taken as UTC, so
    start and end dates of a form can always be compared.

    Raises:
        InvalidDateError: For text that is not ISO 8601, or any other type
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise InvalidDateError(key, value) from exc
    else:
        raise InvalidDateError(key, value)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


class FormLoader:
    """Builds Forms from form specs using a FieldCatalog.

    Pass a catalog to load against isolated registrations; the default
    creates a fresh one.
    """

    def __init__(self, fields: FieldCatalog | None = None):
        self.fields = fields if fields is not None else FieldCatalog()

    @property
    def validations(self):
        return self.fields.validations

    @property
    def normalizations(self):
        return self.fields.normalizations

    def load(self, spec: Mapping[str, Any]) -> Form:
        """Build a Form from a form spec.

        Raises:
            FormSpecError: Any load-time failure (see formforge.exceptions)
        """
        ignored = [key for key in UNMODELED_KEYS if key in spec]
        if ignored:
            logger.debug("Ignoring unmodeled form keys: %s", ", ".join(ignored))

        return Form(
            name=spec.get("name"),
            display_name=spec.get("display_name"),
            max_answers=spec.get("max_answers"),
            start_date=parse_datetime("start_date", spec.get("start_date")),
            end_date=parse_datetime("end_date", spec.get("end_date")),
            fields=tuple(self.fields.load(field_spec) for field_spec in spec.get("fields") or ()),
        )

    def load_file(self, path: Path) -> Form:
        """Load a form from a YAML file.

        The form name defaults to the file stem.

        Raises:
            FormFileError: If the file cannot be read or parsed, or is not a mapping
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as exc:
            raise FormFileError(f"Cannot read form file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise FormFileError(f"YAML parse error in {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise FormFileError(f"{path}: expected a form mapping, got {type(data).__name__}")

        data.setdefault("name", path.stem)
        return self.load(data)


class FormDirectoryLoader:
    """Loads every form definition from a directory of YAML files."""

    def __init__(self, forms_path: Path, loader: FormLoader | None = None):
        self.forms_path = Path(forms_path)
        self.loader = loader if loader is not None else default_loader
        self.forms: dict[str, Form] = {}

    def load_all(self) -> None:
        """Load all ``*.yaml`` forms, in file name order."""
        if not self.forms_path.exists():
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            form = self.loader.load_file(yaml_file)
            if form.name in self.forms:
                raise FormFileError(
                    f"Duplicate form name '{form.name}' in {yaml_file}"
                )
            self.forms[form.name] = form

    def get_form(self, name: str) -> Form | None:
        """Get a loaded form by name."""
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        """List all form names."""
        return list(self.forms.keys())


# Process-wide catalogs behind the module-level helpers.
default_loader = FormLoader()


def load(spec: Mapping[str, Any]) -> Form:
    """Load a form spec with the default catalogs."""
    return default_loader.load(spec)


def load_file(path: Path, loader: FormLoader | None = None) -> Form:
    """Load a form YAML file, with the default catalogs unless ``loader`` is given."""
    return (loader if loader is not None else default_loader).load_file(path)
