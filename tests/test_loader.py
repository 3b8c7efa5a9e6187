"""Tests for the form loader."""

from datetime import date, datetime, timedelta, timezone

import pytest
import yaml

import formforge
from formforge.exceptions import (
    FormFileError,
    FormSpecError,
    InvalidDateError,
    MissingFieldNameError,
    UnsupportedFieldTypeError,
    UnsupportedValidationKindError,
)
from formforge.fields import FormField, TextField
from formforge.form import Form
from formforge.loader import FormDirectoryLoader, FormLoader, parse_datetime
from formforge.validations import NONBLANK, UNIQUE, RegexpValidation


def _write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data, sort_keys=False))
    return path


class TestFields:
    def test_no_fields(self, loader):
        form = loader.load({"fields": []})
        assert isinstance(form, Form)
        assert form.size() == 0

    def test_fields_key_absent(self, loader):
        assert loader.load({}).size() == 0

    def test_one_text_field(self, loader):
        form = loader.load({"fields": [{"type": "text", "name": "username"}]})
        assert form.size() == 1
        field = form.fields[0]
        assert isinstance(field, FormField)
        assert isinstance(field, TextField)
        assert field.name == "username"
        assert field.validations == ()
        assert field.normalizations == ()

    def test_regexp_validation(self, loader):
        form = loader.load(
            {"fields": [{"type": "text", "name": "username", "validate": {"regexp": r"\w{4}"}}]}
        )
        validations = form.fields[0].validations
        assert len(validations) == 1
        assert isinstance(validations[0], RegexpValidation)
        assert validations[0].pattern.pattern == r"\w{4}"

    def test_preserves_field_order(self, loader):
        form = loader.load(
            {
                "fields": [
                    {"type": "number", "name": "c"},
                    {"type": "text", "name": "a"},
                    {"type": "text_area", "name": "b"},
                ]
            }
        )
        assert form.field_names() == ["c", "a", "b"]

    def test_missing_name_aborts_load(self, loader):
        with pytest.raises(MissingFieldNameError):
            loader.load({"fields": [{"type": "text", "name": "ok"}, {"type": "text"}]})

    def test_unsupported_type_aborts_load(self, loader):
        with pytest.raises(UnsupportedFieldTypeError, match="other"):
            loader.load({"fields": [{"type": "other"}]})


class TestFormAttributes:
    def test_descriptive_attributes(self, loader):
        form = loader.load({"name": "myform", "display_name": "A great form"})
        assert form.name == "myform"
        assert form.display_name == "A great form"

    def test_limits(self, loader):
        form = loader.load(
            {"max_answers": 100, "start_date": "2020-01-05", "end_date": "2020-01-15T23:59:00-03"}
        )
        assert form.max_answers == 100
        assert form.start_date == datetime(2020, 1, 5, tzinfo=timezone.utc)
        assert form.end_date == datetime(
            2020, 1, 15, 23, 59, 0, tzinfo=timezone(timedelta(hours=-3))
        )

    def test_start_and_end_dates_compare(self, loader):
        form = loader.load({"start_date": "2020-01-05", "end_date": "2020-01-15T23:59:00-03"})
        assert form.start_date < form.end_date

    def test_absent_attributes_are_none(self, loader):
        form = loader.load({})
        assert form.name is None
        assert form.max_answers is None
        assert form.start_date is None
        assert form.end_date is None

    def test_unmodeled_keys_are_accepted(self, loader):
        form = loader.load(
            {
                "name": "myform",
                "allow_edit": True,
                "captcha": True,
                "save": {"local": True, "database": True, "exec": "my_custom_code"},
            }
        )
        assert form.name == "myform"
        assert not hasattr(form, "captcha")


class TestParseDatetime:
    def test_none(self):
        assert parse_datetime("start_date", None) is None

    def test_datetime_passes_through(self):
        value = datetime(2020, 1, 5, 10, 30, tzinfo=timezone(timedelta(hours=2)))
        assert parse_datetime("start_date", value) is value

    def test_naive_datetime_is_utc(self):
        parsed = parse_datetime("start_date", datetime(2020, 1, 5, 10, 30))
        assert parsed == datetime(2020, 1, 5, 10, 30, tzinfo=timezone.utc)

    def test_date_only_text_is_utc_midnight(self):
        parsed = parse_datetime("start_date", "2020-01-05")
        assert parsed.tzinfo is timezone.utc
        assert parsed == datetime(2020, 1, 5, tzinfo=timezone.utc)

    def test_date_becomes_midnight(self):
        assert parse_datetime("start_date", date(2020, 1, 5)) == datetime(
            2020, 1, 5, tzinfo=timezone.utc
        )

    def test_idempotent(self):
        once = parse_datetime("end_date", "2020-01-15T23:59:00-03")
        assert parse_datetime("end_date", once) == once

    def test_invalid_text(self):
        with pytest.raises(InvalidDateError, match="start_date"):
            parse_datetime("start_date", "next tuesday")

    def test_invalid_type(self):
        with pytest.raises(InvalidDateError):
            parse_datetime("end_date", 20200105)

    def test_is_form_spec_error(self, loader):
        with pytest.raises(FormSpecError):
            loader.load({"start_date": "not a date"})


class TestFullForm:
    def test_full_form(self, loader):
        form = loader.load(
            {
                "name": "myform",
                "display_name": "A great form",
                "max_answers": 100,
                "allow_edit": True,
                "start_date": "2020-10-05",
                "end_date": "2020-12-30",
                "captcha": True,
                "save": {"local": True, "database": True, "exec": "my_custom_code"},
                "fields": [
                    {
                        "type": "text",
                        "name": "username",
                        "validate": {"nonblank": True, "regexp": r"\w{4}", "unique": True},
                        "normalize": {"downcase": True, "exec": "my_custom_code"},
                        "confirm": True,
                        "required": True,
                    },
                    {
                        "type": "text",
                        "name": "personal_id",
                        "validate": {"regexp": r"\d{8,9}", "unique": True, "exec": "my_custom_code"},
                    },
                ],
            }
        )
        username, personal_id = form.fields
        assert username.validations[0] is NONBLANK
        assert username.validations[2] is UNIQUE
        assert username.required and username.confirm
        assert [v.kind for v in personal_id.validations] == ["regexp", "unique", "exec"]
        assert form.normalize({"username": "JDoe"}) == {"username": "jdoe"}
        assert form.start_date == datetime(2020, 10, 5, tzinfo=timezone.utc)


class TestIsolatedCatalogs:
    def test_loaders_do_not_share_registrations(self):
        class Email(FormField):
            pass

        first = FormLoader()
        second = FormLoader()
        first.fields.extensions.register("email", Email)

        assert isinstance(first.load({"fields": [{"type": "email", "name": "e"}]}).fields[0], Email)
        with pytest.raises(UnsupportedFieldTypeError):
            second.load({"fields": [{"type": "email", "name": "e"}]})

    def test_validation_extension_through_loader(self, loader):
        class MyCustomValidation:
            extension_type = "my_custom_validation"

            def __init__(self, value):
                self.value = value

        loader.validations.extensions.register_class(MyCustomValidation)
        form = loader.load(
            {
                "fields": [
                    {"type": "text", "name": "username", "validate": {"my_custom_validation": "sample"}}
                ]
            }
        )
        rule = form.fields[0].validations[0]
        assert isinstance(rule, MyCustomValidation)
        assert rule.value == "sample"

        loader.validations.extensions.unregister_class(MyCustomValidation)
        with pytest.raises(UnsupportedValidationKindError):
            loader.load(
                {
                    "fields": [
                        {"type": "text", "name": "username", "validate": {"my_custom_validation": "x"}}
                    ]
                }
            )


class TestDefaultCatalogs:
    @pytest.fixture
    def custom_normalization(self):
        class MyCustomNormalization:
            extension_type = "my_custom_normalization"

            def __init__(self, _argument):
                pass

            def normalize(self, value):
                return f"<{value}>"

        formforge.normalization_catalog.extensions.register_class(MyCustomNormalization)
        yield MyCustomNormalization
        formforge.normalization_catalog.extensions.unregister_class(MyCustomNormalization)

    def test_module_load(self):
        form = formforge.load({"fields": [{"type": "text", "name": "username"}]})
        assert form.size() == 1

    def test_module_catalogs_are_the_default_loader(self):
        assert formforge.field_catalog is formforge.default_loader.fields
        assert formforge.validation_catalog is formforge.default_loader.fields.validations
        assert formforge.normalization_catalog is formforge.default_loader.fields.normalizations

    def test_registered_normalization(self, custom_normalization):
        assert formforge.normalization_catalog.extensions.supports("my_custom_normalization")
        form = formforge.load(
            {
                "fields": [
                    {"type": "text", "name": "username", "normalize": {"my_custom_normalization": True}}
                ]
            }
        )
        assert isinstance(form.fields[0].normalizations[0], custom_normalization)
        assert form.normalize({"username": "x"}) == {"username": "<x>"}

    def test_registration_removed_after_fixture(self):
        assert not formforge.normalization_catalog.extensions.supports("my_custom_normalization")


class TestLoadFile:
    def test_loads_yaml(self, loader, tmp_path):
        path = _write_yaml(
            tmp_path / "signup.yaml",
            {
                "display_name": "Sign up",
                "fields": [{"type": "text", "name": "username", "normalize": {"trim": True}}],
            },
        )
        form = loader.load_file(path)
        assert form.name == "signup"
        assert form.display_name == "Sign up"
        assert form.normalize({"username": " a "}) == {"username": "a"}

    def test_explicit_name_wins_over_stem(self, loader, tmp_path):
        path = _write_yaml(tmp_path / "file.yaml", {"name": "explicit"})
        assert loader.load_file(path).name == "explicit"

    def test_unquoted_yaml_dates(self, loader, tmp_path):
        path = tmp_path / "dated.yaml"
        path.write_text("start_date: 2020-01-05\nend_date: 2020-01-15 23:59:00\n")
        form = loader.load_file(path)
        assert form.start_date == datetime(2020, 1, 5, tzinfo=timezone.utc)
        assert form.end_date == datetime(2020, 1, 15, 23, 59, tzinfo=timezone.utc)

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FormFileError, match="Cannot read"):
            loader.load_file(tmp_path / "missing.yaml")

    def test_bad_yaml(self, loader, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("fields: [unclosed\n")
        with pytest.raises(FormFileError, match="YAML parse error"):
            loader.load_file(path)

    def test_not_a_mapping(self, loader, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(FormFileError, match="expected a form mapping"):
            loader.load_file(path)

    def test_module_load_file_with_isolated_loader(self, tmp_path):
        class Email(FormField):
            pass

        isolated = FormLoader()
        isolated.fields.extensions.register("email", Email)
        path = _write_yaml(tmp_path / "contact.yaml", {"fields": [{"type": "email", "name": "e"}]})

        form = formforge.loader.load_file(path, loader=isolated)
        assert form.name == "contact"
        assert isinstance(form.fields[0], Email)

        with pytest.raises(UnsupportedFieldTypeError, match="email"):
            formforge.loader.load_file(path)

    def test_package_load_file_uses_default_loader(self, tmp_path):
        path = _write_yaml(tmp_path / "plain.yaml", {"fields": [{"type": "text", "name": "t"}]})
        assert formforge.load_file(path).size() == 1


class TestFormDirectoryLoader:
    def test_loads_all_forms(self, loader, tmp_path):
        _write_yaml(tmp_path / "b.yaml", {"fields": [{"type": "text", "name": "x"}]})
        _write_yaml(tmp_path / "a.yaml", {"fields": []})
        (tmp_path / "notes.txt").write_text("ignored")

        directory = FormDirectoryLoader(tmp_path, loader)
        directory.load_all()
        assert directory.list_forms() == ["a", "b"]
        assert directory.get_form("b").size() == 1
        assert directory.get_form("missing") is None

    def test_missing_directory_is_empty(self, loader, tmp_path):
        directory = FormDirectoryLoader(tmp_path / "nope", loader)
        directory.load_all()
        assert directory.list_forms() == []

    def test_duplicate_names(self, loader, tmp_path):
        _write_yaml(tmp_path / "a.yaml", {"name": "same"})
        _write_yaml(tmp_path / "b.yaml", {"name": "same"})
        with pytest.raises(FormFileError, match="Duplicate form name 'same'"):
            FormDirectoryLoader(tmp_path, loader).load_all()

    def test_defaults_to_module_loader(self, tmp_path):
        assert FormDirectoryLoader(tmp_path).loader is formforge.default_loader
