"""Form CLI commands — validate, show and normalize."""

import json
from pathlib import Path

import click

from formforge.exceptions import FormforgeError
from formforge.loader import FormDirectoryLoader, default_loader
from formforge.schema import validate_form_file, validate_forms_dir


def _label(obj) -> str:
    """Symbolic name of a field or rule, falling back to its class name."""
    for attr in ("kind", "field_type", "extension_type"):
        value = getattr(obj, attr, None)
        if value:
            return value
    return type(obj).__name__


def _load_forms(forms_path: Path) -> FormDirectoryLoader:
    if not forms_path.exists():
        click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
        raise SystemExit(1)
    loader = FormDirectoryLoader(forms_path)
    try:
        loader.load_all()
    except FormforgeError as e:
        click.echo(click.style(f"Failed to load forms: {e}", fg="red"), err=True)
        raise SystemExit(1)
    return loader


def _get_form(forms_path: Path, name: str):
    loader = _load_forms(forms_path)
    form = loader.get_form(name)
    if form is None:
        click.echo(f"Error: No form named '{name}' in {forms_path}", err=True)
        raise SystemExit(1)
    return form


@click.group()
def forms():
    """Form definition commands."""
    pass


@forms.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate a single YAML file instead of the whole forms directory.",
)
@click.pass_obj
def validate(config, strict: bool, target_path: Path | None):
    """Validate form YAML files against the form schema, then load them."""
    forms_path = config.forms_path

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    if target_path is not None:
        schema_issues = validate_form_file(target_path)
    else:
        if not forms_path.exists():
            click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
            raise SystemExit(1)
        schema_issues = validate_forms_dir(forms_path, strict=strict)

    errors = [i for i in schema_issues if i.severity == "error"]
    warnings = [i for i in schema_issues if i.severity == "warning"]

    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    # ── Semantic (catalog) validation ───────────────────────────────────────
    if target_path is not None:
        try:
            loaded = {target_path.stem: default_loader.load_file(target_path)}
        except FormforgeError as e:
            click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
            raise SystemExit(1)
    else:
        loader = FormDirectoryLoader(forms_path)
        try:
            loader.load_all()
        except FormforgeError as e:
            click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
            raise SystemExit(1)
        loaded = loader.forms

    click.echo(f"\nLoaded {len(loaded)} form(s):")
    for name in sorted(loaded):
        click.echo(f"  ✓ {name} ({loaded[name].size()} fields)")

    click.echo(click.style("\nAll forms are valid.", fg="green", bold=True))


@forms.command()
@click.argument("name")
@click.pass_obj
def show(config, name: str):
    """Show the fields and rules of a form."""
    form = _get_form(config.forms_path, name)

    title = f"{form.name}" + (f" — {form.display_name}" if form.display_name else "")
    click.echo(click.style(title, bold=True))
    if form.max_answers is not None:
        click.echo(f"  max answers: {form.max_answers}")
    if form.start_date is not None:
        click.echo(f"  opens:  {form.start_date.isoformat()}")
    if form.end_date is not None:
        click.echo(f"  closes: {form.end_date.isoformat()}")

    click.echo(f"\n{form.size()} field(s):")
    for f in form.fields:
        flags = [flag for flag, on in (("required", f.required), ("confirm", f.confirm)) if on]
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(f"  - {f.name} ({_label(f)}){suffix}")
        if f.validations:
            click.echo(f"      validate:  {', '.join(_label(v) for v in f.validations)}")
        if f.normalizations:
            click.echo(f"      normalize: {', '.join(_label(n) for n in f.normalizations)}")


@forms.command()
@click.argument("name")
@click.option(
    "--answer",
    "-a",
    "answers",
    multiple=True,
    metavar="FIELD=VALUE",
    help="An answer to normalize (repeatable).",
)
@click.pass_obj
def normalize(config, name: str, answers: tuple[str, ...]):
    """Normalize answers for a form and print them as JSON."""
    form = _get_form(config.forms_path, name)

    raw: dict[str, str] = {}
    for answer in answers:
        key, sep, value = answer.partition("=")
        if not sep:
            raise click.BadParameter(f"expected FIELD=VALUE, got '{answer}'", param_hint="--answer")
        raw[key] = value

    try:
        result = form.normalize(raw)
    except FormforgeError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(json.dumps(result, indent=2))
