from __future__ import annotations

import json
import uuid
from pathlib import Path

import typer

app = typer.Typer(name="formcheck", help="Validate form input against declared rules")
schema_app = typer.Typer(name="schema", help="Generate schema tooling")
app.add_typer(schema_app, name="schema")


EXAMPLE_FORM = """\
real_time:
  enabled: false
submit: submit

fields:
  - id: name
    kind: decorated
    name: Name
    rules:
      - not_empty:
      - length: {at_most: 50}

  - id: email
    kind: decorated
    name: Email
    rules:
      - not_empty:
      - email:

  - id: age
    name: Age
    rules:
      - number: {at_least: 18, description: "must be an adult"}

  - id: site
    name: Website
    optional: true
    rules:
      - url:

  - id: terms
    kind: toggle
    name: Terms
    rules:
      - checked: {description: "please accept the terms"}
"""

EXAMPLE_VALUES = """\
name: Ada Lovelace
email: ada@example.com
age: "36"
site: ""
terms: true
"""


@app.command()
def check(
    form: str = typer.Argument(help="Path to form YAML"),
    values: str = typer.Argument(help="Path to YAML mapping of field ids to values"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    log_dir: str | None = typer.Option(
        None, "--log-dir", help="Directory for debug.log (defaults to .formcheck when verbose)"
    ),
):
    """Validate a set of values against a form declaration."""
    import yaml
    from pydantic import ValidationError

    from formcheck.config import load_form_config, load_values
    from formcheck.declarative import build_form_from_config, build_memory_container
    from formcheck.verbose import close_logger, setup_logger

    form_path = Path(form)
    values_path = Path(values)
    for path, label in ((form_path, "form"), (values_path, "values")):
        if not path.exists():
            typer.echo(f"Error: {label} file not found: {path}", err=True)
            raise typer.Exit(1)

    try:
        form_config = load_form_config(form_path)
        field_values = load_values(values_path)
        container = build_memory_container(form_config, field_values)
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = None
    if verbose or log_dir is not None:
        debug_file = Path(log_dir or ".formcheck") / "debug.log"
        logger = setup_logger(
            debug_file,
            verbose=verbose,
            logger_name=f"formcheck_check_{uuid.uuid4().hex[:8]}",
        )
        logger.debug(f"Checking {values_path} against {form_path}")

    try:
        built = build_form_from_config(form_config, container, logger=logger)
        result = built.validate()
        container.teardown()
    finally:
        if logger is not None:
            close_logger(logger)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.success():
        typer.echo(f"All {len(result.values())} field(s) valid.")
        for value in result.values():
            typer.echo(f"  {value.name} = {value.as_string()}")
    else:
        for error in result.errors():
            typer.echo(f"{error.name}: {error.description}")
        typer.echo(f"{len(result.errors())} error(s)")

    if result.has_errors():
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        "formcheck", "--dir", help="Directory to write the example form into"
    ),
):
    """Write an example form and matching values."""
    project_dir = Path(dir)

    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    form_file = project_dir / "form.yaml"
    if form_file.exists():
        typer.echo(f"form.yaml already exists in {dir}, skipping.")
        return

    form_file.write_text(EXAMPLE_FORM)
    values_file = project_dir / "values.yaml"
    if not values_file.exists():
        values_file.write_text(EXAMPLE_VALUES)

    typer.echo(f"Initialized form in {dir}:")
    typer.echo("  form.yaml    - example form declaration")
    typer.echo("  values.yaml  - example values to check")
    typer.echo(f"Try: formcheck check {form_file} {values_file}")


@schema_app.command("generate")
def schema_generate(
    dir: str = typer.Option(
        "formcheck", "--dir", help="Project directory for default schema/doc outputs"
    ),
    out: str | None = typer.Option(
        None,
        help="Output path for JSON Schema (defaults to <dir>/schemas/formcheck.schema.json)",
    ),
    doc: str | None = typer.Option(
        None, help="Output path for schema docs (defaults to <dir>/docs/schema.md)"
    ),
):
    """Generate JSON Schema and docs for the form YAML format."""
    from formcheck.schema import write_json_schema, write_schema_doc

    project_dir = Path(dir)
    out_path = (
        Path(out)
        if out is not None
        else project_dir / "schemas" / "formcheck.schema.json"
    )
    doc_path = Path(doc) if doc is not None else project_dir / "docs" / "schema.md"
    write_json_schema(out_path)
    write_schema_doc(doc_path)
    typer.echo(f"Wrote schema: {out_path}")
    typer.echo(f"Wrote docs: {doc_path}")
