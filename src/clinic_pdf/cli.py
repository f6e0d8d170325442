"""CLI for rendering prescriptions and lab invoices from YAML records."""

from pathlib import Path

import click
import yaml

from clinic_pdf.errors import ClinicPdfError
from clinic_pdf.render import render_lab_invoice, render_prescription
from clinic_pdf.settings import load_settings

DEFAULT_OUTPUT_DIR = Path.cwd() / "output"

output_dir_option = click.option(
    "-o", "--output-dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    help="Output directory for generated PDFs",
)
settings_option = click.option(
    "-s", "--settings",
    "settings_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML file with clinic, doctor and lab identity",
)


def _load_record(path: Path) -> dict:
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _render_record(record: dict, settings, output_dir: Path, preview: bool) -> str:
    """Render one record, dispatching on its ``kind`` key."""
    kind = record.get("kind", "prescription")
    if kind == "prescription":
        render_prescription(record, settings=settings, output_dir=output_dir)
        return "saved"
    if kind == "invoice":
        artifact = render_lab_invoice(
            record.get("invoice"),
            record.get("diagnostic_tests"),
            return_artifact=not preview,
            settings=settings,
            output_dir=output_dir,
            notify=click.echo,
        )
        return artifact.artifact_url if artifact else "opened preview"
    raise click.BadParameter(f"Unknown record kind: {kind}")


@click.command()
@click.argument("record_file", type=click.Path(exists=True, path_type=Path))
@output_dir_option
@settings_option
def render_prescription_cmd(record_file: Path, output_dir: Path, settings_file: Path | None):
    """Render a prescription PDF from a YAML record."""
    output_dir.mkdir(parents=True, exist_ok=True)
    record = _load_record(record_file)
    record.setdefault("kind", "prescription")
    try:
        result = _render_record(record, load_settings(settings_file), output_dir, preview=False)
    except ClinicPdfError as e:
        raise click.ClickException(str(e))
    click.echo(f"Generated: {record_file.name} -> {result} in {output_dir}")


@click.command()
@click.argument("record_file", type=click.Path(exists=True, path_type=Path))
@output_dir_option
@settings_option
@click.option("--preview/--no-preview", default=True, help="Open the invoice in a browser window")
def render_invoice_cmd(record_file: Path, output_dir: Path, settings_file: Path | None, preview: bool):
    """Render a lab invoice PDF from a YAML record with ``invoice`` and ``diagnostic_tests``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    record = _load_record(record_file)
    record["kind"] = "invoice"
    try:
        result = _render_record(record, load_settings(settings_file), output_dir, preview=preview)
    except ClinicPdfError as e:
        raise click.ClickException(str(e))
    click.echo(f"Generated: {record_file.name} -> {result}")


@click.command()
@click.argument("records_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@output_dir_option
@settings_option
def render_all(records_dir: Path, output_dir: Path, settings_file: Path | None):
    """Render every YAML record in a directory without opening previews."""
    output_dir.mkdir(parents=True, exist_ok=True)
    settings = load_settings(settings_file)

    record_files = sorted(records_dir.glob("*.yaml"))
    if not record_files:
        click.echo(f"No record files found in {records_dir}")
        return

    rendered = 0
    for record_file in record_files:
        click.echo(f"Processing: {record_file.name}")
        try:
            result = _render_record(_load_record(record_file), settings, output_dir, preview=False)
        except ClinicPdfError as e:
            click.echo(f"  !! {e}", err=True)
            continue
        click.echo(f"  -> {result}")
        rendered += 1

    click.echo(f"\nRendered {rendered} of {len(record_files)} records into {output_dir}")


if __name__ == "__main__":
    render_all()
