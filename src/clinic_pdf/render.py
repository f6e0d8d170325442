"""Top-level render entry points for prescriptions and lab invoices."""
import asyncio
import datetime as dt
import logging
import webbrowser
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from clinic_pdf.assembler import InvoiceAssembler, PrescriptionAssembler
from clinic_pdf.builder import build_invoice_document, build_prescription_document
from clinic_pdf.delivery import Artifact, DeliveryMode, deliver
from clinic_pdf.errors import ValidationError
from clinic_pdf.models import DiagnosticTest, LabInvoice, Prescription
from clinic_pdf.settings import IdentitySettings
from clinic_pdf.sink import PdfSink

log = logging.getLogger(__name__)


def render_prescription(
    prescription: Prescription | Mapping[str, Any] | None,
    return_artifact: bool = False,
    *,
    settings: IdentitySettings | None = None,
    now: dt.datetime | None = None,
    output_dir: Path | None = None,
    sink_factory: Callable[[IdentitySettings], Any] | None = None,
) -> Artifact | None:
    """
    Render a prescription PDF.

    Args:
        prescription: Raw prescription record
        return_artifact: Return bytes + URL instead of saving to output_dir
        settings: Clinic and doctor identity; defaults fill every gap
        now: Clock for generated IDs, the default date and the filename
        output_dir: Where saved files (or artifact copies) are written
        sink_factory: Builds the page sink; defaults to PdfSink

    Returns:
        Artifact when return_artifact is set, otherwise None

    Raises:
        ValidationError: prescription is missing or malformed
        PersistenceError: the file could not be saved
    """
    if prescription is None:
        log.error("[RENDER] No prescription provided")
        raise ValidationError("No prescription provided")

    settings = settings or IdentitySettings()
    now = now or dt.datetime.now()
    document = build_prescription_document(prescription, settings, now)
    sink = (sink_factory or _pdf_sink)(settings)
    finished = PrescriptionAssembler(document, sink).assemble()

    mode = DeliveryMode.ARTIFACT if return_artifact else DeliveryMode.SAVE
    return deliver(finished, mode, output_dir=output_dir, now=now)


def render_lab_invoice(
    invoice: LabInvoice | Mapping[str, Any] | None,
    diagnostic_tests: Iterable[DiagnosticTest | Mapping[str, Any]] | None,
    return_artifact: bool = False,
    *,
    settings: IdentitySettings | None,
    now: dt.datetime | None = None,
    output_dir: Path | None = None,
    sink_factory: Callable[[IdentitySettings], Any] | None = None,
    opener: Callable[[str], bool] = webbrowser.open,
    notify: Callable[[str], None] | None = None,
) -> Artifact | None:
    """
    Render a lab invoice PDF and preview it, or return it as an artifact.

    Raises:
        ValidationError: invoice, diagnostic catalog or settings are missing
    """
    log.info("[RENDER] Generating lab invoice PDF")
    try:
        document = build_invoice_document(invoice, diagnostic_tests, settings, now)
    except ValidationError as e:
        log.error("[RENDER] %s", e)
        raise

    sink = (sink_factory or _pdf_sink)(settings)
    finished = InvoiceAssembler(document, sink).assemble()

    mode = DeliveryMode.ARTIFACT if return_artifact else DeliveryMode.PREVIEW
    return deliver(finished, mode, output_dir=output_dir, now=now, opener=opener, notify=notify)


async def arender_prescription(prescription, return_artifact: bool = False, **kwargs) -> Artifact | None:
    """Await a prescription render as one unit of work on a worker thread."""
    return await asyncio.to_thread(render_prescription, prescription, return_artifact, **kwargs)


async def arender_lab_invoice(invoice, diagnostic_tests, return_artifact: bool = False, **kwargs) -> Artifact | None:
    """Await a lab invoice render as one unit of work on a worker thread."""
    return await asyncio.to_thread(render_lab_invoice, invoice, diagnostic_tests, return_artifact, **kwargs)


def _pdf_sink(settings: IdentitySettings) -> PdfSink:
    return PdfSink(font_path=settings.font_path)
