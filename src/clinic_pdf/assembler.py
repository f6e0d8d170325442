"""Orchestrates header, body, totals and footer drawing for a document."""
import logging
from dataclasses import dataclass, field
from enum import Enum

from clinic_pdf.constants import (
    CURRENCY_SYMBOL,
    Color,
    PAGE_WIDTH,
    ROW_HEIGHT,
    SECTION_GAP,
)
from clinic_pdf.errors import ClinicPdfError, OptionalAssetError
from clinic_pdf.layout import LayoutCursor
from clinic_pdf.models import InvoiceDocument, PrescriptionDocument
from clinic_pdf.resolve import stringify
from clinic_pdf.sink import PageSink
from clinic_pdf.tables import Column, RowFill, TableRenderer, advance_or_break, keep_together

log = logging.getLogger(__name__)

CENTER_X = PAGE_WIDTH / 2

MEDICATION_COLUMNS = (
    Column(15, "#"),
    Column(25, "Category"),
    Column(45, "Medicine"),
    Column(105, "Dosage"),
    Column(130, "Interval"),
    Column(160, "Duration"),
    Column(185, "Instruction"),
)
LAB_TEST_COLUMNS = (Column(15),)
INVOICE_COLUMNS = (Column(20), Column(190, align="right"))

# Offsets of the totals block below the last invoice row
TOTALS_RULE_GAP = 12
TOTALS_FIRST_GAP = 10
TOTALS_HEIGHT = TOTALS_RULE_GAP + TOTALS_FIRST_GAP + 2 * ROW_HEIGHT


class AssemblyState(Enum):
    INITIALIZING = "initializing"
    HEADER_DRAWN = "header_drawn"
    BODY_DRAWN = "body_drawn"
    TOTALS_DRAWN = "totals_drawn"
    FOOTER_DRAWN = "footer_drawn"
    FINALIZED = "finalized"


@dataclass
class FinishedDocument:
    """Rendered document ready for delivery."""

    kind: str
    document_id: str
    sink: PageSink
    page_count: int = 1
    advisories: list[ClinicPdfError] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        return self.sink.to_bytes()


def money(value: float) -> str:
    return f"{CURRENCY_SYMBOL}{value:.2f}"


def percent(value: float) -> str:
    return f"{stringify(value)}%"


class DocumentAssembler:
    """
    Single-use drawing pipeline.

    Stages run strictly in order: header, body, totals (invoices only),
    footer. ``assemble`` may be called once; the returned FinishedDocument
    owns the sink.
    """

    kind = "document"
    has_totals = False

    def __init__(self, sink: PageSink):
        self.sink = sink
        self.cursor = LayoutCursor()
        self.state = AssemblyState.INITIALIZING
        self.advisories: list[ClinicPdfError] = []

    @property
    def document_id(self) -> str:
        raise NotImplementedError

    def assemble(self) -> FinishedDocument:
        if self.state is not AssemblyState.INITIALIZING:
            raise RuntimeError(f"{type(self).__name__} has already run")

        self.draw_header()
        self._transition(AssemblyState.HEADER_DRAWN)
        self.draw_body()
        self._transition(AssemblyState.BODY_DRAWN)
        if self.has_totals:
            self.draw_totals()
            self._transition(AssemblyState.TOTALS_DRAWN)
        self.draw_footer()
        self._transition(AssemblyState.FOOTER_DRAWN)
        self._transition(AssemblyState.FINALIZED)

        log.info(
            "[ASSEMBLE] %s %s finished on %d page(s)",
            self.kind, self.document_id, self.cursor.page_count,
        )
        return FinishedDocument(
            kind=self.kind,
            document_id=self.document_id,
            sink=self.sink,
            page_count=self.cursor.page_count,
            advisories=list(self.advisories),
        )

    def draw_header(self) -> None:
        raise NotImplementedError

    def draw_body(self) -> None:
        raise NotImplementedError

    def draw_totals(self) -> None:
        pass

    def draw_footer(self) -> None:
        pass

    def _transition(self, state: AssemblyState) -> None:
        log.debug("[ASSEMBLE] %s -> %s", self.state.value, state.value)
        self.state = state


class PrescriptionAssembler(DocumentAssembler):
    """Lays out a prescription: identity header, patient grid, medicines, tests, advice."""

    kind = "prescription"

    def __init__(self, document: PrescriptionDocument, sink: PageSink):
        super().__init__(sink)
        self.document = document

    @property
    def document_id(self) -> str:
        return self.document.id

    def draw_header(self) -> None:
        doc, sink = self.document, self.sink
        self._draw_logo()

        # Clinic details (left)
        sink.use_font("B", 16)
        sink.place_text(50, 20, doc.clinic.name)
        sink.use_font("", 10)
        for y, line in zip(
            (25, 30, 35, 40),
            (doc.clinic.address, doc.clinic.location, doc.clinic.phone, doc.clinic.website),
        ):
            sink.place_text(50, y, line)

        # Doctor details (right)
        sink.use_font("B", 12)
        sink.place_text(140, 20, doc.doctor.name)
        sink.use_font("", 10)
        for y, line in zip(
            (25, 30, 35),
            (doc.doctor.qualifications, doc.doctor.specialization, doc.doctor.reg_no),
        ):
            sink.place_text(140, y, line)

        sink.line(15, 45, 195, 45)
        sink.place_text(15, 55, f"Prescription {doc.id}")
        sink.place_text(140, 55, f"Date : {doc.date}")

    def draw_body(self) -> None:
        doc, sink, cursor = self.document, self.sink, self.cursor
        patient = doc.patient

        cursor.y = 65
        grid = (
            ("OPD ID", doc.id, "OPD Visit ID", doc.visit_id),
            ("Patient Name", patient.name, "Age", patient.age),
            ("Gender", patient.gender, "Phone", patient.phone),
            ("BP", patient.bp, "Temperature", patient.temperature),
            ("Weight", patient.weight, "Allergies", patient.allergies),
            ("Consultant Doctor", doc.doctor.name, None, None),
        )
        for index, (left_label, left_value, right_label, right_value) in enumerate(grid):
            y = cursor.y if index == 0 else cursor.advance(ROW_HEIGHT)
            sink.place_text(15, y, left_label)
            sink.place_text(60, y, f": {left_value}")
            if right_label:
                sink.place_text(110, y, right_label)
                sink.place_text(160, y, f": {right_value}")

        y = advance_or_break(sink, cursor, SECTION_GAP)
        sink.use_font("B", 10)
        sink.place_text(15, y, "Symptoms:")
        sink.use_font("", 10)
        y = advance_or_break(sink, cursor, ROW_HEIGHT)
        sink.place_text(25, y, doc.symptoms)

        y = advance_or_break(sink, cursor, 25 - ROW_HEIGHT)
        sink.use_font("B", 10)
        sink.place_text(15, y, "Medicines")
        TableRenderer(sink, cursor, MEDICATION_COLUMNS).render([
            (str(index), med.category, med.name, med.dosage, med.interval, med.duration, med.instructions)
            for index, med in enumerate(doc.medications, start=1)
        ])

        if doc.lab_tests:
            y = advance_or_break(sink, cursor, SECTION_GAP)
            sink.use_font("B", 9)
            sink.place_text(15, y, "Pathology Test")
            TableRenderer(sink, cursor, LAB_TEST_COLUMNS).render([
                (f"{index}. {test}",) for index, test in enumerate(doc.lab_tests, start=1)
            ])

        if doc.advice:
            y = advance_or_break(sink, cursor, SECTION_GAP)
            sink.use_font("", 9)
            sink.place_text(15, y, doc.advice)

    def _draw_logo(self) -> None:
        logo = self.document.clinic.logo
        if not logo:
            return
        try:
            self.sink.place_image(logo, 15, 10, 30, 30)
        except Exception as e:
            error = OptionalAssetError(f"Could not embed clinic logo: {e}")
            log.error("[ASSEMBLE] Error adding clinic logo: %s", e)
            self.advisories.append(error)


class InvoiceAssembler(DocumentAssembler):
    """Lays out a lab invoice with zebra-striped test rows and verbatim totals."""

    kind = "invoice"
    has_totals = True

    def __init__(self, document: InvoiceDocument, sink: PageSink):
        super().__init__(sink)
        self.document = document

    @property
    def document_id(self) -> str:
        return self.document.id

    def draw_header(self) -> None:
        doc, sink = self.document, self.sink

        sink.set_fill_color(*Color.HEADER_BAND)
        sink.fill_rect(0, 0, PAGE_WIDTH, 50)

        sink.use_font("B", 18)
        sink.set_text_color(*Color.BLACK)
        sink.place_text(CENTER_X, 25, doc.lab.name, align="center")
        sink.use_font("", 10)
        sink.set_text_color(*Color.DARK_GRAY)
        sink.place_text(CENTER_X, 35, doc.lab.address, align="center")
        sink.place_text(CENTER_X, 42, f"Phone: {doc.lab.phone}", align="center")

        sink.set_draw_color(*Color.RULE)
        sink.set_line_width(0.5)
        sink.line(15, 55, 195, 55)

        sink.set_text_color(*Color.BLACK)
        sink.place_text(15, 65, f"Invoice No: {doc.id}")
        sink.place_text(150, 65, f"Date: {doc.date}", align="right")

        sink.set_fill_color(*Color.PATIENT_BOX)
        sink.fill_rect(15, 75, 180, 25)
        sink.use_font("B", 10)
        sink.place_text(20, 85, "Patient Details")
        sink.use_font("", 10)
        sink.place_text(20, 92, f"Name: {doc.patient_name}")
        sink.place_text(150, 92, f"Prescription ID: {doc.prescription_id}", align="right")

    def draw_body(self) -> None:
        sink, cursor = self.sink, self.cursor
        sink.use_font("B", 10)
        sink.place_text(15, 110, "Tests")

        cursor.y = 120 - ROW_HEIGHT
        TableRenderer(sink, cursor, INVOICE_COLUMNS, fill=RowFill(), body_size=10).render([
            (f"{index}. {line.test_name}", money(line.price))
            for index, line in enumerate(self.document.lines, start=1)
        ])

    def draw_totals(self) -> None:
        doc, sink, cursor = self.document, self.sink, self.cursor
        keep_together(sink, cursor, TOTALS_HEIGHT)

        sink.set_draw_color(*Color.RULE)
        y = cursor.advance(TOTALS_RULE_GAP)
        sink.line(15, y, 195, y)

        sink.use_font("B", 10)
        sink.set_text_color(*Color.BLACK)
        y = cursor.advance(TOTALS_FIRST_GAP)
        sink.place_text(20, y, "Subtotal:")
        sink.place_text(190, y, money(doc.subtotal), align="right")

        y = cursor.advance(ROW_HEIGHT)
        sink.place_text(20, y, "Discount:")
        sink.place_text(190, y, percent(doc.discount), align="right")

        y = cursor.advance(ROW_HEIGHT)
        sink.place_text(20, y, "Total:")
        sink.set_text_color(*Color.TOTAL)
        sink.place_text(190, y, money(doc.total), align="right")

    def draw_footer(self) -> None:
        sink = self.sink
        sink.use_font("", 8)
        sink.set_text_color(*Color.FOOTER)
        for y, note in zip((280, 285), self.document.notes):
            sink.place_text(CENTER_X, y, note, align="center")

        sink.set_text_color(*Color.WATERMARK)
        sink.watermark("INVOICE", CENTER_X, 160, angle=45, size=50)
