"""Build renderer-ready document views from raw records and settings."""
import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clinic_pdf.constants import (
    CLINIC_DEFAULTS,
    DOCTOR_DEFAULTS,
    INVOICE_ID_PREFIX,
    LAB_DEFAULTS,
    NOT_AVAILABLE,
    NOT_PROVIDED,
    NOT_SPECIFIED,
    PRESCRIPTION_ID_PREFIX,
    UNKNOWN_PATIENT,
    VISIT_ID_PREFIX,
)
from clinic_pdf.errors import ValidationError
from clinic_pdf.models import (
    ClinicIdentity,
    DiagnosticTest,
    DoctorIdentity,
    InvoiceDocument,
    InvoiceLine,
    LabIdentity,
    LabInvoice,
    MedicationRow,
    PatientDetails,
    Prescription,
    PrescriptionDocument,
)
from clinic_pdf.resolve import lookup_price, resolve_field
from clinic_pdf.settings import IdentitySettings

log = logging.getLogger(__name__)


# (field, accessor chain, default)
PATIENT_FIELDS = (
    ("name", ("patient_name", "patient.name"), UNKNOWN_PATIENT),
    ("gender", ("gender", "patient.gender"), NOT_SPECIFIED),
    ("age", ("age", "patient.age"), NOT_SPECIFIED),
    ("phone", ("phone", "patient.phone_number"), NOT_PROVIDED),
)


def build_prescription_document(
    record: Prescription | Mapping[str, Any] | None,
    settings: IdentitySettings,
    now: dt.datetime | None = None,
) -> PrescriptionDocument:
    """
    Resolve a raw prescription into a PrescriptionDocument.

    Args:
        record: Prescription model or raw dict (snake_case or camelCase keys)
        settings: Identity settings for the clinic and doctor blocks
        now: Clock used for generated IDs and a missing date

    Returns:
        Immutable document view

    Raises:
        ValidationError: record is missing or malformed
    """
    if record is None:
        raise ValidationError("No prescription provided")
    prescription = _validate(Prescription, record)
    now = now or dt.datetime.now()
    stamp = _epoch_millis(now)

    patient = {
        key: resolve_field(prescription, chain, default)
        for key, chain, default in PATIENT_FIELDS
    }
    if patient["age"] != NOT_SPECIFIED:
        patient["age"] = f"{patient['age']} years"

    vitals = prescription.vital_signs
    weight = resolve_field(vitals, ("weight",), "")
    temperature = resolve_field(vitals, ("temperature",), "")

    return PrescriptionDocument(
        id=prescription.prescription_id or f"{PRESCRIPTION_ID_PREFIX}{stamp}",
        visit_id=prescription.visit_id or f"{VISIT_ID_PREFIX}{stamp}",
        date=format_date(prescription.date or now.date()),
        clinic=clinic_identity(settings),
        doctor=doctor_identity(settings),
        patient=PatientDetails(
            **patient,
            weight=f"{weight} kg" if weight else "",
            bp=resolve_field(vitals, ("blood_pressure",), ""),
            temperature=f"{temperature} F" if temperature else "",
            allergies=prescription.known_allergies or "",
        ),
        symptoms=prescription.symptoms or "",
        medications=tuple(
            MedicationRow(
                name=med.name,
                dosage=med.dosage,
                interval=med.interval,
                duration=med.duration,
                instructions=med.instructions,
                category=med.category,
            )
            for med in prescription.medications
        ),
        lab_tests=tuple(prescription.lab_tests),
        advice=prescription.advice or "",
    )


def build_invoice_document(
    invoice: LabInvoice | Mapping[str, Any] | None,
    catalog: Iterable[DiagnosticTest | Mapping[str, Any]] | None,
    settings: IdentitySettings | None,
    now: dt.datetime | None = None,
) -> InvoiceDocument:
    """Resolve a lab invoice and its catalog prices into an InvoiceDocument.

    Subtotal, discount and total are carried through exactly as given.
    """
    if invoice is None:
        raise ValidationError("No invoice provided")
    catalog = list(catalog or [])
    if not catalog:
        raise ValidationError("No diagnostic tests provided")
    if settings is None:
        raise ValidationError("Global settings not found")

    lab_invoice = _validate(LabInvoice, invoice)
    catalog = [_validate(DiagnosticTest, entry) for entry in catalog]
    now = now or dt.datetime.now()

    return InvoiceDocument(
        id=lab_invoice.id or f"{INVOICE_ID_PREFIX}{_epoch_millis(now)}",
        date=format_date(lab_invoice.date or now.date()),
        lab=lab_identity(settings),
        patient_name=lab_invoice.patient_name,
        prescription_id=lab_invoice.prescription_id or NOT_AVAILABLE,
        lines=tuple(
            InvoiceLine(test_name=name, price=lookup_price(catalog, name))
            for name in lab_invoice.tests
        ),
        subtotal=lab_invoice.subtotal,
        discount=lab_invoice.discount,
        total=lab_invoice.total,
    )


def clinic_identity(settings: IdentitySettings) -> ClinicIdentity:
    return ClinicIdentity(
        **_identity(settings, "clinic", CLINIC_DEFAULTS),
        logo=settings.clinic_logo or None,
    )


def doctor_identity(settings: IdentitySettings) -> DoctorIdentity:
    return DoctorIdentity(**_identity(settings, "doctor", DOCTOR_DEFAULTS))


def lab_identity(settings: IdentitySettings) -> LabIdentity:
    return LabIdentity(**_identity(settings, "lab", LAB_DEFAULTS))


def format_date(value: dt.date) -> str:
    """Render a date as M/D/YYYY."""
    return f"{value.month}/{value.day}/{value.year}"


def _identity(settings: IdentitySettings, prefix: str, defaults: dict[str, str]) -> dict[str, str]:
    return {
        key: resolve_field(settings, (f"{prefix}_{key}",), default)
        for key, default in defaults.items()
    }


def _validate(model: type[BaseModel], record: Any) -> Any:
    if isinstance(record, model):
        return record
    if isinstance(record, BaseModel):
        record = record.model_dump()
    try:
        return model.model_validate(record)
    except PydanticValidationError as e:
        log.error("[BUILD] Invalid %s: %s", model.__name__, e)
        raise ValidationError(f"Invalid {model.__name__}: {e.error_count()} field error(s)") from e


def _epoch_millis(now: dt.datetime) -> int:
    return int(now.timestamp() * 1000)
