"""Record models accepted for rendering and the resolved document views."""
import datetime as dt
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Base for raw input records; accepts snake_case or camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


def _coerce_date(value):
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return dt.datetime.fromisoformat(value).date()
    return value


class PatientInfo(RecordModel):
    """Nested patient sub-record."""

    name: str | None = None
    gender: str | None = None
    age: int | float | str | None = None
    phone_number: int | float | str | None = None


class VitalSigns(RecordModel):
    """Vitals captured at the visit."""

    weight: float | str | None = None
    blood_pressure: str | None = None
    temperature: float | str | None = None


class Medication(RecordModel):
    """One prescribed medicine."""

    name: str
    dosage: str
    interval: str
    duration: str
    instructions: str
    category: str = "Tab"


class Prescription(RecordModel):
    """Prescription as captured at the front desk; most fields are optional."""

    prescription_id: str | None = None
    visit_id: str | None = None
    date: dt.date | None = None

    patient_name: str | None = None
    gender: str | None = None
    age: int | float | str | None = None
    phone: int | float | str | None = None
    patient: PatientInfo | None = None

    vital_signs: VitalSigns | None = None
    known_allergies: str | None = None
    symptoms: str | None = None
    medications: list[Medication] = []
    lab_tests: list[str] = []
    advice: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return _coerce_date(value)


class LabInvoice(RecordModel):
    """Lab invoice with totals pre-computed by the caller."""

    id: str | None = None
    date: dt.date | None = None
    patient_name: str
    prescription_id: str | None = None
    tests: list[str] = []
    subtotal: float
    discount: float
    total: float

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return _coerce_date(value)


class DiagnosticTest(RecordModel):
    """Catalog entry mapping a test name to its unit price."""

    name: str
    price: float | None = None


@dataclass(frozen=True)
class ClinicIdentity:
    name: str
    address: str
    location: str
    phone: str
    website: str
    logo: str | None = None


@dataclass(frozen=True)
class DoctorIdentity:
    name: str
    qualifications: str
    reg_no: str
    specialization: str


@dataclass(frozen=True)
class LabIdentity:
    name: str
    address: str
    phone: str


@dataclass(frozen=True)
class PatientDetails:
    """Fully resolved patient block; every field is a display string."""

    name: str
    gender: str
    age: str
    phone: str
    weight: str = ""
    bp: str = ""
    temperature: str = ""
    allergies: str = ""


@dataclass(frozen=True)
class MedicationRow:
    name: str
    dosage: str
    interval: str
    duration: str
    instructions: str
    category: str = "Tab"


@dataclass(frozen=True)
class PrescriptionDocument:
    """Renderer-ready view of a prescription."""

    id: str
    visit_id: str
    date: str
    clinic: ClinicIdentity
    doctor: DoctorIdentity
    patient: PatientDetails
    symptoms: str = ""
    medications: tuple[MedicationRow, ...] = ()
    lab_tests: tuple[str, ...] = ()
    advice: str = ""


@dataclass(frozen=True)
class InvoiceLine:
    test_name: str
    price: float


@dataclass(frozen=True)
class InvoiceDocument:
    """Renderer-ready view of a lab invoice."""

    id: str
    date: str
    lab: LabIdentity
    patient_name: str
    prescription_id: str
    lines: tuple[InvoiceLine, ...] = ()
    subtotal: float = 0.0
    discount: float = 0.0
    total: float = 0.0
    notes: tuple[str, ...] = ("Thank you for your business!", "Powered by MedThirthy")
