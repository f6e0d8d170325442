"""Shared fixtures for clinic-pdf tests."""

import datetime as dt

import pytest

from clinic_pdf.settings import IdentitySettings


class RecordingSink:
    """Page sink that records drawing calls instead of producing a PDF."""

    def __init__(self, fail_images: bool = False):
        self.ops: list[tuple] = []
        self.page = 0
        self.fail_images = fail_images

    def add_page(self) -> None:
        self.page += 1
        self.ops.append(("add_page", self.page))

    def use_font(self, style: str = "", size: float = 10) -> None:
        self.ops.append(("font", style, size))

    def set_text_color(self, r, g=-1, b=-1) -> None:
        self.ops.append(("text_color", r, g, b))

    def set_fill_color(self, r, g=-1, b=-1) -> None:
        self.ops.append(("fill_color", r, g, b))

    def set_draw_color(self, r, g=-1, b=-1) -> None:
        self.ops.append(("draw_color", r, g, b))

    def set_line_width(self, width) -> None:
        self.ops.append(("line_width", width))

    def place_text(self, x, y, text, align="left") -> None:
        self.ops.append(("text", self.page, x, y, text, align))

    def line(self, x1, y1, x2, y2) -> None:
        self.ops.append(("line", self.page, x1, y1, x2, y2))

    def fill_rect(self, x, y, w, h) -> None:
        self.ops.append(("rect", self.page, x, y, w, h))

    def place_image(self, source, x, y, w, h) -> None:
        if self.fail_images:
            raise ValueError(f"Unsupported image: {source}")
        self.ops.append(("image", self.page, source, x, y, w, h))

    def watermark(self, text, x, y, angle, size) -> None:
        self.ops.append(("watermark", self.page, text, x, y, angle, size))

    def to_bytes(self) -> bytes:
        return repr(self.ops).encode()

    @property
    def texts(self) -> list[str]:
        return [op[4] for op in self.ops if op[0] == "text"]

    def text_ops(self) -> list[tuple]:
        """(page, x, y, text) for every text call."""
        return [(op[1], op[2], op[3], op[4]) for op in self.ops if op[0] == "text"]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def now():
    """Fixed aware clock: 2024-01-01T00:00:00Z, 1704067200000 ms."""
    return dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)


@pytest.fixture
def settings():
    return IdentitySettings(
        clinic_name="Lakeview Clinic",
        clinic_address="12 Lake Road",
        doctor_name="Dr. Meera Iyer",
        lab_name="Lakeview Diagnostics",
        lab_address="14 Lake Road",
        lab_phone="040-5550100",
    )


@pytest.fixture
def prescription_data():
    """Fully specified prescription in camelCase, as a frontend would send it."""
    return {
        "prescriptionId": "OPD1001",
        "visitId": "OCID2002",
        "date": "2024-03-05",
        "patient": {"name": "Asha Rao", "gender": "Female", "age": 34, "phoneNumber": "9876543210"},
        "vitalSigns": {"weight": 62, "bloodPressure": "120/80", "temperature": 98.6},
        "knownAllergies": "Penicillin",
        "symptoms": "Fever and sore throat",
        "medications": [
            {
                "name": "Paracetamol 500mg",
                "dosage": "1 tab",
                "interval": "TID",
                "duration": "5 days",
                "instructions": "After food",
            },
            {
                "name": "Cetirizine 10mg",
                "dosage": "1 tab",
                "interval": "HS",
                "duration": "3 days",
                "instructions": "At night",
            },
        ],
        "labTests": ["Complete Blood Count", "CRP"],
        "advice": "Drink plenty of fluids",
    }


@pytest.fixture
def invoice_data():
    return {
        "id": "INV-77",
        "date": "2024-03-05T10:30:00",
        "patientName": "Asha Rao",
        "prescriptionId": "OPD1001",
        "tests": ["Complete Blood Count", "Lipid Profile"],
        "subtotal": 500.00,
        "discount": 10,
        "total": 450.00,
    }


@pytest.fixture
def catalog():
    return [
        {"name": "Complete Blood Count", "price": 350},
        {"name": "CRP", "price": 150},
    ]


@pytest.fixture
def failing_sink():
    """Sink whose image embedding always fails."""
    return RecordingSink(fail_images=True)


@pytest.fixture
def make_sink():
    """Factory for independent recording sinks."""
    return RecordingSink
