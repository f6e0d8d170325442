"""Constants for clinic-pdf layout and identity defaults."""


class Color:
    """RGB colors used on rendered documents."""

    BLACK = (0, 0, 0)
    DARK_GRAY = (50, 50, 50)
    HEADER_BAND = (240, 240, 240)
    PATIENT_BOX = (250, 250, 250)
    RULE = (200, 200, 200)
    TOTAL = (0, 100, 0)
    FOOTER = (150, 150, 150)
    WATERMARK = (230, 230, 230)
    ROW_EVEN = (245, 245, 245)
    ROW_ODD = (255, 245, 245)


# Page geometry (mm, portrait A4)
PAGE_WIDTH = 210
PAGE_HEIGHT = 297
BOTTOM_THRESHOLD = 270
TOP_OFFSET = 20
ROW_HEIGHT = 7
SECTION_GAP = 15

# Generated identifier prefixes
PRESCRIPTION_ID_PREFIX = "OPD"
VISIT_ID_PREFIX = "OCID"
INVOICE_ID_PREFIX = "INV"

# Patient field defaults
UNKNOWN_PATIENT = "Unknown Patient"
NOT_SPECIFIED = "Not Specified"
NOT_PROVIDED = "Not Provided"
NOT_AVAILABLE = "N/A"

CLINIC_DEFAULTS = {
    "name": "Suguna Clinic",
    "address": "Vinayak Nagar, Hyderabad",
    "location": "Hyderabad, Telangana",
    "phone": "Ph: 9618994555",
    "website": "Website: sugunaclinic.com",
}

DOCTOR_DEFAULTS = {
    "name": "Dr. Ram Kumar",
    "qualifications": "MBBS, MD, MPH (USA)",
    "reg_no": "Regd No: 54371",
    "specialization": "Physician & Consultant (General Medicine)",
}

LAB_DEFAULTS = {
    "name": "Medical Laboratory",
    "address": "Address Not Available",
    "phone": NOT_AVAILABLE,
}

CURRENCY_SYMBOL = "₹"
