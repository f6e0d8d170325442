"""Prescription and lab invoice PDF rendering.

Resolves loosely-shaped clinical records into fixed-size pages with
positioned text and paginated tables, then saves, returns or previews the
result.
"""

from clinic_pdf.delivery import Artifact, DeliveryMode
from clinic_pdf.errors import (
    ClinicPdfError,
    DeliverySurfaceError,
    OptionalAssetError,
    PersistenceError,
    ValidationError,
)
from clinic_pdf.render import (
    arender_lab_invoice,
    arender_prescription,
    render_lab_invoice,
    render_prescription,
)
from clinic_pdf.settings import IdentitySettings, load_settings

__all__ = [
    "Artifact",
    "ClinicPdfError",
    "DeliveryMode",
    "DeliverySurfaceError",
    "IdentitySettings",
    "OptionalAssetError",
    "PersistenceError",
    "ValidationError",
    "arender_lab_invoice",
    "arender_prescription",
    "load_settings",
    "render_lab_invoice",
    "render_prescription",
]
