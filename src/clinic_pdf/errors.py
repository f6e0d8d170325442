"""Error types raised and absorbed while rendering documents."""


class ClinicPdfError(Exception):
    """Base class for clinic-pdf errors."""


class ValidationError(ClinicPdfError):
    """A required top-level input is missing or malformed.

    Raised before any drawing happens; always propagates to the caller.
    """


class OptionalAssetError(ClinicPdfError):
    """An optional embedded asset (clinic logo) could not be placed.

    Logged and absorbed; the document is still produced without the asset.
    """


class DeliverySurfaceError(ClinicPdfError):
    """The preview window could not be opened."""


class PersistenceError(ClinicPdfError):
    """Saving the rendered document to disk failed."""
