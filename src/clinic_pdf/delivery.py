"""Deliver a finished document: save to disk, return bytes, or open a preview."""
import base64
import datetime as dt
import logging
import tempfile
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from clinic_pdf.assembler import FinishedDocument
from clinic_pdf.errors import DeliverySurfaceError, PersistenceError

log = logging.getLogger(__name__)

POPUP_BLOCKED_NOTICE = "Please allow popups to view the {kind}."

PREVIEW_TEMPLATE = """<html>
  <head>
    <title>{title}</title>
    <style>
      body {{ margin: 0; display: flex; justify-content: center; align-items: center; height: 100vh; background-color: #f0f0f0; }}
      iframe {{ box-shadow: 0 4px 6px rgba(0,0,0,0.1); border-radius: 10px; }}
    </style>
  </head>
  <body>
    <iframe src="{data_uri}" width="80%" height="90%" style="border: none;"></iframe>
  </body>
</html>
"""


class DeliveryMode(str, Enum):
    SAVE = "save"
    ARTIFACT = "artifact"
    PREVIEW = "preview"


@dataclass
class Artifact:
    """In-memory PDF plus a URL that dereferences to the same bytes."""

    artifact_bytes: bytes
    artifact_url: str


def build_filename(document: FinishedDocument, now: dt.datetime | None = None) -> str:
    """<kind>-<id>-<epoch millis>.pdf, e.g. prescription-OPD1-1700000000000.pdf."""
    now = now or dt.datetime.now()
    return f"{document.kind}-{document.document_id}-{int(now.timestamp() * 1000)}.pdf"


def to_data_uri(pdf_bytes: bytes, filename: str = "generated.pdf") -> str:
    encoded = base64.b64encode(pdf_bytes).decode("ascii")
    return f"data:application/pdf;filename={filename};base64,{encoded}"


def save_document(
    document: FinishedDocument,
    output_dir: Path,
    now: dt.datetime | None = None,
) -> Path:
    """
    Write the PDF under a generated filename.

    Raises:
        PersistenceError: the file could not be written
    """
    path = Path(output_dir) / build_filename(document, now)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(document.to_bytes())
    except OSError as e:
        log.error("[DELIVERY] Error saving PDF %s: %s", path.name, e)
        raise PersistenceError(f"Could not save {path.name}: {e}") from e
    log.info("[DELIVERY] PDF saved: %s", path.name)
    return path


def export_artifact(document: FinishedDocument, output_dir: Path | None = None) -> Artifact:
    """
    Return the PDF bytes with a file:// URL to a copy written under ``output_dir``.

    Without ``output_dir`` the copy goes to the system temp directory. The copy
    is not removed afterwards: the URL stays valid until the caller deletes it.
    """
    pdf_bytes = document.to_bytes()
    with tempfile.NamedTemporaryFile(
        prefix=f"{document.kind}-{document.document_id}-",
        suffix=".pdf",
        dir=output_dir,
        delete=False,
    ) as f:
        f.write(pdf_bytes)
    return Artifact(artifact_bytes=pdf_bytes, artifact_url=Path(f.name).resolve().as_uri())


def open_preview(
    document: FinishedDocument,
    opener: Callable[[str], bool] = webbrowser.open,
    notify: Callable[[str], None] | None = None,
) -> bool:
    """
    Open the PDF embedded in a centered, shadowed frame in a new browser window.

    A blocked window is not raised: a DeliverySurfaceError is logged, appended
    to ``document.advisories`` and the user is notified. Returns whether the
    window opened.

    The preview page is written to the system temp directory and left there,
    since the browser loads it after this call returns.
    """
    title = "Lab Invoice" if document.kind == "invoice" else document.kind.title()
    html = PREVIEW_TEMPLATE.format(title=title, data_uri=to_data_uri(document.to_bytes()))
    with tempfile.NamedTemporaryFile(
        "w", prefix=f"{document.kind}-preview-", suffix=".html", delete=False, encoding="utf-8"
    ) as f:
        f.write(html)

    try:
        opened = opener(Path(f.name).resolve().as_uri())
    except webbrowser.Error as e:
        log.error("[DELIVERY] Error opening preview: %s", e)
        opened = False

    if not opened:
        error = DeliverySurfaceError("Popup blocked. Unable to open PDF.")
        log.error("[DELIVERY] %s", error)
        document.advisories.append(error)
        (notify or log.warning)(POPUP_BLOCKED_NOTICE.format(kind=document.kind))
    return bool(opened)


def deliver(
    document: FinishedDocument,
    mode: DeliveryMode,
    output_dir: Path | None = None,
    now: dt.datetime | None = None,
    opener: Callable[[str], bool] = webbrowser.open,
    notify: Callable[[str], None] | None = None,
) -> Artifact | None:
    """Dispatch a finished document to the selected delivery mode."""
    if mode is DeliveryMode.ARTIFACT:
        return export_artifact(document, output_dir)
    if mode is DeliveryMode.SAVE:
        save_document(document, output_dir or Path.cwd(), now)
        return None
    if mode is DeliveryMode.PREVIEW:
        open_preview(document, opener=opener, notify=notify)
        return None
    raise ValueError(f"Unknown delivery mode: {mode}")
