"""Tests for output delivery."""
import base64
import logging
from pathlib import Path
from urllib.parse import urlparse

import pytest

from clinic_pdf.assembler import FinishedDocument
from clinic_pdf.delivery import (
    Artifact,
    DeliveryMode,
    build_filename,
    deliver,
    export_artifact,
    open_preview,
    save_document,
    to_data_uri,
)
from clinic_pdf.errors import DeliverySurfaceError, PersistenceError


@pytest.fixture
def finished(sink):
    sink.place_text(15, 55, "Prescription OPD1001")
    return FinishedDocument(kind="prescription", document_id="OPD1001", sink=sink)


@pytest.fixture
def finished_invoice(sink):
    return FinishedDocument(kind="invoice", document_id="INV-77", sink=sink)


def _path(url: str) -> Path:
    return Path(urlparse(url).path)


def test_build_filename(finished, now):
    assert build_filename(finished, now) == "prescription-OPD1001-1704067200000.pdf"


def test_to_data_uri():
    uri = to_data_uri(b"%PDF-1.4")

    assert uri.startswith("data:application/pdf;filename=generated.pdf;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == b"%PDF-1.4"


class TestSave:
    def test_writes_file(self, finished, now, tmp_path, caplog):
        with caplog.at_level(logging.INFO):
            path = save_document(finished, tmp_path, now)

        assert path == tmp_path / "prescription-OPD1001-1704067200000.pdf"
        assert path.read_bytes() == finished.to_bytes()
        assert "PDF saved: prescription-OPD1001-1704067200000.pdf" in caplog.text

    def test_failure_raises_persistence_error(self, finished, now, tmp_path, caplog):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x")

        with caplog.at_level(logging.ERROR), pytest.raises(PersistenceError):
            save_document(finished, blocker, now)

        assert "Error saving PDF" in caplog.text


def test_export_artifact(finished, tmp_path):
    artifact = export_artifact(finished, tmp_path)

    assert isinstance(artifact, Artifact)
    assert artifact.artifact_bytes == finished.to_bytes()
    assert artifact.artifact_url.startswith("file://")
    assert _path(artifact.artifact_url).read_bytes() == artifact.artifact_bytes
    assert _path(artifact.artifact_url).parent == tmp_path.resolve()


class TestPreview:
    def test_opens_embedded_frame(self, finished_invoice):
        opened_urls = []

        def opener(url):
            opened_urls.append(url)
            return True

        assert open_preview(finished_invoice, opener=opener) is True

        html = _path(opened_urls[0]).read_text(encoding="utf-8")
        assert "<title>Lab Invoice</title>" in html
        assert 'src="data:application/pdf;filename=generated.pdf;base64,' in html
        assert "box-shadow" in html
        assert "justify-content: center" in html

    def test_blocked_window_notifies_without_raising(self, finished_invoice, mocker, caplog):
        notify = mocker.Mock()

        with caplog.at_level(logging.ERROR):
            opened = open_preview(finished_invoice, opener=lambda url: False, notify=notify)

        assert opened is False
        notify.assert_called_once_with("Please allow popups to view the invoice.")
        assert "Popup blocked" in caplog.text
        assert len(finished_invoice.advisories) == 1
        assert isinstance(finished_invoice.advisories[0], DeliverySurfaceError)

    def test_opened_window_records_no_advisory(self, finished_invoice):
        open_preview(finished_invoice, opener=lambda url: True)

        assert finished_invoice.advisories == []

    def test_browser_error_is_absorbed(self, finished_invoice, mocker):
        import webbrowser

        notify = mocker.Mock()
        opener = mocker.Mock(side_effect=webbrowser.Error("no runnable browser"))

        assert open_preview(finished_invoice, opener=opener, notify=notify) is False
        notify.assert_called_once()


class TestDeliver:
    def test_save_mode(self, finished, now, tmp_path):
        assert deliver(finished, DeliveryMode.SAVE, output_dir=tmp_path, now=now) is None
        assert (tmp_path / "prescription-OPD1001-1704067200000.pdf").exists()

    def test_artifact_mode(self, finished, tmp_path):
        result = deliver(finished, DeliveryMode.ARTIFACT, output_dir=tmp_path)

        assert result.artifact_bytes == finished.to_bytes()

    def test_preview_mode(self, finished_invoice, mocker):
        opener = mocker.Mock(return_value=True)

        assert deliver(finished_invoice, DeliveryMode.PREVIEW, opener=opener) is None
        opener.assert_called_once()
