from unittest.mock import MagicMock

import pytest
import requests

from bridge import DownloadManager, downloads_channel


class FakeResponse:
    def __init__(self, chunks, error=None):
        self._chunks = chunks
        self._error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self._error:
            raise self._error

    def iter_content(self, chunk_size=1):
        for chunk in self._chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk


@pytest.fixture
def session():
    session = MagicMock()
    session.get.return_value = FakeResponse([b"%PDF", b"", b"-1.7"])
    return session


def test_enqueue_writes_file(tmp_path, session):
    manager = DownloadManager(tmp_path, session=session)

    ticket = manager.enqueue("https://example.com/notice.pdf", "notice.pdf")

    assert ticket.download_id == 1
    assert ticket.path == str(tmp_path / "CQUT-Helper" / "notice.pdf")
    assert (tmp_path / "CQUT-Helper" / "notice.pdf").read_bytes() == b"%PDF-1.7"
    session.get.assert_called_once_with("https://example.com/notice.pdf", stream=True, timeout=DownloadManager.TIMEOUT)
    assert manager.enqueue("https://example.com/b", "b.bin").download_id == 2


def test_save_path_stays_in_download_folder(tmp_path, session):
    manager = DownloadManager(tmp_path, session=session)

    with pytest.raises(ValueError):
        manager.save_path("../outside.pdf")
    with pytest.raises(ValueError):
        manager.save_path(str(tmp_path / "abs.pdf"))


def test_channel_requires_url_and_file_name(tmp_path, session):
    channel = downloads_channel(DownloadManager(tmp_path, session=session))

    result = channel.invoke("enqueueDownload", {"url": " ", "fileName": "a.pdf"})

    assert result.error_code == "INVALID_ARGS"
    assert result.error_message == "url/fileName is required"
    session.get.assert_not_called()


def test_channel_returns_id_and_path(tmp_path, session):
    channel = downloads_channel(DownloadManager(tmp_path, session=session))

    result = channel.invoke("enqueueDownload", {"url": "https://example.com/a.pdf", "fileName": "a.pdf"})

    assert result.value == {"downloadId": 1, "path": str(tmp_path / "CQUT-Helper" / "a.pdf")}


def test_channel_reports_download_failure(tmp_path, session):
    session.get.return_value = FakeResponse([], error=requests.HTTPError("404 Client Error"))
    channel = downloads_channel(DownloadManager(tmp_path, session=session))

    result = channel.invoke("enqueueDownload", {"url": "https://example.com/a.pdf", "fileName": "a.pdf"})

    assert result.error_code == "DOWNLOAD_FAILED"
    assert "404" in result.error_message
    assert not (tmp_path / "CQUT-Helper" / "a.pdf").exists()


def test_interrupted_stream_leaves_no_file(tmp_path, session):
    session.get.return_value = FakeResponse([b"abc", requests.exceptions.ChunkedEncodingError("connection reset")])
    manager = DownloadManager(tmp_path, session=session)

    with pytest.raises(requests.RequestException):
        manager.enqueue("https://example.com/f.pdf", "f.pdf")

    assert list((tmp_path / "CQUT-Helper").iterdir()) == []


def test_download_replaces_existing_file(tmp_path, session):
    target = tmp_path / "CQUT-Helper" / "notice.pdf"
    target.parent.mkdir()
    target.write_bytes(b"old")

    DownloadManager(tmp_path, session=session).enqueue("https://example.com/notice.pdf", "notice.pdf")

    assert target.read_bytes() == b"%PDF-1.7"
    assert not (tmp_path / "CQUT-Helper" / "notice.pdf.part").exists()
