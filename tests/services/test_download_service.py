"""
Unit tests for the installer download.
"""

import os
import pytest
from unittest.mock import MagicMock, patch
from zoomfixer.config import constants
from zoomfixer.services.download_service import DownloadService
from zoomfixer.services.errors import DownloadFailed


def make_response(status=200, chunks=(), length=None, fail_after=None):
    response = MagicMock()
    response.status_code = status
    response.headers = {} if length is None else {"content-length": str(length)}

    def iter_content(chunk_size):
        for i, chunk in enumerate(chunks):
            if fail_after is not None and i == fail_after:
                raise IOError("connection reset")
            yield chunk

    response.iter_content.side_effect = iter_content
    return response


@pytest.fixture
def fake_get():
    with patch("zoomfixer.services.download_service.requests.get") as mock_get:
        yield mock_get


@pytest.fixture
def dest(tmp_path):
    path = tmp_path / "ZoomInstaller-test.pkg"
    with patch.object(DownloadService, "make_destination", return_value=str(path)):
        yield path


def serve(fake_get, response):
    fake_get.return_value.__enter__.return_value = response


def test_known_size_progress_sequence(fake_get, dest):
    """1000 bytes in four 250-byte chunks -> 0.25, 0.5, 0.75, 1.0."""
    serve(fake_get, make_response(chunks=[b"x" * 250] * 4, length=1000))
    progress = []

    path = DownloadService.download_installer(url="https://example.test/Zoom.pkg", progress_callback=progress.append)

    assert progress == [0.25, 0.5, 0.75, 1.0]
    assert path == str(dest)
    assert dest.read_bytes() == b"x" * 1000


def test_progress_capped_when_server_sends_more(fake_get, dest):
    serve(fake_get, make_response(chunks=[b"x" * 600, b"x" * 600], length=1000))
    progress = []

    DownloadService.download_installer(progress_callback=progress.append)

    assert progress == sorted(progress)
    assert max(progress) == 1.0
    assert progress == [0.6, 1.0]


def test_unknown_size_only_reports_completion(fake_get, dest):
    serve(fake_get, make_response(chunks=[b"a", b"b", b"c"]))
    progress = []

    DownloadService.download_installer(progress_callback=progress.append)

    assert progress == [1.0]
    assert dest.read_bytes() == b"abc"


def test_request_bypasses_cache_and_streams(fake_get, dest):
    serve(fake_get, make_response(chunks=[b"data"], length=4))

    DownloadService.download_installer()

    args, kwargs = fake_get.call_args
    assert args[0] == constants.ZOOM_INSTALLER_URL
    assert kwargs["stream"] is True
    assert kwargs["headers"]["Cache-Control"] == "no-cache"


@pytest.mark.parametrize("status", [199, 301, 404, 500])
def test_bad_status_raises(fake_get, dest, status):
    serve(fake_get, make_response(status=status))

    with pytest.raises(DownloadFailed) as exc_info:
        DownloadService.download_installer()

    assert exc_info.value.status_code == status
    assert not dest.exists()


def test_partial_file_removed_on_stream_error(fake_get, dest):
    serve(fake_get, make_response(chunks=[b"x" * 10] * 3, length=30, fail_after=2))

    with pytest.raises(IOError):
        DownloadService.download_installer()

    assert not dest.exists()


def test_log_callback_messages(fake_get, dest):
    serve(fake_get, make_response(chunks=[b"x"], length=1))
    messages = []

    DownloadService.download_installer(log_callback=messages.append)

    assert messages[0] == "Downloading latest Zoom package..."
    assert messages[-1] == f"Installer saved to {dest}"


def test_destinations_are_unique():
    first = DownloadService.make_destination()
    second = DownloadService.make_destination()

    assert first != second
    assert os.path.basename(first).startswith(constants.INSTALLER_PREFIX)
    assert first.endswith(constants.INSTALLER_SUFFIX)
