"""
Unit tests for download module.

Tests download functionality with mocked network requests.
"""

import pytest
import requests
import responses

from setup_tytanic.core.download import (
    DownloadProgress,
    download_file,
    download_tool,
    format_progress,
)
from setup_tytanic.core.exceptions import AcquisitionError, DownloadError

ASSET_URL = "https://example.com/tytanic.tar.xz"


class TestDownloadProgress:
    """Test DownloadProgress dataclass."""

    def test_progress_to_string(self):
        progress = DownloadProgress(
            bytes_downloaded=52428800,  # 50 MB
            total_bytes=104857600,  # 100 MB
            percentage=50.0,
            speed_bps=1048576,  # 1 MB/s
        )

        result = str(progress)

        assert "50.0/100.0 MB" in result
        assert "50.0%" in result
        assert "1.0 MB/s" in result

    def test_unknown_total(self):
        progress = DownloadProgress(
            bytes_downloaded=1048576, total_bytes=1048576, percentage=0, speed_bps=0
        )

        assert format_progress(progress) == "1.0 MB at 0.0 MB/s"


class TestDownloadFile:
    """Test download_file function."""

    @responses.activate
    def test_successful_download(self, temp_dir):
        content = b"archive bytes" * 100
        responses.add(responses.GET, ASSET_URL, body=content, status=200)

        dest = temp_dir / "nested" / "tytanic.tar.xz"
        result = download_file(ASSET_URL, dest)

        assert result == dest
        assert dest.read_bytes() == content

    @responses.activate
    def test_follows_redirect(self, temp_dir):
        """Release assets are served through a redirect to a CDN."""
        cdn_url = "https://objects.example.com/asset"
        responses.add(
            responses.GET, ASSET_URL, status=302, headers={"Location": cdn_url}
        )
        responses.add(responses.GET, cdn_url, body=b"payload", status=200)

        dest = download_file(ASSET_URL, temp_dir / "asset")

        assert dest.read_bytes() == b"payload"

    @responses.activate
    def test_http_error_raises(self, temp_dir):
        responses.add(responses.GET, ASSET_URL, status=404)

        dest = temp_dir / "missing"
        with pytest.raises(DownloadError, match="Failed to download"):
            download_file(ASSET_URL, dest)

        assert not dest.exists()

    @responses.activate
    def test_connection_error_raises(self, temp_dir):
        responses.add(
            responses.GET,
            ASSET_URL,
            body=requests.exceptions.ConnectionError("connection refused"),
        )

        with pytest.raises(DownloadError) as exc_info:
            download_file(ASSET_URL, temp_dir / "file")

        assert isinstance(exc_info.value, AcquisitionError)

    @responses.activate
    def test_progress_callback(self, temp_dir):
        content = b"x" * 20000
        responses.add(
            responses.GET,
            ASSET_URL,
            body=content,
            headers={"Content-Length": str(len(content))},
        )

        updates = []
        download_file(ASSET_URL, temp_dir / "file", progress_callback=updates.append)

        assert updates
        assert updates[-1].bytes_downloaded == len(content)
        assert updates[-1].percentage == 100.0

    @responses.activate
    def test_uses_given_session(self, temp_dir):
        responses.add(responses.GET, ASSET_URL, body=b"data")

        with requests.Session() as session:
            download_file(ASSET_URL, temp_dir / "file", session=session)

        assert len(responses.calls) == 1

    def test_empty_url(self, temp_dir):
        with pytest.raises(ValueError, match="URL cannot be empty"):
            download_file("", temp_dir / "file")


class TestDownloadTool:
    """Test download_tool function."""

    @responses.activate
    def test_random_name_without_extension(self, temp_dir):
        responses.add(responses.GET, ASSET_URL, body=b"data")

        first = download_tool(ASSET_URL, temp_dir)
        second = download_tool(ASSET_URL, temp_dir)

        assert first.parent == temp_dir
        assert first.suffix == ""
        assert first != second
