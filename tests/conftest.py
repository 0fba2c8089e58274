"""
Pytest configuration and shared fixtures for setup-tytanic tests.
"""

import io
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from setup_tytanic.core.platform import clear_platform_cache

RUNNER_ENV_VARS = (
    "GITHUB_OUTPUT",
    "GITHUB_PATH",
    "RUNNER_TOOL_CACHE",
    "RUNNER_TEMP",
    "RUNNER_DEBUG",
    "INPUT_TYTANIC-VERSION",
    "INPUT_ALLOW-PRERELEASES",
    "INPUT_GITHUB-TOKEN",
    "INPUT_CACHE-DIR",
)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    """Run every test outside of a CI runner environment."""
    for name in RUNNER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def isolated_home(temp_dir: Path, monkeypatch) -> Path:
    """Create isolated home directory for tests."""
    fake_home = temp_dir / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))

    return fake_home


def build_archive(top_dir: str, extension: str, files=None) -> bytes:
    """
    Build an in-memory release archive.

    Args:
        top_dir: Top-level directory name inside the archive
        extension: 'tar.xz' or 'zip'
        files: Mapping of relative file names to contents
    """
    files = files or {"tt": b"#!/bin/sh\necho tytanic\n"}
    buffer = io.BytesIO()

    if extension == "zip":
        with zipfile.ZipFile(buffer, "w") as zf:
            for name, content in files.items():
                zf.writestr(f"{top_dir}/{name}", content)
    else:
        with tarfile.open(fileobj=buffer, mode="w:xz") as tar:
            for name, content in files.items():
                info = tarfile.TarInfo(f"{top_dir}/{name}")
                info.size = len(content)
                info.mode = 0o755
                tar.addfile(info, io.BytesIO(content))

    return buffer.getvalue()


@pytest.fixture
def release_archive() -> Callable[..., bytes]:
    """Factory for release archive bytes."""
    return build_archive


@pytest.fixture
def write_archive(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing a release archive to disk."""

    def _write(name: str, top_dir: str, extension: str, files=None) -> Path:
        path = temp_dir / name
        path.write_bytes(build_archive(top_dir, extension, files))
        return path

    return _write
