"""
File system utilities for setup-tytanic.

This module provides:
- Archive extraction (zip, tar.xz) with traversal checks
- Extension normalization for downloaded archives
- Safe file operations (atomic writes, safe deletion, tree copies)
"""

import logging
import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Union

from setup_tytanic.core.exceptions import (
    AcquisitionError,
    ArchiveExtractionError,
    InsecureArchiveError,
    UnsupportedArchiveFormat,
)

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check whether path is located under parent."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def ensure_extension(archive_path: Union[str, Path], extension: str) -> Path:
    """
    Make sure a downloaded archive carries the expected extension.

    Renames the file in place to append ``.<extension>`` when its name does
    not already end with it.

    Args:
        archive_path: Downloaded file
        extension: Extension without leading dot (e.g., 'tar.xz')

    Returns:
        Path of the (possibly renamed) archive

    Raises:
        AcquisitionError: If the rename fails

    Example:
        >>> ensure_extension(Path('/tmp/3f2a9c'), 'zip')
        PosixPath('/tmp/3f2a9c.zip')
    """
    archive_path = Path(archive_path)

    if archive_path.name.endswith(extension):
        return archive_path

    logger.debug(f"Renaming archive to include extension '{extension}'")
    renamed = archive_path.with_name(f"{archive_path.name}.{extension}")

    try:
        archive_path.rename(renamed)
    except OSError as e:
        raise AcquisitionError(
            f"Failed to rename {archive_path} to {renamed}: {e}"
        ) from e

    return renamed


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> Path:
    """
    Extract an archive to a destination directory.

    The format is chosen from the file extension, never sniffed from content.

    Supported formats:
    - .zip
    - .tar.xz

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Returns:
        The destination directory

    Raises:
        UnsupportedArchiveFormat: If archive format is not recognized
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('tytanic-x86_64-unknown-linux-musl.tar.xz', '/tmp/out')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    archive_name = archive_path.name.lower()

    try:
        if archive_name.endswith(".zip"):
            logger.debug("Extracting zip archive")
            _extract_zip(archive_path, destination)
        elif archive_name.endswith(".tar.xz"):
            logger.debug("Extracting xz tar ball")
            _extract_tar(archive_path, destination)
        else:
            raise UnsupportedArchiveFormat(
                f"Unsupported archive format: {archive_path.name}. "
                "Supported: .zip, .tar.xz"
            )
    except (InsecureArchiveError, UnsupportedArchiveFormat):
        raise
    except (OSError, tarfile.TarError, zipfile.BadZipFile, EOFError) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()

        # Validate all paths first
        for member in members:
            _validate_archive_path(member, destination)

        zf.extractall(destination)


def _extract_tar(archive_path: Path, destination: Path) -> None:
    """Extract an xz-compressed tar ball."""
    with tarfile.open(archive_path, "r:xz") as tar:
        # Validate all paths first
        for member in tar.getmembers():
            _validate_archive_path(member.name, destination)

        # Older interpreters have no extraction filters; paths were checked above
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    If the write fails, the original file (if any) remains unchanged.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a directory tree, refusing paths outside require_prefix.

    Raises:
        ValueError: If path is not under require_prefix
        OSError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if IS_WINDOWS:

        def handle_remove_readonly(func, target, exc):
            """Error handler for Windows read-only files."""
            if not os.access(target, os.W_OK):
                os.chmod(target, 0o777)
                func(target)
            else:
                raise exc[1]

        shutil.rmtree(path, onerror=handle_remove_readonly)
    else:
        shutil.rmtree(path)


def copy_tree(source: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Recursively copy a directory tree, preserving symlinks and metadata.

    Raises:
        FileNotFoundError: If source is not a directory
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_dir():
        raise FileNotFoundError(f"Source is not a directory: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, symlinks=True)
    return destination
