"""
Tytanic download and extraction.

Turns an exact version and a host platform into an extracted tytanic
directory:
1. Check the version against the supported minimum
2. Look up the release archive for the platform
3. Download the archive
4. Append the archive extension if the download lacks it
5. Extract and descend into the archive's top-level directory
"""

import logging
import time
import uuid
from pathlib import Path
from typing import List, Optional

import requests
import semantic_version

from setup_tytanic.core.directory import get_temp_dir
from setup_tytanic.core.download import DEFAULT_TIMEOUT, DownloadProgress, download_tool
from setup_tytanic.core.exceptions import AcquisitionError, UnsupportedVersionError
from setup_tytanic.core.filesystem import ensure_extension, extract_archive, safe_rmtree
from setup_tytanic.core.platform import PlatformInfo
from setup_tytanic.toolchain.targets import resolve_target

logger = logging.getLogger(__name__)

MINIMUM_VERSION = "0.1.0"


def check_supported_version(version: str) -> None:
    """
    Reject versions older than the first release with prebuilt archives.

    Raises:
        UnsupportedVersionError: If version is invalid or below MINIMUM_VERSION
    """
    if not semantic_version.validate(version):
        raise UnsupportedVersionError(version, MINIMUM_VERSION)

    if semantic_version.Version(version) < semantic_version.Version(MINIMUM_VERSION):
        raise UnsupportedVersionError(version, MINIMUM_VERSION)


class TytanicDownloader:
    """
    Downloads and extracts tytanic release archives.

    Extracted directories live in a scratch area owned by the downloader
    until cleanup() is called; callers copy them elsewhere first.

    Example:
        >>> downloader = TytanicDownloader()
        >>> tool_root = downloader.acquire("0.2.1", detect_platform())
        >>> cached = cache.store(tool_root, "tytanic", "0.2.1")
        >>> downloader.cleanup()
    """

    def __init__(
        self,
        temp_dir: Optional[Path] = None,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize tytanic downloader.

        Args:
            temp_dir: Scratch directory (default: RUNNER_TEMP or system temp)
            session: Optional requests session for downloads
            timeout: Request timeout in seconds
        """
        self.temp_dir = Path(temp_dir) if temp_dir is not None else get_temp_dir()
        self.session = session
        self.timeout = timeout
        self._work_dirs: List[Path] = []

    def acquire(self, version: str, platform: PlatformInfo) -> Path:
        """
        Download and extract one tytanic release.

        Args:
            version: Exact version without 'v' prefix (e.g., "0.2.1")
            platform: Host platform

        Returns:
            Path to the extracted tytanic directory

        Raises:
            UnsupportedVersionError: If version is below MINIMUM_VERSION
            UnsupportedPlatformError: If no archive exists for the platform
            AcquisitionError: If download, rename or extraction fails
        """
        check_supported_version(version)

        logger.debug(f"Fetching Tytanic v{version}")

        target = resolve_target(platform)
        logger.debug(f"Determined archive target '{target.triple}'")
        logger.debug(f"Determined archive extension '{target.extension}'")

        work_dir = self.temp_dir / uuid.uuid4().hex
        self._work_dirs.append(work_dir)
        url = target.download_url(version)

        logger.debug(
            f"Downloading release archive version '{version}' target '{target.triple}'"
        )
        download_start = time.time()

        archive = download_tool(
            url,
            work_dir,
            session=self.session,
            progress_callback=self._log_progress,
            timeout=self.timeout,
        )
        logger.debug(
            f"Downloaded archive to {archive} in {time.time() - download_start:.2f}s"
        )

        archive = ensure_extension(archive, target.extension)

        extract_dir = extract_archive(archive, work_dir / "extract")
        logger.debug(f"Extracted v{version} to {extract_dir}")

        archive.unlink(missing_ok=True)

        tool_root = extract_dir / target.directory
        if not tool_root.is_dir():
            raise AcquisitionError(
                f"Archive {target.filename} from {url} does not contain "
                f"directory '{target.directory}'"
            )

        return tool_root

    def cleanup(self):
        """Remove every scratch directory created by acquire()."""
        while self._work_dirs:
            work_dir = self._work_dirs.pop()
            if work_dir.exists():
                safe_rmtree(work_dir, require_prefix=self.temp_dir)
                logger.debug(f"Removed scratch directory: {work_dir}")

    @staticmethod
    def _log_progress(progress: DownloadProgress):
        logger.debug(f"Downloading: {progress}")
