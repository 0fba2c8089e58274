"""
Local tool cache keyed by tool name, version and architecture.

Layout mirrors the hosted-runner tool cache so that a CI cache step can
persist it between jobs:

    <root>/<tool>/<version>/<arch>/           extracted tool
    <root>/<tool>/<version>/<arch>.complete   completion marker

An entry counts as present only once its marker exists, so a copy
interrupted halfway is never returned by find().
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import semantic_version
from filelock import FileLock, Timeout

from setup_tytanic.core.directory import get_tool_cache_dir
from setup_tytanic.core.exceptions import CacheError
from setup_tytanic.core.filesystem import atomic_write, copy_tree, safe_rmtree
from setup_tytanic.core.platform import detect_platform

logger = logging.getLogger(__name__)


class ToolCache:
    """
    Directory store for extracted tools.

    Example:
        >>> cache = ToolCache(Path('/opt/hostedtoolcache'), arch='x64')
        >>> cache.find('tytanic', '0.2.1')
        >>> cached = cache.store(extracted_dir, 'tytanic', '0.2.1')
    """

    def __init__(
        self,
        root: Optional[Path] = None,
        arch: Optional[str] = None,
        lock_timeout: int = 300,
    ):
        """
        Initialize tool cache.

        Args:
            root: Cache root (default: RUNNER_TOOL_CACHE or ~/.setup-tytanic/tool-cache)
            arch: Architecture component of the key (default: detected host arch)
            lock_timeout: Timeout in seconds for acquiring an entry lock
        """
        self.root = Path(root) if root is not None else get_tool_cache_dir()
        self.arch = arch or detect_platform().arch.value
        self.lock_dir = self.root / "lock"
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root} (arch {self.arch})")

    def entry_path(self, tool: str, version: str) -> Path:
        """Directory that holds the cached tool for a key."""
        return self.root / tool / version / self.arch

    def _marker_path(self, tool: str, version: str) -> Path:
        return self.root / tool / version / f"{self.arch}.complete"

    @contextmanager
    def _lock(self, tool: str, version: str):
        """
        Exclusive lock for a single cache entry.

        Raises:
            CacheError: If the lock cannot be acquired within timeout
        """
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock_path = self.lock_dir / f"{tool}-{version}-{self.arch}.lock"

        try:
            with FileLock(lock_path, timeout=self.lock_timeout):
                logger.debug(f"Acquired cache lock {lock_path.name}")
                yield
        except Timeout as e:
            raise CacheError(
                f"Could not acquire cache lock for {tool} {version} "
                f"within {self.lock_timeout} seconds"
            ) from e

    def find(self, tool: str, version: str) -> Optional[Path]:
        """
        Look up a cached tool.

        Returns:
            Path to the cached directory, or None on a miss
        """
        entry = self.entry_path(tool, version)

        if self._marker_path(tool, version).is_file() and entry.is_dir():
            logger.debug(f"Found {tool} {version} in cache at {entry}")
            return entry

        logger.debug(f"{tool} {version} not found in cache")
        return None

    def store(self, source: Path, tool: str, version: str) -> Path:
        """
        Copy an extracted tool directory into the cache.

        A stale entry without a completion marker is replaced.

        Returns:
            Canonical cached path for the key

        Raises:
            CacheError: If the copy fails
        """
        entry = self.entry_path(tool, version)
        marker = self._marker_path(tool, version)

        with self._lock(tool, version):
            if marker.is_file() and entry.is_dir():
                logger.debug(f"{tool} {version} was cached concurrently")
                return entry

            try:
                marker.unlink(missing_ok=True)
                safe_rmtree(entry, require_prefix=self.root)
                copy_tree(source, entry)
                atomic_write(marker, datetime.now().isoformat())
            except (OSError, ValueError) as e:
                raise CacheError(
                    f"Failed to cache {tool} {version} from {source}: {e}"
                ) from e

        logger.debug(f"Cached {tool} {version} at {entry}")
        return entry

    def list_versions(self, tool: str) -> List[str]:
        """
        Get all completed versions of a tool for this architecture.

        Returns:
            Versions sorted by semantic version precedence, lowest first
        """
        tool_dir = self.root / tool
        if not tool_dir.is_dir():
            return []

        versions = [
            child.name
            for child in tool_dir.iterdir()
            if child.is_dir()
            and semantic_version.validate(child.name)
            and self.find(tool, child.name) is not None
        ]
        return sorted(versions, key=semantic_version.Version)
