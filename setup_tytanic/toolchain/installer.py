"""
Resolve-and-install pipeline for tytanic.

Catalog -> resolver -> cache lookup -> download on a miss -> cache store.
Every step completes before the next starts; any error aborts the run.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from setup_tytanic.core.cache import ToolCache
from setup_tytanic.core.platform import PlatformInfo, detect_platform
from setup_tytanic.releases.catalog import GITHUB_API_URL, fetch_releases
from setup_tytanic.releases.resolver import LATEST, is_exact_version, resolve_version
from setup_tytanic.toolchain.downloader import TytanicDownloader
from setup_tytanic.toolchain.targets import TOOL_NAME

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install run."""

    version: str
    """Exact version that was installed"""

    path: Path
    """Cached tytanic directory"""

    cache_hit: bool
    """Whether the directory was already cached (no download needed)"""


def resolve(
    specifier: str = LATEST,
    allow_prerelease: bool = False,
    token: Optional[str] = None,
    *,
    session: Optional[requests.Session] = None,
    api_url: str = GITHUB_API_URL,
) -> str:
    """
    Turn a specifier into an exact version.

    Exact versions are returned as-is without contacting the API.
    """
    specifier = specifier.strip()

    if specifier != LATEST and is_exact_version(specifier):
        logger.debug(f"Using exact version '{specifier}'")
        return specifier

    releases = fetch_releases(token, session=session, api_url=api_url)
    version = resolve_version(releases, specifier, allow_prerelease)
    logger.info(f"Resolved Tytanic version: {version}")
    return version


def install(
    specifier: str = LATEST,
    allow_prerelease: bool = False,
    token: Optional[str] = None,
    *,
    cache: Optional[ToolCache] = None,
    platform: Optional[PlatformInfo] = None,
    downloader: Optional[TytanicDownloader] = None,
    session: Optional[requests.Session] = None,
    api_url: str = GITHUB_API_URL,
) -> InstallResult:
    """
    Resolve a tytanic version and make it available in the tool cache.

    Args:
        specifier: 'latest', an exact version or an npm-style range
        allow_prerelease: Whether prerelease versions may be selected
        token: Optional GitHub API token
        cache: Tool cache (default: ToolCache())
        platform: Host platform (default: detected)
        downloader: Downloader used on a cache miss
        session: Optional requests session for API calls
        api_url: GitHub API base URL

    Returns:
        InstallResult with the exact version and the cached path

    Example:
        >>> result = install("^0.2")
        >>> print(f"Tytanic v{result.version} at {result.path}")
    """
    version = resolve(
        specifier, allow_prerelease, token, session=session, api_url=api_url
    )

    platform = platform or detect_platform()
    cache = cache or ToolCache(arch=platform.arch.value)

    found = cache.find(TOOL_NAME, version)
    if found:
        logger.info(f"Tytanic v{version} retrieved from cache at {found}")
        return InstallResult(version=version, path=found, cache_hit=True)

    downloader = downloader or TytanicDownloader(session=session)
    try:
        tool_root = downloader.acquire(version, platform)
        cached = cache.store(tool_root, TOOL_NAME, version)
    finally:
        downloader.cleanup()

    logger.info(f"Tytanic v{version} added to cache at {cached}")
    return InstallResult(version=version, path=cached, cache_hit=False)
