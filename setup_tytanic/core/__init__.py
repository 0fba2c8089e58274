"""
Core functionality for setup-tytanic.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    OperatingSystem,
    Architecture,
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .cache import ToolCache

from .exceptions import (
    SetupTytanicError,
    ConfigError,
    CatalogFetchError,
    UnresolvableVersionError,
    UnsupportedVersionError,
    UnsupportedPlatformError,
    AcquisitionError,
    DownloadError,
    ArchiveExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    CacheError,
)

__all__ = [
    "OperatingSystem",
    "Architecture",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "ToolCache",
    "SetupTytanicError",
    "ConfigError",
    "CatalogFetchError",
    "UnresolvableVersionError",
    "UnsupportedVersionError",
    "UnsupportedPlatformError",
    "AcquisitionError",
    "DownloadError",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "CacheError",
]
