"""
Centralized exception hierarchy for setup-tytanic.

Every failure in the resolve-and-install pipeline is fatal for the run. Core
modules raise these exceptions; only the CLI decides on the exit code.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SetupTytanicError(Exception):
    """Base exception for all setup-tytanic errors."""

    pass


class ConfigError(SetupTytanicError):
    """Invalid input parameter or configuration file."""

    pass


# ============================================================================
# Release Catalog / Version Resolution
# ============================================================================


class CatalogFetchError(SetupTytanicError):
    """Raised when the release listing cannot be retrieved or parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch releases from {url}: {reason}")


class UnresolvableVersionError(SetupTytanicError):
    """Raised when no published version satisfies the requested specifier."""

    def __init__(self, specifier: str, allow_prerelease: bool, reason: str = ""):
        self.specifier = specifier
        self.allow_prerelease = allow_prerelease
        policy = "with" if allow_prerelease else "without"
        msg = f"Tytanic version '{specifier}' could not be resolved ({policy} pre-releases)"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


# ============================================================================
# Acquisition
# ============================================================================


class UnsupportedVersionError(SetupTytanicError):
    """Raised when the requested version is below the supported minimum."""

    def __init__(self, version: str, minimum: str):
        self.version = version
        self.minimum = minimum
        super().__init__(f"Version must be >= {minimum}, was {version}")


class UnsupportedPlatformError(SetupTytanicError):
    """Raised when the host OS/architecture has no published tytanic build."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Unsupported platform: {os_name}-{arch}")


class AcquisitionError(SetupTytanicError):
    """Base exception for download, rename and extraction failures."""

    pass


class DownloadError(AcquisitionError):
    """Raised when an HTTP download fails."""

    pass


class ArchiveExtractionError(AcquisitionError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format not recognized by its file extension."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive member would be written outside the extraction directory."""

    pass


# ============================================================================
# Cache
# ============================================================================


class CacheError(SetupTytanicError):
    """Raised when the tool cache cannot be read or written."""

    pass
