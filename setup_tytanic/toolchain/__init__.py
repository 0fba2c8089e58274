"""
Tytanic artifact selection, download and installation.
"""

from .targets import ArtifactTarget, resolve_target, supported_platforms
from .downloader import MINIMUM_VERSION, TytanicDownloader, check_supported_version
from .installer import InstallResult, install, resolve

__all__ = [
    "ArtifactTarget",
    "resolve_target",
    "supported_platforms",
    "MINIMUM_VERSION",
    "TytanicDownloader",
    "check_supported_version",
    "InstallResult",
    "install",
    "resolve",
]
