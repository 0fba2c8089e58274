"""
Release artifact naming for tytanic.

The tables below follow the upstream release-naming convention; a new
upstream target means a new row here.
"""

from dataclasses import dataclass
from typing import Dict, List

from setup_tytanic.core.exceptions import UnsupportedPlatformError
from setup_tytanic.core.platform import Architecture, OperatingSystem, PlatformInfo

TOOL_NAME = "tytanic"
RELEASES_BASE_URL = "https://github.com/typst-community/tytanic"

TARGET_TRIPLES: Dict[OperatingSystem, Dict[Architecture, str]] = {
    OperatingSystem.LINUX: {
        Architecture.ARM64: "aarch64-unknown-linux-musl",
        Architecture.ARM: "armv7-unknown-linux-musl",
        Architecture.RISCV64: "riscv64gc-unknown-linux-gnu",
        Architecture.X64: "x86_64-unknown-linux-musl",
    },
    OperatingSystem.MACOS: {
        Architecture.ARM64: "aarch64-apple-darwin",
        Architecture.X64: "x86_64-apple-darwin",
    },
    OperatingSystem.WINDOWS: {
        Architecture.ARM64: "aarch64-pc-windows-msvc",
        Architecture.X64: "x86_64-pc-windows-msvc",
    },
}

ARCHIVE_EXTENSIONS: Dict[OperatingSystem, str] = {
    OperatingSystem.LINUX: "tar.xz",
    OperatingSystem.MACOS: "tar.xz",
    OperatingSystem.WINDOWS: "zip",
}


@dataclass(frozen=True)
class ArtifactTarget:
    """Release archive for one platform."""

    triple: str
    extension: str

    @property
    def directory(self) -> str:
        """Top-level directory inside the archive."""
        return f"{TOOL_NAME}-{self.triple}"

    @property
    def filename(self) -> str:
        """Release asset file name."""
        return f"{self.directory}.{self.extension}"

    def download_url(self, version: str) -> str:
        """
        Release asset URL for an exact version.

        Example:
            >>> ArtifactTarget('x86_64-apple-darwin', 'tar.xz').download_url('0.2.1')
            'https://github.com/typst-community/tytanic/releases/download/v0.2.1/tytanic-x86_64-apple-darwin.tar.xz'
        """
        return f"{RELEASES_BASE_URL}/releases/download/v{version}/{self.filename}"


def resolve_target(platform: PlatformInfo) -> ArtifactTarget:
    """
    Look up the release archive for a platform.

    Raises:
        UnsupportedPlatformError: If no archive is published for the platform
    """
    triple = TARGET_TRIPLES.get(platform.os, {}).get(platform.arch)
    if triple is None:
        raise UnsupportedPlatformError(platform.os.value, platform.arch.value)

    return ArtifactTarget(triple=triple, extension=ARCHIVE_EXTENSIONS[platform.os])


def supported_platforms() -> List[PlatformInfo]:
    """All platforms with a published archive."""
    return [
        PlatformInfo(os=os_name, arch=arch)
        for os_name, arches in TARGET_TRIPLES.items()
        for arch in arches
    ]
