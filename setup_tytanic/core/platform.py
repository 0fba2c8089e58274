"""
Platform detection for setup-tytanic.

Maps the running interpreter's operating system and CPU architecture onto the
closed enumerations used to select a tytanic release archive.

Usage:
    from setup_tytanic.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"Platform string: {platform_info.platform_string()}")
"""

import enum
import functools
import logging
import platform
from dataclasses import dataclass

from setup_tytanic.core.exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class OperatingSystem(enum.Enum):
    """Host operating systems known to the release tables."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class Architecture(enum.Enum):
    """Host CPU architectures known to the release tables."""

    X64 = "x64"
    ARM64 = "arm64"
    ARM = "arm"
    RISCV64 = "riscv64"
    X86 = "x86"


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform key.

    Attributes:
        os: Operating system
        arch: CPU architecture
    """

    os: OperatingSystem
    arch: Architecture

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo(OperatingSystem.LINUX, Architecture.X64).platform_string()
            'linux-x64'
        """
        return f"{self.os.value}-{self.arch.value}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the OS or architecture is unknown
    """
    os_name = _detect_os()
    logger.debug(f"Detected platform '{os_name.value}'")

    arch = _detect_architecture()
    logger.debug(f"Detected architecture '{arch.value}'")

    return PlatformInfo(os=os_name, arch=arch)


def _detect_os() -> OperatingSystem:
    """Detect operating system."""
    system = platform.system().lower()

    if system == "linux":
        return OperatingSystem.LINUX
    elif system == "darwin":
        return OperatingSystem.MACOS
    elif system == "windows":
        return OperatingSystem.WINDOWS
    else:
        raise UnsupportedPlatformError(system, platform.machine().lower())


def _detect_architecture() -> Architecture:
    """Detect CPU architecture."""
    machine = platform.machine().lower()

    # Normalize architecture names
    if machine in ("x86_64", "amd64", "x64"):
        return Architecture.X64
    elif machine in ("aarch64", "arm64"):
        return Architecture.ARM64
    elif machine in ("i386", "i686", "x86"):
        return Architecture.X86
    elif machine.startswith("arm"):
        return Architecture.ARM
    elif machine == "riscv64":
        return Architecture.RISCV64
    else:
        raise UnsupportedPlatformError(platform.system().lower(), machine)


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "OperatingSystem",
    "Architecture",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
]
