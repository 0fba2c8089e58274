"""
Directory resolution for setup-tytanic.

Directory Structure:
    Tool cache (RUNNER_TOOL_CACHE or ~/.setup-tytanic/tool-cache/):
        - <tool>/<version>/<arch>/          : Extracted tool installation
        - <tool>/<version>/<arch>.complete  : Completion marker
        - lock/                             : Cache entry locks

    Temp (RUNNER_TEMP or the system temp dir):
        - setup-tytanic/                    : Downloads and extraction scratch
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from setup_tytanic.core.exceptions import ConfigError

TOOL_CACHE_ENV = "RUNNER_TOOL_CACHE"
TEMP_DIR_ENV = "RUNNER_TEMP"


def get_global_dir() -> Path:
    """
    Get the platform-specific per-user setup-tytanic directory.

    Returns:
        Path: ~/.setup-tytanic (%USERPROFILE%\\.setup-tytanic on Windows)
    """
    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise ConfigError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".setup-tytanic"
    else:  # Linux/macOS
        return Path.home() / ".setup-tytanic"


def get_tool_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the tool cache root.

    Uses RUNNER_TOOL_CACHE when a CI runner provides one.

    Example:
        >>> get_tool_cache_dir({"RUNNER_TOOL_CACHE": "/opt/hostedtoolcache"})
        PosixPath('/opt/hostedtoolcache')
    """
    environ = os.environ if environ is None else environ
    runner_cache = environ.get(TOOL_CACHE_ENV)
    if runner_cache:
        return Path(runner_cache)
    return get_global_dir() / "tool-cache"


def get_temp_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Get the scratch directory for downloads and extraction."""
    environ = os.environ if environ is None else environ
    base = environ.get(TEMP_DIR_ENV) or tempfile.gettempdir()
    return Path(base) / "setup-tytanic"
