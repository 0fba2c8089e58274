"""
Shared utilities for CLI commands.
"""

from typing import Any, Dict

from setup_tytanic.config.parser import (
    INPUT_ALLOW_PRERELEASES,
    INPUT_CACHE_DIR,
    INPUT_GITHUB_TOKEN,
    INPUT_VERSION,
    SetupConfig,
    load_config,
)


def config_from_args(args) -> SetupConfig:
    """
    Build the run configuration from parsed arguments.

    Flags that were not given fall through to runner inputs and the
    configuration file.
    """
    overrides: Dict[str, Any] = {
        INPUT_VERSION: getattr(args, "tytanic_version", None),
        INPUT_ALLOW_PRERELEASES: getattr(args, "allow_prereleases", None),
        INPUT_GITHUB_TOKEN: getattr(args, "github_token", None),
        INPUT_CACHE_DIR: getattr(args, "cache_dir", None),
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    return load_config(overrides, config_file=getattr(args, "config", None))
