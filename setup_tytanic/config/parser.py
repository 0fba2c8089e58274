"""Input configuration for setup-tytanic.

Settings are read from, in decreasing precedence:
1. Command-line flags
2. Action inputs passed by the runner as INPUT_<NAME> environment variables
3. An optional setup-tytanic.yaml file
4. Built-in defaults
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from setup_tytanic.core.directory import get_tool_cache_dir
from setup_tytanic.core.exceptions import ConfigError
from setup_tytanic.releases.catalog import GITHUB_API_URL
from setup_tytanic.releases.resolver import LATEST

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "setup-tytanic.yaml"

# Input names as declared by the action
INPUT_VERSION = "tytanic-version"
INPUT_ALLOW_PRERELEASES = "allow-prereleases"
INPUT_GITHUB_TOKEN = "github-token"
INPUT_CACHE_DIR = "cache-dir"

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


@dataclass
class SetupConfig:
    """Resolved inputs for one run."""

    version: str = LATEST
    allow_prereleases: bool = False
    github_token: Optional[str] = None
    cache_dir: Optional[Path] = None
    api_url: str = GITHUB_API_URL


def input_env_name(name: str) -> str:
    """
    Environment variable the runner uses for an action input.

    Example:
        >>> input_env_name("tytanic-version")
        'INPUT_TYTANIC-VERSION'
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


def parse_bool(name: str, value: Any) -> bool:
    """
    Parse a boolean input the way GitHub Actions does.

    Raises:
        ConfigError: If value is not one of the YAML 1.2 core boolean spellings
    """
    if isinstance(value, bool):
        return value

    text = str(value).strip()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False

    raise ConfigError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        f"Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def load_config_file(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load the YAML configuration file.

    Returns:
        Mapping of input names to values (empty if the file is optional and absent)

    Raises:
        ConfigError: If the file is required and missing, or is not a YAML mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping of inputs")

    unknown = set(data) - {
        INPUT_VERSION,
        INPUT_ALLOW_PRERELEASES,
        INPUT_GITHUB_TOKEN,
        INPUT_CACHE_DIR,
    }
    if unknown:
        logger.warning(f"Ignoring unknown keys in {config_file}: {sorted(unknown)}")

    return data


def _lookup(
    name: str,
    overrides: Mapping[str, Any],
    environ: Mapping[str, str],
    file_data: Mapping[str, Any],
) -> Any:
    """First non-empty value for an input, by precedence."""
    candidates = (
        overrides.get(name),
        environ.get(input_env_name(name)),
        file_data.get(name),
    )
    for value in candidates:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def load_config(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> SetupConfig:
    """
    Assemble the run configuration.

    Args:
        overrides: Values from command-line flags, keyed by input name
        environ: Environment (default: os.environ)
        config_file: YAML file (default: ./setup-tytanic.yaml if present)

    Returns:
        SetupConfig

    Raises:
        ConfigError: If an input is invalid

    Example:
        >>> config = load_config(environ={"INPUT_TYTANIC-VERSION": "^0.2"})
        >>> config.version
        '^0.2'
    """
    overrides = overrides or {}
    environ = os.environ if environ is None else environ

    if config_file is not None:
        file_data = load_config_file(Path(config_file), required=True)
    else:
        file_data = load_config_file(Path.cwd() / DEFAULT_CONFIG_FILE)

    version = _lookup(INPUT_VERSION, overrides, environ, file_data)
    allow = _lookup(INPUT_ALLOW_PRERELEASES, overrides, environ, file_data)
    token = _lookup(INPUT_GITHUB_TOKEN, overrides, environ, file_data)
    cache_dir = _lookup(INPUT_CACHE_DIR, overrides, environ, file_data)

    config = SetupConfig(
        version=str(version).strip() if version is not None else LATEST,
        allow_prereleases=parse_bool(INPUT_ALLOW_PRERELEASES, allow)
        if allow is not None
        else False,
        github_token=str(token) if token is not None else None,
        cache_dir=Path(cache_dir)
        if cache_dir is not None
        else get_tool_cache_dir(environ),
    )

    logger.debug(
        f"Configuration: version={config.version} "
        f"allow_prereleases={config.allow_prereleases} "
        f"authenticated={config.github_token is not None} "
        f"cache_dir={config.cache_dir}"
    )
    return config
