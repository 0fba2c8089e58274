"""
Install command implementation.

Resolves a tytanic version, installs it into the tool cache, adds it to
PATH and publishes the step outputs.
"""

import logging

from setup_tytanic.cli.outputs import add_path, set_output
from setup_tytanic.cli.utils import config_from_args
from setup_tytanic.core.cache import ToolCache
from setup_tytanic.toolchain.installer import install

logger = logging.getLogger(__name__)

OUTPUT_VERSION = "tytanic-version"
OUTPUT_CACHE_HIT = "cache-hit"


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")
    config = config_from_args(args)

    result = install(
        config.version,
        config.allow_prereleases,
        config.github_token,
        cache=ToolCache(config.cache_dir),
        api_url=config.api_url,
    )

    if result.cache_hit:
        set_output(OUTPUT_CACHE_HIT, str(result.path))

    add_path(result.path)
    set_output(OUTPUT_VERSION, result.version)

    logger.info(f"✅ Tytanic v{result.version} installed!")
    return 0
