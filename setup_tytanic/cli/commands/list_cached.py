"""List command implementation."""

import logging

from setup_tytanic.cli.utils import config_from_args
from setup_tytanic.core.cache import ToolCache
from setup_tytanic.toolchain.targets import TOOL_NAME

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    cache = ToolCache(config.cache_dir)

    versions = cache.list_versions(TOOL_NAME)
    if not versions:
        logger.info(f"No cached versions in {cache.root}")
        return 0

    for version in versions:
        print(f"{version}\t{cache.entry_path(TOOL_NAME, version)}")
    return 0
