"""
Resolve command implementation.

Prints the exact version a specifier resolves to without installing it.
"""

import logging

from setup_tytanic.cli.utils import config_from_args
from setup_tytanic.toolchain.installer import resolve

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)

    version = resolve(
        config.version,
        config.allow_prereleases,
        config.github_token,
        api_url=config.api_url,
    )

    print(version)
    return 0
