"""
setup-tytanic CLI argument parser.

This module implements the command-line interface using argparse.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("setup-tytanic")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """setup-tytanic command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="setup-tytanic",
            description="setup-tytanic - Install the tytanic test runner for Typst",
            epilog='Use "setup-tytanic COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"setup-tytanic {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./setup-tytanic.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_list_command(subparsers)

        return parser

    @staticmethod
    def _add_version_arguments(parser):
        """Arguments shared by commands that resolve a version."""
        parser.add_argument(
            "--tytanic-version",
            dest="tytanic_version",
            metavar="SPEC",
            help="Version to install: 'latest', an exact version or a semver range "
            "(default: latest)",
        )
        parser.add_argument(
            "--allow-prereleases",
            action="store_true",
            default=None,
            help="Allow pre-release versions to be selected",
        )
        parser.add_argument(
            "--github-token",
            metavar="TOKEN",
            help="GitHub token for authenticated release listing",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Resolve, download and cache tytanic",
            description="Resolve a tytanic version, install it into the tool cache "
            "and add it to PATH",
        )
        self._add_version_arguments(parser)
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Tool cache root (default: RUNNER_TOOL_CACHE or ~/.setup-tytanic/tool-cache)",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Print the exact version a specifier resolves to",
            description="Resolve a version specifier against published releases",
        )
        self._add_version_arguments(parser)

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        parser = subparsers.add_parser(
            "list",
            help="List cached tytanic versions",
            description="List tytanic versions present in the tool cache",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="DIR",
            help="Tool cache root (default: RUNNER_TOOL_CACHE or ~/.setup-tytanic/tool-cache)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Runner debug mode (RUNNER_DEBUG=1) counts as --verbose.
        """
        if args.verbose or os.environ.get("RUNNER_DEBUG") == "1":
            args.verbose = True
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Returns:
            Exit code from command handler
        """
        command_map = {
            "install": "setup_tytanic.cli.commands.install",
            "resolve": "setup_tytanic.cli.commands.resolve",
            "list": "setup_tytanic.cli.commands.list_cached",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
