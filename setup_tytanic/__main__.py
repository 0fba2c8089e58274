"""
Entry point for running setup-tytanic as a module.

Usage: python -m setup_tytanic [command] [options]
"""

from setup_tytanic.cli.parser import main

if __name__ == "__main__":
    main()
