"""
setup-tytanic CLI module.

This module provides the command-line interface for setup-tytanic.
"""

from .parser import CLI, main
from . import outputs, utils

__all__ = ["CLI", "main", "outputs", "utils"]
