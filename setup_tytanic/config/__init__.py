"""
Configuration management for setup-tytanic.
"""

from .parser import SetupConfig, load_config, load_config_file, parse_bool

__all__ = ["SetupConfig", "load_config", "load_config_file", "parse_bool"]
