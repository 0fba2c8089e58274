"""Subcommand implementations, loaded on demand by the CLI dispatcher."""
