"""Subcommand implementations for the ``checksumforge`` CLI."""
