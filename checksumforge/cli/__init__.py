"""Checksumforge CLI — Typer-based command-line interface.

Provides the ``checksumforge`` command with subcommands for generating
checksum files, cleaning an output directory, inspecting the recorded
state, and listing the supported algorithms.

All output uses Rich for formatted terminal display.
"""
