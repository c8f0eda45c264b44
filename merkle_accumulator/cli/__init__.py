"""Command line interface for the Merkle accumulator."""

from merkle_accumulator.cli.main import cli

__all__ = ["cli"]
