"""Command implementations for the stackgraph CLI."""

from stackgraph.cli.graph import graph_command, summary_command

__all__ = ["graph_command", "summary_command"]
