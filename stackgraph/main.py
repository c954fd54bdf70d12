"""Main CLI entry point for stackgraph.

Provides commands: graph, summary
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from stackgraph.cli.graph import graph_command, summary_command
from stackgraph.config.schema import (
    DEFAULT_DEPENDENCY_EDGE_COLOR,
    DEFAULT_PARENT_EDGE_COLOR,
)
from stackgraph.export.writer import EXPORT_FORMATS

logger = logging.getLogger("stackgraph.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def _add_snapshot_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-s",
        "--stack",
        help="The name of the stack to operate on. Defaults to the current stack",
    )
    parser.add_argument(
        "--snapshot",
        help="Read the deployment from this checkpoint or stack export file instead of the backend",
    )
    parser.add_argument(
        "--backend-dir",
        help=(
            "File-backend state directory holding stacks/<stack>.json "
            "(defaults to $STACKGRAPH_BACKEND_DIR or ~/.pulumi)"
        ),
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional export configuration. Can be a path to a TOML/JSON file "
            "or an inline TOML/JSON string. Command-line flags take precedence."
        ),
    )


def _add_graph_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--ignore-parent-edges",
        action="store_true",
        help="Ignores edges introduced by parent/child resource relationships",
    )
    parser.add_argument(
        "--ignore-dependency-edges",
        action="store_true",
        help="Ignores edges introduced by dependency resource relationships",
    )
    parser.add_argument(
        "--dependency-edge-color",
        help=f"Sets the color of dependency edges in the graph (default: {DEFAULT_DEPENDENCY_EDGE_COLOR})",
    )
    parser.add_argument(
        "--parent-edge-color",
        help=f"Sets the color of parent edges in the graph (default: {DEFAULT_PARENT_EDGE_COLOR})",
    )
    parser.add_argument(
        "--short-node-name",
        action="store_true",
        help="Sets the resource name as the node label for each node of the graph",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="stackgraph",
        description="Stackgraph - Export a stack's resource dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    graph_parser = subparsers.add_parser(
        "graph",
        help="Export a stack's dependency graph to a file",
        description=(
            "Export a stack's dependency graph to a file.\n\n"
            "The graph is built from the stack's most recent deployment and is\n"
            "written in the DOT format unless --format json is given."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    graph_parser.add_argument(
        "filename",
        help="Output file",
    )
    _add_snapshot_arguments(graph_parser)
    _add_graph_option_arguments(graph_parser)
    graph_parser.add_argument(
        "--dot-fragment",
        help=(
            "An optional DOT fragment that will be inserted at the top of the digraph element. "
            "This can be used for styling the graph elements, setting graph properties etc."
        ),
    )
    graph_parser.add_argument(
        "-f",
        "--format",
        choices=list(EXPORT_FORMATS),
        help="Output format (default: dot)",
    )

    summary_parser = subparsers.add_parser(
        "summary",
        help="Print resource and edge counts for a stack",
    )
    _add_snapshot_arguments(summary_parser)
    _add_graph_option_arguments(summary_parser)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "graph":
        return graph_command(args)
    elif args.command == "summary":
        return summary_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
