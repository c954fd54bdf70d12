"""Graph and summary command implementations."""

# Commands report failures through the exit code instead of raising.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console

from stackgraph.config import ExportConfig, load_export_config
from stackgraph.errors import StackGraphError
from stackgraph.export import export_graph
from stackgraph.graph import build_dependency_graph
from stackgraph.resource.snapshot import FileBackend, Snapshot, load_snapshot_file

logger = logging.getLogger("stackgraph.cli.graph")

_GRAPH_OPTION_FLAGS = (
    "ignore_dependency_edges",
    "ignore_parent_edges",
    "short_node_name",
)
_GRAPH_OPTION_VALUES = (
    "dependency_edge_color",
    "parent_edge_color",
)


def resolve_export_config(args) -> ExportConfig:
    """Merge the optional config file with command-line overrides.

    Flags only override when set; string options only when given.
    """
    base = load_export_config(getattr(args, "config", None))
    data: Dict[str, Any] = base.model_dump()

    for name in _GRAPH_OPTION_FLAGS:
        if getattr(args, name, False):
            data["graph"][name] = True
    for name in _GRAPH_OPTION_VALUES:
        value = getattr(args, name, None)
        if value is not None:
            data["graph"][name] = value

    for name in ("dot_fragment", "format", "stack", "backend_dir"):
        value = getattr(args, name, None)
        if value is not None:
            data[name] = value

    return ExportConfig.model_validate(data)


def load_snapshot(config: ExportConfig, snapshot_path: Optional[str] = None) -> Snapshot:
    """Load the snapshot named by ``snapshot_path`` or by the configured stack."""
    if snapshot_path:
        return load_snapshot_file(Path(snapshot_path), config.stack)
    backend = FileBackend(config.backend_dir)
    return backend.load_snapshot(config.stack)


def graph_command(args) -> int:
    """Execute graph command.

    Args:
        args: Parsed command-line arguments containing:
            - filename: Output file path
            - stack / snapshot / backend_dir: Snapshot selection
            - graph option overrides and dot_fragment
            - config: Optional TOML/JSON configuration

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    output_path = Path(args.filename)

    try:
        config = resolve_export_config(args)
        snapshot = load_snapshot(config, getattr(args, "snapshot", None))
        logger.info(
            "Loaded %d resources from stack %s (checkpoint version %s, %s)",
            len(snapshot),
            snapshot.stack,
            snapshot.version,
            snapshot.source or "inline document",
        )

        graph = build_dependency_graph(snapshot.resources, config.graph)
        export_graph(graph, output_path, config.dot_fragment, config.format)

    except (ValueError, TypeError) as err:
        logger.error("Invalid configuration: %s", err)
        return 1
    except StackGraphError as err:
        logger.error("%s", err)
        return 1
    except OSError as err:
        logger.error("Failed to write %s: %s", output_path, err)
        return 1

    Console().print(
        f"Wrote stack dependency graph to `{output_path}`", markup=False, soft_wrap=True
    )
    return 0


def summary_command(args) -> int:
    """Print vertex and edge counts for a stack's latest snapshot."""
    try:
        config = resolve_export_config(args)
        snapshot = load_snapshot(config, getattr(args, "snapshot", None))
        graph = build_dependency_graph(snapshot.resources, config.graph)
    except (ValueError, TypeError) as err:
        logger.error("Invalid configuration: %s", err)
        return 1
    except StackGraphError as err:
        logger.error("%s", err)
        return 1

    summary = graph.summary()
    console = Console()
    console.print(f"Stack: {snapshot.stack}", markup=False, soft_wrap=True)
    if snapshot.source is not None:
        console.print(f"Snapshot: {snapshot.source}", markup=False, soft_wrap=True)
    console.print(f"Checkpoint version: {snapshot.version}", markup=False)
    console.print(f"Resources: {summary['vertex_count']}", markup=False)
    console.print(f"Dependency edges: {summary['dependency_edge_count']}", markup=False)
    console.print(f"Parent edges: {summary['parent_edge_count']}", markup=False)
    return 0
