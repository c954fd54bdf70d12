"""File-level export of a dependency graph."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from stackgraph.export.dot import write_dot
from stackgraph.export.json import write_json
from stackgraph.graph.model import DependencyGraph

logger = logging.getLogger("stackgraph.export.writer")

EXPORT_FORMATS = ("dot", "json")


def export_graph(
    graph: DependencyGraph,
    output_path: Union[str, Path],
    dot_fragment: Optional[str] = None,
    fmt: str = "dot",
) -> Path:
    """Write ``graph`` to ``output_path``.

    The destination is opened once and closed on every exit path; I/O errors
    propagate to the caller unchanged.

    Args:
        graph: Graph to export.
        output_path: Destination file.
        dot_fragment: Raw DOT text for the top of the digraph (DOT only).
        fmt: ``dot`` or ``json``.

    Returns:
        Path: The written file.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")

    output_path = Path(output_path)
    logger.info("Exporting graph to %s: %s", fmt.upper(), output_path)

    with open(output_path, "w", encoding="utf-8") as f:
        if fmt == "dot":
            write_dot(graph, f, dot_fragment)
        else:
            if dot_fragment:
                logger.warning("DOT fragment ignored for %s export", fmt)
            write_json(graph, f)

    summary = graph.summary()
    logger.info(
        "%s export completed: %d vertices, %d dependency edges, %d parent edges",
        fmt.upper(),
        summary["vertex_count"],
        summary["dependency_edge_count"],
        summary["parent_edge_count"],
    )
    return output_path


__all__ = ["EXPORT_FORMATS", "export_graph"]
