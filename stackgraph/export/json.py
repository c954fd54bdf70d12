"""JSON export for dependency graphs."""

import json
import logging
from typing import Any, Dict, TextIO

import networkx as nx

from stackgraph.graph.model import DependencyGraph

logger = logging.getLogger("stackgraph.export.json")


def to_json_data(graph: DependencyGraph) -> Dict[str, Any]:
    """Return a node-link mapping of ``graph`` plus summary counts."""
    data = nx.readwrite.json_graph.node_link_data(graph.to_networkx(), edges="edges")
    data["summary"] = graph.summary()
    return data


def write_json(graph: DependencyGraph, stream: TextIO) -> None:
    """Write ``graph`` to an open text stream as node-link JSON.

    Args:
        graph: Graph to export.
        stream: Destination text stream.
    """
    json.dump(to_json_data(graph), stream, indent=2, ensure_ascii=False)
    stream.write("\n")


__all__ = ["to_json_data", "write_json"]
