"""Public graph API surface."""

from stackgraph.graph.builder import build_dependency_graph
from stackgraph.graph.model import (
    DependencyEdge,
    DependencyGraph,
    Edge,
    EdgeKind,
    ParentEdge,
    Vertex,
)

__all__ = [
    "DependencyEdge",
    "DependencyGraph",
    "Edge",
    "EdgeKind",
    "ParentEdge",
    "Vertex",
    "build_dependency_graph",
]
