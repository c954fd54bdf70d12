"""Vertex and edge types of the resource dependency graph.

Two edge kinds share one vertex set:

* dependency edges, ``from_`` (the dependency) -> ``to`` (the dependent),
  stored on the dependent's ``incoming`` list and the dependency's
  ``outgoing`` list;
* parent edges, ``from_`` (the child) -> ``to`` (the parent), stored on the
  child's ``outgoing`` list only. A parent vertex never sees its children
  through ``incoming``.

Consumers treat both kinds through the same attributes (``to``, ``from_``,
``label``, ``color``, ``kind``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union

import networkx as nx

from stackgraph.resource.state import ResourceState

logger = logging.getLogger("stackgraph.graph.model")


class EdgeKind(str, Enum):
    """Edge kind constants."""

    DEPENDENCY = "dependency"
    PARENT = "parent"


@dataclass(eq=False)
class DependencyEdge:
    """``to`` depends on ``from_``.

    ``from_`` is None only for the synthetic edges returned by
    :meth:`DependencyGraph.roots`.
    """

    to: "Vertex"
    from_: Optional["Vertex"]
    labels: List[str] = field(default_factory=list)
    color: str = ""

    kind = EdgeKind.DEPENDENCY

    @property
    def label(self) -> str:
        """Names of the properties of ``to`` that introduced this dependency."""
        return ", ".join(self.labels)


@dataclass(eq=False)
class ParentEdge:
    """``from_`` is a child of ``to``. Parent edges carry no label."""

    to: "Vertex"
    from_: "Vertex"
    color: str = ""

    kind = EdgeKind.PARENT

    @property
    def label(self) -> str:
        return ""


Edge = Union[DependencyEdge, ParentEdge]


@dataclass(eq=False)
class Vertex:
    """A resource in the graph together with its precomputed edges."""

    resource: ResourceState
    use_short_name: bool = False
    incoming: List[Edge] = field(default_factory=list)
    outgoing: List[Edge] = field(default_factory=list)

    @property
    def urn(self) -> str:
        return self.resource.urn

    @property
    def label(self) -> str:
        return self.resource.display_name(short=self.use_short_name)

    def __repr__(self) -> str:
        return f"Vertex({self.urn!r}, in={len(self.incoming)}, out={len(self.outgoing)})"


class DependencyGraph:
    """Mapping of URNs to vertices, built once from a snapshot.

    The graph is read-only after construction; see
    :func:`stackgraph.graph.builder.build_dependency_graph`.
    """

    def __init__(self, vertices: Dict[str, Vertex]) -> None:
        self._vertices = vertices

    @property
    def vertices(self) -> Dict[str, Vertex]:
        return self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, urn: object) -> bool:
        return urn in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def vertex(self, urn: str) -> Vertex:
        """Return the vertex for ``urn``; raises KeyError when absent."""
        return self._vertices[urn]

    def roots(self) -> List[DependencyEdge]:
        """Return edges pointing at the root set of the graph.

        Every vertex is part of the root set, whatever its in-degree. A
        snapshot may hold several independent resource trees and a writer
        that walks only from declared roots must still reach every vertex.
        """
        return [DependencyEdge(to=vertex, from_=None) for vertex in self._vertices.values()]

    def edges(self, kind: Optional[EdgeKind] = None) -> Iterator[Edge]:
        """Iterate over every real edge once, optionally filtered by kind.

        Each edge lives on exactly one ``outgoing`` list (the dependency's for
        dependency edges, the child's for parent edges).
        """
        for vertex in self._vertices.values():
            for edge in vertex.outgoing:
                if kind is None or edge.kind is kind:
                    yield edge

    def summary(self) -> Dict[str, int]:
        """Return vertex and edge counts."""
        dependency_edges = sum(1 for _ in self.edges(EdgeKind.DEPENDENCY))
        parent_edges = sum(1 for _ in self.edges(EdgeKind.PARENT))
        return {
            "vertex_count": len(self._vertices),
            "dependency_edge_count": dependency_edges,
            "parent_edge_count": parent_edges,
        }

    def to_networkx(self) -> nx.MultiDiGraph:
        """Project the graph into a NetworkX MultiDiGraph keyed by URN.

        Returns:
            nx.MultiDiGraph: Nodes carry ``label``, ``type``, the ``custom``,
            ``protect`` and ``delete`` flags, ``id`` and ``provider``; edges
            carry ``kind``/``labels``/``color``. Parent edges have no labels.
        """
        graph = nx.MultiDiGraph()
        for urn, vertex in self._vertices.items():
            resource = vertex.resource
            graph.add_node(
                urn,
                label=vertex.label,
                type=resource.type_token,
                custom=resource.custom,
                protect=resource.protect,
                delete=resource.delete,
                id=resource.id,
                provider=resource.provider,
            )
        for edge in self.edges():
            if edge.kind is EdgeKind.DEPENDENCY:
                labels = list(edge.labels)
            else:
                labels = []
            graph.add_edge(
                edge.from_.urn,
                edge.to.urn,
                kind=edge.kind.value,
                labels=labels,
                color=edge.color,
            )
        logger.debug(
            "Projected graph to NetworkX: %d nodes, %d edges",
            graph.number_of_nodes(),
            graph.number_of_edges(),
        )
        return graph


__all__ = [
    "DependencyEdge",
    "DependencyGraph",
    "Edge",
    "EdgeKind",
    "ParentEdge",
    "Vertex",
]
