"""Construction of a DependencyGraph from snapshot resources."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from stackgraph.config.schema import GraphOptions
from stackgraph.errors import ReferentialIntegrityError
from stackgraph.graph.model import DependencyEdge, DependencyGraph, ParentEdge, Vertex
from stackgraph.resource.state import ResourceState

logger = logging.getLogger("stackgraph.graph.builder")


def _resolve(vertices: Dict[str, Vertex], urn: str, referenced_by: str, relation: str) -> Vertex:
    try:
        return vertices[urn]
    except KeyError:
        raise ReferentialIntegrityError(urn, referenced_by, relation) from None


def _dependency_blame(resource: ResourceState) -> Dict[str, List[str]]:
    """Invert property dependencies into URN -> [property names]."""
    blame: Dict[str, List[str]] = {}
    for prop, deps in resource.property_dependencies.items():
        for dep in deps:
            names = blame.setdefault(dep, [])
            # A property listing the same URN twice still blames it once.
            if prop not in names:
                names.append(prop)
    return blame


def _add_dependency_edges(
    vertex: Vertex, vertices: Dict[str, Vertex], color: str
) -> int:
    blame = _dependency_blame(vertex.resource)
    added = 0
    # Dependencies are recorded on the dependent; the edge is mirrored onto
    # the dependency's outgoing list so both ends can be walked.
    for dep in vertex.resource.dependencies:
        source = _resolve(vertices, dep, vertex.urn, "dependency")
        edge = DependencyEdge(
            to=vertex,
            from_=source,
            labels=list(blame.get(dep, [])),
            color=color,
        )
        vertex.incoming.append(edge)
        source.outgoing.append(edge)
        added += 1
    return added


def _add_parent_edge(vertex: Vertex, vertices: Dict[str, Vertex], color: str) -> int:
    parent = vertex.resource.parent
    if not parent:
        return 0
    parent_vertex = _resolve(vertices, parent, vertex.urn, "parent")
    vertex.outgoing.append(ParentEdge(to=parent_vertex, from_=vertex, color=color))
    return 1


def build_dependency_graph(
    resources: Iterable[ResourceState], options: Optional[GraphOptions] = None
) -> DependencyGraph:
    """Build a dependency graph, allocating one vertex per resource.

    Args:
        resources: Snapshot resources in checkpoint order.
        options: Construction options; defaults apply when omitted.

    Returns:
        DependencyGraph: Fully populated, read-only graph.

    Raises:
        ReferentialIntegrityError: If a dependency or parent URN names no
            resource in ``resources``.
    """
    opts = options or GraphOptions()

    vertices: Dict[str, Vertex] = {}
    for resource in resources:
        if resource.urn in vertices:
            logger.warning("Duplicate resource URN in snapshot, keeping the last: %s", resource.urn)
        vertices[resource.urn] = Vertex(resource=resource, use_short_name=opts.short_node_name)

    dependency_edges = 0
    parent_edges = 0
    for vertex in vertices.values():
        if not opts.ignore_dependency_edges:
            dependency_edges += _add_dependency_edges(vertex, vertices, opts.dependency_edge_color)
        # The parentage graph sits alongside the dependency graph with its own color.
        if not opts.ignore_parent_edges:
            parent_edges += _add_parent_edge(vertex, vertices, opts.parent_edge_color)

    logger.info(
        "Built dependency graph: %d vertices, %d dependency edges, %d parent edges",
        len(vertices),
        dependency_edges,
        parent_edges,
    )
    return DependencyGraph(vertices)


__all__ = ["build_dependency_graph"]
