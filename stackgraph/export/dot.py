"""DOT export for dependency graphs."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, TextIO, Tuple

from stackgraph.graph.model import DependencyGraph, Edge, Vertex

logger = logging.getLogger("stackgraph.export.dot")

VERTEX_ID_PREFIX = "Resource"
INDENT = "    "


def quote(value: str) -> str:
    """Return ``value`` as a double-quoted DOT string."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class _VertexIds:
    """Assigns ``Resource<n>`` identifiers in first-seen order."""

    def __init__(self) -> None:
        self._ids: Dict[Vertex, str] = {}

    def __getitem__(self, vertex: Vertex) -> str:
        vid = self._ids.get(vertex)
        if vid is None:
            vid = f"{VERTEX_ID_PREFIX}{len(self._ids)}"
            self._ids[vertex] = vid
        return vid


def _vertex_line(vid: str, vertex: Vertex) -> str:
    return f"{INDENT}{vid} [label={quote(vertex.label)}];\n"


def _edge_line(from_id: str, to_id: str, edge: Edge) -> str:
    attrs: List[str] = []
    if edge.color:
        attrs.append(f"color = {quote(edge.color)}")
    if edge.label:
        attrs.append(f"label = {quote(edge.label)}")
    suffix = f" [{', '.join(attrs)}]" if attrs else ""
    return f"{INDENT}{from_id} -> {to_id}{suffix};\n"


def iter_dot_lines(graph: DependencyGraph, dot_fragment: Optional[str] = None) -> Iterator[str]:
    """Yield the DOT document for ``graph`` line by line.

    Vertices are visited depth-first from the graph's root edges; each vertex
    is emitted once, followed by its outgoing edges.

    Args:
        graph: Graph to render.
        dot_fragment: Raw DOT text inserted verbatim after the opening line.
    """
    yield "strict digraph {\n"
    if dot_fragment:
        yield dot_fragment if dot_fragment.endswith("\n") else dot_fragment + "\n"

    ids = _VertexIds()
    done = set()

    for root in graph.roots():
        start = root.to
        if start in done:
            continue
        done.add(start)
        yield _vertex_line(ids[start], start)

        stack: List[Tuple[Vertex, Iterator[Edge]]] = [(start, iter(start.outgoing))]
        while stack:
            vertex, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                continue
            target = edge.to
            yield _edge_line(ids[vertex], ids[target], edge)
            if target not in done:
                done.add(target)
                yield _vertex_line(ids[target], target)
                stack.append((target, iter(target.outgoing)))

    yield "}\n"


def write_dot(graph: DependencyGraph, stream: TextIO, dot_fragment: Optional[str] = None) -> None:
    """Write ``graph`` to an open text stream in DOT format."""
    logger.debug("Writing DOT for %d vertices", len(graph))
    stream.writelines(iter_dot_lines(graph, dot_fragment))


def to_dot(graph: DependencyGraph, dot_fragment: Optional[str] = None) -> str:
    """Return the DOT document for ``graph`` as a string."""
    return "".join(iter_dot_lines(graph, dot_fragment))


__all__ = ["iter_dot_lines", "quote", "to_dot", "write_dot"]
