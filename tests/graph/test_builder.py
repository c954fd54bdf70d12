"""Tests for dependency graph construction."""

import pytest

from stackgraph.config import GraphOptions
from stackgraph.errors import ReferentialIntegrityError
from stackgraph.graph import DependencyEdge, EdgeKind, ParentEdge, build_dependency_graph


def _edge_signature(graph):
    return sorted(
        (edge.kind.value, edge.from_.urn, edge.to.urn, edge.label, edge.color)
        for edge in graph.edges()
    )


def test_independent_resources_have_no_edges(make_resource) -> None:
    """Resources without references become isolated vertices."""
    resources = [make_resource(name) for name in ("a", "b", "c", "d")]

    graph = build_dependency_graph(resources)

    assert len(graph) == 4
    assert list(graph.edges()) == []
    assert len(graph.roots()) == 4
    for vertex in graph:
        assert vertex.incoming == []
        assert vertex.outgoing == []


def test_scenario_dependency_and_parent_edges(scenario_resources, urn) -> None:
    """A <- B (via "input") and C whose parent is B."""
    graph = build_dependency_graph(scenario_resources)

    a, b, c = graph.vertex(urn("a")), graph.vertex(urn("b")), graph.vertex(urn("c"))

    assert len(graph) == 3
    assert len(graph.roots()) == 3

    dep_edges = list(graph.edges(EdgeKind.DEPENDENCY))
    assert len(dep_edges) == 1
    edge = dep_edges[0]
    assert isinstance(edge, DependencyEdge)
    assert edge.from_ is a
    assert edge.to is b
    assert edge.labels == ["input"]
    assert edge.label == "input"
    assert a.outgoing == [edge]
    assert b.incoming == [edge]

    parent_edges = list(graph.edges(EdgeKind.PARENT))
    assert len(parent_edges) == 1
    parent_edge = parent_edges[0]
    assert isinstance(parent_edge, ParentEdge)
    assert parent_edge.from_ is c
    assert parent_edge.to is b
    assert parent_edge.label == ""
    assert parent_edge in c.outgoing


def test_parent_edge_is_not_recorded_on_parent(scenario_resources, urn) -> None:
    """The parent vertex never sees its children through incoming edges."""
    graph = build_dependency_graph(scenario_resources)
    b = graph.vertex(urn("b"))

    assert all(edge.kind is EdgeKind.DEPENDENCY for edge in b.incoming)
    assert all(edge.from_.urn != urn("c") for edge in b.incoming)


def test_two_properties_blaming_same_dependency_share_one_edge(make_resource, urn) -> None:
    """One edge per dependency, labeled with every property that caused it."""
    resources = [
        make_resource("db"),
        make_resource(
            "app",
            deps=["db"],
            prop_deps={"host": ["db"], "port": ["db"]},
        ),
    ]

    graph = build_dependency_graph(resources)

    app = graph.vertex(urn("app"))
    assert len(app.incoming) == 1
    assert sorted(app.incoming[0].labels) == ["host", "port"]
    assert app.incoming[0].label in ("host, port", "port, host")


def test_dependency_without_property_detail_has_empty_label(make_resource, urn) -> None:
    """Dependencies not blamed on any property carry no labels."""
    resources = [make_resource("a"), make_resource("b", deps=["a"])]

    graph = build_dependency_graph(resources)

    edge = graph.vertex(urn("b")).incoming[0]
    assert edge.labels == []
    assert edge.label == ""


def test_property_dependency_not_in_dependencies_adds_no_edge(make_resource, urn) -> None:
    """Only the dependencies list creates edges; blame only labels them."""
    resources = [
        make_resource("a"),
        make_resource("b"),
        make_resource("c", deps=["a"], prop_deps={"x": ["a", "b"]}),
    ]

    graph = build_dependency_graph(resources)

    incoming = graph.vertex(urn("c")).incoming
    assert [edge.from_.urn for edge in incoming] == [urn("a")]
    assert graph.vertex(urn("b")).outgoing == []


def test_dependency_order_is_preserved(make_resource, urn) -> None:
    """Incoming edges follow the order of the dependencies list."""
    resources = [
        make_resource("x"),
        make_resource("y"),
        make_resource("z"),
        make_resource("w", deps=["z", "x", "y"]),
    ]

    graph = build_dependency_graph(resources)

    assert [e.from_.urn for e in graph.vertex(urn("w")).incoming] == [
        urn("z"),
        urn("x"),
        urn("y"),
    ]


def test_ignore_dependency_edges(scenario_resources) -> None:
    """No dependency edges are built when they are ignored."""
    graph = build_dependency_graph(
        scenario_resources, GraphOptions(ignore_dependency_edges=True)
    )

    assert list(graph.edges(EdgeKind.DEPENDENCY)) == []
    assert len(list(graph.edges(EdgeKind.PARENT))) == 1
    assert all(not vertex.incoming for vertex in graph)


def test_ignore_parent_edges(scenario_resources) -> None:
    """No parent edges are built when they are ignored."""
    graph = build_dependency_graph(scenario_resources, GraphOptions(ignore_parent_edges=True))

    assert list(graph.edges(EdgeKind.PARENT)) == []
    assert len(list(graph.edges(EdgeKind.DEPENDENCY))) == 1


def test_ignore_both_edge_kinds_keeps_vertices(scenario_resources) -> None:
    graph = build_dependency_graph(
        scenario_resources,
        GraphOptions(ignore_dependency_edges=True, ignore_parent_edges=True),
    )

    assert len(graph) == 3
    assert list(graph.edges()) == []
    assert len(graph.roots()) == 3


def test_edge_colors_follow_options(scenario_resources) -> None:
    """Each edge kind carries its configured color verbatim."""
    options = GraphOptions(dependency_edge_color="blue", parent_edge_color="red")

    graph = build_dependency_graph(scenario_resources, options)

    assert {e.color for e in graph.edges(EdgeKind.DEPENDENCY)} == {"blue"}
    assert {e.color for e in graph.edges(EdgeKind.PARENT)} == {"red"}


def test_default_edge_colors(scenario_resources) -> None:
    graph = build_dependency_graph(scenario_resources)

    assert {e.color for e in graph.edges(EdgeKind.DEPENDENCY)} == {"#246C60"}
    assert {e.color for e in graph.edges(EdgeKind.PARENT)} == {"#AA6639"}


def test_roots_cover_every_vertex_regardless_of_in_degree(scenario_resources) -> None:
    """Root edges have no source and point at each vertex exactly once."""
    graph = build_dependency_graph(scenario_resources)

    roots = graph.roots()

    assert len(roots) == len(graph)
    assert all(root.from_ is None for root in roots)
    assert {id(root.to) for root in roots} == {id(v) for v in graph}


def test_building_twice_is_deterministic(scenario_resources) -> None:
    """Two builds over the same snapshot agree on counts, labels and colors."""
    first = build_dependency_graph(scenario_resources)
    second = build_dependency_graph(scenario_resources)

    assert first.summary() == second.summary()
    assert _edge_signature(first) == _edge_signature(second)


def test_missing_dependency_fails_loudly(make_resource, urn) -> None:
    """A dependency on an unknown URN is an integrity violation."""
    resources = [make_resource("b", deps=["ghost"])]

    with pytest.raises(ReferentialIntegrityError) as excinfo:
        build_dependency_graph(resources)

    assert excinfo.value.urn == urn("ghost")
    assert excinfo.value.referenced_by == urn("b")
    assert excinfo.value.relation == "dependency"


def test_missing_parent_fails_loudly(make_resource, urn) -> None:
    resources = [make_resource("child", parent="ghost")]

    with pytest.raises(ReferentialIntegrityError) as excinfo:
        build_dependency_graph(resources)

    assert excinfo.value.relation == "parent"
    assert isinstance(excinfo.value, LookupError)


def test_missing_references_are_not_checked_when_edges_ignored(make_resource) -> None:
    """Ignored edge kinds are never resolved."""
    resources = [make_resource("b", deps=["ghost"], parent="ghost")]

    graph = build_dependency_graph(
        resources,
        GraphOptions(ignore_dependency_edges=True, ignore_parent_edges=True),
    )

    assert len(graph) == 1


def test_short_node_name_sets_vertex_labels(scenario_resources, urn) -> None:
    graph = build_dependency_graph(scenario_resources, GraphOptions(short_node_name=True))

    assert graph.vertex(urn("a")).label == "a"


def test_full_urn_is_default_vertex_label(scenario_resources, urn) -> None:
    graph = build_dependency_graph(scenario_resources)

    assert graph.vertex(urn("a")).label == urn("a")
