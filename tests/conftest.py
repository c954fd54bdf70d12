"""Shared fixtures for stackgraph tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from stackgraph.resource.state import ResourceState
from stackgraph.resource.urn import make_urn


def urn_for(name: str, type_token: str = "test:index:Resource") -> str:
    """Return a URN in the ``dev`` stack of the ``proj`` project."""
    return make_urn("dev", "proj", type_token, name)


ResourceFactory = Callable[..., ResourceState]


@pytest.fixture
def urn() -> Callable[[str], str]:
    """Map a short test name to its full URN."""
    return urn_for


@pytest.fixture
def make_resource() -> ResourceFactory:
    """Factory for ResourceState records referencing each other by short name."""

    def _make(
        name: str,
        deps: Optional[List[str]] = None,
        prop_deps: Optional[Dict[str, List[str]]] = None,
        parent: Optional[str] = None,
    ) -> ResourceState:
        return ResourceState(
            urn=urn_for(name),
            dependencies=[urn_for(d) for d in deps or []],
            property_dependencies={
                prop: [urn_for(d) for d in targets]
                for prop, targets in (prop_deps or {}).items()
            },
            parent=urn_for(parent) if parent else "",
        )

    return _make


@pytest.fixture
def scenario_resources(make_resource: ResourceFactory) -> List[ResourceState]:
    """A (no deps), B (depends on A via "input"), C (child of B)."""
    return [
        make_resource("a"),
        make_resource("b", deps=["a"], prop_deps={"input": ["a"]}),
        make_resource("c", parent="b"),
    ]


def checkpoint_document(resources: List[ResourceState], stack: str = "dev") -> dict:
    """Serialize resources into a file-backend checkpoint document."""
    return {
        "version": 3,
        "checkpoint": {
            "stack": stack,
            "latest": {
                "manifest": {"time": "2024-01-01T00:00:00Z"},
                "resources": [r.model_dump(by_alias=True) for r in resources],
            },
        },
    }


@pytest.fixture
def backend_dir(tmp_path: Path, scenario_resources: List[ResourceState]) -> Path:
    """A file-backend directory holding one deployed stack named ``dev``."""
    stacks = tmp_path / "state" / "stacks"
    stacks.mkdir(parents=True)
    (stacks / "dev.json").write_text(
        json.dumps(checkpoint_document(scenario_resources)), encoding="utf-8"
    )
    return tmp_path / "state"


@pytest.fixture
def checkpoint() -> Callable[..., dict]:
    """Build checkpoint documents from resource lists."""
    return checkpoint_document
