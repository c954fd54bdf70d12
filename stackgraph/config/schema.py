"""Configuration schema definitions using Pydantic for validation.

``GraphOptions`` controls graph construction; ``ExportConfig`` adds the
output settings used by the ``graph`` command. Both reject unknown keys so
typos in a config file fail early with a clear message.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DEPENDENCY_EDGE_COLOR = "#246C60"
DEFAULT_PARENT_EDGE_COLOR = "#AA6639"


class GraphOptions(BaseModel):
    """Options for building a dependency graph.

    Attributes:
        ignore_dependency_edges: Skip dependency edges entirely.
        ignore_parent_edges: Skip parent/child edges entirely.
        dependency_edge_color: Color attached to every dependency edge.
        parent_edge_color: Color attached to every parent edge.
        short_node_name: Label vertices with the resource name instead of the URN.
    """

    model_config = ConfigDict(extra="forbid")

    ignore_dependency_edges: bool = False
    ignore_parent_edges: bool = False
    dependency_edge_color: str = Field(default=DEFAULT_DEPENDENCY_EDGE_COLOR, min_length=1)
    parent_edge_color: str = Field(default=DEFAULT_PARENT_EDGE_COLOR, min_length=1)
    short_node_name: bool = False

    @field_validator("dependency_edge_color", "parent_edge_color")
    @classmethod
    def _strip_color(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("edge color must not be blank")
        return value


class ExportConfig(BaseModel):
    """Settings for a single graph export.

    Attributes:
        graph: Graph construction options.
        dot_fragment: Raw DOT text inserted at the top of the digraph.
        format: Output format.
        stack: Stack to read; None selects the current stack.
        backend_dir: File-backend state directory; None uses the default.
    """

    model_config = ConfigDict(extra="forbid")

    graph: GraphOptions = Field(default_factory=GraphOptions)
    dot_fragment: str = ""
    format: Literal["dot", "json"] = "dot"
    stack: Optional[str] = None
    backend_dir: Optional[str] = None
