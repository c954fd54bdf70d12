"""Configuration schema and loading for stackgraph."""

from .loader import load_export_config
from .schema import (
    DEFAULT_DEPENDENCY_EDGE_COLOR,
    DEFAULT_PARENT_EDGE_COLOR,
    ExportConfig,
    GraphOptions,
)

__all__ = [
    "DEFAULT_DEPENDENCY_EDGE_COLOR",
    "DEFAULT_PARENT_EDGE_COLOR",
    "ExportConfig",
    "GraphOptions",
    "load_export_config",
]
