"""Graph export to DOT and JSON."""

from stackgraph.export.dot import to_dot, write_dot
from stackgraph.export.json import to_json_data, write_json
from stackgraph.export.writer import EXPORT_FORMATS, export_graph

__all__ = [
    "EXPORT_FORMATS",
    "export_graph",
    "to_dot",
    "to_json_data",
    "write_dot",
    "write_json",
]
