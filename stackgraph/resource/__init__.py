"""Resource records, URN helpers and snapshot loading."""

from stackgraph.resource.snapshot import (
    FileBackend,
    Snapshot,
    load_snapshot_file,
    parse_deployment,
    parse_snapshot_document,
)
from stackgraph.resource.state import ResourceState
from stackgraph.resource.urn import is_valid_urn, make_urn, urn_name, urn_type

__all__ = [
    "FileBackend",
    "ResourceState",
    "Snapshot",
    "is_valid_urn",
    "load_snapshot_file",
    "make_urn",
    "parse_deployment",
    "parse_snapshot_document",
    "urn_name",
    "urn_type",
]
