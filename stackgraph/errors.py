"""Exception hierarchy for stackgraph.

Snapshot errors are user-facing and reported by the CLI with a non-zero exit
code. Referential integrity errors signal an inconsistent snapshot and are
never skipped: a graph with silently dropped edges would be misleading.
"""


class StackGraphError(Exception):
    """Base class for all stackgraph errors."""
    pass


class SnapshotLoadError(StackGraphError):
    """Checkpoint file could not be read or does not match the expected schema."""
    pass


class SnapshotNotFoundError(SnapshotLoadError):
    """The selected stack has no recorded deployment state.

    Raised before any graph construction is attempted.
    """

    def __init__(self, stack_name: str, reason: str = "") -> None:
        self.stack_name = stack_name
        message = f"unable to find snapshot for stack {stack_name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ReferentialIntegrityError(StackGraphError, LookupError):
    """A dependency or parent URN does not name any resource in the snapshot."""

    def __init__(self, urn: str, referenced_by: str, relation: str) -> None:
        self.urn = urn
        self.referenced_by = referenced_by
        self.relation = relation
        super().__init__(
            f"{relation} {urn!r} of resource {referenced_by!r} "
            "is not present in the snapshot"
        )


__all__ = [
    "ReferentialIntegrityError",
    "SnapshotLoadError",
    "SnapshotNotFoundError",
    "StackGraphError",
]
