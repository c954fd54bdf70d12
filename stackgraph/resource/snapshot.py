"""Deployment snapshot loading.

Two on-disk shapes are understood:

* file-backend checkpoints, ``{"version": 3, "checkpoint": {"stack": ...,
  "latest": {<deployment>}}}``, stored under
  ``<backend_dir>/stacks/[<project>/]<stack>.json``;
* ``stack export`` documents, ``{"version": 3, "deployment": {<deployment>}}``.

A deployment carries an ordered ``resources`` array. A checkpoint whose
``latest`` deployment is missing belongs to a stack that was never deployed;
that case raises :class:`SnapshotNotFoundError`.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from stackgraph.errors import SnapshotLoadError, SnapshotNotFoundError
from stackgraph.resource.state import ResourceState

logger = logging.getLogger("stackgraph.resource.snapshot")

DEFAULT_BACKEND_DIR = Path("~/.pulumi")
BACKEND_DIR_ENV = "STACKGRAPH_BACKEND_DIR"
STACK_ENV = "STACKGRAPH_STACK"


@dataclass
class Snapshot:
    """Ordered resource records of one deployment."""

    stack: str
    resources: List[ResourceState] = field(default_factory=list)
    version: int = 3
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.resources)


def parse_deployment(
    deployment: Dict[str, Any], stack: str, version: int = 3, source: Optional[Path] = None
) -> Snapshot:
    """Build a Snapshot from a deployment mapping.

    Args:
        deployment: Mapping with a ``resources`` array.
        stack: Stack name used in error messages.
        version: Checkpoint schema version.
        source: File the deployment was read from, if any.

    Returns:
        Snapshot with resources in checkpoint order.

    Raises:
        SnapshotLoadError: If a resource record fails validation.
    """
    if not isinstance(deployment, dict):
        raise SnapshotLoadError(f"deployment for stack {stack!r} must be an object")

    raw_resources = deployment.get("resources") or []
    if not isinstance(raw_resources, list):
        raise SnapshotLoadError(f"deployment for stack {stack!r} has a non-list 'resources' field")

    resources: List[ResourceState] = []
    for index, raw in enumerate(raw_resources):
        try:
            resources.append(ResourceState.model_validate(raw))
        except ValidationError as err:
            raise SnapshotLoadError(
                f"invalid resource #{index} in stack {stack!r}: {err}"
            ) from err

    logger.debug("Parsed %d resources for stack %s", len(resources), stack)
    return Snapshot(stack=stack, resources=resources, version=version, source=source)


def parse_snapshot_document(data: Any, stack: str, source: Optional[Path] = None) -> Snapshot:
    """Parse a checkpoint or stack export document.

    Raises:
        SnapshotNotFoundError: If the checkpoint records no deployment.
        SnapshotLoadError: If the document shape is not recognised.
    """
    if not isinstance(data, dict):
        raise SnapshotLoadError("top-level snapshot document must be an object")

    version = data.get("version", 3)

    if "deployment" in data:
        deployment = data["deployment"]
        if deployment is None:
            raise SnapshotNotFoundError(stack, "export document has no deployment")
        return parse_deployment(deployment, stack, version, source)

    if "checkpoint" in data:
        checkpoint = data["checkpoint"] or {}
        if not isinstance(checkpoint, dict):
            raise SnapshotLoadError(f"checkpoint for stack {stack!r} must be an object")
        stack = checkpoint.get("stack") or stack
        latest = checkpoint.get("latest")
        if latest is None:
            raise SnapshotNotFoundError(stack, "stack has never been deployed")
        return parse_deployment(latest, stack, version, source)

    raise SnapshotLoadError(
        "unrecognised snapshot document: expected a 'checkpoint' or 'deployment' key"
    )


def load_snapshot_file(path: Union[str, Path], stack: Optional[str] = None) -> Snapshot:
    """Load a snapshot from a checkpoint or export JSON file.

    Args:
        path: File to read.
        stack: Stack name for messages; defaults to the file stem.

    Returns:
        Parsed Snapshot.
    """
    path = Path(path)
    stack_name = stack or path.stem
    if not path.is_file():
        raise SnapshotNotFoundError(stack_name, f"no checkpoint at {path}")

    logger.info("Loading snapshot from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise SnapshotLoadError(f"failed to parse {path}: {err}") from err
    except OSError as err:
        raise SnapshotLoadError(f"failed to read {path}: {err}") from err

    return parse_snapshot_document(data, stack_name, source=path)


class FileBackend:
    """Locates stack checkpoints in a file-backend state directory."""

    def __init__(self, backend_dir: Optional[Union[str, Path]] = None) -> None:
        if backend_dir is None:
            backend_dir = os.environ.get(BACKEND_DIR_ENV) or DEFAULT_BACKEND_DIR
        self.backend_dir = Path(backend_dir).expanduser()
        self.stacks_dir = self.backend_dir / "stacks"
        logger.debug("File backend rooted at %s", self.backend_dir)

    def list_stacks(self) -> List[str]:
        """Return stack names, qualified as ``project/stack`` when nested."""
        if not self.stacks_dir.is_dir():
            return []
        names = []
        for path in sorted(self.stacks_dir.rglob("*.json")):
            rel = path.relative_to(self.stacks_dir).with_suffix("")
            names.append(rel.as_posix())
        return names

    def checkpoint_path(self, stack: str) -> Optional[Path]:
        """Resolve a stack name to its checkpoint file.

        Accepts ``stack`` or ``project/stack``; a bare name also matches a
        checkpoint nested under a single project directory.
        """
        direct = self.stacks_dir / f"{stack}.json"
        if direct.is_file():
            return direct

        if "/" not in stack and self.stacks_dir.is_dir():
            matches = sorted(self.stacks_dir.glob(f"*/{stack}.json"))
            if len(matches) > 1:
                raise SnapshotLoadError(
                    f"stack name {stack!r} is ambiguous; qualify it as <project>/{stack}"
                )
            if matches:
                return matches[0]
        return None

    def resolve_stack_name(self, stack: Optional[str]) -> str:
        """Pick the stack to operate on.

        Order: explicit name, the ``STACKGRAPH_STACK`` environment variable,
        then the only stack in the backend.
        """
        if stack:
            return stack
        env_stack = os.environ.get(STACK_ENV)
        if env_stack:
            return env_stack

        stacks = self.list_stacks()
        if len(stacks) == 1:
            logger.info("Using the only stack in %s: %s", self.stacks_dir, stacks[0])
            return stacks[0]
        if not stacks:
            raise SnapshotNotFoundError("", f"no stacks found under {self.stacks_dir}")
        raise SnapshotLoadError(
            f"multiple stacks found ({', '.join(stacks)}); select one with --stack"
        )

    def load_snapshot(self, stack: Optional[str] = None) -> Snapshot:
        """Load the latest snapshot for a stack.

        Raises:
            SnapshotNotFoundError: If the stack has no checkpoint or no deployment.
            SnapshotLoadError: If the checkpoint cannot be parsed.
        """
        stack_name = self.resolve_stack_name(stack)
        path = self.checkpoint_path(stack_name)
        if path is None:
            raise SnapshotNotFoundError(stack_name, f"no checkpoint under {self.stacks_dir}")
        return load_snapshot_file(path, stack_name)


__all__ = [
    "FileBackend",
    "Snapshot",
    "load_snapshot_file",
    "parse_deployment",
    "parse_snapshot_document",
]
