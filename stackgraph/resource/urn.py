"""Helpers for Pulumi-style resource URNs.

A URN has the shape::

    urn:pulumi:<stack>::<project>::<qualified type>::<name>

The qualified type may carry parent types joined by ``$`` and the name may
itself contain ``::``, so only the first three separators are significant.
"""

from __future__ import annotations

from typing import List, Optional

URN_PREFIX = "urn:pulumi:"
URN_NAME_DELIMITER = "::"
URN_TYPE_DELIMITER = "$"


def _split_urn(urn: str) -> Optional[List[str]]:
    """Split a URN into [stack, project, qualified type, name].

    Returns:
        The four components, or None when the URN is malformed.
    """
    if not urn.startswith(URN_PREFIX):
        return None
    parts = urn[len(URN_PREFIX):].split(URN_NAME_DELIMITER, 3)
    if len(parts) != 4:
        return None
    return parts


def is_valid_urn(urn: str) -> bool:
    """Return True when ``urn`` has the four expected components."""
    parts = _split_urn(urn)
    return parts is not None and all(parts[:3])


def urn_name(urn: str) -> str:
    """Return the short resource name carried by a URN.

    Args:
        urn: Full resource URN.

    Returns:
        Everything after the third ``::`` separator, or the URN unchanged
        when it is malformed.
    """
    parts = _split_urn(urn)
    if parts is None:
        return urn
    return parts[3]


def urn_qualified_type(urn: str) -> str:
    """Return the qualified type (parent types included), or "" if malformed."""
    parts = _split_urn(urn)
    return parts[2] if parts else ""


def urn_type(urn: str) -> str:
    """Return the resource's own type token, e.g. ``aws:s3/bucket:Bucket``."""
    return urn_qualified_type(urn).rsplit(URN_TYPE_DELIMITER, 1)[-1]


def urn_stack(urn: str) -> str:
    parts = _split_urn(urn)
    return parts[0] if parts else ""


def urn_project(urn: str) -> str:
    parts = _split_urn(urn)
    return parts[1] if parts else ""


def make_urn(stack: str, project: str, type_token: str, name: str, parent_type: str = "") -> str:
    """Create a URN.

    Args:
        stack: Stack name.
        project: Project name.
        type_token: Resource type token.
        name: Resource name.
        parent_type: Qualified type of the parent, prepended with ``$``.

    Returns:
        Canonical URN string.
    """
    qualified = f"{parent_type}{URN_TYPE_DELIMITER}{type_token}" if parent_type else type_token
    return f"{URN_PREFIX}{stack}{URN_NAME_DELIMITER}{project}{URN_NAME_DELIMITER}{qualified}{URN_NAME_DELIMITER}{name}"


__all__ = [
    "URN_PREFIX",
    "is_valid_urn",
    "make_urn",
    "urn_name",
    "urn_project",
    "urn_qualified_type",
    "urn_stack",
    "urn_type",
]
