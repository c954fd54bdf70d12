"""Resource state records read from a deployment checkpoint.

Records are validated with Pydantic when a snapshot is loaded and are
immutable afterwards; graph construction only ever reads them.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stackgraph.resource.urn import urn_name, urn_type


class ResourceState(BaseModel):
    """One managed resource as persisted in a deployment snapshot."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    urn: Annotated[str, Field(..., min_length=1, description="Unique resource name")]
    type: Annotated[
        str,
        Field(default="", description="Resource type token; derived from the URN when omitted"),
    ]
    custom: bool = False
    protect: bool = False
    delete: bool = False
    id: Optional[str] = None
    provider: Optional[str] = None
    parent: Annotated[
        str,
        Field(default="", description="URN of the containing resource, empty for none"),
    ]
    dependencies: Annotated[
        List[str],
        Field(default_factory=list, description="URNs this resource depends on, in order"),
    ]
    property_dependencies: Annotated[
        Dict[str, List[str]],
        Field(
            default_factory=dict,
            alias="propertyDependencies",
            description="Property name -> URNs that property's value depends on",
        ),
    ]

    @field_validator("parent", mode="before")
    @classmethod
    def _none_parent_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dependencies", mode="before")
    @classmethod
    def _none_dependencies_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("property_dependencies", mode="before")
    @classmethod
    def _none_property_dependencies_is_empty(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # Checkpoints may record a property with no dependencies as null.
            return {key: deps or [] for key, deps in value.items()}
        return value

    @property
    def name(self) -> str:
        """Short name extracted from the URN."""
        return urn_name(self.urn)

    @property
    def type_token(self) -> str:
        """Declared type, falling back to the type carried by the URN."""
        return self.type or urn_type(self.urn)

    def display_name(self, short: bool = False) -> str:
        """Return the short name or the full URN."""
        return self.name if short else self.urn


__all__ = ["ResourceState"]
