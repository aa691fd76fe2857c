"""Common Pydantic models shared across resource adapters."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StatusLevel(str, Enum):
    """Status levels for visual indicators."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    NEUTRAL = "neutral"


class MatchConfidence(str, Enum):
    """How a related resource was matched to its subject."""

    OWNER_REFERENCE = "owner-reference"
    NAME_CONVENTION = "name-convention"
    NAME_HEURISTIC = "name-heuristic"


class OwnerReference(BaseModel):
    """Kubernetes owner reference."""

    api_version: str | None = None
    kind: str | None = None
    name: str | None = None
    uid: str | None = None
    controller: bool = False

    @classmethod
    def from_dict(cls, ref: dict[str, Any]) -> "OwnerReference":
        """Create from an ownerReferences entry of a resource envelope."""
        return cls(
            api_version=ref.get("apiVersion"),
            kind=ref.get("kind"),
            name=ref.get("name"),
            uid=ref.get("uid"),
            controller=bool(ref.get("controller", False)),
        )


def _string_map(values: dict[str, Any] | None) -> dict[str, str]:
    """Coerce label or annotation values that YAML typed as numbers or booleans."""
    return {
        str(key): value if isinstance(value, str) else ("" if value is None else str(value))
        for key, value in (values or {}).items()
    }


class ResourceMetadata(BaseModel):
    """Common metadata for Kubernetes resources."""

    name: str | None = Field(None, description="Resource name")
    namespace: str | None = Field(None, description="Resource namespace")
    uid: str | None = Field(None, description="Kubernetes UID")
    labels: dict[str, str] = Field(default_factory=dict, description="Resource labels")
    annotations: dict[str, str] = Field(default_factory=dict, description="Resource annotations")
    owner_references: list[OwnerReference] = Field(
        default_factory=list, description="Controllers owning this resource"
    )

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> "ResourceMetadata":
        """Create from a resource envelope.

        Missing or null metadata fields fall back to empty values, so partial
        objects never fail here.
        """
        metadata = resource.get("metadata") or {}
        return cls(
            name=metadata.get("name"),
            namespace=metadata.get("namespace"),
            uid=metadata.get("uid"),
            labels=_string_map(metadata.get("labels")),
            annotations=_string_map(metadata.get("annotations")),
            owner_references=[
                OwnerReference.from_dict(ref) for ref in metadata.get("ownerReferences") or []
            ],
        )


class Condition(BaseModel):
    """Kubernetes-style condition."""

    type: str = Field("", description="Condition type")
    status: str = Field("", description="Condition status (True, False, Unknown)")
    reason: str | None = Field(None, description="Machine-readable reason")
    message: str | None = Field(None, description="Human-readable message")

    @property
    def is_true(self) -> bool:
        """Check if condition status is True."""
        return self.status == "True"

    @classmethod
    def from_dict(cls, condition: dict[str, Any]) -> "Condition":
        """Create from a status.conditions entry."""
        return cls(
            type=condition.get("type") or "",
            status=condition.get("status") or "",
            reason=condition.get("reason"),
            message=condition.get("message"),
        )
