"""Data models for sections, actions and shared Kubernetes structures."""

from kube_sections.models.actions import (
    ActionConfirmation,
    ActionVariant,
    ResourceAction,
)
from kube_sections.models.common import (
    Condition,
    MatchConfidence,
    OwnerReference,
    ResourceMetadata,
    StatusLevel,
)
from kube_sections.models.sections import (
    DeferredSectionData,
    JobData,
    PVCData,
    ReplicaSetData,
    ResourceSections,
    Section,
    SectionData,
    SecretEntry,
)

__all__ = [
    # Actions
    "ActionConfirmation",
    "ActionVariant",
    "ResourceAction",
    # Common
    "Condition",
    "MatchConfidence",
    "OwnerReference",
    "ResourceMetadata",
    "StatusLevel",
    # Sections
    "DeferredSectionData",
    "JobData",
    "PVCData",
    "ReplicaSetData",
    "ResourceSections",
    "Section",
    "SectionData",
    "SecretEntry",
]
