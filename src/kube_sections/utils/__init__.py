"""Utility functions and helpers for kube-sections."""

from kube_sections.utils.classification import (
    conditions_section,
    filter_annotations,
    filter_labels,
    metadata_sections,
    pod_phase_status,
    pv_phase_status,
    pvc_phase_status,
    service_type_status,
)
from kube_sections.utils.errors import (
    ActionError,
    ConfigurationError,
    DuplicateKindError,
    KubeSectionsError,
    ResourceAccessError,
)
from kube_sections.utils.secrets import (
    SecretViewState,
    classify_entry,
    classify_secret_data,
    is_sensitive_key,
)

__all__ = [
    # Errors
    "KubeSectionsError",
    "DuplicateKindError",
    "ConfigurationError",
    "ResourceAccessError",
    "ActionError",
    # Classification
    "conditions_section",
    "filter_annotations",
    "filter_labels",
    "metadata_sections",
    "pod_phase_status",
    "pv_phase_status",
    "pvc_phase_status",
    "service_type_status",
    # Secrets
    "SecretViewState",
    "classify_entry",
    "classify_secret_data",
    "is_sensitive_key",
]
