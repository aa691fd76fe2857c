"""Status classification and metadata redaction shared by adapters."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from kube_sections.models.common import Condition, StatusLevel
from kube_sections.models.sections import (
    ConditionItem,
    ConditionsData,
    LabelsData,
    Section,
)

# Keys the controllers and kubectl add on their own; substring match.
INTERNAL_LABEL_KEYS = (
    "pod-template-hash",
    "controller-revision-hash",
)

INTERNAL_ANNOTATION_KEYS = (
    "kubectl.kubernetes.io/last-applied-configuration",
    "deployment.kubernetes.io/revision",
    "deprecated.daemonset.template.generation",
    "kubernetes.io/description",
)


def pod_phase_status(phase: str | None) -> StatusLevel:
    """Map a pod or container phase to a status level."""
    if phase == "Running" or phase == "Succeeded":
        return StatusLevel.SUCCESS
    elif phase == "Pending":
        return StatusLevel.WARNING
    elif phase == "Failed":
        return StatusLevel.ERROR
    return StatusLevel.NEUTRAL


def pv_phase_status(phase: str | None) -> StatusLevel:
    """Map a PersistentVolume phase to a status level."""
    if phase == "Bound" or phase == "Available":
        return StatusLevel.SUCCESS
    elif phase == "Released":
        return StatusLevel.WARNING
    elif phase == "Failed":
        return StatusLevel.ERROR
    return StatusLevel.NEUTRAL


def pvc_phase_status(phase: str | None) -> StatusLevel:
    """Map a PersistentVolumeClaim phase to a status level."""
    if phase == "Bound":
        return StatusLevel.SUCCESS
    elif phase == "Pending":
        return StatusLevel.WARNING
    elif phase == "Lost":
        return StatusLevel.ERROR
    return StatusLevel.NEUTRAL


def service_type_status(service_type: str | None) -> StatusLevel:
    """Map a Service type to a status level."""
    if service_type == "LoadBalancer":
        return StatusLevel.SUCCESS
    elif service_type == "NodePort":
        return StatusLevel.WARNING
    return StatusLevel.NEUTRAL


# Condition health predicates


def condition_true_is_healthy(condition: Condition) -> bool:
    """Default sentinel: a condition is healthy when its status is True."""
    return condition.is_true


def node_condition_is_healthy(condition: Condition) -> bool:
    """Ready should be True; pressure conditions should be False."""
    if condition.type == "Ready":
        return condition.status == "True"
    return condition.status == "False"


_JOB_NEGATIVE_CONDITIONS = frozenset({"Failed", "FailureTarget", "Suspended"})


def job_condition_is_healthy(condition: Condition) -> bool:
    """Failure-type job conditions are healthy when False, the rest when True."""
    if condition.type in _JOB_NEGATIVE_CONDITIONS:
        return condition.status == "False"
    return condition.status == "True"


def conditions_section(
    conditions: Iterable[dict[str, Any]] | None,
    is_healthy: Callable[[Condition], bool] = condition_true_is_healthy,
    section_id: str = "conditions",
    title: str | None = "Conditions",
) -> list[Section]:
    """Build a conditions section holding only the unhealthy conditions.

    Returns an empty list when every condition is healthy so that callers can
    splice the result straight into their section list.
    """
    problematic = []
    for raw in conditions or []:
        condition = Condition.from_dict(raw)
        healthy = is_healthy(condition)
        if healthy:
            continue
        problematic.append(
            ConditionItem(
                type=condition.type,
                status=condition.status,
                reason=condition.reason,
                message=condition.message,
                is_positive=healthy,
            )
        )

    if not problematic:
        return []
    return [Section(id=section_id, title=title, data=ConditionsData(items=problematic))]


# Label and annotation redaction


def filter_labels(
    labels: dict[str, str] | None,
    excludes: Iterable[str] = INTERNAL_LABEL_KEYS,
) -> dict[str, str]:
    """Drop labels whose key contains any of the excluded fragments."""
    if not labels:
        return {}
    excludes = tuple(excludes)
    return {
        key: value
        for key, value in labels.items()
        if not any(exclude in key for exclude in excludes)
    }


def filter_annotations(
    annotations: dict[str, str] | None,
    excludes: Iterable[str] = INTERNAL_ANNOTATION_KEYS,
    exact_excludes: Iterable[str] = (),
) -> dict[str, str]:
    """Drop annotations whose key contains an excluded fragment or equals an exact exclude."""
    if not annotations:
        return {}
    excludes = tuple(excludes)
    exact = frozenset(exact_excludes)
    return {
        key: value
        for key, value in annotations.items()
        if key not in exact and not any(exclude in key for exclude in excludes)
    }


def metadata_sections(labels: dict[str, str], annotations: dict[str, str]) -> list[Section]:
    """Build the Labels and Annotations sections from already-filtered mappings."""
    sections: list[Section] = []
    if labels:
        sections.append(Section(id="labels", data=LabelsData(labels=labels, title="Labels")))
    if annotations:
        sections.append(
            Section(id="annotations", data=LabelsData(labels=annotations, title="Annotations"))
        )
    return sections
