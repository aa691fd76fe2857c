"""Deferred loaders that find resources related to an adapted subject.

Each loader lists sibling resources through the injected accessor and keeps
the ones that belong to the subject. Loaders never raise: a missing
namespace, an unsupported resource type or any accessor failure resolves to
an empty list, with failures logged as warnings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any, TypeVar

from kube_sections.adapters.base import as_int, dig
from kube_sections.models.common import MatchConfidence, ResourceMetadata
from kube_sections.models.sections import JobData, PVCData, ReplicaSetData
from kube_sections.utils.formatting import parse_timestamp

if TYPE_CHECKING:
    from kube_sections.clients.base import ResourceAccessor

logger = logging.getLogger(__name__)

T = TypeVar("T")

REVISION_ANNOTATION = "deployment.kubernetes.io/revision"

# Generated ReplicaSet suffix (pod-template-hash)
_REPLICASET_SUFFIX = re.compile(r"^[a-z0-9]{7,10}$")
# CronJob controller names jobs after the scheduled time in minutes
_JOB_SUFFIX = re.compile(r"^[0-9]{8,10}$")


def make_loader(
    accessor: ResourceAccessor,
    plural: str,
    namespace: str | None,
    subject: str | None,
    select: Callable[[list[dict[str, Any]]], list[T]],
) -> Callable[[], Awaitable[list[T]]]:
    """Wrap a fetch-and-filter pass into a zero-argument async loader.

    Args:
        accessor: Accessor used to resolve and list the related type.
        plural: Plural resource name of the related type.
        namespace: Namespace to list in.
        subject: Name of the subject resource, used for diagnostics.
        select: Filters and maps the listed candidates.

    Returns:
        A loader that performs an independent fetch every time it is awaited.
    """

    async def loader() -> list[T]:
        if not namespace or not subject:
            return []
        try:
            config = await accessor.get_resource_config(plural)
            if config is None:
                return []
            candidates = await accessor.get_resource_list(config, namespace)
            return select(candidates)
        except Exception as e:
            logger.warning(f"Failed to load {plural} related to {namespace}/{subject}: {e}")
            return []

    return loader


def _owner_match(meta: ResourceMetadata, kind: str, name: str, uid: str | None) -> bool:
    return any(
        ref.kind == kind and (ref.name == name or (uid and ref.uid == uid))
        for ref in meta.owner_references
    )


# ---------------------------------------------------------------------------
# Deployment -> ReplicaSets
# ---------------------------------------------------------------------------


def match_replicaset(
    replicaset: dict[str, Any], deployment: str, uid: str | None = None
) -> MatchConfidence | None:
    """Decide whether a ReplicaSet belongs to a Deployment.

    Owner references are authoritative. The name heuristic only applies to
    candidates that carry no owner references at all.
    """
    meta = ResourceMetadata.from_resource(replicaset)
    if _owner_match(meta, "Deployment", deployment, uid):
        return MatchConfidence.OWNER_REFERENCE
    if meta.owner_references or not meta.name:
        return None

    prefix = f"{deployment}-"
    if meta.name.startswith(prefix) and _REPLICASET_SUFFIX.match(meta.name[len(prefix) :]):
        return MatchConfidence.NAME_HEURISTIC
    return None


def replicaset_revision(replicaset: dict[str, Any]) -> int:
    """Parse the rollout revision annotation, treating garbage as 0."""
    try:
        return int(dig(replicaset, "metadata", "annotations", REVISION_ANNOTATION))
    except (TypeError, ValueError):
        return 0


def replicaset_data(replicaset: dict[str, Any], confidence: MatchConfidence) -> ReplicaSetData:
    meta = ResourceMetadata.from_resource(replicaset)
    replicas = as_int(dig(replicaset, "status", "replicas"))
    containers = dig(replicaset, "spec", "template", "spec", "containers", default=[])
    return ReplicaSetData(
        name=meta.name or "",
        replicas=replicas,
        ready_replicas=as_int(dig(replicaset, "status", "readyReplicas")),
        revision=meta.annotations.get(REVISION_ANNOTATION),
        images=[c.get("image") for c in containers if c.get("image")],
        is_current=replicas > 0,
        namespace=meta.namespace,
        confidence=confidence,
    )


def select_replicasets(
    candidates: list[dict[str, Any]], deployment: str, uid: str | None = None
) -> list[ReplicaSetData]:
    """Keep the Deployment's ReplicaSets, newest revision first."""
    matched = []
    for candidate in candidates:
        confidence = match_replicaset(candidate, deployment, uid)
        if confidence is not None:
            matched.append((candidate, confidence))
    matched.sort(key=lambda pair: replicaset_revision(pair[0]), reverse=True)
    return [replicaset_data(candidate, confidence) for candidate, confidence in matched]


def replicasets_loader(
    accessor: ResourceAccessor, deployment: dict[str, Any], namespace: str | None
) -> Callable[[], Awaitable[list[ReplicaSetData]]]:
    meta = ResourceMetadata.from_resource(deployment)
    return make_loader(
        accessor,
        "replicasets",
        namespace,
        meta.name,
        lambda candidates: select_replicasets(candidates, meta.name or "", meta.uid),
    )


# ---------------------------------------------------------------------------
# StatefulSet -> PersistentVolumeClaims
# ---------------------------------------------------------------------------


def match_pvc(pvc: dict[str, Any], statefulset: str, templates: list[str]) -> bool:
    """A claim belongs to the StatefulSet if named ``<template>-<statefulset>-...``."""
    name = dig(pvc, "metadata", "name") or ""
    return any(name.startswith(f"{template}-{statefulset}-") for template in templates)


def pvc_data(pvc: dict[str, Any]) -> PVCData:
    return PVCData(
        name=dig(pvc, "metadata", "name") or "",
        status=dig(pvc, "status", "phase") or "Unknown",
        capacity=dig(pvc, "status", "capacity", "storage"),
        storage_class=dig(pvc, "spec", "storageClassName"),
        namespace=dig(pvc, "metadata", "namespace"),
        confidence=MatchConfidence.NAME_CONVENTION,
    )


def pvcs_loader(
    accessor: ResourceAccessor, statefulset: dict[str, Any], namespace: str | None
) -> Callable[[], Awaitable[list[PVCData]]]:
    name = dig(statefulset, "metadata", "name")
    templates = [
        t_name
        for t in dig(statefulset, "spec", "volumeClaimTemplates", default=[])
        if (t_name := dig(t, "metadata", "name"))
    ]

    def select(candidates: list[dict[str, Any]]) -> list[PVCData]:
        return [pvc_data(pvc) for pvc in candidates if match_pvc(pvc, name or "", templates)]

    return make_loader(accessor, "persistentvolumeclaims", namespace, name, select)


# ---------------------------------------------------------------------------
# CronJob -> Jobs
# ---------------------------------------------------------------------------


def match_job(job: dict[str, Any], cronjob: str, uid: str | None = None) -> MatchConfidence | None:
    """Decide whether a Job was spawned by a CronJob."""
    meta = ResourceMetadata.from_resource(job)
    if _owner_match(meta, "CronJob", cronjob, uid):
        return MatchConfidence.OWNER_REFERENCE
    if meta.owner_references or not meta.name:
        return None

    prefix = f"{cronjob}-"
    if meta.name.startswith(prefix) and _JOB_SUFFIX.match(meta.name[len(prefix) :]):
        return MatchConfidence.NAME_HEURISTIC
    return None


def job_status(job: dict[str, Any]) -> str:
    for condition in dig(job, "status", "conditions", default=[]):
        if condition.get("status") != "True":
            continue
        if condition.get("type") == "Complete":
            return "Complete"
        if condition.get("type") == "Failed":
            return "Failed"
    return "Running"


def _timestamp_text(value: Any) -> str | None:
    """Render a status timestamp as RFC 3339 text.

    YAML loaders turn unquoted timestamps into ``datetime`` objects; API
    responses carry strings. Unparsable strings are passed through.
    """
    if not isinstance(value, (str, datetime)) or value == "":
        return None
    moment = parse_timestamp(value)
    if moment is None:
        return str(value)
    return moment.isoformat().replace("+00:00", "Z")


def job_data(job: dict[str, Any], confidence: MatchConfidence) -> JobData:
    status = job.get("status") or {}
    return JobData(
        name=dig(job, "metadata", "name") or "",
        status=job_status(job),
        start_time=_timestamp_text(status.get("startTime")),
        completion_time=_timestamp_text(status.get("completionTime")),
        succeeded=status.get("succeeded"),
        failed=status.get("failed"),
        namespace=dig(job, "metadata", "namespace"),
        confidence=confidence,
    )


def select_jobs(
    candidates: list[dict[str, Any]], cronjob: str, uid: str | None = None
) -> list[JobData]:
    """Keep the CronJob's Jobs, most recently started first."""
    jobs = []
    for candidate in candidates:
        confidence = match_job(candidate, cronjob, uid)
        if confidence is not None:
            jobs.append(job_data(candidate, confidence))

    def started(job: JobData) -> float:
        moment = parse_timestamp(job.start_time)
        return moment.timestamp() if moment else 0.0

    jobs.sort(key=started, reverse=True)
    return jobs


def jobs_loader(
    accessor: ResourceAccessor, cronjob: dict[str, Any], namespace: str | None
) -> Callable[[], Awaitable[list[JobData]]]:
    meta = ResourceMetadata.from_resource(cronjob)
    return make_loader(
        accessor,
        "jobs",
        namespace,
        meta.name,
        lambda candidates: select_jobs(candidates, meta.name or "", meta.uid),
    )
