"""Pydantic models for renderer-agnostic display sections.

Every adapter reduces a resource to an ordered list of ``Section`` objects.
The ``data`` of a section is one variant of a closed union discriminated by
its ``type`` field, so a renderer can dispatch exhaustively on it.

Most variants are fully materialized when the section is built. The
``related-*`` variants are deferred: they carry an async ``loader`` that the
renderer awaits when (and as often as) it needs the data.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, SecretStr

from kube_sections.models.common import MatchConfidence, StatusLevel

GaugeColor = Literal["emerald", "blue", "cyan", "purple", "amber"]
GridIcon = Literal["box", "database", "server"]
ContainerState = Literal["running", "waiting", "terminated"]
SecretContent = Literal["binary", "multiline", "single-line"]


# ---------------------------------------------------------------------------
# Item payloads
# ---------------------------------------------------------------------------


class StatusCard(BaseModel):
    """A single status card, e.g. "Phase: Running"."""

    label: str
    value: str | int
    status: StatusLevel | None = None
    icon: str | None = None
    description: str | None = None


class Gauge(BaseModel):
    """Progress gauge, e.g. "Ready: 3/5".

    ``current`` may exceed ``total`` while a rollout is in flight; clamping
    is left to the renderer.
    """

    label: str
    current: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    color: GaugeColor


class PodGrid(BaseModel):
    """Visual grid of pods or replicas."""

    total: int = Field(..., ge=0)
    ready: int = Field(0, ge=0)
    available: int | None = None
    current: int | None = None
    show_ordinal: bool = False
    icon: GridIcon | None = None
    pod_titles: list[str] | None = None


class ConditionItem(BaseModel):
    """Condition row. ``is_positive`` is derived, not read from the resource."""

    type: str
    status: str
    reason: str | None = None
    message: str | None = None
    is_positive: bool


class InfoRow(BaseModel):
    """Key-value info row."""

    label: str
    value: str | int | None
    color: str | None = None


class ContainerPort(BaseModel):
    name: str | None = None
    container_port: int | None = None
    protocol: str | None = None


class VolumeMount(BaseModel):
    name: str
    mount_path: str
    read_only: bool | None = None
    sub_path: str | None = None


class ContainerResources(BaseModel):
    requests: dict[str, str] | None = None
    limits: dict[str, str] | None = None


class ContainerInfo(BaseModel):
    """Container summary for pods and workload templates."""

    name: str
    image: str = ""
    state: ContainerState | None = None
    state_reason: str | None = None
    ready: bool | None = None
    restart_count: int | None = None
    resources: ContainerResources | None = None
    ports: list[ContainerPort] | None = None
    command: list[str] | None = None
    args: list[str] | None = None
    mounts: list[VolumeMount] | None = None


class VolumeUsage(BaseModel):
    """Where a container mounts a pod volume."""

    container: str
    mount_path: str
    read_only: bool = False
    sub_path: str | None = None


class VolumeInfo(BaseModel):
    name: str
    type: str
    source: str
    extra: dict[str, str] = Field(default_factory=dict)
    mounts: list[VolumeUsage] = Field(default_factory=list)


class CapacityBar(BaseModel):
    label: str
    capacity: str
    allocatable: str


class Taint(BaseModel):
    key: str
    value: str | None = None
    effect: str


class ContainerImage(BaseModel):
    name: str
    image: str | None = None


class VolumeClaimTemplate(BaseModel):
    name: str
    size: str | None = None
    storage_class: str | None = None
    access_modes: list[str] = Field(default_factory=list)


class Address(BaseModel):
    type: str
    address: str


class ServicePort(BaseModel):
    name: str | None = None
    protocol: str = "TCP"
    port: int | None = None
    target_port: int | str | None = None
    node_port: int | None = None
    app_protocol: str | None = None


class IngressTLS(BaseModel):
    secret_name: str | None = None
    hosts: list[str] = Field(default_factory=list)


class IngressPath(BaseModel):
    path: str = "/"
    path_type: str | None = None
    service: str | None = None
    port: int | str | None = None


class IngressRule(BaseModel):
    host: str = Field("*", description='Host the rule matches, "*" when unset')
    paths: list[IngressPath] = Field(default_factory=list)


class SecretEntry(BaseModel):
    """One classified key of a Secret.

    ``value`` is a ``SecretStr`` so that reprs, logs and serialized output
    never contain the decoded content. Binary entries carry no value.
    """

    key: str
    content: SecretContent
    sensitive: bool
    value: SecretStr | None = None

    @property
    def masked_by_default(self) -> bool:
        return self.content != "binary" and self.sensitive

    @property
    def collapsed_by_default(self) -> bool:
        return self.content == "multiline"

    @property
    def can_reveal(self) -> bool:
        return self.content != "binary" and self.sensitive


# Related resource payloads, produced by deferred loaders


class ReplicaSetData(BaseModel):
    name: str
    replicas: int = 0
    ready_replicas: int = 0
    revision: str | None = None
    images: list[str] = Field(default_factory=list)
    is_current: bool = False
    namespace: str | None = None
    confidence: MatchConfidence


class PVCData(BaseModel):
    name: str
    status: str = "Unknown"
    capacity: str | None = None
    storage_class: str | None = None
    namespace: str | None = None
    confidence: MatchConfidence


class JobData(BaseModel):
    name: str
    status: Literal["Running", "Complete", "Failed"]
    start_time: str | None = None
    completion_time: str | None = None
    succeeded: int | None = None
    failed: int | None = None
    namespace: str | None = None
    confidence: MatchConfidence


# ---------------------------------------------------------------------------
# Section data variants
# ---------------------------------------------------------------------------


class StatusCardsData(BaseModel):
    type: Literal["status-cards"] = "status-cards"
    items: list[StatusCard]


class GaugesData(BaseModel):
    type: Literal["gauges"] = "gauges"
    items: list[Gauge]
    pod_grid: PodGrid | None = None


class PodGridData(BaseModel):
    type: Literal["pod-grid"] = "pod-grid"
    grid: PodGrid


class ConditionsData(BaseModel):
    type: Literal["conditions"] = "conditions"
    items: list[ConditionItem]


class InfoGridData(BaseModel):
    type: Literal["info-grid"] = "info-grid"
    items: list[InfoRow]
    columns: Literal[1, 2] | None = None


class LabelsData(BaseModel):
    type: Literal["labels"] = "labels"
    labels: dict[str, str]
    title: str | None = None


class ContainersData(BaseModel):
    type: Literal["containers"] = "containers"
    items: list[ContainerInfo]


class VolumesData(BaseModel):
    type: Literal["volumes"] = "volumes"
    items: list[VolumeInfo]


class CapacityBarsData(BaseModel):
    type: Literal["capacity-bars"] = "capacity-bars"
    items: list[CapacityBar]


class TaintsData(BaseModel):
    type: Literal["taints"] = "taints"
    items: list[Taint]


class ContainerImagesData(BaseModel):
    type: Literal["container-images"] = "container-images"
    containers: list[ContainerImage]


class NodeSelectorData(BaseModel):
    type: Literal["node-selector"] = "node-selector"
    selector: dict[str, str]


class VolumeClaimTemplatesData(BaseModel):
    type: Literal["volume-claim-templates"] = "volume-claim-templates"
    items: list[VolumeClaimTemplate]


class ScheduleData(BaseModel):
    type: Literal["schedule"] = "schedule"
    schedule: str
    description: str


class JobProgressData(BaseModel):
    type: Literal["job-progress"] = "job-progress"
    completions: int
    succeeded: int
    failed: int
    active: int


class TimelineData(BaseModel):
    type: Literal["timeline"] = "timeline"
    start_time: datetime | None = None
    completion_time: datetime | None = None


class AddressesData(BaseModel):
    type: Literal["addresses"] = "addresses"
    addresses: list[Address]


class PortsData(BaseModel):
    type: Literal["ports"] = "ports"
    items: list[ServicePort]


class TagsData(BaseModel):
    type: Literal["tags"] = "tags"
    values: list[str]


class MessageData(BaseModel):
    type: Literal["message"] = "message"
    text: str
    status: StatusLevel = StatusLevel.NEUTRAL


class IngressTLSData(BaseModel):
    type: Literal["ingress-tls"] = "ingress-tls"
    items: list[IngressTLS]


class IngressRulesData(BaseModel):
    type: Literal["ingress-rules"] = "ingress-rules"
    rules: list[IngressRule]


class SecretEntriesData(BaseModel):
    type: Literal["secret-entries"] = "secret-entries"
    items: list[SecretEntry]
    layout: Literal["table", "collapsible", "badges"]


class DeferredSectionData(BaseModel):
    """Base for variants whose payload is produced by an async loader.

    The loader is excluded from serialization. Each ``load()`` call runs an
    independent fetch; nothing is memoized.
    """

    loader: Callable[[], Awaitable[list[Any]]] = Field(..., exclude=True)

    async def load(self) -> list[Any]:
        return await self.loader()


class RelatedReplicaSetsData(DeferredSectionData):
    type: Literal["related-replicasets"] = "related-replicasets"
    loader: Callable[[], Awaitable[list[ReplicaSetData]]] = Field(..., exclude=True)


class RelatedPVCsData(DeferredSectionData):
    type: Literal["related-pvcs"] = "related-pvcs"
    loader: Callable[[], Awaitable[list[PVCData]]] = Field(..., exclude=True)


class RelatedJobsData(DeferredSectionData):
    type: Literal["related-jobs"] = "related-jobs"
    loader: Callable[[], Awaitable[list[JobData]]] = Field(..., exclude=True)


class CustomData(BaseModel):
    """Escape hatch for content outside the closed vocabulary."""

    type: Literal["custom"] = "custom"
    render: Callable[[], Any] = Field(..., exclude=True)


SectionData = Annotated[
    Union[
        StatusCardsData,
        GaugesData,
        PodGridData,
        ConditionsData,
        InfoGridData,
        LabelsData,
        ContainersData,
        VolumesData,
        CapacityBarsData,
        TaintsData,
        ContainerImagesData,
        NodeSelectorData,
        VolumeClaimTemplatesData,
        ScheduleData,
        JobProgressData,
        TimelineData,
        AddressesData,
        PortsData,
        IngressTLSData,
        IngressRulesData,
        TagsData,
        MessageData,
        SecretEntriesData,
        RelatedReplicaSetsData,
        RelatedPVCsData,
        RelatedJobsData,
        CustomData,
    ],
    Field(discriminator="type"),
]


class Section(BaseModel):
    """A titled or untitled unit of display content."""

    id: str = Field(..., description="Rendering key, unique within one adapter output")
    title: str | None = Field(None, description="Optional section title")
    data: SectionData

    @property
    def deferred(self) -> bool:
        """Whether ``data`` must be loaded before it can be displayed."""
        return isinstance(self.data, DeferredSectionData)


class ResourceSections(BaseModel):
    """The ordered sections produced by one adapter invocation."""

    sections: list[Section] = Field(default_factory=list)

    def get(self, section_id: str) -> Section | None:
        """Return the section with the given id, if present."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    @property
    def ids(self) -> list[str]:
        return [section.id for section in self.sections]
