"""Adapters for replicated workload controllers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_sections.adapters.actions import restart_action
from kube_sections.adapters.base import (
    ResourceAdapter,
    as_int,
    dig,
    images_section,
    resource_name,
    resource_namespace,
)
from kube_sections.adapters.related import (
    REVISION_ANNOTATION,
    pvcs_loader,
    replicasets_loader,
)
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import OwnerReference
from kube_sections.models.sections import (
    Gauge,
    GaugesData,
    InfoGridData,
    InfoRow,
    LabelsData,
    NodeSelectorData,
    PodGrid,
    RelatedPVCsData,
    RelatedReplicaSetsData,
    Section,
    VolumeClaimTemplate,
    VolumeClaimTemplatesData,
)
from kube_sections.utils.classification import conditions_section
from kube_sections.utils.formatting import format_access_mode

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource, ResourceAction


class DeploymentAdapter(ResourceAdapter):
    kinds = ("Deployment", "Deployments")
    resource_config = BuiltinResources.DEPLOYMENTS

    def create_actions(self) -> list[ResourceAction]:
        return [
            restart_action(self.accessor, BuiltinResources.DEPLOYMENTS),
            *super().create_actions(),
        ]

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        desired = as_int(spec.get("replicas"), 1)
        ready = as_int(status.get("readyReplicas"))
        updated = as_int(status.get("updatedReplicas"))
        available = as_int(status.get("availableReplicas"))

        strategy = spec.get("strategy") or {}
        strategy_rows = [InfoRow(label="Strategy", value=strategy.get("type") or "RollingUpdate")]
        rolling = strategy.get("rollingUpdate")
        if rolling is not None:
            for label, key in (("Max Surge", "maxSurge"), ("Max Unavailable", "maxUnavailable")):
                value = rolling.get(key)
                strategy_rows.append(
                    InfoRow(label=label, value="25%" if value is None else str(value))
                )

        sections = [
            Section(
                id="replicas",
                title="Replica Status",
                data=GaugesData(
                    items=[
                        Gauge(label="Ready", current=ready, total=desired, color="emerald"),
                        Gauge(label="Updated", current=updated, total=desired, color="blue"),
                        Gauge(label="Available", current=available, total=desired, color="cyan"),
                    ],
                    pod_grid=PodGrid(total=desired, ready=ready, available=available, icon="box"),
                ),
            ),
            Section(id="strategy", data=InfoGridData(items=strategy_rows, columns=2)),
            *self.metadata_sections(resource),
            *conditions_section(status.get("conditions")),
            Section(
                id="replicasets",
                title="ReplicaSets",
                data=RelatedReplicaSetsData(
                    loader=replicasets_loader(
                        self.accessor, resource, resource_namespace(resource, namespace)
                    )
                ),
            ),
            *images_section(dig(spec, "template", "spec", default={})),
        ]
        return sections


class ReplicaSetAdapter(ResourceAdapter):
    kinds = ("ReplicaSet", "ReplicaSets")
    resource_config = BuiltinResources.REPLICA_SETS

    label_excludes = ("pod-template-hash",)
    annotation_excludes = (
        "kubectl.kubernetes.io/last-applied-configuration",
        REVISION_ANNOTATION,
    )

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        desired = as_int(spec.get("replicas"), 1)
        current = as_int(status.get("replicas"))
        ready = as_int(status.get("readyReplicas"))
        available = as_int(status.get("availableReplicas"))

        sections: list[Section] = []

        owners = dig(resource, "metadata", "ownerReferences", default=[])
        if owners:
            owner = OwnerReference.from_dict(owners[0])
            rows = [InfoRow(label="Owned By", value=f"{owner.kind}: {owner.name}", color="cyan")]
            revision = dig(resource, "metadata", "annotations", REVISION_ANNOTATION)
            if revision:
                rows.append(InfoRow(label="Revision", value=revision))
            sections.append(Section(id="owner", data=InfoGridData(items=rows)))

        sections.append(
            Section(
                id="replicas",
                title="Replica Status",
                data=GaugesData(
                    items=[
                        Gauge(label="Ready", current=ready, total=desired, color="emerald"),
                        Gauge(label="Current", current=current, total=desired, color="blue"),
                        Gauge(label="Available", current=available, total=desired, color="cyan"),
                    ],
                    pod_grid=PodGrid(
                        total=max(desired, current),
                        ready=ready,
                        available=available,
                        current=current,
                        icon="box",
                    ),
                ),
            )
        )
        sections.extend(self.metadata_sections(resource))

        match_labels = dig(spec, "selector", "matchLabels", default={})
        if match_labels:
            sections.append(
                Section(id="selector", data=LabelsData(labels=match_labels, title="Selector"))
            )

        sections.extend(conditions_section(status.get("conditions")))
        sections.extend(images_section(dig(spec, "template", "spec", default={})))
        return sections


class StatefulSetAdapter(ResourceAdapter):
    kinds = ("StatefulSet", "StatefulSets")
    resource_config = BuiltinResources.STATEFUL_SETS

    def create_actions(self) -> list[ResourceAction]:
        return [
            restart_action(self.accessor, BuiltinResources.STATEFUL_SETS),
            *super().create_actions(),
        ]

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}
        name = resource_name(resource) or ""

        desired = as_int(spec.get("replicas"), 1)
        ready = as_int(status.get("readyReplicas"))
        current = as_int(status.get("currentReplicas"))
        updated = as_int(status.get("updatedReplicas"))
        available = as_int(status.get("availableReplicas"))

        update_strategy = spec.get("updateStrategy") or {}
        config_rows = [
            InfoRow(label="Service Name", value=spec.get("serviceName") or "-"),
            InfoRow(
                label="Pod Management",
                value=spec.get("podManagementPolicy") or "OrderedReady",
            ),
            InfoRow(label="Update Strategy", value=update_strategy.get("type") or "RollingUpdate"),
        ]
        partition = dig(update_strategy, "rollingUpdate", "partition")
        if partition is not None:
            config_rows.append(InfoRow(label="Partition", value=partition, color="amber"))

        sections = [
            Section(
                id="replicas",
                title="Replica Status",
                data=GaugesData(
                    items=[
                        Gauge(label="Ready", current=ready, total=desired, color="emerald"),
                        Gauge(label="Current", current=current, total=desired, color="blue"),
                        Gauge(label="Updated", current=updated, total=desired, color="cyan"),
                    ],
                    pod_grid=PodGrid(
                        total=desired,
                        ready=ready,
                        available=available,
                        show_ordinal=True,
                        icon="database",
                        pod_titles=[f"{name}-{i}" for i in range(desired)],
                    ),
                ),
            ),
            Section(id="config", data=InfoGridData(items=config_rows, columns=2)),
            *self.metadata_sections(resource),
        ]

        current_revision = status.get("currentRevision")
        update_revision = status.get("updateRevision")
        if current_revision:
            revision_rows = [InfoRow(label="Current", value=current_revision, color="emerald")]
            if update_revision and update_revision != current_revision:
                revision_rows.append(InfoRow(label="Update", value=update_revision, color="amber"))
            sections.append(
                Section(
                    id="revisions",
                    title="Revisions",
                    data=InfoGridData(items=revision_rows, columns=1),
                )
            )

        sections.extend(conditions_section(status.get("conditions")))

        templates = spec.get("volumeClaimTemplates") or []
        if templates:
            sections.append(
                Section(
                    id="volume-templates",
                    title="Volume Claim Templates",
                    data=VolumeClaimTemplatesData(
                        items=[
                            VolumeClaimTemplate(
                                name=dig(t, "metadata", "name") or "",
                                size=dig(t, "spec", "resources", "requests", "storage"),
                                storage_class=dig(t, "spec", "storageClassName"),
                                access_modes=[
                                    format_access_mode(m)
                                    for m in dig(t, "spec", "accessModes", default=[])
                                ],
                            )
                            for t in templates
                        ]
                    ),
                )
            )
            sections.append(
                Section(
                    id="pvcs",
                    title="Persistent Volume Claims",
                    data=RelatedPVCsData(
                        loader=pvcs_loader(
                            self.accessor, resource, resource_namespace(resource, namespace)
                        )
                    ),
                )
            )

        sections.extend(images_section(dig(spec, "template", "spec", default={})))
        return sections


class DaemonSetAdapter(ResourceAdapter):
    kinds = ("DaemonSet", "DaemonSets")
    resource_config = BuiltinResources.DAEMON_SETS

    def create_actions(self) -> list[ResourceAction]:
        return [
            restart_action(self.accessor, BuiltinResources.DAEMON_SETS),
            *super().create_actions(),
        ]

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        desired = as_int(status.get("desiredNumberScheduled"))
        scheduled = as_int(status.get("currentNumberScheduled"))
        ready = as_int(status.get("numberReady"))
        available = as_int(status.get("numberAvailable"))
        updated = as_int(status.get("updatedNumberScheduled"))
        misscheduled = as_int(status.get("numberMisscheduled"))

        update_strategy = spec.get("updateStrategy") or {}
        status_rows = [
            InfoRow(label="Update Strategy", value=update_strategy.get("type") or "RollingUpdate"),
            InfoRow(label="Updated", value=f"{updated}/{desired}", color="cyan"),
        ]
        if misscheduled > 0:
            status_rows.append(
                InfoRow(
                    label="Misscheduled", value=f"{misscheduled} pods on wrong nodes", color="red"
                )
            )

        sections = [
            Section(
                id="distribution",
                title="Node Distribution",
                data=GaugesData(
                    items=[
                        Gauge(label="Scheduled", current=scheduled, total=desired, color="blue"),
                        Gauge(label="Ready", current=ready, total=desired, color="emerald"),
                        Gauge(label="Available", current=available, total=desired, color="cyan"),
                    ],
                    pod_grid=PodGrid(
                        total=desired, ready=ready, available=available, icon="server"
                    ),
                ),
            ),
            Section(id="status", data=InfoGridData(items=status_rows, columns=2)),
            *self.metadata_sections(resource),
        ]

        rolling = update_strategy.get("rollingUpdate")
        if rolling is not None:
            rolling_rows = [
                InfoRow(
                    label="Max Unavailable",
                    value=str(
                        1 if rolling.get("maxUnavailable") is None else rolling["maxUnavailable"]
                    ),
                    color="amber",
                )
            ]
            if rolling.get("maxSurge") is not None:
                rolling_rows.append(
                    InfoRow(label="Max Surge", value=str(rolling["maxSurge"]), color="cyan")
                )
            sections.append(
                Section(
                    id="rolling-update",
                    title="Rolling Update Config",
                    data=InfoGridData(items=rolling_rows, columns=2),
                )
            )

        sections.extend(conditions_section(status.get("conditions")))

        pod_spec = dig(spec, "template", "spec", default={})
        node_selector = pod_spec.get("nodeSelector") or {}
        if node_selector:
            sections.append(
                Section(
                    id="node-selector",
                    title="Node Selector",
                    data=NodeSelectorData(selector=node_selector),
                )
            )

        sections.extend(images_section(pod_spec))
        return sections
