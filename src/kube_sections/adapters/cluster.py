"""Adapters for cluster-level resources: Nodes and Events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kube_sections.adapters.base import ResourceAdapter, as_int, dig
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    Address,
    AddressesData,
    CapacityBar,
    CapacityBarsData,
    InfoGridData,
    InfoRow,
    MessageData,
    Section,
    StatusCard,
    StatusCardsData,
    Taint,
    TaintsData,
)
from kube_sections.utils.classification import conditions_section, node_condition_is_healthy
from kube_sections.utils.formatting import format_memory, format_time_ago, parse_timestamp

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"

_SYSTEM_INFO_FIELDS = (
    ("OS", "operatingSystem"),
    ("Arch", "architecture"),
    ("Kernel", "kernelVersion"),
    ("OS Image", "osImage"),
    ("Container Runtime", "containerRuntimeVersion"),
    ("Kubelet", "kubeletVersion"),
    ("Kube-Proxy", "kubeProxyVersion"),
)


def node_roles(labels: dict[str, str]) -> list[str]:
    return [key[len(ROLE_LABEL_PREFIX) :] for key in labels if key.startswith(ROLE_LABEL_PREFIX)]


class NodeAdapter(ResourceAdapter):
    kinds = ("Node", "Nodes")
    resource_config = BuiltinResources.NODES
    required_field = "status"

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        status = resource["status"]
        labels = dig(resource, "metadata", "labels", default={})
        conditions = status.get("conditions") or []

        ready = any(c.get("type") == "Ready" and c.get("status") == "True" for c in conditions)
        roles = node_roles(labels)

        sections = [
            Section(
                id="status",
                data=StatusCardsData(
                    items=[
                        StatusCard(
                            label="Status",
                            value="Ready" if ready else "NotReady",
                            status=StatusLevel.SUCCESS if ready else StatusLevel.ERROR,
                        ),
                        StatusCard(label="Role", value=", ".join(roles) if roles else "worker"),
                    ]
                ),
            )
        ]

        addresses = status.get("addresses") or []
        if addresses:
            sections.append(
                Section(
                    id="addresses",
                    title="Addresses",
                    data=AddressesData(
                        addresses=[
                            Address(type=a.get("type") or "", address=a.get("address") or "")
                            for a in addresses
                        ]
                    ),
                )
            )

        capacity = status.get("capacity") or {}
        allocatable = status.get("allocatable") or {}
        bars = [
            CapacityBar(
                label="CPU",
                capacity=str(capacity.get("cpu", "0")),
                allocatable=str(allocatable.get("cpu", "0")),
            ),
            CapacityBar(
                label="Memory",
                capacity=format_memory(str(capacity.get("memory", "0"))),
                allocatable=format_memory(str(allocatable.get("memory", "0"))),
            ),
            CapacityBar(
                label="Pods",
                capacity=str(capacity.get("pods", "0")),
                allocatable=str(allocatable.get("pods", "0")),
            ),
        ]
        if capacity.get("ephemeral-storage"):
            bars.append(
                CapacityBar(
                    label="Storage",
                    capacity=format_memory(str(capacity["ephemeral-storage"])),
                    allocatable=format_memory(str(allocatable.get("ephemeral-storage", "0"))),
                )
            )
        sections.append(
            Section(id="resources", title="Resources", data=CapacityBarsData(items=bars))
        )

        node_info = status.get("nodeInfo") or {}
        if node_info:
            sections.append(
                Section(
                    id="system-info",
                    title="System Info",
                    data=InfoGridData(
                        items=[
                            InfoRow(label=label, value=node_info.get(key))
                            for label, key in _SYSTEM_INFO_FIELDS
                        ],
                        columns=2,
                    ),
                )
            )

        sections.extend(conditions_section(conditions, is_healthy=node_condition_is_healthy))

        taints = dig(resource, "spec", "taints", default=[])
        if taints:
            sections.append(
                Section(
                    id="taints",
                    title="Taints",
                    data=TaintsData(
                        items=[
                            Taint(
                                key=t.get("key") or "",
                                value=t.get("value"),
                                effect=t.get("effect") or "",
                            )
                            for t in taints
                        ]
                    ),
                )
            )
        return sections


def _seen(value: Any) -> str | None:
    moment = parse_timestamp(value)
    if moment is None:
        return None
    return f"{moment.isoformat()} ({format_time_ago(moment)})"


class EventAdapter(ResourceAdapter):
    kinds = ("Event", "Events")
    resource_config = BuiltinResources.EVENTS
    required_field = None

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        warning = resource.get("type") == "Warning"
        count = as_int(resource.get("count"), 1)

        cards = [
            StatusCard(
                label="Type",
                value=resource.get("type") or "Normal",
                status=StatusLevel.WARNING if warning else StatusLevel.SUCCESS,
            ),
            StatusCard(
                label="Reason",
                value=resource.get("reason") or "Unknown",
                status=StatusLevel.NEUTRAL,
            ),
        ]
        if count > 1:
            cards.append(StatusCard(label="Count", value=count, status=StatusLevel.NEUTRAL))

        sections = [
            Section(id="status", data=StatusCardsData(items=cards)),
            *self.metadata_sections(resource),
        ]

        if resource.get("message"):
            sections.append(
                Section(
                    id="message",
                    title="Message",
                    data=MessageData(
                        text=resource["message"],
                        status=StatusLevel.WARNING if warning else StatusLevel.NEUTRAL,
                    ),
                )
            )

        involved = resource.get("involvedObject") or {}
        if involved.get("name"):
            rows = [
                InfoRow(label="Kind", value=involved.get("kind") or "Resource"),
                InfoRow(label="Name", value=involved["name"], color="cyan"),
            ]
            for label, key, color in (
                ("Namespace", "namespace", "purple"),
                ("Field", "fieldPath", None),
                ("API Version", "apiVersion", None),
            ):
                if involved.get(key):
                    rows.append(InfoRow(label=label, value=involved[key], color=color))
            sections.append(
                Section(
                    id="involved-object", title="Involved Object", data=InfoGridData(items=rows)
                )
            )

        first_seen = _seen(
            resource.get("firstTimestamp")
            or resource.get("eventTime")
            or dig(resource, "metadata", "creationTimestamp")
        )
        last_seen = _seen(resource.get("lastTimestamp") or resource.get("eventTime"))
        timestamp_rows = []
        if first_seen:
            timestamp_rows.append(InfoRow(label="First Seen", value=first_seen))
        if last_seen and count > 1:
            timestamp_rows.append(InfoRow(label="Last Seen", value=last_seen))
        if timestamp_rows:
            sections.append(
                Section(
                    id="timestamps",
                    title="Timestamps",
                    data=InfoGridData(items=timestamp_rows, columns=1),
                )
            )

        source = resource.get("source") or {}
        if source.get("component") or source.get("host"):
            rows = []
            if source.get("component"):
                rows.append(InfoRow(label="Component", value=source["component"], color="cyan"))
            if source.get("host"):
                rows.append(InfoRow(label="Host", value=source["host"]))
            sections.append(Section(id="source", title="Source", data=InfoGridData(items=rows)))

        reporting = [
            InfoRow(label=label, value=resource[key])
            for label, key in (
                ("Component", "reportingComponent"),
                ("Instance", "reportingInstance"),
                ("Action", "action"),
            )
            if resource.get(key)
        ]
        if reporting:
            sections.append(
                Section(id="reporting", title="Reporting", data=InfoGridData(items=reporting))
            )

        related = resource.get("related") or {}
        if related.get("name") and related.get("name") != involved.get("name"):
            rows = [
                InfoRow(label="Kind", value=related.get("kind") or "Unknown"),
                InfoRow(label="Name", value=related["name"]),
            ]
            if related.get("namespace"):
                rows.append(InfoRow(label="Namespace", value=related["namespace"]))
            sections.append(
                Section(id="related", title="Related Object", data=InfoGridData(items=rows))
            )
        return sections
