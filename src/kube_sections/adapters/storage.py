"""Adapters for PersistentVolumes and PersistentVolumeClaims."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kube_sections.adapters.base import ResourceAdapter, dig
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    InfoGridData,
    InfoRow,
    MessageData,
    Section,
    StatusCard,
    StatusCardsData,
    TagsData,
)
from kube_sections.utils.classification import pv_phase_status, pvc_phase_status
from kube_sections.utils.formatting import format_access_mode

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource


def _access_modes_section(spec: dict[str, Any]) -> list[Section]:
    modes = spec.get("accessModes") or []
    if not modes:
        return []
    return [
        Section(
            id="access-modes",
            title="Access Modes",
            data=TagsData(values=[format_access_mode(m) for m in modes]),
        )
    ]


def _storage_class_section(spec: dict[str, Any]) -> list[Section]:
    if not spec.get("storageClassName"):
        return []
    return [
        Section(
            id="storage-class",
            data=InfoGridData(
                items=[
                    InfoRow(label="Storage Class", value=spec["storageClassName"], color="purple")
                ]
            ),
        )
    ]


def volume_source_rows(spec: dict[str, Any]) -> list[InfoRow]:
    """Describe the backing storage of a PersistentVolume."""
    if spec.get("hostPath"):
        return [
            InfoRow(label="Type", value="HostPath"),
            InfoRow(label="Path", value=spec["hostPath"].get("path"), color="cyan"),
        ]
    if spec.get("nfs"):
        return [
            InfoRow(label="Type", value="NFS"),
            InfoRow(label="Server", value=spec["nfs"].get("server"), color="cyan"),
            InfoRow(label="Path", value=spec["nfs"].get("path"), color="cyan"),
        ]
    if spec.get("csi"):
        rows = [
            InfoRow(label="Type", value="CSI"),
            InfoRow(label="Driver", value=spec["csi"].get("driver"), color="purple"),
        ]
        if spec["csi"].get("volumeHandle"):
            rows.append(InfoRow(label="Handle", value=spec["csi"]["volumeHandle"], color="cyan"))
        return rows
    if spec.get("local"):
        return [
            InfoRow(label="Type", value="Local"),
            InfoRow(label="Path", value=spec["local"].get("path"), color="cyan"),
        ]
    if spec.get("awsElasticBlockStore"):
        return [
            InfoRow(label="Type", value="AWS EBS"),
            InfoRow(
                label="Volume ID", value=spec["awsElasticBlockStore"].get("volumeID"), color="cyan"
            ),
        ]
    if spec.get("gcePersistentDisk"):
        return [
            InfoRow(label="Type", value="GCE PD"),
            InfoRow(label="PD Name", value=spec["gcePersistentDisk"].get("pdName"), color="cyan"),
        ]
    if spec.get("azureDisk"):
        return [
            InfoRow(label="Type", value="Azure Disk"),
            InfoRow(label="Disk Name", value=spec["azureDisk"].get("diskName"), color="cyan"),
        ]
    return [InfoRow(label="Type", value="Unknown")]


def node_affinity_terms(spec: dict[str, Any]) -> list[str]:
    """Flatten required node selector terms into ``key Operator values`` strings."""
    terms = dig(spec, "nodeAffinity", "required", "nodeSelectorTerms", default=[])
    expressions = []
    for term in terms:
        for expr in term.get("matchExpressions") or []:
            text = f"{expr.get('key')} {expr.get('operator')}"
            if expr.get("values"):
                text += f" {', '.join(expr['values'])}"
            expressions.append(text)
    return expressions


class PersistentVolumeAdapter(ResourceAdapter):
    kinds = ("PersistentVolume", "PersistentVolumes")
    resource_config = BuiltinResources.PERSISTENT_VOLUMES

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        phase = dig(resource, "status", "phase") or "Unknown"
        reclaim = spec.get("persistentVolumeReclaimPolicy") or "Delete"

        sections = [
            Section(
                id="status",
                data=StatusCardsData(
                    items=[
                        StatusCard(label="Phase", value=phase, status=pv_phase_status(phase)),
                        StatusCard(
                            label="Capacity",
                            value=dig(spec, "capacity", "storage") or "Unknown",
                        ),
                        StatusCard(
                            label="Reclaim Policy",
                            value=reclaim,
                            status=StatusLevel.WARNING
                            if reclaim == "Retain"
                            else StatusLevel.NEUTRAL,
                        ),
                        StatusCard(
                            label="Volume Mode", value=spec.get("volumeMode") or "Filesystem"
                        ),
                    ]
                ),
            ),
            *self.metadata_sections(resource),
            *_access_modes_section(spec),
            *_storage_class_section(spec),
        ]

        claim = spec.get("claimRef")
        if claim:
            sections.append(
                Section(
                    id="claim-ref",
                    data=InfoGridData(
                        items=[
                            InfoRow(
                                label="Bound To",
                                value=f"{claim.get('namespace')}/{claim.get('name')}",
                                color="cyan",
                            )
                        ]
                    ),
                )
            )

        sections.append(
            Section(
                id="source",
                title="Volume Source",
                data=InfoGridData(items=volume_source_rows(spec), columns=2),
            )
        )

        affinity = node_affinity_terms(spec)
        if affinity:
            sections.append(
                Section(id="node-affinity", title="Node Affinity", data=TagsData(values=affinity))
            )

        mount_options = spec.get("mountOptions") or []
        if mount_options:
            sections.append(
                Section(
                    id="mount-options", title="Mount Options", data=TagsData(values=mount_options)
                )
            )
        return sections


class PersistentVolumeClaimAdapter(ResourceAdapter):
    kinds = ("PersistentVolumeClaim", "PersistentVolumeClaims")
    resource_config = BuiltinResources.PERSISTENT_VOLUME_CLAIMS

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}
        phase = status.get("phase") or "Unknown"

        cards = [
            StatusCard(label="Phase", value=phase, status=pvc_phase_status(phase)),
            StatusCard(
                label="Requested",
                value=dig(spec, "resources", "requests", "storage") or "Not specified",
            ),
        ]
        actual = dig(status, "capacity", "storage")
        if actual:
            cards.append(
                StatusCard(label="Actual Capacity", value=actual, status=StatusLevel.SUCCESS)
            )
        cards.append(StatusCard(label="Volume Mode", value=spec.get("volumeMode") or "Filesystem"))

        sections = [
            Section(id="status", data=StatusCardsData(items=cards)),
            *self.metadata_sections(resource),
            *_access_modes_section(spec),
            *_storage_class_section(spec),
        ]

        volume_name = spec.get("volumeName")
        if volume_name:
            bound = InfoGridData(items=[InfoRow(label="Bound To", value=volume_name, color="cyan")])
            sections.append(Section(id="bound-volume", data=bound))
        else:
            sections.append(
                Section(
                    id="bound-volume",
                    data=MessageData(text="Not bound to any volume", status=StatusLevel.WARNING),
                )
            )
        return sections
