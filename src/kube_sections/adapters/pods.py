"""Pod adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kube_sections.adapters.base import ResourceAdapter, as_int, container_sections
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    Section,
    StatusCard,
    StatusCardsData,
    VolumeInfo,
    VolumesData,
    VolumeUsage,
)
from kube_sections.utils.classification import conditions_section, pod_phase_status

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource


def _mode(value: Any) -> str:
    return str(value).zfill(4)


def _with_mode(source: dict[str, Any], extra: dict[str, str]) -> dict[str, str]:
    if source.get("defaultMode") is not None:
        extra["defaultMode"] = _mode(source["defaultMode"])
    return extra


def volume_source(volume: dict[str, Any]) -> tuple[str, str, dict[str, str]]:
    """Identify a pod volume's type, a one-line source and type-specific details."""
    if (config_map := volume.get("configMap")) is not None:
        extra = {}
        if config_map.get("optional") is not None:
            extra["optional"] = str(config_map["optional"]).lower()
        return "ConfigMap", config_map.get("name") or "", _with_mode(config_map, extra)

    if (secret := volume.get("secret")) is not None:
        extra = {}
        if secret.get("optional") is not None:
            extra["optional"] = str(secret["optional"]).lower()
        return "Secret", secret.get("secretName") or "", _with_mode(secret, extra)

    if (empty_dir := volume.get("emptyDir")) is not None:
        extra = {"sizeLimit": str(empty_dir["sizeLimit"])} if empty_dir.get("sizeLimit") else {}
        return "EmptyDir", empty_dir.get("medium") or "default", extra

    if (host_path := volume.get("hostPath")) is not None:
        extra = {"type": host_path["type"]} if host_path.get("type") else {}
        return "HostPath", host_path.get("path") or "", extra

    if (claim := volume.get("persistentVolumeClaim")) is not None:
        extra = {"readOnly": "true"} if claim.get("readOnly") else {}
        return "PVC", claim.get("claimName") or "", extra

    if (projected := volume.get("projected")) is not None:
        sources = projected.get("sources") or []
        kinds = []
        for source in sources:
            for key, label in (
                ("configMap", "ConfigMap"),
                ("secret", "Secret"),
                ("serviceAccountToken", "ServiceAccountToken"),
                ("downwardAPI", "DownwardAPI"),
            ):
                if key in source:
                    kinds.append(label)
                    break
            else:
                kinds.append("Unknown")
        return (
            "Projected",
            f"{len(sources)} sources",
            _with_mode(projected, {"sources": ", ".join(kinds)}),
        )

    if (downward := volume.get("downwardAPI")) is not None:
        return "DownwardAPI", f"{len(downward.get('items') or [])} items", _with_mode(downward, {})

    if (nfs := volume.get("nfs")) is not None:
        extra = {"readOnly": "true"} if nfs.get("readOnly") else {}
        return "NFS", f"{nfs.get('server')}:{nfs.get('path')}", extra

    if (csi := volume.get("csi")) is not None:
        extra = {}
        if csi.get("fsType"):
            extra["fsType"] = csi["fsType"]
        if csi.get("readOnly"):
            extra["readOnly"] = "true"
        return "CSI", csi.get("driver") or "", extra

    return "Unknown", "", {}


def volume_info(volume: dict[str, Any], containers: list[dict[str, Any]]) -> VolumeInfo:
    """Describe a pod volume together with every container that mounts it."""
    name = volume.get("name") or ""
    volume_type, source, extra = volume_source(volume)
    mounts = [
        VolumeUsage(
            container=container.get("name") or "",
            mount_path=mount.get("mountPath") or "",
            read_only=bool(mount.get("readOnly", False)),
            sub_path=mount.get("subPath"),
        )
        for container in containers
        for mount in container.get("volumeMounts") or []
        if mount.get("name") == name
    ]
    return VolumeInfo(name=name, type=volume_type, source=source, extra=extra, mounts=mounts)


class PodAdapter(ResourceAdapter):
    kinds = ("Pod", "Pods")
    resource_config = BuiltinResources.PODS

    annotation_excludes = ("kubectl.kubernetes.io/last-applied-configuration",)

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        statuses = status.get("containerStatuses") or []
        restarts = sum(as_int(s.get("restartCount")) for s in statuses)
        phase = status.get("phase")

        sections = [
            Section(
                id="status",
                data=StatusCardsData(
                    items=[
                        StatusCard(
                            label="Phase",
                            value=phase or "Unknown",
                            status=pod_phase_status(phase),
                        ),
                        StatusCard(label="Pod IP", value=status.get("podIP") or "Pending"),
                        StatusCard(label="Node", value=spec.get("nodeName") or "Not scheduled"),
                        StatusCard(
                            label="Restarts",
                            value=restarts,
                            status=StatusLevel.WARNING if restarts > 0 else StatusLevel.SUCCESS,
                        ),
                    ]
                ),
            ),
            *self.metadata_sections(resource),
            *container_sections(spec, statuses, status.get("initContainerStatuses")),
        ]

        volumes = spec.get("volumes") or []
        if volumes:
            containers = [*(spec.get("containers") or []), *(spec.get("initContainers") or [])]
            sections.append(
                Section(
                    id="volumes",
                    title="Volumes",
                    data=VolumesData(items=[volume_info(v, containers) for v in volumes]),
                )
            )

        sections.extend(conditions_section(status.get("conditions")))
        return sections
