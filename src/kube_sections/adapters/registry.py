"""Plugin registry for the built-in adapters.

Each plugin groups the adapters of one area of the Kubernetes API and
contributes them through the ``kube_sections_get_adapters`` hook.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_sections.plugin import BasePlugin, PluginMetadata

if TYPE_CHECKING:
    from kube_sections.adapters.base import ResourceAdapter
    from kube_sections.clients.base import ResourceAccessor


class WorkloadsPlugin(BasePlugin):
    """Pods and the controllers that replicate them."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="workloads",
                version="1.0.0",
                description="Deployments, ReplicaSets, StatefulSets, DaemonSets and Pods",
                kinds=["Deployment", "ReplicaSet", "StatefulSet", "DaemonSet", "Pod"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.pods import PodAdapter
        from kube_sections.adapters.workloads import (
            DaemonSetAdapter,
            DeploymentAdapter,
            ReplicaSetAdapter,
            StatefulSetAdapter,
        )

        return [
            DeploymentAdapter(accessor),
            ReplicaSetAdapter(accessor),
            StatefulSetAdapter(accessor),
            DaemonSetAdapter(accessor),
            PodAdapter(accessor),
        ]


class BatchPlugin(BasePlugin):
    """Run-to-completion workloads."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="batch",
                version="1.0.0",
                description="Jobs and CronJobs",
                kinds=["Job", "CronJob"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.batch import CronJobAdapter, JobAdapter

        return [JobAdapter(accessor), CronJobAdapter(accessor)]


class ClusterPlugin(BasePlugin):
    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="cluster",
                version="1.0.0",
                description="Nodes and Events",
                kinds=["Node", "Event"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.cluster import EventAdapter, NodeAdapter

        return [NodeAdapter(accessor), EventAdapter(accessor)]


class NetworkPlugin(BasePlugin):
    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="network",
                version="1.0.0",
                description="Services and Ingresses",
                kinds=["Service", "Ingress"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.network import IngressAdapter, ServiceAdapter

        return [ServiceAdapter(accessor), IngressAdapter(accessor)]


class ConfigPlugin(BasePlugin):
    """Configuration data. Secret values are classified and never exposed in the clear."""

    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="config",
                version="1.0.0",
                description="Secrets and ConfigMaps",
                kinds=["Secret", "ConfigMap"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.configmaps import ConfigMapAdapter
        from kube_sections.adapters.secrets import SecretAdapter

        return [SecretAdapter(accessor), ConfigMapAdapter(accessor)]


class StoragePlugin(BasePlugin):
    def __init__(self) -> None:
        super().__init__(
            PluginMetadata(
                name="storage",
                version="1.0.0",
                description="PersistentVolumes and PersistentVolumeClaims",
                kinds=["PersistentVolume", "PersistentVolumeClaim"],
            )
        )

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        from kube_sections.adapters.storage import (
            PersistentVolumeAdapter,
            PersistentVolumeClaimAdapter,
        )

        return [PersistentVolumeAdapter(accessor), PersistentVolumeClaimAdapter(accessor)]


def get_core_plugins() -> list[BasePlugin]:
    """Return all built-in adapter plugin instances.

    Returns:
        List of plugin instances for all core adapters.
    """
    return [
        WorkloadsPlugin(),
        BatchPlugin(),
        ClusterPlugin(),
        NetworkPlugin(),
        ConfigPlugin(),
        StoragePlugin(),
    ]
