"""Resource accessor interface used by relationship loaders and actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ResourceConfig:
    """A fetchable resource type, as resolved by discovery."""

    group: str
    version: str
    plural: str
    kind: str
    namespaced: bool = True

    @property
    def api_version(self) -> str:
        """Return the apiVersion string (``v1`` for the core group)."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


class BuiltinResources:
    """Resource types known without a discovery round-trip."""

    PODS = ResourceConfig(group="", version="v1", plural="pods", kind="Pod")
    SERVICES = ResourceConfig(group="", version="v1", plural="services", kind="Service")
    SECRETS = ResourceConfig(group="", version="v1", plural="secrets", kind="Secret")
    CONFIG_MAPS = ResourceConfig(group="", version="v1", plural="configmaps", kind="ConfigMap")
    EVENTS = ResourceConfig(group="", version="v1", plural="events", kind="Event")
    NODES = ResourceConfig(group="", version="v1", plural="nodes", kind="Node", namespaced=False)
    PERSISTENT_VOLUMES = ResourceConfig(
        group="",
        version="v1",
        plural="persistentvolumes",
        kind="PersistentVolume",
        namespaced=False,
    )
    PERSISTENT_VOLUME_CLAIMS = ResourceConfig(
        group="", version="v1", plural="persistentvolumeclaims", kind="PersistentVolumeClaim"
    )
    DEPLOYMENTS = ResourceConfig(
        group="apps", version="v1", plural="deployments", kind="Deployment"
    )
    REPLICA_SETS = ResourceConfig(
        group="apps", version="v1", plural="replicasets", kind="ReplicaSet"
    )
    STATEFUL_SETS = ResourceConfig(
        group="apps", version="v1", plural="statefulsets", kind="StatefulSet"
    )
    DAEMON_SETS = ResourceConfig(group="apps", version="v1", plural="daemonsets", kind="DaemonSet")
    JOBS = ResourceConfig(group="batch", version="v1", plural="jobs", kind="Job")
    CRON_JOBS = ResourceConfig(group="batch", version="v1", plural="cronjobs", kind="CronJob")
    INGRESSES = ResourceConfig(
        group="networking.k8s.io", version="v1", plural="ingresses", kind="Ingress"
    )

    @classmethod
    def all_resources(cls) -> list[ResourceConfig]:
        """Return all builtin resource types."""
        return [
            cls.PODS,
            cls.SERVICES,
            cls.SECRETS,
            cls.CONFIG_MAPS,
            cls.EVENTS,
            cls.NODES,
            cls.PERSISTENT_VOLUMES,
            cls.PERSISTENT_VOLUME_CLAIMS,
            cls.DEPLOYMENTS,
            cls.REPLICA_SETS,
            cls.STATEFUL_SETS,
            cls.DAEMON_SETS,
            cls.JOBS,
            cls.CRON_JOBS,
            cls.INGRESSES,
        ]

    @classmethod
    def by_plural(cls, plural: str) -> ResourceConfig | None:
        plural = plural.lower()
        for config in cls.all_resources():
            if config.plural == plural:
                return config
        return None


@runtime_checkable
class ResourceAccessor(Protocol):
    """Asynchronous access to cluster resources.

    Implementations own transport, auth and timeout policy. Any method may
    raise; callers decide how failures are isolated.
    """

    async def get_resource_config(self, plural: str) -> ResourceConfig | None:
        """Resolve a plural kind name, or return None if the server lacks it."""
        ...

    async def get_resource_list(
        self, config: ResourceConfig, namespace: str | None
    ) -> list[dict[str, Any]]:
        """List resources of a type, optionally scoped to a namespace."""
        ...

    async def patch_resource(
        self,
        config: ResourceConfig,
        name: str,
        namespace: str | None,
        body: dict[str, Any],
    ) -> None:
        """Apply a merge patch to a resource."""
        ...

    async def delete_resource(
        self, config: ResourceConfig, name: str, namespace: str | None
    ) -> None:
        """Delete a resource."""
        ...
