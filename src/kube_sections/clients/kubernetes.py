"""Resource accessor backed by the Kubernetes dynamic client.

The ``kubernetes`` client is synchronous, so every call is pushed onto a
worker thread with ``asyncio.to_thread`` to keep the event loop free while
related-resource loaders are waiting on the API server.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from kubernetes import client as k8s_client  # type: ignore[import-untyped]
from kubernetes import config as k8s_config  # type: ignore[import-untyped]
from kubernetes.client import ApiException  # type: ignore[import-untyped]
from kubernetes.config.config_exception import ConfigException  # type: ignore[import-untyped]
from kubernetes.dynamic import DynamicClient  # type: ignore[import-untyped]
from kubernetes.dynamic.exceptions import ResourceNotFoundError  # type: ignore[import-untyped]

from kube_sections.clients.base import ResourceConfig
from kube_sections.config import SectionsConfig, get_config
from kube_sections.utils.errors import ConfigurationError, ResourceAccessError

if TYPE_CHECKING:
    from kubernetes.dynamic.resource import Resource  # type: ignore[import-untyped]

logger = logging.getLogger(__name__)

MERGE_PATCH = "application/merge-patch+json"


class KubernetesResourceAccessor:
    """Accessor for a live cluster.

    The dynamic client runs API discovery when it is created, so it is built
    lazily on first use rather than in ``__init__``.
    """

    def __init__(
        self,
        config: SectionsConfig | None = None,
        dynamic_client: DynamicClient | None = None,
    ) -> None:
        self._config = config or get_config()
        self._dynamic = dynamic_client

    @property
    def dynamic(self) -> DynamicClient:
        """Get the dynamic client, connecting on first access.

        Raises:
            ConfigurationError: If neither in-cluster nor kubeconfig access works.
        """
        if self._dynamic is None:
            self._dynamic = DynamicClient(self._load_api_client())
        return self._dynamic

    def _load_api_client(self) -> k8s_client.ApiClient:
        if self._config.kubeconfig_path is None and self._config.kubeconfig_context is None:
            try:
                k8s_config.load_incluster_config()
                logger.info("Using in-cluster Kubernetes configuration")
                return k8s_client.ApiClient()
            except ConfigException:
                logger.debug("Not running in-cluster, falling back to kubeconfig")

        try:
            api_client = k8s_config.new_client_from_config(
                config_file=str(self._config.kubeconfig_path)
                if self._config.kubeconfig_path
                else None,
                context=self._config.kubeconfig_context,
            )
        except (ConfigException, FileNotFoundError) as e:
            raise ConfigurationError(f"Failed to load Kubernetes configuration: {e}") from e

        logger.info(
            f"Using kubeconfig {self._config.kubeconfig_path or '(default)'}"
            f" context {self._config.kubeconfig_context or '(current)'}"
        )
        return api_client

    # -------------------------------------------------------------------------
    # ResourceAccessor
    # -------------------------------------------------------------------------

    async def get_resource_config(self, plural: str) -> ResourceConfig | None:
        return await asyncio.to_thread(self._discover, plural)

    async def get_resource_list(
        self, config: ResourceConfig, namespace: str | None
    ) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._list, config, namespace)

    async def patch_resource(
        self,
        config: ResourceConfig,
        name: str,
        namespace: str | None,
        body: dict[str, Any],
    ) -> None:
        await asyncio.to_thread(self._patch, config, name, namespace, body)

    async def delete_resource(
        self, config: ResourceConfig, name: str, namespace: str | None
    ) -> None:
        await asyncio.to_thread(self._delete, config, name, namespace)

    # -------------------------------------------------------------------------
    # Blocking implementations
    # -------------------------------------------------------------------------

    def _discover(self, plural: str) -> ResourceConfig | None:
        try:
            candidates = self.dynamic.resources.search(name=plural.lower())
        except ResourceNotFoundError:
            candidates = []

        if not candidates:
            logger.debug(f"Resource type '{plural}' is not served by the cluster")
            return None

        # Prefer the core group, then whatever discovery marks as preferred
        candidates = sorted(
            candidates,
            key=lambda r: (r.group != "", not getattr(r, "preferred", False)),
        )
        resource = candidates[0]
        return ResourceConfig(
            group=resource.group or "",
            version=resource.api_version,
            plural=resource.name,
            kind=resource.kind,
            namespaced=bool(resource.namespaced),
        )

    def _resource(self, config: ResourceConfig) -> Resource:
        try:
            return self.dynamic.resources.get(api_version=config.api_version, kind=config.kind)
        except ResourceNotFoundError as e:
            raise ResourceAccessError(
                f"Resource type {config.kind} ({config.api_version}) not available"
            ) from e

    def _list(self, config: ResourceConfig, namespace: str | None) -> list[dict[str, Any]]:
        resource = self._resource(config)
        try:
            result = resource.get(
                namespace=namespace if config.namespaced else None,
                _request_timeout=self._config.request_timeout,
            )
        except ApiException as e:
            raise ResourceAccessError(
                f"Failed to list {config.plural} in {namespace or 'all namespaces'}: {e.reason}",
                status=e.status,
            ) from e
        items = result.to_dict().get("items") or []
        logger.debug(f"Listed {len(items)} {config.plural} in {namespace or 'all namespaces'}")
        return items

    def _patch(
        self,
        config: ResourceConfig,
        name: str,
        namespace: str | None,
        body: dict[str, Any],
    ) -> None:
        resource = self._resource(config)
        try:
            resource.patch(
                name=name,
                namespace=namespace if config.namespaced else None,
                body=body,
                content_type=MERGE_PATCH,
                _request_timeout=self._config.request_timeout,
            )
        except ApiException as e:
            raise ResourceAccessError(
                f"Failed to patch {config.kind} '{name}': {e.reason}", status=e.status
            ) from e
        logger.info(f"Patched {config.kind} {namespace}/{name}")

    def _delete(self, config: ResourceConfig, name: str, namespace: str | None) -> None:
        resource = self._resource(config)
        try:
            resource.delete(
                name=name,
                namespace=namespace if config.namespaced else None,
                _request_timeout=self._config.request_timeout,
            )
        except ApiException as e:
            raise ResourceAccessError(
                f"Failed to delete {config.kind} '{name}': {e.reason}", status=e.status
            ) from e
        logger.info(f"Deleted {config.kind} {namespace}/{name}")
