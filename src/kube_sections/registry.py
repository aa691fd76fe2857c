"""Adapter registry: resolves a resource's kind to the adapter that renders it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from kube_sections.config import SectionsConfig, get_config
from kube_sections.plugin_manager import PluginManager
from kube_sections.utils.errors import DuplicateKindError

if TYPE_CHECKING:
    from kube_sections.adapters.base import ResourceAdapter
    from kube_sections.clients.base import ResourceAccessor
    from kube_sections.models.actions import Resource, ResourceAction
    from kube_sections.models.sections import ResourceSections

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Immutable mapping from kind aliases to adapters.

    Lookups are case-insensitive and exact. Two adapters claiming the same
    alias is a construction error.
    """

    def __init__(self, adapters: Iterable[ResourceAdapter]) -> None:
        by_kind: dict[str, ResourceAdapter] = {}
        for adapter in adapters:
            for alias in adapter.kinds:
                key = alias.lower()
                existing = by_kind.get(key)
                if existing is not None and existing is not adapter:
                    raise DuplicateKindError(alias, existing.name, adapter.name)
                by_kind[key] = adapter
            logger.debug(f"Registered {adapter.name} for kinds: {', '.join(adapter.kinds)}")
        self._adapters: Mapping[str, ResourceAdapter] = MappingProxyType(by_kind)

    @classmethod
    def from_plugins(
        cls,
        accessor: ResourceAccessor,
        plugin_manager: PluginManager | None = None,
        load_entrypoints: bool = True,
    ) -> AdapterRegistry:
        """Build a registry from the adapters every plugin contributes.

        Args:
            accessor: Accessor handed to every adapter.
            plugin_manager: Pre-populated manager. When omitted, a new one is
                created with the core plugins and, if ``load_entrypoints``,
                any external plugins installed under the entry point group.
            load_entrypoints: Whether to discover external plugins.
        """
        if plugin_manager is None:
            plugin_manager = PluginManager()
            plugin_manager.load_core_plugins()
            if load_entrypoints:
                plugin_manager.load_entrypoint_plugins()

        registry = cls(plugin_manager.collect_adapters(accessor))
        logger.info(f"Adapter registry ready with {len(registry.adapters)} kind aliases")
        return registry

    @property
    def adapters(self) -> Mapping[str, ResourceAdapter]:
        """Read-only view of the alias to adapter mapping."""
        return self._adapters

    def get_adapter(self, kind: str | None) -> ResourceAdapter | None:
        if not kind:
            return None
        return self._adapters.get(kind.lower())

    def has_adapter(self, kind: str | None) -> bool:
        return self.get_adapter(kind) is not None

    def adapt_resource(
        self, resource: Resource, namespace: str | None = None
    ) -> ResourceSections | None:
        """Adapt a resource, or return None when its kind is missing or unsupported."""
        kind = resource.get("kind") if isinstance(resource, dict) else None
        adapter = self.get_adapter(kind)
        if adapter is None:
            logger.debug(f"No adapter for kind {kind!r}")
            return None
        return adapter.adapt(resource, namespace)

    def get_resource_actions(self, resource: Resource) -> list[ResourceAction]:
        """Return the adapter's actions that are visible for this resource."""
        kind = resource.get("kind") if isinstance(resource, dict) else None
        adapter = self.get_adapter(kind)
        if adapter is None:
            return []
        return [action for action in adapter.actions if action.visible_for(resource)]

    def get_supported_kinds(self) -> list[str]:
        """Return every registered alias, lowercased."""
        return list(self._adapters)


def create_registry(
    accessor: ResourceAccessor | None = None,
    config: SectionsConfig | None = None,
) -> AdapterRegistry:
    """Create a registry with core and entry point plugins.

    Args:
        accessor: Accessor for relationship loaders and actions. Defaults to
            a cluster accessor configured from ``config``.
        config: Settings. Defaults to the process-wide configuration.
    """
    config = config or get_config()
    if accessor is None:
        from kube_sections.clients.kubernetes import KubernetesResourceAccessor

        accessor = KubernetesResourceAccessor(config)
    return AdapterRegistry.from_plugins(
        accessor, load_entrypoints=config.load_entrypoint_plugins
    )
