"""Plugin manager for adapter plugins.

Wraps a pluggy manager configured with the kube-sections hook
specifications. Core plugins ship with the package; external ones are
discovered through the ``kube_sections.plugins`` entry point group.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pluggy

from kube_sections.hooks import PROJECT_NAME, KubeSectionsHookSpec

if TYPE_CHECKING:
    from kube_sections.adapters.base import ResourceAdapter
    from kube_sections.clients.base import ResourceAccessor
    from kube_sections.plugin import PluginMetadata

logger = logging.getLogger(__name__)

PLUGIN_ENTRY_POINT_GROUP = "kube_sections.plugins"


def _plugin_name(plugin: Any) -> str:
    get_metadata = getattr(plugin, "kube_sections_get_plugin_metadata", None)
    if get_metadata is not None:
        return get_metadata().name
    return type(plugin).__name__


class PluginManager:
    """Registry of adapter plugins, keyed by plugin name."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(KubeSectionsHookSpec)
        self._registered_plugins: dict[str, Any] = {}

    @property
    def hook(self) -> Any:
        """Hook relay used to call every plugin's implementation."""
        return self._pm.hook

    @property
    def registered_plugins(self) -> dict[str, Any]:
        return self._registered_plugins

    def register_plugin(self, plugin: Any, name: str | None = None) -> str:
        """Register a plugin and return the name it was registered under.

        Without an explicit ``name`` the plugin's metadata name is used, or
        its class name when it provides no metadata.
        """
        name = name or _plugin_name(plugin)
        self._pm.register(plugin, name=name)
        self._registered_plugins[name] = plugin
        logger.debug(f"Registered plugin {name}")
        return name

    def unregister_plugin(self, name: str) -> None:
        plugin = self._registered_plugins.pop(name, None)
        if plugin is None:
            return
        self._pm.unregister(plugin)
        logger.debug(f"Unregistered plugin {name}")

    def load_core_plugins(self) -> int:
        """Register the adapter plugins bundled with kube-sections."""
        from kube_sections.adapters.registry import get_core_plugins

        plugins = get_core_plugins()
        for plugin in plugins:
            self.register_plugin(plugin)
        logger.info(f"Loaded {len(plugins)} core adapter plugins")
        return len(plugins)

    def load_entrypoint_plugins(self) -> int:
        """Load plugins advertised by installed distributions.

        Returns:
            Number of plugins pluggy loaded from the entry point group.
        """
        count = self._pm.load_setuptools_entrypoints(PLUGIN_ENTRY_POINT_GROUP)

        # pluggy registers entry point plugins itself; mirror them by name
        for plugin in self._pm.get_plugins():
            name = self._pm.get_name(plugin)
            if name and name not in self._registered_plugins:
                self._registered_plugins[name] = plugin
                logger.info(f"Loaded adapter plugin {name} from entry point")

        if count:
            logger.info(f"Loaded {count} plugins from {PLUGIN_ENTRY_POINT_GROUP}")
        return count

    def get_all_metadata(self) -> list[PluginMetadata]:
        return [meta for meta in self.hook.kube_sections_get_plugin_metadata() if meta]

    def collect_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        """Ask every plugin for its adapters, bound to ``accessor``.

        pluggy calls the most recently registered plugin first. The results
        are reversed so core adapters precede external ones.
        """
        results = self.hook.kube_sections_get_adapters(accessor=accessor)
        adapters = [adapter for batch in reversed(results) for adapter in batch or []]
        logger.debug(
            f"Collected {len(adapters)} adapters from {len(self._registered_plugins)} plugins"
        )
        return adapters
