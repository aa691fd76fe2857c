"""Hook specifications for kube-sections plugins.

Adapters are contributed through pluggy hooks so that third-party packages
can add kinds (e.g. for their own CRDs) without touching the core registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from kube_sections.adapters.base import ResourceAdapter
    from kube_sections.clients.base import ResourceAccessor
    from kube_sections.plugin import PluginMetadata

PROJECT_NAME = "kube_sections"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class KubeSectionsHookSpec:
    """Hooks a kube-sections plugin may implement."""

    @hookspec
    def kube_sections_get_plugin_metadata(self) -> PluginMetadata:  # type: ignore[empty-body]
        """Return metadata identifying the plugin."""

    @hookspec
    def kube_sections_get_adapters(  # type: ignore[empty-body]
        self, accessor: ResourceAccessor
    ) -> list[ResourceAdapter]:
        """Return adapter instances bound to the given resource accessor.

        Args:
            accessor: Accessor the adapters use for relationship loaders
                and actions.
        """
