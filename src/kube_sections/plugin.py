"""Plugin interface for kube-sections.

This module defines the plugin base class and metadata that adapter
plugins use to integrate with the registry via pluggy hooks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kube_sections.hooks import hookimpl

if TYPE_CHECKING:
    from kube_sections.adapters.base import ResourceAdapter
    from kube_sections.clients.base import ResourceAccessor


@dataclass
class PluginMetadata:
    """Metadata describing a kube-sections plugin."""

    name: str
    """Unique plugin name, used as the pluggy registration name."""

    version: str
    """Plugin version string."""

    description: str
    """One-line summary of the kinds the plugin covers."""

    kinds: list[str] = field(default_factory=list)
    """Resource kinds the plugin's adapters handle, for listing purposes."""


class BasePlugin:
    """Base implementation of a kube-sections plugin.

    Subclasses override ``create_adapters`` (or the hook itself) to return
    adapters bound to the accessor they receive.

    Example entry point in pyproject.toml for external plugins:
        [project.entry-points."kube_sections.plugins"]
        my_plugin = "my_package.plugin:MyPlugin"
    """

    def __init__(self, metadata: PluginMetadata) -> None:
        self._metadata = metadata

    @property
    def metadata(self) -> PluginMetadata:
        return self._metadata

    @hookimpl
    def kube_sections_get_plugin_metadata(self) -> PluginMetadata:
        return self._metadata

    @hookimpl
    def kube_sections_get_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:
        return self.create_adapters(accessor)

    def create_adapters(self, accessor: ResourceAccessor) -> list[ResourceAdapter]:  # noqa: ARG002
        """Build this plugin's adapters. Override in subclass."""
        return []
