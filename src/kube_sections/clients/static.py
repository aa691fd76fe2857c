"""In-memory resource accessor backed by a fixed list of resources."""

from __future__ import annotations

import copy
import logging
from typing import Any

from kube_sections.clients.base import BuiltinResources, ResourceConfig
from kube_sections.utils.errors import ResourceAccessError

logger = logging.getLogger(__name__)


class StaticResourceAccessor:
    """Serves resources from memory, e.g. documents loaded from a manifest file.

    Patches and deletes are applied to the in-memory copies, so actions can
    be exercised without a cluster.
    """

    def __init__(self, resources: list[dict[str, Any]] | None = None) -> None:
        self._resources = [copy.deepcopy(r) for r in resources or [] if isinstance(r, dict)]

    @property
    def resources(self) -> list[dict[str, Any]]:
        return self._resources

    async def get_resource_config(self, plural: str) -> ResourceConfig | None:
        config = BuiltinResources.by_plural(plural)
        if config is None:
            logger.debug(f"No builtin resource type for '{plural}'")
        return config

    async def get_resource_list(
        self, config: ResourceConfig, namespace: str | None
    ) -> list[dict[str, Any]]:
        return [copy.deepcopy(r) for r in self._resources if self._matches(r, config, namespace)]

    async def patch_resource(
        self,
        config: ResourceConfig,
        name: str,
        namespace: str | None,
        body: dict[str, Any],
    ) -> None:
        target = self._find(config, name, namespace)
        _merge_patch(target, body)
        logger.debug(f"Patched {config.kind} {namespace}/{name}")

    async def delete_resource(
        self, config: ResourceConfig, name: str, namespace: str | None
    ) -> None:
        target = self._find(config, name, namespace)
        self._resources.remove(target)
        logger.debug(f"Deleted {config.kind} {namespace}/{name}")

    def _find(self, config: ResourceConfig, name: str, namespace: str | None) -> dict[str, Any]:
        for resource in self._resources:
            if self._matches(resource, config, namespace) and _name(resource) == name:
                return resource
        raise ResourceAccessError(f"{config.kind} '{name}' not found", status=404)

    @staticmethod
    def _matches(resource: dict[str, Any], config: ResourceConfig, namespace: str | None) -> bool:
        if resource.get("kind") != config.kind:
            return False
        if namespace is None or not config.namespaced:
            return True
        return (resource.get("metadata") or {}).get("namespace") == namespace


def _name(resource: dict[str, Any]) -> str | None:
    return (resource.get("metadata") or {}).get("name")


def _merge_patch(target: dict[str, Any], patch: dict[str, Any]) -> None:
    """Apply a JSON merge patch (RFC 7386) in place."""
    for key, value in patch.items():
        if value is None:
            target.pop(key, None)
        elif isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_patch(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
