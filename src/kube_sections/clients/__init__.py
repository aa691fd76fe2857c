"""Resource accessors: the only path through which adapters reach a cluster."""

from kube_sections.clients.base import BuiltinResources, ResourceAccessor, ResourceConfig
from kube_sections.clients.static import StaticResourceAccessor

__all__ = [
    "BuiltinResources",
    "ResourceAccessor",
    "ResourceConfig",
    "StaticResourceAccessor",
]
