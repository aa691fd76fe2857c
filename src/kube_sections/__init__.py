"""Renderer-agnostic display sections for Kubernetes resources."""

from kube_sections.adapters.base import ResourceAdapter
from kube_sections.models.sections import ResourceSections, Section
from kube_sections.registry import AdapterRegistry, create_registry

__version__ = "0.1.0"

__all__ = [
    "AdapterRegistry",
    "ResourceAdapter",
    "ResourceSections",
    "Section",
    "create_registry",
    "__version__",
]
