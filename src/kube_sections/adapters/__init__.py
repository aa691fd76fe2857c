"""Per-kind resource adapters."""

from kube_sections.adapters.base import ResourceAdapter

__all__ = ["ResourceAdapter"]
