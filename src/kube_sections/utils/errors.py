"""Exception hierarchy for kube-sections.

Errors in adapters are recovered locally wherever possible; these types
cover the few places where failure is surfaced to the caller: registry
construction, accessor calls and action execution.
"""

from __future__ import annotations


class KubeSectionsError(Exception):
    """Base exception for all kube-sections errors."""


class DuplicateKindError(KubeSectionsError):
    """Two adapters claim the same kind alias."""

    def __init__(self, kind: str, existing: str, duplicate: str) -> None:
        self.kind = kind
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Kind '{kind}' is already registered by {existing}; "
            f"refusing duplicate registration from {duplicate}"
        )


class ConfigurationError(KubeSectionsError):
    """Cluster access could not be configured."""


class ResourceAccessError(KubeSectionsError):
    """A call through the resource accessor failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class ActionError(KubeSectionsError):
    """An action could not be executed against the given resource."""
