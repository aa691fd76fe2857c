"""Action descriptors attached to resource adapters."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

Resource = dict[str, Any]


class ActionVariant(str, Enum):
    """Visual style for action buttons."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    DANGER = "danger"
    WARNING = "warning"


@dataclass(frozen=True)
class ActionConfirmation:
    """Prompt shown before an action runs."""

    title: str
    message: str
    confirm_label: str | None = None


@dataclass(frozen=True)
class ResourceAction:
    """An operation the UI layer can run against a resource.

    ``execute`` is only ever invoked by the UI layer. ``is_visible`` and
    ``is_disabled`` are evaluated against the resource instance each time
    they are asked, never at registration.
    """

    id: str
    label: str
    execute: Callable[[Resource, str | None], Awaitable[None]]
    variant: ActionVariant = ActionVariant.SECONDARY
    confirm: ActionConfirmation | None = None
    is_visible: Callable[[Resource], bool] | None = None
    is_disabled: Callable[[Resource], bool | str] | None = None

    def visible_for(self, resource: Resource) -> bool:
        """Check visibility for a resource; actions without a predicate are visible."""
        if self.is_visible is None:
            return True
        return bool(self.is_visible(resource))

    def disabled_reason(self, resource: Resource) -> bool | str:
        """Return False when enabled, True or a reason string when disabled."""
        if self.is_disabled is None:
            return False
        return self.is_disabled(resource)
