"""Factories for the actions adapters attach to their kinds."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from kube_sections.adapters.base import dig, resource_name, resource_namespace
from kube_sections.models.actions import (
    ActionConfirmation,
    ActionVariant,
    Resource,
    ResourceAction,
)
from kube_sections.utils.errors import ActionError

if TYPE_CHECKING:
    from kube_sections.clients.base import ResourceAccessor, ResourceConfig

logger = logging.getLogger(__name__)

RESTARTED_AT_ANNOTATION = "kubectl.kubernetes.io/restartedAt"


def _target(
    config: ResourceConfig, resource: Resource, namespace: str | None
) -> tuple[str, str | None]:
    name = resource_name(resource)
    if not name:
        raise ActionError(f"Cannot act on a {config.kind} without metadata.name")
    if resource.get("kind") and resource["kind"] != config.kind:
        raise ActionError(f"Expected a {config.kind}, got {resource['kind']}")
    namespace = resource_namespace(resource, namespace) if config.namespaced else None
    if config.namespaced and not namespace:
        raise ActionError(f"{config.kind} '{name}' has no namespace")
    return name, namespace


def delete_action(accessor: ResourceAccessor, config: ResourceConfig) -> ResourceAction:
    """Delete the resource, after confirmation."""

    async def execute(resource: Resource, namespace: str | None = None) -> None:
        name, namespace = _target(config, resource, namespace)
        logger.info(f"Deleting {config.kind} {namespace}/{name}")
        await accessor.delete_resource(config, name, namespace)

    return ResourceAction(
        id="delete",
        label="Delete",
        execute=execute,
        variant=ActionVariant.DANGER,
        confirm=ActionConfirmation(
            title=f"Delete {config.kind}",
            message="Are you sure you want to delete this resource? "
            "This action cannot be undone.",
            confirm_label="Delete",
        ),
    )


def _scaled_to_zero(resource: Resource) -> bool | str:
    replicas = dig(resource, "spec", "replicas")
    if replicas == 0:
        return "Scaled to zero replicas"
    return False


def restart_action(accessor: ResourceAccessor, config: ResourceConfig) -> ResourceAction:
    """Trigger a rolling restart by stamping the pod template.

    This is what ``kubectl rollout restart`` does: changing a template
    annotation makes the controller roll every pod.
    """

    async def execute(resource: Resource, namespace: str | None = None) -> None:
        name, namespace = _target(config, resource, namespace)
        restarted_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        body = {
            "spec": {
                "template": {"metadata": {"annotations": {RESTARTED_AT_ANNOTATION: restarted_at}}}
            }
        }
        logger.info(f"Restarting {config.kind} {namespace}/{name}")
        await accessor.patch_resource(config, name, namespace, body)

    return ResourceAction(
        id="restart",
        label="Restart",
        execute=execute,
        variant=ActionVariant.SECONDARY,
        is_disabled=_scaled_to_zero,
    )


def _is_suspended(resource: Resource) -> bool:
    return dig(resource, "spec", "suspend") is True


def suspend_actions(accessor: ResourceAccessor, config: ResourceConfig) -> list[ResourceAction]:
    """Suspend and resume actions; only the applicable one is visible."""

    def patch_suspend(suspend: bool):
        async def execute(resource: Resource, namespace: str | None = None) -> None:
            name, namespace = _target(config, resource, namespace)
            logger.info(
                f"{'Suspending' if suspend else 'Resuming'} {config.kind} {namespace}/{name}"
            )
            await accessor.patch_resource(config, name, namespace, {"spec": {"suspend": suspend}})

        return execute

    return [
        ResourceAction(
            id="suspend",
            label="Suspend",
            execute=patch_suspend(True),
            variant=ActionVariant.WARNING,
            is_visible=lambda resource: not _is_suspended(resource),
        ),
        ResourceAction(
            id="resume",
            label="Resume",
            execute=patch_suspend(False),
            variant=ActionVariant.PRIMARY,
            is_visible=_is_suspended,
        ),
    ]
