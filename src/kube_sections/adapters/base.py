"""Base class and shared section builders for resource adapters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from kube_sections.models.sections import (
    ContainerImage,
    ContainerImagesData,
    ContainerInfo,
    ContainerPort,
    ContainerResources,
    ContainersData,
    ResourceSections,
    Section,
    VolumeMount,
)
from kube_sections.utils.classification import (
    INTERNAL_ANNOTATION_KEYS,
    INTERNAL_LABEL_KEYS,
    filter_annotations,
    filter_labels,
    metadata_sections,
)

if TYPE_CHECKING:
    from kube_sections.clients.base import ResourceAccessor, ResourceConfig
    from kube_sections.models.actions import Resource, ResourceAction

logger = logging.getLogger(__name__)


class ResourceAdapter:
    """Turns one resource kind into an ordered list of sections.

    Subclasses set ``kinds`` (aliases the registry matches case-insensitively)
    and implement ``build_sections``. ``adapt`` never mutates the resource and
    returns no sections when the field named by ``required_field`` is absent.
    """

    kinds: ClassVar[tuple[str, ...]] = ()
    resource_config: ClassVar[ResourceConfig | None] = None
    required_field: ClassVar[str | None] = "spec"

    label_excludes: ClassVar[tuple[str, ...]] = INTERNAL_LABEL_KEYS
    annotation_excludes: ClassVar[tuple[str, ...]] = INTERNAL_ANNOTATION_KEYS
    annotation_exact_excludes: ClassVar[tuple[str, ...]] = ()

    def __init__(self, accessor: ResourceAccessor) -> None:
        self.accessor = accessor
        self._actions = self.create_actions()

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def actions(self) -> list[ResourceAction]:
        """All actions the adapter offers, before visibility filtering."""
        return list(self._actions)

    def create_actions(self) -> list[ResourceAction]:
        """Build the adapter's actions.

        Namespaced kinds with a ``resource_config`` get a delete action.
        Subclasses extend this list or replace it.
        """
        from kube_sections.adapters.actions import delete_action

        config = self.resource_config
        if config is None or not config.namespaced:
            return []
        return [delete_action(self.accessor, config)]

    def adapt(self, resource: Resource, namespace: str | None = None) -> ResourceSections:
        """Build the display sections for a resource."""
        if self.required_field and not isinstance(resource.get(self.required_field), dict):
            logger.debug(f"{self.name}: resource has no {self.required_field}, no sections")
            return ResourceSections(sections=[])
        return ResourceSections(sections=self.build_sections(resource, namespace))

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        raise NotImplementedError

    def metadata_sections(self, resource: Resource) -> list[Section]:
        """Labels and annotations with this kind's internal keys removed."""
        metadata = resource.get("metadata") or {}
        labels = filter_labels(metadata.get("labels"), self.label_excludes)
        annotations = filter_annotations(
            metadata.get("annotations"),
            self.annotation_excludes,
            self.annotation_exact_excludes,
        )
        return metadata_sections(labels, annotations)


# ---------------------------------------------------------------------------
# Field access helpers
# ---------------------------------------------------------------------------


def dig(obj: Any, *path: str, default: Any = None) -> Any:
    """Follow a key path through nested mappings, tolerating gaps and nulls."""
    for key in path:
        if not isinstance(obj, dict):
            return default
        obj = obj.get(key)
        if obj is None:
            return default
    return obj


def as_int(value: Any, default: int = 0) -> int:
    """Coerce a count field to int, falling back on anything non-numeric."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def resource_name(resource: Resource) -> str | None:
    return dig(resource, "metadata", "name")


def resource_namespace(resource: Resource, namespace: str | None = None) -> str | None:
    """Prefer an explicit namespace, falling back to the resource's own."""
    return namespace or dig(resource, "metadata", "namespace")


# ---------------------------------------------------------------------------
# Container builders
# ---------------------------------------------------------------------------


def _container_state(status: dict[str, Any]) -> tuple[str | None, str | None]:
    state = status.get("state") or {}
    if "running" in state:
        return "running", None
    if "waiting" in state:
        return "waiting", (state.get("waiting") or {}).get("reason")
    if "terminated" in state:
        return "terminated", (state.get("terminated") or {}).get("reason")
    return None, None


def container_info(
    container: dict[str, Any], status: dict[str, Any] | None = None
) -> ContainerInfo:
    """Summarize a container spec, merged with its runtime status if any."""
    resources = container.get("resources") or {}
    status = status or {}
    state, state_reason = _container_state(status)
    return ContainerInfo(
        name=container.get("name") or "",
        image=container.get("image") or "",
        resources=ContainerResources(
            requests={k: str(v) for k, v in (resources.get("requests") or {}).items()} or None,
            limits={k: str(v) for k, v in (resources.get("limits") or {}).items()} or None,
        )
        if resources
        else None,
        ports=[
            ContainerPort(
                name=port.get("name"),
                container_port=port.get("containerPort"),
                protocol=port.get("protocol"),
            )
            for port in container.get("ports") or []
        ]
        or None,
        command=container.get("command"),
        args=container.get("args"),
        mounts=[
            VolumeMount(
                name=mount.get("name") or "",
                mount_path=mount.get("mountPath") or "",
                read_only=mount.get("readOnly"),
                sub_path=mount.get("subPath"),
            )
            for mount in container.get("volumeMounts") or []
        ]
        or None,
        state=state,
        state_reason=state_reason,
        ready=status.get("ready"),
        restart_count=status.get("restartCount"),
    )


def container_sections(
    pod_spec: dict[str, Any],
    statuses: list[dict[str, Any]] | None = None,
    init_statuses: list[dict[str, Any]] | None = None,
) -> list[Section]:
    """Build ``init-containers`` and ``containers`` sections from a pod spec."""
    sections = []
    for section_id, title, key, status_list in (
        ("init-containers", "Init Containers", "initContainers", init_statuses),
        ("containers", "Containers", "containers", statuses),
    ):
        containers = pod_spec.get(key) or []
        if not containers:
            continue
        by_name = {s.get("name"): s for s in status_list or []}
        items = [container_info(c, by_name.get(c.get("name"))) for c in containers]
        sections.append(Section(id=section_id, title=title, data=ContainersData(items=items)))
    return sections


def images_section(pod_spec: dict[str, Any]) -> list[Section]:
    """Build the ``images`` section listing each container's image."""
    containers = pod_spec.get("containers") or []
    if not containers:
        return []
    return [
        Section(
            id="images",
            title="Container Images",
            data=ContainerImagesData(
                containers=[
                    ContainerImage(name=c.get("name") or "", image=c.get("image"))
                    for c in containers
                ]
            ),
        )
    ]
