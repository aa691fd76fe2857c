"""ConfigMap adapter.

Entries are classified like Secret entries but are never masked.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_sections.adapters.base import ResourceAdapter
from kube_sections.adapters.secrets import entry_sections
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import MessageData, Section, StatusCard, StatusCardsData
from kube_sections.utils.secrets import classify_config_map_data

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource


class ConfigMapAdapter(ResourceAdapter):
    kinds = ("ConfigMap", "ConfigMaps")
    resource_config = BuiltinResources.CONFIG_MAPS
    required_field = None

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        entries = classify_config_map_data(resource.get("data"), resource.get("binaryData"))

        cards = [StatusCard(label="Keys", value=len(entries))]
        if resource.get("immutable"):
            cards.append(StatusCard(label="Immutable", value="Yes", status=StatusLevel.WARNING))

        sections = [
            Section(id="status", data=StatusCardsData(items=cards)),
            *self.metadata_sections(resource),
            *entry_sections(entries),
        ]
        if not entries:
            sections.append(Section(id="empty", data=MessageData(text="This ConfigMap is empty")))
        return sections
