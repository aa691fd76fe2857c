"""Secret adapter.

Values never leave this module in the clear: classified entries carry
``SecretStr`` values, and masking state belongs to the caller
(see ``kube_sections.utils.secrets.SecretViewState``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kube_sections.adapters.base import ResourceAdapter
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    SecretEntriesData,
    SecretEntry,
    Section,
    StatusCard,
    StatusCardsData,
)
from kube_sections.utils.secrets import classify_secret_data

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource

logger = logging.getLogger(__name__)

SECRET_TYPES: dict[str, tuple[str, StatusLevel]] = {
    "kubernetes.io/service-account-token": ("Service Account Token", StatusLevel.NEUTRAL),
    "kubernetes.io/dockercfg": ("Docker Config", StatusLevel.NEUTRAL),
    "kubernetes.io/dockerconfigjson": ("Docker Config JSON", StatusLevel.NEUTRAL),
    "kubernetes.io/basic-auth": ("Basic Auth", StatusLevel.NEUTRAL),
    "kubernetes.io/ssh-auth": ("SSH Auth", StatusLevel.NEUTRAL),
    "kubernetes.io/tls": ("TLS", StatusLevel.SUCCESS),
    "bootstrap.kubernetes.io/token": ("Bootstrap Token", StatusLevel.WARNING),
}


def secret_type_info(secret_type: str | None) -> tuple[str, StatusLevel]:
    """Return the display label and status level for a Secret type."""
    return SECRET_TYPES.get(secret_type or "", (secret_type or "Opaque", StatusLevel.NEUTRAL))


def entry_sections(entries: list[SecretEntry]) -> list[Section]:
    """Group classified entries into table, collapsible and badge sections."""
    single = [e for e in entries if e.content == "single-line"]
    multiline = [e for e in entries if e.content == "multiline"]
    binary = [e for e in entries if e.content == "binary"]
    logger.debug(
        f"Classified {len(entries)} keys: {len(single)} single-line, "
        f"{len(multiline)} multiline, {len(binary)} binary"
    )

    sections = []
    if single:
        sections.append(
            Section(
                id="data-simple",
                title="Data",
                data=SecretEntriesData(items=single, layout="table"),
            )
        )
    if multiline:
        sections.append(
            Section(
                id="data-multiline",
                title="Files" if single else "Data",
                data=SecretEntriesData(items=multiline, layout="collapsible"),
            )
        )
    if binary:
        sections.append(
            Section(
                id="binary-data",
                title="Binary Data",
                data=SecretEntriesData(items=binary, layout="badges"),
            )
        )
    return sections


class SecretAdapter(ResourceAdapter):
    kinds = ("Secret", "Secrets")
    resource_config = BuiltinResources.SECRETS
    required_field = None

    annotation_excludes = ("kubectl.kubernetes.io/last-applied-configuration",)
    annotation_exact_excludes = ("kubernetes.io/description",)

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        label, level = secret_type_info(resource.get("type"))
        cards = [StatusCard(label="Type", value=label, status=level)]
        if resource.get("immutable"):
            cards.append(StatusCard(label="Immutable", value="Yes", status=StatusLevel.WARNING))

        entries = classify_secret_data(resource.get("data"), resource.get("stringData"))
        return [
            Section(id="status", data=StatusCardsData(items=cards)),
            *self.metadata_sections(resource),
            *entry_sections(entries),
        ]
