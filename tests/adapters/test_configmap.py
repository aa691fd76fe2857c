"""Unit tests for the ConfigMap adapter."""

from typing import Any

import pytest

from kube_sections.adapters.configmaps import ConfigMapAdapter
from kube_sections.clients.static import StaticResourceAccessor
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import MessageData, ResourceSections, SecretEntriesData
from kube_sections.utils.secrets import SecretViewState


def data_of(sections: ResourceSections, section_id: str) -> Any:
    section = sections.get(section_id)
    assert section is not None, f"missing section {section_id}"
    return section.data


@pytest.fixture
def adapter(accessor: StaticResourceAccessor) -> ConfigMapAdapter:
    return ConfigMapAdapter(accessor)


class TestConfigMapAdapter:
    """Tests for ConfigMapAdapter."""

    def test_section_order(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        assert adapter.adapt(configmap).ids == [
            "status",
            "data-simple",
            "data-multiline",
            "binary-data",
        ]

    def test_status(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        configmap["immutable"] = True

        cards = data_of(adapter.adapt(configmap), "status").items

        assert [(c.label, c.value, c.status) for c in cards] == [
            ("Keys", 4, None),
            ("Immutable", "Yes", StatusLevel.WARNING),
        ]

    def test_layouts(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        """Verify numeric values are shown as text and binaryData keys as badges."""
        sections = adapter.adapt(configmap)

        simple = data_of(sections, "data-simple")
        multiline = data_of(sections, "data-multiline")
        binary = data_of(sections, "binary-data")

        assert isinstance(simple, SecretEntriesData)
        assert [e.key for e in simple.items] == ["LOG_LEVEL", "WORKERS"]
        assert simple.items[1].value is not None
        assert simple.items[1].value.get_secret_value() == "4"
        assert (multiline.layout, [e.key for e in multiline.items]) == (
            "collapsible",
            ["nginx.conf"],
        )
        assert (binary.layout, [e.key for e in binary.items]) == ("badges", ["favicon.ico"])
        assert binary.items[0].value is None

    def test_values_not_masked(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        sections = adapter.adapt(configmap)
        state = SecretViewState()

        entry = data_of(sections, "data-simple").items[0]

        assert not entry.sensitive
        assert not entry.can_reveal
        assert state.display_value(entry) == "debug"

    def test_multiline_title(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        with_table = adapter.adapt(configmap).get("data-multiline")
        configmap["data"] = {"nginx.conf": configmap["data"]["nginx.conf"]}
        alone = adapter.adapt(configmap).get("data-multiline")

        assert with_table is not None and with_table.title == "Files"
        assert alone is not None and alone.title == "Data"

    def test_control_characters_are_binary(self, adapter: ConfigMapAdapter) -> None:
        configmap = {"kind": "ConfigMap", "data": {"raw": "\x01\x02\x03"}}

        data = data_of(adapter.adapt(configmap), "binary-data")

        assert [e.key for e in data.items] == ["raw"]

    def test_empty(self, adapter: ConfigMapAdapter) -> None:
        sections = adapter.adapt({"kind": "ConfigMap", "metadata": {"name": "blank"}})

        assert sections.ids == ["status", "empty"]
        empty = data_of(sections, "empty")
        assert isinstance(empty, MessageData)
        assert empty.text == "This ConfigMap is empty"
        assert data_of(sections, "status").items[0].value == 0

    def test_labels_shown(self, adapter: ConfigMapAdapter, configmap: dict[str, Any]) -> None:
        configmap["metadata"]["labels"] = {"app": "web"}

        assert "labels" in adapter.adapt(configmap).ids

    def test_actions(self, adapter: ConfigMapAdapter) -> None:
        assert [a.id for a in adapter.actions] == ["delete"]
