"""Unit tests for section and action models."""

from typing import Any

import pytest
from pydantic import SecretStr, TypeAdapter, ValidationError

from kube_sections.models.actions import ActionVariant, ResourceAction
from kube_sections.models.common import (
    Condition,
    MatchConfidence,
    ResourceMetadata,
)
from kube_sections.models.sections import (
    CustomData,
    Gauge,
    GaugesData,
    PodGrid,
    ReplicaSetData,
    RelatedReplicaSetsData,
    ResourceSections,
    SecretEntry,
    Section,
    SectionData,
)


async def _noop(resource: dict[str, Any], namespace: str | None = None) -> None:
    return None


class TestGauge:
    """Tests for gauges."""

    def test_current_may_exceed_total(self) -> None:
        """Verify over-provisioned rollouts are representable."""
        gauge = Gauge(label="Ready", current=4, total=3, color="emerald")
        assert gauge.current > gauge.total

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Gauge(label="Ready", current=-1, total=3, color="emerald")

    def test_unknown_color_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Gauge(label="Ready", current=1, total=3, color="magenta")  # type: ignore[arg-type]


class TestSectionData:
    """Tests for the discriminated section data union."""

    def test_discriminator_selects_variant(self) -> None:
        """Verify raw data is parsed into the variant named by its type."""
        adapter = TypeAdapter(SectionData)

        data = adapter.validate_python(
            {
                "type": "gauges",
                "items": [{"label": "Ready", "current": 1, "total": 2, "color": "blue"}],
            }
        )

        assert isinstance(data, GaugesData)
        assert data.items[0].total == 2

    def test_unknown_type_rejected(self) -> None:
        adapter = TypeAdapter(SectionData)
        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "sparkline", "items": []})

    async def test_deferred_loader_runs_each_time(self) -> None:
        """Verify each load performs an independent fetch."""
        calls = 0

        async def loader() -> list[ReplicaSetData]:
            nonlocal calls
            calls += 1
            return [ReplicaSetData(name="web-1", confidence=MatchConfidence.OWNER_REFERENCE)]

        section = Section(id="replicasets", data=RelatedReplicaSetsData(loader=loader))

        assert section.deferred
        first = await section.data.load()  # type: ignore[union-attr]
        second = await section.data.load()  # type: ignore[union-attr]

        assert calls == 2
        assert first == second
        assert first[0].name == "web-1"

    def test_loader_excluded_from_dump(self) -> None:
        async def loader() -> list[ReplicaSetData]:
            return []

        section = Section(id="replicasets", data=RelatedReplicaSetsData(loader=loader))

        dumped = section.model_dump(mode="json")

        assert dumped == {
            "id": "replicasets",
            "title": None,
            "data": {"type": "related-replicasets"},
        }

    def test_custom_render_excluded_from_dump(self) -> None:
        section = Section(id="custom", data=CustomData(render=lambda: "<widget/>"))

        assert not section.deferred
        assert section.data.render() == "<widget/>"  # type: ignore[union-attr]
        assert section.model_dump() == {"id": "custom", "title": None, "data": {"type": "custom"}}


class TestResourceSections:
    """Tests for ResourceSections helpers."""

    def test_get_and_ids(self) -> None:
        sections = ResourceSections(
            sections=[
                Section(id="replicas", data=GaugesData(items=[], pod_grid=PodGrid(total=0))),
                Section(id="strategy", data=GaugesData(items=[])),
            ]
        )

        assert sections.ids == ["replicas", "strategy"]
        assert sections.get("strategy") is sections.sections[1]
        assert sections.get("missing") is None

    def test_empty_by_default(self) -> None:
        assert ResourceSections().sections == []


class TestSecretEntry:
    """Tests for SecretEntry display defaults."""

    def test_value_hidden_in_repr_and_dump(self) -> None:
        entry = SecretEntry(
            key="password", content="single-line", sensitive=True, value=SecretStr("hunter2")
        )

        assert "hunter2" not in repr(entry)
        assert "hunter2" not in entry.model_dump_json()

    def test_sensitive_multiline_defaults(self) -> None:
        entry = SecretEntry(key="tls.key", content="multiline", sensitive=True)

        assert entry.masked_by_default
        assert entry.collapsed_by_default
        assert entry.can_reveal

    def test_binary_never_masked_or_revealable(self) -> None:
        entry = SecretEntry(key="keystore", content="binary", sensitive=True)

        assert not entry.masked_by_default
        assert not entry.can_reveal
        assert not entry.collapsed_by_default


class TestResourceMetadata:
    """Tests for metadata parsing."""

    def test_partial_metadata(self) -> None:
        """Verify null and missing metadata fields fall back to empty values."""
        meta = ResourceMetadata.from_resource({"metadata": {"name": "web", "labels": None}})

        assert meta.name == "web"
        assert meta.labels == {}
        assert meta.owner_references == []

    def test_missing_metadata(self) -> None:
        assert ResourceMetadata.from_resource({}).name is None

    def test_yaml_typed_values_coerced(self) -> None:
        """Verify unquoted numbers and booleans in manifests become strings."""
        meta = ResourceMetadata.from_resource(
            {
                "metadata": {
                    "labels": {"tier": 2, "canary": True},
                    "annotations": {"deployment.kubernetes.io/revision": 3, "note": None},
                }
            }
        )

        assert meta.labels == {"tier": "2", "canary": "True"}
        assert meta.annotations == {"deployment.kubernetes.io/revision": "3", "note": ""}

    def test_owner_references(self) -> None:
        meta = ResourceMetadata.from_resource(
            {
                "metadata": {
                    "ownerReferences": [
                        {"kind": "Deployment", "name": "web", "uid": "u1", "controller": True}
                    ]
                }
            }
        )

        assert meta.owner_references[0].kind == "Deployment"
        assert meta.owner_references[0].controller is True

    def test_condition_from_dict(self) -> None:
        condition = Condition.from_dict({"type": "Ready", "status": "True"})
        assert condition.is_true
        assert condition.reason is None


class TestResourceAction:
    """Tests for action predicates."""

    def test_visible_without_predicate(self) -> None:
        action = ResourceAction(id="delete", label="Delete", execute=_noop)

        assert action.visible_for({})
        assert action.disabled_reason({}) is False
        assert action.variant == ActionVariant.SECONDARY

    def test_predicates_evaluated_per_resource(self) -> None:
        action = ResourceAction(
            id="restart",
            label="Restart",
            execute=_noop,
            is_visible=lambda r: r.get("kind") == "Deployment",
            is_disabled=lambda r: "Paused" if r.get("paused") else False,
        )

        assert action.visible_for({"kind": "Deployment"})
        assert not action.visible_for({"kind": "Pod"})
        assert action.disabled_reason({"paused": True}) == "Paused"
        assert action.disabled_reason({}) is False
