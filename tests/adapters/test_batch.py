"""Unit tests for the Job and CronJob adapters."""

from typing import Any

import pytest

from kube_sections.adapters.batch import CronJobAdapter, JobAdapter, job_phase
from kube_sections.clients.static import StaticResourceAccessor
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    ConditionsData,
    InfoGridData,
    JobProgressData,
    RelatedJobsData,
    ResourceSections,
    ScheduleData,
    StatusCardsData,
    TimelineData,
)


def data_of(sections: ResourceSections, section_id: str) -> Any:
    section = sections.get(section_id)
    assert section is not None, f"missing section {section_id}"
    return section.data


def rows(data: Any) -> dict[str, Any]:
    assert isinstance(data, InfoGridData)
    return {row.label: row.value for row in data.items}


class TestJobPhase:
    """Tests for job_phase."""

    @pytest.mark.parametrize(
        "spec,status,expected",
        [
            ({"completions": 2}, {"succeeded": 2}, "Complete"),
            ({}, {"succeeded": 1}, "Complete"),
            ({}, {"conditions": [{"type": "Failed", "status": "True"}]}, "Failed"),
            ({}, {"conditions": [{"type": "Failed", "status": "False"}], "active": 1}, "Running"),
            ({}, {}, "Pending"),
        ],
    )
    def test_phase(self, spec: dict, status: dict, expected: str) -> None:
        assert job_phase(spec, status) == expected


class TestJobAdapter:
    """Tests for JobAdapter."""

    @pytest.fixture
    def adapter(self, accessor: StaticResourceAccessor) -> JobAdapter:
        return JobAdapter(accessor)

    def test_section_order(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        assert adapter.adapt(job).ids == ["status", "progress", "config", "timeline", "containers"]

    def test_status_running(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(job), "status")

        assert isinstance(data, StatusCardsData)
        assert data.items[0].value == "Running"
        assert data.items[0].status == StatusLevel.WARNING
        assert data.items[1].label == "Duration"

    def test_progress(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(job), "progress")

        assert isinstance(data, JobProgressData)
        assert (data.completions, data.succeeded, data.failed, data.active) == (3, 1, 1, 1)

    def test_config(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(job), "config")

        assert rows(data) == {
            "Parallelism": 2,
            "Backoff Limit": "4 (1 failures)",
            "TTL After Finished": "600s",
        }
        assert data.items[1].color == "amber"

    def test_backoff_exhausted(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        job["status"]["failed"] = 4

        data = data_of(adapter.adapt(job), "config")

        assert data.items[1].color == "red"

    def test_default_backoff_limit(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        del job["spec"]["backoffLimit"]
        job["status"]["failed"] = 0

        assert rows(data_of(adapter.adapt(job), "config"))["Backoff Limit"] == "6"

    def test_complete_duration(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        job["status"].update(succeeded=3, active=0, completionTime="2024-05-01T10:02:05Z")

        sections = adapter.adapt(job)
        cards = data_of(sections, "status").items
        timeline = data_of(sections, "timeline")

        assert cards[0].value == "Complete"
        assert cards[1].value == "2m 5s"
        assert isinstance(timeline, TimelineData)
        assert timeline.completion_time is not None

    def test_failed_condition_reported(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        job["status"]["conditions"] = [
            {"type": "Failed", "status": "True", "reason": "BackoffLimitExceeded"}
        ]

        sections = adapter.adapt(job)
        conditions = data_of(sections, "conditions")

        assert data_of(sections, "status").items[0].value == "Failed"
        assert isinstance(conditions, ConditionsData)
        assert conditions.items[0].reason == "BackoffLimitExceeded"

    def test_not_started(self, adapter: JobAdapter, job: dict[str, Any]) -> None:
        job["status"] = {}

        sections = adapter.adapt(job)

        assert "timeline" not in sections.ids
        assert len(data_of(sections, "status").items) == 1

    def test_actions(self, adapter: JobAdapter) -> None:
        assert [a.id for a in adapter.actions] == ["delete"]


class TestCronJobAdapter:
    """Tests for CronJobAdapter."""

    @pytest.fixture
    def adapter(self, accessor: StaticResourceAccessor) -> CronJobAdapter:
        return CronJobAdapter(accessor)

    def test_section_order(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        assert adapter.adapt(cronjob).ids == [
            "status",
            "schedule",
            "timing",
            "job-config",
            "jobs",
            "containers",
        ]

    def test_status(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(cronjob), "status")

        assert isinstance(data, StatusCardsData)
        assert [(c.label, c.value, c.status) for c in data.items] == [
            ("Status", "Active", StatusLevel.SUCCESS),
            ("Active Jobs", "1", StatusLevel.WARNING),
        ]

    def test_suspended(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        cronjob["spec"]["suspend"] = True

        data = data_of(adapter.adapt(cronjob), "status")

        assert data.items[0].value == "Suspended"
        assert data.items[0].status == StatusLevel.WARNING

    def test_schedule(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(cronjob), "schedule")

        assert isinstance(data, ScheduleData)
        assert data.schedule == "0 0 * * *"
        assert data.description == "Every day at midnight"

    def test_job_config(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        data = data_of(adapter.adapt(cronjob), "job-config")

        assert rows(data) == {
            "Concurrency Policy": "Forbid",
            "Successful History": 3,
            "Failed History": 1,
            "Backoff Limit": 2,
        }
        assert data.items[0].color == "red"

    def test_never_scheduled(self, adapter: CronJobAdapter, cronjob: dict[str, Any]) -> None:
        cronjob["status"] = {}

        assert "timing" not in adapter.adapt(cronjob).ids

    async def test_jobs_loaded(self, cronjob: dict[str, Any], job: dict[str, Any]) -> None:
        job["metadata"]["ownerReferences"] = [
            {"kind": "CronJob", "name": "report", "uid": "cron-uid-1"}
        ]
        adapter = CronJobAdapter(StaticResourceAccessor([job]))

        data = data_of(adapter.adapt(cronjob), "jobs")

        assert isinstance(data, RelatedJobsData)
        jobs = await data.load()
        assert [(j.name, j.status) for j in jobs] == [("report-28912345", "Running")]

    def test_actions(self, adapter: CronJobAdapter) -> None:
        assert [a.id for a in adapter.actions] == ["suspend", "resume", "delete"]
