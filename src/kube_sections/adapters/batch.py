"""Adapters for batch workloads: Jobs and CronJobs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from kube_sections.adapters.actions import suspend_actions
from kube_sections.adapters.base import (
    ResourceAdapter,
    as_int,
    container_sections,
    dig,
    resource_namespace,
)
from kube_sections.adapters.related import jobs_loader
from kube_sections.clients.base import BuiltinResources
from kube_sections.models.common import StatusLevel
from kube_sections.models.sections import (
    InfoGridData,
    InfoRow,
    JobProgressData,
    RelatedJobsData,
    ScheduleData,
    Section,
    StatusCard,
    StatusCardsData,
    TimelineData,
)
from kube_sections.utils.classification import conditions_section, job_condition_is_healthy
from kube_sections.utils.formatting import (
    describe_cron_schedule,
    format_duration,
    format_time_ago,
    parse_timestamp,
)

if TYPE_CHECKING:
    from kube_sections.models.actions import Resource, ResourceAction

DEFAULT_BACKOFF_LIMIT = 6

_JOB_STATUS_LEVELS = {
    "Complete": StatusLevel.SUCCESS,
    "Failed": StatusLevel.ERROR,
    "Running": StatusLevel.WARNING,
    "Pending": StatusLevel.NEUTRAL,
}

_CONCURRENCY_COLORS = {
    "Forbid": "red",
    "Replace": "amber",
    "Allow": "emerald",
}


def job_phase(spec: dict[str, Any], status: dict[str, Any]) -> str:
    """Summarize a Job as Complete, Failed, Running or Pending."""
    if as_int(status.get("succeeded")) >= as_int(spec.get("completions"), 1):
        return "Complete"
    if any(
        c.get("type") == "Failed" and c.get("status") == "True"
        for c in status.get("conditions") or []
    ):
        return "Failed"
    if as_int(status.get("active")) > 0:
        return "Running"
    return "Pending"


class JobAdapter(ResourceAdapter):
    kinds = ("Job", "Jobs")
    resource_config = BuiltinResources.JOBS

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        completions = as_int(spec.get("completions"), 1)
        parallelism = as_int(spec.get("parallelism"), 1)
        backoff_limit = as_int(spec.get("backoffLimit"), DEFAULT_BACKOFF_LIMIT)
        succeeded = as_int(status.get("succeeded"))
        failed = as_int(status.get("failed"))
        active = as_int(status.get("active"))

        phase = job_phase(spec, status)
        start_time = parse_timestamp(status.get("startTime"))
        completion_time = parse_timestamp(status.get("completionTime"))

        cards = [StatusCard(label="Status", value=phase, status=_JOB_STATUS_LEVELS[phase])]
        if start_time:
            end = completion_time or datetime.now(timezone.utc)
            cards.append(
                StatusCard(
                    label="Duration",
                    value=format_duration((end - start_time).total_seconds()),
                )
            )

        backoff_color = None
        if failed >= backoff_limit:
            backoff_color = "red"
        elif failed > 0:
            backoff_color = "amber"
        config_rows = [
            InfoRow(label="Parallelism", value=parallelism, color="cyan"),
            InfoRow(
                label="Backoff Limit",
                value=f"{backoff_limit} ({failed} failures)" if failed else str(backoff_limit),
                color=backoff_color,
            ),
        ]
        if spec.get("activeDeadlineSeconds"):
            config_rows.append(
                InfoRow(label="Deadline", value=f"{spec['activeDeadlineSeconds']}s", color="amber")
            )
        if spec.get("ttlSecondsAfterFinished") is not None:
            config_rows.append(
                InfoRow(label="TTL After Finished", value=f"{spec['ttlSecondsAfterFinished']}s")
            )
        if spec.get("completionMode"):
            config_rows.append(
                InfoRow(label="Completion Mode", value=spec["completionMode"], color="purple")
            )

        sections = [
            Section(id="status", data=StatusCardsData(items=cards)),
            Section(
                id="progress",
                title="Progress",
                data=JobProgressData(
                    completions=completions, succeeded=succeeded, failed=failed, active=active
                ),
            ),
            Section(id="config", data=InfoGridData(items=config_rows, columns=2)),
        ]
        if start_time:
            sections.append(
                Section(
                    id="timeline",
                    title="Timeline",
                    data=TimelineData(start_time=start_time, completion_time=completion_time),
                )
            )

        sections.extend(container_sections(dig(spec, "template", "spec", default={})))
        sections.extend(
            conditions_section(status.get("conditions"), is_healthy=job_condition_is_healthy)
        )
        return sections


class CronJobAdapter(ResourceAdapter):
    kinds = ("CronJob", "CronJobs")
    resource_config = BuiltinResources.CRON_JOBS

    def create_actions(self) -> list[ResourceAction]:
        return [
            *suspend_actions(self.accessor, BuiltinResources.CRON_JOBS),
            *super().create_actions(),
        ]

    def build_sections(self, resource: Resource, namespace: str | None) -> list[Section]:
        spec = resource["spec"]
        status = resource.get("status") or {}

        suspended = spec.get("suspend") is True
        active_jobs = len(status.get("active") or [])
        schedule = spec.get("schedule") or ""

        sections = [
            Section(
                id="status",
                data=StatusCardsData(
                    items=[
                        StatusCard(
                            label="Status",
                            value="Suspended" if suspended else "Active",
                            status=StatusLevel.WARNING if suspended else StatusLevel.SUCCESS,
                        ),
                        StatusCard(
                            label="Active Jobs",
                            value=str(active_jobs),
                            status=StatusLevel.WARNING if active_jobs > 0 else StatusLevel.NEUTRAL,
                        ),
                    ]
                ),
            ),
            Section(
                id="schedule",
                data=ScheduleData(
                    schedule=schedule, description=describe_cron_schedule(schedule)
                ),
            ),
        ]

        timing_rows = []
        last_scheduled = parse_timestamp(status.get("lastScheduleTime"))
        if last_scheduled:
            timing_rows.append(
                InfoRow(
                    label="Last Scheduled", value=format_time_ago(last_scheduled), color="purple"
                )
            )
        last_successful = parse_timestamp(status.get("lastSuccessfulTime"))
        if last_successful:
            timing_rows.append(
                InfoRow(
                    label="Last Successful",
                    value=format_time_ago(last_successful),
                    color="emerald",
                )
            )
        if timing_rows:
            sections.append(Section(id="timing", data=InfoGridData(items=timing_rows, columns=2)))

        job_spec = dig(spec, "jobTemplate", "spec", default={})
        policy = spec.get("concurrencyPolicy") or "Allow"
        job_rows = [
            InfoRow(
                label="Concurrency Policy", value=policy, color=_CONCURRENCY_COLORS.get(policy)
            ),
        ]
        if spec.get("startingDeadlineSeconds") is not None:
            job_rows.append(
                InfoRow(label="Starting Deadline", value=f"{spec['startingDeadlineSeconds']}s")
            )
        job_rows.append(
            InfoRow(label="Successful History", value=spec.get("successfulJobsHistoryLimit", 3))
        )
        job_rows.append(
            InfoRow(label="Failed History", value=spec.get("failedJobsHistoryLimit", 1))
        )
        if job_spec.get("backoffLimit") is not None:
            job_rows.append(InfoRow(label="Backoff Limit", value=job_spec["backoffLimit"]))
        if job_spec.get("activeDeadlineSeconds"):
            job_rows.append(
                InfoRow(
                    label="Job Deadline",
                    value=f"{job_spec['activeDeadlineSeconds']}s",
                    color="amber",
                )
            )

        sections.append(
            Section(
                id="job-config",
                title="Job Configuration",
                data=InfoGridData(items=job_rows, columns=2),
            )
        )
        sections.append(
            Section(
                id="jobs",
                title="Recent Jobs",
                data=RelatedJobsData(
                    loader=jobs_loader(
                        self.accessor, resource, resource_namespace(resource, namespace)
                    )
                ),
            )
        )
        sections.extend(container_sections(dig(job_spec, "template", "spec", default={})))
        return sections
