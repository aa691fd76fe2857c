"""Human-readable formatting helpers for section values."""

from __future__ import annotations

import re
from datetime import datetime, timezone

_MEMORY_PATTERN = re.compile(r"^(\d+)(Ki|Mi|Gi|Ti|K|M|G|T)?$")

_ACCESS_MODE_ABBREVIATIONS = {
    "ReadWriteOnce": "RWO",
    "ReadOnlyMany": "ROX",
    "ReadWriteMany": "RWX",
    "ReadWriteOncePod": "RWOP",
}

_WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_KNOWN_SCHEDULES = {
    "* * * * *": "Every minute",
    "0 * * * *": "Every hour",
    "0 0 * * *": "Every day at midnight",
    "0 0 * * 0": "Every Sunday at midnight",
    "0 0 1 * *": "First day of every month at midnight",
}


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as found in resource status fields."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def format_duration(seconds: float) -> str:
    """Format a duration as its two most significant units, e.g. ``2h 5m``."""
    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Format how long ago a moment was, e.g. ``3h ago``."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - moment).total_seconds())

    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_memory(value: str) -> str:
    """Normalize a memory quantity to the largest readable binary unit."""
    match = _MEMORY_PATTERN.match(value)
    if not match:
        return value

    num = int(match.group(1))
    unit = match.group(2)

    if not unit:
        if num >= 1024**3:
            return f"{num / 1024**3:.1f}Gi"
        if num >= 1024**2:
            return f"{num / 1024**2:.1f}Mi"
        if num >= 1024:
            return f"{num / 1024:.1f}Ki"
        return f"{num}B"

    if unit == "Ki" and num >= 1024**2:
        return f"{num / 1024**2:.1f}Gi"
    if unit == "Ki" and num >= 1024:
        return f"{num / 1024:.1f}Mi"
    if unit == "Mi" and num >= 1024:
        return f"{num / 1024:.1f}Gi"
    return value


def format_access_mode(mode: str) -> str:
    """Abbreviate a volume access mode (ReadWriteOnce -> RWO)."""
    return _ACCESS_MODE_ABBREVIATIONS.get(mode, mode)


def describe_cron_schedule(schedule: str) -> str:
    """Describe a five-field cron expression in plain words."""
    parts = schedule.split()
    if len(parts) != 5:
        return schedule
    if schedule in _KNOWN_SCHEDULES:
        return _KNOWN_SCHEDULES[schedule]

    minute, hour, day_of_month, month, day_of_week = parts
    descriptions = []
    if minute != "*":
        descriptions.append(f"at minute {minute}")
    if hour != "*":
        descriptions.append(f"at hour {hour}")
    if day_of_month != "*":
        descriptions.append(f"on day {day_of_month}")
    if month != "*":
        descriptions.append(f"in month {month}")
    if day_of_week != "*":
        day = day_of_week
        if day_of_week.isdigit() and int(day_of_week) < len(_WEEKDAYS):
            day = _WEEKDAYS[int(day_of_week)]
        descriptions.append(f"on {day}")

    return ", ".join(descriptions) if descriptions else "Custom schedule"
