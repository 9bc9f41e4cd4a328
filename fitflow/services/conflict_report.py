"""Collects every schedule conflict a new or edited client would introduce."""

from __future__ import annotations

from typing import Iterable

from fitflow.domain.models import (
    CONFLICT_DELIMITER,
    Client,
    Schedule,
    ScheduleConflictResult,
)
from fitflow.services.conflicts import (
    check_internal_schedule_conflicts,
    check_schedule_conflict,
)


def find_all_schedule_conflicts(
    roster: Iterable[Client],
    candidate: Client,
    replaced: Client | None = None,
) -> list[str]:
    """Return internal conflicts of *candidate* followed by conflicts with other clients.

    *replaced* is the record the candidate supersedes on edit; it is skipped
    by equality so the candidate is never compared with its old self.
    """
    internal = check_internal_schedule_conflicts(candidate)

    external: list[str] = []
    for existing in roster:
        if replaced is not None and existing == replaced:
            continue
        external.extend(_conflicts_with_client(existing, candidate))

    return internal + external


def describe_external_conflict(
    result: ScheduleConflictResult,
    existing: Client,
    candidate_schedule: Schedule,
    candidate: Client,
) -> str:
    return (
        f"{result.prefix}{CONFLICT_DELIMITER}{result.conflicting_schedule.time_range} "
        f"with {existing.name} and {candidate_schedule.time_range} with {candidate.name}"
    )


def build_conflict_message(header: str, conflicts: list[str], success: str) -> str:
    """Prepend the advisory conflict block to *success* when there are conflicts."""
    if not conflicts:
        return success
    parts = [header]
    parts.extend(f"{conflict}\n\n" for conflict in conflicts)
    parts.append(success)
    return "".join(parts)


def _conflicts_with_client(existing: Client, candidate: Client) -> list[str]:
    conflicts: list[str] = []
    for schedule in candidate.schedules:
        result = check_schedule_conflict(existing, schedule)
        if result.has_conflict:
            conflicts.append(
                describe_external_conflict(result, existing, schedule, candidate)
            )
    return conflicts
