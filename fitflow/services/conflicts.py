"""Service for detecting overlapping schedules between and within clients."""

from __future__ import annotations

import logging
from itertools import combinations

from fitflow.domain.models import (
    CONFLICT_DELIMITER,
    Client,
    OneTimeSchedule,
    RecurringSchedule,
    Schedule,
    ScheduleConflictResult,
)

logger = logging.getLogger(__name__)


def schedules_conflict(first: Schedule, second: Schedule) -> bool:
    """Return True if two schedules claim overlapping time.

    - two recurring schedules: same weekday and overlapping ranges
    - recurring and one-time: the date falls on the recurring weekday and
      the ranges overlap
    - two one-time schedules: same date and overlapping ranges
    """
    return first.conflicts_with(second)


def check_schedule_conflict(
    existing_client: Client, candidate: Schedule
) -> ScheduleConflictResult:
    """Check *candidate* against every schedule of *existing_client*.

    Recurring schedules are scanned before one-time schedules, each in
    stored order, and the first overlap wins.
    """
    for schedule in existing_client.recurring_schedules:
        if schedules_conflict(schedule, candidate):
            return _found(existing_client, schedule, candidate)

    for schedule in existing_client.one_time_schedules:
        if schedules_conflict(schedule, candidate):
            return _found(existing_client, schedule, candidate)

    return ScheduleConflictResult.none()


def check_internal_schedule_conflicts(client: Client) -> list[str]:
    """Describe every pair of the client's own schedules that overlap.

    Pairs are enumerated recurring/recurring, then recurring/one-time, then
    one-time/one-time, each by position in the stored collections.
    """
    recurring = client.recurring_schedules
    one_time = client.one_time_schedules

    pairs: list[tuple[Schedule, Schedule]] = []
    pairs.extend(combinations(recurring, 2))
    pairs.extend((r, o) for r in recurring for o in one_time)
    pairs.extend(combinations(one_time, 2))

    descriptions: list[str] = []
    for first, second in pairs:
        if schedules_conflict(first, second):
            description = describe_internal_conflict(client, first, second)
            logger.debug("Internal conflict: %s", description)
            descriptions.append(description)
    return descriptions


def describe_internal_conflict(client: Client, first: Schedule, second: Schedule) -> str:
    if isinstance(first, RecurringSchedule) and isinstance(second, RecurringSchedule):
        category = "Recurring"
    elif isinstance(first, OneTimeSchedule) and isinstance(second, OneTimeSchedule):
        category = "One-Time"
    else:
        category = "Recurring and One-Time"
    return f"{category} schedule conflict{CONFLICT_DELIMITER}{first} and {second} for {client.name}"


def _found(
    existing_client: Client, schedule: Schedule, candidate: Schedule
) -> ScheduleConflictResult:
    result = ScheduleConflictResult.conflict(schedule, existing_client.name)
    logger.debug("Candidate %s conflicts: %s", candidate, result.description)
    return result
