"""Domain models for clients and their training schedules."""

from __future__ import annotations

import datetime as _dt
import re
from enum import StrEnum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from fitflow.config import get_settings

_TIME_PATTERN = re.compile(r"^(\d{2})(\d{2})$")
_DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?$")

CONFLICT_DELIMITER = " between "


class Weekday(StrEnum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def _missing_(cls, value: object) -> Weekday | None:
        """Accept any casing of the full name or a three-letter abbreviation."""
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.value[:3].lower()):
                return member
        return None

    @classmethod
    def from_date(cls, value: _dt.date) -> Weekday:
        return list(cls)[value.weekday()]


class ConflictCategory(StrEnum):
    RECURRING = "Recurring"
    ONE_TIME = "One-Time"


def _parse_hhmm(raw: str) -> _dt.time:
    match = _TIME_PATTERN.match(raw.strip())
    if match is None:
        raise ValueError(f"Time must be in HHmm format, got {raw!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Time must be between 0000 and 2359, got {raw!r}")
    return _dt.time(hour, minute)


def _parse_day_month_year(raw: str) -> _dt.date:
    """Parse DD/MM, DD/MM/YY or DD/MM/YYYY.

    A missing year falls back to the configured reference year and a
    two-digit year is read as 20YY.
    """
    match = _DATE_PATTERN.match(raw.strip())
    if match is None:
        raise ValueError(f"Date must be in DD/MM[/YY] format, got {raw!r}")
    day, month, year = match.groups()
    if year is None:
        resolved_year = get_settings().reference_year
    elif len(year) == 2:
        resolved_year = 2000 + int(year)
    else:
        resolved_year = int(year)
    try:
        return _dt.date(resolved_year, int(month), int(day))
    except ValueError as exc:
        raise ValueError(f"Invalid calendar date {raw!r}: {exc}") from exc


# ---------------------------------------------------------------------------
# Schedule value types
# ---------------------------------------------------------------------------


class TimeRange(BaseModel):
    """A start/end time of day. Both ends are minute precision, start < end."""

    model_config = ConfigDict(frozen=True)

    start: _dt.time
    end: _dt.time

    @field_validator("start", "end", mode="before")
    @classmethod
    def _accept_hhmm(cls, value: object) -> object:
        if isinstance(value, str):
            return _parse_hhmm(value)
        return value

    @model_validator(mode="after")
    def _start_before_end(self) -> TimeRange:
        if self.end <= self.start:
            raise ValueError("start time must be before end time")
        return self

    @field_serializer("start", "end")
    def _dump_hhmm(self, value: _dt.time) -> str:
        return value.strftime("%H%M")

    def overlaps(self, other: TimeRange) -> bool:
        """Half-open overlap: a range ending exactly when another starts does not overlap."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start:%H%M}-{self.end:%H%M}"


class RecurringSchedule(BaseModel):
    """A block of time that repeats every week on ``day``."""

    model_config = ConfigDict(frozen=True)

    day: Weekday
    time_range: TimeRange

    @field_validator("day", mode="before")
    @classmethod
    def _accept_day_name(cls, value: object) -> object:
        if isinstance(value, str):
            return Weekday(value)
        return value

    @property
    def category(self) -> ConflictCategory:
        return ConflictCategory.RECURRING

    @property
    def key(self) -> str:
        return self.day.value

    def conflicts_with(self, other: Schedule) -> bool:
        if isinstance(other, RecurringSchedule):
            other_day = other.day
        else:
            other_day = other.weekday
        return self.day == other_day and self.time_range.overlaps(other.time_range)

    def __str__(self) -> str:
        return f"{self.key} {self.time_range}"


class OneTimeSchedule(BaseModel):
    """A single block of time on a calendar date."""

    model_config = ConfigDict(frozen=True)

    date: _dt.date
    time_range: TimeRange

    @field_validator("date", mode="before")
    @classmethod
    def _accept_day_month(cls, value: object) -> object:
        if isinstance(value, str):
            return _parse_day_month_year(value)
        return value

    @field_serializer("date")
    def _dump_day_month_year(self, value: _dt.date) -> str:
        return value.strftime("%d/%m/%Y")

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_date(self.date)

    @property
    def category(self) -> ConflictCategory:
        return ConflictCategory.ONE_TIME

    @property
    def key(self) -> str:
        return self.date.strftime("%d/%m/%Y")

    def conflicts_with(self, other: Schedule) -> bool:
        if isinstance(other, RecurringSchedule):
            return other.conflicts_with(self)
        return self.date == other.date and self.time_range.overlaps(other.time_range)

    def __str__(self) -> str:
        return f"{self.key} {self.time_range}"


Schedule = RecurringSchedule | OneTimeSchedule


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


class Client(BaseModel):
    """A client record.

    Tags and both schedule collections behave as ordered sets: duplicates
    are dropped and the first insertion order is kept, so iteration order
    is stable between runs.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    location: str | None = None
    goals: str | None = None
    medical_history: str | None = None
    tags: tuple[str, ...] = ()
    recurring_schedules: tuple[RecurringSchedule, ...] = ()
    one_time_schedules: tuple[OneTimeSchedule, ...] = ()

    @field_validator("tags", "recurring_schedules", "one_time_schedules")
    @classmethod
    def _drop_duplicates(cls, values: tuple) -> tuple:
        return tuple(dict.fromkeys(values))

    @property
    def schedules(self) -> tuple[Schedule, ...]:
        return self.recurring_schedules + self.one_time_schedules

    def is_same_client(self, other: Client | None) -> bool:
        return other is not None and other.name == self.name

    def has_same_phone(self, other: Client | None) -> bool:
        return other is not None and other.phone == self.phone


# ---------------------------------------------------------------------------
# Conflict results
# ---------------------------------------------------------------------------


class ScheduleConflictResult(BaseModel):
    """Outcome of checking one candidate schedule against one existing client."""

    model_config = ConfigDict(frozen=True)

    has_conflict: bool = False
    conflicting_schedule: Schedule | None = None
    counterparty_name: str | None = None

    @model_validator(mode="after")
    def _conflict_needs_schedule(self) -> ScheduleConflictResult:
        if self.has_conflict and (
            self.conflicting_schedule is None or self.counterparty_name is None
        ):
            raise ValueError("a conflict needs the conflicting schedule and its owner")
        return self

    @classmethod
    def none(cls) -> ScheduleConflictResult:
        return cls()

    @classmethod
    def conflict(cls, schedule: Schedule, counterparty_name: str) -> ScheduleConflictResult:
        return cls(
            has_conflict=True,
            conflicting_schedule=schedule,
            counterparty_name=counterparty_name,
        )

    @property
    def category(self) -> ConflictCategory | None:
        if self.conflicting_schedule is None:
            return None
        return self.conflicting_schedule.category

    @property
    def key(self) -> str | None:
        if self.conflicting_schedule is None:
            return None
        return self.conflicting_schedule.key

    @property
    def prefix(self) -> str | None:
        """Text before ``CONFLICT_DELIMITER`` in the description."""
        if not self.has_conflict:
            return None
        return f"{self.category} schedule conflict"

    @property
    def description(self) -> str | None:
        if not self.has_conflict:
            return None
        return f"{self.prefix}{CONFLICT_DELIMITER}{self.key} with {self.counterparty_name}"


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class ClientEditRequest(BaseModel):
    """Fields to overwrite on an existing client. Omitted fields are kept."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    phone: str | None = Field(default=None, min_length=1)
    location: str | None = None
    goals: str | None = None
    medical_history: str | None = None
    tags: tuple[str, ...] | None = None
    recurring_schedules: tuple[RecurringSchedule, ...] | None = None
    one_time_schedules: tuple[OneTimeSchedule, ...] | None = None

    def updates(self) -> dict:
        return {
            field: getattr(self, field)
            for field in self.model_fields_set
            if getattr(self, field) is not None
        }


class ClientCommandResponse(BaseModel):
    message: str
    client: Client
    conflicts: list[str] = Field(default_factory=list)


class ClientListResponse(BaseModel):
    message: str
    clients: list[Client]
