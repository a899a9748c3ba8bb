"""Type definitions for LifeDates storage structures.

Storage holds plain JSON-compatible dicts described by the TypedDicts below.
data_builders.py converts them to the frozen dataclasses in models.py before
any engine call, and back when results are persisted.

Optional values are stored as None when absent. An empty string is a
present value and is never used as an "absent" marker.

IMPORTANT: This file must NOT import from coordinator.py or any manager.
Only import from typing (type machinery).

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime checks stay in
data_builders.py.
"""

from typing import NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

SpecialDateId = str  # "system_*" or UUID string
EntryId = str  # UUID string
UserId = str  # slug of the configured profile name
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"


# =============================================================================
# Profile
# =============================================================================


class ChildData(TypedDict):
    """A child on the profile."""

    internal_id: str
    name: str
    birth_date: ISODate


class PetData(TypedDict):
    """A pet on the profile. Birthday is optional."""

    internal_id: str
    name: str
    pet_type: str
    birthday: ISODate | None


class ProfileData(TypedDict):
    """Biographical profile of the configured person."""

    name: str | None
    birth_date: ISODate
    marriage_date: ISODate | None
    spouse_name: str | None
    spouse_birth_date: ISODate | None
    children: list[ChildData]
    pets: list[PetData]
    school_name: str | None
    graduation_year: int | None
    degree: str | None


# =============================================================================
# Special dates
# =============================================================================


class CustomSpecialDateData(TypedDict):
    """A user-authored special date."""

    internal_id: str
    name: str
    date: ISODate
    category: str
    is_recurring: bool
    notes: str | None
    created_at: ISODatetime
    updated_at: ISODatetime


class SpecialDateGoalData(TypedDict):
    """A recurring goal template attached to a special date."""

    internal_id: str
    special_date_id: SpecialDateId
    title: str
    description: str | None
    frequency: str
    reminder_enabled: bool
    lead_time: int | None
    lead_time_unit: str | None
    is_active: bool
    created_at: ISODatetime
    updated_at: ISODatetime


# =============================================================================
# Entries
# =============================================================================


class EntryData(TypedDict):
    """A goal or memory on the life calendar.

    Reminder fields only apply to goals; memories keep them None/False.
    """

    internal_id: str
    entry_type: str
    title: str
    description: str | None
    target_date: ISODate
    tags: list[str]
    is_completed: bool
    completed_at: ISODatetime | None
    convert_to_memory_when_passed: bool
    reminder_enabled: bool
    reminder_date: ISODate | None
    notification_id: str | None
    is_recurring: bool
    frequency: str
    recurring_end_date: ISODate | None
    lead_time: int | None
    lead_time_unit: str | None
    parent_memory_id: EntryId | None
    special_date_id: SpecialDateId | None
    goal_template_id: NotRequired[str | None]
    week_year: NotRequired[int]
    week_number: NotRequired[int]
    day_of_week: NotRequired[int]
    created_at: ISODatetime
    updated_at: ISODatetime


# =============================================================================
# Top-level storage document
# =============================================================================


class MetaData(TypedDict):
    """Storage metadata."""

    schema_version: int
    last_processed_date: ISODate | None


class LifeDatesData(TypedDict):
    """Complete storage document for one user."""

    meta: MetaData
    profile: ProfileData | None
    custom_dates: dict[SpecialDateId, CustomSpecialDateData]
    special_date_goals: dict[str, SpecialDateGoalData]
    entries: dict[EntryId, EntryData]

