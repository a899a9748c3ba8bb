# File: models.py
"""Immutable value types consumed and produced by the LifeDates engines.

Storage keeps plain dicts (see type_defs.py); data_builders.py converts them
to these dataclasses before any engine call. Construction validates the
invariants that must never be silently coerced, raising EntityValidationError
with the offending field and a translation key.

No Home Assistant imports: the engines depend on this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from . import const


class EntityValidationError(Exception):
    """Validation error with field-specific information for form highlighting.

    Raised when a value object is built with data that violates a business
    rule. The field attribute lets flows and services map the error back to
    the input that caused it.

    Attributes:
        field: The field/key that failed validation
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for translation string placeholders

    Example:
        raise EntityValidationError(
            field=const.FIELD_LEAD_TIME,
            translation_key=const.TRANS_KEY_INVALID_LEAD_TIME,
            placeholders={"value": "31", "unit": "days"},
        )
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize EntityValidationError."""
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


# ==============================================================================
# Biographical profile
# ==============================================================================


@dataclass(frozen=True)
class Child:
    """A child listed on the profile."""

    id: str
    name: str
    birth_date: date


@dataclass(frozen=True)
class Pet:
    """A pet listed on the profile. Birthday is optional."""

    id: str
    name: str
    pet_type: str = const.PET_TYPE_OTHER
    birthday: date | None = None

    @property
    def icon(self) -> str:
        return const.PET_TYPE_ICONS.get(
            self.pet_type, const.PET_TYPE_ICONS[const.PET_TYPE_OTHER]
        )


@dataclass(frozen=True)
class BiographicalProfile:
    """Read-only snapshot of the person the special dates belong to.

    Optional fields are None when absent; an empty string is a present but
    empty value and is treated by derivation rules as "no name".
    """

    birth_date: date
    name: str | None = None
    marriage_date: date | None = None
    spouse_name: str | None = None
    spouse_birth_date: date | None = None
    children: tuple[Child, ...] = ()
    pets: tuple[Pet, ...] = ()
    school_name: str | None = None
    graduation_year: int | None = None
    degree: str | None = None


# ==============================================================================
# Special dates
# ==============================================================================


@dataclass(frozen=True)
class SpecialDateRecord:
    """A single special date the engines operate on.

    Attributes:
        id: Stable identifier (system records derive it from their source)
        name: Display name
        anchor_date: Date the underlying event first happened
        category: One of const.CATEGORY_OPTIONS
        is_recurring: Matches every year from the anchor year when True
        provenance: const.PROVENANCE_SYSTEM or const.PROVENANCE_CUSTOM
        system_kind: Sub-kind for system records (const.SYSTEM_KIND_*)
        notes: Optional free text
        source_id: Child/pet id or custom-date id the record came from
        icon: Resolved mdi icon (filled by the merger)
        category_name: Resolved category display name (filled by the merger)
    """

    id: str
    name: str
    anchor_date: date
    category: str
    is_recurring: bool
    provenance: str
    system_kind: str | None = None
    notes: str | None = None
    source_id: str | None = None
    icon: str | None = None
    category_name: str | None = None

    def __post_init__(self) -> None:
        """Reject records that violate construction invariants."""
        if not self.name or not self.name.strip():
            raise EntityValidationError(
                field=const.FIELD_NAME,
                translation_key=const.TRANS_KEY_INVALID_NAME,
            )
        if self.category not in const.CATEGORY_OPTIONS:
            raise EntityValidationError(
                field=const.FIELD_CATEGORY,
                translation_key=const.TRANS_KEY_INVALID_CATEGORY,
                placeholders={"value": str(self.category)},
            )
        if self.provenance == const.PROVENANCE_SYSTEM:
            if self.system_kind not in const.SYSTEM_KIND_OPTIONS:
                raise EntityValidationError(
                    field=const.FIELD_CATEGORY,
                    translation_key=const.TRANS_KEY_INVALID_CATEGORY,
                    placeholders={"value": str(self.system_kind)},
                )
            # One-time life events can never recur
            if self.system_kind in const.ONE_TIME_SYSTEM_KINDS and self.is_recurring:
                raise EntityValidationError(
                    field=const.FIELD_IS_RECURRING,
                    translation_key=const.TRANS_KEY_INVALID_RECURRENCE,
                    placeholders={"value": self.system_kind},
                )
        elif self.provenance != const.PROVENANCE_CUSTOM:
            raise EntityValidationError(
                field=const.FIELD_CATEGORY,
                translation_key=const.TRANS_KEY_INVALID_CATEGORY,
                placeholders={"value": str(self.provenance)},
            )

    @property
    def is_system(self) -> bool:
        return self.provenance == const.PROVENANCE_SYSTEM


@dataclass(frozen=True)
class SpecialDateGoal:
    """Recurring goal template attached to a special date."""

    id: str
    special_date_id: str
    title: str
    description: str | None = None
    frequency: str = const.FREQUENCY_YEARLY
    reminder_enabled: bool = True
    lead_time: int | None = None
    lead_time_unit: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise EntityValidationError(
                field=const.FIELD_TITLE,
                translation_key=const.TRANS_KEY_INVALID_NAME,
            )
        if self.frequency not in const.FREQUENCY_OPTIONS:
            raise EntityValidationError(
                field=const.FIELD_FREQUENCY,
                translation_key=const.TRANS_KEY_INVALID_FREQUENCY,
                placeholders={"value": str(self.frequency)},
            )
        if self.lead_time is not None or self.lead_time_unit is not None:
            validate_lead_time(self.lead_time or 0, self.lead_time_unit)


# ==============================================================================
# Reminders and entries
# ==============================================================================


def validate_lead_time(lead_time: int, lead_time_unit: str | None) -> None:
    """Raise EntityValidationError when a lead time is out of range for its unit."""
    if lead_time_unit not in const.LEAD_TIME_MAX_VALUES:
        raise EntityValidationError(
            field=const.FIELD_LEAD_TIME_UNIT,
            translation_key=const.TRANS_KEY_INVALID_LEAD_TIME_UNIT,
            placeholders={"value": str(lead_time_unit)},
        )
    max_value = const.LEAD_TIME_MAX_VALUES[lead_time_unit]
    if lead_time < 0 or lead_time > max_value:
        raise EntityValidationError(
            field=const.FIELD_LEAD_TIME,
            translation_key=const.TRANS_KEY_INVALID_LEAD_TIME,
            placeholders={
                "value": str(lead_time),
                "unit": lead_time_unit,
                "max": str(max_value),
            },
        )


@dataclass(frozen=True)
class ReminderSpec:
    """When reminders for an entry should fire.

    Attributes:
        target_date: Date of the first instance
        frequency: const.FREQUENCY_* value, FREQUENCY_NONE for a single reminder
        lead_time: Magnitude subtracted from each instance date
        lead_time_unit: days, weeks or months
        end_date: Optional last date an instance may fall on
        is_recurring: Whether the series repeats
        special_date_id: Originating special date for auto-generated reminders
    """

    target_date: date
    frequency: str = const.FREQUENCY_NONE
    lead_time: int = 0
    lead_time_unit: str = const.TIME_UNIT_DAYS
    end_date: date | None = None
    is_recurring: bool = False
    special_date_id: str | None = None

    def __post_init__(self) -> None:
        """Reject out-of-range lead times and inconsistent recurrence."""
        validate_lead_time(self.lead_time, self.lead_time_unit)
        if self.frequency not in const.FREQUENCY_OPTIONS:
            raise EntityValidationError(
                field=const.FIELD_FREQUENCY,
                translation_key=const.TRANS_KEY_INVALID_FREQUENCY,
                placeholders={"value": str(self.frequency)},
            )
        if self.is_recurring and self.frequency == const.FREQUENCY_NONE:
            raise EntityValidationError(
                field=const.FIELD_FREQUENCY,
                translation_key=const.TRANS_KEY_INVALID_RECURRENCE,
                placeholders={"value": self.frequency},
            )
        if self.end_date is not None and self.end_date < self.target_date:
            raise EntityValidationError(
                field=const.FIELD_END_DATE,
                translation_key=const.TRANS_KEY_INVALID_END_DATE,
                placeholders={
                    "value": self.end_date.isoformat(),
                    "target": self.target_date.isoformat(),
                },
            )


@dataclass(frozen=True)
class JournalEntry:
    """A goal or memory on the life calendar.

    Goal-only fields (is_completed, completed_at, convert_to_memory_when_passed,
    reminder) are meaningless for memories and are stripped on conversion.
    """

    id: str
    target_date: date
    title: str = ""
    entry_type: str = const.ENTRY_TYPE_GOAL
    description: str | None = None
    tags: tuple[str, ...] = ()
    is_completed: bool = False
    completed_at: datetime | None = None
    convert_to_memory_when_passed: bool = False
    reminder: ReminderSpec | None = None
    notification_id: str | None = None
    parent_memory_id: str | None = None
    special_date_id: str | None = None

    def __post_init__(self) -> None:
        if self.entry_type not in const.ENTRY_TYPE_OPTIONS:
            raise EntityValidationError(
                field=const.FIELD_ENTRY_TYPE,
                translation_key=const.TRANS_KEY_INVALID_ENTRY_TYPE,
                placeholders={"value": str(self.entry_type)},
            )

    @property
    def is_goal(self) -> bool:
        return self.entry_type == const.ENTRY_TYPE_GOAL


@dataclass(frozen=True)
class GoalDraft:
    """A goal the scheduler wants created; ids and timestamps are added later."""

    target_date: date
    title: str
    description: str | None = None
    tags: tuple[str, ...] = ()
    reminder_date: date | None = None
    lead_time: int | None = None
    lead_time_unit: str | None = None
    convert_to_memory_when_passed: bool = False
    special_date_id: str | None = None
    parent_memory_id: str | None = None
    goal_template_id: str | None = None


@dataclass(frozen=True)
class GoalLifecycleResult:
    """Outcome of evaluating a goal against a given day.

    Attributes:
        state: const.GOAL_STATE_* value
        converted_memory: The memory that replaces the goal, when converted
        is_overdue: True for an active goal whose date has passed
    """

    state: str
    converted_memory: JournalEntry | None = None
    is_overdue: bool = False
