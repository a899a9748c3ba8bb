"""Engine modules for LifeDates integration.

Contains the pure computation engines (no Home Assistant imports):
- special_date_engine: Derivation from the profile and merging with custom dates
- occurrence_engine: Occurrence matching and next-occurrence countdowns
- schedule_engine: Reminder triggers and recurring goal generation
- goal_engine: Goal lifecycle transitions

The module-level functions below are the public engine interface used by
the managers and the coordinator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Use relative imports within package to avoid mypy module resolution issues
from .goal_engine import GoalLifecycleManager
from .occurrence_engine import NextOccurrenceCalculator, OccurrenceMatcher
from .schedule_engine import RecurringReminderScheduler
from .special_date_engine import (
    SpecialDateDeriver,
    SpecialDateMerger,
    system_date_id,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from ..models import (
        BiographicalProfile,
        GoalLifecycleResult,
        JournalEntry,
        ReminderSpec,
        SpecialDateRecord,
    )


def derive_special_dates(profile: BiographicalProfile) -> list[SpecialDateRecord]:
    """Return the system special dates implied by a profile."""
    return SpecialDateDeriver.derive(profile)


def merge_special_dates(
    derived: Iterable[SpecialDateRecord], custom: Iterable[SpecialDateRecord]
) -> list[SpecialDateRecord]:
    """Combine derived and custom records into one collection."""
    return SpecialDateMerger.merge(derived, custom)


def matching_on(
    records: Iterable[SpecialDateRecord], on: date
) -> list[SpecialDateRecord]:
    """Return the records occurring on a date."""
    return OccurrenceMatcher.all_matching(records, on)


def days_until_next(record: SpecialDateRecord, today: date) -> int:
    """Return whole days until the record next falls (0 = today)."""
    return NextOccurrenceCalculator.days_until_next(record, today)


def next_occurrence_label(record: SpecialDateRecord, today: date) -> str:
    """Return the countdown label for a record."""
    return NextOccurrenceCalculator.next_occurrence_label(record, today)


def next_reminder_trigger(spec: ReminderSpec, after_date: date) -> date | None:
    """Return the first reminder trigger strictly after after_date."""
    return RecurringReminderScheduler.next_trigger(spec, after_date)


def apply_goal_lifecycle(goal: JournalEntry, today: date) -> GoalLifecycleResult:
    """Return the lifecycle state of a goal on the given day."""
    return GoalLifecycleManager.apply_lifecycle(goal, today)


__all__ = [
    "GoalLifecycleManager",
    "NextOccurrenceCalculator",
    "OccurrenceMatcher",
    "RecurringReminderScheduler",
    "SpecialDateDeriver",
    "SpecialDateMerger",
    "apply_goal_lifecycle",
    "days_until_next",
    "derive_special_dates",
    "matching_on",
    "merge_special_dates",
    "next_occurrence_label",
    "next_reminder_trigger",
    "system_date_id",
]
