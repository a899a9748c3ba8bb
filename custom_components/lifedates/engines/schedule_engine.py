"""Schedule Engine for LifeDates.

Reminder trigger calculation and goal generation for recurring series.

Instances of a series are always computed from the original target date
(target + k x interval) using `dateutil.relativedelta` clamping, so a monthly
series anchored on Jan 31 yields Feb 29/28, Mar 31, Apr 30... without drifting
to the 28th. Lead time is subtracted with the same calendar semantics.

IMPORTANT: This module must NOT import from coordinator.py or homeassistant.
Only import from const.py, models.py, utils and standard libraries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .. import const
from ..models import GoalDraft
from ..utils.dt_utils import (
    date_to_week_coordinates,
    dt_add_interval,
    dt_subtract_interval,
    safe_date,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date

    from ..models import ReminderSpec, SpecialDateGoal, SpecialDateRecord


class RecurringReminderScheduler:
    """Computes when reminders for a ReminderSpec fire.

    Side-effect free: every call recomputes from the ReminderSpec, so callers can
    re-run it after any edit instead of patching existing schedules.
    """

    # (unit, amount) advanced per frequency step
    FREQUENCY_INTERVALS: ClassVar[dict[str, tuple[str, int]]] = dict(
        const.FREQUENCY_INTERVALS
    )

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    @staticmethod
    def instance_date(spec: ReminderSpec, index: int) -> date | None:
        """Return the index-th instance date of a series (0 = target date)."""
        if index == 0:
            return spec.target_date
        interval = RecurringReminderScheduler.FREQUENCY_INTERVALS.get(spec.frequency)
        if interval is None:
            return None
        unit, amount = interval
        return dt_add_interval(spec.target_date, unit, amount * index)

    @staticmethod
    def trigger_for(spec: ReminderSpec, instance: date) -> date | None:
        """Return the reminder trigger of an instance (instance - lead time)."""
        if not spec.lead_time:
            return instance
        return dt_subtract_interval(instance, spec.lead_time_unit, spec.lead_time)

    @staticmethod
    def _first_candidate_index(spec: ReminderSpec, after_date: date) -> int:
        """Index of an instance known to fall on or before after_date.

        Skips the instances that cannot trigger after after_date so that long
        running weekly series do not walk every week since their target.
        """
        target = spec.target_date
        if after_date <= target:
            return 0
        unit, amount = RecurringReminderScheduler.FREQUENCY_INTERVALS[spec.frequency]
        if unit == const.TIME_UNIT_WEEKS:
            elapsed = (after_date - target).days // const.DAYS_PER_WEEK
        elif unit == const.TIME_UNIT_MONTHS:
            elapsed = (after_date.year - target.year) * 12 + (
                after_date.month - target.month
            )
        else:
            elapsed = after_date.year - target.year
        return max(0, elapsed // amount - 1)

    @staticmethod
    def is_series(spec: ReminderSpec) -> bool:
        return spec.is_recurring and spec.frequency != const.FREQUENCY_NONE

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    @staticmethod
    def next_trigger(spec: ReminderSpec, after_date: date) -> date | None:
        """Return the first reminder trigger strictly after after_date.

        Single reminders fire once at target - lead time and return None once
        that date is at or before after_date. Series advance the original
        target by their frequency until an instance's trigger lands after
        after_date; None once the next instance would pass the end date.

        Example:
            monthly, target 2024-01-31, lead 1 month, after 2024-01-01
            -> instance 2024-02-29, trigger 2024-01-29
        """
        scheduler = RecurringReminderScheduler
        if not scheduler.is_series(spec):
            trigger = scheduler.trigger_for(spec, spec.target_date)
            if trigger is None or trigger <= after_date:
                return None
            return trigger

        start = scheduler._first_candidate_index(spec, after_date)
        for index in range(start, start + const.MAX_SCHEDULE_ITERATIONS):
            instance = scheduler.instance_date(spec, index)
            if instance is None:
                return None
            if spec.end_date is not None and instance > spec.end_date:
                return None
            trigger = scheduler.trigger_for(spec, instance)
            if trigger is not None and trigger > after_date:
                return trigger

        const.LOGGER.warning(
            "WARNING: Reminder schedule exceeded %d iterations (target=%s, frequency=%s)",
            const.MAX_SCHEDULE_ITERATIONS,
            spec.target_date,
            spec.frequency,
        )
        return None

    @staticmethod
    def is_expired(spec: ReminderSpec, after_date: date) -> bool:
        """Return True when no reminder of the series can fire after after_date."""
        return RecurringReminderScheduler.next_trigger(spec, after_date) is None

    @staticmethod
    def instances(spec: ReminderSpec, start: date, end: date) -> Iterator[date]:
        """Yield instance dates of the series falling within [start, end].

        Bounded by the series end date and by MAX_SCHEDULE_ITERATIONS.
        """
        scheduler = RecurringReminderScheduler
        if not scheduler.is_series(spec):
            if start <= spec.target_date <= end:
                yield spec.target_date
            return

        first = scheduler._first_candidate_index(spec, start)
        for index in range(first, first + const.MAX_SCHEDULE_ITERATIONS):
            instance = scheduler.instance_date(spec, index)
            if instance is None or instance > end:
                return
            if spec.end_date is not None and instance > spec.end_date:
                return
            if instance >= start:
                yield instance

    # ------------------------------------------------------------------
    # Goal generation
    # ------------------------------------------------------------------

    @staticmethod
    def _reminder_date(
        occurrence: date, lead_time: int | None, lead_time_unit: str | None
    ) -> date | None:
        if lead_time is None or lead_time_unit is None:
            return None
        return dt_subtract_interval(occurrence, lead_time_unit, lead_time)

    @staticmethod
    def generate_special_date_goal_instances(
        record: SpecialDateRecord,
        template: SpecialDateGoal,
        today: date,
        existing: set[tuple[date, str]] | None = None,
        years: int = const.SPECIAL_DATE_GOAL_YEARS_AHEAD,
    ) -> list[GoalDraft]:
        """Drafts for the goals a special date template should produce.

        One goal per occurrence strictly after today within the current and
        the next years-1 calendar years. Occurrences that already have a goal
        with the same title (listed in existing as (date, title)) are skipped.
        Generated goals turn into memories once their date passes.
        """
        existing = existing or set()
        if record.is_recurring:
            anchor = record.anchor_date
            occurrences = [
                safe_date(today.year + offset, anchor.month, anchor.day)
                for offset in range(years)
            ]
        else:
            occurrences = [record.anchor_date]

        drafts = []
        for occurrence in occurrences:
            if occurrence <= today:
                continue
            if record.is_recurring and occurrence.year < record.anchor_date.year:
                continue
            if (occurrence, template.title) in existing:
                const.LOGGER.debug(
                    "DEBUG: Goal '%s' already exists on %s, skipping",
                    template.title,
                    occurrence,
                )
                continue
            reminder_date = None
            if template.reminder_enabled:
                reminder_date = RecurringReminderScheduler._reminder_date(
                    occurrence, template.lead_time, template.lead_time_unit
                )
            drafts.append(
                GoalDraft(
                    target_date=occurrence,
                    title=template.title,
                    description=template.description,
                    tags=(const.CATEGORY_DISPLAY_NAMES[record.category],),
                    reminder_date=reminder_date,
                    lead_time=template.lead_time,
                    lead_time_unit=template.lead_time_unit,
                    convert_to_memory_when_passed=True,
                    special_date_id=record.id,
                    goal_template_id=template.id,
                )
            )
        return drafts

    @staticmethod
    def generate_recurring_memory_goals(
        memory_id: str,
        title: str,
        spec: ReminderSpec,
        today: date,
        birth_date: date,
        description: str | None = None,
        tags: tuple[str, ...] = (),
        reminder_enabled: bool = True,
    ) -> list[GoalDraft]:
        """Drafts for the future goals implied by a recurring memory.

        The memory date is spec.target_date. Instances after it are generated
        until spec.end_date; yearly series reuse the memory's exact month/day.
        Instances before today are skipped and generation stops at the edge
        of the life calendar. Drafts carry no reminder date when the
        memory's reminder is off.
        """
        scheduler = RecurringReminderScheduler
        if not scheduler.is_series(spec) or spec.end_date is None:
            return []

        anchor = spec.target_date
        drafts = []
        for index in range(1, const.MAX_SCHEDULE_ITERATIONS):
            if spec.frequency == const.FREQUENCY_YEARLY:
                instance = safe_date(anchor.year + index, anchor.month, anchor.day)
            else:
                instance = scheduler.instance_date(spec, index)
            if instance is None or instance > spec.end_date:
                break
            if instance < today:
                continue
            week_year, _, _ = date_to_week_coordinates(instance, birth_date)
            if week_year >= const.LIFE_CALENDAR_MAX_YEARS:
                break
            reminder_date = (
                scheduler.trigger_for(spec, instance) if reminder_enabled else None
            )
            drafts.append(
                GoalDraft(
                    target_date=instance,
                    title=title,
                    description=description,
                    tags=tags,
                    reminder_date=reminder_date,
                    lead_time=spec.lead_time,
                    lead_time_unit=spec.lead_time_unit,
                    parent_memory_id=memory_id,
                )
            )

        const.LOGGER.debug(
            "DEBUG: Generated %d goals from recurring memory %s", len(drafts), memory_id
        )
        return drafts
