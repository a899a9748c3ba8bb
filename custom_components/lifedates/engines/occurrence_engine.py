"""Occurrence matching and next-occurrence countdowns for special dates.

No Home Assistant imports - fully unit testable.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import date_parts, days_between, safe_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..models import SpecialDateRecord


class OccurrenceMatcher:
    """Answers which special dates fall on a given calendar date.

    Recurring records match the same month/day every year from their anchor
    year forward, never before. One-time records match their exact anchor
    date only.

    February 29 anchors compare month/day exactly, so they do not match in
    non-leap years. This is intentional: the date is never rounded to
    Feb 28 or Mar 1 here.
    """

    @staticmethod
    def matches(record: SpecialDateRecord, on: date) -> bool:
        """Return True if the record occurs on the given date."""
        anchor_year, anchor_month, anchor_day = date_parts(record.anchor_date)
        on_year, on_month, on_day = date_parts(on)

        if record.is_recurring:
            return (on_month, on_day) == (
                anchor_month,
                anchor_day,
            ) and on_year >= anchor_year

        return (on_year, on_month, on_day) == (
            anchor_year,
            anchor_month,
            anchor_day,
        )

    @staticmethod
    def all_matching(
        records: Iterable[SpecialDateRecord], on: date
    ) -> list[SpecialDateRecord]:
        """Return every record occurring on the given date, in input order."""
        return [rec for rec in records if OccurrenceMatcher.matches(rec, on)]


class NextOccurrenceCalculator:
    """Countdown to the next occurrence of a special date."""

    @staticmethod
    def _candidate(record: SpecialDateRecord, today: date) -> date:
        """Nearest month/day of the anchor on or after today.

        A Feb 29 anchor resolves to Feb 28 in non-leap years.
        """
        anchor = record.anchor_date
        candidate = safe_date(today.year, anchor.month, anchor.day)
        if candidate < today:
            candidate = safe_date(today.year + 1, anchor.month, anchor.day)
        return candidate

    @staticmethod
    def days_until_next(record: SpecialDateRecord, today: date) -> int:
        """Return whole days until the record's month/day next falls (>= 0).

        Today counts as day 0. The anchor year plays no part here.
        """
        return days_between(today, NextOccurrenceCalculator._candidate(record, today))

    @staticmethod
    def next_occurrence_date(record: SpecialDateRecord, today: date) -> date | None:
        """Return the next date on which the record actually occurs.

        Unlike days_until_next this honours the anchor year: one-time records
        return their anchor (or None once it has passed) and recurring records
        never resolve to a date before their anchor.
        """
        anchor = record.anchor_date
        if not record.is_recurring:
            return anchor if anchor >= today else None
        if anchor >= today:
            return anchor
        return NextOccurrenceCalculator._candidate(record, today)

    @staticmethod
    def label_for_days(days: int) -> str:
        """Bucket a day count into a coarse countdown label.

        0 -> Today, 1 -> Tomorrow, 2-6 -> In N days, 7-29 -> In N week(s),
        30+ -> In N month(s) where a month is a flat 30 days.
        """
        if days <= 0:
            return const.LABEL_TODAY
        if days == 1:
            return const.LABEL_TOMORROW
        if days < const.DAYS_PER_WEEK:
            return const.LABEL_IN_DAYS_FMT.format(days)
        if days < const.DAYS_PER_LABEL_MONTH:
            weeks = days // const.DAYS_PER_WEEK
            return const.LABEL_IN_WEEKS_FMT.format(weeks, "" if weeks == 1 else "s")
        months = days // const.DAYS_PER_LABEL_MONTH
        return const.LABEL_IN_MONTHS_FMT.format(months, "" if months == 1 else "s")

    @staticmethod
    def next_occurrence_label(record: SpecialDateRecord, today: date) -> str:
        """Return the countdown label for a record."""
        return NextOccurrenceCalculator.label_for_days(
            NextOccurrenceCalculator.days_until_next(record, today)
        )
