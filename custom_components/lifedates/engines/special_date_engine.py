"""Special date derivation and merging.

Pure functions that turn a BiographicalProfile into system special dates and
combine them with user-authored custom dates into one collection.

No Home Assistant imports - fully unit testable.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..models import SpecialDateRecord
from .occurrence_engine import NextOccurrenceCalculator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..models import BiographicalProfile


def system_date_id(kind: str, source_id: str | None = None) -> str:
    """Return the stable identifier of a system-derived special date.

    system_date_id("child_birthday", "abc") -> "system_child_birthday_abc"
    """
    if source_id:
        return f"{const.SYSTEM_ID_PREFIX}_{kind}_{source_id}"
    return f"{const.SYSTEM_ID_PREFIX}_{kind}"


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


class SpecialDateDeriver:
    """Derives the canonical special dates implied by a profile.

    Always yields the person's own birthday. Every other record depends on
    the presence of the data behind it; missing data means fewer records,
    never an error. No ordering guarantee is made on the result.
    """

    @staticmethod
    def _system_record(
        kind: str,
        name: str,
        anchor: date,
        source_id: str | None = None,
        icon: str | None = None,
    ) -> SpecialDateRecord:
        return SpecialDateRecord(
            id=system_date_id(kind, source_id),
            name=name,
            anchor_date=anchor,
            category=const.SYSTEM_KIND_CATEGORIES[kind],
            is_recurring=kind not in const.ONE_TIME_SYSTEM_KINDS,
            provenance=const.PROVENANCE_SYSTEM,
            system_kind=kind,
            source_id=source_id,
            icon=icon,
        )

    @staticmethod
    def derive(profile: BiographicalProfile) -> list[SpecialDateRecord]:
        """Return the system special dates for a profile.

        Rules:
        - Own birthday: always
        - Wedding anniversary: iff marriage date is present
        - Spouse birthday: iff spouse birth date and a non-empty spouse name
        - Child birthday: one per child with a non-empty name
        - Pet birthday: one per pet with a birthday and a non-empty name
        - Graduation: iff school name is non-empty and graduation year > 0,
          dated June 1st of that year, non-recurring
        """
        build = SpecialDateDeriver._system_record
        records = [
            build(const.SYSTEM_KIND_BIRTHDAY, const.LABEL_MY_BIRTHDAY, profile.birth_date)
        ]

        if profile.marriage_date is not None:
            records.append(
                build(
                    const.SYSTEM_KIND_ANNIVERSARY,
                    const.LABEL_WEDDING_ANNIVERSARY,
                    profile.marriage_date,
                )
            )

        if profile.spouse_birth_date is not None and _has_text(profile.spouse_name):
            records.append(
                build(
                    const.SYSTEM_KIND_SPOUSE_BIRTHDAY,
                    const.LABEL_BIRTHDAY_FMT.format(profile.spouse_name),
                    profile.spouse_birth_date,
                )
            )

        for child in profile.children:
            if not _has_text(child.name):
                continue
            records.append(
                build(
                    const.SYSTEM_KIND_CHILD_BIRTHDAY,
                    const.LABEL_BIRTHDAY_FMT.format(child.name),
                    child.birth_date,
                    source_id=child.id,
                )
            )

        for pet in profile.pets:
            if pet.birthday is None or not _has_text(pet.name):
                continue
            records.append(
                build(
                    const.SYSTEM_KIND_PET_BIRTHDAY,
                    const.LABEL_BIRTHDAY_FMT.format(pet.name),
                    pet.birthday,
                    source_id=pet.id,
                    icon=pet.icon,
                )
            )

        if _has_text(profile.school_name) and (profile.graduation_year or 0) > 0:
            records.append(
                build(
                    const.SYSTEM_KIND_GRADUATION,
                    const.LABEL_GRADUATION_FMT.format(profile.school_name),
                    date(
                        profile.graduation_year,  # type: ignore[arg-type]
                        const.GRADUATION_MONTH,
                        const.GRADUATION_DAY,
                    ),
                )
            )

        const.LOGGER.debug(
            "DEBUG: Derived %d system special dates from profile", len(records)
        )
        return records


class SpecialDateMerger:
    """Combines derived and custom special dates into one collection."""

    @staticmethod
    def resolve_metadata(record: SpecialDateRecord) -> SpecialDateRecord:
        """Fill in the icon and category display name of a record.

        An icon already set on the record (pet icons) is kept.
        """
        return replace(
            record,
            icon=record.icon or const.CATEGORY_ICONS[record.category],
            category_name=const.CATEGORY_DISPLAY_NAMES[record.category],
        )

    @staticmethod
    def merge(
        derived: Iterable[SpecialDateRecord], custom: Iterable[SpecialDateRecord]
    ) -> list[SpecialDateRecord]:
        """Return one normalised collection of derived and custom records.

        Custom records keep their own id, notes and recurring flag. A custom
        record whose id collides with a derived one replaces it.
        """
        merged: dict[str, SpecialDateRecord] = {}
        for record in derived:
            merged[record.id] = SpecialDateMerger.resolve_metadata(record)
        for record in custom:
            if record.id in merged:
                const.LOGGER.warning(
                    "WARNING: Custom special date '%s' shadows a derived date",
                    record.id,
                )
            merged[record.id] = SpecialDateMerger.resolve_metadata(record)
        return list(merged.values())

    @staticmethod
    def sorted_by_next(
        records: Iterable[SpecialDateRecord], today: date
    ) -> list[SpecialDateRecord]:
        """Order records by days until their next occurrence, then by name."""
        return sorted(
            records,
            key=lambda rec: (
                NextOccurrenceCalculator.days_until_next(rec, today),
                rec.name,
            ),
        )

    @staticmethod
    def grouped_by_category(
        records: Iterable[SpecialDateRecord], today: date
    ) -> list[tuple[str, list[SpecialDateRecord]]]:
        """Group records by category display name.

        Groups are sorted by display name; records inside each group by days
        until next occurrence.
        """
        groups: dict[str, list[SpecialDateRecord]] = {}
        for record in records:
            display = const.CATEGORY_DISPLAY_NAMES[record.category]
            groups.setdefault(display, []).append(record)
        return [
            (display, SpecialDateMerger.sorted_by_next(groups[display], today))
            for display in sorted(groups)
        ]

    @staticmethod
    def upcoming(
        records: Iterable[SpecialDateRecord],
        today: date,
        within_days: int = const.DEFAULT_UPCOMING_WINDOW_DAYS,
    ) -> list[SpecialDateRecord]:
        """Return records whose next occurrence is within the window, soonest first.

        One-time records whose date has already passed never appear.
        """
        selected = []
        for record in records:
            next_date = NextOccurrenceCalculator.next_occurrence_date(record, today)
            if next_date is None:
                continue
            if (next_date - today).days <= within_days:
                selected.append(record)
        return SpecialDateMerger.sorted_by_next(selected, today)
