# File: special_date_store.py
"""In-memory collection of user-authored special dates.

Holds custom special dates keyed by internal_id. It contains no derivation
logic and performs no I/O: the storage manager loads it from and saves it to
the persistence backend through from_storage() / to_storage().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import const
from .data_builders import build_custom_special_date, custom_date_to_record

if TYPE_CHECKING:
    from .models import SpecialDateRecord
    from .type_defs import CustomSpecialDateData


class SpecialDateStore:
    """Unordered collection of custom special dates keyed by identifier."""

    def __init__(self, dates: dict[str, CustomSpecialDateData] | None = None) -> None:
        self._dates: dict[str, CustomSpecialDateData] = dict(dates or {})

    @classmethod
    def from_storage(
        cls, data: dict[str, CustomSpecialDateData] | None
    ) -> SpecialDateStore:
        """Create a store from the persisted custom_dates bucket."""
        return cls(data)

    def to_storage(self) -> dict[str, CustomSpecialDateData]:
        """Return a copy of the collection for persistence."""
        return dict(self._dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __contains__(self, date_id: object) -> bool:
        return date_id in self._dates

    def add(self, user_input: dict[str, Any]) -> CustomSpecialDateData:
        """Validate and add a new custom date, returning the stored data.

        Raises:
            EntityValidationError: Invalid name, date or category.
        """
        data = build_custom_special_date(user_input)
        self._dates[data[const.DATA_INTERNAL_ID]] = data
        const.LOGGER.debug(
            "DEBUG: Added custom special date '%s' (%s)",
            data[const.DATA_NAME],
            data[const.DATA_INTERNAL_ID],
        )
        return data

    def update(self, date_id: str, user_input: dict[str, Any]) -> CustomSpecialDateData:
        """Apply changes to an existing custom date and stamp updated_at.

        Raises:
            KeyError: Unknown date_id.
            EntityValidationError: Invalid name, date or category.
        """
        existing = self._dates[date_id]
        data = build_custom_special_date(user_input, existing=existing)
        self._dates[date_id] = data
        return data

    def remove(self, date_id: str) -> CustomSpecialDateData | None:
        """Remove a custom date; returns the removed data or None."""
        return self._dates.pop(date_id, None)

    def get(self, date_id: str) -> CustomSpecialDateData | None:
        return self._dates.get(date_id)

    def list(self) -> list[CustomSpecialDateData]:
        """Return all custom dates (no ordering guarantee)."""
        return list(self._dates.values())

    def records(self) -> list[SpecialDateRecord]:
        """Return all custom dates as SpecialDateRecords."""
        return [custom_date_to_record(data) for data in self._dates.values()]
