"""Special Date Manager for LifeDates integration.

Owns the profile and the custom special dates of one config entry:
- Profile updates (which change the derived system dates)
- Custom special date CRUD through SpecialDateStore
- The merged collection handed to the coordinator and services

Every change emits SIGNAL_SUFFIX_SPECIAL_DATES_CHANGED with the ids of the
special dates that disappeared and of those whose occurrences moved (date,
recurrence or category). GoalManager follows with templates and goals.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError

from .. import const, data_builders as db
from ..engines import derive_special_dates, merge_special_dates
from ..special_date_store import SpecialDateStore
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import LifeDatesDataCoordinator
    from ..models import BiographicalProfile, SpecialDateRecord
    from ..type_defs import CustomSpecialDateData, ProfileData


class SpecialDateManager(BaseManager):
    """Manager for the profile and custom special dates."""

    def __init__(
        self, hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
    ) -> None:
        super().__init__(hass, coordinator)
        self._store = SpecialDateStore()

    async def async_setup(self) -> None:
        """Load custom dates from storage into the in-memory store."""
        self._store = SpecialDateStore.from_storage(
            self.coordinator.storage_manager.get_custom_dates()
        )
        const.LOGGER.debug(
            "DEBUG: SpecialDateManager loaded %d custom dates", len(self._store)
        )

    # =========================================================================
    # Profile
    # =========================================================================

    @property
    def profile_data(self) -> ProfileData:
        profile = self.coordinator.storage_manager.get_profile()
        if profile is None:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_NO_ENTRY_FOUND,
            )
        return profile

    @property
    def profile(self) -> BiographicalProfile:
        return db.profile_from_data(self.profile_data)

    def update_profile(self, user_input: dict[str, Any]) -> ProfileData:
        """Apply profile changes.

        Raises:
            EntityValidationError: Invalid profile data.
        """
        existing = self.coordinator.storage_manager.get_profile()
        profile = db.build_profile(user_input, existing=existing)
        before = self._occurrence_signatures() if existing is not None else {}
        self.coordinator.storage_manager.set_profile(profile)
        const.LOGGER.info("INFO: Profile updated for %s", self.coordinator.user_id)
        self._emit_changes(before)
        self.coordinator._persist_and_update()
        return profile

    # =========================================================================
    # Special dates (merged view)
    # =========================================================================

    def all_records(self) -> list[SpecialDateRecord]:
        """Return derived and custom special dates as one collection."""
        return merge_special_dates(derive_special_dates(self.profile), self._store.records())

    def get_record(self, special_date_id: str) -> SpecialDateRecord:
        """Return one special date from the merged collection.

        Raises:
            HomeAssistantError: Unknown special date.
        """
        for record in self.all_records():
            if record.id == special_date_id:
                return record
        raise HomeAssistantError(
            translation_domain=const.DOMAIN,
            translation_key=const.TRANS_KEY_ERROR_SPECIAL_DATE_NOT_FOUND,
            translation_placeholders={"special_date_id": special_date_id},
        )

    def _occurrence_signatures(self) -> dict[str, tuple[Any, ...]]:
        """Map each special date id to what its generated goals depend on."""
        return {
            record.id: (record.anchor_date, record.is_recurring, record.category)
            for record in self.all_records()
        }

    def _emit_changes(self, before: dict[str, tuple[Any, ...]]) -> None:
        after = self._occurrence_signatures()
        removed = sorted(set(before) - set(after))
        changed = sorted(
            special_date_id
            for special_date_id, signature in after.items()
            if special_date_id in before and before[special_date_id] != signature
        )
        if removed or changed:
            const.LOGGER.debug(
                "DEBUG: Special dates removed %s, moved %s", removed, changed
            )
        self.emit(
            const.SIGNAL_SUFFIX_SPECIAL_DATES_CHANGED,
            removed_special_date_ids=removed,
            changed_special_date_ids=changed,
        )

    # =========================================================================
    # Custom special dates
    # =========================================================================

    def _sync_store(self) -> None:
        """Write the in-memory store back to the storage document."""
        self.coordinator.storage_manager.data[const.DATA_CUSTOM_DATES] = (
            self._store.to_storage()
        )

    def _require_custom(self, special_date_id: str) -> CustomSpecialDateData:
        data = self._store.get(special_date_id)
        if data is not None:
            return data
        if special_date_id.startswith(f"{const.SYSTEM_ID_PREFIX}_"):
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_SYSTEM_DATE_READ_ONLY,
                translation_placeholders={"special_date_id": special_date_id},
            )
        raise HomeAssistantError(
            translation_domain=const.DOMAIN,
            translation_key=const.TRANS_KEY_ERROR_SPECIAL_DATE_NOT_FOUND,
            translation_placeholders={"special_date_id": special_date_id},
        )

    def add_special_date(self, user_input: dict[str, Any]) -> str:
        """Create a custom special date and return its id.

        Raises:
            EntityValidationError: Invalid name, date or category.
        """
        before = self._occurrence_signatures()
        data = self._store.add(user_input)
        self._sync_store()
        const.LOGGER.info(
            "INFO: Added special date '%s' (%s)",
            data[const.DATA_NAME],
            data[const.DATA_INTERNAL_ID],
        )
        self._emit_changes(before)
        self.coordinator._persist_and_update()
        return data[const.DATA_INTERNAL_ID]

    def update_special_date(
        self, special_date_id: str, user_input: dict[str, Any]
    ) -> CustomSpecialDateData:
        """Update a custom special date.

        Raises:
            HomeAssistantError: Unknown or system-derived special date.
            EntityValidationError: Invalid name, date or category.
        """
        self._require_custom(special_date_id)
        before = self._occurrence_signatures()
        data = self._store.update(special_date_id, user_input)
        self._sync_store()
        self._emit_changes(before)
        self.coordinator._persist_and_update()
        return data

    def delete_special_date(self, special_date_id: str) -> None:
        """Delete a custom special date; goals attached to it go with it.

        Raises:
            HomeAssistantError: Unknown or system-derived special date.
        """
        data = self._require_custom(special_date_id)
        before = self._occurrence_signatures()
        self._store.remove(special_date_id)
        self._sync_store()
        const.LOGGER.info(
            "INFO: Deleted special date '%s' (%s)",
            data[const.DATA_NAME],
            special_date_id,
        )
        self._emit_changes(before)
        self.coordinator._persist_and_update()
