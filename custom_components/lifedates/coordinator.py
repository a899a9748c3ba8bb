# File: coordinator.py
"""Coordinator for the LifeDates integration.

Owns one person's data for one config entry: creates the managers, runs the
daily lifecycle pass and publishes a snapshot (today's matches, upcoming
special dates, overdue goals) to the sensors.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.event import async_track_time_change
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const, data_builders as db
from .engines import SpecialDateMerger, matching_on
from .managers import GoalManager, NotificationManager, SpecialDateManager
from .storage_manager import LifeDatesStorageManager
from .utils.dt_utils import dt_today_local


class LifeDatesDataCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for LifeDates integration.

    Managers hold no data of their own; everything lives in the storage
    manager's document and is reached through this coordinator.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: LifeDatesStorageManager,
    ) -> None:
        """Initialize the LifeDatesDataCoordinator."""
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.config_entry = config_entry
        self.storage_manager = storage_manager

        self.special_date_manager = SpecialDateManager(hass, self)
        self.goal_manager = GoalManager(hass, self)
        self.notification_manager = NotificationManager(hass, self)

    # -------------------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------------------

    @property
    def user_id(self) -> str:
        return self.storage_manager.user_id

    @property
    def today(self) -> date:
        """Local calendar date in the configured time zone."""
        return dt_today_local()

    @property
    def upcoming_window_days(self) -> int:
        return self.config_entry.options.get(
            const.CONF_UPCOMING_WINDOW_DAYS, const.DEFAULT_UPCOMING_WINDOW_DAYS
        )

    # -------------------------------------------------------------------------------------
    # Periodic + First Refresh
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> dict[str, Any]:
        """Periodic update."""
        try:
            return self.build_snapshot(self.today)
        except (KeyError, TypeError, ValueError) as err:
            raise UpdateFailed(f"Error updating LifeDates data: {err}") from err

    async def async_config_entry_first_refresh(self) -> None:
        """Seed the profile, set up managers and register daily processing."""
        if self.storage_manager.get_profile() is None:
            self.storage_manager.set_profile(
                db.build_profile(
                    {
                        const.DATA_PROFILE_NAME: self.config_entry.data.get(
                            const.CONF_NAME
                        ),
                        const.DATA_PROFILE_BIRTH_DATE: self.config_entry.data.get(
                            const.CONF_BIRTH_DATE
                        ),
                    }
                )
            )
            const.LOGGER.info(
                "INFO: Seeded profile for %s from config entry", self.user_id
            )

        await self.special_date_manager.async_setup()
        await self.goal_manager.async_setup()
        await self.notification_manager.async_setup()

        self.process_daily(self.today)
        self.notification_manager.async_reschedule_all()

        self.config_entry.async_on_unload(
            async_track_time_change(
                self.hass,
                self._async_daily_processing,
                **const.DEFAULT_DAILY_PROCESS_TIME,
            )
        )

        self._persist()
        await super().async_config_entry_first_refresh()

    async def _async_daily_processing(self, _now: datetime) -> None:
        """Run the lifecycle pass once the local date has changed."""
        self.process_daily(self.today)
        self._persist_and_update()

    def process_daily(self, today: date) -> list[str]:
        """Convert passed goals into memories for the given day.

        Repeated runs on the same day find nothing left to convert.

        Returns:
            Ids of the memories created.
        """
        created = self.goal_manager.process_lifecycle(today)
        self.storage_manager.get_meta()[const.DATA_META_LAST_PROCESSED_DATE] = (
            today.isoformat()
        )
        if created:
            const.LOGGER.info(
                "INFO: Daily processing for %s converted %d goals",
                today.isoformat(),
                len(created),
            )
        return created

    # -------------------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------------------

    def build_snapshot(self, today: date) -> dict[str, Any]:
        """Return the data published to entities for the given day."""
        records = self.special_date_manager.all_records()
        return {
            const.SNAPSHOT_TODAY: today,
            const.SNAPSHOT_RECORDS: records,
            const.SNAPSHOT_TODAY_MATCHES: matching_on(records, today),
            const.SNAPSHOT_UPCOMING: SpecialDateMerger.upcoming(
                records, today, self.upcoming_window_days
            ),
            const.SNAPSHOT_OVERDUE_GOALS: self.goal_manager.overdue_goals(today),
        }

    # -------------------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------------------

    def _persist(self) -> None:
        """Save to persistent storage."""
        self.hass.add_job(self.storage_manager.async_save)

    def _persist_and_update(self) -> None:
        """Save and push a fresh snapshot to entities."""
        self._persist()
        self.async_set_updated_data(self.build_snapshot(self.today))
