# File: sensor.py
"""Sensors for the LifeDates integration.

Three read-only sensors per person, all fed by the coordinator snapshot:
- Next special date (state: name of the soonest upcoming special date)
- Today's special dates (state: how many special dates fall on today)
- Overdue goals (state: how many goals passed without being completed)
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const, data_builders as db
from .coordinator import LifeDatesDataCoordinator
from .entity import LifeDatesCoordinatorEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for LifeDates integration."""
    coordinator: LifeDatesDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities(
        [
            NextSpecialDateSensor(coordinator, entry),
            TodaysSpecialDatesSensor(coordinator, entry),
            OverdueGoalsSensor(coordinator, entry),
        ]
    )


class NextSpecialDateSensor(LifeDatesCoordinatorEntity, SensorEntity):
    """Soonest special date within the upcoming window.

    A Feb 29 anchor counts down to Feb 28 in non-leap years, but the
    today's special dates sensor only lists it on an actual Feb 29. On
    Feb 28 of a non-leap year this sensor shows it with days_until 0
    while the today sensor does not count it.
    """

    def __init__(
        self, coordinator: LifeDatesDataCoordinator, entry: ConfigEntry
    ) -> None:
        super().__init__(coordinator, entry, const.SENSOR_KEY_NEXT_SPECIAL_DATE)

    @property
    def native_value(self) -> str | None:
        upcoming = self.coordinator.data[const.SNAPSHOT_UPCOMING]
        return upcoming[0].name if upcoming else None

    @property
    def icon(self) -> str:
        upcoming = self.coordinator.data[const.SNAPSHOT_UPCOMING]
        if upcoming and upcoming[0].icon:
            return upcoming[0].icon
        return const.ICON_NEXT_SPECIAL_DATE

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        today = self.coordinator.data[const.SNAPSHOT_TODAY]
        upcoming = [
            db.record_to_dict(record, today)
            for record in self.coordinator.data[const.SNAPSHOT_UPCOMING]
        ]
        attributes: dict[str, Any] = {const.ATTR_UPCOMING: upcoming}
        if upcoming:
            first = upcoming[0]
            attributes.update(
                {
                    const.ATTR_SPECIAL_DATE_NAME: first[const.DATA_NAME],
                    const.ATTR_SPECIAL_DATE_DATE: first[const.ATTR_SPECIAL_DATE_DATE],
                    const.ATTR_NEXT_OCCURRENCE: first[const.ATTR_NEXT_OCCURRENCE],
                    const.ATTR_DAYS_UNTIL: first[const.ATTR_DAYS_UNTIL],
                    const.ATTR_LABEL: first[const.ATTR_LABEL],
                    const.ATTR_CATEGORY: first[const.ATTR_CATEGORY],
                    const.ATTR_CATEGORY_NAME: first[const.ATTR_CATEGORY_NAME],
                }
            )
        return attributes


class TodaysSpecialDatesSensor(LifeDatesCoordinatorEntity, SensorEntity):
    """Number of special dates occurring today."""

    _attr_icon = const.ICON_TODAYS_SPECIAL_DATES

    def __init__(
        self, coordinator: LifeDatesDataCoordinator, entry: ConfigEntry
    ) -> None:
        super().__init__(coordinator, entry, const.SENSOR_KEY_TODAYS_SPECIAL_DATES)

    @property
    def native_value(self) -> int:
        return len(self.coordinator.data[const.SNAPSHOT_TODAY_MATCHES])

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        today = self.coordinator.data[const.SNAPSHOT_TODAY]
        return {
            const.ATTR_SPECIAL_DATES: [
                db.record_to_dict(record, today)
                for record in self.coordinator.data[const.SNAPSHOT_TODAY_MATCHES]
            ]
        }


class OverdueGoalsSensor(LifeDatesCoordinatorEntity, SensorEntity):
    """Number of goals past their date that stay active."""

    _attr_icon = const.ICON_OVERDUE_GOALS

    def __init__(
        self, coordinator: LifeDatesDataCoordinator, entry: ConfigEntry
    ) -> None:
        super().__init__(coordinator, entry, const.SENSOR_KEY_OVERDUE_GOALS)

    @property
    def native_value(self) -> int:
        return len(self.coordinator.data[const.SNAPSHOT_OVERDUE_GOALS])

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            const.ATTR_GOALS: [
                {
                    const.DATA_INTERNAL_ID: goal[const.DATA_INTERNAL_ID],
                    const.DATA_ENTRY_TITLE: goal[const.DATA_ENTRY_TITLE],
                    const.DATA_ENTRY_TARGET_DATE: goal[const.DATA_ENTRY_TARGET_DATE],
                }
                for goal in self.coordinator.data[const.SNAPSHOT_OVERDUE_GOALS]
            ]
        }
