"""Tests for LifeDates sensors."""

from __future__ import annotations

from datetime import date

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.lifedates import const
from custom_components.lifedates.coordinator import LifeDatesDataCoordinator


@pytest.fixture
def coordinator(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> LifeDatesDataCoordinator:
    """Return the coordinator of the test entry."""
    return hass.data[const.DOMAIN][init_integration.entry_id][const.COORDINATOR]


def sensor_entity_id(hass: HomeAssistant, key: str) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, f"test_entry_id_{key}"
    )
    assert entity_id is not None
    return entity_id


async def test_sensors_registered(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Three sensors per person, all on the person's device."""
    registry = er.async_get(hass)
    entries = er.async_entries_for_config_entry(registry, init_integration.entry_id)

    assert {entry.unique_id for entry in entries} == {
        "test_entry_id_next_special_date",
        "test_entry_id_todays_special_dates",
        "test_entry_id_overdue_goals",
    }
    assert len({entry.device_id for entry in entries}) == 1


async def test_fresh_install_states(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Only the birthday exists and it is months away."""
    next_state = hass.states.get(
        sensor_entity_id(hass, const.SENSOR_KEY_NEXT_SPECIAL_DATE)
    )
    assert next_state.state == "unknown"
    assert next_state.attributes[const.ATTR_UPCOMING] == []

    today_state = hass.states.get(
        sensor_entity_id(hass, const.SENSOR_KEY_TODAYS_SPECIAL_DATES)
    )
    assert today_state.state == "0"

    overdue_state = hass.states.get(
        sensor_entity_id(hass, const.SENSOR_KEY_OVERDUE_GOALS)
    )
    assert overdue_state.state == "0"


async def test_next_special_date_follows_changes(
    hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
) -> None:
    coordinator.special_date_manager.add_special_date(
        {
            const.DATA_NAME: "Camino",
            const.DATA_SPECIAL_DATE_DATE: date(2019, 6, 15),
            const.DATA_SPECIAL_DATE_CATEGORY: const.CATEGORY_TRAVEL,
        }
    )
    await hass.async_block_till_done()

    state = hass.states.get(sensor_entity_id(hass, const.SENSOR_KEY_NEXT_SPECIAL_DATE))
    assert state.state == "Camino"
    assert state.attributes["icon"] == "mdi:airplane"
    assert state.attributes[const.ATTR_DAYS_UNTIL] == 5
    assert state.attributes[const.ATTR_NEXT_OCCURRENCE] == "2024-06-15"
    assert state.attributes[const.ATTR_LABEL] == "In 5 days"
    assert state.attributes[const.ATTR_CATEGORY_NAME] == "Travel"


async def test_todays_special_dates(
    hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
) -> None:
    coordinator.special_date_manager.update_profile(
        {const.DATA_PROFILE_MARRIAGE_DATE: date(2015, 6, 10)}
    )
    await hass.async_block_till_done()

    state = hass.states.get(
        sensor_entity_id(hass, const.SENSOR_KEY_TODAYS_SPECIAL_DATES)
    )
    assert state.state == "1"
    names = [item[const.DATA_NAME] for item in state.attributes[const.ATTR_SPECIAL_DATES]]
    assert names == ["Our Wedding Anniversary"]

    # Today's anniversary also leads the upcoming list
    next_state = hass.states.get(
        sensor_entity_id(hass, const.SENSOR_KEY_NEXT_SPECIAL_DATE)
    )
    assert next_state.state == "Our Wedding Anniversary"
    assert next_state.attributes[const.ATTR_LABEL] == "Today"


async def test_overdue_goals(
    hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
) -> None:
    goal_id, _ = coordinator.goal_manager.create_entry(
        {
            const.DATA_ENTRY_TITLE: "Renew passport",
            const.DATA_ENTRY_TARGET_DATE: date(2024, 6, 1),
        }
    )
    await hass.async_block_till_done()

    state = hass.states.get(sensor_entity_id(hass, const.SENSOR_KEY_OVERDUE_GOALS))
    assert state.state == "1"
    assert state.attributes[const.ATTR_GOALS] == [
        {
            const.DATA_INTERNAL_ID: goal_id,
            const.DATA_ENTRY_TITLE: "Renew passport",
            const.DATA_ENTRY_TARGET_DATE: "2024-06-01",
        }
    ]

    coordinator.goal_manager.complete_goal(goal_id, dt_util.utcnow())
    await hass.async_block_till_done()

    state = hass.states.get(sensor_entity_id(hass, const.SENSOR_KEY_OVERDUE_GOALS))
    assert state.state == "0"
