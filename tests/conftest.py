"""Shared fixtures for LifeDates tests."""

from datetime import date
from typing import Any
from unittest.mock import patch

import pytest
from homeassistant.core import HomeAssistant, ServiceCall
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_mock_service,
)

from custom_components.lifedates.const import (
    CONF_BIRTH_DATE,
    CONF_ENABLE_NOTIFICATIONS,
    CONF_NAME,
    CONF_NOTIFY_SERVICE,
    CONF_REMINDER_TIME,
    CONF_STORAGE_BACKEND,
    CONF_UPCOMING_WINDOW_DAYS,
    CONF_UPDATE_INTERVAL,
    CONF_USER_ID,
    DEFAULT_REMINDER_TIME,
    DEFAULT_UPCOMING_WINDOW_DAYS,
    DEFAULT_UPDATE_INTERVAL,
    DOMAIN,
    STORAGE_BACKEND_HOME_ASSISTANT,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

# Every integration test runs on this instant (05:00 local in the default
# US/Pacific test time zone, before the 09:00 reminder time).
FROZEN_NOW = "2024-06-10 12:00:00+00:00"
FROZEN_TODAY = date(2024, 6, 10)

TEST_NOTIFY_SERVICE = "mobile_app_alex"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a config entry for one person (Alex, born 1990-03-15)."""
    return MockConfigEntry(
        domain=DOMAIN,
        title="Alex",
        data={
            CONF_NAME: "Alex",
            CONF_USER_ID: "alex",
            CONF_BIRTH_DATE: "1990-03-15",
            CONF_STORAGE_BACKEND: STORAGE_BACKEND_HOME_ASSISTANT,
        },
        options={
            CONF_NOTIFY_SERVICE: f"notify.{TEST_NOTIFY_SERVICE}",
            CONF_ENABLE_NOTIFICATIONS: True,
            CONF_REMINDER_TIME: DEFAULT_REMINDER_TIME,
            CONF_UPCOMING_WINDOW_DAYS: DEFAULT_UPCOMING_WINDOW_DAYS,
            CONF_UPDATE_INTERVAL: DEFAULT_UPDATE_INTERVAL,
        },
        entry_id="test_entry_id",
        unique_id="alex",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any] | None:
    """Return the stored document (None = fresh install)."""
    return None


@pytest.fixture
def notify_calls(hass: HomeAssistant) -> list[ServiceCall]:
    """Register a mock notify service and return the calls it receives."""
    return async_mock_service(hass, "notify", TEST_NOTIFY_SERVICE)


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    freezer: Any,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any] | None,  # pylint: disable=redefined-outer-name
    notify_calls: list[ServiceCall],  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the LifeDates integration for testing with mocked storage."""
    freezer.move_to(FROZEN_NOW)
    mock_config_entry.add_to_hass(hass)

    # Mock the Store's async_load to return our test data
    with patch(
        "homeassistant.helpers.storage.Store.async_load",
        return_value=mock_storage_data,
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    return mock_config_entry
