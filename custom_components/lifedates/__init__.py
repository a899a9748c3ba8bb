# File: __init__.py
"""Initialization file for the LifeDates integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support (one entry per person).
- Coordinator initialization for data synchronization.
- Storage management with a configurable persistence backend.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import LifeDatesDataCoordinator
from .services import async_setup_services, async_unload_services
from .storage_manager import LifeDatesStorageManager, create_backend
from .utils import dt_utils


def _create_storage_manager(
    hass: HomeAssistant, entry: ConfigEntry
) -> LifeDatesStorageManager:
    backend = create_backend(
        hass,
        entry.data.get(const.CONF_STORAGE_BACKEND, const.DEFAULT_STORAGE_BACKEND),
    )
    user_id = entry.data.get(const.CONF_USER_ID) or entry.unique_id or entry.entry_id
    return LifeDatesStorageManager(backend, user_id)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for LifeDates entry: %s", entry.entry_id)

    # Set the home assistant configured timezone for date operations
    # Must be done early before any components that use datetime helpers
    time_zone = dt_util.get_time_zone(hass.config.time_zone)
    if time_zone is not None:
        dt_utils.set_default_timezone(time_zone)

    # Initialize the storage manager to handle persistent data.
    storage_manager = _create_storage_manager(hass, entry)
    await storage_manager.async_initialize()

    # Create the data coordinator for managing updates and synchronization.
    coordinator = LifeDatesDataCoordinator(hass, entry, storage_manager)

    try:
        # Perform the first refresh to load data.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    # Store the coordinator and data manager in hass.data.
    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    # Set up services required by the integration.
    async_setup_services(hass)

    # Forward the setup to supported platforms.
    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    # Options changes reload the entry (reminders are rescheduled on setup).
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    const.LOGGER.info("INFO: LifeDates setup complete for entry: %s", entry.entry_id)
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload a config entry after its options changed."""
    const.LOGGER.debug("DEBUG: Reloading LifeDates entry %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading LifeDates entry: %s", entry.entry_id)

    # Unload platforms
    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        # Flush pending changes before the managers go away
        await entry_data[const.STORAGE_MANAGER].async_save()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry (deletes the person's stored data)."""
    const.LOGGER.info("INFO: Removing LifeDates entry: %s", entry.entry_id)

    storage_manager = _create_storage_manager(hass, entry)
    await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: LifeDates entry data cleared: %s", entry.entry_id)
