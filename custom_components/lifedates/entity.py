"""Base entity classes for LifeDates integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import LifeDatesDataCoordinator


class LifeDatesCoordinatorEntity(CoordinatorEntity[LifeDatesDataCoordinator]):
    """Base entity class for LifeDates sensors with typed coordinator access.

    All entities of one config entry hang off a single service device named
    after the person.
    """

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: LifeDatesDataCoordinator, entry: ConfigEntry, key: str
    ) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{key}"
        self._attr_translation_key = key
        self._attr_device_info = DeviceInfo(
            identifiers={(const.DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer=const.LIFEDATES_TITLE,
            entry_type=DeviceEntryType.SERVICE,
        )

    @property
    def coordinator(self) -> LifeDatesDataCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: LifeDatesDataCoordinator) -> None:
        object.__setattr__(self, "_coordinator", value)
