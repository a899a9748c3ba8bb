# File: storage_manager.py
"""Handles persistent data storage for the LifeDates integration.

Persistence goes through a small capability interface (StorageBackend) so the
provider is chosen by configuration at setup rather than by runtime type
inspection:

- HomeAssistantStoreBackend: one Home Assistant `Store` per user key
- MemoryStorageBackend: dict shared through hass.data (testing / ephemeral setups)

LifeDatesStorageManager owns the in-memory document for the configured user
and exposes its buckets (profile, custom dates, goal templates, entries).
Absent and empty values are preserved exactly as stored.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Protocol

from homeassistant.helpers.storage import Store

from . import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import (
        CustomSpecialDateData,
        EntryData,
        ProfileData,
        SpecialDateGoalData,
    )


class StorageBackend(Protocol):
    """Keyed load/save/delete of one user's storage document."""

    async def async_load(self, user_id: str) -> dict[str, Any] | None:
        """Return the stored document, or None when nothing is stored."""

    async def async_save(self, user_id: str, data: dict[str, Any]) -> None:
        """Persist the document."""

    async def async_delete(self, user_id: str) -> None:
        """Remove the stored document."""


class HomeAssistantStoreBackend:
    """Storage backend using Home Assistant's Store helper (.storage/ JSON)."""

    def __init__(self, hass: HomeAssistant) -> None:
        self.hass = hass
        self._stores: dict[str, Store] = {}

    def _store(self, user_id: str) -> Store:
        if user_id not in self._stores:
            self._stores[user_id] = Store(
                self.hass, const.STORAGE_VERSION, f"{const.STORAGE_KEY}_{user_id}"
            )
        return self._stores[user_id]

    async def async_load(self, user_id: str) -> dict[str, Any] | None:
        return await self._store(user_id).async_load()

    async def async_save(self, user_id: str, data: dict[str, Any]) -> None:
        await self._store(user_id).async_save(data)

    async def async_delete(self, user_id: str) -> None:
        await self._store(user_id).async_remove()


class MemoryStorageBackend:
    """Storage backend keeping documents in memory only."""

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}

    async def async_load(self, user_id: str) -> dict[str, Any] | None:
        document = self._documents.get(user_id)
        return copy.deepcopy(document) if document is not None else None

    async def async_save(self, user_id: str, data: dict[str, Any]) -> None:
        self._documents[user_id] = copy.deepcopy(data)

    async def async_delete(self, user_id: str) -> None:
        self._documents.pop(user_id, None)


def create_backend(hass: HomeAssistant, backend_name: str) -> StorageBackend:
    """Return the storage backend selected by configuration.

    The memory backend is one instance per Home Assistant run, kept in
    hass.data, so an entry reload or removal sees the documents saved
    before it.
    """
    if backend_name == const.STORAGE_BACKEND_MEMORY:
        return hass.data.setdefault(const.MEMORY_BACKEND, MemoryStorageBackend())
    if backend_name != const.STORAGE_BACKEND_HOME_ASSISTANT:
        const.LOGGER.warning(
            "WARNING: Unknown storage backend '%s', using '%s'",
            backend_name,
            const.STORAGE_BACKEND_HOME_ASSISTANT,
        )
    return HomeAssistantStoreBackend(hass)


class LifeDatesStorageManager:
    """Manages loading, saving, and accessing one user's LifeDates data.

    Utilizes internal_id as the primary key for all stored entities.
    """

    def __init__(self, backend: StorageBackend, user_id: str) -> None:
        """Initialize the storage manager.

        Args:
            backend: Persistence provider selected at setup.
            user_id: Key identifying the user's document.
        """
        self._backend = backend
        self.user_id = user_id
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    @staticmethod
    def get_default_structure() -> dict[str, Any]:
        """Return the canonical empty data structure for a new user."""
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION,
                const.DATA_META_LAST_PROCESSED_DATE: None,
            },
            const.DATA_PROFILE: None,
            const.DATA_CUSTOM_DATES: {},
            const.DATA_SPECIAL_DATE_GOALS: {},
            const.DATA_ENTRIES: {},
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, initializes with an empty structure. Buckets
        missing from an older document are added without touching the rest.
        """
        const.LOGGER.debug(
            "DEBUG: LifeDatesStorageManager: Loading data for user %s", self.user_id
        )
        existing_data = await self._backend.async_load(self.user_id)

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self.get_default_structure()
            return

        self._data = existing_data
        for key, default in self.get_default_structure().items():
            self._data.setdefault(key, default)
        const.LOGGER.debug(
            "DEBUG: Loaded existing data from storage: %s",
            {
                "custom_dates": len(self._data[const.DATA_CUSTOM_DATES]),
                "goal_templates": len(self._data[const.DATA_SPECIAL_DATE_GOALS]),
                "entries": len(self._data[const.DATA_ENTRIES]),
            },
        )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_profile(self) -> ProfileData | None:
        """Retrieve the profile, None until one has been configured."""
        return self._data.get(const.DATA_PROFILE)

    def set_profile(self, profile: ProfileData) -> None:
        self._data[const.DATA_PROFILE] = profile

    def get_custom_dates(self) -> dict[str, CustomSpecialDateData]:
        """Retrieve the custom special dates."""
        return self._data.setdefault(const.DATA_CUSTOM_DATES, {})

    def get_special_date_goals(self) -> dict[str, SpecialDateGoalData]:
        """Retrieve the special date goal templates."""
        return self._data.setdefault(const.DATA_SPECIAL_DATE_GOALS, {})

    def get_entries(self) -> dict[str, EntryData]:
        """Retrieve the goals and memories."""
        return self._data.setdefault(const.DATA_ENTRIES, {})

    def get_meta(self) -> dict[str, Any]:
        return self._data.setdefault(const.DATA_META, {})

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._backend.async_save(self.user_id, self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions",
                err,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Clear in-memory data and delete the user's stored document."""
        self._data = self.get_default_structure()
        try:
            await self._backend.async_delete(self.user_id)
            const.LOGGER.info("INFO: Storage removed for user %s", self.user_id)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage for user %s: %s. Check file permissions",
                self.user_id,
                err,
            )
