"""Base manager class for LifeDates managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import (
    async_dispatcher_connect,
    async_dispatcher_send,
)

from .. import const
from ..helpers.entity_helpers import get_event_signal

if TYPE_CHECKING:
    from collections.abc import Callable

    from homeassistant.core import HomeAssistant

    from ..coordinator import LifeDatesDataCoordinator


class BaseManager(ABC):
    """Shared plumbing for the managers of one person (one config entry).

    Event flow between managers:
    - SpecialDateManager emits special_dates_changed; GoalManager listens
      and cascades deleted special dates to their templates and goals
    - GoalManager emits entry_saved / entry_deleted; NotificationManager
      listens and swaps the issued trigger handle

    Signals are namespaced by config entry id, so two people configured on
    the same Home Assistant never see each other's events. Listeners are
    dropped when the entry unloads.

    Writes go through the coordinator: _persist_and_update() when sensors
    must refresh, _persist() alone for bookkeeping such as trigger handles.
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
    ) -> None:
        """Bind the manager to its coordinator and config entry."""
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def emit(self, suffix: str, **payload: Any) -> None:
        """Emit instance-scoped event to other managers.

        Example:
            self.emit(const.SIGNAL_SUFFIX_ENTRY_SAVED, entry_id=entry_id)
        """
        signal = get_event_signal(self.entry_id, suffix)
        const.LOGGER.debug(
            "DEBUG: Emitting event '%s' for instance %s with payload keys: %s",
            suffix,
            self.entry_id,
            list(payload.keys()),
        )
        # Pass payload as single dict argument (dispatcher only supports *args)
        async_dispatcher_send(self.hass, signal, payload)

    def listen(self, suffix: str, callback: Callable[..., Any]) -> None:
        """Subscribe to instance-scoped event with automatic cleanup.

        The subscription is removed when the config entry is unloaded.
        Callbacks decorated with @callback run inline during emit().
        """
        signal = get_event_signal(self.entry_id, suffix)
        unsub = async_dispatcher_connect(self.hass, signal, callback)
        self.coordinator.config_entry.async_on_unload(unsub)
        const.LOGGER.debug(
            "DEBUG: Manager %s listening to event '%s' for instance %s",
            self.__class__.__name__,
            suffix,
            self.entry_id,
        )

    @abstractmethod
    async def async_setup(self) -> None:
        """Load state and subscribe to events, before the first refresh."""
