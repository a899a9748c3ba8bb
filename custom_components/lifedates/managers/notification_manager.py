# File: notification_manager.py
"""Notification Manager for LifeDates integration.

This manager is the notification collaborator of the reminder scheduler:
- Schedules one-shot reminder deliveries and hands back a trigger handle
- Cancels pending deliveries by handle
- Reports the current authorization state
- Keeps goal reminders in sync with entry changes (event-driven)

The scheduler engine only computes *when* a reminder fires. This manager
turns that date into a point in time (reminder time of day, local zone) and
delivers through a `notify` service. A series schedules its next instance
from the delivery callback, so at most one handle per entry is pending.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.event import async_track_point_in_time
from homeassistant.util import dt as dt_util

from .. import const, data_builders as db
from ..engines import RecurringReminderScheduler
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import CALLBACK_TYPE, HomeAssistant

    from ..coordinator import LifeDatesDataCoordinator
    from ..type_defs import EntryData


class NotificationNotAuthorizedError(HomeAssistantError):
    """Raised when a reminder is scheduled while notifications are not allowed."""


# =============================================================================
# Module-level helper for testability
# =============================================================================


async def async_send_notification(
    hass: HomeAssistant,
    service: str,
    title: str,
    message: str,
    extra_data: dict[str, Any] | None = None,
) -> None:
    """Send a notification via Home Assistant service call.

    Module-level so tests can patch it without touching the manager.

    Args:
        hass: Home Assistant instance
        service: "notify.service_name" or just the service name
        title: Notification title
        message: Notification message
        extra_data: Optional extra data (e.g., tag)
    """
    if "." in service:
        domain, svc = service.split(".", 1)
    else:
        domain = const.NOTIFY_DOMAIN
        svc = service

    payload: dict[str, Any] = {
        const.NOTIFY_TITLE: title,
        const.NOTIFY_MESSAGE: message,
    }
    if extra_data:
        payload[const.NOTIFY_DATA] = dict(extra_data)

    const.LOGGER.debug(
        "DEBUG: async_send_notification: %s.%s - title='%s', message='%s'",
        domain,
        svc,
        title,
        message,
    )

    await hass.services.async_call(domain, svc, payload, blocking=True)


def build_notification_handle(entry_id: str) -> str:
    """Return the trigger handle issued for an entry's reminder."""
    return f"{entry_id}{const.NOTIFICATION_ID_SUFFIX}"


def build_reminder_message(entry: EntryData) -> str:
    """Return the reminder body: the title, plus the description if any."""
    title = entry[const.DATA_ENTRY_TITLE]
    description = entry.get(const.DATA_ENTRY_DESCRIPTION)
    if description:
        return f"{title}\n{description}"
    return title


class NotificationManager(BaseManager):
    """Manager for scheduling and delivering goal reminders.

    Pending deliveries are kept as {handle: (trigger date, unsubscribe)}.
    Handles live in memory only; they are recomputed from the entries on
    every startup by async_reschedule_all().
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
    ) -> None:
        super().__init__(hass, coordinator)
        self._pending: dict[str, tuple[date, CALLBACK_TYPE]] = {}

    async def async_setup(self) -> None:
        """Subscribe to entry events and cancel everything on unload."""
        self.listen(const.SIGNAL_SUFFIX_ENTRY_SAVED, self._handle_entry_saved)
        self.listen(const.SIGNAL_SUFFIX_ENTRY_DELETED, self._handle_entry_deleted)
        self.coordinator.config_entry.async_on_unload(self.cancel_all)
        const.LOGGER.debug(
            "DEBUG: NotificationManager initialized for entry %s (authorization: %s)",
            self.entry_id,
            self.authorization_state,
        )

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def notify_service(self) -> str:
        return self.coordinator.config_entry.options.get(
            const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
        )

    @property
    def authorization_state(self) -> str:
        """Return authorized, denied or not_determined."""
        options = self.coordinator.config_entry.options
        if not options.get(
            const.CONF_ENABLE_NOTIFICATIONS, const.DEFAULT_ENABLE_NOTIFICATIONS
        ):
            return const.AUTHORIZATION_DENIED
        if not self.notify_service:
            return const.AUTHORIZATION_NOT_DETERMINED
        return const.AUTHORIZATION_AUTHORIZED

    @property
    def reminder_time(self) -> time:
        raw = self.coordinator.config_entry.options.get(
            const.CONF_REMINDER_TIME, const.DEFAULT_REMINDER_TIME
        )
        try:
            return datetime.strptime(raw, const.REMINDER_TIME_FORMAT).time()
        except (TypeError, ValueError):
            const.LOGGER.warning(
                "WARNING: Invalid reminder time '%s', using %s",
                raw,
                const.DEFAULT_REMINDER_TIME,
            )
            return datetime.strptime(
                const.DEFAULT_REMINDER_TIME, const.REMINDER_TIME_FORMAT
            ).time()

    def point_in_time(self, trigger_date: date) -> datetime:
        """Return the local delivery instant for a trigger date."""
        reminder = self.reminder_time
        return dt_util.start_of_local_day(trigger_date) + timedelta(
            hours=reminder.hour, minutes=reminder.minute
        )

    # =========================================================================
    # Collaborator interface
    # =========================================================================

    @property
    def pending_handles(self) -> dict[str, date]:
        """Return {handle: trigger date} of every pending delivery."""
        return {handle: pending[0] for handle, pending in self._pending.items()}

    @callback
    def async_schedule(
        self, trigger_date: date, title: str, message: str, entry_id: str
    ) -> str:
        """Schedule a one-shot delivery and return its handle.

        A handle already issued for the entry is cancelled first.

        Raises:
            NotificationNotAuthorizedError: Notifications disabled or no
            notify service configured.
        """
        if self.authorization_state != const.AUTHORIZATION_AUTHORIZED:
            raise NotificationNotAuthorizedError(
                f"Notifications are {self.authorization_state}"
            )

        handle = build_notification_handle(entry_id)
        self.cancel(handle)

        async def _async_fire(_now: datetime) -> None:
            await self._async_deliver(handle, entry_id, trigger_date, title, message)

        unsub = async_track_point_in_time(
            self.hass, _async_fire, self.point_in_time(trigger_date)
        )
        self._pending[handle] = (trigger_date, unsub)
        const.LOGGER.debug(
            "DEBUG: Scheduled reminder %s for %s", handle, trigger_date.isoformat()
        )
        return handle

    @callback
    def cancel(self, handle: str | None) -> bool:
        """Cancel a pending delivery. Returns False for unknown handles."""
        if not handle:
            return False
        pending = self._pending.pop(handle, None)
        if pending is None:
            return False
        pending[1]()
        const.LOGGER.debug("DEBUG: Cancelled reminder %s", handle)
        return True

    @callback
    def cancel_all(self) -> None:
        """Cancel every pending delivery."""
        for handle in list(self._pending):
            self.cancel(handle)

    # =========================================================================
    # Entry reminders
    # =========================================================================

    def _next_trigger_for(self, entry: EntryData, after_date: date) -> date | None:
        """Return the next trigger of a goal whose delivery instant is ahead."""
        if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_GOAL:
            return None
        if entry.get(const.DATA_ENTRY_IS_COMPLETED):
            return None
        spec = db.reminder_spec_from_data(entry)
        if spec is None:
            return None
        trigger = RecurringReminderScheduler.next_trigger(spec, after_date)
        if trigger is not None and self.point_in_time(trigger) <= dt_util.now():
            # Today's reminder time already passed
            trigger = RecurringReminderScheduler.next_trigger(spec, trigger)
        return trigger

    @callback
    def schedule_entry(self, entry_id: str, after_date: date | None = None) -> str | None:
        """Cancel the entry's issued handle and schedule its next reminder.

        Returns the new handle, or None when nothing is due or allowed.
        """
        entry = self.coordinator.storage_manager.get_entries().get(entry_id)
        handle = build_notification_handle(entry_id)
        self.cancel(handle)
        if entry is None:
            return None

        if after_date is None:
            after_date = self.coordinator.today - timedelta(days=1)
        trigger = self._next_trigger_for(entry, after_date)
        new_handle: str | None = None
        if trigger is not None:
            try:
                new_handle = self.async_schedule(
                    trigger,
                    const.NOTIFICATION_TITLE_GOAL_REMINDER,
                    build_reminder_message(entry),
                    entry_id,
                )
            except NotificationNotAuthorizedError as err:
                const.LOGGER.debug(
                    "DEBUG: Reminder for %s not scheduled: %s", entry_id, err
                )

        if entry.get(const.DATA_ENTRY_NOTIFICATION_ID) != new_handle:
            entry[const.DATA_ENTRY_NOTIFICATION_ID] = new_handle
            self.coordinator._persist()
        return new_handle

    @callback
    def async_reschedule_all(self) -> int:
        """Recompute every reminder from stored entries. Returns the count."""
        self.cancel_all()
        scheduled = 0
        for entry_id in list(self.coordinator.storage_manager.get_entries()):
            if self.schedule_entry(entry_id) is not None:
                scheduled += 1
        const.LOGGER.info(
            "INFO: Scheduled %d reminders for entry %s", scheduled, self.entry_id
        )
        return scheduled

    async def _async_deliver(
        self,
        handle: str,
        entry_id: str,
        trigger_date: date,
        title: str,
        message: str,
    ) -> None:
        """Send a due reminder and schedule the next instance of a series."""
        self._pending.pop(handle, None)
        try:
            await async_send_notification(
                self.hass,
                self.notify_service,
                title,
                message,
                extra_data={const.NOTIFY_TAG: handle},
            )
        except HomeAssistantError as err:
            const.LOGGER.warning(
                "WARNING: Failed to deliver reminder %s via %s: %s",
                handle,
                self.notify_service,
                err,
            )
        else:
            const.LOGGER.info("INFO: Delivered reminder '%s'", message)

        self.schedule_entry(entry_id, after_date=trigger_date)

    @callback
    def _handle_entry_saved(self, payload: dict[str, Any]) -> None:
        """Reschedule the saved entry; the old handle is cancelled first."""
        entry_id = payload.get("entry_id")
        if entry_id:
            self.schedule_entry(entry_id)

    @callback
    def _handle_entry_deleted(self, payload: dict[str, Any]) -> None:
        """Invalidate the handle issued for a deleted entry."""
        self.cancel(payload.get("notification_id"))
        entry_id = payload.get("entry_id")
        if entry_id:
            self.cancel(build_notification_handle(entry_id))
