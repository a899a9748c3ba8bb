# File: helpers/entity_helpers.py
"""Config entry and event signal helpers for LifeDates.

All functions here require a `hass` object or produce names consumed by the
Home Assistant dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import LifeDatesDataCoordinator


# ==============================================================================
# Event Signal Helpers (Manager Communication)
# ==============================================================================


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Each config entry (one person) gets its own signal namespace, so
    managers of different entries never see each other's events.

    Example:
        >>> get_event_signal("abc123", const.SIGNAL_SUFFIX_ENTRY_SAVED)
        'lifedates_abc123_entry_saved'
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"


# ==============================================================================
# Config Entry Lookup
# ==============================================================================


def get_first_lifedates_entry(hass: HomeAssistant) -> str | None:
    """Retrieve the first loaded LifeDates config entry ID."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    return next(iter(domain_entries.keys()), None)


def get_coordinator(
    hass: HomeAssistant, entry_id: str | None = None
) -> LifeDatesDataCoordinator | None:
    """Return the coordinator of entry_id, or of the first entry when omitted."""
    entry_id = entry_id or get_first_lifedates_entry(hass)
    if not entry_id:
        return None
    entry_data = hass.data.get(const.DOMAIN, {}).get(entry_id)
    if entry_data is None:
        return None
    return entry_data[const.COORDINATOR]
