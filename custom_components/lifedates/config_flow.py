# File: config_flow.py
"""Config flow for the LifeDates integration.

One config entry per person. The entry's unique id is the slug of the
person's name, which is also the key of their storage document.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import LifeDatesOptionsFlowHandler
from .utils.dt_utils import as_calendar_date


class LifeDatesConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for LifeDates."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Collect the person's name, birth date and storage backend."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = fh.validate_user_inputs(user_input)
            if not errors:
                name = str(user_input[const.CONF_NAME]).strip()
                user_id = fh.user_id_from_name(name)
                await self.async_set_unique_id(user_id)
                self._abort_if_unique_id_configured()

                birth_date = as_calendar_date(user_input[const.CONF_BIRTH_DATE])
                const.LOGGER.debug(
                    "DEBUG: Creating LifeDates entry for %s (backend %s)",
                    user_id,
                    user_input[const.CONF_STORAGE_BACKEND],
                )
                return self.async_create_entry(
                    title=name,
                    data={
                        const.CONF_NAME: name,
                        const.CONF_USER_ID: user_id,
                        const.CONF_BIRTH_DATE: birth_date.isoformat(),  # type: ignore[union-attr]
                        const.CONF_STORAGE_BACKEND: user_input[
                            const.CONF_STORAGE_BACKEND
                        ],
                    },
                    options={
                        const.CONF_NOTIFY_SERVICE: str(
                            user_input.get(const.CONF_NOTIFY_SERVICE) or ""
                        ).strip(),
                        const.CONF_ENABLE_NOTIFICATIONS: const.DEFAULT_ENABLE_NOTIFICATIONS,
                        const.CONF_REMINDER_TIME: const.DEFAULT_REMINDER_TIME,
                        const.CONF_UPCOMING_WINDOW_DAYS: const.DEFAULT_UPCOMING_WINDOW_DAYS,
                        const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL,
                    },
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_user_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return LifeDatesOptionsFlowHandler(config_entry)
