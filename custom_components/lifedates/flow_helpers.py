# File: flow_helpers.py
"""Helpers for the LifeDates config and options flows.

Schema builders and input validation shared by config_flow.py and
options_flow.py. Validators return an errors dict keyed by field (or
"base"), the way the flow forms expect it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import voluptuous as vol
from homeassistant.helpers import selector
from homeassistant.util import slugify

from . import const
from .utils.dt_utils import as_calendar_date

# ----------------------------------------------------------------------------------
# USER STEP (initial profile)
# ----------------------------------------------------------------------------------


def build_user_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build the schema of the initial profile step."""
    default = default or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_NAME, default=default.get(const.CONF_NAME, const.DEFAULT_NAME)
            ): str,
            vol.Required(
                const.CONF_BIRTH_DATE,
                description={"suggested_value": default.get(const.CONF_BIRTH_DATE)},
            ): selector.DateSelector(),
            vol.Optional(
                const.CONF_NOTIFY_SERVICE,
                default=default.get(
                    const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
                ),
            ): str,
            vol.Required(
                const.CONF_STORAGE_BACKEND,
                default=default.get(
                    const.CONF_STORAGE_BACKEND, const.DEFAULT_STORAGE_BACKEND
                ),
            ): selector.SelectSelector(
                selector.SelectSelectorConfig(
                    options=const.STORAGE_BACKEND_OPTIONS,
                    mode=selector.SelectSelectorMode.DROPDOWN,
                    translation_key=const.CONF_STORAGE_BACKEND,
                )
            ),
        }
    )


def validate_user_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate the initial profile step."""
    errors: dict[str, str] = {}
    if not slugify(str(user_input.get(const.CONF_NAME, "")).strip()):
        errors[const.CONF_NAME] = const.TRANS_KEY_INVALID_NAME
    if as_calendar_date(user_input.get(const.CONF_BIRTH_DATE)) is None:
        errors[const.CONF_BIRTH_DATE] = const.TRANS_KEY_INVALID_DATE
    errors.update(_validate_notify_service(user_input))
    return errors


def user_id_from_name(name: str) -> str:
    """Return the storage key of a person (also the config entry unique id)."""
    return slugify(name.strip())


def _validate_notify_service(user_input: dict[str, Any]) -> dict[str, str]:
    service = str(user_input.get(const.CONF_NOTIFY_SERVICE) or "").strip()
    if not service:
        return {}
    # Accept "notify.name" or a bare service name
    domain, dot, name = service.partition(".")
    if dot and (domain != const.NOTIFY_DOMAIN or not name):
        return {const.CONF_NOTIFY_SERVICE: const.TRANS_KEY_INVALID_NOTIFY_SERVICE}
    if " " in service:
        return {const.CONF_NOTIFY_SERVICE: const.TRANS_KEY_INVALID_NOTIFY_SERVICE}
    return {}


# ----------------------------------------------------------------------------------
# OPTIONS
# ----------------------------------------------------------------------------------


def build_options_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build the schema of the options form."""
    default = default or {}
    return vol.Schema(
        {
            vol.Optional(
                const.CONF_NOTIFY_SERVICE,
                default=default.get(
                    const.CONF_NOTIFY_SERVICE, const.DEFAULT_NOTIFY_SERVICE
                ),
            ): str,
            vol.Required(
                const.CONF_ENABLE_NOTIFICATIONS,
                default=default.get(
                    const.CONF_ENABLE_NOTIFICATIONS, const.DEFAULT_ENABLE_NOTIFICATIONS
                ),
            ): selector.BooleanSelector(),
            vol.Required(
                const.CONF_REMINDER_TIME,
                default=default.get(
                    const.CONF_REMINDER_TIME, const.DEFAULT_REMINDER_TIME
                ),
            ): str,
            vol.Required(
                const.CONF_UPCOMING_WINDOW_DAYS,
                default=default.get(
                    const.CONF_UPCOMING_WINDOW_DAYS, const.DEFAULT_UPCOMING_WINDOW_DAYS
                ),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=const.MIN_UPCOMING_WINDOW_DAYS,
                    max=const.MAX_UPCOMING_WINDOW_DAYS,
                    step=1,
                )
            ),
            vol.Required(
                const.CONF_UPDATE_INTERVAL,
                default=default.get(
                    const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                ),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=1,
                    step=1,
                )
            ),
        }
    )


def validate_options_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate the options form."""
    errors = _validate_notify_service(user_input)
    try:
        datetime.strptime(
            str(user_input.get(const.CONF_REMINDER_TIME, "")),
            const.REMINDER_TIME_FORMAT,
        )
    except ValueError:
        errors[const.CONF_REMINDER_TIME] = const.TRANS_KEY_INVALID_REMINDER_TIME
    return errors


def build_options_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Normalise validated options (NumberSelector returns floats)."""
    return {
        const.CONF_NOTIFY_SERVICE: str(
            user_input.get(const.CONF_NOTIFY_SERVICE) or ""
        ).strip(),
        const.CONF_ENABLE_NOTIFICATIONS: bool(
            user_input.get(
                const.CONF_ENABLE_NOTIFICATIONS, const.DEFAULT_ENABLE_NOTIFICATIONS
            )
        ),
        const.CONF_REMINDER_TIME: str(user_input[const.CONF_REMINDER_TIME]),
        const.CONF_UPCOMING_WINDOW_DAYS: int(
            user_input.get(
                const.CONF_UPCOMING_WINDOW_DAYS, const.DEFAULT_UPCOMING_WINDOW_DAYS
            )
        ),
        const.CONF_UPDATE_INTERVAL: int(
            user_input.get(const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL)
        ),
    }
