# File: services.py
"""Defines custom services for the LifeDates integration.

These services allow direct actions through scripts or automations. Every
service accepts an optional config_entry_id; without it the first loaded
LifeDates entry is used.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.core import HomeAssistant, ServiceCall, SupportsResponse
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import config_validation as cv
from homeassistant.util import dt as dt_util

from . import const, data_builders as db
from .coordinator import LifeDatesDataCoordinator
from .engines import SpecialDateMerger, matching_on
from .helpers.entity_helpers import get_coordinator

# --- Service Schemas ---
_BASE_SCHEMA = {vol.Optional(const.FIELD_CONFIG_ENTRY_ID): cv.string}

CHILD_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_INTERNAL_ID): cv.string,
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Required(const.FIELD_BIRTH_DATE): cv.date,
    }
)

PET_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_INTERNAL_ID): cv.string,
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_PET_TYPE, default=const.PET_TYPE_OTHER): vol.In(
            const.PET_TYPE_OPTIONS
        ),
        vol.Optional(const.FIELD_BIRTHDAY): vol.Any(cv.date, None),
    }
)

UPDATE_PROFILE_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Optional(const.FIELD_NAME): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_BIRTH_DATE): cv.date,
        vol.Optional(const.FIELD_MARRIAGE_DATE): vol.Any(cv.date, None),
        vol.Optional(const.FIELD_SPOUSE_NAME): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_SPOUSE_BIRTH_DATE): vol.Any(cv.date, None),
        vol.Optional(const.FIELD_SCHOOL_NAME): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_GRADUATION_YEAR): vol.Any(vol.Coerce(int), None),
        vol.Optional(const.FIELD_DEGREE): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_CHILDREN): vol.All(cv.ensure_list, [CHILD_SCHEMA]),
        vol.Optional(const.FIELD_PETS): vol.All(cv.ensure_list, [PET_SCHEMA]),
    }
)

ADD_SPECIAL_DATE_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Required(const.FIELD_DATE): cv.date,
        vol.Optional(const.FIELD_CATEGORY, default=const.CATEGORY_CUSTOM): vol.In(
            const.CATEGORY_OPTIONS
        ),
        vol.Optional(const.FIELD_IS_RECURRING, default=True): cv.boolean,
        vol.Optional(const.FIELD_NOTES): vol.Any(cv.string, None),
    }
)

UPDATE_SPECIAL_DATE_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_SPECIAL_DATE_ID): cv.string,
        vol.Optional(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_DATE): cv.date,
        vol.Optional(const.FIELD_CATEGORY): vol.In(const.CATEGORY_OPTIONS),
        vol.Optional(const.FIELD_IS_RECURRING): cv.boolean,
        vol.Optional(const.FIELD_NOTES): vol.Any(cv.string, None),
    }
)

DELETE_SPECIAL_DATE_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_SPECIAL_DATE_ID): cv.string,
    }
)

ADD_SPECIAL_DATE_GOAL_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_SPECIAL_DATE_ID): cv.string,
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_FREQUENCY, default=const.FREQUENCY_YEARLY): vol.In(
            const.FREQUENCY_OPTIONS
        ),
        vol.Optional(const.FIELD_REMINDER_ENABLED, default=True): cv.boolean,
        vol.Optional(const.FIELD_LEAD_TIME): vol.Coerce(int),
        vol.Optional(const.FIELD_LEAD_TIME_UNIT): vol.In(const.LEAD_TIME_UNIT_OPTIONS),
    }
)

UPDATE_SPECIAL_DATE_GOAL_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_GOAL_TEMPLATE_ID): cv.string,
        vol.Optional(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_FREQUENCY): vol.In(const.FREQUENCY_OPTIONS),
        vol.Optional(const.FIELD_REMINDER_ENABLED): cv.boolean,
        vol.Optional(const.FIELD_LEAD_TIME): vol.Any(vol.Coerce(int), None),
        vol.Optional(const.FIELD_LEAD_TIME_UNIT): vol.Any(
            vol.In(const.LEAD_TIME_UNIT_OPTIONS), None
        ),
        vol.Optional(const.FIELD_IS_ACTIVE): cv.boolean,
    }
)

DELETE_SPECIAL_DATE_GOAL_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_GOAL_TEMPLATE_ID): cv.string,
    }
)

CREATE_ENTRY_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Optional(const.FIELD_ENTRY_TYPE, default=const.ENTRY_TYPE_GOAL): vol.In(
            const.ENTRY_TYPE_OPTIONS
        ),
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION): vol.Any(cv.string, None),
        vol.Required(const.FIELD_TARGET_DATE): cv.date,
        vol.Optional(const.FIELD_TAGS): vol.All(cv.ensure_list, [cv.string]),
        vol.Optional(const.FIELD_REMINDER_ENABLED, default=False): cv.boolean,
        vol.Optional(const.FIELD_IS_RECURRING, default=False): cv.boolean,
        vol.Optional(const.FIELD_FREQUENCY, default=const.FREQUENCY_NONE): vol.In(
            const.FREQUENCY_OPTIONS
        ),
        vol.Optional(const.FIELD_END_DATE): vol.Any(cv.date, None),
        vol.Optional(const.FIELD_LEAD_TIME): vol.Coerce(int),
        vol.Optional(const.FIELD_LEAD_TIME_UNIT): vol.In(const.LEAD_TIME_UNIT_OPTIONS),
        vol.Optional(const.FIELD_CONVERT_TO_MEMORY, default=False): cv.boolean,
    }
)

UPDATE_ENTRY_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_ENTRY_ID): cv.string,
        vol.Optional(const.FIELD_ENTRY_TYPE): vol.In(const.ENTRY_TYPE_OPTIONS),
        vol.Optional(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION): vol.Any(cv.string, None),
        vol.Optional(const.FIELD_TARGET_DATE): cv.date,
        vol.Optional(const.FIELD_TAGS): vol.All(cv.ensure_list, [cv.string]),
        vol.Optional(const.FIELD_REMINDER_ENABLED): cv.boolean,
        vol.Optional(const.FIELD_IS_RECURRING): cv.boolean,
        vol.Optional(const.FIELD_FREQUENCY): vol.In(const.FREQUENCY_OPTIONS),
        vol.Optional(const.FIELD_END_DATE): vol.Any(cv.date, None),
        vol.Optional(const.FIELD_LEAD_TIME): vol.Any(vol.Coerce(int), None),
        vol.Optional(const.FIELD_LEAD_TIME_UNIT): vol.Any(
            vol.In(const.LEAD_TIME_UNIT_OPTIONS), None
        ),
        vol.Optional(const.FIELD_CONVERT_TO_MEMORY): cv.boolean,
    }
)

ENTRY_ID_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Required(const.FIELD_ENTRY_ID): cv.string,
    }
)

GET_SPECIAL_DATES_SCHEMA = vol.Schema(
    {
        **_BASE_SCHEMA,
        vol.Optional(const.FIELD_DATE): cv.date,
        vol.Optional(const.FIELD_WITHIN_DAYS): vol.All(
            vol.Coerce(int),
            vol.Range(
                min=const.MIN_UPCOMING_WINDOW_DAYS, max=const.MAX_UPCOMING_WINDOW_DAYS
            ),
        ),
    }
)

# Service fields whose storage key differs
_FIELD_TO_DATA_KEY = {
    const.FIELD_END_DATE: const.DATA_ENTRY_RECURRING_END_DATE,
}


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------


def _resolve_coordinator(
    hass: HomeAssistant, call: ServiceCall
) -> LifeDatesDataCoordinator:
    """Return the coordinator a call targets.

    Raises:
        HomeAssistantError: No loaded LifeDates entry.
    """
    coordinator = get_coordinator(hass, call.data.get(const.FIELD_CONFIG_ENTRY_ID))
    if coordinator is None:
        const.LOGGER.warning("WARNING: %s: %s", call.service, const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(
            translation_domain=const.DOMAIN,
            translation_key=const.TRANS_KEY_ERROR_NO_ENTRY_FOUND,
        )
    return coordinator


def _user_input(call: ServiceCall, *exclude: str) -> dict[str, Any]:
    """Map service call data to DATA_* keys."""
    return {
        _FIELD_TO_DATA_KEY.get(key, key): value
        for key, value in call.data.items()
        if key != const.FIELD_CONFIG_ENTRY_ID and key not in exclude
    }


def _validation_error(
    service: str, err: db.EntityValidationError
) -> ServiceValidationError:
    const.LOGGER.warning(
        "WARNING: %s: invalid %s (%s)", service, err.field, err.translation_key
    )
    return ServiceValidationError(
        translation_domain=const.DOMAIN,
        translation_key=const.TRANS_KEY_ERROR_VALIDATION,
        translation_placeholders={
            "field": err.field,
            "reason": err.translation_key,
        },
    )


# ------------------------------------------------------------------------------
# Setup / Unload
# ------------------------------------------------------------------------------


def async_setup_services(hass: HomeAssistant) -> None:
    """Register LifeDates services."""

    async def handle_update_profile(call: ServiceCall) -> None:
        """Handle profile updates (changes the derived system dates)."""
        coordinator = _resolve_coordinator(hass, call)
        try:
            coordinator.special_date_manager.update_profile(_user_input(call))
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err

    async def handle_add_special_date(call: ServiceCall) -> dict[str, Any]:
        """Handle creating a custom special date."""
        coordinator = _resolve_coordinator(hass, call)
        try:
            special_date_id = coordinator.special_date_manager.add_special_date(
                _user_input(call)
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err
        return {const.RESPONSE_SPECIAL_DATE_ID: special_date_id}

    async def handle_update_special_date(call: ServiceCall) -> None:
        """Handle editing a custom special date."""
        coordinator = _resolve_coordinator(hass, call)
        try:
            coordinator.special_date_manager.update_special_date(
                call.data[const.FIELD_SPECIAL_DATE_ID],
                _user_input(call, const.FIELD_SPECIAL_DATE_ID),
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err

    async def handle_delete_special_date(call: ServiceCall) -> None:
        """Handle deleting a custom special date and its goals."""
        coordinator = _resolve_coordinator(hass, call)
        coordinator.special_date_manager.delete_special_date(
            call.data[const.FIELD_SPECIAL_DATE_ID]
        )

    async def handle_add_special_date_goal(call: ServiceCall) -> dict[str, Any]:
        """Handle attaching a goal template to a special date."""
        coordinator = _resolve_coordinator(hass, call)
        try:
            template_id, generated = coordinator.goal_manager.add_special_date_goal(
                _user_input(call)
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err
        return {
            const.RESPONSE_GOAL_TEMPLATE_ID: template_id,
            const.RESPONSE_GENERATED_ENTRY_IDS: generated,
        }

    async def handle_update_special_date_goal(call: ServiceCall) -> dict[str, Any]:
        """Handle editing a goal template (its open goals are regenerated)."""
        coordinator = _resolve_coordinator(hass, call)
        template_id = call.data[const.FIELD_GOAL_TEMPLATE_ID]
        try:
            _, generated = coordinator.goal_manager.update_special_date_goal(
                template_id, _user_input(call, const.FIELD_GOAL_TEMPLATE_ID)
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err
        return {
            const.RESPONSE_GOAL_TEMPLATE_ID: template_id,
            const.RESPONSE_GENERATED_ENTRY_IDS: generated,
        }

    async def handle_delete_special_date_goal(call: ServiceCall) -> dict[str, Any]:
        """Handle deleting a goal template and its goals."""
        coordinator = _resolve_coordinator(hass, call)
        removed = coordinator.goal_manager.delete_special_date_goal(
            call.data[const.FIELD_GOAL_TEMPLATE_ID]
        )
        return {const.RESPONSE_DELETED_ENTRY_IDS: removed}

    async def handle_create_entry(call: ServiceCall) -> dict[str, Any]:
        """Handle creating a goal or memory."""
        coordinator = _resolve_coordinator(hass, call)
        try:
            entry_id, generated = coordinator.goal_manager.create_entry(
                _user_input(call)
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err
        return {
            const.RESPONSE_ENTRY_ID: entry_id,
            const.RESPONSE_GENERATED_ENTRY_IDS: generated,
        }

    async def handle_update_entry(call: ServiceCall) -> dict[str, Any]:
        """Handle editing a goal or memory."""
        coordinator = _resolve_coordinator(hass, call)
        entry_id = call.data[const.FIELD_ENTRY_ID]
        try:
            _, generated = coordinator.goal_manager.update_entry(
                entry_id, _user_input(call, const.FIELD_ENTRY_ID)
            )
        except db.EntityValidationError as err:
            raise _validation_error(call.service, err) from err
        return {
            const.RESPONSE_ENTRY_ID: entry_id,
            const.RESPONSE_GENERATED_ENTRY_IDS: generated,
        }

    async def handle_complete_goal(call: ServiceCall) -> None:
        """Handle marking a goal completed."""
        coordinator = _resolve_coordinator(hass, call)
        coordinator.goal_manager.complete_goal(
            call.data[const.FIELD_ENTRY_ID], dt_util.utcnow()
        )

    async def handle_delete_entry(call: ServiceCall) -> dict[str, Any]:
        """Handle deleting an entry (and goals generated from a memory)."""
        coordinator = _resolve_coordinator(hass, call)
        removed = coordinator.goal_manager.delete_entry(call.data[const.FIELD_ENTRY_ID])
        return {const.RESPONSE_DELETED_ENTRY_IDS: removed}

    async def handle_get_special_dates(call: ServiceCall) -> dict[str, Any]:
        """Return the special dates falling on a date, or upcoming ones."""
        coordinator = _resolve_coordinator(hass, call)
        today = coordinator.today
        records = coordinator.special_date_manager.all_records()
        on_date = call.data.get(const.FIELD_DATE)
        if on_date is not None:
            selected = matching_on(records, on_date)
        else:
            selected = SpecialDateMerger.upcoming(
                records,
                today,
                call.data.get(
                    const.FIELD_WITHIN_DAYS, coordinator.upcoming_window_days
                ),
            )
        return {
            const.RESPONSE_SPECIAL_DATES: [
                db.record_to_dict(record, today) for record in selected
            ]
        }

    registrations = [
        (const.SERVICE_UPDATE_PROFILE, handle_update_profile, UPDATE_PROFILE_SCHEMA, None),
        (
            const.SERVICE_ADD_SPECIAL_DATE,
            handle_add_special_date,
            ADD_SPECIAL_DATE_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_UPDATE_SPECIAL_DATE,
            handle_update_special_date,
            UPDATE_SPECIAL_DATE_SCHEMA,
            None,
        ),
        (
            const.SERVICE_DELETE_SPECIAL_DATE,
            handle_delete_special_date,
            DELETE_SPECIAL_DATE_SCHEMA,
            None,
        ),
        (
            const.SERVICE_ADD_SPECIAL_DATE_GOAL,
            handle_add_special_date_goal,
            ADD_SPECIAL_DATE_GOAL_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_UPDATE_SPECIAL_DATE_GOAL,
            handle_update_special_date_goal,
            UPDATE_SPECIAL_DATE_GOAL_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_DELETE_SPECIAL_DATE_GOAL,
            handle_delete_special_date_goal,
            DELETE_SPECIAL_DATE_GOAL_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_CREATE_ENTRY,
            handle_create_entry,
            CREATE_ENTRY_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_UPDATE_ENTRY,
            handle_update_entry,
            UPDATE_ENTRY_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (const.SERVICE_COMPLETE_GOAL, handle_complete_goal, ENTRY_ID_SCHEMA, None),
        (
            const.SERVICE_DELETE_ENTRY,
            handle_delete_entry,
            ENTRY_ID_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        (
            const.SERVICE_GET_SPECIAL_DATES,
            handle_get_special_dates,
            GET_SPECIAL_DATES_SCHEMA,
            SupportsResponse.ONLY,
        ),
    ]

    for service, handler, schema, supports_response in registrations:
        if hass.services.has_service(const.DOMAIN, service):
            continue
        if supports_response is None:
            hass.services.async_register(const.DOMAIN, service, handler, schema=schema)
        else:
            hass.services.async_register(
                const.DOMAIN,
                service,
                handler,
                schema=schema,
                supports_response=supports_response,
            )

    const.LOGGER.info("INFO: LifeDates services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister LifeDates services when the last entry is unloaded."""
    for service in const.SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: LifeDates services have been unregistered")
