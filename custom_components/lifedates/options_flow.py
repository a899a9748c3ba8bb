# File: options_flow.py
"""Options Flow for the LifeDates integration.

Edits notification and display settings. Saving reloads the entry, which
reschedules every reminder with the new settings.
"""

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class LifeDatesOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for notification and display settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options = {}

    async def async_step_init(self, user_input=None):
        """Show and save the options form."""
        errors = {}

        if user_input is not None:
            errors = fh.validate_options_inputs(user_input)
            if not errors:
                self._entry_options = dict(self.config_entry.options)
                self._entry_options.update(fh.build_options_data(user_input))
                const.LOGGER.debug(
                    "DEBUG: Options updated for %s: %s",
                    self.config_entry.entry_id,
                    self._entry_options,
                )
                return self.async_create_entry(title="", data=self._entry_options)

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_options_schema(
                user_input or dict(self.config_entry.options)
            ),
            errors=errors,
        )
