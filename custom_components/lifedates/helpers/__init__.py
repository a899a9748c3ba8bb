# File: helpers/__init__.py
"""Home Assistant-bound helper functions for LifeDates.

NOTE: Functions that need `hass` object belong here, NOT in utils/.

Submodules:
    - entity_helpers: Event signal names, config entry/coordinator lookup
"""

from . import entity_helpers

__all__ = ["entity_helpers"]
