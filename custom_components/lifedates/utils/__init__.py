"""Pure Python utilities for LifeDates.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Calendar math, parsing, life-calendar coordinates

Usage:
    from .utils import dt_utils
"""

from . import dt_utils

__all__ = ["dt_utils"]
