"""Manager modules for LifeDates integration.

Managers orchestrate workflows and coordinate between engines.
They are stateful, event-aware, and handle cross-cutting concerns.
"""

from .base_manager import BaseManager
from .goal_manager import GoalManager
from .notification_manager import NotificationManager
from .special_date_manager import SpecialDateManager

__all__ = [
    "BaseManager",
    "GoalManager",
    "NotificationManager",
    "SpecialDateManager",
]
