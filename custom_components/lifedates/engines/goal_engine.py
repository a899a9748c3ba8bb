"""Goal Engine - Pure logic for goal lifecycle transitions.

States:
- active: created, not completed, date not yet passed (or passed without
  conversion, in which case it is surfaced as overdue)
- completed: explicit caller action, terminal
- converted_to_memory: date passed while incomplete and the goal asked to
  become a memory, irreversible

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
Persisting the outcome belongs in GoalManager.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, ClassVar
import uuid

from .. import const
from ..models import GoalLifecycleResult, JournalEntry

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime


def _new_entry_id() -> str:
    return str(uuid.uuid4())


class GoalLifecycleManager:
    """Pure logic engine for goal state transitions.

    All methods are static - no instance state.
    """

    # Valid state transitions matrix
    VALID_TRANSITIONS: ClassVar[dict[str, list[str]]] = {
        const.GOAL_STATE_ACTIVE: [
            const.GOAL_STATE_COMPLETED,
            const.GOAL_STATE_CONVERTED_TO_MEMORY,
        ],
        const.GOAL_STATE_COMPLETED: [],
        const.GOAL_STATE_CONVERTED_TO_MEMORY: [],
    }

    @staticmethod
    def can_transition(current_state: str, target_state: str) -> bool:
        """Validate if a state transition is allowed."""
        valid_targets = GoalLifecycleManager.VALID_TRANSITIONS.get(current_state, [])
        return target_state in valid_targets

    @staticmethod
    def state_of(goal: JournalEntry) -> str:
        """Return the stored state of a goal (ignores the date)."""
        if not goal.is_goal:
            return const.GOAL_STATE_CONVERTED_TO_MEMORY
        if goal.is_completed:
            return const.GOAL_STATE_COMPLETED
        return const.GOAL_STATE_ACTIVE

    @staticmethod
    def complete(goal: JournalEntry, now: datetime) -> JournalEntry:
        """Mark a goal completed, stamping completed_at exactly once.

        Completing an already completed goal returns it unchanged.
        """
        if goal.is_completed:
            return goal
        return replace(goal, is_completed=True, completed_at=now)

    @staticmethod
    def to_memory(
        goal: JournalEntry, id_factory: Callable[[], str] = _new_entry_id
    ) -> JournalEntry:
        """Build the memory that replaces a passed goal.

        The memory gets a new id and loses every goal-only field.
        """
        return replace(
            goal,
            id=id_factory(),
            entry_type=const.ENTRY_TYPE_MEMORY,
            is_completed=False,
            completed_at=None,
            convert_to_memory_when_passed=False,
            reminder=None,
            notification_id=None,
        )

    @staticmethod
    def apply_lifecycle(
        goal: JournalEntry,
        today: date,
        id_factory: Callable[[], str] = _new_entry_id,
    ) -> GoalLifecycleResult:
        """Compute the state a goal should be in on the given day.

        Does not mutate or persist anything. Re-applying to the same goal and
        day yields the same state.
        """
        state = GoalLifecycleManager.state_of(goal)
        if state != const.GOAL_STATE_ACTIVE:
            return GoalLifecycleResult(state=state)

        if today <= goal.target_date:
            return GoalLifecycleResult(state=const.GOAL_STATE_ACTIVE)

        if goal.convert_to_memory_when_passed:
            return GoalLifecycleResult(
                state=const.GOAL_STATE_CONVERTED_TO_MEMORY,
                converted_memory=GoalLifecycleManager.to_memory(goal, id_factory),
            )

        return GoalLifecycleResult(state=const.GOAL_STATE_ACTIVE, is_overdue=True)
