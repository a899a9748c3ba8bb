"""Tests for GoalLifecycleManager - pure logic, no HA fixtures needed."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

from custom_components.lifedates import const
from custom_components.lifedates.engines import apply_goal_lifecycle
from custom_components.lifedates.engines.goal_engine import GoalLifecycleManager
from custom_components.lifedates.models import JournalEntry, ReminderSpec

TODAY = date(2024, 6, 10)
NOW = datetime(2024, 6, 10, 15, 30, tzinfo=UTC)


def make_goal(**kwargs) -> JournalEntry:
    return JournalEntry(
        id=kwargs.pop("id", "goal-1"),
        target_date=kwargs.pop("target_date", TODAY),
        title=kwargs.pop("title", "Run a marathon"),
        **kwargs,
    )


# =============================================================================
# TEST: STATE TRANSITION VALIDATION
# =============================================================================


class TestStateTransitions:
    """Transition matrix."""

    def test_active_to_completed_allowed(self) -> None:
        assert GoalLifecycleManager.can_transition(
            const.GOAL_STATE_ACTIVE, const.GOAL_STATE_COMPLETED
        )

    def test_active_to_memory_allowed(self) -> None:
        assert GoalLifecycleManager.can_transition(
            const.GOAL_STATE_ACTIVE, const.GOAL_STATE_CONVERTED_TO_MEMORY
        )

    def test_completed_is_terminal(self) -> None:
        assert not GoalLifecycleManager.can_transition(
            const.GOAL_STATE_COMPLETED, const.GOAL_STATE_ACTIVE
        )
        assert not GoalLifecycleManager.can_transition(
            const.GOAL_STATE_COMPLETED, const.GOAL_STATE_CONVERTED_TO_MEMORY
        )

    def test_memory_is_irreversible(self) -> None:
        assert not GoalLifecycleManager.can_transition(
            const.GOAL_STATE_CONVERTED_TO_MEMORY, const.GOAL_STATE_ACTIVE
        )


# =============================================================================
# TEST: COMPLETION
# =============================================================================


class TestComplete:
    """Explicit completion."""

    def test_stamps_completion_time(self) -> None:
        completed = GoalLifecycleManager.complete(make_goal(), NOW)
        assert completed.is_completed
        assert completed.completed_at == NOW

    def test_completing_twice_is_noop(self) -> None:
        completed = GoalLifecycleManager.complete(make_goal(), NOW)
        again = GoalLifecycleManager.complete(completed, NOW + timedelta(hours=2))
        assert again is completed
        assert again.completed_at == NOW

    def test_completed_goal_stays_completed_after_date(self) -> None:
        completed = GoalLifecycleManager.complete(
            make_goal(target_date=TODAY - timedelta(days=3),
                      convert_to_memory_when_passed=True),
            NOW,
        )
        result = apply_goal_lifecycle(completed, TODAY)
        assert result.state == const.GOAL_STATE_COMPLETED
        assert result.converted_memory is None


# =============================================================================
# TEST: LIFECYCLE
# =============================================================================


class TestLifecycle:
    """Date-driven evaluation."""

    def test_passed_goal_converts_to_memory(self) -> None:
        """Target yesterday, incomplete, conversion requested -> memory."""
        goal = make_goal(
            target_date=TODAY - timedelta(days=1),
            convert_to_memory_when_passed=True,
            description="42km",
            tags=("Health",),
            reminder=ReminderSpec(target_date=TODAY - timedelta(days=1)),
            notification_id="goal-1-reminder",
        )

        result = GoalLifecycleManager.apply_lifecycle(
            goal, TODAY, id_factory=lambda: "memory-1"
        )

        assert result.state == const.GOAL_STATE_CONVERTED_TO_MEMORY
        memory = result.converted_memory
        assert memory is not None
        assert memory.id == "memory-1"
        assert memory.entry_type == const.ENTRY_TYPE_MEMORY
        assert memory.title == "Run a marathon"
        assert memory.description == "42km"
        assert memory.tags == ("Health",)
        assert memory.target_date == TODAY - timedelta(days=1)
        # Goal-only fields are stripped
        assert memory.reminder is None
        assert memory.notification_id is None
        assert not memory.is_completed
        assert not memory.convert_to_memory_when_passed

    def test_passed_goal_without_conversion_is_overdue(self) -> None:
        goal = make_goal(target_date=TODAY - timedelta(days=5))
        result = apply_goal_lifecycle(goal, TODAY)
        assert result.state == const.GOAL_STATE_ACTIVE
        assert result.is_overdue
        assert result.converted_memory is None

    def test_goal_on_its_date_is_active(self) -> None:
        result = apply_goal_lifecycle(
            make_goal(convert_to_memory_when_passed=True), TODAY
        )
        assert result.state == const.GOAL_STATE_ACTIVE
        assert not result.is_overdue

    def test_memory_is_left_alone(self) -> None:
        memory = make_goal(
            entry_type=const.ENTRY_TYPE_MEMORY, target_date=TODAY - timedelta(days=9)
        )
        result = apply_goal_lifecycle(memory, TODAY)
        assert result.state == const.GOAL_STATE_CONVERTED_TO_MEMORY
        assert result.converted_memory is None

    def test_reapplying_same_day_gives_same_state(self) -> None:
        """No double transition when evaluated twice on the same day."""
        goals = [
            make_goal(target_date=TODAY - timedelta(days=1),
                      convert_to_memory_when_passed=True),
            make_goal(target_date=TODAY - timedelta(days=1)),
            make_goal(target_date=TODAY + timedelta(days=1)),
        ]
        for goal in goals:
            first = apply_goal_lifecycle(goal, TODAY)
            # The goal itself is never mutated by evaluation
            second = apply_goal_lifecycle(goal, TODAY)
            assert first.state == second.state
            assert first.is_overdue == second.is_overdue
            if first.converted_memory is not None:
                # Evaluating the produced memory does not convert again
                third = apply_goal_lifecycle(first.converted_memory, TODAY)
                assert third.state == first.state
                assert third.converted_memory is None
