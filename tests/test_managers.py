"""Tests for SpecialDateManager and GoalManager on a running integration.

Time is frozen at 2024-06-10 (see conftest); Alex was born 1990-03-15.
"""

from __future__ import annotations

from datetime import date

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.lifedates import const
from custom_components.lifedates.coordinator import LifeDatesDataCoordinator
from custom_components.lifedates.models import EntityValidationError

from .conftest import FROZEN_TODAY


@pytest.fixture
def coordinator(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> LifeDatesDataCoordinator:
    """Return the coordinator of the test entry."""
    return hass.data[const.DOMAIN][init_integration.entry_id][const.COORDINATOR]


def add_camino(coordinator: LifeDatesDataCoordinator) -> str:
    """Add a recurring custom date five days from the frozen today."""
    return coordinator.special_date_manager.add_special_date(
        {
            const.DATA_NAME: "Camino",
            const.DATA_SPECIAL_DATE_DATE: date(2019, 6, 15),
            const.DATA_SPECIAL_DATE_CATEGORY: const.CATEGORY_TRAVEL,
        }
    )


# =============================================================================
# TEST: PROFILE & SPECIAL DATES
# =============================================================================


class TestSpecialDateManager:
    """Profile updates and custom special date CRUD."""

    async def test_profile_seeded_from_config_entry(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        profile = coordinator.storage_manager.get_profile()
        assert profile[const.DATA_PROFILE_NAME] == "Alex"
        assert profile[const.DATA_PROFILE_BIRTH_DATE] == "1990-03-15"

        ids = [rec.id for rec in coordinator.special_date_manager.all_records()]
        assert ids == ["system_birthday"]

    async def test_profile_update_changes_derived_dates(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        coordinator.special_date_manager.update_profile(
            {
                const.DATA_PROFILE_MARRIAGE_DATE: date(2015, 6, 20),
                const.DATA_PROFILE_CHILDREN: [
                    {
                        const.DATA_INTERNAL_ID: "c1",
                        const.DATA_NAME: "Mia",
                        const.DATA_CHILD_BIRTH_DATE: date(2018, 4, 2),
                    }
                ],
            }
        )

        ids = {rec.id for rec in coordinator.special_date_manager.all_records()}
        assert ids == {
            "system_birthday",
            "system_anniversary",
            "system_child_birthday_c1",
        }
        # Birth date kept from the seeded profile
        assert coordinator.special_date_manager.profile.birth_date == date(1990, 3, 15)

    async def test_invalid_profile_update_rejected(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        with pytest.raises(EntityValidationError):
            coordinator.special_date_manager.update_profile(
                {const.DATA_PROFILE_GRADUATION_YEAR: "soon"}
            )
        assert coordinator.storage_manager.get_profile()[
            const.DATA_PROFILE_GRADUATION_YEAR
        ] is None

    async def test_add_special_date_updates_snapshot(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)

        record = coordinator.special_date_manager.get_record(special_date_id)
        assert record.name == "Camino"
        assert record.icon == "mdi:airplane"
        assert special_date_id in coordinator.storage_manager.get_custom_dates()
        upcoming = coordinator.data[const.SNAPSHOT_UPCOMING]
        assert [rec.id for rec in upcoming] == [special_date_id]

    async def test_update_special_date(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)

        coordinator.special_date_manager.update_special_date(
            special_date_id, {const.DATA_SPECIAL_DATE_NOTES: "Porto route"}
        )

        record = coordinator.special_date_manager.get_record(special_date_id)
        assert record.notes == "Porto route"

    async def test_system_dates_are_read_only(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        with pytest.raises(HomeAssistantError) as err:
            coordinator.special_date_manager.update_special_date(
                "system_birthday", {const.DATA_NAME: "Cake day"}
            )
        assert err.value.translation_key == const.TRANS_KEY_ERROR_SYSTEM_DATE_READ_ONLY

        with pytest.raises(HomeAssistantError) as err:
            coordinator.special_date_manager.delete_special_date("system_birthday")
        assert err.value.translation_key == const.TRANS_KEY_ERROR_SYSTEM_DATE_READ_ONLY

    async def test_unknown_special_date(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        with pytest.raises(HomeAssistantError) as err:
            coordinator.special_date_manager.get_record("missing")
        assert err.value.translation_key == const.TRANS_KEY_ERROR_SPECIAL_DATE_NOT_FOUND


# =============================================================================
# TEST: GOAL TEMPLATES & CASCADES
# =============================================================================


class TestGoalTemplates:
    """Goals generated from special dates."""

    async def test_template_generates_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)

        template_id, generated = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
                const.DATA_GOAL_TEMPLATE_LEAD_TIME: 2,
                const.DATA_GOAL_TEMPLATE_LEAD_TIME_UNIT: const.TIME_UNIT_DAYS,
            }
        )

        assert template_id in coordinator.goal_manager.templates
        entries = coordinator.goal_manager.entries
        targets = sorted(entries[gid][const.DATA_ENTRY_TARGET_DATE] for gid in generated)
        assert targets == [
            "2024-06-15",
            "2025-06-15",
            "2026-06-15",
            "2027-06-15",
            "2028-06-15",
        ]
        first = next(
            entries[gid]
            for gid in generated
            if entries[gid][const.DATA_ENTRY_TARGET_DATE] == "2024-06-15"
        )
        assert first[const.DATA_ENTRY_REMINDER_DATE] == "2024-06-13"
        assert first[const.DATA_ENTRY_TAGS] == ["Travel"]
        assert first[const.DATA_ENTRY_CONVERT_TO_MEMORY] is True

    async def test_same_template_twice_skips_existing(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        user_input = {
            const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_birthday",
            const.DATA_GOAL_TEMPLATE_TITLE: "Call grandma",
        }
        _, first = coordinator.goal_manager.add_special_date_goal(user_input)
        _, second = coordinator.goal_manager.add_special_date_goal(user_input)

        assert len(first) == 4
        assert second == []

    async def test_unknown_special_date_rejected(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        with pytest.raises(HomeAssistantError):
            coordinator.goal_manager.add_special_date_goal(
                {
                    const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "missing",
                    const.DATA_GOAL_TEMPLATE_TITLE: "Nothing",
                }
            )
        assert coordinator.goal_manager.templates == {}

    async def test_deleting_special_date_removes_templates_and_goals(
        self, hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)
        coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
            }
        )
        unrelated_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Learn Portuguese",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 12, 31),
            }
        )

        coordinator.special_date_manager.delete_special_date(special_date_id)
        await hass.async_block_till_done()

        assert coordinator.goal_manager.templates == {}
        assert list(coordinator.goal_manager.entries) == [unrelated_id]

    async def test_update_template_regenerates_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)
        template_id, old_goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
            }
        )

        template, new_goals = coordinator.goal_manager.update_special_date_goal(
            template_id,
            {
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 20km",
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_birthday",
            },
        )

        entries = coordinator.goal_manager.entries
        assert template[const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID] == special_date_id
        assert len(new_goals) == 5
        assert not set(old_goals) & set(entries)
        assert {entries[gid][const.DATA_ENTRY_TITLE] for gid in new_goals} == {
            "Walk 20km"
        }

    async def test_update_template_keeps_completed_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)
        template_id, goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
            }
        )
        entries = coordinator.goal_manager.entries
        done_id = next(
            gid
            for gid in goals
            if entries[gid][const.DATA_ENTRY_TARGET_DATE] == "2024-06-15"
        )
        coordinator.goal_manager.complete_goal(done_id, dt_util.utcnow())

        _, new_goals = coordinator.goal_manager.update_special_date_goal(
            template_id, {const.DATA_GOAL_TEMPLATE_TITLE: "Walk 20km"}
        )

        assert entries[done_id][const.DATA_ENTRY_TITLE] == "Walk 10km"
        assert sorted(
            entries[gid][const.DATA_ENTRY_TARGET_DATE] for gid in new_goals
        ) == ["2025-06-15", "2026-06-15", "2027-06-15", "2028-06-15"]

    async def test_deactivated_template_drops_open_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        template_id, _ = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_birthday",
                const.DATA_GOAL_TEMPLATE_TITLE: "Call grandma",
            }
        )

        _, generated = coordinator.goal_manager.update_special_date_goal(
            template_id, {const.DATA_GOAL_TEMPLATE_IS_ACTIVE: False}
        )

        assert generated == []
        assert coordinator.goal_manager.entries == {}
        assert template_id in coordinator.goal_manager.templates

    async def test_delete_template_removes_its_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        template_id, goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_birthday",
                const.DATA_GOAL_TEMPLATE_TITLE: "Call grandma",
                const.DATA_GOAL_TEMPLATE_LEAD_TIME: 1,
                const.DATA_GOAL_TEMPLATE_LEAD_TIME_UNIT: const.TIME_UNIT_WEEKS,
            }
        )
        assert coordinator.notification_manager.pending_handles

        removed = coordinator.goal_manager.delete_special_date_goal(template_id)

        assert set(removed) == set(goals)
        assert coordinator.goal_manager.templates == {}
        assert coordinator.goal_manager.entries == {}
        assert coordinator.notification_manager.pending_handles == {}

    async def test_unknown_template(self, coordinator: LifeDatesDataCoordinator) -> None:
        with pytest.raises(HomeAssistantError) as err:
            coordinator.goal_manager.delete_special_date_goal("missing")
        assert (
            err.value.translation_key == const.TRANS_KEY_ERROR_GOAL_TEMPLATE_NOT_FOUND
        )

    async def test_removing_child_removes_birthday_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        child = {
            const.DATA_INTERNAL_ID: "c1",
            const.DATA_NAME: "Mia",
            const.DATA_CHILD_BIRTH_DATE: date(2018, 4, 2),
        }
        coordinator.special_date_manager.update_profile(
            {const.DATA_PROFILE_CHILDREN: [child]}
        )
        _, goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_child_birthday_c1",
                const.DATA_GOAL_TEMPLATE_TITLE: "Plan the party",
            }
        )
        assert len(goals) == 4

        coordinator.special_date_manager.update_profile(
            {const.DATA_PROFILE_CHILDREN: []}
        )

        assert coordinator.goal_manager.templates == {}
        assert coordinator.goal_manager.entries == {}

    async def test_dropping_marriage_date_removes_anniversary_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        coordinator.special_date_manager.update_profile(
            {const.DATA_PROFILE_MARRIAGE_DATE: date(2015, 6, 20)}
        )
        coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_anniversary",
                const.DATA_GOAL_TEMPLATE_TITLE: "Book dinner",
            }
        )
        kept_id, _ = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: "system_birthday",
                const.DATA_GOAL_TEMPLATE_TITLE: "Call grandma",
            }
        )

        coordinator.special_date_manager.update_profile(
            {const.DATA_PROFILE_MARRIAGE_DATE: None}
        )

        assert list(coordinator.goal_manager.templates) == [kept_id]
        titles = {
            entry[const.DATA_ENTRY_TITLE]
            for entry in coordinator.goal_manager.entries.values()
        }
        assert titles == {"Call grandma"}

    async def test_moved_special_date_regenerates_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)
        _, old_goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
            }
        )

        coordinator.special_date_manager.update_special_date(
            special_date_id, {const.DATA_SPECIAL_DATE_DATE: date(2019, 7, 4)}
        )

        entries = coordinator.goal_manager.entries
        assert not set(old_goals) & set(entries)
        assert sorted(
            entry[const.DATA_ENTRY_TARGET_DATE] for entry in entries.values()
        ) == [
            "2024-07-04",
            "2025-07-04",
            "2026-07-04",
            "2027-07-04",
            "2028-07-04",
        ]

    async def test_renamed_special_date_keeps_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        special_date_id = add_camino(coordinator)
        _, goals = coordinator.goal_manager.add_special_date_goal(
            {
                const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID: special_date_id,
                const.DATA_GOAL_TEMPLATE_TITLE: "Walk 10km",
            }
        )

        coordinator.special_date_manager.update_special_date(
            special_date_id, {const.DATA_NAME: "Camino Portugués"}
        )

        assert set(coordinator.goal_manager.entries) == set(goals)


# =============================================================================
# TEST: ENTRIES
# =============================================================================


class TestEntries:
    """Goal and memory CRUD."""

    async def test_create_goal(self, coordinator: LifeDatesDataCoordinator) -> None:
        entry_id, generated = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Run a marathon",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 10, 6),
                const.DATA_ENTRY_TAGS: ["Health"],
            }
        )
        entry = coordinator.goal_manager.get_entry(entry_id)

        assert generated == []
        assert entry[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_GOAL
        assert entry[const.DATA_ENTRY_WEEK_YEAR] == 34

    async def test_recurring_memory_generates_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        memory_id, generated = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TYPE: const.ENTRY_TYPE_MEMORY,
                const.DATA_ENTRY_TITLE: "Book club",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 1, 15),
                const.DATA_ENTRY_IS_RECURRING: True,
                const.DATA_ENTRY_FREQUENCY: const.FREQUENCY_MONTHLY,
                const.DATA_ENTRY_RECURRING_END_DATE: date(2024, 9, 30),
            }
        )
        entries = coordinator.goal_manager.entries

        assert sorted(entries[gid][const.DATA_ENTRY_TARGET_DATE] for gid in generated) == [
            "2024-06-15",
            "2024-07-15",
            "2024-08-15",
            "2024-09-15",
        ]
        assert all(
            entries[gid][const.DATA_ENTRY_PARENT_MEMORY_ID] == memory_id
            for gid in generated
        )

        removed = coordinator.goal_manager.delete_entry(memory_id)

        assert set(removed) == {memory_id, *generated}
        assert coordinator.goal_manager.entries == {}

    async def test_complete_goal_is_idempotent(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        entry_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Run a marathon",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 10, 6),
            }
        )
        first_now = dt_util.utcnow()

        coordinator.goal_manager.complete_goal(entry_id, first_now)
        entry = coordinator.goal_manager.complete_goal(entry_id, dt_util.utcnow())

        assert entry[const.DATA_ENTRY_IS_COMPLETED] is True
        assert entry[const.DATA_ENTRY_COMPLETED_AT] == first_now.isoformat()

    async def test_complete_memory_rejected(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        memory_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TYPE: const.ENTRY_TYPE_MEMORY,
                const.DATA_ENTRY_TITLE: "Graduated",
                const.DATA_ENTRY_TARGET_DATE: date(2012, 6, 1),
            }
        )
        with pytest.raises(HomeAssistantError) as err:
            coordinator.goal_manager.complete_goal(memory_id, dt_util.utcnow())
        assert err.value.translation_key == const.TRANS_KEY_ERROR_NOT_A_GOAL

    async def test_unknown_entry(self, coordinator: LifeDatesDataCoordinator) -> None:
        with pytest.raises(HomeAssistantError) as err:
            coordinator.goal_manager.delete_entry("missing")
        assert err.value.translation_key == const.TRANS_KEY_ERROR_ENTRY_NOT_FOUND

        with pytest.raises(HomeAssistantError) as err:
            coordinator.goal_manager.update_entry("missing", {})
        assert err.value.translation_key == const.TRANS_KEY_ERROR_ENTRY_NOT_FOUND

    async def test_update_goal(self, coordinator: LifeDatesDataCoordinator) -> None:
        entry_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Run a marathon",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 10, 6),
                const.DATA_ENTRY_TAGS: ["Health"],
            }
        )
        created_at = coordinator.goal_manager.get_entry(entry_id)[const.DATA_CREATED_AT]

        entry, generated = coordinator.goal_manager.update_entry(
            entry_id,
            {
                const.DATA_ENTRY_TITLE: "Run a half marathon",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 9, 1),
            },
        )

        assert generated == []
        assert entry[const.DATA_INTERNAL_ID] == entry_id
        assert entry[const.DATA_ENTRY_TITLE] == "Run a half marathon"
        assert entry[const.DATA_ENTRY_TARGET_DATE] == "2024-09-01"
        assert entry[const.DATA_ENTRY_TAGS] == ["Health"]
        assert entry[const.DATA_CREATED_AT] == created_at
        assert coordinator.goal_manager.get_entry(entry_id) is entry

    async def test_invalid_update_leaves_entry(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        entry_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Run a marathon",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 10, 6),
            }
        )

        with pytest.raises(EntityValidationError):
            coordinator.goal_manager.update_entry(
                entry_id, {const.DATA_ENTRY_IS_RECURRING: True}
            )

        entry = coordinator.goal_manager.get_entry(entry_id)
        assert entry[const.DATA_ENTRY_IS_RECURRING] is False

    async def test_update_recurring_memory_regenerates_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        memory_id, old_goals = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TYPE: const.ENTRY_TYPE_MEMORY,
                const.DATA_ENTRY_TITLE: "Book club",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 1, 15),
                const.DATA_ENTRY_IS_RECURRING: True,
                const.DATA_ENTRY_FREQUENCY: const.FREQUENCY_MONTHLY,
                const.DATA_ENTRY_RECURRING_END_DATE: date(2024, 9, 30),
            }
        )

        _, new_goals = coordinator.goal_manager.update_entry(
            memory_id, {const.DATA_ENTRY_RECURRING_END_DATE: date(2024, 7, 31)}
        )

        entries = coordinator.goal_manager.entries
        assert not set(old_goals) & set(entries)
        assert sorted(
            entries[gid][const.DATA_ENTRY_TARGET_DATE] for gid in new_goals
        ) == ["2024-06-15", "2024-07-15"]
        assert set(entries) == {memory_id, *new_goals}

    async def test_unchanged_memory_keeps_goals(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        memory_id, goals = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TYPE: const.ENTRY_TYPE_MEMORY,
                const.DATA_ENTRY_TITLE: "Book club",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 1, 15),
                const.DATA_ENTRY_IS_RECURRING: True,
                const.DATA_ENTRY_FREQUENCY: const.FREQUENCY_MONTHLY,
                const.DATA_ENTRY_RECURRING_END_DATE: date(2024, 9, 30),
            }
        )

        _, generated = coordinator.goal_manager.update_entry(memory_id, {})

        assert generated == []
        assert set(coordinator.goal_manager.entries) == {memory_id, *goals}


# =============================================================================
# TEST: LIFECYCLE
# =============================================================================


class TestLifecycleProcessing:
    """Daily conversion of passed goals."""

    async def test_passed_goal_becomes_memory(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        goal_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Finish the novel",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 6, 9),
                const.DATA_ENTRY_CONVERT_TO_MEMORY: True,
            }
        )

        created = coordinator.process_daily(FROZEN_TODAY)

        assert len(created) == 1
        entries = coordinator.goal_manager.entries
        assert goal_id not in entries
        memory = entries[created[0]]
        assert memory[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_MEMORY
        assert memory[const.DATA_ENTRY_TITLE] == "Finish the novel"
        assert memory[const.DATA_ENTRY_TARGET_DATE] == "2024-06-09"
        assert (
            coordinator.storage_manager.get_meta()[const.DATA_META_LAST_PROCESSED_DATE]
            == "2024-06-10"
        )

        # Running again on the same day finds nothing left to convert
        assert coordinator.process_daily(FROZEN_TODAY) == []

    async def test_passed_goal_without_conversion_is_overdue(
        self, coordinator: LifeDatesDataCoordinator
    ) -> None:
        goal_id, _ = coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Renew passport",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 6, 1),
            }
        )

        assert coordinator.process_daily(FROZEN_TODAY) == []
        overdue = coordinator.data[const.SNAPSHOT_OVERDUE_GOALS]
        assert [goal[const.DATA_INTERNAL_ID] for goal in overdue] == [goal_id]

    async def test_daily_callback_converts_and_publishes(
        self, hass: HomeAssistant, coordinator: LifeDatesDataCoordinator
    ) -> None:
        coordinator.goal_manager.create_entry(
            {
                const.DATA_ENTRY_TITLE: "Finish the novel",
                const.DATA_ENTRY_TARGET_DATE: date(2024, 6, 9),
                const.DATA_ENTRY_CONVERT_TO_MEMORY: True,
            }
        )

        await coordinator._async_daily_processing(dt_util.now())
        await hass.async_block_till_done()

        types = {
            entry[const.DATA_ENTRY_TYPE]
            for entry in coordinator.goal_manager.entries.values()
        }
        assert types == {const.ENTRY_TYPE_MEMORY}
        assert coordinator.data[const.SNAPSHOT_OVERDUE_GOALS] == []
