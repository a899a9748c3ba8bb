"""Goal Manager for LifeDates integration.

Owns goals, memories and special date goal templates of one config entry:
- Entry CRUD (goals and memories)
- Goal template CRUD and the goals generated from each template
- Goal generation from recurring memories
- Daily lifecycle processing (conversion of passed goals into memories)
- Keeping generated goals in line with their special date (removed dates
  cascade, moved dates regenerate)

Every change to an entry emits SIGNAL_SUFFIX_ENTRY_SAVED or
SIGNAL_SUFFIX_ENTRY_DELETED so NotificationManager can cancel the issued
trigger handle and schedule a fresh one.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError

from .. import const, data_builders as db
from ..engines import GoalLifecycleManager, RecurringReminderScheduler
from ..utils.dt_utils import as_calendar_date
from .base_manager import BaseManager

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ..models import GoalDraft
    from ..type_defs import EntryData, SpecialDateGoalData


class GoalManager(BaseManager):
    """Manager for goals, memories and goal templates."""

    async def async_setup(self) -> None:
        """Subscribe to special date changes."""
        self.listen(
            const.SIGNAL_SUFFIX_SPECIAL_DATES_CHANGED, self._on_special_dates_changed
        )

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def entries(self) -> dict[str, EntryData]:
        return self.coordinator.storage_manager.get_entries()

    @property
    def templates(self) -> dict[str, SpecialDateGoalData]:
        return self.coordinator.storage_manager.get_special_date_goals()

    def get_entry(self, entry_id: str) -> EntryData:
        """Return a stored entry.

        Raises:
            HomeAssistantError: Unknown entry.
        """
        entry = self.entries.get(entry_id)
        if entry is None:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_ENTRY_NOT_FOUND,
                translation_placeholders={"entry_id": entry_id},
            )
        return entry

    def get_template(self, template_id: str) -> SpecialDateGoalData:
        """Return a stored goal template.

        Raises:
            HomeAssistantError: Unknown template.
        """
        template = self.templates.get(template_id)
        if template is None:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_GOAL_TEMPLATE_NOT_FOUND,
                translation_placeholders={"goal_template_id": template_id},
            )
        return template

    def _birth_date(self) -> date | None:
        return self.coordinator.special_date_manager.profile.birth_date

    # =========================================================================
    # Entries
    # =========================================================================

    def _store_entry(self, entry: EntryData) -> str:
        entry_id = entry[const.DATA_INTERNAL_ID]
        self.entries[entry_id] = entry
        self.emit(const.SIGNAL_SUFFIX_ENTRY_SAVED, entry_id=entry_id)
        return entry_id

    def _store_drafts(self, drafts: list[GoalDraft]) -> list[str]:
        birth_date = self._birth_date()
        return [
            self._store_entry(db.build_entry_from_draft(draft, birth_date))
            for draft in drafts
        ]

    def _open_goals(
        self, belongs: Callable[[EntryData], bool], from_date: date
    ) -> list[str]:
        """Ids of uncompleted goals on or after from_date matching belongs."""
        return [
            entry_id
            for entry_id, entry in self.entries.items()
            if entry[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_GOAL
            and not entry.get(const.DATA_ENTRY_IS_COMPLETED)
            and as_calendar_date(entry[const.DATA_ENTRY_TARGET_DATE]) >= from_date  # type: ignore[operator]
            and belongs(entry)
        ]

    @staticmethod
    def _generation_key(entry: EntryData) -> tuple[Any, ...] | None:
        """What the goals generated from a memory depend on."""
        if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_MEMORY:
            return None
        return (
            db.recurrence_spec_from_data(entry),
            entry[const.DATA_ENTRY_TITLE],
            entry.get(const.DATA_ENTRY_DESCRIPTION),
            tuple(entry.get(const.DATA_ENTRY_TAGS, [])),
            bool(entry.get(const.DATA_ENTRY_REMINDER_ENABLED)),
        )

    def _generate_memory_goals(self, entry: EntryData) -> list[str]:
        """Create the future goals of a recurring memory with an end date."""
        if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_MEMORY:
            return []
        spec = db.recurrence_spec_from_data(entry)
        if spec is None:
            return []
        drafts = RecurringReminderScheduler.generate_recurring_memory_goals(
            memory_id=entry[const.DATA_INTERNAL_ID],
            title=entry[const.DATA_ENTRY_TITLE],
            spec=spec,
            today=self.coordinator.today,
            birth_date=self._birth_date(),
            description=entry[const.DATA_ENTRY_DESCRIPTION],
            tags=tuple(entry[const.DATA_ENTRY_TAGS]),
            reminder_enabled=bool(entry[const.DATA_ENTRY_REMINDER_ENABLED]),
        )
        return self._store_drafts(drafts)

    def create_entry(self, user_input: dict[str, Any]) -> tuple[str, list[str]]:
        """Create a goal or memory.

        A recurring memory with an end date also creates its future goals.

        Returns:
            (entry id, ids of generated goals)

        Raises:
            EntityValidationError: Invalid entry data or reminder settings.
        """
        entry = db.build_entry(user_input, birth_date=self._birth_date())
        entry_id = self._store_entry(entry)
        generated = self._generate_memory_goals(entry)

        const.LOGGER.info(
            "INFO: Created %s '%s' (%s) with %d generated goals",
            entry[const.DATA_ENTRY_TYPE],
            entry[const.DATA_ENTRY_TITLE],
            entry_id,
            len(generated),
        )
        self.coordinator._persist_and_update()
        return entry_id, generated

    def update_entry(
        self, entry_id: str, user_input: dict[str, Any]
    ) -> tuple[EntryData, list[str]]:
        """Edit a goal or memory.

        Saving the entry reissues its reminder. When a memory's recurrence,
        title, description, tags or reminder setting change, its open future
        goals are replaced by freshly generated ones.

        Returns:
            (updated entry, ids of regenerated goals)

        Raises:
            HomeAssistantError: Unknown entry.
            EntityValidationError: Invalid entry data or reminder settings.
        """
        existing = self.get_entry(entry_id)
        previous_key = self._generation_key(existing)
        entry = db.build_entry(
            user_input, existing=existing, birth_date=self._birth_date()
        )
        self._store_entry(entry)

        generated: list[str] = []
        if self._generation_key(entry) != previous_key:
            stale = self._open_goals(
                lambda goal: goal.get(const.DATA_ENTRY_PARENT_MEMORY_ID) == entry_id,
                self.coordinator.today,
            )
            for stale_id in stale:
                self._remove_entry(stale_id)
            generated = self._generate_memory_goals(entry)
            const.LOGGER.debug(
                "DEBUG: Memory %s replaced %d open goals with %d new ones",
                entry_id,
                len(stale),
                len(generated),
            )

        const.LOGGER.info(
            "INFO: Updated %s '%s' (%s)",
            entry[const.DATA_ENTRY_TYPE],
            entry[const.DATA_ENTRY_TITLE],
            entry_id,
        )
        self.coordinator._persist_and_update()
        return entry, generated

    def complete_goal(self, entry_id: str, now: datetime) -> EntryData:
        """Mark a goal completed. Completing twice is a no-op.

        Raises:
            HomeAssistantError: Unknown entry or entry is not a goal.
        """
        entry = self.get_entry(entry_id)
        goal = db.entry_from_data(entry)
        if not goal.is_goal:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_NOT_A_GOAL,
                translation_placeholders={"entry_id": entry_id},
            )
        if goal.is_completed:
            const.LOGGER.debug("DEBUG: Goal %s already completed", entry_id)
            return entry

        completed = GoalLifecycleManager.complete(goal, now)
        entry[const.DATA_ENTRY_IS_COMPLETED] = True
        entry[const.DATA_ENTRY_COMPLETED_AT] = completed.completed_at.isoformat()  # type: ignore[union-attr]
        entry[const.DATA_UPDATED_AT] = now.isoformat()
        const.LOGGER.info("INFO: Goal '%s' completed", entry[const.DATA_ENTRY_TITLE])
        self.emit(const.SIGNAL_SUFFIX_ENTRY_SAVED, entry_id=entry_id)
        self.coordinator._persist_and_update()
        return entry

    def _remove_entry(self, entry_id: str) -> EntryData | None:
        entry = self.entries.pop(entry_id, None)
        if entry is not None:
            self.emit(
                const.SIGNAL_SUFFIX_ENTRY_DELETED,
                entry_id=entry_id,
                notification_id=entry.get(const.DATA_ENTRY_NOTIFICATION_ID),
            )
        return entry

    def delete_entry(self, entry_id: str) -> list[str]:
        """Delete an entry; a memory takes the goals generated from it along.

        Returns:
            Ids of every removed entry.

        Raises:
            HomeAssistantError: Unknown entry.
        """
        self.get_entry(entry_id)
        children = [
            child_id
            for child_id, child in self.entries.items()
            if child.get(const.DATA_ENTRY_PARENT_MEMORY_ID) == entry_id
        ]
        removed = [entry_id, *children]
        for removed_id in removed:
            self._remove_entry(removed_id)
        const.LOGGER.info(
            "INFO: Deleted entry %s and %d generated goals", entry_id, len(children)
        )
        self.coordinator._persist_and_update()
        return removed

    # =========================================================================
    # Special date goal templates
    # =========================================================================

    def _existing_goal_keys(self) -> set[tuple[date, str]]:
        keys = set()
        for entry in self.entries.values():
            if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_GOAL:
                continue
            target = as_calendar_date(entry[const.DATA_ENTRY_TARGET_DATE])
            if target is not None:
                keys.add((target, entry[const.DATA_ENTRY_TITLE]))
        return keys

    def _regenerate_template_goals(self, template_data: SpecialDateGoalData) -> list[str]:
        """Replace a template's open future goals with freshly generated ones.

        Completed goals stay and keep their occurrence from being generated
        again.
        """
        template = db.goal_template_from_data(template_data)
        today = self.coordinator.today
        stale = self._open_goals(
            lambda goal: goal.get(const.DATA_ENTRY_GOAL_TEMPLATE_ID) == template.id,
            today + timedelta(days=1),
        )
        for stale_id in stale:
            self._remove_entry(stale_id)
        if not template.is_active:
            return []

        record = self.coordinator.special_date_manager.get_record(
            template.special_date_id
        )
        existing = self._existing_goal_keys()
        # Kept goals of this template hold their date under the current title
        existing.update(
            (as_calendar_date(entry[const.DATA_ENTRY_TARGET_DATE]), template.title)  # type: ignore[misc]
            for entry in self.entries.values()
            if entry[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_GOAL
            and entry.get(const.DATA_ENTRY_GOAL_TEMPLATE_ID) == template.id
        )
        drafts = RecurringReminderScheduler.generate_special_date_goal_instances(
            record, template, today, existing=existing
        )
        return self._store_drafts(drafts)

    def add_special_date_goal(self, user_input: dict[str, Any]) -> tuple[str, list[str]]:
        """Attach a goal template to a special date and generate its goals.

        Returns:
            (template id, ids of generated goals)

        Raises:
            HomeAssistantError: Unknown special date.
            EntityValidationError: Invalid template data.
        """
        special_date_id = user_input.get(const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID, "")
        record = self.coordinator.special_date_manager.get_record(special_date_id)
        template_data = db.build_special_date_goal(user_input)
        template_id = template_data[const.DATA_INTERNAL_ID]
        self.templates[template_id] = template_data
        generated = self._regenerate_template_goals(template_data)

        const.LOGGER.info(
            "INFO: Added goal '%s' to special date '%s' (%d goals generated)",
            template_data[const.DATA_GOAL_TEMPLATE_TITLE],
            record.name,
            len(generated),
        )
        self.coordinator._persist_and_update()
        return template_id, generated

    def update_special_date_goal(
        self, template_id: str, user_input: dict[str, Any]
    ) -> tuple[SpecialDateGoalData, list[str]]:
        """Edit a goal template and regenerate its open goals.

        The special date a template belongs to cannot change.

        Returns:
            (updated template, ids of regenerated goals)

        Raises:
            HomeAssistantError: Unknown template.
            EntityValidationError: Invalid template data.
        """
        existing = self.get_template(template_id)
        changes = {
            key: value
            for key, value in user_input.items()
            if key != const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID
        }
        template_data = db.build_special_date_goal(changes, existing=existing)
        self.templates[template_id] = template_data
        generated = self._regenerate_template_goals(template_data)

        const.LOGGER.info(
            "INFO: Updated goal template '%s' (%d goals regenerated)",
            template_data[const.DATA_GOAL_TEMPLATE_TITLE],
            len(generated),
        )
        self.coordinator._persist_and_update()
        return template_data, generated

    def delete_special_date_goal(self, template_id: str) -> list[str]:
        """Delete a goal template with the goals generated from it.

        Memories converted from those goals are kept.

        Returns:
            Ids of the removed goals.

        Raises:
            HomeAssistantError: Unknown template.
        """
        self.get_template(template_id)
        del self.templates[template_id]
        removed = self._remove_template_goals({template_id})
        const.LOGGER.info(
            "INFO: Deleted goal template %s and %d goals", template_id, len(removed)
        )
        self.coordinator._persist_and_update()
        return removed

    def _remove_template_goals(self, template_ids: set[str]) -> list[str]:
        removed = [
            entry_id
            for entry_id, entry in self.entries.items()
            if entry[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_GOAL
            and entry.get(const.DATA_ENTRY_GOAL_TEMPLATE_ID) in template_ids
        ]
        for entry_id in removed:
            self._remove_entry(entry_id)
        return removed

    def _cascade_removed_special_date(self, special_date_id: str) -> None:
        template_ids = {
            template_id
            for template_id, template in self.templates.items()
            if template.get(const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID) == special_date_id
        }
        for template_id in template_ids:
            del self.templates[template_id]
        goal_ids = [
            entry_id
            for entry_id, entry in self.entries.items()
            if entry.get(const.DATA_ENTRY_SPECIAL_DATE_ID) == special_date_id
            and entry[const.DATA_ENTRY_TYPE] == const.ENTRY_TYPE_GOAL
        ]
        for entry_id in goal_ids:
            self._remove_entry(entry_id)
        const.LOGGER.debug(
            "DEBUG: Special date %s removed %d templates and %d goals",
            special_date_id,
            len(template_ids),
            len(goal_ids),
        )

    @callback
    def _on_special_dates_changed(self, payload: dict[str, Any]) -> None:
        """Follow special date changes with their templates and goals.

        Removed dates take their templates and goals along. Dates whose
        occurrences moved get the open goals of their templates regenerated.
        """
        for special_date_id in payload.get("removed_special_date_ids", []):
            self._cascade_removed_special_date(special_date_id)

        changed = set(payload.get("changed_special_date_ids", []))
        if not changed:
            return
        for template_data in list(self.templates.values()):
            if template_data[const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID] in changed:
                self._regenerate_template_goals(template_data)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def process_lifecycle(self, today: date) -> list[str]:
        """Convert every passed goal that asked for it into a memory.

        Returns:
            Ids of the memories created.
        """
        created: list[str] = []
        for entry_id, entry in list(self.entries.items()):
            if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_GOAL:
                continue
            result = GoalLifecycleManager.apply_lifecycle(
                db.entry_from_data(entry), today
            )
            if result.converted_memory is None:
                continue
            memory = db.memory_data_from_goal(result.converted_memory, entry)
            self._remove_entry(entry_id)
            created.append(self._store_entry(memory))
            const.LOGGER.info(
                "INFO: Goal '%s' passed on %s and became a memory",
                entry[const.DATA_ENTRY_TITLE],
                entry[const.DATA_ENTRY_TARGET_DATE],
            )
        return created

    def overdue_goals(self, today: date) -> list[EntryData]:
        """Return active goals whose date has passed without conversion."""
        overdue = []
        for entry in self.entries.values():
            if entry[const.DATA_ENTRY_TYPE] != const.ENTRY_TYPE_GOAL:
                continue
            result = GoalLifecycleManager.apply_lifecycle(
                db.entry_from_data(entry), today
            )
            if result.is_overdue:
                overdue.append(entry)
        return overdue
