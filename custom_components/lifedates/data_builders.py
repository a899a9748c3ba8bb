"""Entity lifecycle management helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Entity field defaults
- Business logic validation
- Complete storage structure building
- Storage dict <-> model dataclass conversion

### Build Functions
Each stored entity type has a `build_<entity>()` function that:
- Takes user_input with DATA_* keys (service fields share the same names)
- Generates internal_id (UUID) for new entities
- Sets timestamps (created_at, updated_at)
- Applies field defaults
- Raises EntityValidationError for invalid input
- Returns a complete dict ready for storage

### Conversion Functions
`<entity>_from_data()` turns a stored dict into the immutable model the
engines consume. Engines never see storage dicts.

Consumers:
- managers/ (special dates, goals)
- config_flow.py (initial profile)
- coordinator.py (snapshots)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any
import uuid

from . import const
from .models import (
    BiographicalProfile,
    Child,
    EntityValidationError,
    JournalEntry,
    Pet,
    ReminderSpec,
    SpecialDateGoal,
    SpecialDateRecord,
)
from .type_defs import (
    ChildData,
    CustomSpecialDateData,
    EntryData,
    PetData,
    ProfileData,
    SpecialDateGoalData,
)
from .engines.occurrence_engine import NextOccurrenceCalculator
from .utils.dt_utils import as_calendar_date, date_to_week_coordinates, dt_now_utc

if TYPE_CHECKING:
    from .models import GoalDraft

__all__ = [
    "EntityValidationError",
    "build_custom_special_date",
    "build_entry",
    "build_entry_from_draft",
    "build_profile",
    "build_special_date_goal",
    "custom_date_to_record",
    "entry_from_data",
    "goal_template_from_data",
    "memory_data_from_goal",
    "profile_from_data",
    "record_to_dict",
    "recurrence_spec_from_data",
    "reminder_spec_from_data",
]

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _normalize_list_field(value: Any) -> list[Any]:
    """Normalize a field that should be a list.

    Strings are wrapped rather than iterated character by character.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value] if value else []
    return list(value) if value else []


def _optional_text(value: Any) -> str | None:
    """Keep None as None; keep "" as "" (absent and empty are distinct)."""
    if value is None:
        return None
    return str(value)


def _iso_date(
    value: Any, field: str, *, required: bool = False
) -> str | None:
    """Normalize a date-like value to an ISO date string.

    Raises:
        EntityValidationError: If the value cannot be parsed, or is missing
        while required.
    """
    if value is None or value == "":
        if required:
            raise EntityValidationError(
                field=field, translation_key=const.TRANS_KEY_INVALID_DATE
            )
        return None
    parsed = as_calendar_date(value)
    if parsed is None:
        raise EntityValidationError(
            field=field,
            translation_key=const.TRANS_KEY_INVALID_DATE,
            placeholders={"value": str(value)},
        )
    return parsed.isoformat()


def _to_date(value: str | None) -> date | None:
    return as_calendar_date(value) if value else None


def _required_text(value: Any, field: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise EntityValidationError(
            field=field, translation_key=const.TRANS_KEY_INVALID_NAME
        )
    return text


def _now_iso() -> str:
    return dt_now_utc().isoformat()


def _make_getter(user_input: dict[str, Any], existing: Any) -> Any:
    """Return get_field(key, default): user_input > existing > default."""

    def get_field(data_key: str, default: Any) -> Any:
        if data_key in user_input:
            return user_input[data_key]
        if existing is not None:
            return existing.get(data_key, default)
        return default

    return get_field


# ==============================================================================
# PROFILE
# ==============================================================================


def _build_child(raw: dict[str, Any]) -> ChildData:
    return ChildData(
        internal_id=str(raw.get(const.DATA_INTERNAL_ID) or uuid.uuid4()),
        name=str(raw.get(const.DATA_NAME) or ""),
        birth_date=_iso_date(  # type: ignore[typeddict-item]
            raw.get(const.DATA_CHILD_BIRTH_DATE),
            const.FIELD_CHILDREN,
            required=True,
        ),
    )


def _build_pet(raw: dict[str, Any]) -> PetData:
    pet_type = raw.get(const.DATA_PET_TYPE) or const.PET_TYPE_OTHER
    if pet_type not in const.PET_TYPE_OPTIONS:
        raise EntityValidationError(
            field=const.FIELD_PETS,
            translation_key=const.TRANS_KEY_INVALID_PET_TYPE,
            placeholders={"value": str(pet_type)},
        )
    return PetData(
        internal_id=str(raw.get(const.DATA_INTERNAL_ID) or uuid.uuid4()),
        name=str(raw.get(const.DATA_NAME) or ""),
        pet_type=pet_type,
        birthday=_iso_date(raw.get(const.DATA_PET_BIRTHDAY), const.FIELD_PETS),
    )


def build_profile(
    user_input: dict[str, Any], existing: ProfileData | None = None
) -> ProfileData:
    """Build profile data for create or update operations.

    Args:
        user_input: Data with DATA_PROFILE_* keys (may have missing fields)
        existing: None for create, existing ProfileData for update

    Raises:
        EntityValidationError: Missing/invalid birth date, invalid dates,
        invalid graduation year or pet type.
    """
    get_field = _make_getter(user_input, existing)

    graduation_year = get_field(const.DATA_PROFILE_GRADUATION_YEAR, None)
    if graduation_year is not None:
        try:
            graduation_year = int(graduation_year)
        except (TypeError, ValueError) as err:
            raise EntityValidationError(
                field=const.FIELD_GRADUATION_YEAR,
                translation_key=const.TRANS_KEY_INVALID_GRADUATION_YEAR,
                placeholders={"value": str(graduation_year)},
            ) from err
        if not 0 <= graduation_year <= date.max.year:
            raise EntityValidationError(
                field=const.FIELD_GRADUATION_YEAR,
                translation_key=const.TRANS_KEY_INVALID_GRADUATION_YEAR,
                placeholders={"value": str(graduation_year)},
            )

    return ProfileData(
        name=_optional_text(get_field(const.DATA_PROFILE_NAME, None)),
        birth_date=_iso_date(  # type: ignore[typeddict-item]
            get_field(const.DATA_PROFILE_BIRTH_DATE, None),
            const.FIELD_BIRTH_DATE,
            required=True,
        ),
        marriage_date=_iso_date(
            get_field(const.DATA_PROFILE_MARRIAGE_DATE, None),
            const.FIELD_MARRIAGE_DATE,
        ),
        spouse_name=_optional_text(get_field(const.DATA_PROFILE_SPOUSE_NAME, None)),
        spouse_birth_date=_iso_date(
            get_field(const.DATA_PROFILE_SPOUSE_BIRTH_DATE, None),
            const.FIELD_SPOUSE_BIRTH_DATE,
        ),
        children=[
            _build_child(child)
            for child in _normalize_list_field(
                get_field(const.DATA_PROFILE_CHILDREN, [])
            )
        ],
        pets=[
            _build_pet(pet)
            for pet in _normalize_list_field(get_field(const.DATA_PROFILE_PETS, []))
        ],
        school_name=_optional_text(get_field(const.DATA_PROFILE_SCHOOL_NAME, None)),
        graduation_year=graduation_year,
        degree=_optional_text(get_field(const.DATA_PROFILE_DEGREE, None)),
    )


def profile_from_data(data: ProfileData) -> BiographicalProfile:
    """Convert stored profile data to a BiographicalProfile."""
    return BiographicalProfile(
        birth_date=as_calendar_date(data[const.DATA_PROFILE_BIRTH_DATE]),  # type: ignore[arg-type]
        name=data.get(const.DATA_PROFILE_NAME),
        marriage_date=_to_date(data.get(const.DATA_PROFILE_MARRIAGE_DATE)),
        spouse_name=data.get(const.DATA_PROFILE_SPOUSE_NAME),
        spouse_birth_date=_to_date(data.get(const.DATA_PROFILE_SPOUSE_BIRTH_DATE)),
        children=tuple(
            Child(
                id=child[const.DATA_INTERNAL_ID],
                name=child[const.DATA_NAME],
                birth_date=as_calendar_date(child[const.DATA_CHILD_BIRTH_DATE]),  # type: ignore[arg-type]
            )
            for child in data.get(const.DATA_PROFILE_CHILDREN, [])
        ),
        pets=tuple(
            Pet(
                id=pet[const.DATA_INTERNAL_ID],
                name=pet[const.DATA_NAME],
                pet_type=pet.get(const.DATA_PET_TYPE, const.PET_TYPE_OTHER),
                birthday=_to_date(pet.get(const.DATA_PET_BIRTHDAY)),
            )
            for pet in data.get(const.DATA_PROFILE_PETS, [])
        ),
        school_name=data.get(const.DATA_PROFILE_SCHOOL_NAME),
        graduation_year=data.get(const.DATA_PROFILE_GRADUATION_YEAR),
        degree=data.get(const.DATA_PROFILE_DEGREE),
    )


# ==============================================================================
# CUSTOM SPECIAL DATES
# ==============================================================================


def build_custom_special_date(
    user_input: dict[str, Any],
    existing: CustomSpecialDateData | None = None,
) -> CustomSpecialDateData:
    """Build a custom special date for create or update operations.

    Raises:
        EntityValidationError: Empty name, missing/invalid date, unknown category.
    """
    get_field = _make_getter(user_input, existing)
    now_iso = _now_iso()

    name = _required_text(get_field(const.DATA_NAME, ""), const.FIELD_NAME)
    category = get_field(const.DATA_SPECIAL_DATE_CATEGORY, const.CATEGORY_CUSTOM)
    if category not in const.CATEGORY_OPTIONS:
        raise EntityValidationError(
            field=const.FIELD_CATEGORY,
            translation_key=const.TRANS_KEY_INVALID_CATEGORY,
            placeholders={"value": str(category)},
        )

    if existing is None:
        internal_id = str(uuid.uuid4())
        created_at = now_iso
    else:
        internal_id = existing[const.DATA_INTERNAL_ID]
        created_at = existing.get(const.DATA_CREATED_AT, now_iso)

    return CustomSpecialDateData(
        internal_id=internal_id,
        name=name,
        date=_iso_date(  # type: ignore[typeddict-item]
            get_field(const.DATA_SPECIAL_DATE_DATE, None),
            const.FIELD_DATE,
            required=True,
        ),
        category=category,
        is_recurring=bool(get_field(const.DATA_SPECIAL_DATE_IS_RECURRING, True)),
        notes=_optional_text(get_field(const.DATA_SPECIAL_DATE_NOTES, None)),
        created_at=created_at,
        updated_at=now_iso,
    )


def custom_date_to_record(data: CustomSpecialDateData) -> SpecialDateRecord:
    """Convert a stored custom date to a SpecialDateRecord."""
    return SpecialDateRecord(
        id=data[const.DATA_INTERNAL_ID],
        name=data[const.DATA_NAME],
        anchor_date=as_calendar_date(data[const.DATA_SPECIAL_DATE_DATE]),  # type: ignore[arg-type]
        category=data[const.DATA_SPECIAL_DATE_CATEGORY],
        is_recurring=data[const.DATA_SPECIAL_DATE_IS_RECURRING],
        provenance=const.PROVENANCE_CUSTOM,
        notes=data.get(const.DATA_SPECIAL_DATE_NOTES),
        source_id=data[const.DATA_INTERNAL_ID],
    )


# ==============================================================================
# SPECIAL DATE GOAL TEMPLATES
# ==============================================================================


def build_special_date_goal(
    user_input: dict[str, Any],
    existing: SpecialDateGoalData | None = None,
) -> SpecialDateGoalData:
    """Build a special date goal template.

    Validation is delegated to the SpecialDateGoal model so services and the
    engine share the same rules.
    """
    get_field = _make_getter(user_input, existing)
    now_iso = _now_iso()

    lead_time = get_field(const.DATA_GOAL_TEMPLATE_LEAD_TIME, None)
    template = SpecialDateGoal(
        id=existing[const.DATA_INTERNAL_ID] if existing else str(uuid.uuid4()),
        special_date_id=str(get_field(const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID, "")),
        title=str(get_field(const.DATA_GOAL_TEMPLATE_TITLE, "")).strip(),
        description=_optional_text(
            get_field(const.DATA_GOAL_TEMPLATE_DESCRIPTION, None)
        ),
        frequency=get_field(
            const.DATA_GOAL_TEMPLATE_FREQUENCY, const.FREQUENCY_YEARLY
        ),
        reminder_enabled=bool(
            get_field(const.DATA_GOAL_TEMPLATE_REMINDER_ENABLED, True)
        ),
        lead_time=int(lead_time) if lead_time is not None else None,
        lead_time_unit=get_field(const.DATA_GOAL_TEMPLATE_LEAD_TIME_UNIT, None),
        is_active=bool(get_field(const.DATA_GOAL_TEMPLATE_IS_ACTIVE, True)),
    )

    return SpecialDateGoalData(
        internal_id=template.id,
        special_date_id=template.special_date_id,
        title=template.title,
        description=template.description,
        frequency=template.frequency,
        reminder_enabled=template.reminder_enabled,
        lead_time=template.lead_time,
        lead_time_unit=template.lead_time_unit,
        is_active=template.is_active,
        created_at=existing.get(const.DATA_CREATED_AT, now_iso) if existing else now_iso,
        updated_at=now_iso,
    )


def goal_template_from_data(data: SpecialDateGoalData) -> SpecialDateGoal:
    """Convert a stored goal template to a SpecialDateGoal."""
    return SpecialDateGoal(
        id=data[const.DATA_INTERNAL_ID],
        special_date_id=data[const.DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID],
        title=data[const.DATA_GOAL_TEMPLATE_TITLE],
        description=data.get(const.DATA_GOAL_TEMPLATE_DESCRIPTION),
        frequency=data.get(const.DATA_GOAL_TEMPLATE_FREQUENCY, const.FREQUENCY_YEARLY),
        reminder_enabled=data.get(const.DATA_GOAL_TEMPLATE_REMINDER_ENABLED, True),
        lead_time=data.get(const.DATA_GOAL_TEMPLATE_LEAD_TIME),
        lead_time_unit=data.get(const.DATA_GOAL_TEMPLATE_LEAD_TIME_UNIT),
        is_active=data.get(const.DATA_GOAL_TEMPLATE_IS_ACTIVE, True),
    )


# ==============================================================================
# ENTRIES (GOALS & MEMORIES)
# ==============================================================================


def reminder_spec_from_data(data: EntryData | dict[str, Any]) -> ReminderSpec | None:
    """Build the ReminderSpec notifications follow.

    None when the entry's reminder is switched off, recurring or not.

    Raises:
        EntityValidationError: See recurrence_spec_from_data.
    """
    if not data.get(const.DATA_ENTRY_REMINDER_ENABLED):
        return None
    return recurrence_spec_from_data(data)


def recurrence_spec_from_data(data: EntryData | dict[str, Any]) -> ReminderSpec | None:
    """Build the schedule of an entry, or None when it has no schedule.

    A recurring entry has a schedule even with its reminder off; recurring
    memories generate their goals from it.

    Raises:
        EntityValidationError: Out-of-range lead time, recurring without a
        frequency, end date before target.
    """
    is_recurring = bool(data.get(const.DATA_ENTRY_IS_RECURRING, False))
    if not data.get(const.DATA_ENTRY_REMINDER_ENABLED) and not is_recurring:
        return None
    lead_time = data.get(const.DATA_ENTRY_LEAD_TIME)
    return ReminderSpec(
        target_date=as_calendar_date(data[const.DATA_ENTRY_TARGET_DATE]),  # type: ignore[arg-type]
        frequency=data.get(const.DATA_ENTRY_FREQUENCY) or const.FREQUENCY_NONE,
        lead_time=int(lead_time) if lead_time is not None else 0,
        lead_time_unit=data.get(const.DATA_ENTRY_LEAD_TIME_UNIT)
        or const.TIME_UNIT_DAYS,
        end_date=_to_date(data.get(const.DATA_ENTRY_RECURRING_END_DATE)),
        is_recurring=is_recurring,
        special_date_id=data.get(const.DATA_ENTRY_SPECIAL_DATE_ID),
    )


def build_entry(
    user_input: dict[str, Any],
    existing: EntryData | None = None,
    birth_date: date | None = None,
) -> EntryData:
    """Build a goal or memory entry for create or update operations.

    Args:
        user_input: Data with DATA_ENTRY_* keys (may have missing fields)
        existing: None for create, existing EntryData for update
        birth_date: Profile birth date, used for life-calendar coordinates

    Raises:
        EntityValidationError: Invalid type/date/frequency or reminder settings.
    """
    get_field = _make_getter(user_input, existing)
    now_iso = _now_iso()

    entry_type = get_field(const.DATA_ENTRY_TYPE, const.ENTRY_TYPE_GOAL)
    if entry_type not in const.ENTRY_TYPE_OPTIONS:
        raise EntityValidationError(
            field=const.FIELD_ENTRY_TYPE,
            translation_key=const.TRANS_KEY_INVALID_ENTRY_TYPE,
            placeholders={"value": str(entry_type)},
        )
    is_goal = entry_type == const.ENTRY_TYPE_GOAL

    lead_time = get_field(const.DATA_ENTRY_LEAD_TIME, None)
    completed_at = get_field(const.DATA_ENTRY_COMPLETED_AT, None)
    if isinstance(completed_at, datetime):
        completed_at = completed_at.isoformat()

    entry = EntryData(
        internal_id=existing[const.DATA_INTERNAL_ID] if existing else str(uuid.uuid4()),
        entry_type=entry_type,
        title=_required_text(get_field(const.DATA_ENTRY_TITLE, ""), const.FIELD_TITLE),
        description=_optional_text(get_field(const.DATA_ENTRY_DESCRIPTION, None)),
        target_date=_iso_date(  # type: ignore[typeddict-item]
            get_field(const.DATA_ENTRY_TARGET_DATE, None),
            const.FIELD_TARGET_DATE,
            required=True,
        ),
        tags=[str(tag) for tag in _normalize_list_field(get_field(const.DATA_ENTRY_TAGS, []))],
        is_completed=is_goal and bool(get_field(const.DATA_ENTRY_IS_COMPLETED, False)),
        completed_at=completed_at if is_goal else None,
        convert_to_memory_when_passed=is_goal
        and bool(get_field(const.DATA_ENTRY_CONVERT_TO_MEMORY, False)),
        reminder_enabled=bool(get_field(const.DATA_ENTRY_REMINDER_ENABLED, False)),
        reminder_date=_iso_date(
            get_field(const.DATA_ENTRY_REMINDER_DATE, None),
            const.FIELD_TARGET_DATE,
        ),
        notification_id=get_field(const.DATA_ENTRY_NOTIFICATION_ID, None),
        is_recurring=bool(get_field(const.DATA_ENTRY_IS_RECURRING, False)),
        frequency=get_field(const.DATA_ENTRY_FREQUENCY, const.FREQUENCY_NONE)
        or const.FREQUENCY_NONE,
        recurring_end_date=_iso_date(
            get_field(const.DATA_ENTRY_RECURRING_END_DATE, None),
            const.FIELD_END_DATE,
        ),
        lead_time=int(lead_time) if lead_time is not None else None,
        lead_time_unit=get_field(const.DATA_ENTRY_LEAD_TIME_UNIT, None),
        parent_memory_id=get_field(const.DATA_ENTRY_PARENT_MEMORY_ID, None),
        special_date_id=get_field(const.DATA_ENTRY_SPECIAL_DATE_ID, None),
        goal_template_id=get_field(const.DATA_ENTRY_GOAL_TEMPLATE_ID, None),
        created_at=existing.get(const.DATA_CREATED_AT, now_iso) if existing else now_iso,
        updated_at=now_iso,
    )

    # Validate the schedule through the model (raises EntityValidationError)
    recurrence_spec_from_data(entry)
    if entry[const.DATA_ENTRY_LEAD_TIME] is not None:
        ReminderSpec(
            target_date=as_calendar_date(entry[const.DATA_ENTRY_TARGET_DATE]),  # type: ignore[arg-type]
            lead_time=entry[const.DATA_ENTRY_LEAD_TIME],  # type: ignore[arg-type]
            lead_time_unit=entry[const.DATA_ENTRY_LEAD_TIME_UNIT] or const.TIME_UNIT_DAYS,
        )

    if birth_date is not None:
        week_year, week_number, day_of_week = date_to_week_coordinates(
            as_calendar_date(entry[const.DATA_ENTRY_TARGET_DATE]),  # type: ignore[arg-type]
            birth_date,
        )
        entry[const.DATA_ENTRY_WEEK_YEAR] = week_year
        entry[const.DATA_ENTRY_WEEK_NUMBER] = week_number
        entry[const.DATA_ENTRY_DAY_OF_WEEK] = day_of_week

    return entry


def build_entry_from_draft(draft: GoalDraft, birth_date: date | None = None) -> EntryData:
    """Build a goal entry from a scheduler GoalDraft."""
    return build_entry(
        {
            const.DATA_ENTRY_TYPE: const.ENTRY_TYPE_GOAL,
            const.DATA_ENTRY_TITLE: draft.title,
            const.DATA_ENTRY_DESCRIPTION: draft.description,
            const.DATA_ENTRY_TARGET_DATE: draft.target_date,
            const.DATA_ENTRY_TAGS: list(draft.tags),
            const.DATA_ENTRY_CONVERT_TO_MEMORY: draft.convert_to_memory_when_passed,
            const.DATA_ENTRY_REMINDER_ENABLED: draft.reminder_date is not None,
            const.DATA_ENTRY_REMINDER_DATE: draft.reminder_date,
            const.DATA_ENTRY_LEAD_TIME: draft.lead_time,
            const.DATA_ENTRY_LEAD_TIME_UNIT: draft.lead_time_unit,
            const.DATA_ENTRY_SPECIAL_DATE_ID: draft.special_date_id,
            const.DATA_ENTRY_PARENT_MEMORY_ID: draft.parent_memory_id,
            const.DATA_ENTRY_GOAL_TEMPLATE_ID: draft.goal_template_id,
        },
        birth_date=birth_date,
    )


def entry_from_data(data: EntryData) -> JournalEntry:
    """Convert a stored entry to a JournalEntry."""
    completed_at = data.get(const.DATA_ENTRY_COMPLETED_AT)
    return JournalEntry(
        id=data[const.DATA_INTERNAL_ID],
        target_date=as_calendar_date(data[const.DATA_ENTRY_TARGET_DATE]),  # type: ignore[arg-type]
        title=data.get(const.DATA_ENTRY_TITLE, ""),
        entry_type=data.get(const.DATA_ENTRY_TYPE, const.ENTRY_TYPE_GOAL),
        description=data.get(const.DATA_ENTRY_DESCRIPTION),
        tags=tuple(data.get(const.DATA_ENTRY_TAGS, [])),
        is_completed=data.get(const.DATA_ENTRY_IS_COMPLETED, False),
        completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        convert_to_memory_when_passed=data.get(
            const.DATA_ENTRY_CONVERT_TO_MEMORY, False
        ),
        reminder=reminder_spec_from_data(data),
        notification_id=data.get(const.DATA_ENTRY_NOTIFICATION_ID),
        parent_memory_id=data.get(const.DATA_ENTRY_PARENT_MEMORY_ID),
        special_date_id=data.get(const.DATA_ENTRY_SPECIAL_DATE_ID),
    )


def memory_data_from_goal(memory: JournalEntry, goal_data: EntryData) -> EntryData:
    """Build the stored memory that replaces a converted goal.

    Keeps the goal's content and calendar position, drops every goal-only
    field and takes the new id from the converted JournalEntry.
    """
    now_iso = _now_iso()
    memory_data = EntryData(
        internal_id=memory.id,
        entry_type=const.ENTRY_TYPE_MEMORY,
        title=memory.title,
        description=memory.description,
        target_date=memory.target_date.isoformat(),
        tags=list(memory.tags),
        is_completed=False,
        completed_at=None,
        convert_to_memory_when_passed=False,
        reminder_enabled=False,
        reminder_date=None,
        notification_id=None,
        is_recurring=False,
        frequency=const.FREQUENCY_NONE,
        recurring_end_date=None,
        lead_time=None,
        lead_time_unit=None,
        parent_memory_id=memory.parent_memory_id,
        special_date_id=memory.special_date_id,
        goal_template_id=goal_data.get(const.DATA_ENTRY_GOAL_TEMPLATE_ID),
        created_at=now_iso,
        updated_at=now_iso,
    )
    for key in (
        const.DATA_ENTRY_WEEK_YEAR,
        const.DATA_ENTRY_WEEK_NUMBER,
        const.DATA_ENTRY_DAY_OF_WEEK,
    ):
        if key in goal_data:
            memory_data[key] = goal_data[key]  # type: ignore[literal-required]
    return memory_data


# ==============================================================================
# SERIALIZATION (service responses and sensor attributes)
# ==============================================================================


def record_to_dict(record: SpecialDateRecord, today: date) -> dict[str, Any]:
    """Return a JSON-friendly view of a special date, with its countdown."""
    next_date = NextOccurrenceCalculator.next_occurrence_date(record, today)
    return {
        const.DATA_INTERNAL_ID: record.id,
        const.DATA_NAME: record.name,
        const.ATTR_SPECIAL_DATE_DATE: record.anchor_date.isoformat(),
        const.ATTR_CATEGORY: record.category,
        const.ATTR_CATEGORY_NAME: record.category_name,
        const.DATA_SPECIAL_DATE_IS_RECURRING: record.is_recurring,
        const.ATTR_PROVENANCE: record.provenance,
        const.ATTR_ICON: record.icon,
        const.DATA_SPECIAL_DATE_NOTES: record.notes,
        const.ATTR_NEXT_OCCURRENCE: next_date.isoformat() if next_date else None,
        const.ATTR_DAYS_UNTIL: NextOccurrenceCalculator.days_until_next(
            record, today
        ),
        const.ATTR_LABEL: NextOccurrenceCalculator.next_occurrence_label(
            record, today
        ),
    }
