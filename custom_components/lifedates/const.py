# File: const.py
"""Constants for the LifeDates integration.

This file centralizes configuration keys, defaults, labels, domain names,
event names, and platform identifiers for consistency across the integration.
The pure engine packages (engines/, utils/) import only this module.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
LIFEDATES_TITLE = "LifeDates"

# Integration Domain
DOMAIN = "lifedates"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms (plain strings keep this module free of HA imports)
PLATFORMS = ["sensor"]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
# hass.data key of the memory backend; shared so documents outlive reloads
MEMORY_BACKEND = f"{DOMAIN}_memory_backend"
STORAGE_KEY = "lifedates_data"
STORAGE_VERSION = 1
SCHEMA_VERSION = 1

# Update Interval (minutes)
DEFAULT_UPDATE_INTERVAL = 30

# Daily processing time (local)
DEFAULT_DAILY_PROCESS_TIME = {"hour": 0, "minute": 0, "second": 5}

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_NAME = "name"
CONF_USER_ID = "user_id"
CONF_BIRTH_DATE = "birth_date"
CONF_NOTIFY_SERVICE = "notify_service"
CONF_ENABLE_NOTIFICATIONS = "enable_notifications"
CONF_REMINDER_TIME = "reminder_time"
CONF_STORAGE_BACKEND = "storage_backend"
CONF_UPCOMING_WINDOW_DAYS = "upcoming_window_days"
CONF_UPDATE_INTERVAL = "update_interval"

CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

STORAGE_BACKEND_HOME_ASSISTANT = "home_assistant"
STORAGE_BACKEND_MEMORY = "memory"
STORAGE_BACKEND_OPTIONS = [STORAGE_BACKEND_HOME_ASSISTANT, STORAGE_BACKEND_MEMORY]

DEFAULT_NAME = "Me"
DEFAULT_NOTIFY_SERVICE = ""
DEFAULT_ENABLE_NOTIFICATIONS = True
DEFAULT_REMINDER_TIME = "09:00"
DEFAULT_STORAGE_BACKEND = STORAGE_BACKEND_HOME_ASSISTANT
DEFAULT_UPCOMING_WINDOW_DAYS = 30
MIN_UPCOMING_WINDOW_DAYS = 1
MAX_UPCOMING_WINDOW_DAYS = 365

# ------------------------------------------------------------------------------------------------
# Storage Keys
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_META_LAST_PROCESSED_DATE = "last_processed_date"

DATA_PROFILE = "profile"
DATA_CUSTOM_DATES = "custom_dates"
DATA_SPECIAL_DATE_GOALS = "special_date_goals"
DATA_ENTRIES = "entries"

# Common
DATA_INTERNAL_ID = "internal_id"
DATA_NAME = "name"
DATA_CREATED_AT = "created_at"
DATA_UPDATED_AT = "updated_at"

# Profile
DATA_PROFILE_NAME = "name"
DATA_PROFILE_BIRTH_DATE = "birth_date"
DATA_PROFILE_MARRIAGE_DATE = "marriage_date"
DATA_PROFILE_SPOUSE_NAME = "spouse_name"
DATA_PROFILE_SPOUSE_BIRTH_DATE = "spouse_birth_date"
DATA_PROFILE_CHILDREN = "children"
DATA_PROFILE_PETS = "pets"
DATA_PROFILE_SCHOOL_NAME = "school_name"
DATA_PROFILE_GRADUATION_YEAR = "graduation_year"
DATA_PROFILE_DEGREE = "degree"

DATA_CHILD_BIRTH_DATE = "birth_date"
DATA_PET_TYPE = "pet_type"
DATA_PET_BIRTHDAY = "birthday"

# Custom special dates
DATA_SPECIAL_DATE_DATE = "date"
DATA_SPECIAL_DATE_CATEGORY = "category"
DATA_SPECIAL_DATE_IS_RECURRING = "is_recurring"
DATA_SPECIAL_DATE_NOTES = "notes"

# Special date goal templates
DATA_GOAL_TEMPLATE_SPECIAL_DATE_ID = "special_date_id"
DATA_GOAL_TEMPLATE_TITLE = "title"
DATA_GOAL_TEMPLATE_DESCRIPTION = "description"
DATA_GOAL_TEMPLATE_FREQUENCY = "frequency"
DATA_GOAL_TEMPLATE_REMINDER_ENABLED = "reminder_enabled"
DATA_GOAL_TEMPLATE_LEAD_TIME = "lead_time"
DATA_GOAL_TEMPLATE_LEAD_TIME_UNIT = "lead_time_unit"
DATA_GOAL_TEMPLATE_IS_ACTIVE = "is_active"

# Entries (goals and memories)
DATA_ENTRY_TYPE = "entry_type"
DATA_ENTRY_TITLE = "title"
DATA_ENTRY_DESCRIPTION = "description"
DATA_ENTRY_TARGET_DATE = "target_date"
DATA_ENTRY_TAGS = "tags"
DATA_ENTRY_IS_COMPLETED = "is_completed"
DATA_ENTRY_COMPLETED_AT = "completed_at"
DATA_ENTRY_CONVERT_TO_MEMORY = "convert_to_memory_when_passed"
DATA_ENTRY_REMINDER_ENABLED = "reminder_enabled"
DATA_ENTRY_REMINDER_DATE = "reminder_date"
DATA_ENTRY_NOTIFICATION_ID = "notification_id"
DATA_ENTRY_IS_RECURRING = "is_recurring"
DATA_ENTRY_FREQUENCY = "frequency"
DATA_ENTRY_RECURRING_END_DATE = "recurring_end_date"
DATA_ENTRY_LEAD_TIME = "lead_time"
DATA_ENTRY_LEAD_TIME_UNIT = "lead_time_unit"
DATA_ENTRY_PARENT_MEMORY_ID = "parent_memory_id"
DATA_ENTRY_SPECIAL_DATE_ID = "special_date_id"
DATA_ENTRY_GOAL_TEMPLATE_ID = "goal_template_id"
DATA_ENTRY_WEEK_YEAR = "week_year"
DATA_ENTRY_WEEK_NUMBER = "week_number"
DATA_ENTRY_DAY_OF_WEEK = "day_of_week"

ENTRY_TYPE_GOAL = "goal"
ENTRY_TYPE_MEMORY = "memory"
ENTRY_TYPE_OPTIONS = [ENTRY_TYPE_GOAL, ENTRY_TYPE_MEMORY]

# ------------------------------------------------------------------------------------------------
# Special Date Categories
# ------------------------------------------------------------------------------------------------
CATEGORY_BIRTHDAY = "birthday"
CATEGORY_ANNIVERSARY = "anniversary"
CATEGORY_MEMORIAL = "memorial"
CATEGORY_FAMILY_BIRTHDAY = "family_birthday"
CATEGORY_FAMILY_ANNIVERSARY = "family_anniversary"
CATEGORY_WORK_ANNIVERSARY = "work_anniversary"
CATEGORY_ACHIEVEMENT = "achievement"
CATEGORY_RELIGIOUS = "religious"
CATEGORY_CULTURAL = "cultural"
CATEGORY_HEALTH = "health"
CATEGORY_TRAVEL = "travel"
CATEGORY_CUSTOM = "custom"

CATEGORY_OPTIONS = [
    CATEGORY_BIRTHDAY,
    CATEGORY_ANNIVERSARY,
    CATEGORY_MEMORIAL,
    CATEGORY_FAMILY_BIRTHDAY,
    CATEGORY_FAMILY_ANNIVERSARY,
    CATEGORY_WORK_ANNIVERSARY,
    CATEGORY_ACHIEVEMENT,
    CATEGORY_RELIGIOUS,
    CATEGORY_CULTURAL,
    CATEGORY_HEALTH,
    CATEGORY_TRAVEL,
    CATEGORY_CUSTOM,
]

CATEGORY_DISPLAY_NAMES = {
    CATEGORY_BIRTHDAY: "Birthday",
    CATEGORY_ANNIVERSARY: "Anniversary",
    CATEGORY_MEMORIAL: "Memorial",
    CATEGORY_FAMILY_BIRTHDAY: "Family Birthday",
    CATEGORY_FAMILY_ANNIVERSARY: "Family Anniversary",
    CATEGORY_WORK_ANNIVERSARY: "Work Anniversary",
    CATEGORY_ACHIEVEMENT: "Achievement",
    CATEGORY_RELIGIOUS: "Religious",
    CATEGORY_CULTURAL: "Cultural",
    CATEGORY_HEALTH: "Health",
    CATEGORY_TRAVEL: "Travel",
    CATEGORY_CUSTOM: "Custom",
}

CATEGORY_ICONS = {
    CATEGORY_BIRTHDAY: "mdi:gift",
    CATEGORY_ANNIVERSARY: "mdi:heart",
    CATEGORY_MEMORIAL: "mdi:candle",
    CATEGORY_FAMILY_BIRTHDAY: "mdi:human-male-female-child",
    CATEGORY_FAMILY_ANNIVERSARY: "mdi:home-heart",
    CATEGORY_WORK_ANNIVERSARY: "mdi:briefcase",
    CATEGORY_ACHIEVEMENT: "mdi:trophy",
    CATEGORY_RELIGIOUS: "mdi:hands-pray",
    CATEGORY_CULTURAL: "mdi:earth",
    CATEGORY_HEALTH: "mdi:heart-pulse",
    CATEGORY_TRAVEL: "mdi:airplane",
    CATEGORY_CUSTOM: "mdi:star",
}

# ------------------------------------------------------------------------------------------------
# Provenance
# ------------------------------------------------------------------------------------------------
PROVENANCE_SYSTEM = "system"
PROVENANCE_CUSTOM = "custom"

SYSTEM_KIND_BIRTHDAY = "birthday"
SYSTEM_KIND_ANNIVERSARY = "anniversary"
SYSTEM_KIND_SPOUSE_BIRTHDAY = "spouse_birthday"
SYSTEM_KIND_CHILD_BIRTHDAY = "child_birthday"
SYSTEM_KIND_PET_BIRTHDAY = "pet_birthday"
SYSTEM_KIND_GRADUATION = "graduation"

SYSTEM_KIND_OPTIONS = [
    SYSTEM_KIND_BIRTHDAY,
    SYSTEM_KIND_ANNIVERSARY,
    SYSTEM_KIND_SPOUSE_BIRTHDAY,
    SYSTEM_KIND_CHILD_BIRTHDAY,
    SYSTEM_KIND_PET_BIRTHDAY,
    SYSTEM_KIND_GRADUATION,
]

# Sub-kinds that only ever happen once
ONE_TIME_SYSTEM_KINDS = frozenset({SYSTEM_KIND_GRADUATION})

SYSTEM_KIND_CATEGORIES = {
    SYSTEM_KIND_BIRTHDAY: CATEGORY_BIRTHDAY,
    SYSTEM_KIND_ANNIVERSARY: CATEGORY_ANNIVERSARY,
    SYSTEM_KIND_SPOUSE_BIRTHDAY: CATEGORY_FAMILY_BIRTHDAY,
    SYSTEM_KIND_CHILD_BIRTHDAY: CATEGORY_FAMILY_BIRTHDAY,
    SYSTEM_KIND_PET_BIRTHDAY: CATEGORY_FAMILY_BIRTHDAY,
    SYSTEM_KIND_GRADUATION: CATEGORY_ACHIEVEMENT,
}

SYSTEM_ID_PREFIX = "system"

# Derived labels
LABEL_MY_BIRTHDAY = "My Birthday"
LABEL_WEDDING_ANNIVERSARY = "Our Wedding Anniversary"
LABEL_BIRTHDAY_FMT = "{}'s Birthday"
LABEL_GRADUATION_FMT = "Graduation from {}"

# Graduation is assumed to happen on June 1st of the graduation year
GRADUATION_MONTH = 6
GRADUATION_DAY = 1

# ------------------------------------------------------------------------------------------------
# Pets
# ------------------------------------------------------------------------------------------------
PET_TYPE_DOG = "dog"
PET_TYPE_CAT = "cat"
PET_TYPE_BIRD = "bird"
PET_TYPE_FISH = "fish"
PET_TYPE_HAMSTER = "hamster"
PET_TYPE_RABBIT = "rabbit"
PET_TYPE_OTHER = "other"

PET_TYPE_ICONS = {
    PET_TYPE_DOG: "mdi:dog",
    PET_TYPE_CAT: "mdi:cat",
    PET_TYPE_BIRD: "mdi:bird",
    PET_TYPE_FISH: "mdi:fish",
    PET_TYPE_HAMSTER: "mdi:rodent",
    PET_TYPE_RABBIT: "mdi:rabbit",
    PET_TYPE_OTHER: "mdi:paw",
}
PET_TYPE_OPTIONS = list(PET_TYPE_ICONS)

# ------------------------------------------------------------------------------------------------
# Frequencies and Lead Time
# ------------------------------------------------------------------------------------------------
FREQUENCY_NONE = "none"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_BIWEEKLY = "biweekly"
FREQUENCY_MONTHLY = "monthly"
FREQUENCY_YEARLY = "yearly"

FREQUENCY_OPTIONS = [
    FREQUENCY_NONE,
    FREQUENCY_WEEKLY,
    FREQUENCY_BIWEEKLY,
    FREQUENCY_MONTHLY,
    FREQUENCY_YEARLY,
]

TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

LEAD_TIME_UNIT_OPTIONS = [TIME_UNIT_DAYS, TIME_UNIT_WEEKS, TIME_UNIT_MONTHS]

# Upper bound for the lead-time magnitude of each unit
LEAD_TIME_MAX_VALUES = {
    TIME_UNIT_DAYS: 30,
    TIME_UNIT_WEEKS: 52,
    TIME_UNIT_MONTHS: 11,
}

# (unit, amount) advanced per frequency step
FREQUENCY_INTERVALS = {
    FREQUENCY_WEEKLY: (TIME_UNIT_WEEKS, 1),
    FREQUENCY_BIWEEKLY: (TIME_UNIT_WEEKS, 2),
    FREQUENCY_MONTHLY: (TIME_UNIT_MONTHS, 1),
    FREQUENCY_YEARLY: (TIME_UNIT_YEARS, 1),
}

# Safety limit for schedule walking
MAX_SCHEDULE_ITERATIONS = 5000

# Goal generation windows
SPECIAL_DATE_GOAL_YEARS_AHEAD = 5
LIFE_CALENDAR_MAX_YEARS = 90

# ------------------------------------------------------------------------------------------------
# Goal Lifecycle
# ------------------------------------------------------------------------------------------------
GOAL_STATE_ACTIVE = "active"
GOAL_STATE_COMPLETED = "completed"
GOAL_STATE_CONVERTED_TO_MEMORY = "converted_to_memory"

# ------------------------------------------------------------------------------------------------
# Countdown Labels
# ------------------------------------------------------------------------------------------------
LABEL_TODAY = "Today"
LABEL_TOMORROW = "Tomorrow"
LABEL_IN_DAYS_FMT = "In {} days"
LABEL_IN_WEEKS_FMT = "In {} week{}"
LABEL_IN_MONTHS_FMT = "In {} month{}"

DAYS_PER_WEEK = 7
DAYS_PER_LABEL_MONTH = 30

# ------------------------------------------------------------------------------------------------
# Notifications
# ------------------------------------------------------------------------------------------------
NOTIFY_DOMAIN = "notify"
NOTIFY_TITLE = "title"
NOTIFY_MESSAGE = "message"
NOTIFY_DATA = "data"
NOTIFY_TAG = "tag"

NOTIFICATION_TITLE_GOAL_REMINDER = "Goal Reminder"
NOTIFICATION_ID_SUFFIX = "-reminder"

AUTHORIZATION_AUTHORIZED = "authorized"
AUTHORIZATION_DENIED = "denied"
AUTHORIZATION_NOT_DETERMINED = "not_determined"

# ------------------------------------------------------------------------------------------------
# Events (dispatcher signal suffixes)
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_ENTRY_SAVED = "entry_saved"
SIGNAL_SUFFIX_ENTRY_DELETED = "entry_deleted"
SIGNAL_SUFFIX_SPECIAL_DATES_CHANGED = "special_dates_changed"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_UPDATE_PROFILE = "update_profile"
SERVICE_ADD_SPECIAL_DATE = "add_special_date"
SERVICE_UPDATE_SPECIAL_DATE = "update_special_date"
SERVICE_DELETE_SPECIAL_DATE = "delete_special_date"
SERVICE_ADD_SPECIAL_DATE_GOAL = "add_special_date_goal"
SERVICE_UPDATE_SPECIAL_DATE_GOAL = "update_special_date_goal"
SERVICE_DELETE_SPECIAL_DATE_GOAL = "delete_special_date_goal"
SERVICE_CREATE_ENTRY = "create_entry"
SERVICE_UPDATE_ENTRY = "update_entry"
SERVICE_COMPLETE_GOAL = "complete_goal"
SERVICE_DELETE_ENTRY = "delete_entry"
SERVICE_GET_SPECIAL_DATES = "get_special_dates"

SERVICES = [
    SERVICE_UPDATE_PROFILE,
    SERVICE_ADD_SPECIAL_DATE,
    SERVICE_UPDATE_SPECIAL_DATE,
    SERVICE_DELETE_SPECIAL_DATE,
    SERVICE_ADD_SPECIAL_DATE_GOAL,
    SERVICE_UPDATE_SPECIAL_DATE_GOAL,
    SERVICE_DELETE_SPECIAL_DATE_GOAL,
    SERVICE_CREATE_ENTRY,
    SERVICE_UPDATE_ENTRY,
    SERVICE_COMPLETE_GOAL,
    SERVICE_DELETE_ENTRY,
    SERVICE_GET_SPECIAL_DATES,
]

# Service fields
FIELD_CONFIG_ENTRY_ID = "config_entry_id"
FIELD_SPECIAL_DATE_ID = "special_date_id"
FIELD_ENTRY_ID = "entry_id"
FIELD_GOAL_TEMPLATE_ID = "goal_template_id"
FIELD_NAME = "name"
FIELD_DATE = "date"
FIELD_CATEGORY = "category"
FIELD_IS_RECURRING = "is_recurring"
FIELD_NOTES = "notes"
FIELD_TITLE = "title"
FIELD_DESCRIPTION = "description"
FIELD_ENTRY_TYPE = "entry_type"
FIELD_TARGET_DATE = "target_date"
FIELD_FREQUENCY = "frequency"
FIELD_END_DATE = "end_date"
FIELD_LEAD_TIME = "lead_time"
FIELD_LEAD_TIME_UNIT = "lead_time_unit"
FIELD_REMINDER_ENABLED = "reminder_enabled"
FIELD_CONVERT_TO_MEMORY = "convert_to_memory_when_passed"
FIELD_IS_ACTIVE = "is_active"
FIELD_TAGS = "tags"
FIELD_WITHIN_DAYS = "within_days"
FIELD_BIRTH_DATE = "birth_date"
FIELD_MARRIAGE_DATE = "marriage_date"
FIELD_SPOUSE_NAME = "spouse_name"
FIELD_SPOUSE_BIRTH_DATE = "spouse_birth_date"
FIELD_SCHOOL_NAME = "school_name"
FIELD_GRADUATION_YEAR = "graduation_year"
FIELD_DEGREE = "degree"
FIELD_CHILDREN = "children"
FIELD_PETS = "pets"
FIELD_PET_TYPE = "pet_type"
FIELD_BIRTHDAY = "birthday"

# Service response keys
RESPONSE_SPECIAL_DATES = "special_dates"
RESPONSE_SPECIAL_DATE_ID = "special_date_id"
RESPONSE_ENTRY_ID = "entry_id"
RESPONSE_GOAL_TEMPLATE_ID = "goal_template_id"
RESPONSE_GENERATED_ENTRY_IDS = "generated_entry_ids"
RESPONSE_DELETED_ENTRY_IDS = "deleted_entry_ids"

# ------------------------------------------------------------------------------------------------
# Coordinator snapshot keys
# ------------------------------------------------------------------------------------------------
SNAPSHOT_TODAY = "today"
SNAPSHOT_RECORDS = "records"
SNAPSHOT_TODAY_MATCHES = "today_matches"
SNAPSHOT_UPCOMING = "upcoming"
SNAPSHOT_OVERDUE_GOALS = "overdue_goals"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_KEY_NEXT_SPECIAL_DATE = "next_special_date"
SENSOR_KEY_TODAYS_SPECIAL_DATES = "todays_special_dates"
SENSOR_KEY_OVERDUE_GOALS = "overdue_goals"

ATTR_SPECIAL_DATE_NAME = "special_date_name"
ATTR_SPECIAL_DATE_DATE = "date"
ATTR_NEXT_OCCURRENCE = "next_occurrence"
ATTR_DAYS_UNTIL = "days_until"
ATTR_CATEGORY = "category"
ATTR_CATEGORY_NAME = "category_name"
ATTR_PROVENANCE = "provenance"
ATTR_ICON = "icon"
ATTR_LABEL = "label"
ATTR_SPECIAL_DATES = "special_dates"
ATTR_GOALS = "goals"
ATTR_UPCOMING = "upcoming"

ICON_NEXT_SPECIAL_DATE = "mdi:calendar-star"
ICON_TODAYS_SPECIAL_DATES = "mdi:calendar-today"
ICON_OVERDUE_GOALS = "mdi:flag-outline"

# ------------------------------------------------------------------------------------------------
# Errors and translation keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_INVALID_NAME = "invalid_name"
TRANS_KEY_INVALID_DATE = "invalid_date"
TRANS_KEY_INVALID_CATEGORY = "invalid_category"
TRANS_KEY_INVALID_FREQUENCY = "invalid_frequency"
TRANS_KEY_INVALID_LEAD_TIME = "invalid_lead_time"
TRANS_KEY_INVALID_LEAD_TIME_UNIT = "invalid_lead_time_unit"
TRANS_KEY_INVALID_END_DATE = "invalid_end_date"
TRANS_KEY_INVALID_RECURRENCE = "invalid_recurrence"
TRANS_KEY_INVALID_ENTRY_TYPE = "invalid_entry_type"
TRANS_KEY_INVALID_PET_TYPE = "invalid_pet_type"
TRANS_KEY_INVALID_REMINDER_TIME = "invalid_reminder_time"
TRANS_KEY_INVALID_NOTIFY_SERVICE = "invalid_notify_service"
TRANS_KEY_INVALID_GRADUATION_YEAR = "invalid_graduation_year"

TRANS_KEY_ERROR_SPECIAL_DATE_NOT_FOUND = "special_date_not_found"
TRANS_KEY_ERROR_ENTRY_NOT_FOUND = "entry_not_found"
TRANS_KEY_ERROR_GOAL_TEMPLATE_NOT_FOUND = "goal_template_not_found"
TRANS_KEY_ERROR_NOT_A_GOAL = "not_a_goal"
TRANS_KEY_ERROR_SYSTEM_DATE_READ_ONLY = "system_date_read_only"
TRANS_KEY_ERROR_NO_ENTRY_FOUND = "no_entry_found"
TRANS_KEY_ERROR_VALIDATION = "validation_error"

MSG_NO_ENTRY_FOUND = "No LifeDates entry found"

# Date formats
REMINDER_TIME_FORMAT = "%H:%M"
