"""Shared constants for the task tracker."""

from enum import StrEnum


class Priority(StrEnum):
    """Task priority levels."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MotivationTier(StrEnum):
    """Progress tiers derived from the completion percentage."""

    PERFECT = "perfect"
    GREAT = "great"
    HALFWAY = "halfway"
    GOOD_START = "good_start"
    JUST_STARTED = "just_started"
    BEGIN = "begin"


MOTIVATIONAL_MESSAGES: dict[MotivationTier, str] = {
    MotivationTier.PERFECT: "Amazing! All tasks completed!",
    MotivationTier.GREAT: "Great progress! Keep it up!",
    MotivationTier.HALFWAY: "You're halfway there!",
    MotivationTier.GOOD_START: "Good start! Keep going!",
    MotivationTier.JUST_STARTED: "Every journey starts with a single step!",
    MotivationTier.BEGIN: "Time to start checking off those tasks!",
}

MIN_DESCRIPTION_LENGTH = 1
MAX_DESCRIPTION_LENGTH = 500

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TAG_PATTERN = r"^[a-zA-Z0-9_-]+$"

EXPORT_FILENAME = "todos-export-{date}.json"

PROGRESS_BAR_WIDTH = 20
BAR_FILLED = "#"
BAR_EMPTY = "-"
