"""Domain models for meal plans."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class Frequency(StrEnum):
    """How often a meal plan should be revisited."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


@dataclass(frozen=True)
class MealPlan:
    """Represents a user's meal plan."""

    id: UUID
    user_id: UUID
    title: str
    frequency: Frequency
    start_date: date
    end_date: date
    meals_per_day: int = 3


@dataclass(frozen=True)
class ReminderRunSummary:
    """Outcome of one reminder sweep."""

    users: int = 0
    plans: int = 0
    reminders: int = 0
    skipped: int = 0
