"""Domain models for notifications."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class NotificationKind(StrEnum):
    """Source of a notification."""

    SEARCH_MATCH = "SEARCH_MATCH"
    MEAL_PLAN_REMINDER = "MEAL_PLAN_REMINDER"


@dataclass(frozen=True)
class NewNotification:
    """Payload for creating a notification."""

    user_id: UUID
    kind: NotificationKind
    title: str
    message: str
    created_at: datetime
    recipe_id: int | None = None
    meal_plan_id: UUID | None = None


@dataclass(frozen=True)
class Notification:
    """A persisted notification owned by a single user."""

    id: UUID
    user_id: UUID
    kind: NotificationKind
    title: str
    message: str
    created_at: datetime
    read: bool = False
    recipe_id: int | None = None
    meal_plan_id: UUID | None = None


@dataclass(frozen=True)
class NotificationPreferences:
    """Per-user notification switches."""

    user_id: UUID
    enabled: bool = False
    recipe_recommendation: bool = False
    meal_plan_reminder: bool = False

    @property
    def reminders_enabled(self) -> bool:
        """Return True when meal plan reminders should be generated."""
        return self.enabled and self.meal_plan_reminder
