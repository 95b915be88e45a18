"""Notification sink and user-facing notification actions."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_discovery.domain.errors import AccessDeniedError, NotFoundError
from recipe_discovery.domain.notifications import NewNotification, Notification


class NotificationRepository(Protocol):
    """Persistence interface for notifications."""

    def create_notification(self, notification: NewNotification) -> Notification:
        """Persist a notification and return it."""

    def get_notification(self, notification_id: UUID) -> Notification | None:
        """Return a notification by id, if present."""

    def list_by_user(self, user_id: UUID) -> list[Notification]:
        """Return a user's notifications, newest first."""

    def list_unread_by_user(self, user_id: UUID) -> list[Notification]:
        """Return a user's unread notifications, newest first."""

    def count_unread(self, user_id: UUID) -> int:
        """Return the number of unread notifications for a user."""

    def mark_read(self, notification_id: UUID) -> None:
        """Flag a single notification as read."""

    def mark_all_read(self, user_id: UUID) -> int:
        """Flag every unread notification of a user as read; returns the count."""

    def list_for_meal_plan(self, meal_plan_id: UUID) -> list[Notification]:
        """Return notifications that reference a meal plan."""


@dataclass
class NotificationService:
    """Application service for notifications."""

    repository: NotificationRepository

    def create(self, notification: NewNotification) -> Notification:
        """Persist a new unread notification."""
        return self.repository.create_notification(notification)

    def list_for_user(self, user_id: UUID) -> list[Notification]:
        """Return every notification for a user."""
        return self.repository.list_by_user(user_id)

    def list_unread(self, user_id: UUID) -> list[Notification]:
        """Return unread notifications for a user."""
        return self.repository.list_unread_by_user(user_id)

    def count_unread(self, user_id: UUID) -> int:
        """Return the unread notification count for a user."""
        return self.repository.count_unread(user_id)

    def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """Mark one of the user's notifications as read."""
        notification = self.repository.get_notification(notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        if notification.user_id != user_id:
            raise AccessDeniedError("Notification belongs to another user")
        if not notification.read:
            self.repository.mark_read(notification_id)

    def mark_all_read(self, user_id: UUID) -> int:
        """Mark all of a user's notifications as read. Safe to repeat."""
        return self.repository.mark_all_read(user_id)

    def latest_for_meal_plan(self, meal_plan_id: UUID) -> Notification | None:
        """Return the most recently created notification for a meal plan."""
        history = self.repository.list_for_meal_plan(meal_plan_id)
        if not history:
            return None
        return max(history, key=lambda item: item.created_at)
