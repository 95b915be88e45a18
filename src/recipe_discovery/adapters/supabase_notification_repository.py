"""Supabase repository for notifications."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from recipe_discovery.domain.notifications import (
    NewNotification,
    Notification,
    NotificationKind,
)
from recipe_discovery.services.notifications import NotificationRepository

_COLUMNS = "id, user_id, kind, title, message, recipe_id, meal_plan_id, read, created_at"


@dataclass
class SupabaseNotificationRepository(NotificationRepository):
    """Supabase implementation for the notification sink."""

    client: Client

    def create_notification(self, notification: NewNotification) -> Notification:
        """Insert a notification row and return it."""
        response = (
            self.client.table("notifications")
            .insert(
                {
                    "user_id": str(notification.user_id),
                    "kind": notification.kind.value,
                    "title": notification.title,
                    "message": notification.message,
                    "recipe_id": notification.recipe_id,
                    "meal_plan_id": str(notification.meal_plan_id)
                    if notification.meal_plan_id
                    else None,
                    "read": False,
                    "created_at": notification.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create notification")
        return _parse_notification(response.data[0])

    def get_notification(self, notification_id: UUID) -> Notification | None:
        """Return a notification by id, if present."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("id", str(notification_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_notification(response.data[0])

    def list_by_user(self, user_id: UUID) -> list[Notification]:
        """Return a user's notifications, newest first."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_notification(row) for row in response.data or []]

    def list_unread_by_user(self, user_id: UUID) -> list[Notification]:
        """Return a user's unread notifications, newest first."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("read", False)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_notification(row) for row in response.data or []]

    def count_unread(self, user_id: UUID) -> int:
        """Return the number of unread notifications."""
        response = (
            self.client.table("notifications")
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .eq("read", False)
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def mark_read(self, notification_id: UUID) -> None:
        """Flag a notification as read."""
        self.client.table("notifications").update({"read": True}).eq(
            "id", str(notification_id)
        ).execute()

    def mark_all_read(self, user_id: UUID) -> int:
        """Flag every unread notification of a user as read."""
        response = (
            self.client.table("notifications")
            .update({"read": True})
            .eq("user_id", str(user_id))
            .eq("read", False)
            .execute()
        )
        return len(response.data or [])

    def list_for_meal_plan(self, meal_plan_id: UUID) -> list[Notification]:
        """Return notifications referencing a meal plan, newest first."""
        response = (
            self.client.table("notifications")
            .select(_COLUMNS)
            .eq("meal_plan_id", str(meal_plan_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_notification(row) for row in response.data or []]


def _parse_notification(row: dict[str, object]) -> Notification:
    recipe_id = row.get("recipe_id")
    meal_plan_id = row.get("meal_plan_id")
    return Notification(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        kind=NotificationKind(str(row["kind"])),
        title=str(row.get("title", "")),
        message=str(row.get("message", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        read=bool(row.get("read")),
        recipe_id=int(recipe_id) if recipe_id is not None else None,
        meal_plan_id=UUID(str(meal_plan_id)) if meal_plan_id else None,
    )
