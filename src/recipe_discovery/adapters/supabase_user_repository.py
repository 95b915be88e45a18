"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from recipe_discovery.domain.models import UserRecord
from recipe_discovery.domain.notifications import NotificationPreferences
from recipe_discovery.services.users import UserRepository

_USER_COLUMNS = "id, email, dietary_restriction_ids"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user lookups."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        response = self.client.table("users").select(_USER_COLUMNS).execute()
        return [_parse_user(row) for row in response.data or []]

    def get_preferences(self, user_id: UUID) -> NotificationPreferences | None:
        """Return notification preferences for a user, if stored."""
        response = (
            self.client.table("notification_preferences")
            .select("user_id, enabled, recipe_recommendation, meal_plan_reminder")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return NotificationPreferences(
            user_id=UUID(str(row["user_id"])),
            enabled=bool(row.get("enabled")),
            recipe_recommendation=bool(row.get("recipe_recommendation")),
            meal_plan_reminder=bool(row.get("meal_plan_reminder")),
        )

    def save_preferences(self, preferences: NotificationPreferences) -> None:
        """Insert or replace the preferences row for a user."""
        self.client.table("notification_preferences").upsert(
            {
                "user_id": str(preferences.user_id),
                "enabled": preferences.enabled,
                "recipe_recommendation": preferences.recipe_recommendation,
                "meal_plan_reminder": preferences.meal_plan_reminder,
            },
            on_conflict="user_id",
        ).execute()


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row.get("email", "")),
        dietary_restriction_ids=frozenset(row.get("dietary_restriction_ids") or ()),
    )
