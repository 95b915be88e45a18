"""User lookups and notification preferences."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from recipe_discovery.domain.errors import NotFoundError
from recipe_discovery.domain.models import UserRecord
from recipe_discovery.domain.notifications import NotificationPreferences


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by email, if present."""

    def list_users(self) -> list[UserRecord]:
        """Return all users."""

    def get_preferences(self, user_id: UUID) -> NotificationPreferences | None:
        """Return stored notification preferences, if any."""

    def save_preferences(self, preferences: NotificationPreferences) -> None:
        """Create or replace notification preferences."""


@dataclass
class UserService:
    """Application service for user lookups."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise ``NotFoundError``."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with ``email``, if any."""
        return self.repository.get_by_email(email.strip().lower())

    def list_users(self) -> list[UserRecord]:
        """Return every user."""
        return self.repository.list_users()

    def get_preferences(self, user_id: UUID) -> NotificationPreferences:
        """Return preferences, defaulting to everything disabled."""
        stored = self.repository.get_preferences(user_id)
        return stored or NotificationPreferences(user_id=user_id)

    def update_preferences(self, preferences: NotificationPreferences) -> None:
        """Persist preferences for an existing user."""
        self.get_user(preferences.user_id)
        self.repository.save_preferences(preferences)
