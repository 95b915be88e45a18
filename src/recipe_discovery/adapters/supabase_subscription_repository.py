"""Supabase repository for search subscriptions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from recipe_discovery.domain.subscriptions import Subscription
from recipe_discovery.services.subscriptions import SubscriptionRepository

_TABLE = "recipe_search_subscriptions"
_COLUMNS = "id, user_id, search_criteria, created_at, last_notified"


@dataclass
class SupabaseSubscriptionRepository(SubscriptionRepository):
    """Supabase implementation for subscriptions."""

    client: Client

    def create_subscription(
        self, user_id: UUID, criteria_blob: str, created_at: datetime
    ) -> Subscription:
        """Create a subscription row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "search_criteria": criteria_blob,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create subscription")
        return _parse_subscription(response.data[0])

    def get_subscription(self, subscription_id: UUID) -> Subscription | None:
        """Return a subscription by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(subscription_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_subscription(response.data[0])

    def list_subscriptions(self) -> list[Subscription]:
        """Return every subscription."""
        response = self.client.table(_TABLE).select(_COLUMNS).execute()
        return [_parse_subscription(row) for row in response.data or []]

    def list_by_user(self, user_id: UUID) -> list[Subscription]:
        """Return subscriptions owned by a user, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_subscription(row) for row in response.data or []]

    def delete_subscription(self, subscription_id: UUID) -> None:
        """Delete a subscription row."""
        self.client.table(_TABLE).delete().eq("id", str(subscription_id)).execute()

    def update_last_notified(
        self, subscription_id: UUID, last_notified: datetime
    ) -> None:
        """Advance the watermark, never moving it backwards."""
        (
            self.client.table(_TABLE)
            .update({"last_notified": last_notified.isoformat()})
            .eq("id", str(subscription_id))
            .or_(f"last_notified.is.null,last_notified.lt.{last_notified.isoformat()}")
            .execute()
        )


def _parse_subscription(row: dict[str, object]) -> Subscription:
    last_notified_raw = row.get("last_notified")
    return Subscription(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        criteria_blob=str(row.get("search_criteria", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        last_notified=datetime.fromisoformat(last_notified_raw)
        if isinstance(last_notified_raw, str) and last_notified_raw
        else None,
    )
