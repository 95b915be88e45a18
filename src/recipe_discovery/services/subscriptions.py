"""Saved search subscriptions and the periodic subscription matcher."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from recipe_discovery.domain.errors import AccessDeniedError, NotFoundError
from recipe_discovery.domain.notifications import NewNotification, NotificationKind
from recipe_discovery.domain.recipes import Recipe
from recipe_discovery.domain.search import SearchCriteria
from recipe_discovery.domain.subscriptions import MatchRunSummary, Subscription
from recipe_discovery.services.clock import Clock, utc_now
from recipe_discovery.services.criteria import compile_criteria
from recipe_discovery.services.criteria_codec import decode_criteria, encode_criteria
from recipe_discovery.services.notifications import NotificationService
from recipe_discovery.services.search import RecipeRepository
from recipe_discovery.services.users import UserService

SEARCH_MATCH_TITLE = "New recipes for your saved search"

_logger = logging.getLogger(__name__)


class SubscriptionRepository(Protocol):
    """Persistence interface for search subscriptions."""

    def create_subscription(
        self, user_id: UUID, criteria_blob: str, created_at: datetime
    ) -> Subscription:
        """Persist a subscription and return it."""

    def get_subscription(self, subscription_id: UUID) -> Subscription | None:
        """Return a subscription by id, if present."""

    def list_subscriptions(self) -> list[Subscription]:
        """Return every subscription."""

    def list_by_user(self, user_id: UUID) -> list[Subscription]:
        """Return the subscriptions owned by a user."""

    def delete_subscription(self, subscription_id: UUID) -> None:
        """Delete a subscription."""

    def update_last_notified(
        self, subscription_id: UUID, last_notified: datetime
    ) -> None:
        """Store a new watermark for a subscription."""


@dataclass
class SubscriptionService:
    """Manages subscriptions and re-evaluates them against new recipes."""

    repository: SubscriptionRepository
    recipe_repository: RecipeRepository
    notification_service: NotificationService
    user_service: UserService
    clock: Clock = utc_now

    def create_subscription(
        self, user_id: UUID, criteria: SearchCriteria
    ) -> Subscription:
        """Save a search for a user."""
        self.user_service.get_user(user_id)
        compile_criteria(criteria)
        return self.repository.create_subscription(
            user_id, encode_criteria(criteria), created_at=self.clock()
        )

    def list_subscriptions(self, user_id: UUID) -> list[Subscription]:
        """Return the user's subscriptions."""
        return self.repository.list_by_user(user_id)

    def delete_subscription(self, user_id: UUID, subscription_id: UUID) -> None:
        """Delete a subscription owned by the acting user."""
        subscription = self.repository.get_subscription(subscription_id)
        if subscription is None:
            raise NotFoundError("Subscription", subscription_id)
        if subscription.user_id != user_id:
            raise AccessDeniedError("Subscription belongs to another user")
        self.repository.delete_subscription(subscription_id)

    def run_once(self, now: datetime | None = None) -> MatchRunSummary:
        """Evaluate every subscription against recipes created since its watermark."""
        run_at = now or self.clock()
        processed = notified = skipped = 0
        for subscription in self.repository.list_subscriptions():
            try:
                matched = self._process(subscription, run_at)
            except Exception:
                _logger.exception("Error processing subscription %s", subscription.id)
                skipped += 1
                continue
            processed += 1
            if matched:
                notified += 1
        summary = MatchRunSummary(processed=processed, notified=notified, skipped=skipped)
        _logger.info(
            "Subscription match run: processed=%s notified=%s skipped=%s",
            summary.processed,
            summary.notified,
            summary.skipped,
        )
        return summary

    def _process(self, subscription: Subscription, now: datetime) -> bool:
        criteria = decode_criteria(subscription.criteria_blob)
        compiled = compile_criteria(criteria)
        watermark = subscription.watermark
        if now <= watermark:
            return False
        new_recipes = self.recipe_repository.list_created_between(watermark, now)
        matches = compiled.apply(
            recipe for recipe in new_recipes if watermark < recipe.created_at <= now
        )
        if not matches:
            return False

        self.notification_service.create(_match_notification(subscription, matches, now))
        self.repository.update_last_notified(subscription.id, now)
        return True


def _match_notification(
    subscription: Subscription, matches: list[Recipe], now: datetime
) -> NewNotification:
    if len(matches) == 1:
        recipe = matches[0]
        return NewNotification(
            user_id=subscription.user_id,
            kind=NotificationKind.SEARCH_MATCH,
            title=SEARCH_MATCH_TITLE,
            message=f"New recipe found: {recipe.title}",
            created_at=now,
            recipe_id=recipe.id,
        )
    return NewNotification(
        user_id=subscription.user_id,
        kind=NotificationKind.SEARCH_MATCH,
        title=SEARCH_MATCH_TITLE,
        message=f"{len(matches)} new recipes match your search criteria",
        created_at=now,
    )
