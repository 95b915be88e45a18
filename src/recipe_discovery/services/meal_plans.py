"""Meal plan lookups and owner-checked changes."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from recipe_discovery.domain.errors import AccessDeniedError, NotFoundError
from recipe_discovery.domain.meal_plans import Frequency, MealPlan
from recipe_discovery.domain.notifications import (
    NewNotification,
    Notification,
    NotificationKind,
)
from recipe_discovery.services.clock import Clock, utc_now
from recipe_discovery.services.notifications import NotificationService


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def create_plan(  # noqa: PLR0913
        self,
        user_id: UUID,
        title: str,
        frequency: Frequency,
        start_date: date,
        end_date: date,
        meals_per_day: int,
    ) -> MealPlan:
        """Persist a meal plan and return it."""

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        """Return a meal plan by id, if present."""

    def list_by_user(self, user_id: UUID) -> list[MealPlan]:
        """Return the meal plans owned by a user."""

    def update_frequency(self, meal_plan_id: UUID, frequency: Frequency) -> MealPlan:
        """Change a plan's reminder frequency and return the updated plan."""


@dataclass
class MealPlanService:
    """Application service for meal plans."""

    repository: MealPlanRepository
    notification_service: NotificationService
    clock: Clock = utc_now

    def create_plan(  # noqa: PLR0913
        self,
        user_id: UUID,
        title: str,
        frequency: Frequency,
        start_date: date,
        end_date: date,
        meals_per_day: int = 3,
    ) -> MealPlan:
        """Create a meal plan for a user."""
        if end_date < start_date:
            raise ValueError("Meal plan must not end before it starts")
        return self.repository.create_plan(
            user_id, title, frequency, start_date, end_date, meals_per_day
        )

    def list_plans(self, user_id: UUID) -> list[MealPlan]:
        """Return the user's meal plans."""
        return self.repository.list_by_user(user_id)

    def get_plan(self, user_id: UUID, meal_plan_id: UUID) -> MealPlan:
        """Return a plan owned by the acting user."""
        plan = self.repository.get_plan(meal_plan_id)
        if plan is None:
            raise NotFoundError("Meal plan", meal_plan_id)
        if plan.user_id != user_id:
            raise AccessDeniedError("Meal plan belongs to another user")
        return plan

    def change_frequency(
        self, user_id: UUID, meal_plan_id: UUID, frequency: Frequency
    ) -> MealPlan:
        """Change the reminder frequency of an owned plan."""
        self.get_plan(user_id, meal_plan_id)
        return self.repository.update_frequency(meal_plan_id, frequency)

    def create_reminder(self, user_id: UUID, meal_plan_id: UUID) -> Notification:
        """Create an unread reminder for an owned plan right away.

        The reminder sweep only fires for plans that already have a reminder,
        so this is how a plan receives its first one.
        """
        plan = self.get_plan(user_id, meal_plan_id)
        return self.notification_service.create(reminder_for(plan, self.clock()))


def reminder_for(plan: MealPlan, now: datetime) -> NewNotification:
    """Build the reminder notification for a meal plan."""
    cadence = plan.frequency.value.replace("_", "-").lower()
    return NewNotification(
        user_id=plan.user_id,
        kind=NotificationKind.MEAL_PLAN_REMINDER,
        title=plan.title,
        message=(
            f"Time to review your {cadence} meal plan '{plan.title}' "
            f"({plan.start_date.isoformat()} to {plan.end_date.isoformat()}, "
            f"{plan.meals_per_day} meals per day)."
        ),
        created_at=now,
        meal_plan_id=plan.id,
    )
