"""Pydantic models for API request payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from recipe_discovery.domain.meal_plans import Frequency
from recipe_discovery.domain.search import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SearchCriteria,
)


class SearchCriteriaPayload(BaseModel):
    """Recipe search request body."""

    title: str | None = None
    ingredient_ids: list[int] = Field(default_factory=list)
    difficulty_level: str | None = None
    min_total_time: int | None = Field(default=None, ge=0)
    max_total_time: int | None = Field(default=None, ge=0)
    user_id: UUID | None = None
    meal_type_ids: list[int] = Field(default_factory=list)
    servings: int | None = Field(default=None, ge=1)
    page: int = Field(default=DEFAULT_PAGE, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str | None = None
    sort_direction: str | None = None

    def to_criteria(self) -> SearchCriteria:
        """Convert the payload into domain criteria."""
        return SearchCriteria(
            title=self.title,
            ingredient_ids=frozenset(self.ingredient_ids),
            difficulty_level=self.difficulty_level,
            min_total_time=self.min_total_time,
            max_total_time=self.max_total_time,
            user_id=self.user_id,
            meal_type_ids=frozenset(self.meal_type_ids),
            servings=self.servings,
            page=self.page,
            size=self.size,
            sort_by=self.sort_by,
            sort_direction=self.sort_direction,
        )


class SubscriptionPayload(BaseModel):
    """Subscription creation request body."""

    search_criteria: SearchCriteriaPayload


class PreferencesPayload(BaseModel):
    """Notification preferences update body."""

    enabled: bool
    recipe_recommendation: bool = False
    meal_plan_reminder: bool = False


class MealPlanPayload(BaseModel):
    """Meal plan creation request body."""

    title: str = Field(min_length=1)
    frequency: Frequency
    start_date: date
    end_date: date
    meals_per_day: int = Field(default=3, ge=1)


class MealPlanUpdatePayload(BaseModel):
    """Meal plan frequency change body."""

    frequency: Frequency
