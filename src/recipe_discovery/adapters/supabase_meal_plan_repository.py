"""Supabase repository for meal plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from recipe_discovery.domain.meal_plans import Frequency, MealPlan
from recipe_discovery.services.meal_plans import MealPlanRepository

_COLUMNS = "id, user_id, title, frequency, start_date, end_date, meals_per_day"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans."""

    client: Client

    def create_plan(  # noqa: PLR0913
        self,
        user_id: UUID,
        title: str,
        frequency: Frequency,
        start_date: date,
        end_date: date,
        meals_per_day: int,
    ) -> MealPlan:
        """Create a meal plan row and return it."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": title,
                    "frequency": frequency.value,
                    "start_date": start_date.isoformat(),
                    "end_date": end_date.isoformat(),
                    "meals_per_day": meals_per_day,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return _parse_plan(response.data[0])

    def get_plan(self, meal_plan_id: UUID) -> MealPlan | None:
        """Return a meal plan by id, if present."""
        response = (
            self.client.table("meal_plans")
            .select(_COLUMNS)
            .eq("id", str(meal_plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_by_user(self, user_id: UUID) -> list[MealPlan]:
        """Return a user's meal plans ordered by start date."""
        response = (
            self.client.table("meal_plans")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("start_date", desc=False)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def update_frequency(self, meal_plan_id: UUID, frequency: Frequency) -> MealPlan:
        """Update the frequency of a plan and return it."""
        response = (
            self.client.table("meal_plans")
            .update({"frequency": frequency.value})
            .eq("id", str(meal_plan_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal plan")
        return _parse_plan(response.data[0])


def _parse_plan(row: dict[str, object]) -> MealPlan:
    return MealPlan(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        frequency=Frequency(str(row["frequency"])),
        start_date=date.fromisoformat(str(row["start_date"])[:10]),
        end_date=date.fromisoformat(str(row["end_date"])[:10]),
        meals_per_day=int(row.get("meals_per_day") or 3),
    )
