"""Supabase repository for the recipe catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from supabase import Client

from recipe_discovery.domain.recipes import DifficultyLevel, Recipe
from recipe_discovery.domain.search import SortOrder
from recipe_discovery.services.criteria import FieldFilter, FilterOp
from recipe_discovery.services.search import RecipeRepository

_COLUMNS = (
    "id, user_id, title, preparation_time, cooking_time, difficulty_level, "
    "servings, steps, ingredient_ids, meal_type_ids, dietary_restriction_ids, "
    "created_at"
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe catalog.

    Ingredient, meal type and dietary restriction ids are stored as integer
    array columns and ``total_time`` as a generated column, so every compiled
    filter maps onto a single-table PostgREST operator.
    """

    client: Client

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(_COLUMNS)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe."""
        response = self.client.table("recipes").select(_COLUMNS).execute()
        return [_parse_recipe(row) for row in response.data or []]

    def list_created_between(self, after: datetime, until: datetime) -> list[Recipe]:
        """Return recipes created in the half-open window (after, until]."""
        response = (
            self.client.table("recipes")
            .select(_COLUMNS)
            .gt("created_at", after.isoformat())
            .lte("created_at", until.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def search(
        self,
        filters: tuple[FieldFilter, ...],
        sort: SortOrder,
        page: int,
        size: int,
    ) -> tuple[list[Recipe], int]:
        """Return one page of recipes matching all filters and the total count."""
        query = self.client.table("recipes").select(_COLUMNS, count="exact")
        for field_filter in filters:
            query = _apply_filter(query, field_filter)
        query = query.order(sort.column, desc=sort.descending)
        if sort.column != "id":
            query = query.order("id", desc=False)
        start = page * size
        response = query.range(start, start + size - 1).execute()
        recipes = [_parse_recipe(row) for row in response.data or []]
        total = response.count if response.count is not None else len(recipes)
        return recipes, total

    def list_covering_restrictions(
        self, restriction_ids: frozenset[int]
    ) -> list[Recipe]:
        """Return recipes whose restriction tags contain every given id."""
        query = self.client.table("recipes").select(_COLUMNS)
        if restriction_ids:
            query = query.contains("dietary_restriction_ids", sorted(restriction_ids))
        response = query.order("title", desc=False).execute()
        return [_parse_recipe(row) for row in response.data or []]


def _apply_filter(query, field_filter: FieldFilter):  # type: ignore[no-untyped-def]
    """Translate a compiled filter into a PostgREST operator."""
    value = field_filter.value
    if field_filter.op is FilterOp.ILIKE:
        return query.ilike(field_filter.column, f"%{_escape_like(str(value))}%")
    if field_filter.op is FilterOp.GTE:
        return query.gte(field_filter.column, value)
    if field_filter.op is FilterOp.LTE:
        return query.lte(field_filter.column, value)
    if field_filter.op is FilterOp.OVERLAPS:
        return query.ov(field_filter.column, sorted(value))
    return query.eq(field_filter.column, _wire_value(value))


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _wire_value(value: object) -> object:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    return Recipe(
        id=int(row["id"]),
        user_id=UUID(str(row["user_id"])),
        title=str(row.get("title", "")),
        preparation_time=int(row.get("preparation_time") or 0),
        cooking_time=int(row.get("cooking_time") or 0),
        difficulty_level=DifficultyLevel(str(row["difficulty_level"])),
        servings=int(row.get("servings") or 0),
        steps=str(row.get("steps") or ""),
        ingredient_ids=frozenset(row.get("ingredient_ids") or ()),
        meal_type_ids=frozenset(row.get("meal_type_ids") or ()),
        dietary_restriction_ids=frozenset(row.get("dietary_restriction_ids") or ()),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
