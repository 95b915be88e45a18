"""Compile search criteria into composable recipe predicates.

The compiled filters are plain data: each one can be evaluated against a
``Recipe`` in memory, and the Supabase adapter translates the same filters
into PostgREST query operators. Interactive search pushes them down to the
store while the subscription matcher applies them to a small in-memory delta.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum

from recipe_discovery.domain.errors import InvalidCriteriaError
from recipe_discovery.domain.recipes import DifficultyLevel, Recipe
from recipe_discovery.domain.search import (
    DEFAULT_SORT_FIELD,
    SearchCriteria,
    SortDirection,
    SortOrder,
)

RecipePredicate = Callable[[Recipe], bool]

SORTABLE_FIELDS = frozenset(
    {
        "id",
        "title",
        "preparation_time",
        "cooking_time",
        "total_time",
        "difficulty_level",
        "servings",
        "created_at",
        "user_id",
    }
)

_logger = logging.getLogger(__name__)


class FilterOp(StrEnum):
    """Operators supported by compiled field filters."""

    ILIKE = "ilike"
    EQ = "eq"
    GTE = "gte"
    LTE = "lte"
    OVERLAPS = "ov"


@dataclass(frozen=True)
class FieldFilter:
    """A single predicate on one recipe column."""

    column: str
    op: FilterOp
    value: object

    def __call__(self, recipe: Recipe) -> bool:
        actual = getattr(recipe, self.column)
        if self.op is FilterOp.ILIKE:
            return str(self.value).lower() in str(actual).lower()
        if self.op is FilterOp.EQ:
            return actual == self.value
        if self.op is FilterOp.GTE:
            return actual >= self.value
        if self.op is FilterOp.LTE:
            return actual <= self.value
        return any(item in actual for item in self.value)


@dataclass(frozen=True)
class CompiledCriteria:
    """Filters, ordering and paging derived from ``SearchCriteria``."""

    filters: tuple[FieldFilter, ...]
    dropped_filters: tuple[str, ...]
    sort: SortOrder
    page: int
    size: int

    @property
    def predicate(self) -> RecipePredicate:
        """All filters combined with AND."""
        return all_of(*self.filters)

    def apply(self, recipes: Iterable[Recipe]) -> list[Recipe]:
        """Filter recipes in memory, keeping the first occurrence of each id."""
        predicate = self.predicate
        return [recipe for recipe in unique_recipes(recipes) if predicate(recipe)]


def all_of(*predicates: RecipePredicate) -> RecipePredicate:
    """Combine predicates with logical AND; no predicates matches everything."""

    def _all(recipe: Recipe) -> bool:
        return all(predicate(recipe) for predicate in predicates)

    return _all


def any_of(*predicates: RecipePredicate) -> RecipePredicate:
    """Combine predicates with logical OR; no predicates matches nothing."""

    def _any(recipe: Recipe) -> bool:
        return any(predicate(recipe) for predicate in predicates)

    return _any


def unique_recipes(recipes: Iterable[Recipe]) -> list[Recipe]:
    """Drop repeated recipes while keeping the original order."""
    seen: set[int] = set()
    unique = []
    for recipe in recipes:
        if recipe.id in seen:
            continue
        seen.add(recipe.id)
        unique.append(recipe)
    return unique


def compile_criteria(
    criteria: SearchCriteria, max_page_size: int | None = None
) -> CompiledCriteria:
    """Compile search criteria into filters, sort order and paging."""
    filters: list[FieldFilter] = []
    dropped: list[str] = []

    title = (criteria.title or "").strip()
    if title:
        filters.append(FieldFilter("title", FilterOp.ILIKE, title))

    difficulty = (criteria.difficulty_level or "").strip()
    if difficulty:
        level = parse_difficulty(difficulty)
        if level is None:
            dropped.append("difficulty_level")
            _logger.info("Ignoring unknown difficulty level filter")
        else:
            filters.append(FieldFilter("difficulty_level", FilterOp.EQ, level))

    if criteria.min_total_time is not None:
        filters.append(
            FieldFilter("total_time", FilterOp.GTE, criteria.min_total_time)
        )
    if criteria.max_total_time is not None:
        filters.append(
            FieldFilter("total_time", FilterOp.LTE, criteria.max_total_time)
        )
    if criteria.user_id is not None:
        filters.append(FieldFilter("user_id", FilterOp.EQ, criteria.user_id))
    if criteria.servings is not None:
        filters.append(FieldFilter("servings", FilterOp.EQ, criteria.servings))
    if criteria.ingredient_ids:
        filters.append(
            FieldFilter(
                "ingredient_ids", FilterOp.OVERLAPS, frozenset(criteria.ingredient_ids)
            )
        )
    if criteria.meal_type_ids:
        filters.append(
            FieldFilter(
                "meal_type_ids", FilterOp.OVERLAPS, frozenset(criteria.meal_type_ids)
            )
        )

    return CompiledCriteria(
        filters=tuple(filters),
        dropped_filters=tuple(dropped),
        sort=_resolve_sort(criteria.sort_by, criteria.sort_direction),
        page=_resolve_page(criteria.page),
        size=_resolve_size(criteria.size, max_page_size),
    )


def parse_difficulty(raw: str) -> DifficultyLevel | None:
    """Parse a difficulty level, returning None for unknown values."""
    try:
        return DifficultyLevel(raw.strip().upper())
    except ValueError:
        return None


def _resolve_sort(sort_by: str | None, sort_direction: str | None) -> SortOrder:
    column = (sort_by or "").strip() or DEFAULT_SORT_FIELD
    if column not in SORTABLE_FIELDS:
        raise InvalidCriteriaError(f"Unsupported sort field: {column}")
    direction = (sort_direction or "").strip().lower() or SortDirection.ASC
    if direction not in {SortDirection.ASC, SortDirection.DESC}:
        raise InvalidCriteriaError(f"Unsupported sort direction: {direction}")
    return SortOrder(column=column, descending=direction == SortDirection.DESC)


def _resolve_page(page: int) -> int:
    if page < 0:
        raise InvalidCriteriaError("Page index must not be negative")
    return page


def _resolve_size(size: int, max_page_size: int | None) -> int:
    if size < 1:
        raise InvalidCriteriaError("Page size must be positive")
    if max_page_size is not None:
        return min(size, max_page_size)
    return size


def count_active_filters(criteria: SearchCriteria) -> int:
    """Count the filters the caller supplied, before validation."""
    supplied = [
        bool((criteria.title or "").strip()),
        bool((criteria.difficulty_level or "").strip()),
        criteria.min_total_time is not None,
        criteria.max_total_time is not None,
        criteria.user_id is not None,
        criteria.servings is not None,
        bool(criteria.ingredient_ids),
        bool(criteria.meal_type_ids),
    ]
    return sum(supplied)
