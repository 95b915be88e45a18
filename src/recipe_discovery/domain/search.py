"""Domain models for recipe search criteria."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_FIELD = "title"


class SortDirection(StrEnum):
    """Sort direction for search results."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SearchCriteria:
    """Optional recipe filters plus pagination and sorting.

    Every filter field is optional; an absent or blank field does not narrow
    the result. ``difficulty_level`` is kept as the raw string the caller sent
    so that unparseable values can be dropped instead of rejected.
    """

    title: str | None = None
    ingredient_ids: frozenset[int] = field(default_factory=frozenset)
    difficulty_level: str | None = None
    min_total_time: int | None = None
    max_total_time: int | None = None
    user_id: UUID | None = None
    meal_type_ids: frozenset[int] = field(default_factory=frozenset)
    servings: int | None = None
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    sort_direction: str | None = None


@dataclass(frozen=True)
class SortOrder:
    """Resolved sort column and direction."""

    column: str
    descending: bool = False
