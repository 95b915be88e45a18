"""Domain models for recipes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class DifficultyLevel(StrEnum):
    """Difficulty level of a recipe."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


@dataclass(frozen=True)
class Recipe:
    """Represents a recipe stored in the catalog."""

    id: int
    user_id: UUID
    title: str
    preparation_time: int
    cooking_time: int
    difficulty_level: DifficultyLevel
    servings: int
    created_at: datetime
    steps: str = ""
    ingredient_ids: frozenset[int] = field(default_factory=frozenset)
    meal_type_ids: frozenset[int] = field(default_factory=frozenset)
    dietary_restriction_ids: frozenset[int] = field(default_factory=frozenset)

    @property
    def total_time(self) -> int:
        """Preparation plus cooking time in minutes."""
        return self.preparation_time + self.cooking_time


@dataclass(frozen=True)
class RecipePage:
    """A page of recipe search results."""

    content: list[Recipe]
    total: int
    page: int
    size: int
    dropped_filters: tuple[str, ...] = ()
