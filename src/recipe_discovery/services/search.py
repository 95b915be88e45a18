"""Recipe search service."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from recipe_discovery.domain.errors import NotFoundError
from recipe_discovery.domain.recipes import Recipe, RecipePage
from recipe_discovery.domain.search import SearchCriteria, SortOrder
from recipe_discovery.services.criteria import (
    FieldFilter,
    compile_criteria,
    count_active_filters,
    unique_recipes,
)

_LOG_SAFE = re.compile(r"[^a-zA-Z0-9 .,;:!?'\"()-]")
_LOG_MAX_LENGTH = 50

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for the recipe catalog."""

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""

    def list_recipes(self) -> list[Recipe]:
        """Return every recipe."""

    def list_created_between(
        self, after: datetime, until: datetime
    ) -> list[Recipe]:
        """Return recipes created strictly after ``after`` and up to ``until``."""

    def search(
        self,
        filters: tuple[FieldFilter, ...],
        sort: SortOrder,
        page: int,
        size: int,
    ) -> tuple[list[Recipe], int]:
        """Return one page of matching recipes and the total match count."""

    def list_covering_restrictions(
        self, restriction_ids: frozenset[int]
    ) -> list[Recipe]:
        """Return recipes tagged with every one of the given restrictions."""


@dataclass
class RecipeSearchService:
    """Application service for interactive recipe search."""

    repository: RecipeRepository
    max_page_size: int = 100

    def search(self, criteria: SearchCriteria) -> RecipePage:
        """Run a paged, sorted search for the supplied criteria."""
        _logger.info(
            "Recipe search: title=%r filters=%s page=%s sort=%s",
            sanitize_for_log(criteria.title),
            count_active_filters(criteria),
            criteria.page,
            sanitize_for_log(criteria.sort_by),
        )
        compiled = compile_criteria(criteria, max_page_size=self.max_page_size)
        recipes, total = self.repository.search(
            compiled.filters, compiled.sort, compiled.page, compiled.size
        )
        return RecipePage(
            content=unique_recipes(recipes),
            total=total,
            page=compiled.page,
            size=compiled.size,
            dropped_filters=compiled.dropped_filters,
        )

    def get_recipe(self, recipe_id: int) -> Recipe:
        """Return a recipe or raise ``NotFoundError``."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe


def sanitize_for_log(value: str | None) -> str | None:
    """Strip characters that could forge log lines and truncate."""
    if value is None:
        return None
    return _LOG_SAFE.sub("_", value)[:_LOG_MAX_LENGTH]
