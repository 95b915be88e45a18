"""Cached dietary-restriction based recipe recommendations."""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from uuid import UUID

from recipe_discovery.domain.recipes import Recipe
from recipe_discovery.services.cache import Cache, InMemoryCache
from recipe_discovery.services.search import RecipeRepository
from recipe_discovery.services.users import UserService

RECOMMENDATION_MAX_AGE = timedelta(hours=24)

_logger = logging.getLogger(__name__)


@dataclass
class RecommendationService:
    """Serves per-user recommendations from a time-windowed cache.

    A recipe is recommended only when its dietary restriction tags cover every
    restriction the user holds. The cache is process-local, so separate
    service instances refresh independently.
    """

    recipe_repository: RecipeRepository
    user_service: UserService
    cache: Cache[UUID, tuple[Recipe, ...]] = field(
        default_factory=lambda: InMemoryCache(RECOMMENDATION_MAX_AGE)
    )

    def get_recommended_recipes(self, user_id: UUID) -> list[Recipe]:
        """Return cached recommendations, recomputing stale or missing entries."""
        entry = self.cache.get(user_id)
        if entry is not None:
            return list(entry.value)
        return self.refresh(user_id)

    def refresh(self, user_id: UUID) -> list[Recipe]:
        """Recompute and store recommendations for one user."""
        user = self.user_service.get_user(user_id)
        if user.dietary_restriction_ids:
            recipes = self.recipe_repository.list_covering_restrictions(
                user.dietary_restriction_ids
            )
        else:
            recipes = self.recipe_repository.list_recipes()
        covering = tuple(
            recipe
            for recipe in recipes
            if user.dietary_restriction_ids <= recipe.dietary_restriction_ids
        )
        self.cache.set(user_id, covering)
        return list(covering)

    def refresh_all(self) -> int:
        """Recompute recommendations for every user; returns users refreshed."""
        refreshed = 0
        for user in self.user_service.list_users():
            try:
                self.refresh(user.id)
            except Exception:
                _logger.exception("Failed to refresh recommendations for %s", user.id)
                continue
            refreshed += 1
        _logger.info("Refreshed recommendations for %s users", refreshed)
        return refreshed
