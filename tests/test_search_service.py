"""Tests for recipe search service."""

import pytest

from recipe_discovery.domain.errors import NotFoundError
from recipe_discovery.domain.recipes import DifficultyLevel
from recipe_discovery.domain.search import SearchCriteria
from recipe_discovery.services.search import RecipeSearchService, sanitize_for_log
from tests.conftest import InMemoryRecipeRepository, make_recipe


def build_service() -> RecipeSearchService:
    repository = InMemoryRecipeRepository()
    repository.add(
        make_recipe(1, "Spaghetti Carbonara", cooking_time=25, servings=4),
        make_recipe(2, "Pancakes", preparation_time=5, cooking_time=15),
        make_recipe(3, "Tomato Soup", difficulty_level=DifficultyLevel.HARD),
    )
    return RecipeSearchService(repository, max_page_size=2)


def test_search_returns_matching_page() -> None:
    service = build_service()

    page = service.search(SearchCriteria(title="Spaghetti"))

    assert [recipe.title for recipe in page.content] == ["Spaghetti Carbonara"]
    assert page.total == 1
    assert page.dropped_filters == ()


def test_search_sorts_and_pages() -> None:
    service = build_service()

    first = service.search(SearchCriteria(size=2))
    second = service.search(SearchCriteria(page=1, size=2))

    assert [recipe.title for recipe in first.content] == [
        "Pancakes",
        "Spaghetti Carbonara",
    ]
    assert [recipe.title for recipe in second.content] == ["Tomato Soup"]
    assert first.total == 3


def test_search_descending_sort() -> None:
    service = build_service()

    page = service.search(SearchCriteria(sort_by="servings", sort_direction="desc"))

    assert page.content[0].title == "Spaghetti Carbonara"


def test_search_caps_page_size() -> None:
    service = build_service()

    page = service.search(SearchCriteria(size=50))

    assert page.size == 2
    assert len(page.content) == 2


def test_search_reports_dropped_difficulty() -> None:
    service = build_service()

    page = service.search(SearchCriteria(difficulty_level="expert"))

    assert page.dropped_filters == ("difficulty_level",)
    assert page.total == 3


def test_get_recipe_raises_for_missing_recipe() -> None:
    service = build_service()

    assert service.get_recipe(2).title == "Pancakes"
    with pytest.raises(NotFoundError):
        service.get_recipe(404)


def test_sanitize_for_log_strips_control_characters() -> None:
    assert sanitize_for_log("soup\nINFO forged") == "soup_INFO forged"
    assert sanitize_for_log("x" * 80) == "x" * 50
    assert sanitize_for_log(None) is None
