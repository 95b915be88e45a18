"""Serialization of search criteria snapshots stored on subscriptions."""

import json
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recipe_discovery.domain.errors import CriteriaDecodeError
from recipe_discovery.domain.search import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    SearchCriteria,
)

CURRENT_VERSION = 1


class StoredCriteria(BaseModel):
    """Wire shape of a criteria snapshot."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    ingredient_ids: list[int] = Field(default_factory=list)
    difficulty_level: str | None = None
    min_total_time: int | None = None
    max_total_time: int | None = None
    user_id: UUID | None = None
    meal_type_ids: list[int] = Field(default_factory=list)
    servings: int | None = None
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    sort_direction: str | None = None


class CriteriaEnvelope(BaseModel):
    """Versioned container for a criteria snapshot."""

    model_config = ConfigDict(extra="forbid")

    version: int
    criteria: StoredCriteria


def encode_criteria(criteria: SearchCriteria) -> str:
    """Serialize criteria into the current versioned envelope."""
    envelope = CriteriaEnvelope(
        version=CURRENT_VERSION,
        criteria=StoredCriteria(
            title=criteria.title,
            ingredient_ids=sorted(criteria.ingredient_ids),
            difficulty_level=criteria.difficulty_level,
            min_total_time=criteria.min_total_time,
            max_total_time=criteria.max_total_time,
            user_id=criteria.user_id,
            meal_type_ids=sorted(criteria.meal_type_ids),
            servings=criteria.servings,
            page=criteria.page,
            size=criteria.size,
            sort_by=criteria.sort_by,
            sort_direction=criteria.sort_direction,
        ),
    )
    return envelope.model_dump_json()


def decode_criteria(blob: str) -> SearchCriteria:
    """Decode a stored snapshot.

    Accepts the versioned envelope and the legacy bare object written before
    snapshots carried a version. Anything else raises ``CriteriaDecodeError``.
    """
    try:
        payload = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as exc:
        raise CriteriaDecodeError(f"Criteria snapshot is not JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise CriteriaDecodeError("Criteria snapshot must be a JSON object")

    try:
        if "version" in payload:
            envelope = CriteriaEnvelope.model_validate(payload)
            if envelope.version != CURRENT_VERSION:
                raise CriteriaDecodeError(
                    f"Unsupported criteria version: {envelope.version}"
                )
            stored = envelope.criteria
        else:
            stored = StoredCriteria.model_validate(payload)
    except ValidationError as exc:
        raise CriteriaDecodeError(f"Invalid criteria snapshot: {exc}") from exc

    return SearchCriteria(
        title=stored.title,
        ingredient_ids=frozenset(stored.ingredient_ids),
        difficulty_level=stored.difficulty_level,
        min_total_time=stored.min_total_time,
        max_total_time=stored.max_total_time,
        user_id=stored.user_id,
        meal_type_ids=frozenset(stored.meal_type_ids),
        servings=stored.servings,
        page=stored.page,
        size=stored.size,
        sort_by=stored.sort_by,
        sort_direction=stored.sort_direction,
    )
