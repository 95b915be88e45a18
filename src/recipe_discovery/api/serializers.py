"""Response serializers for domain objects."""

from recipe_discovery.domain.errors import CriteriaDecodeError
from recipe_discovery.domain.meal_plans import MealPlan
from recipe_discovery.domain.models import UserRecord
from recipe_discovery.domain.notifications import Notification, NotificationPreferences
from recipe_discovery.domain.recipes import Recipe, RecipePage
from recipe_discovery.domain.subscriptions import Subscription
from recipe_discovery.services.criteria_codec import decode_criteria


def serialize_recipe(recipe: Recipe) -> dict[str, object]:
    """Render a recipe as a JSON-ready dict."""
    return {
        "id": recipe.id,
        "user_id": str(recipe.user_id),
        "title": recipe.title,
        "preparation_time": recipe.preparation_time,
        "cooking_time": recipe.cooking_time,
        "total_time": recipe.total_time,
        "difficulty_level": recipe.difficulty_level.value,
        "servings": recipe.servings,
        "steps": recipe.steps,
        "ingredient_ids": sorted(recipe.ingredient_ids),
        "meal_type_ids": sorted(recipe.meal_type_ids),
        "dietary_restriction_ids": sorted(recipe.dietary_restriction_ids),
        "created_at": recipe.created_at.isoformat(),
    }


def serialize_page(page: RecipePage) -> dict[str, object]:
    """Render a search results page."""
    return {
        "content": [serialize_recipe(recipe) for recipe in page.content],
        "total_elements": page.total,
        "page": page.page,
        "size": page.size,
        "dropped_filters": list(page.dropped_filters),
    }


def serialize_subscription(subscription: Subscription) -> dict[str, object]:
    """Render a subscription with its decoded criteria."""
    try:
        criteria = decode_criteria(subscription.criteria_blob)
    except CriteriaDecodeError:
        criteria = None
    return {
        "id": str(subscription.id),
        "user_id": str(subscription.user_id),
        "search_criteria": {
            "title": criteria.title,
            "ingredient_ids": sorted(criteria.ingredient_ids),
            "difficulty_level": criteria.difficulty_level,
            "min_total_time": criteria.min_total_time,
            "max_total_time": criteria.max_total_time,
            "user_id": str(criteria.user_id) if criteria.user_id else None,
            "meal_type_ids": sorted(criteria.meal_type_ids),
            "servings": criteria.servings,
        }
        if criteria
        else None,
        "created_at": subscription.created_at.isoformat(),
        "last_notified": subscription.last_notified.isoformat()
        if subscription.last_notified
        else None,
    }


def serialize_notification(notification: Notification) -> dict[str, object]:
    """Render a notification."""
    return {
        "id": str(notification.id),
        "kind": notification.kind.value,
        "title": notification.title,
        "message": notification.message,
        "recipe_id": notification.recipe_id,
        "meal_plan_id": str(notification.meal_plan_id)
        if notification.meal_plan_id
        else None,
        "read": notification.read,
        "created_at": notification.created_at.isoformat(),
    }


def serialize_preferences(preferences: NotificationPreferences) -> dict[str, object]:
    """Render notification preferences."""
    return {
        "enabled": preferences.enabled,
        "recipe_recommendation": preferences.recipe_recommendation,
        "meal_plan_reminder": preferences.meal_plan_reminder,
    }


def serialize_meal_plan(plan: MealPlan) -> dict[str, object]:
    """Render a meal plan."""
    return {
        "id": str(plan.id),
        "title": plan.title,
        "frequency": plan.frequency.value,
        "start_date": plan.start_date.isoformat(),
        "end_date": plan.end_date.isoformat(),
        "meals_per_day": plan.meals_per_day,
    }


def serialize_user(user: UserRecord) -> dict[str, object]:
    """Render a user with sorted dietary restriction ids."""
    return {
        "id": str(user.id),
        "email": user.email,
        "dietary_restriction_ids": sorted(user.dietary_restriction_ids),
    }
