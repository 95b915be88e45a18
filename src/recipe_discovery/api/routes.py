"""User-facing discovery and notification endpoints.

Handlers are plain functions because every store call blocks; FastAPI runs
them on its threadpool so the event loop stays free.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from recipe_discovery.api.models import (
    MealPlanPayload,
    MealPlanUpdatePayload,
    PreferencesPayload,
    SearchCriteriaPayload,
    SubscriptionPayload,
)
from recipe_discovery.api.serializers import (
    serialize_meal_plan,
    serialize_notification,
    serialize_page,
    serialize_preferences,
    serialize_recipe,
    serialize_subscription,
)
from recipe_discovery.containers import AppContainer
from recipe_discovery.domain.errors import NotFoundError
from recipe_discovery.domain.models import UserRecord
from recipe_discovery.domain.notifications import NotificationPreferences

router = APIRouter(prefix="/api", tags=["discovery"])


def get_container(request: Request) -> AppContainer:
    """Return the service container attached to the running app."""
    return request.app.state.container


def current_user(
    x_user_id: UUID | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserRecord:
    """Resolve the caller from the gateway-provided user id header."""
    if x_user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return container.user_service.get_user(x_user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc


@router.post("/recipes/search")
def search_recipes(
    payload: SearchCriteriaPayload,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search recipes with multiple optional criteria."""
    page = container.search_service.search(payload.to_criteria())
    return serialize_page(page)


@router.get("/recipes/{recipe_id}")
def get_recipe(
    recipe_id: int, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Return a single recipe."""
    return serialize_recipe(container.search_service.get_recipe(recipe_id))


@router.get("/recommendations")
def recommended_recipes(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return recipes compatible with all of the caller's dietary restrictions."""
    recipes = container.recommendation_service.get_recommended_recipes(user.id)
    return {"recipes": [serialize_recipe(recipe) for recipe in recipes]}


@router.post("/subscriptions", status_code=status.HTTP_201_CREATED)
def create_subscription(
    payload: SubscriptionPayload,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Save a search so new matching recipes produce notifications."""
    subscription = container.subscription_service.create_subscription(
        user.id, payload.search_criteria.to_criteria()
    )
    return serialize_subscription(subscription)


@router.get("/subscriptions")
def list_subscriptions(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's saved searches."""
    subscriptions = container.subscription_service.list_subscriptions(user.id)
    return {"subscriptions": [serialize_subscription(item) for item in subscriptions]}


@router.delete("/subscriptions/{subscription_id}")
def delete_subscription(
    subscription_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Delete one of the caller's saved searches."""
    container.subscription_service.delete_subscription(user.id, subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/notifications")
def list_notifications(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return all of the caller's notifications."""
    notifications = container.notification_service.list_for_user(user.id)
    return {"notifications": [serialize_notification(item) for item in notifications]}


@router.get("/notifications/unread")
def list_unread_notifications(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's unread notifications."""
    notifications = container.notification_service.list_unread(user.id)
    return {"notifications": [serialize_notification(item) for item in notifications]}


@router.get("/notifications/count")
def unread_notification_count(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, int]:
    """Return the number of unread notifications."""
    return {"count": container.notification_service.count_unread(user.id)}


@router.put("/notifications/read-all")
def mark_all_notifications_read(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Mark every notification of the caller as read."""
    container.notification_service.mark_all_read(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/notifications/{notification_id}/read")
def mark_notification_read(
    notification_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Mark a single notification as read."""
    container.notification_service.mark_read(user.id, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/notifications/preferences")
def get_preferences(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's notification preferences."""
    return serialize_preferences(container.user_service.get_preferences(user.id))


@router.put("/notifications/preferences")
def update_preferences(
    payload: PreferencesPayload,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Replace the caller's notification preferences."""
    preferences = NotificationPreferences(
        user_id=user.id,
        enabled=payload.enabled,
        recipe_recommendation=payload.recipe_recommendation,
        meal_plan_reminder=payload.meal_plan_reminder,
    )
    container.user_service.update_preferences(preferences)
    return serialize_preferences(preferences)


@router.post("/meal-plans", status_code=status.HTTP_201_CREATED)
def create_meal_plan(
    payload: MealPlanPayload,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a meal plan for the caller."""
    try:
        plan = container.meal_plan_service.create_plan(
            user.id,
            payload.title,
            payload.frequency,
            payload.start_date,
            payload.end_date,
            payload.meals_per_day,
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return serialize_meal_plan(plan)


@router.get("/meal-plans")
def list_meal_plans(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's meal plans."""
    plans = container.meal_plan_service.list_plans(user.id)
    return {"meal_plans": [serialize_meal_plan(plan) for plan in plans]}


@router.get("/meal-plans/{meal_plan_id}")
def get_meal_plan(
    meal_plan_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return one of the caller's meal plans."""
    return serialize_meal_plan(
        container.meal_plan_service.get_plan(user.id, meal_plan_id)
    )


@router.patch("/meal-plans/{meal_plan_id}")
def update_meal_plan(
    meal_plan_id: UUID,
    payload: MealPlanUpdatePayload,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change the reminder frequency of one of the caller's meal plans."""
    plan = container.meal_plan_service.change_frequency(
        user.id, meal_plan_id, payload.frequency
    )
    return serialize_meal_plan(plan)


@router.post("/meal-plans/{meal_plan_id}/reminders", status_code=status.HTTP_201_CREATED)
def create_meal_plan_reminder(
    meal_plan_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a reminder for a meal plan right away."""
    notification = container.meal_plan_service.create_reminder(user.id, meal_plan_id)
    return serialize_notification(notification)
