"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from recipe_discovery.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from recipe_discovery.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from recipe_discovery.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from recipe_discovery.adapters.supabase_subscription_repository import (
    SupabaseSubscriptionRepository,
)
from recipe_discovery.adapters.supabase_user_repository import SupabaseUserRepository
from recipe_discovery.config import Settings
from recipe_discovery.services.cache import InMemoryCache
from recipe_discovery.services.meal_plans import MealPlanService
from recipe_discovery.services.notifications import NotificationService
from recipe_discovery.services.recommendations import RecommendationService
from recipe_discovery.services.reminders import ReminderService
from recipe_discovery.services.scheduler import PeriodicTask, TaskScheduler
from recipe_discovery.services.search import RecipeSearchService
from recipe_discovery.services.subscriptions import SubscriptionService
from recipe_discovery.services.users import UserService

SUBSCRIPTION_MATCH_TASK = "subscription_match"
RECOMMENDATION_REFRESH_TASK = "recommendation_refresh"
REMINDER_SWEEP_TASK = "reminder_sweep"


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    search_service: RecipeSearchService
    recommendation_service: RecommendationService
    subscription_service: SubscriptionService
    notification_service: NotificationService
    meal_plan_service: MealPlanService
    reminder_service: ReminderService
    scheduler: TaskScheduler


def build_scheduler(
    settings: Settings,
    subscription_service: SubscriptionService,
    recommendation_service: RecommendationService,
    reminder_service: ReminderService,
) -> TaskScheduler:
    """Register the periodic discovery jobs."""
    return TaskScheduler(
        tasks=[
            PeriodicTask(
                name=SUBSCRIPTION_MATCH_TASK,
                interval=settings.subscription_match_interval,
                handler=subscription_service.run_once,
            ),
            PeriodicTask(
                name=RECOMMENDATION_REFRESH_TASK,
                interval=settings.recommendation_refresh_interval,
                handler=recommendation_service.refresh_all,
            ),
            PeriodicTask(
                name=REMINDER_SWEEP_TASK,
                interval=settings.reminder_sweep_interval,
                handler=reminder_service.run_once,
            ),
        ]
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    user_service = UserService(SupabaseUserRepository(supabase_client))
    notification_service = NotificationService(
        SupabaseNotificationRepository(supabase_client)
    )
    meal_plan_repository = SupabaseMealPlanRepository(supabase_client)
    search_service = RecipeSearchService(
        recipe_repository, max_page_size=resolved_settings.search_max_page_size
    )
    recommendation_service = RecommendationService(
        recipe_repository=recipe_repository,
        user_service=user_service,
        cache=InMemoryCache(resolved_settings.recommendation_max_age),
    )
    subscription_service = SubscriptionService(
        repository=SupabaseSubscriptionRepository(supabase_client),
        recipe_repository=recipe_repository,
        notification_service=notification_service,
        user_service=user_service,
    )
    meal_plan_service = MealPlanService(
        repository=meal_plan_repository,
        notification_service=notification_service,
    )
    reminder_service = ReminderService(
        user_service=user_service,
        meal_plan_repository=meal_plan_repository,
        notification_service=notification_service,
    )
    scheduler = build_scheduler(
        resolved_settings,
        subscription_service,
        recommendation_service,
        reminder_service,
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        search_service=search_service,
        recommendation_service=recommendation_service,
        subscription_service=subscription_service,
        notification_service=notification_service,
        meal_plan_service=meal_plan_service,
        reminder_service=reminder_service,
        scheduler=scheduler,
    )
