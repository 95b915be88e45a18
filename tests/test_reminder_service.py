"""Tests for the meal plan reminder sweep."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

import pytest

from recipe_discovery.domain.meal_plans import Frequency
from recipe_discovery.domain.notifications import NotificationKind
from recipe_discovery.services.meal_plans import reminder_for
from recipe_discovery.services.notifications import NotificationService
from recipe_discovery.services.reminders import (
    ReminderService,
    add_months,
    is_reminder_due,
)
from recipe_discovery.services.users import UserService
from tests.conftest import (
    FixedClock,
    InMemoryMealPlanRepository,
    InMemoryNotificationRepository,
    InMemoryUserRepository,
)

NOW = datetime(2025, 3, 20, 9, 0, tzinfo=UTC)


class Harness:
    def __init__(self, meal_plans: InMemoryMealPlanRepository | None = None) -> None:
        self.users = InMemoryUserRepository()
        self.meal_plans = meal_plans or InMemoryMealPlanRepository()
        self.notifications = InMemoryNotificationRepository()
        self.service = ReminderService(
            user_service=UserService(self.users),
            meal_plan_repository=self.meal_plans,
            notification_service=NotificationService(self.notifications),
            clock=FixedClock(NOW),
        )

    def add_plan(self, user_id, frequency: Frequency, last_sent: datetime | None):  # type: ignore[no-untyped-def]
        plan = self.meal_plans.create_plan(
            user_id, "Family dinners", frequency, date(2025, 1, 1), date(2025, 12, 31), 3
        )
        if last_sent is not None:
            self.notifications.create_notification(reminder_for(plan, last_sent))
        return plan

    def reminders_for(self, plan_id) -> int:  # type: ignore[no-untyped-def]
        return len(self.notifications.list_for_meal_plan(plan_id))


def test_weekly_plan_is_reminded_after_a_week() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=True)
    due = harness.add_plan(user.id, Frequency.WEEKLY, NOW - timedelta(days=8))
    recent = harness.add_plan(user.id, Frequency.WEEKLY, NOW - timedelta(days=3))

    summary = harness.service.run_once()

    assert harness.reminders_for(due.id) == 2
    assert harness.reminders_for(recent.id) == 1
    assert summary.users == 1
    assert summary.plans == 2
    assert summary.reminders == 1


def test_monthly_plan_uses_calendar_months() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=True)
    recent = harness.add_plan(user.id, Frequency.MONTHLY, NOW - timedelta(days=20))
    due = harness.add_plan(user.id, Frequency.MONTHLY, NOW - timedelta(days=35))

    harness.service.run_once()

    assert harness.reminders_for(recent.id) == 1
    assert harness.reminders_for(due.id) == 2


def test_new_reminder_has_expected_content() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=True)
    plan = harness.add_plan(user.id, Frequency.DAILY, NOW - timedelta(days=2))

    harness.service.run_once()

    latest = max(
        harness.notifications.list_for_meal_plan(plan.id), key=lambda n: n.created_at
    )
    assert latest.created_at == NOW
    assert latest.kind is NotificationKind.MEAL_PLAN_REMINDER
    assert latest.title == "Family dinners"
    assert "daily" in latest.message
    assert latest.read is False


def test_plan_without_prior_reminder_is_left_alone() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=True)
    plan = harness.add_plan(user.id, Frequency.DAILY, None)

    summary = harness.service.run_once()

    assert harness.reminders_for(plan.id) == 0
    assert summary.reminders == 0


def test_users_without_reminder_preferences_are_skipped() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=False)
    plan = harness.add_plan(user.id, Frequency.DAILY, NOW - timedelta(days=5))

    summary = harness.service.run_once()

    assert harness.reminders_for(plan.id) == 1
    assert summary.users == 0


def test_daily_plan_fires_when_sweep_lands_slightly_early() -> None:
    harness = Harness()
    user = harness.users.add_user(reminders=True)
    yesterday = NOW - timedelta(days=1) + timedelta(milliseconds=500)
    plan = harness.add_plan(user.id, Frequency.DAILY, yesterday)

    summary = harness.service.run_once(now=NOW + timedelta(milliseconds=100))

    assert harness.reminders_for(plan.id) == 2
    assert summary.reminders == 1
    latest = max(
        harness.notifications.list_for_meal_plan(plan.id), key=lambda n: n.created_at
    )
    assert latest.created_at == NOW


@dataclass
class FlakyMealPlanRepository(InMemoryMealPlanRepository):
    broken_user_id: object = None

    def list_by_user(self, user_id):  # type: ignore[no-untyped-def]
        if user_id == self.broken_user_id:
            raise RuntimeError("store unavailable")
        return super().list_by_user(user_id)


def test_failing_user_does_not_abort_sweep() -> None:
    meal_plans = FlakyMealPlanRepository()
    harness = Harness(meal_plans)
    broken = harness.users.add_user("broken@example.com", reminders=True)
    healthy = harness.users.add_user("healthy@example.com", reminders=True)
    meal_plans.broken_user_id = broken.id
    plan = harness.add_plan(healthy.id, Frequency.DAILY, NOW - timedelta(days=2))

    summary = harness.service.run_once()

    assert harness.reminders_for(plan.id) == 2
    assert summary.skipped == 1
    assert summary.reminders == 1


@pytest.mark.parametrize(
    ("frequency", "elapsed", "expected"),
    [
        (Frequency.DAILY, timedelta(hours=23), False),
        (Frequency.DAILY, timedelta(days=1), True),
        (Frequency.BI_WEEKLY, timedelta(days=13), False),
        (Frequency.BI_WEEKLY, timedelta(days=14), True),
        (Frequency.QUARTERLY, timedelta(days=80), False),
        (Frequency.QUARTERLY, timedelta(days=95), True),
        (Frequency.YEARLY, timedelta(days=364), False),
        (Frequency.YEARLY, timedelta(days=366), True),
    ],
)
def test_is_reminder_due(frequency: Frequency, elapsed: timedelta, expected: bool) -> None:
    assert is_reminder_due(frequency, NOW - elapsed, NOW) is expected


def test_month_end_is_clamped() -> None:
    sent = datetime(2025, 1, 31, 8, 0, tzinfo=UTC)

    assert add_months(sent, 1) == datetime(2025, 2, 28, 8, 0, tzinfo=UTC)
    assert add_months(datetime(2024, 1, 31, tzinfo=UTC), 1).day == 29
    assert add_months(datetime(2024, 11, 15, tzinfo=UTC), 3) == datetime(
        2025, 2, 15, tzinfo=UTC
    )
    assert is_reminder_due(Frequency.MONTHLY, sent, datetime(2025, 2, 28, 8, 0, tzinfo=UTC))
    assert not is_reminder_due(
        Frequency.MONTHLY, sent, datetime(2025, 2, 27, 8, 0, tzinfo=UTC)
    )
