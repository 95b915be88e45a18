"""Frequency-driven meal plan reminder sweep."""

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from recipe_discovery.domain.meal_plans import Frequency, MealPlan, ReminderRunSummary
from recipe_discovery.domain.models import UserRecord
from recipe_discovery.services.clock import Clock, utc_now
from recipe_discovery.services.meal_plans import MealPlanRepository, reminder_for
from recipe_discovery.services.notifications import NotificationService
from recipe_discovery.services.users import UserService

MONTHS_IN_YEAR = 12

_ELAPSED_THRESHOLDS = {
    Frequency.DAILY: timedelta(days=1),
    Frequency.WEEKLY: timedelta(weeks=1),
    Frequency.BI_WEEKLY: timedelta(weeks=2),
}

_MONTH_THRESHOLDS = {
    Frequency.MONTHLY: 1,
    Frequency.QUARTERLY: 3,
    Frequency.YEARLY: 12,
}

_logger = logging.getLogger(__name__)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift a datetime by calendar months, clamping the day to the month end."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // MONTHS_IN_YEAR
    month = month_index % MONTHS_IN_YEAR + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def is_reminder_due(frequency: Frequency, last_sent: datetime, now: datetime) -> bool:
    """Return True when enough time has passed since the last reminder.

    Day and week cadences compare elapsed duration. Month based cadences use
    calendar arithmetic: a monthly reminder sent on January 31st is due on
    February 28th (or 29th), not after a fixed number of days.

    Both instants are truncated to the minute so sweeps that run a few
    milliseconds apart from day to day keep firing on the same cadence.
    """
    last_sent = _to_minute(last_sent)
    now = _to_minute(now)
    if frequency in _ELAPSED_THRESHOLDS:
        return now - last_sent >= _ELAPSED_THRESHOLDS[frequency]
    return now >= add_months(last_sent, _MONTH_THRESHOLDS[frequency])


def _to_minute(moment: datetime) -> datetime:
    return moment.replace(second=0, microsecond=0)


@dataclass
class ReminderService:
    """Creates meal plan reminders for users who enabled them."""

    user_service: UserService
    meal_plan_repository: MealPlanRepository
    notification_service: NotificationService
    clock: Clock = utc_now

    def run_once(self, now: datetime | None = None) -> ReminderRunSummary:
        """Sweep every user's meal plans once."""
        run_at = _to_minute(now or self.clock())
        users = plans = reminders = skipped = 0
        for user in self.user_service.list_users():
            try:
                if not self.user_service.get_preferences(user.id).reminders_enabled:
                    continue
                user_plans = self.meal_plan_repository.list_by_user(user.id)
            except Exception:
                _logger.exception("Failed to load meal plans for user %s", user.id)
                skipped += 1
                continue
            users += 1
            created, failed = self._sweep_user(user, user_plans, run_at)
            plans += len(user_plans) - failed
            reminders += created
            skipped += failed

        summary = ReminderRunSummary(
            users=users, plans=plans, reminders=reminders, skipped=skipped
        )
        _logger.info(
            "Reminder sweep: users=%s plans=%s reminders=%s skipped=%s",
            summary.users,
            summary.plans,
            summary.reminders,
            summary.skipped,
        )
        return summary

    def _sweep_user(
        self, user: UserRecord, plans: list[MealPlan], now: datetime
    ) -> tuple[int, int]:
        created = failed = 0
        for plan in plans:
            try:
                if self._remind(plan, now):
                    created += 1
            except Exception:
                _logger.exception(
                    "Failed to process meal plan %s for user %s", plan.id, user.id
                )
                failed += 1
        return created, failed

    def _remind(self, plan: MealPlan, now: datetime) -> bool:
        latest = self.notification_service.latest_for_meal_plan(plan.id)
        # Plans without any prior reminder are left alone.
        if latest is None:
            return False
        if not is_reminder_due(plan.frequency, latest.created_at, now):
            return False
        self.notification_service.create(reminder_for(plan, now))
        return True
