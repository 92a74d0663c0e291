"""Adherence recaps, on demand and as scheduled batch jobs."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from nutricoach.calculations.recap import compute_recap
from nutricoach.calculations.targets import compute_target_macros
from nutricoach.domain.recaps import CachedRecap, RecapMetrics, RecapPeriod
from nutricoach.services.meals import MealLogService
from nutricoach.services.profiles import ProfileService, is_profile_complete

_logger = logging.getLogger(__name__)

DateRange = tuple[date, date]


class RecapCacheRepository(Protocol):
    """Persistence interface for cached recap metrics."""

    def save_cached_recap(self, recap: CachedRecap) -> None:
        """Store the recap, replacing any previous one for the same period."""

    def list_cached_recaps(self, user_id: UUID) -> list[CachedRecap]:
        """Return the stored recaps for a user."""


@dataclass
class RecapRunSummary:
    """Outcome of one batch recap run."""

    period: RecapPeriod
    processed: list[UUID] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)
    failed: list[UUID] = field(default_factory=list)


@dataclass
class RecapService:
    """Computes adherence recaps and caches them per user."""

    profile_service: ProfileService
    meal_log_service: MealLogService
    cache_repository: RecapCacheRepository

    def generate_recap(
        self, user_id: UUID, start_date: date, end_date: date
    ) -> RecapMetrics | None:
        """Return adherence metrics for an inclusive range.

        Returns None when the user has no complete profile, goal, target or
        logged meals in the range, or when the range is empty.
        """
        if end_date < start_date:
            return None
        account = self.profile_service.get_user(user_id)
        if not is_profile_complete(account.profile):
            return None
        target = compute_target_macros(account.profile, account.goal)
        if target is None:
            return None
        timezone_name = self.profile_service.timezone_for(user_id)
        entries = self.meal_log_service.entries_for_range(
            user_id, start_date, end_date, timezone_name
        )
        if not entries:
            return None
        return compute_recap(entries, target, start_date, end_date, timezone_name)

    def cached_recaps(self, user_id: UUID) -> list[CachedRecap]:
        """Return the recaps stored by the batch jobs."""
        return self.cache_repository.list_cached_recaps(user_id)

    def run_daily_recaps(self, now: datetime | None = None) -> RecapRunSummary:
        """Recap yesterday for every user."""
        return self._run("daily", previous_day, now)

    def run_weekly_recaps(self, now: datetime | None = None) -> RecapRunSummary:
        """Recap the previous Sunday-to-Saturday week for every user."""
        return self._run("weekly", previous_week, now)

    def run_monthly_recaps(self, now: datetime | None = None) -> RecapRunSummary:
        """Recap the previous calendar month for every user."""
        return self._run("monthly", previous_month, now)

    def _run(
        self,
        period: RecapPeriod,
        range_for: Callable[[date], DateRange],
        now: datetime | None,
    ) -> RecapRunSummary:
        resolved_now = now or datetime.now(tz=UTC)
        summary = RecapRunSummary(period=period)
        for user_id in self.profile_service.list_user_ids():
            try:
                stored = self._recap_user(user_id, period, range_for, resolved_now)
            except Exception:
                _logger.exception("Failed to generate %s recap for %s", period, user_id)
                summary.failed.append(user_id)
                continue
            if stored:
                summary.processed.append(user_id)
            else:
                summary.skipped.append(user_id)
        _logger.info(
            "Finished %s recaps: %s processed, %s skipped, %s failed",
            period,
            len(summary.processed),
            len(summary.skipped),
            len(summary.failed),
        )
        return summary

    def _recap_user(
        self,
        user_id: UUID,
        period: RecapPeriod,
        range_for: Callable[[date], DateRange],
        now: datetime,
    ) -> bool:
        account = self.profile_service.get_user(user_id)
        if account.goal is None or account.profile is None:
            _logger.info("Skipping %s recap for %s: no goal", period, user_id)
            return False
        if not account.profile.timezone:
            _logger.info("Skipping %s recap for %s: no timezone", period, user_id)
            return False
        local_today = now.astimezone(ZoneInfo(account.profile.timezone)).date()
        start_date, end_date = range_for(local_today)
        metrics = self.generate_recap(user_id, start_date, end_date)
        if metrics is None:
            _logger.info(
                "Skipping %s recap for %s: no meals, target or complete profile",
                period,
                user_id,
            )
            return False
        self.cache_repository.save_cached_recap(
            CachedRecap(
                user_id=user_id,
                period=period,
                metrics=metrics,
                last_updated=now,
            )
        )
        return True


def previous_day(today: date) -> DateRange:
    """Return yesterday as a one-day range."""
    yesterday = today - timedelta(days=1)
    return yesterday, yesterday


def previous_week(today: date) -> DateRange:
    """Return the Sunday-to-Saturday week before the one containing ``today``."""
    days_since_sunday = (today.weekday() + 1) % 7
    start = today - timedelta(days=days_since_sunday + 7)
    return start, start + timedelta(days=6)


def previous_month(today: date) -> DateRange:
    """Return the calendar month before the one containing ``today``."""
    end = today.replace(day=1) - timedelta(days=1)
    return end.replace(day=1), end
