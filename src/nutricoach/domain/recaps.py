"""Domain models for adherence recaps."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal
from uuid import UUID

RecapPeriod = Literal["daily", "weekly", "monthly"]


@dataclass(frozen=True)
class TargetMetDays:
    """Days within tolerance of the target."""

    count: int
    percentage: float


@dataclass(frozen=True)
class RecapMetrics:
    """Adherence summary over an inclusive date range."""

    total_days: int
    target_met_days: TargetMetDays


@dataclass(frozen=True)
class CachedRecap:
    """Recap metrics stored for a user by a batch job."""

    user_id: UUID
    period: RecapPeriod
    metrics: RecapMetrics
    last_updated: datetime
