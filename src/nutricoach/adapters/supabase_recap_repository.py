"""Supabase repository for cached recaps."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutricoach.domain.recaps import CachedRecap, RecapMetrics, TargetMetDays
from nutricoach.services.recaps import RecapCacheRepository


@dataclass
class SupabaseRecapRepository(RecapCacheRepository):
    """Supabase implementation for cached recaps, one row per user and period."""

    client: Client

    def save_cached_recap(self, recap: CachedRecap) -> None:
        """Upsert the recap row for the user and period."""
        response = (
            self.client.table("cached_recaps")
            .upsert(
                {
                    "user_id": str(recap.user_id),
                    "period": recap.period,
                    "total_days": recap.metrics.total_days,
                    "target_met_count": recap.metrics.target_met_days.count,
                    "target_met_percentage": recap.metrics.target_met_days.percentage,
                    "last_updated": recap.last_updated.isoformat(),
                },
                on_conflict="user_id,period",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save cached recap")

    def list_cached_recaps(self, user_id: UUID) -> list[CachedRecap]:
        """Return all cached recaps for a user."""
        response = (
            self.client.table("cached_recaps")
            .select(
                "user_id, period, total_days, target_met_count, "
                "target_met_percentage, last_updated"
            )
            .eq("user_id", str(user_id))
            .execute()
        )
        return [
            CachedRecap(
                user_id=UUID(row["user_id"]),
                period=row["period"],
                metrics=RecapMetrics(
                    total_days=int(row["total_days"]),
                    target_met_days=TargetMetDays(
                        count=int(row["target_met_count"]),
                        percentage=float(row["target_met_percentage"]),
                    ),
                ),
                last_updated=datetime.fromisoformat(row["last_updated"]),
            )
            for row in response.data or []
        ]
