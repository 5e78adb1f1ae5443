"""Supabase repository for feed logs."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from feeding_tracker.domain.feeds import FeedRecord, FeedType, NewFeed
from feeding_tracker.services.feed_logs import FeedLogRepository

FEED_LOG_COLUMNS = "id, created_at, feed_type, left_minutes, right_minutes, formula_ml"


@dataclass
class SupabaseFeedLogRepository(FeedLogRepository):
    """Supabase implementation for the feed_logs table."""

    client: Client

    def insert_feed(self, feed: NewFeed) -> str | None:
        """Insert a feed row and return its id."""
        response = (
            self.client.table("feed_logs")
            .insert(
                {
                    "feed_type": feed.feed_type.value,
                    "left_minutes": feed.left_minutes,
                    "right_minutes": feed.right_minutes,
                    "formula_ml": feed.formula_ml,
                }
            )
            .execute()
        )
        if not response.data:
            return None
        return str(response.data[0]["id"])

    def list_recent_feeds(self, limit: int) -> list[FeedRecord]:
        """Return the newest feed rows."""
        response = (
            self.client.table("feed_logs")
            .select(FEED_LOG_COLUMNS)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def delete_feed(self, record_id: str) -> list[str]:
        """Delete a feed row and return the ids that were removed."""
        response = (
            self.client.table("feed_logs").delete().eq("id", record_id).execute()
        )
        return [str(row["id"]) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> FeedRecord:
    return FeedRecord(
        id=str(row["id"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        feed_type=FeedType(row["feed_type"]),
        left_minutes=_optional_int(row.get("left_minutes")),
        right_minutes=_optional_int(row.get("right_minutes")),
        formula_ml=_optional_int(row.get("formula_ml")),
    )


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)
