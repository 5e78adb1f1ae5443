"""Feed log service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from feeding_tracker.domain.feeds import FeedRecord, NewFeed
from feeding_tracker.errors import DeleteRejectedError
from feeding_tracker.services.aggregation import clamp_non_negative

logger = logging.getLogger(__name__)


class FeedLogRepository(Protocol):
    """Persistence interface for feed records."""

    def insert_feed(self, feed: NewFeed) -> str | None:
        """Store a new feed and return its id when the store reports one."""

    def list_recent_feeds(self, limit: int) -> list[FeedRecord]:
        """Return up to ``limit`` records, newest first."""

    def delete_feed(self, record_id: str) -> list[str]:
        """Delete a record and return the ids the store actually removed."""


@dataclass
class FeedLogService:
    """Service for reading and mutating the shared feed log."""

    repository: FeedLogRepository

    def list_recent(self, limit: int) -> list[FeedRecord]:
        """Return the newest records."""
        return self.repository.list_recent_feeds(limit)

    def add_breast(self, left_minutes: int, right_minutes: int) -> str | None:
        """Log a breastfeeding with per-side minutes."""
        feed = NewFeed.breast(
            left_minutes=int(clamp_non_negative(left_minutes)),
            right_minutes=int(clamp_non_negative(right_minutes)),
        )
        record_id = self.repository.insert_feed(feed)
        logger.info(
            "Logged breastfeeding",
            extra={
                "left_minutes": feed.left_minutes,
                "right_minutes": feed.right_minutes,
            },
        )
        return record_id

    def add_formula(self, formula_ml: int) -> str | None:
        """Log a formula feeding."""
        feed = NewFeed.formula(int(clamp_non_negative(formula_ml)))
        record_id = self.repository.insert_feed(feed)
        logger.info("Logged formula feeding", extra={"formula_ml": feed.formula_ml})
        return record_id

    def delete(self, record_id: str) -> None:
        """Delete a record, failing loudly when the store removed nothing."""
        deleted = self.repository.delete_feed(record_id)
        if not deleted:
            raise DeleteRejectedError(record_id)
        logger.info("Deleted feed record", extra={"record_id": record_id})
