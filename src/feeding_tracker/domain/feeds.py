"""Domain models for feeding records."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class FeedType(StrEnum):
    """Kind of feeding stored in a record."""

    BREAST = "breast"
    FORMULA = "formula"


@dataclass(frozen=True)
class FeedRecord:
    """A single feeding stored in the log.

    Breast records carry the per-side minutes and no formula volume; formula
    records carry the volume and no minutes.
    """

    id: str
    created_at: datetime
    feed_type: FeedType
    left_minutes: int | None = None
    right_minutes: int | None = None
    formula_ml: int | None = None


@dataclass(frozen=True)
class NewFeed:
    """Payload for a feeding that has not been stored yet."""

    feed_type: FeedType
    left_minutes: int | None = None
    right_minutes: int | None = None
    formula_ml: int | None = None

    @classmethod
    def breast(cls, left_minutes: int, right_minutes: int) -> "NewFeed":
        """Build a breastfeeding payload."""
        return cls(
            feed_type=FeedType.BREAST,
            left_minutes=left_minutes,
            right_minutes=right_minutes,
        )

    @classmethod
    def formula(cls, formula_ml: int) -> "NewFeed":
        """Build a formula payload."""
        return cls(feed_type=FeedType.FORMULA, formula_ml=formula_ml)


@dataclass(frozen=True)
class AppSetting:
    """The shared singleton setting row."""

    breast_ml_per_minute: float
    updated_at: datetime | None = None
