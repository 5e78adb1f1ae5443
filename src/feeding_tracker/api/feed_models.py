"""Pydantic models for feed API payloads."""

from pydantic import BaseModel

from feeding_tracker.domain.feeds import FeedType


class FeedCreate(BaseModel):
    """Form state submitted from the quick-entry screen."""

    feed_type: FeedType
    left_minutes: int = 0
    right_minutes: int = 0
    formula_ml: int = 0


class RateUpdate(BaseModel):
    """New value for the shared ml-per-minute rate."""

    value: float
