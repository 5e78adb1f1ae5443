"""Quick-entry view model.

The view moves between two phases. ``submit`` goes from idle to submitting
and back to idle, either with a refreshed record list or with the failure
message kept in ``error`` until the next action. Every mutation is followed
by a full re-fetch of the recent records.
"""

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from enum import StrEnum

from feeding_tracker.domain.feeds import FeedRecord, FeedType
from feeding_tracker.domain.stats import DayLabelTotal, DayTotal
from feeding_tracker.errors import OPERATION_ERRORS, describe_error
from feeding_tracker.services.aggregation import (
    BREAST_STEP,
    DEFAULT_BREAST_ML_PER_MINUTE,
    FORMULA_STEP,
    RATE_STEP,
    chart_max,
    clamp_non_negative,
    feed_volume_ml,
    last_n_days_totals,
    step_value,
    today_total,
)
from feeding_tracker.services.app_settings import AppSettingsService
from feeding_tracker.services.feed_logs import FeedLogService

logger = logging.getLogger(__name__)

RECENT_DAYS = 7


class EntryPhase(StrEnum):
    """Submission phase of the entry view."""

    IDLE = "idle"
    SUBMITTING = "submitting"


@dataclass
class EntryView:
    """State and actions behind the quick-entry screen."""

    feed_logs: FeedLogService
    app_settings: AppSettingsService
    log_limit: int = 100
    tz: tzinfo | None = None
    feed_type: FeedType = FeedType.BREAST
    left_minutes: int = 10
    right_minutes: int = 10
    formula_ml: int = 120
    breast_ml_per_minute: float = DEFAULT_BREAST_ML_PER_MINUTE
    records: list[FeedRecord] = field(default_factory=list)
    phase: EntryPhase = EntryPhase.IDLE
    deleting_id: str | None = None
    error: str | None = None
    error_cause: Exception | None = None

    def load(self) -> bool:
        """Fetch the recent records and the shared rate.

        Returns False when either read failed; the view then still holds the
        container defaults and must not be used to write.
        """
        loaded = self.refresh()
        try:
            self.breast_ml_per_minute = self.app_settings.get_breast_ml_per_minute()
        except OPERATION_ERRORS as exc:
            self._fail(exc, "Failed to fetch app settings")
            return False
        return loaded

    def refresh(self) -> bool:
        """Replace the record list with a fresh fetch."""
        try:
            self.records = self.feed_logs.list_recent(self.log_limit)
        except OPERATION_ERRORS as exc:
            self._fail(exc, "Failed to fetch feed logs")
            return False
        return True

    def select_feed_type(self, feed_type: FeedType) -> None:
        self.feed_type = feed_type

    def set_form(
        self,
        feed_type: FeedType,
        left_minutes: int,
        right_minutes: int,
        formula_ml: int,
    ) -> None:
        """Replace the form inputs, flooring each amount at zero."""
        self.select_feed_type(feed_type)
        self.left_minutes = int(clamp_non_negative(left_minutes))
        self.right_minutes = int(clamp_non_negative(right_minutes))
        self.formula_ml = int(clamp_non_negative(formula_ml))

    def adjust_left(self, direction: int) -> None:
        self.left_minutes = int(step_value(self.left_minutes, BREAST_STEP, direction))

    def adjust_right(self, direction: int) -> None:
        self.right_minutes = int(
            step_value(self.right_minutes, BREAST_STEP, direction)
        )

    def adjust_formula(self, direction: int) -> None:
        self.formula_ml = int(step_value(self.formula_ml, FORMULA_STEP, direction))

    def adjust_breast_rate(self, direction: int) -> bool:
        """Move the shared rate one step and persist it immediately."""
        return self.set_breast_rate(
            step_value(self.breast_ml_per_minute, RATE_STEP, direction)
        )

    def set_breast_rate(self, value: float) -> bool:
        """Show the new rate right away, then persist it."""
        self.breast_ml_per_minute = clamp_non_negative(value)
        self._clear_error()
        try:
            self.app_settings.set_breast_ml_per_minute(self.breast_ml_per_minute)
        except OPERATION_ERRORS as exc:
            self._fail(exc, "Failed to save app settings")
            return False
        return True

    def submit(self) -> bool:
        """Store one record built from the form, then re-fetch."""
        if self.phase is EntryPhase.SUBMITTING:
            return False
        self.phase = EntryPhase.SUBMITTING
        self._clear_error()
        try:
            if self.feed_type == FeedType.BREAST:
                self.feed_logs.add_breast(self.left_minutes, self.right_minutes)
            else:
                self.feed_logs.add_formula(self.formula_ml)
        except OPERATION_ERRORS as exc:
            self._fail(exc, "Failed to save feed")
            self.phase = EntryPhase.IDLE
            return False
        refreshed = self.refresh()
        self.phase = EntryPhase.IDLE
        return refreshed

    def delete(self, record_id: str, confirmed: bool) -> bool:
        """Delete one record once the user has confirmed it."""
        if not confirmed:
            return False
        self.deleting_id = record_id
        self._clear_error()
        try:
            self.feed_logs.delete(record_id)
        except OPERATION_ERRORS as exc:
            self._fail(exc, "Failed to delete feed", record_id=record_id)
            return False
        else:
            return self.refresh()
        finally:
            self.deleting_id = None

    @property
    def estimated_breast_ml(self) -> float:
        return (self.left_minutes + self.right_minutes) * self.breast_ml_per_minute

    @property
    def today(self) -> DayTotal:
        return today_total(self.records, self.breast_ml_per_minute, tz=self.tz)

    @property
    def recent_daily(self) -> list[DayLabelTotal]:
        """Totals for the last seven days, oldest first."""
        return list(
            last_n_days_totals(
                self.records, self.breast_ml_per_minute, RECENT_DAYS, tz=self.tz
            )
        )

    @property
    def recent_daily_latest_first(self) -> list[DayLabelTotal]:
        return list(reversed(self.recent_daily))

    @property
    def chart_max_ml(self) -> float:
        return chart_max(self.recent_daily)

    def volume_ml(self, record: FeedRecord) -> float:
        return feed_volume_ml(record, self.breast_ml_per_minute)

    def _clear_error(self) -> None:
        self.error = None
        self.error_cause = None

    def _fail(self, exc: Exception, context: str, **details: object) -> None:
        logger.exception(context, extra=details)
        self.error = describe_error(exc)
        self.error_cause = exc
