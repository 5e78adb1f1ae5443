"""History view model with a month calendar and a selected day."""

import logging
from dataclasses import dataclass, field
from datetime import date, tzinfo

from feeding_tracker.domain.feeds import FeedRecord
from feeding_tracker.domain.stats import CalendarCell, DayStats, DayTotal
from feeding_tracker.errors import OPERATION_ERRORS, describe_error
from feeding_tracker.services.aggregation import (
    DEFAULT_BREAST_ML_PER_MINUTE,
    add_months,
    build_month_calendar_cells,
    current_day,
    day_key,
    day_stats,
    feed_volume_ml,
    fill_alpha,
    fill_ratio,
    group_by_calendar_day,
    is_high_volume,
    max_month_total,
    month_start,
    summarize_days,
)
from feeding_tracker.services.app_settings import AppSettingsService
from feeding_tracker.services.feed_logs import FeedLogService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarDay:
    """A calendar cell decorated with its day's totals."""

    cell: CalendarCell
    total_ml: float
    count: int
    ratio: float
    fill_alpha: float
    high_volume: bool
    selected: bool
    today: bool


@dataclass
class HistoryView:
    """State and derived values behind the history screen.

    Derived values are properties over ``records`` so they always reflect the
    latest fetch and the current cursor and selection.
    """

    feed_logs: FeedLogService
    app_settings: AppSettingsService
    log_limit: int = 3000
    tz: tzinfo | None = None
    month_cursor: date | None = None
    selected_day: str | None = None
    records: list[FeedRecord] = field(default_factory=list)
    breast_ml_per_minute: float = DEFAULT_BREAST_ML_PER_MINUTE
    loading: bool = False
    error: str | None = None
    error_cause: Exception | None = None

    def __post_init__(self) -> None:
        today = current_day(self.tz)
        self.month_cursor = month_start(self.month_cursor or today)
        if self.selected_day is None:
            self.selected_day = day_key(today)

    def load(self) -> bool:
        """Fetch records and the shared rate; keep prior state on failure."""
        self.loading = True
        self.error = None
        self.error_cause = None
        try:
            records = self.feed_logs.list_recent(self.log_limit)
            rate = self.app_settings.get_breast_ml_per_minute()
        except OPERATION_ERRORS as exc:
            logger.exception("Failed to fetch history")
            self.error = describe_error(exc)
            self.error_cause = exc
            return False
        finally:
            self.loading = False
        self.records = records
        self.breast_ml_per_minute = rate
        return True

    def previous_month(self) -> None:
        self.month_cursor = add_months(self.month_cursor, -1)

    def next_month(self) -> None:
        self.month_cursor = add_months(self.month_cursor, 1)

    def select_day(self, key: str) -> None:
        """Select a day and move the cursor to the month it belongs to."""
        self.selected_day = key
        self.month_cursor = month_start(date.fromisoformat(key))

    @property
    def today_key(self) -> str:
        return day_key(current_day(self.tz))

    @property
    def by_day(self) -> dict[str, list[FeedRecord]]:
        return group_by_calendar_day(self.records, self.tz)

    @property
    def daily_summary(self) -> dict[str, DayTotal]:
        return summarize_days(self.by_day, self.breast_ml_per_minute)

    @property
    def calendar_cells(self) -> list[CalendarCell]:
        return build_month_calendar_cells(self.month_cursor)

    @property
    def max_month_ml(self) -> float:
        return max_month_total(self.calendar_cells, self.daily_summary)

    @property
    def calendar_days(self) -> list[CalendarDay]:
        """Calendar cells with fill intensity relative to the month maximum."""
        summaries = self.daily_summary
        cells = self.calendar_cells
        maximum = max_month_total(cells, summaries)
        today_key = self.today_key
        days = []
        for cell in cells:
            summary = summaries.get(cell.key)
            total_ml = summary.total_ml if summary else 0
            ratio = fill_ratio(total_ml, maximum)
            days.append(
                CalendarDay(
                    cell=cell,
                    total_ml=total_ml,
                    count=summary.count if summary else 0,
                    ratio=ratio,
                    fill_alpha=fill_alpha(ratio, cell.in_month),
                    high_volume=is_high_volume(ratio),
                    selected=cell.key == self.selected_day,
                    today=cell.key == today_key,
                )
            )
        return days

    @property
    def selected_records(self) -> list[FeedRecord]:
        """Records of the selected day, newest first."""
        records = self.by_day.get(self.selected_day, [])
        return sorted(records, key=lambda record: record.created_at, reverse=True)

    @property
    def selected_stats(self) -> DayStats:
        return day_stats(self.selected_records, self.breast_ml_per_minute)

    def volume_ml(self, record: FeedRecord) -> float:
        return feed_volume_ml(record, self.breast_ml_per_minute)
