"""Aggregation of feed records into volumes, day buckets and calendar cells.

Every function here is pure. Day boundaries follow the runtime's local time
zone unless an explicit ``tz`` is passed.
"""

from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime, timedelta, tzinfo

from feeding_tracker.domain.feeds import FeedRecord, FeedType
from feeding_tracker.domain.stats import CalendarCell, DayLabelTotal, DayStats, DayTotal

BREAST_STEP = 5
FORMULA_STEP = 10
RATE_STEP = 1
DEFAULT_BREAST_ML_PER_MINUTE = 8
HIGH_VOLUME_RATIO = 0.6
CHART_MIN_BAR_PERCENT = 2
MONTHS_PER_YEAR = 12
DAYS_PER_WEEK = 7


def feed_volume_ml(record: FeedRecord, breast_ml_per_minute: float) -> float:
    """Return the milliliters a record stands for."""
    if record.feed_type == FeedType.FORMULA:
        return record.formula_ml or 0
    left = record.left_minutes or 0
    right = record.right_minutes or 0
    return (left + right) * breast_ml_per_minute


def local_date(timestamp: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar day of a timestamp in ``tz`` or the local zone."""
    return timestamp.astimezone(tz).date()


def current_day(tz: tzinfo | None = None) -> date:
    """Return today's date in ``tz`` or the local zone."""
    return datetime.now(tz=tz).date()


def day_key(day: date) -> str:
    """Return the YYYY-MM-DD key used to bucket records."""
    return day.isoformat()


def is_same_calendar_day(
    timestamp: datetime, reference: date, tz: tzinfo | None = None
) -> bool:
    """Return True when both values fall on the same year, month and day."""
    if isinstance(reference, datetime):
        reference = local_date(reference, tz)
    return local_date(timestamp, tz) == reference


def last_n_days_totals(
    records: Iterable[FeedRecord],
    breast_ml_per_minute: float,
    n: int = 7,
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> Iterator[DayLabelTotal]:
    """Yield ``n`` daily totals ending today, oldest first."""
    end = today or current_day(tz)
    pool = list(records)
    for offset in range(n - 1, -1, -1):
        day = end - timedelta(days=offset)
        total = sum(
            feed_volume_ml(record, breast_ml_per_minute)
            for record in pool
            if is_same_calendar_day(record.created_at, day, tz)
        )
        yield DayLabelTotal(day=day, label=f"{day.month}/{day.day}", total_ml=total)


def group_by_calendar_day(
    records: Iterable[FeedRecord], tz: tzinfo | None = None
) -> dict[str, list[FeedRecord]]:
    """Partition records by day key, keeping arrival order inside each day."""
    groups: dict[str, list[FeedRecord]] = {}
    for record in records:
        key = day_key(local_date(record.created_at, tz))
        groups.setdefault(key, []).append(record)
    return groups


def summarize_days(
    groups: Mapping[str, list[FeedRecord]], breast_ml_per_minute: float
) -> dict[str, DayTotal]:
    """Return a DayTotal for every grouped day."""
    return {
        key: DayTotal(
            day=date.fromisoformat(key),
            total_ml=sum(feed_volume_ml(r, breast_ml_per_minute) for r in day_records),
            count=len(day_records),
        )
        for key, day_records in groups.items()
    }


def today_total(
    records: Iterable[FeedRecord],
    breast_ml_per_minute: float,
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> DayTotal:
    """Return the total and feed count for today."""
    day = today or current_day(tz)
    todays = [r for r in records if is_same_calendar_day(r.created_at, day, tz)]
    return DayTotal(
        day=day,
        total_ml=sum(feed_volume_ml(r, breast_ml_per_minute) for r in todays),
        count=len(todays),
    )


def day_stats(records: Iterable[FeedRecord], breast_ml_per_minute: float) -> DayStats:
    """Split one day's volume into breast and formula parts."""
    total_ml = 0.0
    breast_ml = 0.0
    formula_ml = 0.0
    sessions = 0
    for record in records:
        ml = feed_volume_ml(record, breast_ml_per_minute)
        total_ml += ml
        if record.feed_type == FeedType.BREAST:
            breast_ml += ml
        else:
            formula_ml += ml
        sessions += 1
    return DayStats(
        total_ml=total_ml,
        breast_ml=breast_ml,
        formula_ml=formula_ml,
        sessions=sessions,
    )


def month_start(day: date) -> date:
    """Return the first day of the month containing ``day``."""
    return date(day.year, day.month, 1)


def add_months(day: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``day``."""
    index = day.year * MONTHS_PER_YEAR + (day.month - 1) + months
    return date(index // MONTHS_PER_YEAR, index % MONTHS_PER_YEAR + 1, 1)


def build_month_calendar_cells(month_cursor: date) -> list[CalendarCell]:
    """Return Sunday-first cells for a month, padded to whole weeks."""
    first = month_start(month_cursor)
    days_in_month = (add_months(first, 1) - first).days
    # date.weekday() is Monday-based; the grid starts on Sunday.
    leading = (first.weekday() + 1) % DAYS_PER_WEEK
    size = leading + days_in_month
    size += -size % DAYS_PER_WEEK
    grid_start = first - timedelta(days=leading)

    cells = []
    for offset in range(size):
        day = grid_start + timedelta(days=offset)
        cells.append(
            CalendarCell(
                key=day_key(day),
                day_number=day.day,
                in_month=(day.year, day.month) == (first.year, first.month),
            )
        )
    return cells


def max_month_total(
    cells: Iterable[CalendarCell], summaries: Mapping[str, DayTotal]
) -> float:
    """Return the largest daily total among the in-month cells."""
    maximum: float = 0
    for cell in cells:
        if not cell.in_month:
            continue
        summary = summaries.get(cell.key)
        if summary and summary.total_ml > maximum:
            maximum = summary.total_ml
    return maximum


def fill_ratio(total_ml: float, maximum_ml: float) -> float:
    """Return how full a calendar cell is relative to the month maximum."""
    if maximum_ml <= 0:
        return 0.0
    return min(total_ml / maximum_ml, 1.0)


def fill_alpha(ratio: float, in_month: bool) -> float:
    """Return the background opacity for a calendar cell."""
    if not in_month:
        return 0.04
    return 0.08 + ratio * 0.62


def is_high_volume(ratio: float) -> bool:
    return ratio >= HIGH_VOLUME_RATIO


def chart_max(totals: Iterable[DayLabelTotal]) -> float:
    """Return the scale for the daily bar chart, never below 1."""
    return max([entry.total_ml for entry in totals] + [1])


def chart_bar_height(total_ml: float, maximum_ml: float) -> float:
    """Return a bar height in percent, keeping empty days visible."""
    return max(total_ml / maximum_ml * 100, CHART_MIN_BAR_PERCENT)


def clamp_non_negative(value: float) -> float:
    return max(0, value)


def step_value(value: float, step: float, direction: int) -> float:
    """Move ``value`` by one step up or down, floored at zero."""
    return clamp_non_negative(value + step * direction)
