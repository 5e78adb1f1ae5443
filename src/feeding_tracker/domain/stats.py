"""Domain models for derived totals."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DayTotal:
    """Total volume and feed count for one calendar day."""

    day: date
    total_ml: float
    count: int


@dataclass(frozen=True)
class DayLabelTotal:
    """Chart entry for one day."""

    day: date
    label: str
    total_ml: float


@dataclass(frozen=True)
class DayStats:
    """Breakdown of one day's feeds by kind."""

    total_ml: float
    breast_ml: float
    formula_ml: float
    sessions: int


@dataclass(frozen=True)
class CalendarCell:
    """One cell of a Sunday-first month grid."""

    key: str
    day_number: int
    in_month: bool
