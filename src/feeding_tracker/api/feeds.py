"""JSON endpoints backing the entry and history screens."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from feeding_tracker.api.feed_models import FeedCreate, RateUpdate
from feeding_tracker.domain.feeds import FeedRecord, FeedType
from feeding_tracker.errors import DeleteRejectedError
from feeding_tracker.services.aggregation import chart_bar_height

if TYPE_CHECKING:
    from feeding_tracker.containers import AppContainer
    from feeding_tracker.services.entry_view import EntryView
    from feeding_tracker.services.history_view import HistoryView

router = APIRouter(prefix="/api", tags=["feeds"])

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
CONFIRM_REQUIRED_MESSAGE = "Confirm the delete to remove this record."


@router.get("/entry")
async def entry_snapshot(request: Request) -> JSONResponse:
    """Return the quick-entry screen state."""
    view = _container(request).entry_view()
    view.load()
    return _entry_response(view)


@router.post("/feeds")
async def create_feed(payload: FeedCreate, request: Request) -> JSONResponse:
    """Log one feeding and return the refreshed entry state."""
    view = _container(request).entry_view()
    if not view.load():
        return _entry_response(view)
    view.set_form(
        feed_type=payload.feed_type,
        left_minutes=payload.left_minutes,
        right_minutes=payload.right_minutes,
        formula_ml=payload.formula_ml,
    )
    view.submit()
    return _entry_response(view)


@router.delete("/feeds/{record_id}")
async def delete_feed(
    record_id: str, request: Request, confirmed: bool = False
) -> JSONResponse:
    """Delete one record after explicit confirmation."""
    if not confirmed:
        return JSONResponse(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            content={"error": CONFIRM_REQUIRED_MESSAGE},
        )
    view = _container(request).entry_view()
    if not view.load():
        return _entry_response(view)
    view.delete(record_id, confirmed=True)
    return _entry_response(view)


@router.put("/settings/breast-ml-per-minute")
async def set_breast_rate(payload: RateUpdate, request: Request) -> JSONResponse:
    """Replace the shared ml-per-minute rate."""
    view = _container(request).entry_view()
    if not view.load():
        return _entry_response(view)
    view.set_breast_rate(payload.value)
    return _entry_response(view)


@router.post("/settings/breast-ml-per-minute/{direction}")
async def step_breast_rate(
    direction: Literal["up", "down"], request: Request
) -> JSONResponse:
    """Move the shared rate one step up or down."""
    view = _container(request).entry_view()
    if not view.load():
        return _entry_response(view)
    view.adjust_breast_rate(1 if direction == "up" else -1)
    return _entry_response(view)


@router.get("/history")
async def history_snapshot(
    request: Request,
    month: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}$"),
    day: str | None = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    nav: Literal["prev", "next"] | None = None,
) -> JSONResponse:
    """Return the calendar and selected-day state for the history screen."""
    view = _container(request).history_view()
    try:
        if day is not None:
            view.select_day(date.fromisoformat(day).isoformat())
        if month is not None:
            view.month_cursor = date.fromisoformat(f"{month}-01")
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    if nav == "prev":
        view.previous_month()
    elif nav == "next":
        view.next_month()
    view.load()
    return _history_response(view)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _status_for(cause: Exception | None) -> int:
    if cause is None:
        return status.HTTP_200_OK
    if isinstance(cause, DeleteRejectedError):
        return status.HTTP_403_FORBIDDEN
    return status.HTTP_502_BAD_GATEWAY


def _entry_response(view: EntryView) -> JSONResponse:
    return JSONResponse(
        status_code=_status_for(view.error_cause), content=_serialize_entry(view)
    )


def _history_response(view: HistoryView) -> JSONResponse:
    return JSONResponse(
        status_code=_status_for(view.error_cause), content=_serialize_history(view)
    )


def _serialize_entry(view: EntryView) -> dict[str, object]:
    today = view.today
    maximum = view.chart_max_ml
    return {
        "breast_ml_per_minute": view.breast_ml_per_minute,
        "phase": view.phase.value,
        "today": {
            "day": today.day.isoformat(),
            "total_ml": today.total_ml,
            "count": today.count,
        },
        "recent_daily": [
            {
                "day": entry.day.isoformat(),
                "label": entry.label,
                "total_ml": entry.total_ml,
                "height_percent": chart_bar_height(entry.total_ml, maximum),
            }
            for entry in view.recent_daily_latest_first
        ],
        "records": [
            _serialize_record(record, view.volume_ml(record), view.tz)
            for record in view.records
        ],
        "error": view.error,
    }


def _serialize_history(view: HistoryView) -> dict[str, object]:
    stats = view.selected_stats
    return {
        "month": view.month_cursor.strftime("%Y-%m"),
        "month_label": view.month_cursor.strftime("%B %Y"),
        "selected_day": view.selected_day,
        "selected_label": _format_day_label(date.fromisoformat(view.selected_day)),
        "today": view.today_key,
        "breast_ml_per_minute": view.breast_ml_per_minute,
        "weekdays": WEEKDAY_LABELS,
        "cells": [
            {
                "key": day.cell.key,
                "day_number": day.cell.day_number,
                "in_month": day.cell.in_month,
                "total_ml": day.total_ml,
                "count": day.count,
                "ratio": day.ratio,
                "fill_alpha": round(day.fill_alpha, 3),
                "high_volume": day.high_volume,
                "selected": day.selected,
                "today": day.today,
            }
            for day in view.calendar_days
        ],
        "selected": {
            "total_ml": stats.total_ml,
            "breast_ml": stats.breast_ml,
            "formula_ml": stats.formula_ml,
            "sessions": stats.sessions,
            "records": [
                _serialize_record(record, view.volume_ml(record), view.tz)
                for record in view.selected_records
            ],
        },
        "loading": view.loading,
        "error": view.error,
    }


def _serialize_record(
    record: FeedRecord, volume_ml: float, tz: tzinfo | None
) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": record.id,
        "created_at": record.created_at.isoformat(),
        "time_label": _format_time_label(record.created_at, tz),
        "feed_type": record.feed_type.value,
        "volume_ml": volume_ml,
    }
    if record.feed_type == FeedType.BREAST:
        payload["left_minutes"] = record.left_minutes or 0
        payload["right_minutes"] = record.right_minutes or 0
    else:
        payload["formula_ml"] = record.formula_ml or 0
    return payload


def _format_time_label(timestamp: datetime, tz: tzinfo | None) -> str:
    return timestamp.astimezone(tz).strftime("%m/%d %H:%M")


def _format_day_label(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"
