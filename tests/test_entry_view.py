"""Tests for the quick-entry view model."""

from datetime import UTC, datetime, timedelta

from postgrest.exceptions import APIError

from feeding_tracker.domain.feeds import AppSetting, FeedType
from feeding_tracker.errors import DELETE_REJECTED_MESSAGE, DeleteRejectedError
from feeding_tracker.services.app_settings import AppSettingsService
from feeding_tracker.services.entry_view import EntryPhase, EntryView
from feeding_tracker.services.feed_logs import FeedLogService
from tests.conftest import (
    InMemoryAppSettingsRepository,
    InMemoryFeedLogRepository,
    make_record,
)


def _build_view(
    feed_repo: InMemoryFeedLogRepository,
    settings_repo: InMemoryAppSettingsRepository | None = None,
) -> EntryView:
    return EntryView(
        feed_logs=FeedLogService(feed_repo),
        app_settings=AppSettingsService(
            settings_repo or InMemoryAppSettingsRepository()
        ),
        tz=UTC,
    )


def test_load_fetches_records_and_rate() -> None:
    now = datetime.now(tz=UTC)
    feed_repo = InMemoryFeedLogRepository(
        records=[make_record(now, FeedType.FORMULA, formula_ml=90)]
    )
    settings_repo = InMemoryAppSettingsRepository(
        setting=AppSetting(breast_ml_per_minute=6)
    )
    view = _build_view(feed_repo, settings_repo)

    view.load()

    assert len(view.records) == 1
    assert view.breast_ml_per_minute == 6
    assert view.error is None


def test_load_keeps_default_rate_when_setting_missing() -> None:
    view = _build_view(InMemoryFeedLogRepository())

    view.load()

    assert view.breast_ml_per_minute == 8


def test_load_respects_log_limit() -> None:
    now = datetime.now(tz=UTC)
    feed_repo = InMemoryFeedLogRepository(
        records=[
            make_record(now - timedelta(minutes=i), FeedType.FORMULA, formula_ml=i)
            for i in range(5)
        ]
    )
    view = _build_view(feed_repo)
    view.log_limit = 3

    view.load()

    assert [record.formula_ml for record in view.records] == [0, 1, 2]


def test_submit_breast_feed_refetches_list() -> None:
    feed_repo = InMemoryFeedLogRepository()
    view = _build_view(feed_repo)
    view.load()
    calls_before = feed_repo.list_calls

    assert view.submit()

    assert view.phase is EntryPhase.IDLE
    assert feed_repo.list_calls == calls_before + 1
    assert len(view.records) == 1
    record = view.records[0]
    assert record.feed_type == FeedType.BREAST
    assert (record.left_minutes, record.right_minutes) == (10, 10)
    assert record.formula_ml is None
    assert view.today.total_ml == 160


def test_submit_formula_feed() -> None:
    feed_repo = InMemoryFeedLogRepository()
    view = _build_view(feed_repo)
    view.select_feed_type(FeedType.FORMULA)
    view.adjust_formula(1)

    assert view.submit()

    record = feed_repo.records[0]
    assert record.feed_type == FeedType.FORMULA
    assert record.formula_ml == 130
    assert record.left_minutes is None
    assert record.right_minutes is None


def test_today_totals_and_weekly_chart() -> None:
    now = datetime.now(tz=UTC)
    feed_repo = InMemoryFeedLogRepository(
        records=[
            make_record(now, FeedType.BREAST, left_minutes=10, right_minutes=10),
            make_record(now, FeedType.FORMULA, formula_ml=120),
            make_record(now - timedelta(days=2), FeedType.FORMULA, formula_ml=60),
        ]
    )
    view = _build_view(feed_repo)
    view.load()

    assert view.today.total_ml == 280
    assert view.today.count == 2
    assert len(view.recent_daily) == 7
    assert view.recent_daily[-1].total_ml == 280
    assert view.recent_daily[-3].total_ml == 60
    assert view.recent_daily_latest_first[0] == view.recent_daily[-1]
    assert view.chart_max_ml == 280


def test_submit_failure_keeps_prior_state_and_message() -> None:
    now = datetime.now(tz=UTC)
    existing = make_record(now, FeedType.FORMULA, formula_ml=100)
    feed_repo = InMemoryFeedLogRepository(records=[existing])
    view = _build_view(feed_repo)
    view.load()
    feed_repo.fail_with = APIError({"message": "new row violates policy"})

    assert not view.submit()

    assert view.phase is EntryPhase.IDLE
    assert view.error == "new row violates policy"
    assert view.records == [existing]


def test_error_clears_on_next_action() -> None:
    feed_repo = InMemoryFeedLogRepository()
    view = _build_view(feed_repo)
    feed_repo.fail_with = APIError({"message": "offline"})
    view.submit()
    assert view.error == "offline"

    feed_repo.fail_with = None
    assert view.submit()

    assert view.error is None
    assert view.error_cause is None


def test_form_steppers_floor_at_zero() -> None:
    view = _build_view(InMemoryFeedLogRepository())

    for _ in range(5):
        view.adjust_left(-1)
        view.adjust_formula(-1)
    view.adjust_right(1)

    assert view.left_minutes == 0
    assert view.right_minutes == 15
    assert view.formula_ml == 70
    assert view.estimated_breast_ml == 120


def test_set_form_clamps_negative_inputs() -> None:
    view = _build_view(InMemoryFeedLogRepository())

    view.set_form(FeedType.FORMULA, left_minutes=-5, right_minutes=3, formula_ml=-40)

    assert view.feed_type == FeedType.FORMULA
    assert view.left_minutes == 0
    assert view.right_minutes == 3
    assert view.formula_ml == 0


def test_delete_requires_confirmation() -> None:
    now = datetime.now(tz=UTC)
    record = make_record(now, FeedType.FORMULA, formula_ml=100)
    feed_repo = InMemoryFeedLogRepository(records=[record])
    view = _build_view(feed_repo)
    view.load()

    assert not view.delete(record.id, confirmed=False)

    assert feed_repo.delete_calls == []
    assert view.records == [record]


def test_delete_removes_record_and_refetches() -> None:
    now = datetime.now(tz=UTC)
    record = make_record(now, FeedType.FORMULA, formula_ml=100)
    feed_repo = InMemoryFeedLogRepository(records=[record])
    view = _build_view(feed_repo)
    view.load()

    assert view.delete(record.id, confirmed=True)

    assert view.records == []
    assert view.deleting_id is None
    assert view.error is None


def test_delete_rejected_by_policy_surfaces_error() -> None:
    now = datetime.now(tz=UTC)
    record = make_record(now, FeedType.FORMULA, formula_ml=100)
    feed_repo = InMemoryFeedLogRepository(records=[record], reject_deletes=True)
    view = _build_view(feed_repo)
    view.load()

    assert not view.delete(record.id, confirmed=True)

    assert view.error == DELETE_REJECTED_MESSAGE
    assert isinstance(view.error_cause, DeleteRejectedError)
    assert view.deleting_id is None
    assert view.records == [record]

    view.load()
    assert view.records == [record]


def test_delete_store_error_is_shown_verbatim() -> None:
    now = datetime.now(tz=UTC)
    record = make_record(now, FeedType.FORMULA, formula_ml=100)
    feed_repo = InMemoryFeedLogRepository(records=[record])
    view = _build_view(feed_repo)
    view.load()
    feed_repo.fail_with = APIError({"message": "JWT expired"})

    assert not view.delete(record.id, confirmed=True)

    assert view.error == "JWT expired"
    assert not isinstance(view.error_cause, DeleteRejectedError)
    assert view.records == [record]


def test_breast_rate_never_goes_negative_and_persists_each_change() -> None:
    settings_repo = InMemoryAppSettingsRepository(
        setting=AppSetting(breast_ml_per_minute=2)
    )
    view = _build_view(InMemoryFeedLogRepository(), settings_repo)
    view.load()

    for _ in range(4):
        assert view.adjust_breast_rate(-1)
        assert view.breast_ml_per_minute >= 0
    view.adjust_breast_rate(1)

    assert settings_repo.writes == [1, 0, 0, 0, 1]
    assert view.breast_ml_per_minute == 1
    assert settings_repo.setting.breast_ml_per_minute == 1


def test_breast_rate_save_failure_keeps_new_value_and_reports() -> None:
    settings_repo = InMemoryAppSettingsRepository()
    view = _build_view(InMemoryFeedLogRepository(), settings_repo)
    view.load()
    settings_repo.fail_with = APIError({"message": "permission denied"})

    assert not view.adjust_breast_rate(1)

    assert view.breast_ml_per_minute == 9
    assert view.error == "permission denied"


def test_load_reports_failure_of_either_read() -> None:
    feed_repo = InMemoryFeedLogRepository()
    settings_repo = InMemoryAppSettingsRepository(
        setting=AppSetting(breast_ml_per_minute=12)
    )
    view = _build_view(feed_repo, settings_repo)
    assert view.load()

    settings_repo.read_fails_with = APIError({"message": "read timeout"})
    assert not view.load()
    assert view.error == "read timeout"

    settings_repo.read_fails_with = None
    feed_repo.list_fails_with = APIError({"message": "list timeout"})
    assert not view.load()
    assert view.error == "list timeout"
