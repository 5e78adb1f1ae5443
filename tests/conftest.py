"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from feeding_tracker.config import Settings
from feeding_tracker.containers import AppContainer
from feeding_tracker.domain.feeds import AppSetting, FeedRecord, FeedType, NewFeed
from feeding_tracker.services.app_settings import (
    AppSettingsRepository,
    AppSettingsService,
)
from feeding_tracker.services.feed_logs import FeedLogRepository, FeedLogService


def make_record(  # noqa: PLR0913
    created_at: datetime,
    feed_type: FeedType = FeedType.BREAST,
    left_minutes: int | None = None,
    right_minutes: int | None = None,
    formula_ml: int | None = None,
    record_id: str | None = None,
) -> FeedRecord:
    """Build a stored record for tests."""
    return FeedRecord(
        id=record_id or str(uuid4()),
        created_at=created_at,
        feed_type=feed_type,
        left_minutes=left_minutes,
        right_minutes=right_minutes,
        formula_ml=formula_ml,
    )


@dataclass
class InMemoryFeedLogRepository(FeedLogRepository):
    """In-memory feed log repository for tests."""

    records: list[FeedRecord] = field(default_factory=list)
    reject_deletes: bool = False
    fail_with: Exception | None = None
    list_fails_with: Exception | None = None
    list_calls: int = 0
    delete_calls: list[str] = field(default_factory=list)

    def insert_feed(self, feed: NewFeed) -> str | None:
        self._maybe_fail()
        record = make_record(
            created_at=datetime.now(tz=UTC),
            feed_type=feed.feed_type,
            left_minutes=feed.left_minutes,
            right_minutes=feed.right_minutes,
            formula_ml=feed.formula_ml,
        )
        self.records.append(record)
        return record.id

    def list_recent_feeds(self, limit: int) -> list[FeedRecord]:
        self._maybe_fail()
        if self.list_fails_with is not None:
            raise self.list_fails_with
        self.list_calls += 1
        ordered = sorted(self.records, key=lambda r: r.created_at, reverse=True)
        return ordered[:limit]

    def delete_feed(self, record_id: str) -> list[str]:
        self._maybe_fail()
        self.delete_calls.append(record_id)
        if self.reject_deletes:
            return []
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        return [record_id] if len(self.records) < before else []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with


@dataclass
class InMemoryAppSettingsRepository(AppSettingsRepository):
    """In-memory settings repository for tests."""

    setting: AppSetting | None = None
    writes: list[float] = field(default_factory=list)
    fail_with: Exception | None = None
    read_fails_with: Exception | None = None

    def get_setting(self) -> AppSetting | None:
        if self.fail_with is not None:
            raise self.fail_with
        if self.read_fails_with is not None:
            raise self.read_fails_with
        return self.setting

    def upsert_breast_ml_per_minute(self, value: float) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.writes.append(value)
        self.setting = AppSetting(
            breast_ml_per_minute=value, updated_at=datetime.now(tz=UTC)
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="header.payload.signature",
        display_timezone="UTC",
    )


@pytest.fixture
def feed_log_repository() -> InMemoryFeedLogRepository:
    return InMemoryFeedLogRepository()


@pytest.fixture
def app_settings_repository() -> InMemoryAppSettingsRepository:
    return InMemoryAppSettingsRepository()


@pytest.fixture
def container(
    settings: Settings,
    feed_log_repository: InMemoryFeedLogRepository,
    app_settings_repository: InMemoryAppSettingsRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        feed_log_service=FeedLogService(feed_log_repository),
        app_settings_service=AppSettingsService(app_settings_repository),
        timezone=UTC,
    )
