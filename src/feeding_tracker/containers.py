"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import tzinfo

from supabase import create_client

from feeding_tracker.adapters.supabase_app_settings_repository import (
    SupabaseAppSettingsRepository,
)
from feeding_tracker.adapters.supabase_feed_log_repository import (
    SupabaseFeedLogRepository,
)
from feeding_tracker.config import Settings, resolve_timezone
from feeding_tracker.services.app_settings import AppSettingsService
from feeding_tracker.services.entry_view import EntryView
from feeding_tracker.services.feed_logs import FeedLogService
from feeding_tracker.services.history_view import HistoryView


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    feed_log_service: FeedLogService
    app_settings_service: AppSettingsService
    timezone: tzinfo | None = None

    def entry_view(self) -> EntryView:
        """Create a fresh quick-entry view model."""
        return EntryView(
            feed_logs=self.feed_log_service,
            app_settings=self.app_settings_service,
            log_limit=self.settings.entry_log_limit,
            tz=self.timezone,
            breast_ml_per_minute=self.app_settings_service.default_breast_ml_per_minute,
        )

    def history_view(self) -> HistoryView:
        """Create a fresh history view model."""
        return HistoryView(
            feed_logs=self.feed_log_service,
            app_settings=self.app_settings_service,
            log_limit=self.settings.history_log_limit,
            tz=self.timezone,
            breast_ml_per_minute=self.app_settings_service.default_breast_ml_per_minute,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    feed_log_repository = SupabaseFeedLogRepository(supabase_client)
    app_settings_repository = SupabaseAppSettingsRepository(supabase_client)
    feed_log_service = FeedLogService(feed_log_repository)
    app_settings_service = AppSettingsService(
        repository=app_settings_repository,
        default_breast_ml_per_minute=resolved_settings.default_breast_ml_per_minute,
    )
    return AppContainer(
        settings=resolved_settings,
        feed_log_service=feed_log_service,
        app_settings_service=app_settings_service,
        timezone=resolve_timezone(resolved_settings.display_timezone),
    )
