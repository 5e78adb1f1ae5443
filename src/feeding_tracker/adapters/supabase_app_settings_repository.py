"""Supabase repository for the shared settings row."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from feeding_tracker.domain.feeds import AppSetting
from feeding_tracker.services.app_settings import AppSettingsRepository

SETTINGS_ROW_ID = 1


@dataclass
class SupabaseAppSettingsRepository(AppSettingsRepository):
    """Supabase implementation for the app_settings table."""

    client: Client

    def get_setting(self) -> AppSetting | None:
        """Return the singleton settings row."""
        response = (
            self.client.table("app_settings")
            .select("id, breast_ml_per_minute, updated_at")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("breast_ml_per_minute") is None:
            return None
        updated_at_raw = row.get("updated_at")
        return AppSetting(
            breast_ml_per_minute=float(row["breast_ml_per_minute"]),
            updated_at=(
                datetime.fromisoformat(updated_at_raw)
                if isinstance(updated_at_raw, str) and updated_at_raw
                else None
            ),
        )

    def upsert_breast_ml_per_minute(self, value: float) -> None:
        """Replace the singleton row's rate."""
        self.client.table("app_settings").upsert(
            {
                "id": SETTINGS_ROW_ID,
                "breast_ml_per_minute": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
