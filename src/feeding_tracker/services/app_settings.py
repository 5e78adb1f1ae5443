"""Shared application settings service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from feeding_tracker.domain.feeds import AppSetting
from feeding_tracker.services.aggregation import (
    DEFAULT_BREAST_ML_PER_MINUTE,
    clamp_non_negative,
)

logger = logging.getLogger(__name__)


class AppSettingsRepository(Protocol):
    """Persistence interface for the singleton settings row."""

    def get_setting(self) -> AppSetting | None:
        """Return the stored setting, if any."""

    def upsert_breast_ml_per_minute(self, value: float) -> None:
        """Replace the stored ml-per-minute rate."""


@dataclass
class AppSettingsService:
    """Service for the shared ml-per-minute rate."""

    repository: AppSettingsRepository
    default_breast_ml_per_minute: float = DEFAULT_BREAST_ML_PER_MINUTE

    def get_breast_ml_per_minute(self) -> float:
        """Return the stored rate or the default when no row exists."""
        setting = self.repository.get_setting()
        if setting is None:
            return self.default_breast_ml_per_minute
        return setting.breast_ml_per_minute

    def set_breast_ml_per_minute(self, value: float) -> float:
        """Persist a rate, clamped at zero, and return what was stored."""
        stored = clamp_non_negative(value)
        self.repository.upsert_breast_ml_per_minute(stored)
        logger.info("Updated breast ml per minute", extra={"value": stored})
        return stored

