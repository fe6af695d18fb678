# backend/drivebook/core/config.py
import logging

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_AVERAGE_SPEED_KPH,
    DEFAULT_LESSON_DURATION_MINUTES,
    GOOGLE_MAPS_API_BASE_URL,
)

logger = logging.getLogger(__name__)

TRAVEL_PROVIDERS = {"simple", "google", "mock"}


class Settings(BaseSettings):
    """Runtime settings for slot computation and travel estimation."""

    travel_provider: str = Field(
        default="simple",
        description="Travel cost provider: simple (haversine), google (traffic-aware) or mock",
    )
    maps_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("DRIVEBOOK_MAPS_API_KEY", "MAPS_API_KEY"),
        description="Google Maps API key used by the distance matrix provider",
    )
    maps_base_url: str = Field(default=GOOGLE_MAPS_API_BASE_URL)
    travel_request_timeout_seconds: float = Field(default=10.0, gt=0)
    average_speed_kph: float = Field(
        default=DEFAULT_AVERAGE_SPEED_KPH,
        gt=0,
        description="Constant speed used by the great-circle travel estimator",
    )
    default_lesson_duration_minutes: int = Field(default=DEFAULT_LESSON_DURATION_MINUTES, gt=0)
    slow_operation_threshold_seconds: float = 1.0

    model_config = SettingsConfigDict(
        env_prefix="DRIVEBOOK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("travel_provider", mode="before")
    @classmethod
    def _normalize_travel_provider(cls, value: object) -> object:
        if value is None:
            return "simple"
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized not in TRAVEL_PROVIDERS:
                logger.warning("Unknown travel provider %r; using simple estimator", value)
                return "simple"
            return normalized
        return value

    @property
    def has_maps_api_key(self) -> bool:
        return bool(self.maps_api_key.get_secret_value().strip())


settings = Settings()
