"""
Application configuration management using Pydantic Settings.

This module provides a type-safe, centralized configuration system
that loads from environment variables with sensible defaults.
"""

from dataclasses import dataclass
from typing import Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class EndingPolicy:
    """Bittersweet ending policy, passed explicitly into the engine."""
    allow_bittersweet: bool = True
    bittersweet_chance: float = 0.06
    allowed_types: Tuple[str, ...] = ("Emotional", "Brave")


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via .env file or environment variables.
    Settings are validated at startup using Pydantic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===== Cast =====
    HERO_NAME: str = Field(
        default="Willy the golden puppy",
        description="The recurring hero animal present in every story"
    )

    TITLE_PREFIX: str = Field(
        default="Willy & Friends",
        description="Series prefix used at the start of every title"
    )

    COMPANIONS: str = Field(
        default="Pip the kitten,Momo the bunny",
        description="Comma-separated pair of ensemble companions"
    )

    # ===== Story Defaults =====
    DEFAULT_STORY_TYPE: str = Field(
        default="Adventure",
        description="Story type used when the caller does not pick one"
    )

    DEFAULT_LOCATION: str = Field(
        default="Park meadow, soft grass, big tree, distant hills",
        description="Location used when the caller does not supply one"
    )

    DEFAULT_WEATHER: str = Field(
        default="Spring morning, soft sunlight, mild breeze",
        description="Weather/time used when the caller does not supply one"
    )

    # ===== Ending Policy =====
    ALLOW_BITTERSWEET: bool = Field(
        default=True,
        description="Global switch for rare bittersweet endings"
    )

    BITTERSWEET_CHANCE: float = Field(
        default=0.06,
        ge=0.0,
        le=1.0,
        description="Probability of a bittersweet ending for eligible story types"
    )

    BITTERSWEET_STORY_TYPES: str = Field(
        default="Emotional,Brave",
        description="Comma-separated story types eligible for bittersweet endings"
    )

    @field_validator('ALLOW_BITTERSWEET', 'DEV_MODE', mode='before')
    @classmethod
    def parse_bool_string(cls, v):
        """Parse boolean from string values (env vars are strings)."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() in ("true", "1", "yes", "on")
        return False

    # ===== Validation =====
    MAX_VALIDATION_RETRIES: int = Field(
        default=3,
        ge=0,
        le=20,
        description="Triad re-rolls allowed after the first failed validation"
    )

    TRIAD_CATALOG_PATH: str | None = Field(
        default=None,
        description="Optional JSON file replacing the built-in triad catalog"
    )

    # ===== Logging =====
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    LOG_BUFFER_SIZE: int = Field(
        default=1000,
        ge=10,
        description="Number of recent log entries kept in memory"
    )

    # ===== API Settings =====
    DEV_MODE: bool = Field(
        default=True,
        description="Development mode (relaxes CORS)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="API server host"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="API server port"
    )

    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for all (dev only)."
    )

    @staticmethod
    def _split(value: str) -> list[str]:
        return [v.strip() for v in value.split(",") if v.strip()]

    @property
    def companions_list(self) -> list[str]:
        """Get the ensemble companions, in configured order."""
        return self._split(self.COMPANIONS)

    @property
    def bittersweet_types_list(self) -> list[str]:
        return self._split(self.BITTERSWEET_STORY_TYPES)

    @property
    def allowed_origins_list(self) -> list[str]:
        """Get list of allowed CORS origins. '*' is only honored in DEV_MODE."""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"] if self.DEV_MODE else []
        return self._split(self.ALLOWED_ORIGINS)

    @property
    def ending_policy(self) -> EndingPolicy:
        """Snapshot of the ending policy as an immutable value."""
        return EndingPolicy(
            allow_bittersweet=self.ALLOW_BITTERSWEET,
            bittersweet_chance=self.BITTERSWEET_CHANCE,
            allowed_types=tuple(self.bittersweet_types_list),
        )


# Global configuration instance
# Import this in other modules: from storytram.config import config
config = AppConfig()
