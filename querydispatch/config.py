"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CANDIDATES: tuple[str, ...] = (
    "daniel0113",
    "rebeka",
    "kriszta",
    "dani01",
    "admin@dan0.pw",
    "tesztuser",
    "tesztvagyok",
    "Krisztián01",
    "tesztfelhasználó",
    "lacika2000",
    "zsombibombi0",
    "newuser1",
    "newuser2",
    "newuser3",
)

NO_MATCH_MESSAGE = "No matching username found."


class TimingSettings(BaseModel):
    debounce_delay_ms: int = Field(default=300, ge=0)
    throttle_limit_ms: int = Field(default=800, ge=0)


class SearchSettings(BaseModel):
    candidates: list[str] = Field(default_factory=lambda: list(DEFAULT_CANDIDATES))
    no_match_message: str = Field(default=NO_MATCH_MESSAGE, min_length=1)


class DemoSettings(BaseModel):
    keystroke_interval_ms: int = Field(default=120, ge=0)


class DispatcherSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    timing: TimingSettings = Field(default_factory=TimingSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    demo: DemoSettings = Field(default_factory=DemoSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value


@lru_cache
def get_settings() -> DispatcherSettings:
    """Return cached settings instance."""

    return DispatcherSettings()


__all__ = [
    "DEFAULT_CANDIDATES",
    "DemoSettings",
    "DispatcherSettings",
    "NO_MATCH_MESSAGE",
    "SearchSettings",
    "TimingSettings",
    "get_settings",
]
