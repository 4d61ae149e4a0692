"""Configuration schema using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tipster.config.defaults import DEFAULT_ACTIVITY, DEFAULT_COOLDOWN_HOURS, DEFAULT_KEY_PREFIX


class MessageDefinition(BaseModel):
    """Resolved message definition for one (category, type)."""

    model_config = ConfigDict(extra="allow")

    text: str = ""
    delay: int = 0
    duration: int | None = None
    cooldown_hours: float = DEFAULT_COOLDOWN_HOURS
    disable: bool = False


class MessageOverride(BaseModel):
    """Partial override; unset, None or empty fields inherit the default."""

    model_config = ConfigDict(extra="allow")

    text: str | None = None
    delay: int | None = None
    duration: int | None = None
    cooldown_hours: float | None = None
    disable: bool | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: object) -> object:
        if value == "":
            return None
        return value


class StorageConfig(BaseModel):
    """Persistence backend for shown records and activity facts."""

    model_config = ConfigDict(extra="ignore")

    backend: Literal["memory", "sqlite"] = "sqlite"
    db_path: str = "~/.tipster/data/tipster.db"
    key_prefix: str = DEFAULT_KEY_PREFIX

    @property
    def db_file(self) -> Path:
        return Path(self.db_path).expanduser()


class ActivityConfig(BaseModel):
    """Windows used to derive returning/reconnect eligibility."""

    model_config = ConfigDict(extra="ignore")

    returning_min_minutes: float = Field(default=DEFAULT_ACTIVITY["returning_min_minutes"], ge=0)
    returning_max_minutes: float = Field(default=DEFAULT_ACTIVITY["returning_max_minutes"], ge=0)
    reconnect_max_days: float = Field(default=DEFAULT_ACTIVITY["reconnect_max_days"], ge=0)

    @model_validator(mode="after")
    def _validate_window(self) -> "ActivityConfig":
        if self.returning_min_minutes > self.returning_max_minutes:
            raise ValueError("activity.returningMinMinutes must not exceed returningMaxMinutes")
        return self


class LoggingConfig(BaseModel):
    """Log sink settings."""

    model_config = ConfigDict(extra="ignore")

    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class TipsterConfig(BaseSettings):
    """Root configuration for tipster."""

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_prefix="TIPSTER_",
        env_nested_delimiter="__",
    )

    config_version: int = 1
    storage: StorageConfig = Field(default_factory=StorageConfig)
    activity: ActivityConfig = Field(default_factory=ActivityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    messages: dict[str, dict[str, MessageOverride]] = Field(default_factory=dict)

    def message_overrides(self) -> dict[str, dict[str, dict[str, object]]]:
        """Overrides as plain dicts, dropping fields that were never set."""
        return {
            category: {
                msg_type: override.model_dump(exclude_none=True)
                for msg_type, override in types.items()
            }
            for category, types in self.messages.items()
        }
