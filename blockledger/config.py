from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DemoConfig(BaseModel):
    blocks: int = Field(default=20, ge=0)
    first_record_id: int = Field(default=1, ge=1)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BLOCKLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False

    demo: DemoConfig = DemoConfig()


def load_settings() -> Settings:
    # Validation errors (e.g. negative block counts) propagate to the caller.
    return Settings()


__all__ = ["DemoConfig", "Settings", "load_settings"]
