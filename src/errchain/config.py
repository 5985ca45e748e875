from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    capture_stack: bool = Field(default=True)
    stack_limit: int = Field(default=32, ge=1)
    log_traceback_tail: int = Field(default=6, ge=1)

    @field_validator("capture_stack", mode="before")
    @classmethod
    def _parse_capture_stack(cls, v: bool | str) -> bool | str:
        if v == "":
            return False
        return v

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
