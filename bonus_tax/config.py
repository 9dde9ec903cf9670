from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal, cast

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}
SEARCH_MODES = {"grid", "exact"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


def _env_search_mode() -> Literal["grid", "exact"]:
    return cast(Literal["grid", "exact"], os.getenv("SEARCH_MODE", "grid").lower())


class Settings(BaseModel):
    min_grid_step: int = Field(default_factory=lambda: int(os.getenv("MIN_GRID_STEP", "100")))
    grid_samples: int = Field(default_factory=lambda: int(os.getenv("GRID_SAMPLES", "50")))
    search_mode: Literal["grid", "exact"] = Field(default_factory=_env_search_mode)
    feature_file_log: bool = Field(default_factory=lambda: _env_bool("FEATURE_FILE_LOG", False))
    log_dir: str = Field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("search_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: str) -> str:
        lower = (value or "grid").lower()
        if lower not in SEARCH_MODES:
            raise ValueError(f"SEARCH_MODE must be grid or exact, got {lower}")
        return lower

    @field_validator("min_grid_step", "grid_samples")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
