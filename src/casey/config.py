"""Application configuration.

Settings are read from ``CASEY_*`` environment variables (or a ``.env``
file); command-line flags override them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EngineName = Literal["greedy", "random"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CASEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # UCI identity
    engine_name: str = "Casey"
    engine_author: str = "Casey developers"

    # Engine selection
    engine: EngineName = "greedy"
    seed: int | None = None

    # Logging (stderr; stdout carries the UCI protocol)
    log_level: LogLevel = "WARNING"

    # Perft
    perft_depth: int = Field(default=3, ge=0)
