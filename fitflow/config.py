"""Runtime configuration, read from environment variables."""

from __future__ import annotations

import logging
import os
from datetime import date
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Year assumed for one-time schedules entered as DD/MM
    reference_year: int = Field(default_factory=lambda: date.today().year, ge=1, le=9999)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance.

    Call ``get_settings.cache_clear()`` after changing the environment
    (tests do this through ``monkeypatch``).
    """
    values: dict[str, str] = {}
    if os.getenv("FITFLOW_REFERENCE_YEAR"):
        values["reference_year"] = os.environ["FITFLOW_REFERENCE_YEAR"]
    if os.getenv("FITFLOW_LOG_LEVEL"):
        values["log_level"] = os.environ["FITFLOW_LOG_LEVEL"].upper()
    return Settings(**values)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
