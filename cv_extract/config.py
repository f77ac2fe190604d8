"""Runtime settings for cv_extract.

Values come from ``CV_EXTRACT_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CV_EXTRACT_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # spaCy pipeline used for PERSON / place entities
    spacy_model: str = "en_core_web_sm"

    decode_timeout_seconds: float = Field(default=30.0, gt=0)
    extractor_workers: int = Field(default=4, ge=1)

    # None means the system temp directory
    temp_dir: Optional[str] = None

    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("cv_extract")
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
