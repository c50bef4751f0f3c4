"""
Runtime settings for the terminology tools.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .terminology.corpus import DEFAULT_CORPUS_PATH

logger = logging.getLogger("tour-lexicon")


class LexiconSettings(BaseModel):
    """Where the corpus, alias table, gold file and reports live."""

    data_dir: Path = Field(
        default=Path("lexicon_data"),
        description="Directory holding the alias table, gold file and reports"
    )
    corpus_path: Path = Field(
        default=DEFAULT_CORPUS_PATH,
        description="YAML term corpus"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name for the CLI"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @property
    def alias_store_path(self) -> Path:
        return self.data_dir / "aliases.json"

    @property
    def gold_path(self) -> Path:
        return self.data_dir / "gold.jsonl"

    @property
    def report_dir(self) -> Path:
        return self.data_dir / "reports"


def load_settings() -> LexiconSettings:
    """Build settings from the environment, reading a local .env if present.

    Recognized variables: ``TOUR_LEXICON_DATA_DIR``, ``TOUR_LEXICON_CORPUS``,
    ``TOUR_LEXICON_LOG_LEVEL``.
    """
    if not load_dotenv():
        logger.debug(".env file not found, using process environment only")

    values: dict[str, str] = {}
    if os.getenv("TOUR_LEXICON_DATA_DIR"):
        values["data_dir"] = os.environ["TOUR_LEXICON_DATA_DIR"]
    if os.getenv("TOUR_LEXICON_CORPUS"):
        values["corpus_path"] = os.environ["TOUR_LEXICON_CORPUS"]
    if os.getenv("TOUR_LEXICON_LOG_LEVEL"):
        values["log_level"] = os.environ["TOUR_LEXICON_LOG_LEVEL"]

    return LexiconSettings(**values)
