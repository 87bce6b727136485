from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Literal

from .schemas import ReviewSettings, SessionSettingsIn

class Settings(BaseSettings):
    # Review defaults
    SHUFFLE_CARDS: bool = False
    SHUFFLE_ANSWERS: bool = True
    AUTO_ADVANCE_ON_CORRECT: bool = False
    AUTO_ADVANCE_ON_INCORRECT: bool = False
    AUTO_ADVANCE_DELAY_MS: int = 1000
    COMPLETION_DELAY_MS: int = 1000
    DEFAULT_CARD_TYPE: Literal["multiple-choice", "fill-in-the-blank", "qa"] = "multiple-choice"

    # Safety/abuse knobs
    MAX_SOURCE_KB: int = 256
    MAX_SESSIONS: int = 1000
    RATE_LIMIT: str = "120/minute"

    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOW_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # Optional extra frontend
    FRONTEND_ORIGIN: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def review_settings(self, overrides: SessionSettingsIn | None = None) -> ReviewSettings:
        """Review defaults from the environment, with per-session overrides on top."""
        base = ReviewSettings(
            shuffle_cards=self.SHUFFLE_CARDS,
            shuffle_answers=self.SHUFFLE_ANSWERS,
            auto_advance_on_correct=self.AUTO_ADVANCE_ON_CORRECT,
            auto_advance_on_incorrect=self.AUTO_ADVANCE_ON_INCORRECT,
            auto_advance_delay_ms=self.AUTO_ADVANCE_DELAY_MS,
            completion_delay_ms=self.COMPLETION_DELAY_MS,
            default_card_type=self.DEFAULT_CARD_TYPE,
        )
        if overrides is None:
            return base
        return ReviewSettings.model_validate({**base.model_dump(), **overrides.model_dump(exclude_none=True)})

settings = Settings()
if settings.FRONTEND_ORIGIN:
    settings.ALLOW_ORIGINS.append(settings.FRONTEND_ORIGIN)
