"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.picker.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_ITEM_COUNT,
    DEFAULT_MAX_ROUNDS,
)


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PICKER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    item_count: Annotated[int, Field(ge=0)] = DEFAULT_ITEM_COUNT
    max_rounds: Annotated[int, Field(gt=0)] = DEFAULT_MAX_ROUNDS
    batch_size: Annotated[int, Field(gt=0)] = DEFAULT_BATCH_SIZE
    seed: int | None = None
    log_level: str = "INFO"
    json_logs: bool = False

    def picker_options(self) -> dict[str, object]:
        """Return construction options for a generated-palette session."""
        return {
            "generateItems": True,
            "itemCount": self.item_count,
            "maxRounds": self.max_rounds,
            "defaultSettings": {"batchSize": self.batch_size},
        }


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
