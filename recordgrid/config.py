"""
Configuration settings for recordgrid.

Uses Pydantic Settings to load environment variables (or a `.env` file) for
logging, pagination defaults, sample data seeding and the export directory.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Pagination
    rows_per_page: int = Field(10, alias="ROWS_PER_PAGE")
    rows_per_page_options: List[int] = Field([5, 10, 25, 50], alias="ROWS_PER_PAGE_OPTIONS")

    # Session
    seed_sample_data: bool = Field(True, alias="SEED_SAMPLE_DATA")
    export_dir: str = Field("exports", alias="EXPORT_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_page_size(self) -> "Settings":
        if any(option <= 0 for option in self.rows_per_page_options):
            raise ValueError("ROWS_PER_PAGE_OPTIONS must contain positive integers")
        if self.rows_per_page not in self.rows_per_page_options:
            raise ValueError(
                f"ROWS_PER_PAGE={self.rows_per_page} is not one of {self.rows_per_page_options}"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
