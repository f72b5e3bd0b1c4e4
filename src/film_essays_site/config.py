from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from film_essays_site.models import Language


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    site_url: str = Field(alias="SITE_URL")
    site_title: str = Field(default="Film Essays", alias="SITE_TITLE")
    site_description: str = Field(default="", alias="SITE_DESCRIPTION")

    content_dir: Path = Field(default=Path("content"), alias="CONTENT_DIR")
    output_dir: Path = Field(default=Path("dist"), alias="OUTPUT_DIR")

    default_language: Language = Field(default=Language.SK, alias="DEFAULT_LANGUAGE")
    related_limit: int = Field(default=3, ge=0, alias="RELATED_LIMIT")
    words_per_minute: int = Field(default=200, gt=0, alias="WORDS_PER_MINUTE")

    search_index_url: str | None = Field(default=None, alias="SEARCH_INDEX_URL")
    contact_endpoint: str | None = Field(default=None, alias="CONTACT_ENDPOINT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


def load_settings() -> Settings:
    return Settings()
