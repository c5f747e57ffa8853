"""Configuration helpers for the news meme service."""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

NEWS_CREDENTIALS = ("NEWSDATA_API_KEY",)
GEMINI_CREDENTIALS = ("GEMINI_API_KEY",)
IMGFLIP_CREDENTIALS = ("IMGFLIP_USERNAME", "IMGFLIP_PASSWORD")
ALL_CREDENTIALS = NEWS_CREDENTIALS + GEMINI_CREDENTIALS + IMGFLIP_CREDENTIALS

_CREDENTIAL_FIELDS = {
    "NEWSDATA_API_KEY": "newsdata_api_key",
    "GEMINI_API_KEY": "gemini_api_key",
    "IMGFLIP_USERNAME": "imgflip_username",
    "IMGFLIP_PASSWORD": "imgflip_password",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    newsdata_api_key: str | None = Field(None, alias="NEWSDATA_API_KEY")
    gemini_api_key: str | None = Field(None, alias="GEMINI_API_KEY")
    imgflip_username: str | None = Field(None, alias="IMGFLIP_USERNAME")
    imgflip_password: str | None = Field(None, alias="IMGFLIP_PASSWORD")

    gemini_model: str = Field(
        "gemini-2.0-flash", description="Generative model used for captions."
    )
    newsdata_url: str = Field(
        "https://newsdata.io/api/1/latest",
        description="NewsData 'latest' search endpoint.",
    )
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    imgflip_base_url: str = "https://api.imgflip.com"
    news_country: str = Field("in", description="Country scope for news search.")
    news_language: str = Field("en", description="Language scope for news search.")
    http_timeout: float = Field(
        30.0, description="Per-request timeout (seconds) for upstream calls."
    )

    log_level: str = "INFO"
    log_format: str = Field("text", description="'text' or 'json'.")
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    cors_allow_all: bool = True
    cors_allow_origins: str = ""


def get_settings() -> Settings:
    """Build the settings object; call once at startup and pass it along."""
    return Settings()


def missing_credentials(
    settings: Settings, names: Iterable[str] = ALL_CREDENTIALS
) -> list[str]:
    return [
        name
        for name in names
        if not getattr(settings, _CREDENTIAL_FIELDS[name])
    ]


def require_credentials(
    settings: Settings, names: Sequence[str] = ALL_CREDENTIALS
) -> None:
    """
    Ensure every named credential is present and non-empty.

    Raises ConfigurationError naming all missing keys at once, so they can be
    fixed in a single pass.
    """
    missing = missing_credentials(settings, names)
    if missing:
        raise ConfigurationError(missing)
