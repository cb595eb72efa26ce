"""Configuration management for the ReThread redesign service."""

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseModel):
    """Gemini image-generation endpoint settings."""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash-image-preview"
    timeout: float = 300.0  # 5 min timeout for generation

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"


class UploadConfig(BaseModel):
    """Garment upload limits."""
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_media_types: tuple[str, ...] = ("image/png", "image/jpeg", "image/webp")


class RethreadConfig(BaseSettings):
    """Main service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    # Sub-configs
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)

    # Credential (loaded from .env or the environment)
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY", "gemini_api_key"),
    )

    # In-memory workflow sessions
    max_sessions: int = 500
    session_idle_ttl: float = 3600.0  # seconds

    log_level: str = "INFO"


def load_config() -> RethreadConfig:
    """Load configuration from environment and defaults."""
    return RethreadConfig()
