"""Engine configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from mdi_advisor.core.enums import DecayCurve, Language


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (``MDI_`` prefix)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MDI_",
        extra="ignore",
    )

    # Logging
    log_format: str = "json"  # 'json' or 'text'
    log_level: str = "INFO"
    service_name: str = "mdi-advisor"

    # Message catalog
    default_language: Language = Language.en
    fallback_language: Language = Language.en

    # IOB decay curve used when a caller does not pick one explicitly
    iob_decay_curve: DecayCurve = DecayCurve.linear

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]


settings = Settings()
