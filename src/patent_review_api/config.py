"""Configuration management for the patent review API."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    gemini_api_key: Optional[str] = Field(None, env="GEMINI_API_KEY")
    anthropic_api_key: Optional[str] = Field(None, env="ANTHROPIC_API_KEY")

    # API Configuration
    api_host: str = Field("0.0.0.0", env="API_HOST")
    api_port: int = Field(8000, env="API_PORT")
    log_level: str = Field("INFO", env="LOG_LEVEL")
    rate_limit_times: int = Field(5, env="RATE_LIMIT_TIMES")
    rate_limit_seconds: int = Field(30, env="RATE_LIMIT_SECONDS")

    # Translation Configuration
    default_model: str = Field("gemini-2.5-flash", env="DEFAULT_MODEL")
    default_target_language: str = Field("German", env="DEFAULT_TARGET_LANGUAGE")
    source_language: str = Field("English", env="SOURCE_LANGUAGE")
    max_upload_mb: int = Field(20, env="MAX_UPLOAD_MB")
    seed_glossary: bool = Field(True, env="SEED_GLOSSARY")

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the application settings."""
    return settings
