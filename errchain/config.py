"""
Library configuration management.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from ERRCHAIN_* environment variables."""

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_prefix = "ERRCHAIN_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
