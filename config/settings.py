"""
Application settings using pydantic-settings.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Settings loaded from environment variables and .env files.
    """
    model_config = SettingsConfigDict(
        env_file=('.env', '.env.local'),  # Load both .env and .env.local
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False
    )

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", description="Logging level")
    LOG_JSON: bool = Field(False, description="Render logs as JSON instead of console text")

    # --- Profiles ---
    PROFILES_PATH: str = Field("config/profiles.yaml", description="YAML file holding connection profiles")

    def get_log_level(self) -> str:
        return self.LOG_LEVEL.upper()


def get_settings() -> Settings:
    return Settings()
