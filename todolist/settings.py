from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES = [PROJECT_ROOT / ".env", ".env"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILES, extra="ignore")

    # DB
    DATABASE_URL: str = "sqlite:///./data/todolist.db"

    # App
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # API
    API_KEY: str | None = None

    # Reminders
    NOTIFICATIONS_ENABLED: bool = True
    DUE_SOON_MIN: int = 60
    REMINDER_POLL_SEC: int = 30


settings = Settings()
