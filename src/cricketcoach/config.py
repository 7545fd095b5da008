from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CRICKETCOACH_",
        case_sensitive=False,
    )

    # App
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    db_url: str = "sqlite+aiosqlite:///./cricketcoach.db"

    # Availability
    availability_window_days: int = 28
    max_window_days: int = 90


def get_settings() -> Settings:
    return Settings()
