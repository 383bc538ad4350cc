from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./cafe_pos.db"

    REMOTE_TIMEOUT: float = 10.0

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    INSIGHT_TIMEOUT: float = 30.0
    INSIGHT_LANGUAGE: str = "English"

    SEED_DEFAULT_CATALOG: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
