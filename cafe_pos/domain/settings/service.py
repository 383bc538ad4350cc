# cafe_pos/domain/settings/service.py
from sqlalchemy.orm import sessionmaker

from cafe_pos.db.repositories.settings import load_app_settings, save_app_settings
from .schemas import AppSettings


class SettingsStore:
    """Local-only persistence of the application settings record."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def load(self) -> AppSettings:
        async with self._session_factory() as db:
            return await load_app_settings(db)

    async def save(self, app_settings: AppSettings) -> None:
        async with self._session_factory() as db:
            await save_app_settings(db, app_settings)
