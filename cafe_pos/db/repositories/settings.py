# cafe_pos/db/repositories/settings.py
from sqlalchemy.ext.asyncio import AsyncSession

from cafe_pos.db.repositories.local_storage import SETTINGS_KEY, get_document, put_document
from cafe_pos.domain.settings.schemas import AppSettings


async def load_app_settings(
    db: AsyncSession
) -> AppSettings:
    document = await get_document(db, SETTINGS_KEY)
    if document is None:
        return AppSettings()
    return AppSettings.model_validate(document)


async def save_app_settings(
    db: AsyncSession,
    app_settings: AppSettings
) -> None:
    await put_document(db, SETTINGS_KEY, app_settings.model_dump(mode="json", by_alias=True))
