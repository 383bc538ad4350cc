# cafe_pos/db/repositories/local_storage.py
import json
from typing import Any, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from cafe_pos.db.models.local_storage import LocalRecord

logger = structlog.get_logger(__name__)

PRODUCTS_KEY = "products"
TRANSACTIONS_KEY = "transactions"
SETTINGS_KEY = "appSettings"


async def get_document(
    db: AsyncSession,
    key: str
) -> Optional[Any]:
    result = await db.execute(
        select(LocalRecord).where(LocalRecord.key == key)
    )
    record = result.scalar_one_or_none()
    if record is None:
        return None
    try:
        return json.loads(record.value)
    except ValueError as exc:
        # unreadable document reads as unset; the next write replaces it
        logger.warning("local_document_unreadable", key=key, error=str(exc))
        return None


async def put_document(
    db: AsyncSession,
    key: str,
    document: Any
) -> None:
    await db.merge(LocalRecord(key=key, value=json.dumps(document, ensure_ascii=False)))
    await db.commit()
