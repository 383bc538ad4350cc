# cafe_pos/db/repositories/transactions.py
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from cafe_pos.db.repositories.local_storage import TRANSACTIONS_KEY, get_document, put_document
from cafe_pos.domain.ledger.schemas import Transaction


def newest_first(transactions: List[Transaction]) -> List[Transaction]:
    # stable: equal timestamps keep their stored order
    return sorted(transactions, key=lambda t: t.timestamp, reverse=True)


async def list_transactions(
    db: AsyncSession
) -> List[Transaction]:
    document = await get_document(db, TRANSACTIONS_KEY)
    if document is None:
        return []
    return newest_first([Transaction.model_validate(row) for row in document])


async def append_transaction(
    db: AsyncSession,
    transaction: Transaction
) -> None:
    current = await list_transactions(db)
    updated = [transaction, *current]
    await put_document(
        db,
        TRANSACTIONS_KEY,
        [t.model_dump(mode="json", by_alias=True) for t in updated],
    )
