# cafe_pos/domain/ledger/service.py
import json
from typing import List

from pydantic import TypeAdapter
from sqlalchemy.orm import sessionmaker

from cafe_pos.db.repositories import transactions as local_ledger
from cafe_pos.domain.sync.service import SyncPolicy
from cafe_pos.remote.backend import TRANSACTIONS_TABLE, RemoteClient
from .schemas import Transaction

EXPORT_FILENAME = "sales_history.json"

_transaction_rows = TypeAdapter(List[Transaction])


class LedgerStore:
    """Append-only list of completed sales, newest first."""

    def __init__(self, policy: SyncPolicy, session_factory: sessionmaker):
        self._policy = policy
        self._session_factory = session_factory

    async def list(self) -> List[Transaction]:
        transactions = await self._policy.read(
            TRANSACTIONS_TABLE, self._remote_list, self.list_local
        )
        return local_ledger.newest_first(transactions)

    async def list_local(self) -> List[Transaction]:
        async with self._session_factory() as db:
            return await local_ledger.list_transactions(db)

    async def append(self, transaction: Transaction) -> None:
        row = transaction.model_dump(mode="json", by_alias=True)

        async def remote_write(remote: RemoteClient) -> None:
            await remote.insert(TRANSACTIONS_TABLE, row)

        async def local_write() -> None:
            async with self._session_factory() as db:
                await local_ledger.append_transaction(db, transaction)

        await self._policy.write(TRANSACTIONS_TABLE, "insert", remote_write, local_write)

    async def export(self) -> bytes:
        """Whole ledger as a JSON document for download."""
        transactions = await self.list()
        return export_transactions(transactions)

    @staticmethod
    async def _remote_list(remote: RemoteClient) -> List[Transaction]:
        rows = await remote.select_all(TRANSACTIONS_TABLE, order="timestamp.desc")
        return _transaction_rows.validate_python(rows)


def export_transactions(transactions: List[Transaction]) -> bytes:
    document = [t.model_dump(mode="json", by_alias=True) for t in transactions]
    return json.dumps(document, ensure_ascii=False, indent=2).encode("utf-8")
