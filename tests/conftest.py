"""Shared pytest fixtures for the POS tests."""

import json
from typing import Dict, List

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from cafe_pos.db.base import init_models, make_session_factory
from cafe_pos.domain.catalog.schemas import Product
from cafe_pos.domain.ledger.schemas import PaymentMethod, Transaction, TransactionItem
from cafe_pos.domain.settings.schemas import AppSettings
from cafe_pos.domain.sync.service import SyncPolicy


class FakeRemoteBackend:
    """In-memory PostgREST stand-in served through httpx.MockTransport."""

    def __init__(self):
        self.tables: Dict[str, List[dict]] = {"products": [], "transactions": []}
        self.fail = False
        self.malformed = False
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail:
            return httpx.Response(503, json={"message": "service unavailable"})

        table = request.url.path.rsplit("/", 1)[-1]
        rows = self.tables.setdefault(table, [])

        if request.method == "GET":
            if self.malformed:
                return httpx.Response(200, json={"unexpected": "shape"})
            result = list(rows)
            order = request.url.params.get("order")
            if order:
                column, direction = order.split(".")
                result.sort(key=lambda r: r[column], reverse=direction == "desc")
            return httpx.Response(200, json=result)

        if request.method == "POST":
            row = json.loads(request.content)
            if "merge-duplicates" in request.headers.get("prefer", ""):
                rows[:] = [r for r in rows if r["id"] != row["id"]]
            rows.append(row)
            return httpx.Response(201)

        if request.method == "DELETE":
            row_id = request.url.params["id"].removeprefix("eq.")
            rows[:] = [r for r in rows if r["id"] != row_id]
            return httpx.Response(204)

        return httpx.Response(405)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def writes(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]


CLOUD_SETTINGS = AppSettings(
    use_cloud=True,
    remote_endpoint="https://shop.example.co",
    remote_credential="anon-key",
)


def make_transaction(txn_id: str, timestamp: int, items=None, method=PaymentMethod.CASH) -> Transaction:
    """Build a transaction with totals derived from its items."""
    items = items or [TransactionItem(id="1", name="Latte", price=22, cost=6, quantity=1)]
    return Transaction(
        id=txn_id,
        timestamp=timestamp,
        items=tuple(items),
        total_amount=sum(i.price * i.quantity for i in items),
        total_profit=sum((i.price - i.cost) * i.quantity for i in items),
        payment_method=method,
    )


@pytest.fixture
def latte() -> Product:
    return Product(id="1", name="Latte", price=22, cost=6, category="Drinks")


@pytest.fixture
def croissant() -> Product:
    return Product(id="5", name="Butter Croissant", price=12, cost=5, category="Bakery")


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def remote() -> FakeRemoteBackend:
    return FakeRemoteBackend()


@pytest.fixture
async def local_policy():
    policy = SyncPolicy()
    yield policy
    await policy.close()


@pytest.fixture
async def cloud_policy(remote):
    policy = SyncPolicy(transport=remote.transport)
    assert await policy.configure(CLOUD_SETTINGS)
    yield policy
    await policy.close()
