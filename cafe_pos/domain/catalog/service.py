# cafe_pos/domain/catalog/service.py
from typing import List, Optional

from pydantic import TypeAdapter
from sqlalchemy.orm import sessionmaker

from cafe_pos.core.clock import now_millis
from cafe_pos.core.exceptions import BusinessError
from cafe_pos.db.repositories import products as local_products
from cafe_pos.domain.sync.service import SyncPolicy
from cafe_pos.remote.backend import PRODUCTS_TABLE, RemoteClient
from .schemas import Product, ProductIn

ALL_CATEGORIES = "All"

_product_rows = TypeAdapter(List[Product])


class CatalogStore:
    """Product catalog, routed through the sync policy."""

    def __init__(
        self,
        policy: SyncPolicy,
        session_factory: sessionmaker,
        seed_defaults: bool = True,
    ):
        self._policy = policy
        self._session_factory = session_factory
        self._seed_defaults = seed_defaults

    async def list(self) -> List[Product]:
        return await self._policy.read(PRODUCTS_TABLE, self._remote_list, self.list_local)

    async def list_local(self) -> List[Product]:
        async with self._session_factory() as db:
            return await local_products.list_products(db, self._seed_defaults)

    async def upsert(self, product: Product) -> None:
        if not product.id or not product.id.strip():
            raise BusinessError("Product id must not be empty")

        row = product.model_dump(mode="json")

        async def remote_write(remote: RemoteClient) -> None:
            await remote.upsert(PRODUCTS_TABLE, row)

        async def local_write() -> None:
            async with self._session_factory() as db:
                await local_products.upsert_product(db, product, self._seed_defaults)

        await self._policy.write(PRODUCTS_TABLE, "upsert", remote_write, local_write)

    async def remove(self, product_id: str) -> None:
        async def remote_write(remote: RemoteClient) -> None:
            await remote.delete(PRODUCTS_TABLE, product_id)

        async def local_write() -> None:
            async with self._session_factory() as db:
                await local_products.delete_product(db, product_id, self._seed_defaults)

        await self._policy.write(PRODUCTS_TABLE, "delete", remote_write, local_write)

    @staticmethod
    async def _remote_list(remote: RemoteClient) -> List[Product]:
        rows = await remote.select_all(PRODUCTS_TABLE)
        return _product_rows.validate_python(rows)


def product_from_input(data: ProductIn, product_id: Optional[str] = None) -> Product:
    new_id = product_id if product_id is not None else data.id or str(now_millis())
    if not new_id.strip():
        raise BusinessError("Product id must not be empty")
    return Product(
        id=new_id,
        name=data.name,
        price=data.price,
        cost=data.cost,
        category=data.category,
    )


def list_categories(products: List[Product]) -> List[str]:
    seen = dict.fromkeys(p.category for p in products)
    return [ALL_CATEGORIES, *seen]


def filter_products(
    products: List[Product],
    query: str = "",
    category: Optional[str] = None,
) -> List[Product]:
    needle = query.strip().lower()
    return [
        p for p in products
        if needle in p.name.lower()
        and (category in (None, "", ALL_CATEGORIES) or p.category == category)
    ]
