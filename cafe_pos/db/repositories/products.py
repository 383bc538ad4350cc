# cafe_pos/db/repositories/products.py
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from cafe_pos.db.repositories.local_storage import PRODUCTS_KEY, get_document, put_document
from cafe_pos.domain.catalog.schemas import Product

DEFAULT_PRODUCTS = [
    Product(id="1", name="Latte", price=22, cost=6, category="Drinks"),
    Product(id="2", name="Americano", price=18, cost=4, category="Drinks"),
    Product(id="3", name="Caramel Macchiato", price=25, cost=7, category="Drinks"),
    Product(id="4", name="Pour-over Yirgacheffe", price=32, cost=12, category="Drinks"),
    Product(id="5", name="Butter Croissant", price=12, cost=5, category="Bakery"),
    Product(id="6", name="Basque Cheesecake", price=28, cost=10, category="Dessert"),
    Product(id="7", name="Earl Grey Tea", price=15, cost=3, category="Drinks"),
    Product(id="8", name="Tiramisu", price=32, cost=12, category="Dessert"),
]


async def list_products(
    db: AsyncSession,
    seed_defaults: bool = True
) -> List[Product]:
    document = await get_document(db, PRODUCTS_KEY)
    if document is None:
        return [p.model_copy() for p in DEFAULT_PRODUCTS] if seed_defaults else []
    return [Product.model_validate(row) for row in document]


async def save_products(
    db: AsyncSession,
    products: List[Product]
) -> None:
    await put_document(db, PRODUCTS_KEY, [p.model_dump(mode="json") for p in products])


async def upsert_product(
    db: AsyncSession,
    product: Product,
    seed_defaults: bool = True
) -> None:
    current = await list_products(db, seed_defaults)
    updated = []
    replaced = False
    for existing in current:
        if existing.id == product.id:
            updated.append(product)
            replaced = True
        else:
            updated.append(existing)
    if not replaced:
        updated.append(product)
    await save_products(db, updated)


async def delete_product(
    db: AsyncSession,
    product_id: str,
    seed_defaults: bool = True
) -> None:
    current = await list_products(db, seed_defaults)
    await save_products(db, [p for p in current if p.id != product_id])
