# cafe_pos/domain/checkout/schemas.py
from typing import List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from cafe_pos.domain.catalog.schemas import Product
from cafe_pos.domain.ledger.schemas import PaymentMethod, Transaction


class CartLine(Product):
    quantity: int = 1


class AddItem(BaseModel):
    product_id: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdjustQuantity(BaseModel):
    delta: int


class CheckoutRequest(BaseModel):
    payment_method: PaymentMethod

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CartOut(BaseModel):
    lines: List[CartLine]
    total: float
    profit: float
    item_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CheckoutOut(BaseModel):
    """``transaction`` is null when the cart was empty and nothing was sold."""

    transaction: Optional[Transaction]
    cart: CartOut
