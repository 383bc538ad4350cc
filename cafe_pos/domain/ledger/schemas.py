# cafe_pos/domain/ledger/schemas.py
import enum
from typing import Tuple

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    QR = "qr"


class TransactionItem(BaseModel):
    """A product line as it was sold.

    Price and cost are copied from the cart at checkout so that later catalog
    edits never change what a historical sale was worth.
    """

    id: str
    name: str
    price: float
    cost: float
    category: str = ""
    quantity: int

    class Config:
        frozen = True


class Transaction(BaseModel):
    id: str
    timestamp: int  # ms since epoch
    items: Tuple[TransactionItem, ...]
    total_amount: float
    total_profit: float
    payment_method: PaymentMethod

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
