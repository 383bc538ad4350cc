# cafe_pos/domain/checkout/service.py
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import structlog

from cafe_pos.core.clock import now_millis
from cafe_pos.domain.catalog.schemas import Product
from cafe_pos.domain.ledger.schemas import PaymentMethod, Transaction, TransactionItem
from .schemas import CartLine, CartOut

logger = structlog.get_logger(__name__)


class Cart:
    """Lines of the open cashier session, at most one per product id.

    A line never holds a quantity below 1: reducing it to 0 removes it.
    """

    def __init__(self):
        self._lines: Dict[str, CartLine] = {}

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    @property
    def total(self) -> float:
        return sum(line.price * line.quantity for line in self._lines.values())

    @property
    def profit(self) -> float:
        return sum((line.price - line.cost) * line.quantity for line in self._lines.values())

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def add_product(self, product: Product) -> None:
        line = self._lines.get(product.id)
        if line is not None:
            line.quantity += 1
            return
        self._lines[product.id] = CartLine(**product.model_dump(), quantity=1)

    def adjust_quantity(self, product_id: str, delta: int) -> None:
        line = self._lines.get(product_id)
        if line is None:
            return
        quantity = max(0, line.quantity + delta)
        if quantity == 0:
            del self._lines[product_id]
        else:
            line.quantity = quantity

    def clear(self) -> None:
        self._lines.clear()

    def snapshot(self) -> Tuple[TransactionItem, ...]:
        return tuple(
            TransactionItem(
                id=line.id,
                name=line.name,
                price=line.price,
                cost=line.cost,
                category=line.category,
                quantity=line.quantity,
            )
            for line in self._lines.values()
        )

    def to_out(self) -> CartOut:
        return CartOut(
            lines=[line.model_copy() for line in self._lines.values()],
            total=self.total,
            profit=self.profit,
            item_count=self.item_count,
        )


class CheckoutEngine:
    """Turns the cart into a finished transaction.

    Transaction ids are the checkout millisecond, bumped past the previously
    issued id so two checkouts within one millisecond still get distinct ids.
    """

    def __init__(
        self,
        cart: Optional[Cart] = None,
        clock: Callable[[], int] = now_millis,
    ):
        self.cart = cart if cart is not None else Cart()
        self._clock = clock
        self._last_id = 0

    def _next_id(self, timestamp: int) -> str:
        self._last_id = max(timestamp, self._last_id + 1)
        return str(self._last_id)

    async def checkout(
        self,
        payment_method: PaymentMethod,
        record: Callable[[Transaction], Awaitable[None]],
    ) -> Optional[Transaction]:
        """Finalize the cart and hand the sale to ``record``.

        Returns None and records nothing when the cart is empty. The cart is
        empty before ``record`` is awaited, so a slow ledger write cannot sell
        the same lines twice.
        """
        if self.cart.is_empty():
            logger.info("checkout_skipped_empty_cart")
            return None

        timestamp = self._clock()
        txn = Transaction(
            id=self._next_id(timestamp),
            timestamp=timestamp,
            items=self.cart.snapshot(),
            total_amount=self.cart.total,
            total_profit=self.cart.profit,
            payment_method=PaymentMethod(payment_method),
        )
        self.cart.clear()

        await record(txn)

        logger.info(
            "checkout_completed",
            transaction_id=txn.id,
            total_amount=txn.total_amount,
            payment_method=txn.payment_method.value,
            lines=len(txn.items),
        )
        return txn
