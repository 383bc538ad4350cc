# cafe_pos/domain/session/service.py
from typing import List, Optional

import structlog

from cafe_pos.core.exceptions import NotFoundError
from cafe_pos.domain.catalog.schemas import Product, ProductIn
from cafe_pos.domain.catalog.service import CatalogStore, product_from_input
from cafe_pos.domain.checkout.service import Cart, CheckoutEngine
from cafe_pos.domain.insight.schemas import InsightOut
from cafe_pos.domain.insight.service import InsightService
from cafe_pos.domain.ledger.schemas import PaymentMethod, Transaction
from cafe_pos.domain.ledger.service import LedgerStore
from cafe_pos.domain.settings.schemas import AppSettings, SaveStatus, SettingsSaveOut
from cafe_pos.domain.settings.service import SettingsStore
from cafe_pos.domain.sync.service import SyncPolicy

logger = structlog.get_logger(__name__)


class PosSession:
    """The running shop: settings, catalog and ledger views, and the one cart.

    ``products`` and ``transactions`` are the in-memory view model. Changes
    are applied there first and then persisted; a failed persistence call
    does not roll the view back.
    """

    def __init__(
        self,
        policy: SyncPolicy,
        settings_store: SettingsStore,
        catalog: CatalogStore,
        ledger: LedgerStore,
        insight: InsightService,
        engine: Optional[CheckoutEngine] = None,
    ):
        self.policy = policy
        self.settings_store = settings_store
        self.catalog = catalog
        self.ledger = ledger
        self.insight = insight
        self.engine = engine or CheckoutEngine()
        self.products: List[Product] = []
        self.transactions: List[Transaction] = []

    @property
    def cart(self) -> Cart:
        return self.engine.cart

    async def start(self) -> None:
        await self.policy.configure(await self.settings_store.load())
        await self.reload()

    async def reload(self) -> None:
        self.products = await self.catalog.list()
        self.transactions = await self.ledger.list()
        logger.info(
            "session_loaded",
            cloud=self.policy.cloud_active,
            products=len(self.products),
            transactions=len(self.transactions),
        )

    async def close(self) -> None:
        await self.policy.close()
        await self.insight.close()

    # --- Catalog ---

    def find_product(self, product_id: str) -> Product:
        for product in self.products:
            if product.id == product_id:
                return product
        raise NotFoundError(f"Product {product_id} not found")

    async def save_product(self, data: ProductIn, product_id: Optional[str] = None) -> Product:
        product = product_from_input(data, product_id)
        if any(p.id == product.id for p in self.products):
            self.products = [product if p.id == product.id else p for p in self.products]
        else:
            self.products = [*self.products, product]
        await self.catalog.upsert(product)
        return product

    async def delete_product(self, product_id: str) -> None:
        self.products = [p for p in self.products if p.id != product_id]
        await self.catalog.remove(product_id)

    # --- Cashier ---

    def add_to_cart(self, product_id: str) -> None:
        self.cart.add_product(self.find_product(product_id))

    def adjust_quantity(self, product_id: str, delta: int) -> None:
        self.cart.adjust_quantity(product_id, delta)

    async def checkout(self, payment_method: PaymentMethod) -> Optional[Transaction]:
        return await self.engine.checkout(payment_method, self._record_transaction)

    async def _record_transaction(self, txn: Transaction) -> None:
        self.transactions = [txn, *self.transactions]
        await self.ledger.append(txn)

    # --- Stats ---

    async def generate_insight(self) -> InsightOut:
        return await self.insight.generate(self.transactions, self.products)

    # --- Settings ---

    async def save_settings(self, app_settings: AppSettings) -> SettingsSaveOut:
        """Persist settings, rebuild the remote handle and reload the views."""
        await self.settings_store.save(app_settings)
        cloud_active = await self.policy.configure(app_settings)
        status = SaveStatus.ERROR if app_settings.use_cloud and not cloud_active else SaveStatus.SUCCESS
        await self.reload()
        return SettingsSaveOut(status=status, cloud_active=cloud_active, settings=app_settings)
