# cafe_pos/domain/insight/service.py
import json
from datetime import datetime
from typing import Dict, List, Optional

import structlog

from cafe_pos.core.clock import local_midnight, to_millis
from cafe_pos.core.exceptions import InsightUnavailableError
from cafe_pos.domain.catalog.schemas import Product
from cafe_pos.domain.ledger.schemas import Transaction
from cafe_pos.remote.gemini import GeminiClient
from .schemas import DailySummary, InsightOut, TopItem

logger = structlog.get_logger(__name__)

TOP_ITEMS_LIMIT = 5

FALLBACK_MESSAGE = (
    "AI insight is temporarily unavailable. "
    "Please check your network connection or try again later."
)

PROMPT_TEMPLATE = """You are a professional retail business analyst. Analyze the following daily sales summary of a small business.

Data:
```json
{data}
```

Write a concise daily report (under 150 words) containing:
1. A quick performance assessment (excellent, average, needs improvement).
2. One key observation about profit margin or best-selling items.
3. One actionable suggestion to raise tomorrow's sales or profit.

Keep the tone professional and encouraging. Answer in {language}."""


def top_selling_items(
    transactions: List[Transaction],
    limit: int = TOP_ITEMS_LIMIT,
) -> List[TopItem]:
    counts: Dict[str, int] = {}
    for txn in transactions:
        for item in txn.items:
            counts[item.name] = counts.get(item.name, 0) + item.quantity
    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return [TopItem(name=name, count=count) for name, count in ranked[:limit]]


def summarize_day(
    transactions: List[Transaction],
    products: List[Product],
    now: Optional[datetime] = None,
) -> DailySummary:
    now = now or datetime.now()
    day_start = to_millis(local_midnight(now))
    todays = [t for t in transactions if t.timestamp >= day_start]

    return DailySummary(
        date=now.date().isoformat(),
        total_sales=sum(t.total_amount for t in todays),
        total_profit=sum(t.total_profit for t in todays),
        transaction_count=len(todays),
        top_selling_items=top_selling_items(todays),
        inventory_count=len(products),
    )


def build_prompt(summary: DailySummary, language: str = "English") -> str:
    data = json.dumps(summary.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2)
    return PROMPT_TEMPLATE.format(data=data, language=language)


class InsightService:
    """Aggregates today's sales locally and asks for a short written summary."""

    def __init__(self, client: Optional[GeminiClient], language: str = "English"):
        self._client = client
        self._language = language

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def generate(
        self,
        transactions: List[Transaction],
        products: List[Product],
        now: Optional[datetime] = None,
    ) -> InsightOut:
        summary = summarize_day(transactions, products, now)

        if self._client is None:
            logger.warning("insight_unavailable", error="no text-generation API key configured")
            return InsightOut(insight=FALLBACK_MESSAGE, fallback=True, summary=summary)

        try:
            text = await self._client.generate_text(build_prompt(summary, self._language))
        except InsightUnavailableError as e:
            logger.warning("insight_unavailable", error=str(e))
            return InsightOut(insight=FALLBACK_MESSAGE, fallback=True, summary=summary)

        logger.info("insight_generated", transaction_count=summary.transaction_count)
        return InsightOut(insight=text, fallback=False, summary=summary)
