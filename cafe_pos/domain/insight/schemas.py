# cafe_pos/domain/insight/schemas.py
from typing import List

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class TopItem(BaseModel):
    name: str
    count: int


class DailySummary(BaseModel):
    """The only data that leaves the shop for text generation."""

    date: str
    total_sales: float
    total_profit: float
    transaction_count: int
    top_selling_items: List[TopItem]
    inventory_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class InsightOut(BaseModel):
    insight: str
    fallback: bool
    summary: DailySummary
