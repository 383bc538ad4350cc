# cafe_pos/domain/stats/schemas.py
from typing import List

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class SalesSummary(BaseModel):
    total_revenue: float
    total_profit: float
    transaction_count: int
    average_order_value: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DailyPoint(BaseModel):
    date: str
    weekday: str
    revenue: float
    profit: float


class TrendOut(BaseModel):
    days: List[DailyPoint]
