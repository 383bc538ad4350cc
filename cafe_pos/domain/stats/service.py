# cafe_pos/domain/stats/service.py
from datetime import datetime, timedelta
from typing import List, Optional

from cafe_pos.core.clock import day_window, local_midnight
from cafe_pos.domain.ledger.schemas import Transaction
from .schemas import DailyPoint, SalesSummary

TREND_DAYS = 7


def sales_summary(transactions: List[Transaction]) -> SalesSummary:
    revenue = sum(t.total_amount for t in transactions)
    count = len(transactions)
    return SalesSummary(
        total_revenue=revenue,
        total_profit=sum(t.total_profit for t in transactions),
        transaction_count=count,
        average_order_value=revenue / count if count else 0.0,
    )


def daily_trend(
    transactions: List[Transaction],
    days: int = TREND_DAYS,
    now: Optional[datetime] = None,
) -> List[DailyPoint]:
    """Revenue and profit per local day, oldest first, ending today."""
    today = local_midnight(now)
    points = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        start, end = day_window(day)
        in_day = [t for t in transactions if start <= t.timestamp < end]
        points.append(DailyPoint(
            date=day.date().isoformat(),
            weekday=day.strftime("%a"),
            revenue=sum(t.total_amount for t in in_day),
            profit=sum(t.total_profit for t in in_day),
        ))
    return points
