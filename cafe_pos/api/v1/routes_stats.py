# cafe_pos/api/v1/routes_stats.py
from fastapi import APIRouter, Depends

from cafe_pos.api.deps import get_pos
from cafe_pos.domain.insight.schemas import InsightOut
from cafe_pos.domain.session.service import PosSession
from cafe_pos.domain.stats.schemas import SalesSummary, TrendOut
from cafe_pos.domain.stats.service import daily_trend, sales_summary


router = APIRouter(prefix="/api/v1/stats", tags=["stats"])


@router.get("/summary", response_model=SalesSummary)
async def summary_endpoint(pos: PosSession = Depends(get_pos)):
    return sales_summary(pos.transactions)


@router.get("/trend", response_model=TrendOut)
async def trend_endpoint(pos: PosSession = Depends(get_pos)):
    return TrendOut(days=daily_trend(pos.transactions))


@router.post("/insight", response_model=InsightOut)
async def insight_endpoint(pos: PosSession = Depends(get_pos)):
    return await pos.generate_insight()
