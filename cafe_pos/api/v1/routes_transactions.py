# cafe_pos/api/v1/routes_transactions.py
from typing import List

from fastapi import APIRouter, Depends, Response

from cafe_pos.api.deps import get_pos
from cafe_pos.domain.ledger.schemas import Transaction
from cafe_pos.domain.ledger.service import EXPORT_FILENAME
from cafe_pos.domain.session.service import PosSession


router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.get("", response_model=List[Transaction])
async def list_transactions_endpoint(pos: PosSession = Depends(get_pos)):
    return pos.transactions


@router.get("/export")
async def export_transactions_endpoint(pos: PosSession = Depends(get_pos)):
    body = await pos.ledger.export()
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
