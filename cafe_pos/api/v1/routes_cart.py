# cafe_pos/api/v1/routes_cart.py
from fastapi import APIRouter, Depends

from cafe_pos.api.deps import get_pos
from cafe_pos.domain.checkout.schemas import AddItem, AdjustQuantity, CartOut, CheckoutOut, CheckoutRequest
from cafe_pos.domain.session.service import PosSession


router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


@router.get("", response_model=CartOut)
async def get_cart_endpoint(pos: PosSession = Depends(get_pos)):
    return pos.cart.to_out()


@router.post("/items", response_model=CartOut)
async def add_item_endpoint(
    payload: AddItem,
    pos: PosSession = Depends(get_pos),
):
    pos.add_to_cart(payload.product_id)
    return pos.cart.to_out()


@router.patch("/items/{product_id}", response_model=CartOut)
async def adjust_item_endpoint(
    product_id: str,
    payload: AdjustQuantity,
    pos: PosSession = Depends(get_pos),
):
    pos.adjust_quantity(product_id, payload.delta)
    return pos.cart.to_out()


@router.post("/checkout", response_model=CheckoutOut)
async def checkout_endpoint(
    payload: CheckoutRequest,
    pos: PosSession = Depends(get_pos),
):
    # an empty cart is ignored: transaction comes back null
    txn = await pos.checkout(payload.payment_method)
    return CheckoutOut(transaction=txn, cart=pos.cart.to_out())
