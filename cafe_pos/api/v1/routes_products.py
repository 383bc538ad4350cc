# cafe_pos/api/v1/routes_products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from cafe_pos.api.deps import get_pos
from cafe_pos.domain.catalog.schemas import CategoriesOut, Product, ProductIn
from cafe_pos.domain.catalog.service import filter_products, list_categories
from cafe_pos.domain.session.service import PosSession


router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("", response_model=List[Product])
async def list_products_endpoint(
    q: str = "",
    category: Optional[str] = None,
    pos: PosSession = Depends(get_pos),
):
    return filter_products(pos.products, q, category)


@router.get("/categories", response_model=CategoriesOut)
async def list_categories_endpoint(pos: PosSession = Depends(get_pos)):
    return CategoriesOut(categories=list_categories(pos.products))


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product_endpoint(
    payload: ProductIn,
    pos: PosSession = Depends(get_pos),
):
    return await pos.save_product(payload)


@router.put("/{product_id}", response_model=Product)
async def update_product_endpoint(
    product_id: str,
    payload: ProductIn,
    pos: PosSession = Depends(get_pos),
):
    return await pos.save_product(payload, product_id)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product_endpoint(
    product_id: str,
    pos: PosSession = Depends(get_pos),
):
    await pos.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
