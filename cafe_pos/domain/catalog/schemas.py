# cafe_pos/domain/catalog/schemas.py
from typing import List, Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    id: str
    name: str
    price: float
    cost: float
    category: str = ""

    class Config:
        from_attributes = True


class ProductIn(BaseModel):
    """Inventory editor form. A missing id means a new product."""

    id: Optional[str] = None
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    cost: float = Field(default=0, ge=0)
    category: str = ""


class CategoriesOut(BaseModel):
    categories: List[str]
