"""Marketplace listing models"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ProductCategory(str, Enum):
    ART = "art"
    CLOTHING = "clothing"
    HOME = "home"
    JEWELRY = "jewelry"
    BOOKS = "books"


class Product(BaseModel):
    """Listing in the marketplace catalog"""
    id: str
    title: str
    description: str
    price: Decimal = Field(gt=0)
    currency: str = "USD"
    category: ProductCategory
    seller_id: str
    image_url: Optional[str] = None
    weight_oz: Optional[float] = Field(default=None, gt=0)
    in_stock: bool = True
    stock_quantity: int = Field(ge=0, default=100)

    class Config:
        from_attributes = True


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[Product]
    total: int
    limit: int
    offset: int
