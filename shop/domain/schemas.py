# shop/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from shop.domain.enums import RoleName, StatusName


class ItemIn(BaseModel):
    """Dodanie produktu do koszyka."""

    id: int = Field(..., gt=0, description="ID produktu")
    quantity: int = Field(1, ge=1, description="Ilosc (>= 1)")


class SalePositionOut(BaseModel):
    product_id: int
    title: str = ""
    url: str = ""
    article: int | None = None
    number: int
    price: Decimal
    total: Decimal


class CartOut(BaseModel):
    """Widok koszyka."""

    sale_positions: List[SalePositionOut]
    price_of_cart: Decimal
    cart_size: int


class PhotoOut(BaseModel):
    id: int
    title: str
    photo_link_short: str
    photo_link_long: str

    model_config = ConfigDict(from_attributes=True)


class CategoryOut(BaseModel):
    id: int
    title: str
    url: str
    description: str

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    title: str
    url: str
    article: int
    price: Decimal
    description: str
    parameters: str
    available: bool
    category: CategoryOut | None = None
    photo: PhotoOut | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1, max_length=200)
    article: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)
    description: str = ""
    parameters: str = ""
    available: bool = True
    category_id: int | None = None
    photo_id: int | None = None


class ProductUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    url: str | None = Field(None, min_length=1, max_length=200)
    article: int | None = Field(None, gt=0)
    price: Decimal | None = Field(None, ge=0)
    description: str | None = None
    parameters: str | None = None
    available: bool | None = None
    category_id: int | None = None
    photo_id: int | None = None


class HomeOut(BaseModel):
    categories: List[CategoryOut]
    products: List[ProductOut]
    cart_size: int


class CategoryPageOut(BaseModel):
    category: CategoryOut
    products: List[ProductOut]
    cart_size: int


class ProductsPageOut(BaseModel):
    products: List[ProductOut]
    cart_size: int


class ProductPageOut(BaseModel):
    product: ProductOut
    featured_products: List[ProductOut]
    cart_size: int


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=200)
    role: RoleName = RoleName.MANAGER


class OrderPositionOut(BaseModel):
    product_id: int
    title: str
    number: int
    price: Decimal
    total: Decimal


class OrderOut(BaseModel):
    """Widok zamowienia."""

    id: int
    number: str
    status: StatusName
    client: UserRead
    manager: UserRead | None = None
    sale_positions: List[OrderPositionOut]
    price_of_cart: Decimal
    created_at: datetime
    cart_size: int = 0


class StatusChangeIn(BaseModel):
    status: StatusName
