# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from storefront.domain.enums import AddStatus, OrderStatus
from storefront.utils.settings import MAX_CART_QUANTITY


class ItemIn(BaseModel):
    """Adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product ID (must be > 0)")
    quantity: int = Field(..., gt=0, le=MAX_CART_QUANTITY, description="Quantity to add")


class QuantityIn(BaseModel):
    """Setting the quantity of a cart line."""

    quantity: int = Field(..., gt=0, le=MAX_CART_QUANTITY)


class RestockIn(BaseModel):
    """Units received into the warehouse, not bound by the cart limit."""

    quantity: int = Field(..., gt=0)


class ProductOut(BaseModel):
    id: int
    name: str
    price: Decimal
    available_quantity: int

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    product: ProductOut | None = None
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    user_id: int
    lines: List[CartLineOut]
    total: Decimal
    item_count: int

    model_config = ConfigDict(from_attributes=True)


class CartWriteOut(BaseModel):
    """Result of an add/update under the clamp-to-stock policy."""

    status: AddStatus
    quantity: int
    message: str
    cart: CartOut


class ClearOut(BaseModel):
    cleared: int


class StockShortageOut(BaseModel):
    product_id: int
    product_name: str | None
    requested: int
    available: int

    model_config = ConfigDict(from_attributes=True)


class CartValidationOut(BaseModel):
    valid: bool
    errors: List[StockShortageOut]

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    id: int
    product_id: int
    product_name: str | None
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    status: OrderStatus
    total_amount: Decimal
    created_at: datetime
    lines: List[OrderLineOut]

    model_config = ConfigDict(from_attributes=True)


class CheckoutOut(BaseModel):
    order: OrderOut
    total: Decimal


class PageMeta(BaseModel):
    current_page: int
    from_: int | None = Field(None, alias="from")
    last_page: int
    per_page: int
    to: int | None
    total: int

    model_config = ConfigDict(populate_by_name=True)


class OrderPageOut(BaseModel):
    data: List[OrderOut]
    meta: PageMeta


class StockOut(BaseModel):
    product_id: int
    available_quantity: int
    low_stock: bool
