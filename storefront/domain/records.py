"""Plain data records returned by the repositories.

Repositories map ORM rows into these frozen dataclasses so the services
never hold on to live, session-bound ORM objects.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

from storefront.domain.enums import OrderStatus
from storefront.domain.money import line_total, sum_money

T = TypeVar("T")


@dataclass(frozen=True)
class ProductSnapshot:
    id: int
    name: str
    price: Decimal
    available_quantity: int


@dataclass(frozen=True)
class CartLine:
    id: int
    user_id: int
    product_id: int
    quantity: int
    product: ProductSnapshot | None = None

    @property
    def line_total(self) -> Decimal:
        if self.product is None:
            return Decimal("0.00")
        return line_total(self.product.price, self.quantity)


@dataclass(frozen=True)
class OrderLine:
    id: int
    order_id: int
    product_id: int
    product_name: str | None
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.quantity)


@dataclass(frozen=True)
class Order:
    id: int
    user_id: int
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    lines: tuple[OrderLine, ...] = ()

    @property
    def lines_total(self) -> Decimal:
        return sum_money(line.line_total for line in self.lines)


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_item(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_item(self) -> int | None:
        if not self.items:
            return None
        return self.first_item + len(self.items) - 1

    def meta(self) -> dict:
        return {
            "current_page": self.page,
            "from": self.first_item,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "to": self.last_item,
            "total": self.total,
        }


@dataclass(frozen=True)
class CartSummary:
    user_id: int
    lines: list[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum_money(line.line_total for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)
