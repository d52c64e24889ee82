"""Checkout outcomes.

Checkout failures are values, not exceptions: ``process_checkout`` always
returns a ``CheckoutResult`` and the caller has to look at ``error``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from storefront.domain.enums import AddStatus
from storefront.domain.records import Order


@dataclass(frozen=True)
class StockShortage:
    product_id: int
    product_name: str | None
    requested: int
    available: int

    @property
    def message(self) -> str:
        name = self.product_name or f"product {self.product_id}"
        return f"Insufficient stock for {name} (requested {self.requested}, available {self.available})"


@dataclass(frozen=True)
class CheckoutError:
    kind = "checkout_error"

    @property
    def message(self) -> str:
        return "Checkout failed"


@dataclass(frozen=True)
class EmptyCart(CheckoutError):
    kind = "empty_cart"

    @property
    def message(self) -> str:
        return "Your cart is empty"


@dataclass(frozen=True)
class InsufficientStock(CheckoutError):
    kind = "insufficient_stock"
    shortages: tuple[StockShortage, ...] = ()

    @property
    def message(self) -> str:
        return "; ".join(s.message for s in self.shortages) or "Insufficient stock"


@dataclass(frozen=True)
class CheckoutFailed(CheckoutError):
    kind = "checkout_failed"
    reason: str = ""

    @property
    def message(self) -> str:
        return "Checkout could not be completed, please try again"


@dataclass(frozen=True)
class CheckoutResult:
    order: Order | None = None
    total: Decimal | None = None
    error: CheckoutError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, order: Order, total: Decimal) -> "CheckoutResult":
        return cls(order=order, total=total)

    @classmethod
    def failure(cls, error: CheckoutError) -> "CheckoutResult":
        return cls(error=error)


@dataclass(frozen=True)
class CartValidation:
    valid: bool
    errors: list[StockShortage] = field(default_factory=list)


@dataclass(frozen=True)
class CartAddResult:
    status: AddStatus
    quantity: int
    message: str

    @property
    def ok(self) -> bool:
        return self.status is not AddStatus.ERROR
