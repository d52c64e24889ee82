# storefront/services/checkout_service.py
from dataclasses import replace
from decimal import Decimal

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.enums import OrderStatus
from storefront.domain.errors import (
    CartValidation,
    CheckoutFailed,
    CheckoutResult,
    EmptyCart,
    InsufficientStock,
    StockShortage,
)
from storefront.domain.money import line_total, sum_money
from storefront.domain.records import CartLine
from storefront.repos.cart_repo import CartRepo
from storefront.repos.inventory_repo import InventoryRepo
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger
from storefront.utils.retry import db_retry

logger = get_logger(__name__)


class _StockRaceLost(Exception):
    """A conditional decrement matched no row inside the unit of work."""

    def __init__(self, shortage: StockShortage):
        super().__init__(shortage.message)
        self.shortage = shortage


class _CheckoutAborted(Exception):
    """The unit of work hit state it cannot build a consistent order from."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class CheckoutService:
    """
    Turns a user's cart into an order.

    The session passed in is the transaction handle: every write of one
    checkout attempt (stock decrements, order, order lines, cart clear)
    happens in the session's current transaction and is committed once,
    or rolled back as a whole.

    Concurrency control is the conditional stock decrement in
    InventoryRepo plus that single transaction. Transient database errors
    (deadlock, serialization failure, locked database) re-run the whole
    attempt via tenacity.
    """

    def __init__(self, db: Session, notification_service=None, retry_attempts: int | None = None):
        self.db = db
        self.carts = CartRepo(db)
        self.inventory = InventoryRepo(db)
        self.orders = OrderRepo(db)
        self.notification_service = notification_service
        self._attempt = db_retry(retry_attempts)(self._checkout_once)

    # query
    def validate_cart(self, user_id: int) -> CartValidation:
        """Read-only preflight used by the cart page before offering checkout."""
        lines = self.carts.lines_for_user(user_id)
        errors = self._shortages(lines)
        return CartValidation(valid=not errors, errors=errors)

    # command
    def process_checkout(self, user_id: int) -> CheckoutResult:
        logger.info(f"Checkout started for user {user_id}")
        try:
            result = self._attempt(user_id)
        except OperationalError as e:
            logger.error(f"Checkout for user {user_id} gave up after retries: {e}")
            return CheckoutResult.failure(CheckoutFailed(reason=str(e.orig or e)))
        except SQLAlchemyError as e:
            logger.error(f"Checkout for user {user_id} failed: {e}")
            return CheckoutResult.failure(CheckoutFailed(reason=str(e)))

        if result.ok:
            self._after_commit(user_id, result)
        else:
            logger.info(f"Checkout rejected for user {user_id}: {result.error.message}")
        return result

    def _checkout_once(self, user_id: int) -> CheckoutResult:
        """One attempt. Nothing after the commit may run in here, a retry would redo it."""
        try:
            lines = self.carts.lines_for_user(user_id)
            if not lines:
                self.db.rollback()
                return CheckoutResult.failure(EmptyCart())

            # optimistic pass, collects every problem so the user sees all of them
            shortages = self._shortages(lines)
            if shortages:
                self.db.rollback()
                return CheckoutResult.failure(InsufficientStock(shortages=tuple(shortages)))

            # unit of work
            for line in lines:
                if not self.inventory.decrease_stock(line.product_id, line.quantity):
                    raise _StockRaceLost(self._shortage_for(line))

            priced = [(line, self._commit_time_price(line)) for line in lines]
            total = sum_money(line_total(price, line.quantity) for line, price in priced)

            order = self.orders.create_order(user_id, total, status=OrderStatus.COMPLETED)
            order_lines = tuple(
                self.orders.add_line(order.id, line.product_id, line.quantity, price)
                for line, price in priced
            )

            # a concurrent checkout of the same cart already consumed these lines
            cleared = self.carts.clear_all(user_id)
            if cleared != len(lines):
                raise _CheckoutAborted(
                    f"Cart of user {user_id} changed during checkout ({len(lines)} lines read, {cleared} cleared)"
                )

            self.db.commit()
        except _StockRaceLost as e:
            self.db.rollback()
            logger.warning(f"Stock race lost during checkout for user {user_id}: {e}")
            return CheckoutResult.failure(InsufficientStock(shortages=(e.shortage,)))
        except _CheckoutAborted as e:
            self.db.rollback()
            logger.warning(f"Checkout aborted for user {user_id}: {e.reason}")
            return CheckoutResult.failure(CheckoutFailed(reason=e.reason))
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Order {order.id} created for user {user_id}, total {total}")
        return CheckoutResult.success(replace(order, lines=order_lines), total)

    def _shortages(self, lines: list[CartLine]) -> list[StockShortage]:
        shortages = []
        for line in lines:
            if not self.inventory.has_sufficient_stock(line.product_id, line.quantity):
                shortages.append(self._shortage_for(line))
        return shortages

    def _shortage_for(self, line: CartLine) -> StockShortage:
        # fresh read, never the snapshot taken when the line was loaded
        available = self.inventory.available_quantity(line.product_id)
        return StockShortage(
            product_id=line.product_id,
            product_name=line.product.name if line.product else None,
            requested=line.quantity,
            available=available or 0,
        )

    def _commit_time_price(self, line: CartLine) -> Decimal:
        price = self.inventory.current_price(line.product_id)
        if price is None:
            raise _CheckoutAborted(f"Product {line.product_id} disappeared during checkout")
        return price

    def _after_commit(self, user_id: int, result: CheckoutResult):
        # the order is committed from here on, nothing below may turn it into a failure
        order = result.order
        try:
            for line in order.lines:
                if self.inventory.is_low_stock(line.product_id):
                    logger.warning(f"Product {line.product_id} is running low on stock")
        except SQLAlchemyError as e:
            logger.error(f"Low stock check after order {order.id} failed: {e}")

        if self.notification_service is None:
            return
        try:
            self.notification_service.send_order_notification(
                user_id, order.id, str(order.total_amount), len(order.lines)
            )
        except Exception as e:
            logger.error(f"Could not enqueue notification for order {order.id}: {e}")
