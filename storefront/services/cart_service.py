from sqlalchemy.orm import Session

from storefront.domain.enums import AddStatus
from storefront.domain.errors import CartAddResult
from storefront.domain.records import CartLine, CartSummary
from storefront.repos.cart_repo import CartRepo
from storefront.repos.inventory_repo import InventoryRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADJUSTED_MESSAGE = "Quantity adjusted to available stock"
OUT_OF_STOCK_MESSAGE = "Insufficient stock available"


class CartService:
    """
    Cart use cases. Quantities are clamped to the stock available at write
    time: an add that would oversell is adjusted down with a warning
    instead of being rejected, and a line is never written above stock.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.inventory = InventoryRepo(db)

    # query
    def get_cart(self, user_id: int) -> CartSummary:
        return CartSummary(user_id=user_id, lines=self.repo.lines_for_user(user_id))

    def owns_line(self, line_id: int, user_id: int) -> bool:
        return self.repo.owns_line(line_id, user_id)

    # commands
    def add_or_update(self, user_id: int, product_id: int, delta_qty: int) -> CartAddResult:
        if delta_qty <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.inventory.get_product(product_id)
        if product is None:
            raise LookupError(f"Product {product_id} does not exist")

        available = product.available_quantity
        existing = self.repo.find_line(user_id, product_id)

        try:
            if existing is None:
                if available < 1:
                    logger.info(f"Product {product_id} is out of stock, nothing added for user {user_id}")
                    return CartAddResult(AddStatus.ERROR, 0, OUT_OF_STOCK_MESSAGE)

                qty = min(delta_qty, available)
                self.repo.create_line(user_id, product_id, qty)
                self.repo.commit()

                logger.info(f"Added product {product_id} x{qty} to cart of user {user_id}")
                if qty < delta_qty:
                    return CartAddResult(AddStatus.WARNING, qty, ADJUSTED_MESSAGE)
                return CartAddResult(AddStatus.SUCCESS, qty, "Product added to cart")

            logger.info(
                f"Product {product_id} already in cart of user {user_id}, increasing quantity "
                f"from {existing.quantity} by {delta_qty}"
            )
            return self._write_clamped(existing, existing.quantity + delta_qty, available)
        except Exception:
            self.repo.rollback()
            raise

    def update_quantity(self, user_id: int, line_id: int, new_qty: int) -> CartAddResult:
        if new_qty <= 0:
            raise ValueError("Quantity must be greater than 0")

        line = self._owned_line(user_id, line_id)
        available = self.inventory.available_quantity(line.product_id) or 0

        try:
            return self._write_clamped(line, new_qty, available)
        except Exception:
            self.repo.rollback()
            raise

    def remove(self, user_id: int, line_id: int) -> None:
        self._owned_line(user_id, line_id)
        self.repo.remove(line_id)
        self.repo.commit()
        logger.info(f"Removed cart line {line_id} of user {user_id}")

    def clear(self, user_id: int) -> int:
        count = self.repo.clear_all(user_id)
        self.repo.commit()
        logger.info(f"Cleared {count} cart lines of user {user_id}")
        return count

    def _owned_line(self, user_id: int, line_id: int) -> CartLine:
        line = self.repo.get_line(line_id)
        if line is None:
            raise LookupError(f"Cart line {line_id} does not exist")
        if line.user_id != user_id:
            raise PermissionError("Cart line belongs to another user")
        return line

    def _write_clamped(self, line: CartLine, wanted: int, available: int) -> CartAddResult:
        if available < 1:
            return CartAddResult(AddStatus.ERROR, line.quantity, OUT_OF_STOCK_MESSAGE)

        if wanted > available:
            self.repo.update_quantity(line.id, available)
            self.repo.commit()
            logger.warning(
                f"Cart line {line.id} clamped to {available} (wanted {wanted}) for product {line.product_id}"
            )
            return CartAddResult(AddStatus.WARNING, available, ADJUSTED_MESSAGE)

        self.repo.update_quantity(line.id, wanted)
        self.repo.commit()
        return CartAddResult(AddStatus.SUCCESS, wanted, "Cart updated")
