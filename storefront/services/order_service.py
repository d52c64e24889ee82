# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.domain.enums import OrderStatus
from storefront.domain.records import Order, Page
from storefront.repos.order_repo import OrderRepo
from storefront.utils.settings import ORDERS_PER_PAGE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order history reads. Orders are only created by CheckoutService.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def get_order(self, order_id: int, user_id: int) -> Order:
        order = self.repo.find_by_id(order_id)

        if not order:
            raise LookupError("Order does not exist")

        if order.user_id != user_id:
            raise PermissionError("Order belongs to another user")

        return order

    def list_orders(self, user_id: int, page: int = 1, per_page: int = ORDERS_PER_PAGE) -> Page[Order]:
        return self.repo.orders_for_user(user_id, page=page, per_page=per_page)

    def set_status(self, order_id: int, status: OrderStatus) -> Order:
        try:
            order = self.repo.update_status(order_id, status)
            if order is None:
                raise LookupError("Order does not exist")
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} status changed to {order.status.value}")
        return order
