# storefront/repos/order_repo.py
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import OrderStatus
from storefront.domain.money import to_money
from storefront.domain.records import Order, OrderLine, Page
from storefront.utils.settings import ORDERS_PER_PAGE


def to_order_line(item: OrderItemModel) -> OrderLine:
    return OrderLine(
        id=item.id,
        order_id=item.order_id,
        product_id=item.product_id,
        product_name=item.product.name if item.product is not None else None,
        quantity=item.quantity,
        unit_price=to_money(item.price),
    )


def to_order(order: OrderModel, with_lines: bool = True) -> Order:
    return Order(
        id=order.id,
        user_id=order.user_id,
        total_amount=to_money(order.total_amount),
        status=OrderStatus(order.status),
        created_at=order.created_at,
        lines=tuple(to_order_line(i) for i in order.items) if with_lines else (),
    )


def _with_lines():
    return selectinload(OrderModel.items).selectinload(OrderItemModel.product)


class OrderRepo:
    """
    Append-only order ledger. Lines are written once at checkout, the only
    later mutation is update_status.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_order(
        self,
        user_id: int,
        total_amount: Decimal,
        status: OrderStatus = OrderStatus.COMPLETED,
    ) -> Order:
        order = OrderModel(
            user_id=user_id,
            total_amount=to_money(total_amount),
            status=OrderStatus(status).value,
        )
        self.db.add(order)
        self.db.flush()
        return Order(
            id=order.id,
            user_id=order.user_id,
            total_amount=to_money(order.total_amount),
            status=OrderStatus(order.status),
            created_at=order.created_at,
        )

    def add_line(self, order_id: int, product_id: int, qty: int, unit_price: Decimal) -> OrderLine:
        if qty <= 0:
            raise ValueError("Quantity must be greater than 0")
        item = OrderItemModel(
            order_id=order_id,
            product_id=product_id,
            quantity=qty,
            price=to_money(unit_price),
        )
        self.db.add(item)
        self.db.flush()
        return to_order_line(item)

    def find_by_id(self, order_id: int) -> Order | None:
        order = self.db.execute(
            select(OrderModel)
            .options(_with_lines())
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return to_order(order) if order else None

    def count_for_user(self, user_id: int) -> int:
        return self.db.execute(
            select(func.count(OrderModel.id)).where(OrderModel.user_id == user_id)
        ).scalar_one()

    def orders_for_user(self, user_id: int, page: int = 1, per_page: int = ORDERS_PER_PAGE) -> Page[Order]:
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")

        # newest first, ties broken by id so pages are stable
        orders = self.db.execute(
            select(OrderModel)
            .options(_with_lines())
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.asc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        ).scalars().all()

        return Page(
            items=[to_order(o) for o in orders],
            page=page,
            per_page=per_page,
            total=self.count_for_user(user_id),
        )

    def update_status(self, order_id: int, status: OrderStatus) -> Order | None:
        status = OrderStatus(status)
        order = self.db.get(OrderModel, order_id)
        if order is None:
            return None
        order.status = status.value
        self.db.flush()
        return self.find_by_id(order_id)

    def orders_on_date(self, day: date, status: OrderStatus | None = None) -> list[Order]:
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        end = start + timedelta(days=1)

        query = (
            select(OrderModel)
            .options(_with_lines())
            .where(OrderModel.created_at >= start, OrderModel.created_at < end)
            .order_by(OrderModel.created_at.asc(), OrderModel.id.asc())
        )
        if status is not None:
            query = query.where(OrderModel.status == OrderStatus(status).value)

        return [to_order(o) for o in self.db.execute(query).scalars().all()]

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
