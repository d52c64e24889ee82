from decimal import Decimal

import pytest

from storefront.domain.enums import OrderStatus
from storefront.repos.order_repo import OrderRepo
from storefront.services.order_service import OrderService


def _order(db, user_id, status=OrderStatus.COMPLETED):
    repo = OrderRepo(db)
    order = repo.create_order(user_id, Decimal("10.00"), status=status)
    repo.commit()
    return order.id


class TestGetOrder:

    def test_own_order(self, db, user):
        order_id = _order(db, user)
        assert OrderService(db).get_order(order_id, user).id == order_id

    def test_foreign_order_rejected(self, db, user, other_user):
        order_id = _order(db, user)
        with pytest.raises(PermissionError):
            OrderService(db).get_order(order_id, other_user)

    def test_missing_order(self, db, user):
        with pytest.raises(LookupError):
            OrderService(db).get_order(999, user)


class TestListAndStatus:

    def test_list_orders(self, db, user):
        for _ in range(3):
            _order(db, user)

        page = OrderService(db).list_orders(user, page=1, per_page=2)

        assert len(page.items) == 2
        assert page.total == 3

    def test_set_status(self, db, user):
        order_id = _order(db, user, status=OrderStatus.PENDING)

        order = OrderService(db).set_status(order_id, OrderStatus.REJECTED)

        assert order.status.is_rejected()
        assert OrderRepo(db).find_by_id(order_id).status is OrderStatus.REJECTED

    def test_set_status_missing(self, db):
        with pytest.raises(LookupError):
            OrderService(db).set_status(999, OrderStatus.COMPLETED)
