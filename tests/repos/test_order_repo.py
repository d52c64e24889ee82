"""Tests for the order ledger."""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from storefront.data.models import OrderModel
from storefront.domain.enums import OrderStatus
from storefront.repos.order_repo import OrderRepo


def _order_at(db, user_id, created_at, total="100.00", status="completed"):
    order = OrderModel(user_id=user_id, total_amount=Decimal(total), status=status, created_at=created_at)
    db.add(order)
    db.commit()
    return order.id


class TestCreate:

    def test_create_order_defaults_to_completed(self, db, user):
        repo = OrderRepo(db)
        order = repo.create_order(user, Decimal("100.00"))
        repo.commit()

        assert order.status is OrderStatus.COMPLETED
        assert order.total_amount == Decimal("100.00")
        assert order.id is not None

    def test_add_line_snapshots_price(self, db, user, make_product):
        pid = make_product(name="Widget", price="50.00")
        repo = OrderRepo(db)
        order = repo.create_order(user, Decimal("100.00"))

        line = repo.add_line(order.id, pid, 2, Decimal("50.00"))
        repo.commit()

        assert line.quantity == 2
        assert line.unit_price == Decimal("50.00")
        assert line.line_total == Decimal("100.00")


class TestFindById:

    def test_loads_lines_and_product_names(self, db, user, make_product):
        pid = make_product(name="Widget", price="50.00")
        repo = OrderRepo(db)
        order = repo.create_order(user, Decimal("100.00"))
        repo.add_line(order.id, pid, 2, Decimal("50.00"))
        repo.commit()

        found = repo.find_by_id(order.id)

        assert len(found.lines) == 1
        assert found.lines[0].product_name == "Widget"
        assert found.lines_total == found.total_amount

    def test_missing(self, db):
        assert OrderRepo(db).find_by_id(999) is None


class TestOrdersForUser:

    def test_newest_first(self, db, user):
        now = datetime.now(timezone.utc)
        old = _order_at(db, user, now - timedelta(days=2))
        recent = _order_at(db, user, now)

        page = OrderRepo(db).orders_for_user(user)

        assert [o.id for o in page.items] == [recent, old]

    def test_ties_broken_by_ascending_id(self, db, user):
        at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        first = _order_at(db, user, at)
        second = _order_at(db, user, at)

        page = OrderRepo(db).orders_for_user(user)

        assert [o.id for o in page.items] == [first, second]

    def test_only_users_orders(self, db, user, other_user):
        now = datetime.now(timezone.utc)
        _order_at(db, user, now)
        _order_at(db, other_user, now)

        page = OrderRepo(db).orders_for_user(user)

        assert page.total == 1
        assert page.items[0].user_id == user

    def test_paginated(self, db, user):
        now = datetime.now(timezone.utc)
        for i in range(15):
            _order_at(db, user, now - timedelta(minutes=i))
        repo = OrderRepo(db)

        first = repo.orders_for_user(user, page=1, per_page=10)
        second = repo.orders_for_user(user, page=2, per_page=10)

        assert len(first.items) == 10
        assert len(second.items) == 5
        assert first.total == 15
        assert first.last_page == 2
        assert second.meta()["from"] == 11
        assert second.meta()["to"] == 15

    def test_invalid_page(self, db, user):
        with pytest.raises(ValueError):
            OrderRepo(db).orders_for_user(user, page=0)


class TestStatus:

    def test_update_status(self, db, user):
        order_id = _order_at(db, user, datetime.now(timezone.utc), status="pending")
        repo = OrderRepo(db)

        updated = repo.update_status(order_id, OrderStatus.COMPLETED)
        repo.commit()

        assert updated.status is OrderStatus.COMPLETED
        assert repo.find_by_id(order_id).status is OrderStatus.COMPLETED

    def test_update_status_missing(self, db):
        assert OrderRepo(db).update_status(999, OrderStatus.REJECTED) is None

    def test_unknown_status_rejected(self, db, user):
        order_id = _order_at(db, user, datetime.now(timezone.utc))
        with pytest.raises(ValueError):
            OrderRepo(db).update_status(order_id, "shipped")


class TestOrdersOnDate:

    def test_filters_by_day_and_status(self, db, user):
        day = date(2024, 5, 1)
        at = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        inside = _order_at(db, user, at)
        _order_at(db, user, at, status="rejected")
        _order_at(db, user, at + timedelta(days=1))

        orders = OrderRepo(db).orders_on_date(day, status=OrderStatus.COMPLETED)

        assert [o.id for o in orders] == [inside]
