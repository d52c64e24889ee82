from datetime import date, datetime, timezone
from decimal import Decimal

from storefront.data.models import OrderItemModel, OrderModel
from storefront.services.notification_service import order_placed_message, send_order_notification_task
from storefront.tasks.sales_report import build_daily_sales_report, daily_sales_report_task


def _order(db, user_id, lines, status="completed", at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)):
    total = sum((Decimal(price) * qty for _, qty, price in lines), Decimal("0.00"))
    order = OrderModel(user_id=user_id, total_amount=total, status=status, created_at=at)
    order.items = [OrderItemModel(product_id=pid, quantity=qty, price=Decimal(price)) for pid, qty, price in lines]
    db.add(order)
    db.commit()


def test_daily_report_aggregates_completed_orders(db, user, make_product):
    a = make_product("A", price="10.00")
    b = make_product("B", price="2.50")
    _order(db, user, [(a, 2, "10.00"), (b, 4, "2.50")])
    _order(db, user, [(b, 1, "2.50")])
    _order(db, user, [(a, 9, "10.00")], status="rejected")
    _order(db, user, [(a, 9, "10.00")], at=datetime(2024, 5, 2, 9, 0, tzinfo=timezone.utc))

    report = build_daily_sales_report(db, date(2024, 5, 1))

    assert report.order_count == 2
    assert report.revenue == Decimal("32.50")
    assert report.units_sold == 7
    assert report.top_products[0].product_id == b
    assert report.top_products[0].units == 5
    assert report.as_dict()["revenue"] == "32.50"


def test_empty_day(db):
    report = build_daily_sales_report(db, date(2024, 1, 1))

    assert report.order_count == 0
    assert report.revenue == Decimal("0.00")
    assert report.top_products == []


def test_notification_task_runs_inline():
    result = send_order_notification_task(1, 42, "59.97", 3)

    assert result["order_id"] == 42
    assert result["status"] == "sent"
    assert result["message"] == "Order #42 placed: 3 items, total 59.97"


def test_order_placed_message_singular():
    assert order_placed_message(7, "10.00", 1) == "Order #7 placed: 1 item, total 10.00"


def test_report_task_uses_its_own_session(monkeypatch, session_factory, db, user, make_product):
    pid = make_product("A", price="10.00")
    _order(db, user, [(pid, 3, "10.00")])
    monkeypatch.setattr("storefront.tasks.sales_report.SessionLocal", session_factory)

    result = daily_sales_report_task("2024-05-01")

    assert result["order_count"] == 1
    assert result["revenue"] == "30.00"
    assert result["top_products"][0]["units"] == 3
