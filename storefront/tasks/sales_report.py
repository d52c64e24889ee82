# storefront/tasks/sales_report.py
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.domain.enums import OrderStatus
from storefront.domain.money import sum_money
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

TOP_PRODUCTS = 5


@dataclass(frozen=True)
class ProductSales:
    product_id: int
    product_name: str | None
    units: int
    revenue: Decimal


@dataclass(frozen=True)
class SalesReport:
    day: date
    order_count: int
    revenue: Decimal
    units_sold: int
    top_products: list[ProductSales] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "day": self.day.isoformat(),
            "order_count": self.order_count,
            "revenue": str(self.revenue),
            "units_sold": self.units_sold,
            "top_products": [
                {
                    "product_id": p.product_id,
                    "product_name": p.product_name,
                    "units": p.units,
                    "revenue": str(p.revenue),
                }
                for p in self.top_products
            ],
        }


def build_daily_sales_report(db: Session, day: date) -> SalesReport:
    orders = OrderRepo(db).orders_on_date(day, status=OrderStatus.COMPLETED)

    units = Counter()
    revenue: dict[int, list[Decimal]] = {}
    names: dict[int, str | None] = {}
    for order in orders:
        for line in order.lines:
            units[line.product_id] += line.quantity
            revenue.setdefault(line.product_id, []).append(line.line_total)
            names[line.product_id] = line.product_name

    top = [
        ProductSales(
            product_id=product_id,
            product_name=names[product_id],
            units=count,
            revenue=sum_money(revenue[product_id]),
        )
        for product_id, count in units.most_common(TOP_PRODUCTS)
    ]

    return SalesReport(
        day=day,
        order_count=len(orders),
        revenue=sum_money(o.total_amount for o in orders),
        units_sold=sum(units.values()),
        top_products=top,
    )


@celery_app.task(name="storefront.tasks.sales_report.daily_sales_report_task")
def daily_sales_report_task(day: str | None = None):
    report_day = date.fromisoformat(day) if day else datetime.now(timezone.utc).date()
    logger.info(f"Daily sales report for {report_day} started")

    db = SessionLocal()
    try:
        report = build_daily_sales_report(db, report_day)
    finally:
        db.close()

    logger.info(
        f"Daily sales report {report.day}: {report.order_count} orders, "
        f"{report.units_sold} units, revenue {report.revenue}"
    )
    return report.as_dict()
