# storefront/repos/inventory_repo.py
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.records import ProductSnapshot
from storefront.utils.settings import LOW_STOCK_THRESHOLD


def to_snapshot(product: ProductModel) -> ProductSnapshot:
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        price=Decimal(product.price),
        available_quantity=product.stock_quantity,
    )


class InventoryRepo:
    """
    Per-product available quantity.
    Never commits: commit/rollback is decided by the calling service.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductSnapshot | None:
        product = self.db.get(ProductModel, product_id, populate_existing=True)
        return to_snapshot(product) if product else None

    def available_quantity(self, product_id: int) -> int | None:
        return self.db.execute(
            select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def current_price(self, product_id: int) -> Decimal | None:
        price = self.db.execute(
            select(ProductModel.price).where(ProductModel.id == product_id)
        ).scalar_one_or_none()
        return Decimal(price) if price is not None else None

    def has_sufficient_stock(self, product_id: int, requested_qty: int) -> bool:
        available = self.available_quantity(product_id)
        if available is None:
            return False
        return available >= requested_qty

    def decrease_stock(self, product_id: int, qty: int) -> bool:
        if qty <= 0:
            raise ValueError("Quantity must be greater than 0")

        # single conditional UPDATE, the row lock serializes concurrent checkouts
        # UPDATE products SET stock_quantity = stock_quantity - 2 WHERE id = 1 AND stock_quantity >= 2
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock_quantity >= qty)
            .values(stock_quantity=ProductModel.stock_quantity - qty)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increase_stock(self, product_id: int, qty: int) -> bool:
        if qty <= 0:
            raise ValueError("Quantity must be greater than 0")

        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock_quantity=ProductModel.stock_quantity + qty)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def is_low_stock(self, product_id: int) -> bool:
        available = self.available_quantity(product_id)
        if available is None:
            return False
        return 0 < available <= LOW_STOCK_THRESHOLD

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
