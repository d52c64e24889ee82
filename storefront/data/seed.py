# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel, UserModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"name": "Keyboard", "price": Decimal("199.99"), "stock_quantity": 25},
    {"name": "Mouse", "price": Decimal("49.50"), "stock_quantity": 100},
    {"name": "Monitor", "price": Decimal("899.00"), "stock_quantity": 5},
]


def seed():
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return
        db.add(UserModel(id=1, name="Demo"))
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
        logger.info(f"Seeded 1 user and {len(PRODUCTS)} products")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
