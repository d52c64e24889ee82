"""Shared fixtures.

Every test gets a fresh in-memory SQLite database; nothing talks to
PostgreSQL, Redis or a Celery broker.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, make_engine
from storefront.data.models import CartItemModel, ProductModel, UserModel


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    def _make(user_id: int, name: str = "Alice") -> int:
        db.add(UserModel(id=user_id, name=name))
        db.commit()
        return user_id

    return _make


@pytest.fixture
def make_product(db):
    def _make(name: str = "Widget", price: str = "100.00", stock: int = 20) -> int:
        product = ProductModel(name=name, price=Decimal(price), stock_quantity=stock)
        db.add(product)
        db.commit()
        return product.id

    return _make


@pytest.fixture
def put_in_cart(db):
    """Writes a cart line directly, bypassing the clamp policy (a stale cart)."""

    def _put(user_id: int, product_id: int, quantity: int) -> int:
        item = CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
        db.add(item)
        db.commit()
        return item.id

    return _put


@pytest.fixture
def user(make_user):
    return make_user(1)


@pytest.fixture
def other_user(make_user):
    return make_user(2, "Bob")
