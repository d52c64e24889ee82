from sqlalchemy import func, select

from storefront.data import seed as seed_module
from storefront.data.models import ProductModel


def test_seed_only_fills_an_empty_catalog(monkeypatch, session_factory, db):
    monkeypatch.setattr(seed_module, "SessionLocal", session_factory)

    seed_module.seed()
    seed_module.seed()

    count = db.execute(select(func.count(ProductModel.id))).scalar_one()
    assert count == len(seed_module.PRODUCTS)
