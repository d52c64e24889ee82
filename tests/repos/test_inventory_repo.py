"""Tests for the inventory ledger."""
from decimal import Decimal

import pytest

from storefront.repos.inventory_repo import InventoryRepo


class TestHasSufficientStock:

    def test_true_when_enough(self, db, make_product):
        pid = make_product(stock=10)
        assert InventoryRepo(db).has_sufficient_stock(pid, 5) is True

    def test_true_for_exact_amount(self, db, make_product):
        pid = make_product(stock=10)
        assert InventoryRepo(db).has_sufficient_stock(pid, 10) is True

    def test_false_when_not_enough(self, db, make_product):
        pid = make_product(stock=10)
        assert InventoryRepo(db).has_sufficient_stock(pid, 15) is False

    def test_unknown_product_is_insufficient(self, db):
        assert InventoryRepo(db).has_sufficient_stock(999, 1) is False


class TestDecreaseStock:

    def test_subtracts_quantity(self, db, make_product):
        pid = make_product(stock=10)
        repo = InventoryRepo(db)

        assert repo.decrease_stock(pid, 4) is True
        repo.commit()

        assert repo.available_quantity(pid) == 6

    def test_can_take_last_unit(self, db, make_product):
        pid = make_product(stock=3)
        repo = InventoryRepo(db)

        assert repo.decrease_stock(pid, 3) is True
        assert repo.available_quantity(pid) == 0

    def test_refuses_to_go_negative_and_leaves_stock(self, db, make_product):
        pid = make_product(stock=3)
        repo = InventoryRepo(db)

        assert repo.decrease_stock(pid, 4) is False
        assert repo.available_quantity(pid) == 3

    def test_unknown_product(self, db):
        assert InventoryRepo(db).decrease_stock(999, 1) is False

    def test_non_positive_quantity_rejected(self, db, make_product):
        pid = make_product(stock=3)
        with pytest.raises(ValueError, match="greater than 0"):
            InventoryRepo(db).decrease_stock(pid, 0)

    def test_rollback_restores_stock(self, db, make_product):
        pid = make_product(stock=5)
        repo = InventoryRepo(db)

        repo.decrease_stock(pid, 5)
        repo.rollback()

        assert repo.available_quantity(pid) == 5


class TestIncreaseStock:

    def test_adds_quantity(self, db, make_product):
        pid = make_product(stock=0)
        repo = InventoryRepo(db)

        assert repo.increase_stock(pid, 7) is True
        repo.commit()

        assert repo.get_product(pid).available_quantity == 7

    def test_unknown_product(self, db):
        assert InventoryRepo(db).increase_stock(999, 1) is False


class TestReads:

    def test_get_product_snapshot(self, db, make_product):
        pid = make_product(name="Lamp", price="75.50", stock=4)
        snapshot = InventoryRepo(db).get_product(pid)

        assert snapshot.name == "Lamp"
        assert snapshot.price == Decimal("75.50")
        assert snapshot.available_quantity == 4

    def test_get_missing_product(self, db):
        assert InventoryRepo(db).get_product(999) is None

    def test_current_price(self, db, make_product):
        pid = make_product(price="19.99")
        assert InventoryRepo(db).current_price(pid) == Decimal("19.99")

    def test_is_low_stock(self, db, make_product):
        low = make_product(stock=5)
        plenty = make_product(stock=50)
        empty = make_product(stock=0)
        repo = InventoryRepo(db)

        assert repo.is_low_stock(low) is True
        assert repo.is_low_stock(plenty) is False
        assert repo.is_low_stock(empty) is False
