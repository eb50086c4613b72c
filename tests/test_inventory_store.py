"""
Tests for the ORM-backed inventory store.
"""

from decimal import Decimal

from django.db import transaction

import pytest

from apps.inventory.stores import InventoryStore
from apps.sales.exceptions import InsufficientStock, ProductNotFound


@pytest.mark.django_db
class TestInventoryStore:
    @pytest.fixture
    def store(self):
        return InventoryStore()

    def test_get_returns_snapshot(self, store, make_product, user):
        product = make_product(name="Coffee", price="19.99", stock=100)

        snapshot = store.get(product.pk, user.pk)

        assert snapshot.id == product.pk
        assert snapshot.name == "Coffee"
        assert snapshot.price == Decimal("19.99")
        assert snapshot.stock_quantity == 100

    def test_get_hides_other_owners_products(self, store, make_product, other_user, user):
        product = make_product(owner=other_user)

        with pytest.raises(ProductNotFound) as excinfo:
            store.get(product.pk, user.pk)

        assert excinfo.value.product_id == product.pk

    def test_get_hides_inactive_products(self, store, make_product, user):
        product = make_product(is_active=False)

        with pytest.raises(ProductNotFound):
            store.get(product.pk, user.pk)

    def test_get_for_update_inside_atomic(self, store, make_product, user):
        product = make_product(stock=4)

        with transaction.atomic():
            snapshot = store.get_for_update(product.pk, user.pk)

        assert snapshot.stock_quantity == 4

    def test_decrement(self, store, make_product, user):
        product = make_product(stock=10)

        store.decrement(product.pk, user.pk, 3)

        product.refresh_from_db()
        assert product.stock_quantity == 7

    def test_decrement_to_zero(self, store, make_product, user):
        product = make_product(stock=2)

        store.decrement(product.pk, user.pk, 2)

        product.refresh_from_db()
        assert product.stock_quantity == 0

    def test_decrement_beyond_stock_raises(self, store, make_product, user):
        product = make_product(name="Bagel", stock=2)

        with pytest.raises(InsufficientStock) as excinfo:
            store.decrement(product.pk, user.pk, 3)

        error = excinfo.value
        assert (error.requested, error.available) == (3, 2)
        assert "Bagel" in error.message
        product.refresh_from_db()
        assert product.stock_quantity == 2

    def test_decrement_unknown_product(self, store, user):
        with pytest.raises(ProductNotFound):
            store.decrement(424242, user.pk, 1)

    def test_decrement_does_not_touch_price(self, store, make_product, user):
        product = make_product(price="5.25", stock=10)

        store.decrement(product.pk, user.pk, 1)

        product.refresh_from_db()
        assert product.price == Decimal("5.25")
