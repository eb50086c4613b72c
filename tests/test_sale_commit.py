"""
End-to-end sale commitment against the database.
"""

import logging
import threading
from decimal import Decimal

from django.db import OperationalError, connection

import pytest

from apps.inventory.models import Product
from apps.sales.exceptions import (
    InsufficientStock,
    ProductNotFound,
    SaleValidationError,
    StorageFault,
)
from apps.sales.ledger import SaleLedger
from apps.sales.models import Transaction, TransactionItem
from apps.sales.services import SaleLine, SaleProcessor, SaleRequest


def cart(user, *lines):
    return SaleRequest(owner_id=user.pk, items=[SaleLine(p.pk, qty) for p, qty in lines])


@pytest.mark.django_db
class TestSaleCommit:
    @pytest.fixture
    def processor(self):
        return SaleProcessor.default()

    def test_end_to_end_example(self, processor, user, make_product):
        p1 = make_product(name="P1", price="19.99", stock=100)
        p2 = make_product(name="P2", price="9.99", stock=50)

        result = processor.process(cart(user, (p1, 2), (p2, 1)))

        txn = Transaction.objects.get(pk=result.id)
        items = list(txn.items.all())
        assert txn.total_amount == Decimal("49.97")
        assert [item.subtotal for item in items] == [Decimal("39.98"), Decimal("9.99")]
        assert [item.product_id for item in items] == [p1.pk, p2.pk]
        p1.refresh_from_db()
        p2.refresh_from_db()
        assert p1.stock_quantity == 98
        assert p2.stock_quantity == 49

    def test_result_matches_stored_rows(self, processor, user, make_product):
        product = make_product(price="2.50", stock=10)

        result = processor.process(cart(user, (product, 4)))

        item = TransactionItem.objects.get(transaction_id=result.id)
        assert result.items[0].id == item.pk
        assert result.items[0].product_name == product.name
        assert result.total_amount == item.subtotal == Decimal("10.00")
        assert result.owner_id == user.pk

    def test_cart_is_all_or_nothing(self, processor, user, make_product):
        plenty = make_product(name="A", stock=10)
        scarce = make_product(name="B", stock=1)

        with pytest.raises(InsufficientStock) as excinfo:
            processor.process(cart(user, (plenty, 3), (scarce, 2)))

        assert excinfo.value.product_id == scarce.pk
        assert excinfo.value.available == 1
        plenty.refresh_from_db()
        scarce.refresh_from_db()
        assert plenty.stock_quantity == 10
        assert scarce.stock_quantity == 1
        assert not Transaction.objects.exists()
        assert not TransactionItem.objects.exists()

    def test_foreign_product_rejected_without_changes(
        self, processor, user, other_user, make_product
    ):
        mine = make_product(stock=5)
        theirs = make_product(owner=other_user, stock=5)

        with pytest.raises(ProductNotFound):
            processor.process(cart(user, (mine, 1), (theirs, 1)))

        mine.refresh_from_db()
        assert mine.stock_quantity == 5
        assert not Transaction.objects.exists()

    def test_price_snapshot_survives_price_change(self, processor, user, make_product):
        product = make_product(price="19.99", stock=10)
        result = processor.process(cart(user, (product, 1)))

        Product.objects.filter(pk=product.pk).update(price=Decimal("25.00"))

        item = TransactionItem.objects.get(transaction_id=result.id)
        assert item.unit_price == Decimal("19.99")
        assert Transaction.objects.get(pk=result.id).total_amount == Decimal("19.99")

    def test_repeated_request_creates_two_transactions(self, processor, user, make_product):
        product = make_product(stock=10)
        request = cart(user, (product, 2))

        first = processor.process(request)
        second = processor.process(request)

        assert first.id != second.id
        assert Transaction.objects.count() == 2
        product.refresh_from_db()
        assert product.stock_quantity == 6

    def test_invariants_hold_across_sales(self, processor, user, make_product):
        a = make_product(name="A", price="0.10", stock=50)
        b = make_product(name="B", price="3.33", stock=50)
        processor.process(cart(user, (a, 3), (b, 3)))
        processor.process(cart(user, (b, 7), (a, 1)))

        for txn in Transaction.objects.prefetch_related("items"):
            assert txn.total_amount == txn.calculate_total()
            for item in txn.items.all():
                assert item.subtotal == item.quantity * item.unit_price
        assert not Product.objects.filter(stock_quantity__lt=0).exists()

    def test_amount_too_large_to_store_is_rejected_before_commit(
        self, processor, user, make_product
    ):
        product = make_product(name="Yacht", price="9999999999.99", stock=1000)

        with pytest.raises(SaleValidationError) as excinfo:
            processor.process(cart(user, (product, 1000)))

        assert excinfo.value.line == 0
        product.refresh_from_db()
        assert product.stock_quantity == 1000
        assert not Transaction.objects.exists()

    def test_stock_conflict_logs_one_warning(self, processor, user, make_product, caplog):
        product = make_product(stock=1)

        with caplog.at_level(logging.WARNING):
            with pytest.raises(InsufficientStock):
                processor.process(cart(user, (product, 2)))

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].name == "apps.sales.services"

    def test_database_failure_is_rolled_back(self, user, make_product):
        product = make_product(stock=10)

        class FailingLedger(SaleLedger):
            def record(self, owner_id, total_amount, lines):
                super().record(owner_id, total_amount, lines)
                raise OperationalError("database is locked")

        processor = SaleProcessor.default()
        processor.ledger = FailingLedger()

        with pytest.raises(StorageFault):
            processor.process(cart(user, (product, 1)))

        product.refresh_from_db()
        assert product.stock_quantity == 10
        assert not Transaction.objects.exists()


@pytest.mark.django_db(transaction=True)
def test_concurrent_sales_sell_exactly_available_stock(user, make_product):
    """N buyers race for K units: K succeed, N - K are told stock ran out."""
    stock = 3
    buyers = 8
    product = make_product(name="Limited", price="5.00", stock=stock)
    request = cart(user, (product, 1))
    outcomes = []
    lock = threading.Lock()
    start = threading.Barrier(buyers)

    def buy():
        try:
            start.wait()
            try:
                SaleProcessor.default().process(request)
                outcome = "ok"
            except InsufficientStock:
                outcome = "short"
            with lock:
                outcomes.append(outcome)
        finally:
            connection.close()

    threads = [threading.Thread(target=buy) for _ in range(buyers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    product.refresh_from_db()
    assert outcomes.count("ok") == stock
    assert outcomes.count("short") == buyers - stock
    assert product.stock_quantity == 0
    assert Transaction.objects.count() == stock
