"""
Sale commitment.

``SaleProcessor.process`` turns a cart into a committed transaction. The
whole sale is one atomic unit: every line's stock is decremented and the
transaction with all of its items is written, or nothing changes at all.

Rows are locked in ascending product id order so two carts touching the same
products always acquire them in the same sequence. Stock is taken with a
conditional decrement, so a sale that passed an earlier read can still be
rejected if a concurrent sale got there first.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DatabaseError, transaction

from apps.inventory.stores import InventoryStore

from .exceptions import SaleError, SaleValidationError, StorageFault
from .ledger import CommittedLine, CommittedSale, SaleLedger
from .models import Transaction

logger = logging.getLogger(__name__)

_money_field = Transaction._meta.get_field("total_amount")

# Smallest amount the money columns cannot store
MAX_AMOUNT = Decimal(10) ** (_money_field.max_digits - _money_field.decimal_places)

__all__ = [
    "CommittedLine",
    "CommittedSale",
    "SaleLine",
    "SaleProcessor",
    "SaleRequest",
]


@dataclass(frozen=True)
class SaleLine:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class SaleRequest:
    owner_id: int
    items: list = field(default_factory=list)


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


class SaleProcessor:
    """
    Validate, price and commit sales.

    Args:
        inventory: Store providing ``get``, ``get_for_update`` and ``decrement``.
        ledger: Store providing ``record``.
        atomic: Zero-argument callable returning the context manager that
            wraps one sale. Defaults to ``django.db.transaction.atomic``.
    """

    def __init__(self, inventory, ledger, atomic=transaction.atomic):
        self.inventory = inventory
        self.ledger = ledger
        self.atomic = atomic

    @classmethod
    def default(cls):
        """Build a processor backed by the database."""
        return cls(inventory=InventoryStore(), ledger=SaleLedger(), atomic=transaction.atomic)

    def process(self, sale_request: SaleRequest) -> CommittedSale:
        """
        Commit one sale.

        Raises:
            SaleValidationError: Empty cart, a non-positive quantity or an
                amount too large to store.
            ProductNotFound: A product is missing, inactive or owned by
                another user.
            InsufficientStock: A product cannot cover its line.
            StorageFault: The database failed; nothing was written.
        """
        lines = self._validate(sale_request)
        owner_id = sale_request.owner_id

        try:
            resolved = [self.inventory.get(line.product_id, owner_id) for line in lines]
            self._price(lines, resolved)
            sale = self._commit(owner_id, lines)
        except SaleError as exc:
            logger.warning("Sale rejected for user %s: %s", owner_id, exc.message)
            raise
        except DatabaseError as exc:
            logger.error("Sale commit failed for user %s", owner_id, exc_info=True)
            raise StorageFault() from exc

        logger.info(
            "Transaction %s committed for user %s: %d lines, total %s",
            sale.id,
            owner_id,
            len(sale.items),
            sale.total_amount,
        )
        return sale

    def _validate(self, sale_request):
        items = sale_request.items
        if not items:
            raise SaleValidationError("Cart must contain at least one item")

        lines = []
        for index, item in enumerate(items):
            if not _is_int(item.product_id):
                raise SaleValidationError("Product id must be an integer", line=index)
            if not _is_int(item.quantity) or item.quantity <= 0:
                raise SaleValidationError("Quantity must be a positive integer", line=index)
            lines.append(item)
        return lines

    def _price(self, lines, snapshots):
        """
        Build the ledger lines and the total from one snapshot per line.

        Raises:
            SaleValidationError: A subtotal or the total does not fit the
                stored money columns.
        """
        committed = []
        for position, (line, snapshot) in enumerate(zip(lines, snapshots)):
            subtotal = snapshot.price * line.quantity
            if subtotal >= MAX_AMOUNT:
                raise SaleValidationError(
                    f"Line subtotal {subtotal} exceeds the maximum amount of a sale",
                    line=position,
                )
            committed.append(
                CommittedLine(
                    product_id=line.product_id,
                    product_name=snapshot.name,
                    position=position,
                    quantity=line.quantity,
                    unit_price=snapshot.price,
                    subtotal=subtotal,
                )
            )

        total = sum((line.subtotal for line in committed), Decimal("0.00"))
        if total >= MAX_AMOUNT:
            raise SaleValidationError(f"Sale total {total} exceeds the maximum amount of a sale")
        return committed, total

    def _commit(self, owner_id, lines):
        lock_order = sorted(range(len(lines)), key=lambda i: (lines[i].product_id, i))

        with self.atomic():
            snapshots = [None] * len(lines)
            for position in lock_order:
                line = lines[position]
                snapshots[position] = self.inventory.get_for_update(line.product_id, owner_id)
                self.inventory.decrement(line.product_id, owner_id, line.quantity)

            # Priced again from the locked rows
            committed, total = self._price(lines, snapshots)
            return self.ledger.record(owner_id, total, committed)
