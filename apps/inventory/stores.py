"""
Inventory store: authoritative stock and price per product.

Reads and writes are always scoped to the owning user, and inactive products
are invisible. ``decrement`` is a single conditional UPDATE, so two sales can
never take more stock than exists even when they both passed an earlier read.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import F
from django.utils import timezone

from apps.sales.exceptions import InsufficientStock, ProductNotFound

from .models import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductSnapshot:
    """Price and stock of a product as read at one point in time."""

    id: int
    owner_id: int
    name: str
    price: Decimal
    stock_quantity: int


class InventoryStore:
    """ORM-backed inventory store."""

    def _scoped(self, product_id, owner_id):
        return Product.objects.filter(pk=product_id, owner_id=owner_id, is_active=True)

    def _snapshot(self, queryset, product_id):
        row = queryset.values("id", "owner_id", "name", "price", "stock_quantity").first()
        if row is None:
            raise ProductNotFound(product_id)
        return ProductSnapshot(**row)

    def get(self, product_id, owner_id) -> ProductSnapshot:
        """
        Read the latest committed price and stock.

        Raises:
            ProductNotFound: If the product is missing, inactive or owned by
                someone else.
        """
        return self._snapshot(self._scoped(product_id, owner_id), product_id)

    def get_for_update(self, product_id, owner_id) -> ProductSnapshot:
        """
        Read and row-lock a product inside the caller's atomic block.

        Must be called inside ``transaction.atomic``. Backends without
        ``SELECT ... FOR UPDATE`` (SQLite) serialize writers at BEGIN instead.
        """
        queryset = self._scoped(product_id, owner_id).select_for_update()
        return self._snapshot(queryset, product_id)

    def decrement(self, product_id, owner_id, amount):
        """
        Take ``amount`` units of stock if at least that many are left.

        Raises:
            InsufficientStock: If the stock at the moment of the update is
                lower than ``amount``.
            ProductNotFound: If the product disappeared since it was read.
        """
        updated = (
            self._scoped(product_id, owner_id)
            .filter(stock_quantity__gte=amount)
            .update(stock_quantity=F("stock_quantity") - amount, updated_at=timezone.now())
        )
        if updated:
            return

        row = self._scoped(product_id, owner_id).values("name", "stock_quantity").first()
        if row is None:
            raise ProductNotFound(product_id)

        logger.debug(
            "Stock conflict on product %s: requested %s, available %s",
            product_id,
            amount,
            row["stock_quantity"],
        )
        raise InsufficientStock(
            product_id,
            requested=amount,
            available=row["stock_quantity"],
            product_name=row["name"],
        )
