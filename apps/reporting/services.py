"""
Dashboard aggregation over products and committed sales.

All figures are read-only queries scoped to one owner. "Today" is the current
date in the server time zone (``settings.TIME_ZONE``).
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List

from django.db.models import F, Sum
from django.utils import timezone

from apps.inventory.models import Product
from apps.sales.ledger import SaleLedger
from apps.sales.models import TransactionItem

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Compute the dashboard figures for one user.
    """

    def __init__(self, owner_id, ledger=None):
        self.owner_id = owner_id
        self.ledger = ledger or SaleLedger()

    def _active_products(self):
        return Product.objects.filter(owner_id=self.owner_id, is_active=True)

    def stats(self, day=None) -> Dict[str, Any]:
        """
        Headline numbers: product count, low stock count and today's sales.

        A product is low on stock below its own ``low_stock_threshold``,
        the same rule as ``Product.is_low_stock``.
        """
        day = day or timezone.localdate()

        return {
            "date": day,
            "total_products": self._active_products().count(),
            "low_stock_products": self._active_products()
            .filter(stock_quantity__lt=F("low_stock_threshold"))
            .count(),
            "daily_revenue": self.ledger.daily_revenue(self.owner_id, day),
            "total_transactions_today": self.ledger.daily_count(self.owner_id, day),
        }

    def recent_transactions(self, limit) -> List[Dict[str, Any]]:
        """Newest transactions with their item counts."""
        return [
            {
                "id": txn.pk,
                "total_amount": txn.total_amount,
                "transaction_date": txn.transaction_date,
                "item_count": txn.item_count,
            }
            for txn in self.ledger.recent(self.owner_id, limit)
        ]

    def top_products(self, limit) -> List[Dict[str, Any]]:
        """
        Best selling products by quantity sold, with the revenue they brought in.

        Ties are broken by product id. Revenue uses the prices captured at
        sale time.
        """
        rows = (
            TransactionItem.objects.filter(transaction__owner_id=self.owner_id)
            .values("product_id", "product__name")
            .annotate(total_quantity_sold=Sum("quantity"), total_revenue=Sum("subtotal"))
            .order_by("-total_quantity_sold", "product_id")[:limit]
        )
        return [
            {
                "product_id": row["product_id"],
                "product_name": row["product__name"],
                "total_quantity_sold": row["total_quantity_sold"],
                "total_revenue": (
                    row["total_revenue"] if row["total_revenue"] is not None else Decimal("0.00")
                ),
            }
            for row in rows
        ]
