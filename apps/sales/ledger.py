"""
Sale ledger: append-only storage of committed transactions.

``record`` is the only write path and is called by ``SaleProcessor`` inside
its atomic unit. Everything else is a read used by the history endpoints and
the dashboard.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from django.db.models import Count, Prefetch, Sum
from django.utils import timezone

from .models import Transaction, TransactionItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommittedLine:
    """A cart line as written to the ledger."""

    product_id: int
    product_name: str
    position: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    id: Optional[int] = None


@dataclass(frozen=True)
class CommittedSale:
    """A committed transaction with its lines in cart order."""

    id: int
    owner_id: int
    total_amount: Decimal
    transaction_date: datetime
    items: tuple


def day_bounds(day):
    """Return the aware [start, end) datetimes of ``day`` in the current time zone."""
    start = timezone.make_aware(datetime.combine(day, time.min))
    end = timezone.make_aware(datetime.combine(day + timedelta(days=1), time.min))
    return start, end


class SaleLedger:
    """ORM-backed sale ledger."""

    def record(self, owner_id, total_amount, lines) -> CommittedSale:
        """
        Write one Transaction and one TransactionItem per line.

        Must run inside the caller's atomic block so the rows appear together
        with the stock decrements or not at all.
        """
        txn = Transaction.objects.create(owner_id=owner_id, total_amount=total_amount)
        written = []
        for line in lines:
            item = TransactionItem.objects.create(
                transaction=txn,
                product_id=line.product_id,
                position=line.position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=line.subtotal,
            )
            written.append(replace(line, id=item.pk))

        logger.debug("Recorded transaction %s with %d items", txn.pk, len(written))
        return CommittedSale(
            id=txn.pk,
            owner_id=owner_id,
            total_amount=txn.total_amount,
            transaction_date=txn.transaction_date,
            items=tuple(written),
        )

    # Reads

    def _owned(self, owner_id):
        items = TransactionItem.objects.select_related("product").order_by("position")
        return Transaction.objects.filter(owner_id=owner_id).prefetch_related(
            Prefetch("items", queryset=items)
        )

    def history(self, owner_id, limit, offset=0):
        """Transactions newest first, with items and product names."""
        return list(self._owned(owner_id).order_by("-transaction_date", "-id")[offset : offset + limit])

    def in_range(self, owner_id, start_date, end_date):
        """Transactions between two dates, both days inclusive, oldest first."""
        start, _ = day_bounds(start_date)
        _, end = day_bounds(end_date)
        return list(
            self._owned(owner_id)
            .filter(transaction_date__gte=start, transaction_date__lt=end)
            .order_by("transaction_date", "id")
        )

    def get(self, owner_id, transaction_id):
        """Return one transaction, or None when it is missing or not owned."""
        return self._owned(owner_id).filter(pk=transaction_id).first()

    def recent(self, owner_id, limit):
        """Newest transactions annotated with ``item_count``."""
        return list(
            Transaction.objects.filter(owner_id=owner_id)
            .annotate(item_count=Count("items"))
            .order_by("-transaction_date", "-id")[:limit]
        )

    def _on_day(self, owner_id, day):
        start, end = day_bounds(day)
        return Transaction.objects.filter(
            owner_id=owner_id,
            transaction_date__gte=start,
            transaction_date__lt=end,
        )

    def daily_revenue(self, owner_id, day) -> Decimal:
        """Sum of transaction totals on ``day``."""
        total = self._on_day(owner_id, day).aggregate(total=Sum("total_amount"))["total"]
        return total if total is not None else Decimal("0.00")

    def daily_count(self, owner_id, day) -> int:
        """Number of transactions on ``day``."""
        return self._on_day(owner_id, day).count()
