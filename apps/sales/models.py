"""
Sales models for the point-of-sale back end.

A Transaction is one committed sale; its TransactionItems are the cart lines
with the unit price captured at sale time. Both are append-only: once written
they are never updated, so later price changes on a product leave the sale
history untouched.
"""

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from apps.core.models import User
from apps.inventory.models import Product


class ImmutableRecordError(Exception):
    """Raised when code tries to modify a committed sale record."""


class ImmutableModel(models.Model):
    """Abstract model whose rows can be inserted but never updated."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError(
                f"{self.__class__.__name__} {self.pk} is committed and cannot be modified"
            )
        super().save(*args, **kwargs)


class Transaction(ImmutableModel):
    """
    A committed sale.

    ``total_amount`` always equals the sum of the item subtotals; both are
    written in the same database transaction by ``SaleLedger.record``.
    """

    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="transactions",
        help_text="User that made the sale",
    )

    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Sum of the line item subtotals",
    )

    transaction_date = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="When the sale was committed",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the record was created",
    )

    class Meta:
        db_table = "transactions"
        ordering = ["-transaction_date", "-id"]
        verbose_name = "Transaction"
        verbose_name_plural = "Transactions"
        constraints = [
            models.CheckConstraint(
                condition=Q(total_amount__gte=0),
                name="transaction_total_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "-transaction_date"], name="txn_owner_date_idx"),
        ]

    def __str__(self):
        return f"Transaction {self.pk} - {self.total_amount}"

    def calculate_total(self):
        """Recompute the total from the stored line items."""
        return sum((item.subtotal for item in self.items.all()), Decimal("0.00"))


class TransactionItem(ImmutableModel):
    """
    One cart line of a committed sale.

    ``position`` is the line's index in the submitted cart, so items read
    back in the order the caller sent them.
    """

    transaction = models.ForeignKey(
        Transaction,
        on_delete=models.CASCADE,
        related_name="items",
        help_text="Transaction this line belongs to",
    )

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="transaction_items",
        help_text="Product that was sold",
    )

    position = models.PositiveIntegerField(
        help_text="Index of the line in the submitted cart",
    )

    quantity = models.IntegerField(
        validators=[MinValueValidator(1)],
        help_text="Quantity sold",
    )

    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Unit price at time of sale (may differ from current product price)",
    )

    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Subtotal for this line item (quantity * unit_price)",
    )

    class Meta:
        db_table = "transaction_items"
        ordering = ["transaction", "position"]
        verbose_name = "Transaction Item"
        verbose_name_plural = "Transaction Items"
        constraints = [
            models.UniqueConstraint(
                fields=["transaction", "position"],
                name="txn_item_unique_position",
            ),
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="txn_item_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["product"], name="txn_item_product_idx"),
        ]

    def __str__(self):
        return f"{self.product_id} x {self.quantity}"

    def calculate_subtotal(self):
        """Calculate and return the subtotal for this item."""
        return self.unit_price * self.quantity
