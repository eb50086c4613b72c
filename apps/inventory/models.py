"""
Inventory models for the point-of-sale back end.

A product carries its current unit price and stock level. Both are owned by
the catalog (product CRUD); the sale processor only reads the price and
decrements the stock.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.core.models import User


def default_low_stock_threshold():
    """Threshold given to new products, from ``POS_SETTINGS``."""
    return settings.POS_SETTINGS["LOW_STOCK_THRESHOLD"]


class Product(models.Model):
    """
    A sellable product owned by a single user.

    Stock can never go negative: the check constraint backs up the
    conditional decrement in ``InventoryStore``.
    """

    owner = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="products",
        help_text="User that owns this product",
    )

    name = models.CharField(
        max_length=255,
        help_text="Product name",
    )

    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Current unit selling price",
    )

    stock_quantity = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Current quantity in stock",
    )

    low_stock_threshold = models.IntegerField(
        default=default_low_stock_threshold,
        validators=[MinValueValidator(0)],
        help_text="Stock below this level counts as low stock",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Inactive products are hidden from the catalog and cannot be sold",
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the product was created",
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the product was last updated",
    )

    class Meta:
        db_table = "products"
        ordering = ["-created_at", "-id"]
        verbose_name = "Product"
        verbose_name_plural = "Products"
        constraints = [
            models.CheckConstraint(
                condition=Q(stock_quantity__gte=0),
                name="product_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(price__gt=0),
                name="product_price_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["owner", "is_active"], name="product_owner_active_idx"),
            models.Index(fields=["owner", "stock_quantity"], name="product_owner_stock_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.stock_quantity} in stock)"

    def is_low_stock(self):
        """Check if stock is below the low stock threshold."""
        return self.stock_quantity < self.low_stock_threshold

    def is_out_of_stock(self):
        """Check if product is out of stock."""
        return self.stock_quantity == 0

    def calculate_stock_value(self):
        """Calculate total selling value of the stock on hand."""
        return self.price * self.stock_quantity
