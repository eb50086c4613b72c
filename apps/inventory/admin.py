"""
Django admin configuration for inventory models.
"""

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["name", "owner", "price", "stock_quantity", "is_active", "updated_at"]
    list_filter = ["is_active", "created_at"]
    search_fields = ["name", "owner__email"]
    readonly_fields = ["id", "created_at", "updated_at"]
    fieldsets = [
        (
            "Basic Information",
            {
                "fields": ["id", "owner", "name"],
            },
        ),
        (
            "Pricing and Stock",
            {
                "fields": ["price", "stock_quantity", "low_stock_threshold"],
            },
        ),
        (
            "Status",
            {
                "fields": ["is_active"],
            },
        ),
        (
            "Timestamps",
            {
                "fields": ["created_at", "updated_at"],
            },
        ),
    ]
