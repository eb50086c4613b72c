"""
Django admin configuration for sales models.

Committed sales are immutable, so the admin is read-only.
"""

from django.contrib import admin

from .models import Transaction, TransactionItem


class TransactionItemInline(admin.TabularInline):
    """Inline admin for TransactionItem model."""

    model = TransactionItem
    extra = 0
    can_delete = False
    fields = ["position", "product", "quantity", "unit_price", "subtotal"]
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin interface for Transaction model."""

    list_display = ["id", "owner", "total_amount", "transaction_date"]
    list_filter = ["transaction_date"]
    search_fields = ["owner__email"]
    readonly_fields = ["id", "owner", "total_amount", "transaction_date", "created_at"]
    date_hierarchy = "transaction_date"
    inlines = [TransactionItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
