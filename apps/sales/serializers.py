"""
Serializers for the sales API.

Input serializers only check the shape of a request; stock, ownership and
pricing are decided by ``SaleProcessor``.
"""

from rest_framework import serializers

from .models import Transaction, TransactionItem
from .services import SaleLine, SaleRequest


class SaleItemInputSerializer(serializers.Serializer):
    """One cart line."""

    product_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class SaleCreateSerializer(serializers.Serializer):
    """
    Serializer for creating a sale.

    Request body::

        {"items": [{"product_id": 1, "quantity": 2}, ...]}
    """

    items = serializers.ListField(
        child=SaleItemInputSerializer(),
        allow_empty=False,
        error_messages={"empty": "Cart must contain at least one item."},
    )

    def to_sale_request(self, owner_id):
        return SaleRequest(
            owner_id=owner_id,
            items=[
                SaleLine(product_id=item["product_id"], quantity=item["quantity"])
                for item in self.validated_data["items"]
            ],
        )


class CommittedLineSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    position = serializers.IntegerField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class CommittedSaleSerializer(serializers.Serializer):
    """Renders the result of ``SaleProcessor.process``."""

    id = serializers.IntegerField()
    owner_id = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    transaction_date = serializers.DateTimeField()
    items = CommittedLineSerializer(many=True)


class TransactionItemSerializer(serializers.ModelSerializer):
    """Serializer for transaction items."""

    product_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = TransactionItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "position",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class TransactionDetailSerializer(serializers.ModelSerializer):
    """Serializer for a transaction with all its items."""

    owner_id = serializers.IntegerField(read_only=True)
    items = TransactionItemSerializer(many=True, read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "owner_id",
            "total_amount",
            "transaction_date",
            "items",
        ]
        read_only_fields = fields


class HistoryQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=500, required=False)
    offset = serializers.IntegerField(min_value=0, required=False, default=0)


class DateRangeQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("start_date must not be after end_date.")
        return attrs


class DayQuerySerializer(serializers.Serializer):
    """Optional ``date`` parameter; defaults to today in the server time zone."""

    date = serializers.DateField(required=False)
