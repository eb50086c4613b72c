"""
Serializers for inventory models.
"""

from decimal import Decimal

from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for products."""

    is_low_stock = serializers.BooleanField(read_only=True)
    is_out_of_stock = serializers.BooleanField(read_only=True)
    stock_value = serializers.DecimalField(
        source="calculate_stock_value",
        max_digits=14,
        decimal_places=2,
        read_only=True,
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "owner",
            "name",
            "price",
            "stock_quantity",
            "low_stock_threshold",
            "is_low_stock",
            "is_out_of_stock",
            "stock_value",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductCreateUpdateSerializer(serializers.ModelSerializer):
    """Serializer for creating and updating products."""

    name = serializers.CharField(max_length=255, allow_blank=False, trim_whitespace=True)
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    stock_quantity = serializers.IntegerField(min_value=0, required=False)
    low_stock_threshold = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = Product
        fields = [
            "name",
            "price",
            "stock_quantity",
            "low_stock_threshold",
        ]

    def to_representation(self, instance):
        return ProductSerializer(instance, context=self.context).data


class LowStockQuerySerializer(serializers.Serializer):
    """Query parameters for the low stock listing."""

    threshold = serializers.IntegerField(min_value=0, required=False)
