"""
Serializers for dashboard responses.
"""

from rest_framework import serializers


class DashboardStatsSerializer(serializers.Serializer):
    date = serializers.DateField()
    total_products = serializers.IntegerField()
    low_stock_products = serializers.IntegerField()
    daily_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_transactions_today = serializers.IntegerField()


class RecentTransactionSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    transaction_date = serializers.DateTimeField()
    item_count = serializers.IntegerField()


class TopProductSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    total_quantity_sold = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class LimitQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)
