"""
Tests for dashboard aggregation.
"""

from decimal import Decimal

from django.urls import reverse

import pytest
from rest_framework import status

from apps.inventory.models import Product
from apps.reporting.services import DashboardService
from apps.sales.services import SaleLine, SaleProcessor, SaleRequest


def sell(user, *lines):
    request = SaleRequest(owner_id=user.pk, items=[SaleLine(p.pk, qty) for p, qty in lines])
    return SaleProcessor.default().process(request)


@pytest.mark.django_db
class TestDashboardService:
    def test_stats(self, user, make_product):
        coffee = make_product(name="Coffee", price="19.99", stock=100)
        make_product(name="Bagel", price="9.99", stock=3)
        make_product(name="Retired", stock=0, is_active=False)
        sell(user, (coffee, 2))

        stats = DashboardService(user.pk).stats()

        assert stats["total_products"] == 2
        assert stats["low_stock_products"] == 1
        assert stats["daily_revenue"] == Decimal("39.98")
        assert stats["total_transactions_today"] == 1

    def test_low_stock_count_uses_each_products_threshold(self, user, make_product):
        make_product(name="Own threshold", stock=15, low_stock_threshold=20)
        make_product(name="Default threshold", stock=15)
        make_product(name="Empty", stock=0, low_stock_threshold=0)

        stats = DashboardService(user.pk).stats()

        flagged = [p for p in Product.objects.filter(owner=user) if p.is_low_stock()]
        assert stats["low_stock_products"] == len(flagged) == 1

    def test_stats_for_new_user(self, user):
        stats = DashboardService(user.pk).stats()

        assert stats["total_products"] == 0
        assert stats["daily_revenue"] == Decimal("0.00")
        assert stats["total_transactions_today"] == 0

    def test_recent_transactions(self, user, make_product):
        a = make_product(name="A", stock=10)
        b = make_product(name="B", stock=10)
        first = sell(user, (a, 1))
        second = sell(user, (a, 1), (b, 2))

        rows = DashboardService(user.pk).recent_transactions(limit=5)

        assert [row["id"] for row in rows] == [second.id, first.id]
        assert [row["item_count"] for row in rows] == [2, 1]

    def test_top_products(self, user, make_product, other_user):
        a = make_product(name="A", price="1.00", stock=50)
        b = make_product(name="B", price="2.00", stock=50)
        c = make_product(name="C", price="3.00", stock=50)
        sell(user, (a, 2), (b, 5))
        sell(user, (a, 1), (c, 1))
        foreign = make_product(name="Foreign", owner=other_user, stock=50)
        sell(other_user, (foreign, 40))

        rows = DashboardService(user.pk).top_products(limit=2)

        assert [row["product_name"] for row in rows] == ["B", "A"]
        assert rows[0]["total_quantity_sold"] == 5
        assert rows[0]["total_revenue"] == Decimal("10.00")
        assert rows[1]["total_quantity_sold"] == 3

    def test_top_products_uses_sale_time_prices(self, user, make_product):
        product = make_product(price="4.00", stock=10)
        sell(user, (product, 1))
        product.price = Decimal("9.00")
        product.save()
        sell(user, (product, 1))

        rows = DashboardService(user.pk).top_products(limit=5)

        assert rows[0]["total_revenue"] == Decimal("13.00")


@pytest.mark.django_db
class TestDashboardAPI:
    def test_stats_endpoint(self, authenticated_client, user, make_product):
        product = make_product(price="19.99", stock=100)
        sell(user, (product, 1))

        response = authenticated_client.get(reverse("reporting:dashboard_stats"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total_products"] == 1
        assert response.data["daily_revenue"] == "19.99"
        assert response.data["total_transactions_today"] == 1

    def test_recent_transactions_limit(self, authenticated_client, user, make_product):
        product = make_product(stock=10)
        for _ in range(3):
            sell(user, (product, 1))

        response = authenticated_client.get(
            reverse("reporting:dashboard_recent_transactions"), {"limit": 2}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data["results"]) == 2

    def test_top_products_endpoint(self, authenticated_client, user, make_product):
        product = make_product(name="Coffee", price="2.00", stock=10)
        sell(user, (product, 4))

        response = authenticated_client.get(reverse("reporting:dashboard_top_products"))

        assert response.data["results"] == [
            {
                "product_id": product.pk,
                "product_name": "Coffee",
                "total_quantity_sold": 4,
                "total_revenue": "8.00",
            }
        ]

    def test_invalid_limit(self, authenticated_client):
        response = authenticated_client.get(
            reverse("reporting:dashboard_top_products"), {"limit": 0}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse("reporting:dashboard_stats"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
