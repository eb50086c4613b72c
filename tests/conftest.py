"""
Pytest configuration and fixtures for the point-of-sale back end.
"""

from decimal import Decimal

import pytest

from apps.inventory.models import Product

PASSWORD = "Tr1cky-Pass!"


@pytest.fixture
def api_client():
    """
    Fixture for Django REST framework API client.
    """
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        email="owner@example.com",
        password=PASSWORD,
        full_name="Shop Owner",
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        email="other@example.com",
        password=PASSWORD,
        full_name="Other Owner",
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """
    Fixture for authenticated API client.
    """
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def make_product(user):
    """
    Factory fixture creating products owned by ``user`` unless told otherwise.
    """

    def _make_product(name="Widget", price="10.00", stock=10, owner=None, **extra):
        return Product.objects.create(
            owner=owner or user,
            name=name,
            price=Decimal(price),
            stock_quantity=stock,
            **extra,
        )

    return _make_product
