"""
Tests for registration, JWT sign-in and the health endpoints.
"""

from django.urls import reverse

import pytest
from rest_framework import status

from apps.core.models import User

from .conftest import PASSWORD


@pytest.mark.django_db
class TestRegistration:
    url = "/api/auth/register/"

    def test_register_returns_user_and_tokens(self, api_client):
        response = api_client.post(
            self.url,
            {"email": "New@Example.com", "password": PASSWORD, "full_name": "New Owner"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["user"]["email"] == "new@example.com"
        assert response.data["user"]["full_name"] == "New Owner"
        assert response.data["access"]
        assert response.data["refresh"]
        user = User.objects.get(email="new@example.com")
        assert user.check_password(PASSWORD)
        assert user.password != PASSWORD

    def test_duplicate_email_rejected_case_insensitively(self, api_client, user):
        response = api_client.post(
            self.url,
            {"email": "OWNER@example.com", "password": PASSWORD, "full_name": "Again"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.data

    def test_short_password_rejected(self, api_client):
        response = api_client.post(
            self.url,
            {"email": "short@example.com", "password": "x1!", "full_name": "Short"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password" in response.data
        assert not User.objects.filter(email="short@example.com").exists()

    def test_missing_full_name_rejected(self, api_client):
        response = api_client.post(
            self.url,
            {"email": "anon@example.com", "password": PASSWORD},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "full_name" in response.data


@pytest.mark.django_db
class TestLogin:
    url = "/api/auth/login/"

    def test_login_with_email(self, api_client, user):
        response = api_client.post(
            self.url, {"email": user.email, "password": PASSWORD}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["access"]
        assert response.data["refresh"]
        assert response.data["user"]["id"] == user.pk

    def test_wrong_password(self, api_client, user):
        response = api_client.post(
            self.url, {"email": user.email, "password": "wrong-password"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_access_token_authenticates_requests(self, api_client, user):
        tokens = api_client.post(
            self.url, {"email": user.email, "password": PASSWORD}, format="json"
        ).data

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        response = api_client.get(reverse("core:user_profile"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["email"] == user.email

    def test_refresh_returns_new_access_token(self, api_client, user):
        tokens = api_client.post(
            self.url, {"email": user.email, "password": PASSWORD}, format="json"
        ).data

        response = api_client.post(
            reverse("core:token_refresh"), {"refresh": tokens["refresh"]}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["access"]

    def test_profile_requires_authentication(self, api_client):
        response = api_client.get(reverse("core:user_profile"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestHealth:
    def test_health_check(self, client):
        response = client.get(reverse("core:health_check"))

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_detailed_health_check(self, client):
        response = client.get(reverse("core:health_check_detailed"))

        assert response.status_code == 200
        assert response.json()["checks"]["database"]["status"] == "healthy"
