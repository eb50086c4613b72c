"""
URL configuration for core app.
"""

from django.urls import path

from rest_framework_simplejwt.views import TokenRefreshView

from . import health, views

app_name = "core"

urlpatterns = [
    path("health/", health.health_check, name="health_check"),
    path("health/detailed/", health.health_check_detailed, name="health_check_detailed"),
    # Authentication API
    path("api/auth/register/", views.UserRegistrationView.as_view(), name="register"),
    path("api/auth/login/", views.CustomTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/auth/me/", views.UserProfileView.as_view(), name="user_profile"),
]
