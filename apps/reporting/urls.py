"""
URL configuration for reporting app.
"""

from django.urls import path

from . import views

app_name = "reporting"

urlpatterns = [
    path("api/dashboard/stats/", views.dashboard_stats, name="dashboard_stats"),
    path(
        "api/dashboard/recent-transactions/",
        views.recent_transactions,
        name="dashboard_recent_transactions",
    ),
    path("api/dashboard/top-products/", views.top_products, name="dashboard_top_products"),
]
