"""
URL configuration for sales app.
"""

from django.urls import path

from . import views

app_name = "sales"

urlpatterns = [
    path("api/sales/", views.create_sale, name="sale_create"),
    path("api/sales/history/", views.sales_history, name="sale_history"),
    path("api/sales/range/", views.sales_by_date_range, name="sale_range"),
    path("api/sales/daily-revenue/", views.daily_revenue, name="daily_revenue"),
    path("api/sales/daily-count/", views.daily_count, name="daily_count"),
    path("api/sales/<int:id>/", views.sale_detail, name="sale_detail"),
]
