"""
URL configuration for inventory app.
"""

from django.urls import path

from . import views

app_name = "inventory"

urlpatterns = [
    path("api/products/", views.ProductListCreateView.as_view(), name="product_list"),
    path("api/products/low-stock/", views.low_stock_products, name="product_low_stock"),
    path("api/products/<int:id>/", views.ProductDetailView.as_view(), name="product_detail"),
]
