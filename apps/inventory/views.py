"""
Views for product management.

Every queryset is scoped to the requesting user, so another user's product
ids answer 404 exactly like ids that do not exist.
"""

import logging

from django.db.models import F, Q

from rest_framework import filters, generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .models import Product
from .serializers import LowStockQuerySerializer, ProductCreateUpdateSerializer, ProductSerializer

logger = logging.getLogger(__name__)


class OwnedProductsMixin:
    """Mixin limiting querysets to the current user's active products."""

    def get_queryset(self):
        return Product.objects.filter(owner=self.request.user, is_active=True)


class ProductListCreateView(OwnedProductsMixin, generics.ListCreateAPIView):
    """
    API endpoint for listing and creating products.

    Supports:
    - Search by name (``search``)
    - Ordering by name, price, stock_quantity, created_at, updated_at
    """

    permission_classes = [permissions.IsAuthenticated]
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["name", "price", "stock_quantity", "created_at", "updated_at"]
    ordering = ["-created_at", "-id"]

    def get_serializer_class(self):
        if self.request.method == "POST":
            return ProductCreateUpdateSerializer
        return ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        search = self.request.query_params.get("search", None)
        if search:
            queryset = queryset.filter(Q(name__icontains=search))
        return queryset

    def perform_create(self, serializer):
        """Set owner from current user."""
        product = serializer.save(owner=self.request.user)
        logger.info("Product %s created by user %s", product.pk, self.request.user.pk)


class ProductDetailView(OwnedProductsMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    API endpoint for retrieving, updating and deleting a single product.
    """

    permission_classes = [permissions.IsAuthenticated]
    lookup_field = "id"

    def get_serializer_class(self):
        if self.request.method in ("PUT", "PATCH"):
            return ProductCreateUpdateSerializer
        return ProductSerializer

    def perform_destroy(self, instance):
        """Soft delete by setting is_active to False."""
        instance.is_active = False
        instance.save(update_fields=["is_active", "updated_at"])
        logger.info("Product %s deactivated by user %s", instance.pk, self.request.user.pk)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def low_stock_products(request):
    """
    API endpoint for products running low on stock.

    With ``?threshold=N`` every active product with stock below N is returned;
    otherwise each product's own ``low_stock_threshold`` applies, matching
    ``Product.is_low_stock``.
    """
    query = LowStockQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

    threshold = query.validated_data.get("threshold")
    if threshold is None:
        threshold = F("low_stock_threshold")

    queryset = Product.objects.filter(
        owner=request.user,
        is_active=True,
        stock_quantity__lt=threshold,
    ).order_by("stock_quantity", "name")
    return Response(ProductSerializer(queryset, many=True).data, status=status.HTTP_200_OK)
