"""
Dashboard API views.
"""

from django.conf import settings

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .serializers import (
    DashboardStatsSerializer,
    LimitQuerySerializer,
    RecentTransactionSerializer,
    TopProductSerializer,
)
from .services import DashboardService


def _limit(request, default):
    query = LimitQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data.get("limit", default)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def dashboard_stats(request):
    """
    API endpoint for the dashboard headline statistics.

    Returns total products, low stock products, today's revenue and today's
    transaction count.
    """
    stats = DashboardService(request.user.pk).stats()
    return Response(DashboardStatsSerializer(stats).data, status=status.HTTP_200_OK)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def recent_transactions(request):
    """Most recent transactions with item counts (``?limit=``)."""
    limit = _limit(request, settings.POS_SETTINGS["RECENT_TRANSACTIONS_LIMIT"])
    rows = DashboardService(request.user.pk).recent_transactions(limit)
    return Response(
        {"results": RecentTransactionSerializer(rows, many=True).data},
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def top_products(request):
    """Best selling products by quantity (``?limit=``)."""
    limit = _limit(request, settings.POS_SETTINGS["TOP_PRODUCTS_LIMIT"])
    rows = DashboardService(request.user.pk).top_products(limit)
    return Response(
        {"results": TopProductSerializer(rows, many=True).data},
        status=status.HTTP_200_OK,
    )
