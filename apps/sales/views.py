"""
Views for sales.

The create endpoint hands the cart to ``SaleProcessor`` and maps its errors
onto HTTP statuses; the remaining endpoints are read-only queries against the
owner's ledger.
"""

import logging

from django.conf import settings
from django.utils import timezone

from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .exceptions import SaleError
from .ledger import SaleLedger
from .serializers import (
    CommittedSaleSerializer,
    DateRangeQuerySerializer,
    DayQuerySerializer,
    HistoryQuerySerializer,
    SaleCreateSerializer,
    TransactionDetailSerializer,
)
from .services import SaleProcessor

logger = logging.getLogger(__name__)


@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def create_sale(request):
    """
    Commit a sale for the current user.

    Request body:
    {
        "items": [
            {"product_id": 1, "quantity": 2}
        ]
    }

    Returns 201 with the committed transaction, 400 for a malformed cart,
    404 for an unknown product, 409 when stock is insufficient and 503 when
    the database could not store the sale.
    """
    serializer = SaleCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    processor = SaleProcessor.default()
    try:
        sale = processor.process(serializer.to_sale_request(request.user.pk))
    except SaleError as e:
        return Response(e.as_dict(), status=e.status_code)

    return Response(CommittedSaleSerializer(sale).data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def sales_history(request):
    """
    List the current user's transactions, newest first.

    Query parameters:
    - limit: Page size (default: POS_SETTINGS["HISTORY_PAGE_SIZE"])
    - offset: Number of transactions to skip (default: 0)
    """
    query = HistoryQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

    limit = query.validated_data.get("limit", settings.POS_SETTINGS["HISTORY_PAGE_SIZE"])
    offset = query.validated_data["offset"]
    transactions = SaleLedger().history(request.user.pk, limit=limit, offset=offset)

    return Response(
        {
            "limit": limit,
            "offset": offset,
            "results": TransactionDetailSerializer(transactions, many=True).data,
        },
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def sales_by_date_range(request):
    """
    List transactions between ``start_date`` and ``end_date`` (YYYY-MM-DD),
    both days included, oldest first.
    """
    query = DateRangeQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

    transactions = SaleLedger().in_range(
        request.user.pk,
        query.validated_data["start_date"],
        query.validated_data["end_date"],
    )
    return Response(
        {"results": TransactionDetailSerializer(transactions, many=True).data},
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def sale_detail(request, id):
    """Retrieve a single transaction owned by the current user."""
    txn = SaleLedger().get(request.user.pk, id)
    if txn is None:
        return Response({"detail": "Transaction not found."}, status=status.HTTP_404_NOT_FOUND)
    return Response(TransactionDetailSerializer(txn).data, status=status.HTTP_200_OK)


def _requested_day(request):
    query = DayQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return query.validated_data.get("date") or timezone.localdate()


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def daily_revenue(request):
    """Total revenue for ``?date=YYYY-MM-DD`` (default: today)."""
    day = _requested_day(request)
    revenue = SaleLedger().daily_revenue(request.user.pk, day)
    return Response(
        {"date": day.isoformat(), "revenue": f"{revenue:.2f}"},
        status=status.HTTP_200_OK,
    )


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def daily_count(request):
    """Number of transactions for ``?date=YYYY-MM-DD`` (default: today)."""
    day = _requested_day(request)
    count = SaleLedger().daily_count(request.user.pk, day)
    return Response({"date": day.isoformat(), "count": count}, status=status.HTTP_200_OK)
