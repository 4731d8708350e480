from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.common.csvio import csv_attachment
from apps.common.exceptions import error_response
from apps.common.pagination import AccountingPagination
from .exceptions import ReportsServiceError
from .exports import export_ledger
from .reports import ReportQueries
from .serializers import (
    # Input serializers
    DashboardQuerySerializer,
    LedgerQuerySerializer,
    LedgerExportQuerySerializer,
    # Response serializers
    DashboardResponseSerializer,
    LedgerRowSerializer,
    LedgerResponseSerializer,
)

DATE_PARAMETERS = [
    OpenApiParameter('from', OpenApiTypes.DATE, description='First day included (YYYY-MM-DD)'),
    OpenApiParameter('to', OpenApiTypes.DATE, description='Last day included (YYYY-MM-DD)'),
]
TYPE_PARAMETER = OpenApiParameter(
    'type', OpenApiTypes.STR, enum=['all', 'seller', 'customer'], default='all',
    description='Ledger side to include',
)


@extend_schema(
    parameters=DATE_PARAMETERS + [
        OpenApiParameter('search', OpenApiTypes.STR, description='Customer name, WhatsApp, address or delivery note'),
    ],
    responses={200: DashboardResponseSerializer},
    description='Sales metrics, open orders and top items/customers for a date range.',
    tags=['reports'],
)
@api_view(['GET'])
def dashboard(request):
    """Dashboard data - thin HTTP handler."""
    query_serializer = DashboardQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = ReportQueries.dashboard(
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
        search=params.get('search'),
    )
    return Response(data)


@extend_schema(
    parameters=DATE_PARAMETERS + [
        OpenApiParameter('search', OpenApiTypes.STR, description='Party name, WhatsApp, address or delivery note'),
        TYPE_PARAMETER,
        OpenApiParameter('page', OpenApiTypes.INT, default=1),
        OpenApiParameter('limit', OpenApiTypes.INT, default=50, description='Rows per page (max 100)'),
    ],
    responses={200: LedgerResponseSerializer},
    description='Seller orders and paid customer orders merged newest first, with totals.',
    tags=['reports'],
)
@api_view(['GET'])
def accounting(request):
    """Accounting ledger - thin HTTP handler."""
    query_serializer = LedgerQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    filters = {
        'date_from': params.get('date_from'),
        'date_to': params.get('date_to'),
        'search': params.get('search'),
        'ledger_type': params['type'],
    }

    try:
        refs = ReportQueries.ledger_refs(**filters)
        summary = ReportQueries.ledger_summary(**filters)
    except ReportsServiceError as e:
        return error_response(e)

    paginator = AccountingPagination()
    page = paginator.paginate_queryset(refs, request)
    rows = LedgerRowSerializer(ReportQueries.ledger_rows(page), many=True).data

    response = paginator.get_paginated_response(rows)
    response.data['summary'] = summary
    response['Cache-Control'] = 'no-store'
    return response


@extend_schema(
    parameters=DATE_PARAMETERS + [
        TYPE_PARAMETER,
        OpenApiParameter('excel', OpenApiTypes.BOOL, default=False, description='Write WhatsApp numbers as ="..." text cells'),
    ],
    responses={(200, 'text/csv'): OpenApiTypes.STR},
    description='Download the accounting ledger as CSV.',
    tags=['reports'],
)
@api_view(['GET'])
def accounting_export(request):
    """Accounting CSV - thin HTTP handler."""
    query_serializer = LedgerExportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        filename, text = export_ledger(
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
            ledger_type=params['type'],
            excel=params['excel'],
        )
    except ReportsServiceError as e:
        return error_response(e)

    return csv_attachment(text, filename)
