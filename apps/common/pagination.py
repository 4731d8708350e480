from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PosPagination(PageNumberPagination):
    """
    ``page``/``limit`` pagination shared by every list endpoint.

    Response shape::

        {"data": [...], "pagination": {"page", "limit", "total",
                                       "total_pages", "has_next", "has_prev"}}
    """
    page_size = settings.POS['PAGE_SIZE']
    page_size_query_param = 'limit'
    max_page_size = settings.POS['MAX_PAGE_SIZE']

    def get_page_size(self, request):
        """``limit`` clamped to ``1..max_page_size``; missing or garbage means the default."""
        try:
            size = int(request.query_params[self.page_size_query_param])
        except (KeyError, ValueError):
            return self.page_size
        return min(max(size, 1), self.max_page_size)

    def get_page_number(self, request, paginator):
        """``page`` clamped into the available pages instead of a 404."""
        raw = request.query_params.get(self.page_query_param, 1)
        if raw in self.last_page_strings:
            return paginator.num_pages
        try:
            number = int(raw)
        except (TypeError, ValueError):
            number = 1
        return min(max(number, 1), paginator.num_pages)

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response({
            'data': data,
            'pagination': {
                'page': self.page.number,
                'limit': paginator.per_page,
                'total': paginator.count,
                'total_pages': paginator.num_pages if paginator.count else 0,
                'has_next': self.page.has_next(),
                'has_prev': self.page.has_previous(),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'data': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                        'has_next': {'type': 'boolean'},
                        'has_prev': {'type': 'boolean'},
                    },
                },
            },
        }


class SmallPagination(PosPagination):
    """Directory-style lists (customers, sellers, items) default to 10 rows."""
    page_size = 10


class AccountingPagination(PosPagination):
    """Accounting ledger pages default to 50 rows."""
    page_size = 50
