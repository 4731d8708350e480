from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.csvio import csv_attachment
from apps.common.exceptions import error_response
from apps.common.pagination import SmallPagination
from .models import Customer, Seller
from .serializers import (
    ContactFilterSerializer,
    ContactInputSerializer,
    CustomerSerializer,
    SellerSerializer,
    CustomerExportSerializer,
    CustomerImportSerializer,
    CustomerImportQuerySerializer,
    ImportResultSerializer,
)
from .services import (
    create_customer,
    update_customer,
    delete_customer,
    search_customers,
    find_customer_by_whatsapp,
    export_customers,
    import_customers,
    create_seller,
    update_seller,
    delete_seller,
    search_sellers,
    ContactsServiceError,
)


class CustomerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for customers.

    list: Customers by name (filter: q, wa)
    create: Create or refresh by WhatsApp
    retrieve: Get a customer
    partial_update: Patch name/address/WhatsApp
    destroy: Delete a customer without orders
    search: Exact WhatsApp lookup, one record or null
    export: CSV download
    import_csv: CSV upload
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    pagination_class = SmallPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ContactFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('wa'):
            customer = find_customer_by_whatsapp(whatsapp=params['wa'])
            return Customer.objects.filter(id=customer.id) if customer else Customer.objects.none()

        return search_customers(q=params.get('q'))

    @extend_schema(request=ContactInputSerializer, responses={201: CustomerSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ContactInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = create_customer(**serializer.validated_data)
        except ContactsServiceError as e:
            return error_response(e)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ContactInputSerializer, responses={200: CustomerSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = ContactInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            customer = update_customer(customer_id=kwargs['pk'], data=serializer.validated_data)
        except ContactsServiceError as e:
            return error_response(e)

        return Response(CustomerSerializer(customer).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_customer(customer_id=kwargs['pk'])
        except ContactsServiceError as e:
            return error_response(e)

        return Response({'ok': True})

    @extend_schema(
        parameters=[OpenApiParameter('wa', OpenApiTypes.STR, description='WhatsApp number')],
        responses={200: CustomerSerializer},
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        """Return the customer with this WhatsApp number, or null."""
        customer = find_customer_by_whatsapp(whatsapp=request.query_params.get('wa'))
        return Response(CustomerSerializer(customer).data if customer else None)

    @extend_schema(
        parameters=[CustomerExportSerializer],
        responses={(200, 'text/csv'): OpenApiTypes.STR},
    )
    @action(detail=False, methods=['get'])
    def export(self, request):
        """Download customers as CSV (``simple=1``, ``excel=1``)."""
        params = CustomerExportSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        filename, content = export_customers(**params.validated_data)
        return csv_attachment(content, filename)

    @extend_schema(
        parameters=[CustomerImportQuerySerializer],
        request={'multipart/form-data': CustomerImportSerializer},
        responses={200: ImportResultSerializer},
    )
    @action(
        detail=False,
        methods=['post'],
        url_path='import',
        url_name='import',
        parser_classes=[MultiPartParser, FormParser],
    )
    def import_csv(self, request):
        """Upload customers from CSV (``replace=1`` prunes numbers not in the file)."""
        query = CustomerImportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            result = import_customers(
                upload=request.FILES.get('file'),
                replace=query.validated_data['replace'],
            )
        except ContactsServiceError as e:
            return error_response(e)

        return Response(result)


class SellerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for sellers.

    list: Sellers newest first (filter: q)
    create: Create a seller (name required, WhatsApp unique)
    retrieve: Get a seller
    partial_update: Patch a seller
    destroy: Delete a seller without seller orders
    """

    queryset = Seller.objects.all()
    serializer_class = SellerSerializer
    pagination_class = SmallPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ContactFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return search_sellers(q=filter_serializer.validated_data.get('q'))

    @extend_schema(request=ContactInputSerializer, responses={201: SellerSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ContactInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            seller = create_seller(
                name=serializer.validated_data.get('name'),
                whatsapp=serializer.validated_data.get('whatsapp'),
                address=serializer.validated_data.get('address'),
            )
        except ContactsServiceError as e:
            return error_response(e)

        return Response(SellerSerializer(seller).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ContactInputSerializer, responses={200: SellerSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = ContactInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            seller = update_seller(seller_id=kwargs['pk'], data=serializer.validated_data)
        except ContactsServiceError as e:
            return error_response(e)

        return Response(SellerSerializer(seller).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_seller(seller_id=kwargs['pk'])
        except ContactsServiceError as e:
            return error_response(e)

        return Response({'ok': True})
