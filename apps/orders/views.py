from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.exceptions import error_response
from apps.common.pagination import PosPagination
from apps.contacts.services import ContactsServiceError
from .models import Order, SellerOrder
from .serializers import (
    OrderInputSerializer,
    SellerOrderInputSerializer,
    OrderMarkSerializer,
    OrderFilterSerializer,
    OrderSerializer,
    SellerOrderSerializer,
    SellerOrderCompactSerializer,
)
from .services import (
    get_order,
    create_order,
    update_order,
    mark_order,
    delete_order,
    search_orders,
    get_seller_order,
    create_seller_order,
    update_seller_order,
    mark_seller_order,
    delete_seller_order,
    search_seller_orders,
    OrderServiceError,
)

ORDER_ERRORS = (OrderServiceError, ContactsServiceError)


class OrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for customer orders.

    list: Orders newest first (filter: search)
    create: Create an order with price snapshots
    retrieve: Get an order with lines
    partial_update: Edit lines/party/amounts/status; stock is reconciled
    destroy: Delete an order, restoring stock if it was delivered
    mark: Change payment/delivery status only
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    pagination_class = PosPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return search_orders(search=filter_serializer.validated_data.get('search'))

    def retrieve(self, request, *args, **kwargs):
        try:
            order = get_order(order_id=kwargs['pk'])
        except OrderServiceError as e:
            return error_response(e)

        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderInputSerializer, responses={201: OrderSerializer})
    def create(self, request, *args, **kwargs):
        """Create a customer order."""
        serializer = OrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_order(**serializer.validated_data)
        except ORDER_ERRORS as e:
            return error_response(e)

        return Response(
            OrderSerializer(get_order(order_id=order.id)).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=OrderInputSerializer, responses={200: OrderSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Partially update a customer order."""
        serializer = OrderInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_order(order_id=kwargs['pk'], patch=dict(serializer.validated_data))
        except ORDER_ERRORS as e:
            return error_response(e)

        return Response(OrderSerializer(get_order(order_id=order.id)).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_order(order_id=kwargs['pk'])
        except OrderServiceError as e:
            return error_response(e)

        return Response({'ok': True})

    @extend_schema(request=OrderMarkSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=['patch', 'post'])
    def mark(self, request, pk=None):
        """Set payment and/or delivery status."""
        serializer = OrderMarkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = mark_order(order_id=pk, **serializer.validated_data)
        except OrderServiceError as e:
            return error_response(e)

        return Response(OrderSerializer(get_order(order_id=order.id)).data)


class SellerOrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for seller (purchase) orders.

    list: Seller orders newest first (filter: search, include_items)
    create: Create a seller order
    retrieve: Get a seller order with lines
    partial_update: Edit a seller order; stock is reconciled
    destroy: Delete a seller order, removing received stock if it was delivered
    mark: Change payment/delivery status only
    """

    queryset = SellerOrder.objects.all()
    serializer_class = SellerOrderSerializer
    pagination_class = PosPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        params = self._list_params()
        return search_seller_orders(
            search=params.get('search'),
            include_items=params['include_items'],
        )

    def get_serializer_class(self):
        if getattr(self, 'swagger_fake_view', False):
            return SellerOrderSerializer
        if self.action == 'list' and not self._list_params()['include_items']:
            return SellerOrderCompactSerializer
        return SellerOrderSerializer

    def _list_params(self):
        filter_serializer = OrderFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return filter_serializer.validated_data

    def retrieve(self, request, *args, **kwargs):
        try:
            order = get_seller_order(order_id=kwargs['pk'])
        except OrderServiceError as e:
            return error_response(e)

        return Response(SellerOrderSerializer(order).data)

    @extend_schema(request=SellerOrderInputSerializer, responses={201: SellerOrderSerializer})
    def create(self, request, *args, **kwargs):
        """Create a seller order."""
        serializer = SellerOrderInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_seller_order(**serializer.validated_data)
        except ORDER_ERRORS as e:
            return error_response(e)

        return Response(
            SellerOrderSerializer(get_seller_order(order_id=order.id)).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=SellerOrderInputSerializer, responses={200: SellerOrderSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Partially update a seller order."""
        serializer = SellerOrderInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            order = update_seller_order(order_id=kwargs['pk'], patch=dict(serializer.validated_data))
        except ORDER_ERRORS as e:
            return error_response(e)

        return Response(SellerOrderSerializer(get_seller_order(order_id=order.id)).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_seller_order(order_id=kwargs['pk'])
        except OrderServiceError as e:
            return error_response(e)

        return Response({'ok': True})

    @extend_schema(request=OrderMarkSerializer, responses={200: SellerOrderSerializer})
    @action(detail=True, methods=['patch', 'post'])
    def mark(self, request, pk=None):
        """Set payment and/or delivery status."""
        serializer = OrderMarkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = mark_seller_order(order_id=pk, **serializer.validated_data)
        except OrderServiceError as e:
            return error_response(e)

        return Response(SellerOrderSerializer(get_seller_order(order_id=order.id)).data)
