from rest_framework import viewsets, status, mixins
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.exceptions import error_response
from apps.common.pagination import SmallPagination
from .models import Category, Item
from .serializers import (
    CategorySerializer,
    CategoryInputSerializer,
    ItemSerializer,
    ItemInputSerializer,
    ItemFilterSerializer,
)
from .services import (
    create_item,
    update_item,
    delete_item,
    search_items,
    upsert_category,
    delete_category,
    CatalogServiceError,
)


class ItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for catalog items.

    list: Items ordered by name (filter: cat, q)
    create: Create an item (category by id or by name)
    retrieve: Get an item
    partial_update: Update an item
    destroy: Delete an item no order references
    """

    queryset = Item.objects.select_related('category')
    serializer_class = ItemSerializer
    pagination_class = SmallPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        """Filter items using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ItemFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_items(q=params.get('q'), category=params.get('cat'))

    @extend_schema(request=ItemInputSerializer, responses={201: ItemSerializer})
    def create(self, request, *args, **kwargs):
        """Create a new item."""
        serializer = ItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_item(**serializer.validated_data)
        except CatalogServiceError as e:
            return error_response(e)

        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ItemInputSerializer, responses={200: ItemSerializer})
    def partial_update(self, request, *args, **kwargs):
        """Partially update an item."""
        serializer = ItemInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(item_id=kwargs['pk'], data=serializer.validated_data)
        except CatalogServiceError as e:
            return error_response(e)

        return Response(ItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        """Delete an item."""
        try:
            delete_item(item_id=kwargs['pk'])
        except CatalogServiceError as e:
            return error_response(e)

        return Response({'ok': True})


class CategoryViewSet(mixins.ListModelMixin,
                      mixins.CreateModelMixin,
                      mixins.DestroyModelMixin,
                      viewsets.GenericViewSet):
    """
    ViewSet for categories.

    list: All categories by name (unpaginated)
    create: Idempotent create by name
    destroy: Detach items and delete
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    pagination_class = None

    @extend_schema(request=CategoryInputSerializer, responses={201: CategorySerializer})
    def create(self, request, *args, **kwargs):
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = upsert_category(name=serializer.validated_data['name'])
        except CatalogServiceError as e:
            return error_response(e)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            cleared = delete_category(category_id=kwargs['pk'])
        except CatalogServiceError as e:
            return error_response(e)

        return Response({'ok': True, 'items_cleared': cleared})
