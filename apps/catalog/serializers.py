from rest_framework import serializers
from .models import Category, Item, Unit, StockMode


# =============================================================================
# Input Serializers
# =============================================================================

class ItemFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for item listing.

    Query Parameters:
        q (str): Search item name or category name
        cat (str): Category id, or ``ALL``
    """

    q = serializers.CharField(required=False, allow_blank=True, max_length=200)
    cat = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_cat(self, value):
        if value and value != 'ALL':
            try:
                serializers.UUIDField().to_internal_value(value)
            except serializers.ValidationError:
                raise serializers.ValidationError('Invalid category id')
        return value


class ItemInputSerializer(serializers.Serializer):
    """Validate item create/update payloads; money and stock are coerced by the service."""

    name = serializers.CharField(max_length=200, allow_blank=True)
    price = serializers.DecimalField(max_digits=15, decimal_places=3, required=False)
    cost_price = serializers.DecimalField(max_digits=15, decimal_places=3, required=False)
    unit = serializers.ChoiceField(choices=Unit.choices, required=False)
    stock_mode = serializers.ChoiceField(choices=StockMode.choices, required=False)
    stock = serializers.DecimalField(max_digits=15, decimal_places=3, required=False)
    category_id = serializers.UUIDField(required=False, allow_null=True)
    category_name = serializers.CharField(max_length=100, required=False, allow_blank=True)


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, allow_blank=True)


# =============================================================================
# Output Serializers
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = ['id', 'name', 'created_at']
        read_only_fields = fields


class CategoryMinimalSerializer(serializers.ModelSerializer):
    """Minimal category info for nested serialization."""

    class Meta:
        model = Category
        fields = ['id', 'name']
        read_only_fields = fields


class ItemSerializer(serializers.ModelSerializer):
    """Main serializer for catalog items."""

    category = CategoryMinimalSerializer(read_only=True)

    class Meta:
        model = Item
        fields = [
            'id',
            'name',
            'price',
            'cost_price',
            'unit',
            'stock_mode',
            'stock',
            'category_id',
            'category',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ItemMinimalSerializer(serializers.ModelSerializer):
    """Item name/unit for nesting under order lines."""

    class Meta:
        model = Item
        fields = ['id', 'name', 'unit']
        read_only_fields = fields
