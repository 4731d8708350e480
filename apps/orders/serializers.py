from rest_framework import serializers

from apps.catalog.serializers import ItemMinimalSerializer
from apps.contacts.serializers import PartyMinimalSerializer
from .models import Order, OrderItem, SellerOrder, SellerOrderItem, PaymentType


# =============================================================================
# Input Serializers
# =============================================================================

class OrderLineInputSerializer(serializers.Serializer):
    item_id = serializers.UUIDField()
    # Any finite number; rounded to the unit's precision by the service
    qty = serializers.DecimalField(max_digits=None, decimal_places=None)


class PartyInputSerializer(serializers.Serializer):
    """Counterparty by ``id``, or by details (a known WhatsApp number reconnects)."""

    id = serializers.UUIDField(required=False)
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)
    whatsapp = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class OrderFieldsSerializer(serializers.Serializer):
    """
    Fields shared by order create/update payloads.

    Status strings are matched case-insensitively by the service; ``paid`` and
    ``delivered`` are the legacy boolean forms.
    """

    items = OrderLineInputSerializer(many=True, required=False)
    discount = serializers.DecimalField(
        max_digits=None, decimal_places=None, required=False, allow_null=True
    )
    delivery_fee = serializers.DecimalField(
        max_digits=None, decimal_places=None, required=False, allow_null=True
    )
    payment_type = serializers.ChoiceField(
        choices=PaymentType.choices, required=False, allow_null=True, allow_blank=True
    )
    delivery_note = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    payment_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    delivery_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    paid = serializers.BooleanField(required=False, allow_null=True)
    delivered = serializers.BooleanField(required=False, allow_null=True)


class OrderInputSerializer(OrderFieldsSerializer):
    customer = PartyInputSerializer(required=False, allow_null=True)


class SellerOrderInputSerializer(OrderFieldsSerializer):
    seller = PartyInputSerializer(required=False, allow_null=True)


class OrderMarkSerializer(serializers.Serializer):
    payment_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    delivery_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    paid = serializers.BooleanField(required=False, allow_null=True)
    delivered = serializers.BooleanField(required=False, allow_null=True)


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        search (str): Party name, WhatsApp, address or delivery note
        include_items (bool): Seller orders only; ``0`` returns ``items_count``
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    include_items = serializers.BooleanField(required=False, default=True)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderLineSerializer(serializers.ModelSerializer):
    item_id = serializers.UUIDField(read_only=True)
    item = ItemMinimalSerializer(read_only=True)
    amount = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'item_id', 'item', 'qty', 'price', 'amount']
        read_only_fields = fields


class SellerOrderLineSerializer(OrderLineSerializer):

    class Meta(OrderLineSerializer.Meta):
        model = SellerOrderItem


ORDER_HEADER_FIELDS = [
    'id',
    'payment_status',
    'delivery_status',
    'paid_at',
    'delivered_at',
    'payment_type',
    'delivery_note',
    'subtotal',
    'discount',
    'delivery_fee',
    'total',
    'created_at',
    'updated_at',
]


class OrderSerializer(serializers.ModelSerializer):
    """Customer order with its customer and lines."""

    customer = PartyMinimalSerializer(read_only=True)
    items = OrderLineSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = ORDER_HEADER_FIELDS + ['customer', 'items']
        read_only_fields = fields


class SellerOrderSerializer(serializers.ModelSerializer):
    """Seller order with its seller and lines."""

    seller = PartyMinimalSerializer(read_only=True)
    items = SellerOrderLineSerializer(many=True, read_only=True)

    class Meta:
        model = SellerOrder
        fields = ORDER_HEADER_FIELDS + ['seller', 'items']
        read_only_fields = fields


class SellerOrderCompactSerializer(serializers.ModelSerializer):
    """Seller order list row without lines (``include_items=0``)."""

    seller = PartyMinimalSerializer(read_only=True)
    items_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = SellerOrder
        fields = ORDER_HEADER_FIELDS + ['seller', 'items_count']
        read_only_fields = fields
