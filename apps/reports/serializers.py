"""
Serializers for the reports app.

Input Serializers:
    DateRangeQuerySerializer - ``from``/``to`` dates shared by every report
    DashboardQuerySerializer - Dashboard filters
    LedgerQuerySerializer - Accounting ledger filters
    LedgerExportQuerySerializer - Accounting CSV export options

Response Serializers:
    DashboardResponseSerializer - Dashboard payload (API docs)
    LedgerRowSerializer - One ledger row
    LedgerSummarySerializer - Ledger totals
"""

from rest_framework import serializers

from apps.contacts.serializers import PartyMinimalSerializer
from apps.orders.serializers import OrderLineSerializer
from .reports import LEDGER_TYPES


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate the ``from``/``to`` query parameters.

    Query Parameters:
        from (date): First day included (YYYY-MM-DD)
        to (date): Last day included (YYYY-MM-DD)

    Validated data uses the keys ``date_from`` and ``date_to``.
    """

    date_from = serializers.DateField(required=False, source='date_from')
    date_to = serializers.DateField(required=False, source='date_to')

    def get_fields(self):
        # "from" is a Python keyword, so the fields are renamed here
        fields = super().get_fields()
        fields['from'] = fields.pop('date_from')
        fields['to'] = fields.pop('date_to')
        return fields

    def validate(self, attrs):
        start = attrs.get('date_from')
        end = attrs.get('date_to')
        if start and end and start > end:
            raise serializers.ValidationError({
                'from': 'Start date must be before end date'
            })
        return attrs


class DashboardQuerySerializer(DateRangeQuerySerializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=200)


class LedgerQuerySerializer(DateRangeQuerySerializer):
    """
    Query Parameters:
        search (str): Party name, WhatsApp, address or delivery note
        type (str): 'all', 'seller' or 'customer'
        page (int), limit (int): Handled by the paginator
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    type = serializers.ChoiceField(choices=LEDGER_TYPES, required=False, default='all')


class LedgerExportQuerySerializer(DateRangeQuerySerializer):
    type = serializers.ChoiceField(choices=LEDGER_TYPES, required=False, default='all')
    excel = serializers.BooleanField(required=False, default=False)


# =============================================================================
# Response Serializers
# =============================================================================

class DashboardMetricsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    omzet = serializers.IntegerField()
    net_profit = serializers.IntegerField()
    unpaid_orders = serializers.IntegerField()
    seller_delivery_fee_total = serializers.IntegerField()


class CustomerNameSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True)


class RecentUnpaidSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    total = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    customer = CustomerNameSerializer(allow_null=True)
    delivery_status = serializers.CharField()
    delivered_at = serializers.DateTimeField(allow_null=True)


class RecentUndeliveredSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    total = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    customer = CustomerNameSerializer(allow_null=True)
    payment_status = serializers.CharField()
    paid_at = serializers.DateTimeField(allow_null=True)


class TopItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    unit = serializers.CharField()
    qty = serializers.DecimalField(max_digits=14, decimal_places=3)
    revenue = serializers.IntegerField()


class TopCustomerSerializer(serializers.Serializer):
    name = serializers.CharField()
    orders = serializers.IntegerField()
    spend = serializers.IntegerField()


class DashboardResponseSerializer(serializers.Serializer):
    """Dashboard payload; customers without a name are reported as "Walk-in"."""

    metrics = DashboardMetricsSerializer()
    recent_unpaid = RecentUnpaidSerializer(many=True)
    recent_undelivered = RecentUndeliveredSerializer(many=True)
    top_items = TopItemSerializer(many=True)
    top_customers = TopCustomerSerializer(many=True)


class LedgerRowSerializer(serializers.Serializer):
    """
    A seller order or paid customer order in the ledger.

    Rows come from ``ReportQueries.ledger_rows`` as
    ``{'type', 'order', 'party'}`` dicts.
    """

    id = serializers.UUIDField(source='order.id', read_only=True)
    type = serializers.CharField(read_only=True)
    payment_status = serializers.CharField(source='order.payment_status', read_only=True)
    delivery_status = serializers.CharField(source='order.delivery_status', read_only=True)
    paid_at = serializers.DateTimeField(source='order.paid_at', read_only=True)
    delivered_at = serializers.DateTimeField(source='order.delivered_at', read_only=True)
    delivery_note = serializers.CharField(source='order.delivery_note', read_only=True)
    payment_type = serializers.CharField(source='order.payment_type', read_only=True)
    subtotal = serializers.IntegerField(source='order.subtotal', read_only=True)
    discount = serializers.IntegerField(source='order.discount', read_only=True)
    delivery_fee = serializers.IntegerField(source='order.delivery_fee', read_only=True)
    total = serializers.IntegerField(source='order.total', read_only=True)
    created_at = serializers.DateTimeField(source='order.created_at', read_only=True)
    party = PartyMinimalSerializer(read_only=True, allow_null=True)
    items = OrderLineSerializer(source='order.items', many=True, read_only=True)


class LedgerSummarySerializer(serializers.Serializer):
    seller_orders_count = serializers.IntegerField()
    customer_orders_count = serializers.IntegerField()
    seller_orders_total = serializers.IntegerField()
    customer_orders_total = serializers.IntegerField()
    total_revenue = serializers.IntegerField()
    total_costs = serializers.IntegerField()
    gross_profit = serializers.IntegerField()


class LedgerResponseSerializer(serializers.Serializer):
    data = LedgerRowSerializer(many=True)
    summary = LedgerSummarySerializer()
    pagination = serializers.DictField()
