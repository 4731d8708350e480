"""
Reports Module
==============

Read-only queries behind the dashboard and the accounting ledger.

Classes:
    ReportQueries: Static methods for dashboard metrics and the ledger.

The ledger lists every seller order (costs) together with the *paid*
customer orders (revenue). Both tables are merged newest first with a
``UNION`` of ``(id, created_at, type)`` rows, so pagination happens in the
database; only the rows of the requested page are loaded in full.

Example:
    Dashboard for January::

        from apps.reports.reports import ReportQueries

        data = ReportQueries.dashboard(
            date_from=date(2025, 1, 1),
            date_to=date(2025, 1, 31),
        )
        print(data['metrics']['omzet'])

Note:
    Money values are whole currency units. Net profit uses each item's
    *current* cost price against the price snapshot stored on the line.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db.models import (
    CharField,
    Count,
    DecimalField,
    ExpressionWrapper,
    F,
    Prefetch,
    Sum,
    Value,
)

from apps.orders.models import (
    DeliveryStatus,
    Order,
    OrderItem,
    PaymentStatus,
    SellerOrder,
)
from apps.orders.services.workflow import CUSTOMER_ORDER, SELLER_ORDER, search_filter
from .exceptions import InvalidLedgerTypeError

logger = logging.getLogger(__name__)

WALK_IN = 'Walk-in'

LEDGER_SELLER = 'seller'
LEDGER_CUSTOMER = 'customer'
LEDGER_TYPES = ('all', LEDGER_SELLER, LEDGER_CUSTOMER)


def _whole(value):
    """Round a Decimal/float aggregate to a whole currency amount."""
    if value is None:
        return 0
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _within(queryset, date_from=None, date_to=None):
    """Limit to orders created between two local dates, both inclusive."""
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)
    return queryset


def _line_value(*, cost=False):
    """``qty * price`` for a line, or ``qty * (price - current cost)``."""
    price = F('price') - F('item__cost_price') if cost else F('price')
    return ExpressionWrapper(F('qty') * price, output_field=DecimalField())


class ReportQueries:
    """
    Aggregations for the dashboard and the accounting ledger.

    Methods:
        dashboard: Headline metrics, recent open orders and rankings.
        ledger_refs: Ordered ``(id, created_at, type)`` rows for the ledger.
        ledger_rows: Full ledger rows for a page of refs.
        ledger_summary: Counts and totals per side of the ledger.
    """

    # =========================================================================
    # Dashboard
    # =========================================================================

    @staticmethod
    def dashboard(date_from=None, date_to=None, search=None):
        """
        Dashboard data for customer orders in a date range.

        Args:
            date_from (date, optional): First day included.
            date_to (date, optional): Last day included.
            search (str, optional): Matches the customer's name, WhatsApp
                or address, or the delivery note.

        Returns:
            dict: ``metrics``, ``recent_unpaid``, ``recent_undelivered``,
            ``top_items`` and ``top_customers``.

        Note:
            ``seller_delivery_fee_total`` only honours the date range;
            the search applies to customer orders.
        """
        recent_limit = settings.POS['DASHBOARD_RECENT_LIMIT']
        top_limit = settings.POS['DASHBOARD_TOP_LIMIT']

        orders = _within(Order.objects.all(), date_from, date_to).filter(
            search_filter(CUSTOMER_ORDER, search)
        )
        paid = orders.filter(payment_status=PaymentStatus.PAID)
        unpaid = orders.filter(payment_status=PaymentStatus.UNPAID)
        paid_lines = OrderItem.objects.filter(order__in=paid)

        omzet = paid.aggregate(total=Sum('total'))['total'] or 0
        net_profit = paid_lines.aggregate(value=Sum(_line_value(cost=True)))['value']
        seller_fees = _within(SellerOrder.objects.all(), date_from, date_to).aggregate(
            total=Sum('delivery_fee')
        )['total'] or 0

        metrics = {
            'total_orders': orders.filter(
                payment_status__in=[PaymentStatus.PAID, PaymentStatus.UNPAID]
            ).count(),
            'omzet': int(omzet),
            'net_profit': _whole(net_profit),
            'unpaid_orders': unpaid.count(),
            'seller_delivery_fee_total': int(seller_fees),
        }

        recent_unpaid = [
            {
                'id': order.id,
                'total': order.total,
                'created_at': order.created_at,
                'customer': {'name': order.customer.name} if order.customer else None,
                'delivery_status': order.delivery_status,
                'delivered_at': order.delivered_at,
            }
            for order in unpaid.select_related('customer').order_by('-created_at')[:recent_limit]
        ]

        undelivered = orders.exclude(delivery_status=DeliveryStatus.DELIVERED)
        recent_undelivered = [
            {
                'id': order.id,
                'total': order.total,
                'created_at': order.created_at,
                'customer': {'name': order.customer.name} if order.customer else None,
                'payment_status': order.payment_status,
                'paid_at': order.paid_at,
            }
            for order in undelivered.select_related('customer').order_by('-created_at')[:recent_limit]
        ]

        top_items = [
            {
                'id': row['item_id'],
                'name': row['item__name'],
                'unit': row['item__unit'],
                'qty': row['total_qty'],
                'revenue': _whole(row['revenue']),
            }
            for row in (
                paid_lines
                .values('item_id', 'item__name', 'item__unit')
                .annotate(total_qty=Sum('qty'), revenue=Sum(_line_value()))
                .order_by('-total_qty', 'item__name')[:top_limit]
            )
        ]

        # Customers without a name share the "Walk-in" bucket
        spend_by_name = {}
        per_customer = (
            paid.order_by()
            .values('customer_id', 'customer__name')
            .annotate(orders=Count('id'), spend=Sum('total'))
        )
        for row in per_customer:
            name = row['customer__name'] or WALK_IN
            bucket = spend_by_name.setdefault(name, {'name': name, 'orders': 0, 'spend': 0})
            bucket['orders'] += row['orders']
            bucket['spend'] += int(row['spend'] or 0)
        top_customers = sorted(
            spend_by_name.values(), key=lambda c: (-c['spend'], c['name'])
        )[:top_limit]

        return {
            'metrics': metrics,
            'recent_unpaid': recent_unpaid,
            'recent_undelivered': recent_undelivered,
            'top_items': top_items,
            'top_customers': top_customers,
        }

    # =========================================================================
    # Accounting ledger
    # =========================================================================

    @staticmethod
    def _ledger_sources(date_from=None, date_to=None, search=None, ledger_type='all'):
        """Filtered seller/customer querysets; ``None`` for a side left out."""
        if ledger_type not in LEDGER_TYPES:
            raise InvalidLedgerTypeError(f'Invalid type: {ledger_type}')

        sellers = customers = None
        if ledger_type in ('all', LEDGER_SELLER):
            sellers = _within(SellerOrder.objects.all(), date_from, date_to).filter(
                search_filter(SELLER_ORDER, search)
            )
        if ledger_type in ('all', LEDGER_CUSTOMER):
            customers = _within(
                Order.objects.filter(payment_status=PaymentStatus.PAID), date_from, date_to
            ).filter(search_filter(CUSTOMER_ORDER, search))
        return sellers, customers

    @staticmethod
    def ledger_refs(date_from=None, date_to=None, search=None, ledger_type='all'):
        """
        Ledger entries as ``(id, created_at, type)`` tuples, newest first.

        Returns a queryset that can be counted and sliced, so it plugs into
        the regular paginator.

        Raises:
            InvalidLedgerTypeError: If ``ledger_type`` is unknown.
        """
        sellers, customers = ReportQueries._ledger_sources(date_from, date_to, search, ledger_type)

        def refs(queryset, label):
            return (
                queryset.order_by()
                .annotate(type=Value(label, output_field=CharField()))
                .values_list('id', 'created_at', 'type')
            )

        parts = []
        if sellers is not None:
            parts.append(refs(sellers, LEDGER_SELLER))
        if customers is not None:
            parts.append(refs(customers, LEDGER_CUSTOMER))

        combined = parts[0].union(*parts[1:], all=True) if len(parts) > 1 else parts[0]
        return combined.order_by('-created_at', '-id')

    @staticmethod
    def ledger_rows(refs):
        """
        Load full orders for ``refs`` and return ledger rows in ref order.

        Each row carries ``type`` and ``party`` (the seller or customer) next
        to the order header and its lines.
        """
        refs = list(refs)
        wanted = {LEDGER_SELLER: [], LEDGER_CUSTOMER: []}
        for order_id, _, label in refs:
            wanted[label].append(order_id)

        loaded = {}
        for label, kind in ((LEDGER_SELLER, SELLER_ORDER), (LEDGER_CUSTOMER, CUSTOMER_ORDER)):
            if not wanted[label]:
                continue
            queryset = (
                kind.order_model.objects
                .select_related(kind.party_field)
                .prefetch_related(
                    Prefetch('items', queryset=kind.line_model.objects.select_related('item'))
                )
            )
            for order in queryset.filter(id__in=wanted[label]):
                loaded[(label, order.id)] = (order, getattr(order, kind.party_field))

        rows = []
        for order_id, _, label in refs:
            order, party = loaded[(label, order_id)]
            rows.append({
                'type': label,
                'order': order,
                'party': party,
            })
        return rows

    @staticmethod
    def ledger_summary(date_from=None, date_to=None, search=None, ledger_type='all'):
        """
        Counts and totals over the whole filtered ledger (not just one page).

        Returns:
            dict: ``seller_orders_count``, ``customer_orders_count``,
            ``seller_orders_total``, ``customer_orders_total``,
            ``total_revenue`` (customer side), ``total_costs`` (seller side)
            and ``gross_profit``.
        """
        sellers, customers = ReportQueries._ledger_sources(date_from, date_to, search, ledger_type)

        def totals(queryset):
            if queryset is None:
                return 0, 0
            agg = queryset.aggregate(count=Count('id'), total=Sum('total'))
            return agg['count'], int(agg['total'] or 0)

        seller_count, seller_total = totals(sellers)
        customer_count, customer_total = totals(customers)

        return {
            'seller_orders_count': seller_count,
            'customer_orders_count': customer_count,
            'seller_orders_total': seller_total,
            'customer_orders_total': customer_total,
            'total_revenue': customer_total,
            'total_costs': seller_total,
            'gross_profit': customer_total - seller_total,
        }
