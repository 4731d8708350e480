"""
Tests for dashboard and accounting queries.

Tests cover:
- Dashboard metrics, open order lists and rankings
- Date range and search filters
- Ledger merge order, type filter and totals
- Ledger CSV export
"""

import pytest
from datetime import date

from apps.orders.services import create_order, create_seller_order
from apps.reports.exceptions import InvalidLedgerTypeError
from apps.reports.exports import LEDGER_HEADER, describe_lines, export_ledger
from apps.reports.reports import ReportQueries
from .conftest import backdate, local_dt


def line(item, qty):
    return {'item_id': item.id, 'qty': qty}


@pytest.fixture
def sales(apple, grapes, customer):
    """
    Four customer orders:

    budi:    paid, 2 apples (14000)
    walk_in: paid, 0.5 kg grapes (22500), no customer
    open:    unpaid and delivered, 1 apple (7000)
    refund:  refunded, 1 apple
    """
    return {
        'budi': create_order(customer={'id': customer.id}, items=[line(apple, 2)], paid=True),
        'walk_in': create_order(items=[line(grapes, '0.5')], paid=True),
        'open': create_order(items=[line(apple, 1)], delivered=True),
        'refund': create_order(items=[line(apple, 1)], payment_status='refunded'),
    }


# =============================================================================
# Dashboard
# =============================================================================

@pytest.mark.django_db
class TestDashboard:

    def test_metrics(self, sales, apple):
        create_seller_order(items=[line(apple, 10)], delivery_fee=3000)

        metrics = ReportQueries.dashboard()['metrics']

        assert metrics == {
            'total_orders': 3,
            'omzet': 14000 + 22500,
            'net_profit': 2 * (7000 - 5000) + (22500 - 19000),
            'unpaid_orders': 1,
            'seller_delivery_fee_total': 3000,
        }

    def test_net_profit_uses_current_cost(self, sales, apple):
        apple.cost_price = 6000
        apple.save()

        metrics = ReportQueries.dashboard()['metrics']

        assert metrics['net_profit'] == 2 * (7000 - 6000) + (22500 - 19000)

    def test_recent_lists(self, sales):
        data = ReportQueries.dashboard()

        assert [row['id'] for row in data['recent_unpaid']] == [sales['open'].id]
        assert data['recent_unpaid'][0]['delivery_status'] == 'delivered'
        undelivered = {row['id'] for row in data['recent_undelivered']}
        assert undelivered == {sales['budi'].id, sales['walk_in'].id, sales['refund'].id}

    def test_top_items(self, sales, apple, grapes):
        top_items = ReportQueries.dashboard()['top_items']

        assert [row['name'] for row in top_items] == ['Apple Fuji', 'Grapes']
        assert top_items[0]['qty'] == 2
        assert top_items[0]['revenue'] == 14000
        assert top_items[1]['unit'] == 'KG'
        assert top_items[1]['revenue'] == 22500

    def test_top_customers_with_walk_in(self, sales):
        top_customers = ReportQueries.dashboard()['top_customers']

        assert top_customers == [
            {'name': 'Walk-in', 'orders': 1, 'spend': 22500},
            {'name': 'Budi', 'orders': 1, 'spend': 14000},
        ]

    def test_date_range(self, sales, apple):
        backdate(sales['budi'], local_dt(2025, 1, 10))
        seller_order = create_seller_order(items=[line(apple, 1)], delivery_fee=4000)
        backdate(seller_order, local_dt(2025, 1, 31, 23))

        data = ReportQueries.dashboard(date_from=date(2025, 1, 1), date_to=date(2025, 1, 31))

        assert data['metrics']['total_orders'] == 1
        assert data['metrics']['omzet'] == 14000
        assert data['metrics']['seller_delivery_fee_total'] == 4000
        assert data['recent_unpaid'] == []

    def test_search(self, sales):
        data = ReportQueries.dashboard(search='budi')

        assert data['metrics']['total_orders'] == 1
        assert data['metrics']['omzet'] == 14000

    def test_empty(self, db):
        data = ReportQueries.dashboard()

        assert data['metrics']['omzet'] == 0
        assert data['metrics']['net_profit'] == 0
        assert data['top_items'] == []
        assert data['top_customers'] == []


# =============================================================================
# Accounting ledger
# =============================================================================

@pytest.fixture
def ledger(apple, customer, seller):
    """One seller order between two paid customer orders, plus an unpaid one."""
    first = backdate(
        create_order(customer={'id': customer.id}, items=[line(apple, 1)], paid=True),
        local_dt(2025, 3, 1),
    )
    purchase = backdate(
        create_seller_order(seller={'id': seller.id}, items=[line(apple, 10)], delivery_fee=5000),
        local_dt(2025, 3, 2),
    )
    last = backdate(create_order(items=[line(apple, 3)], paid=True), local_dt(2025, 3, 3))
    unpaid = backdate(create_order(items=[line(apple, 4)]), local_dt(2025, 3, 4))
    return {'first': first, 'purchase': purchase, 'last': last, 'unpaid': unpaid}


@pytest.mark.django_db
class TestLedger:

    def test_refs_newest_first(self, ledger):
        refs = list(ReportQueries.ledger_refs())

        assert [(ref[0], ref[2]) for ref in refs] == [
            (ledger['last'].id, 'customer'),
            (ledger['purchase'].id, 'seller'),
            (ledger['first'].id, 'customer'),
        ]

    def test_refs_slice(self, ledger):
        refs = ReportQueries.ledger_refs()

        assert refs.count() == 3
        assert [ref[0] for ref in refs[1:3]] == [ledger['purchase'].id, ledger['first'].id]

    def test_type_filter(self, ledger):
        refs = list(ReportQueries.ledger_refs(ledger_type='seller'))

        assert [ref[0] for ref in refs] == [ledger['purchase'].id]

    def test_rows_carry_party_and_lines(self, ledger, customer, seller):
        rows = ReportQueries.ledger_rows(ReportQueries.ledger_refs())

        assert [row['type'] for row in rows] == ['customer', 'seller', 'customer']
        assert rows[0]['party'] is None
        assert rows[1]['party'] == seller
        assert rows[2]['party'] == customer
        assert rows[1]['order'].items.all()[0].qty == 10

    def test_search(self, ledger):
        refs = list(ReportQueries.ledger_refs(search='kebun'))

        assert [ref[0] for ref in refs] == [ledger['purchase'].id]

    def test_date_range(self, ledger):
        refs = list(ReportQueries.ledger_refs(date_from=date(2025, 3, 2), date_to=date(2025, 3, 2)))

        assert [ref[0] for ref in refs] == [ledger['purchase'].id]

    def test_summary(self, ledger):
        summary = ReportQueries.ledger_summary()

        assert summary == {
            'seller_orders_count': 1,
            'customer_orders_count': 2,
            'seller_orders_total': 75000,
            'customer_orders_total': 28000,
            'total_revenue': 28000,
            'total_costs': 75000,
            'gross_profit': 28000 - 75000,
        }

    def test_summary_for_one_side(self, ledger):
        summary = ReportQueries.ledger_summary(ledger_type='customer')

        assert summary['seller_orders_count'] == 0
        assert summary['total_costs'] == 0
        assert summary['gross_profit'] == 28000

    def test_invalid_type(self, db):
        with pytest.raises(InvalidLedgerTypeError):
            ReportQueries.ledger_refs(ledger_type='both')


@pytest.mark.django_db
class TestLedgerExport:

    def test_rows_and_header(self, ledger):
        filename, text = export_ledger()

        lines = text.split('\n')
        assert lines[0] == ','.join(LEDGER_HEADER)
        assert len(lines) == 4
        assert filename.startswith('accounting-all-')
        assert filename.endswith('.csv')

        purchase = lines[2].split(',')
        assert purchase[0] == str(ledger['purchase'].id)
        assert purchase[1] == 'Seller'
        assert purchase[2] == '2025-03-02'
        assert purchase[3:6] == ['Kebun Segar', '6285700001111', 'Lembang']
        assert purchase[12:17] == ['70000', '0', '5000', '75000', 'Apple Fuji (10 PCS)']

    def test_excel_phone_cells(self, ledger):
        filename, text = export_ledger(ledger_type='seller', excel=True)

        assert '="6285700001111"' in text
        assert filename.startswith('accounting-seller-excel-')

    def test_describe_lines_formats_qty(self, apple, grapes):
        order = create_order(items=[line(apple, 2), line(grapes, '1.250')])

        described = describe_lines(order)

        assert 'Apple Fuji (2 PCS)' in described
        assert 'Grapes (1.25 KG)' in described
        assert '; ' in described
