"""
Service layer tests for orders.

Tests cover:
- Price snapshots on create and edit
- Stock reconciliation on delivery transitions
- Status timestamps
- Seller orders moving stock the other way
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.catalog.services import update_item
from apps.contacts.models import Customer
from apps.orders.models import Order, OrderItem, SellerOrder, PaymentStatus, DeliveryStatus
from apps.orders.services import (
    create_order,
    update_order,
    mark_order,
    delete_order,
    search_orders,
    create_seller_order,
    update_seller_order,
    mark_seller_order,
    delete_seller_order,
    search_seller_orders,
    EmptyOrderError,
    InvalidOrderItemError,
    OrderNotFoundError,
)
from .conftest import stock_of


def line(item, qty):
    return {'item_id': item.id, 'qty': qty}


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestCreateOrder:

    def test_snapshots_and_totals(self, apple, grapes):
        order = create_order(
            items=[line(apple, 3), line(grapes, '0.75')],
            discount=1500,
            delivery_fee=10000,
        )

        lines = {row.item_id: row for row in order.items.all()}
        assert lines[apple.id].price == 7000
        assert lines[grapes.id].qty == Decimal('0.750')
        assert order.subtotal == 3 * 7000 + 33750
        assert order.delivery_fee == 10000
        assert order.total == order.subtotal - 1500

    def test_duplicate_lines_are_merged(self, apple):
        order = create_order(items=[line(apple, 2), line(apple, 3)])

        assert order.items.count() == 1
        assert order.items.get().qty == 5

    def test_zero_quantity_lines_dropped(self, apple, banana):
        order = create_order(items=[line(apple, 1), line(banana, '0.4')])

        assert list(order.items.values_list('item_id', flat=True)) == [apple.id]

    def test_no_items(self, db):
        with pytest.raises(EmptyOrderError, match='No items.'):
            create_order(items=[])

    def test_all_lines_zero(self, apple):
        with pytest.raises(EmptyOrderError):
            create_order(items=[line(apple, 0)])

    def test_unknown_item(self, apple):
        with pytest.raises(InvalidOrderItemError, match='Invalid item'):
            create_order(items=[line(apple, 1), {'item_id': uuid4(), 'qty': 1}])
        assert not Order.objects.exists()

    def test_money_inputs_clamped(self, apple):
        order = create_order(items=[line(apple, 1)], discount=-20, delivery_fee='99.9')

        assert order.discount == 0
        assert order.delivery_fee == 99

    def test_pending_order_leaves_stock(self, apple):
        create_order(items=[line(apple, 4)])

        assert stock_of(apple) == 50

    def test_delivered_on_create_decrements(self, apple, grapes):
        order = create_order(items=[line(apple, 4), line(grapes, 2)], delivery_status='DELIVERED ')

        assert order.delivery_status == DeliveryStatus.DELIVERED
        assert order.delivered_at is not None
        assert stock_of(apple) == 46
        assert stock_of(grapes) == 0

    def test_legacy_booleans(self, apple):
        order = create_order(items=[line(apple, 1)], paid=True, delivered=True)

        assert order.payment_status == PaymentStatus.PAID
        assert order.paid_at is not None
        assert order.delivery_status == DeliveryStatus.DELIVERED

    def test_unknown_status_falls_back(self, apple):
        order = create_order(items=[line(apple, 1)], payment_status='bogus', delivery_status='shipped')

        assert order.payment_status == PaymentStatus.UNPAID
        assert order.delivery_status == DeliveryStatus.PENDING

    def test_customer_connects_by_whatsapp(self, apple, customer):
        order = create_order(
            customer={'name': 'Budi Baru', 'whatsapp': '081234567890'},
            items=[line(apple, 1)],
        )

        assert order.customer_id == customer.id
        customer.refresh_from_db()
        assert customer.name == 'Budi Baru'
        assert customer.address == 'Bandung'

    def test_new_customer_created(self, apple):
        order = create_order(customer={'name': 'Walk-in Ana'}, items=[line(apple, 1)])

        assert order.customer.name == 'Walk-in Ana'
        assert Customer.objects.count() == 1


# =============================================================================
# Update / reconciliation
# =============================================================================

@pytest.mark.django_db
class TestUpdateOrder:

    def test_existing_line_keeps_snapshot(self, apple, banana):
        order = create_order(items=[line(apple, 2)])
        apple.price = 9000
        apple.save()
        banana.price = 3000
        banana.save()

        order = update_order(order_id=order.id, patch={'items': [line(apple, 5), line(banana, 1)]})

        prices = {row.item_id: row.price for row in order.items.all()}
        assert prices == {apple.id: 7000, banana.id: 3000}
        assert order.subtotal == 5 * 7000 + 3000

    def test_removed_line_deleted(self, apple, banana):
        order = create_order(items=[line(apple, 2), line(banana, 2)])

        update_order(order_id=order.id, patch={'items': [line(banana, 1)]})

        assert list(order.items.values_list('item_id', flat=True)) == [banana.id]

    def test_stored_duplicates_collapse(self, apple):
        order = create_order(items=[line(apple, 1)])
        OrderItem.objects.create(order=order, item=apple, qty=2, price=7000)

        update_order(order_id=order.id, patch={'items': [line(apple, 4)]})

        row = order.items.get()
        assert row.qty == 4
        assert row.price == 7000

    def test_empty_line_list_rejected(self, apple):
        order = create_order(items=[line(apple, 2)])

        with pytest.raises(EmptyOrderError):
            update_order(order_id=order.id, patch={'items': [line(apple, 0)]})
        assert order.items.get().qty == 2

    def test_omitted_fields_keep_stored_values(self, apple):
        order = create_order(
            items=[line(apple, 2)],
            discount=500,
            delivery_fee=2000,
            payment_type='QRIS',
            delivery_note='Gate B',
        )

        order = update_order(order_id=order.id, patch={'items': [line(apple, 3)]})

        assert order.discount == 500
        assert order.delivery_fee == 2000
        assert order.payment_type == 'QRIS'
        assert order.delivery_note == 'Gate B'
        assert order.total == 3 * 7000 - 500

    def test_total_formula_holds(self, apple, grapes):
        order = create_order(items=[line(apple, 1), line(grapes, '1.111')], discount=100)
        order = update_order(order_id=order.id, patch={'discount': 999999})

        assert order.total == max(0, order.subtotal - order.discount)

    def test_delivery_toggle_round_trip(self, apple):
        order = create_order(items=[line(apple, 5)])

        mark_order(order_id=order.id, delivery_status='delivered')
        assert stock_of(apple) == 45

        mark_order(order_id=order.id, delivery_status='pending')
        assert stock_of(apple) == 50

        mark_order(order_id=order.id, delivery_status='delivered')
        assert stock_of(apple) == 45

    def test_repeated_delivered_applies_once(self, apple):
        order = create_order(items=[line(apple, 5)], delivered=True)

        mark_order(order_id=order.id, delivery_status='delivered')
        update_order(order_id=order.id, patch={'delivered': True})

        assert stock_of(apple) == 45

    def test_failed_restores_stock(self, apple):
        order = create_order(items=[line(apple, 5)], delivered=True)

        mark_order(order_id=order.id, delivery_status='failed')

        assert stock_of(apple) == 50

    def test_line_edit_on_delivered_order(self, apple, banana):
        order = create_order(items=[line(apple, 5)], delivered=True)

        update_order(order_id=order.id, patch={'items': [line(apple, 2), line(banana, 4)]})

        assert stock_of(apple) == 48
        assert stock_of(banana) == 26

    def test_restore_uses_prior_lines(self, apple, banana):
        order = create_order(items=[line(apple, 5)], delivered=True)

        update_order(order_id=order.id, patch={'items': [line(banana, 3)], 'delivered': False})

        assert stock_of(apple) == 50
        assert stock_of(banana) == 30

    def test_oversell_allowed(self, apple):
        create_order(items=[line(apple, 60)], delivered=True)

        assert stock_of(apple) == -10

    def test_oversold_item_edit_keeps_stock(self, apple):
        order = create_order(items=[line(apple, 60)], delivered=True)

        update_item(item_id=apple.id, data={'name': 'Apple Fuji Premium'})
        assert stock_of(apple) == -10

        mark_order(order_id=order.id, delivery_status='pending')
        assert stock_of(apple) == 50

    def test_paid_at_lifecycle(self, apple):
        order = create_order(items=[line(apple, 1)])
        assert order.paid_at is None

        order = mark_order(order_id=order.id, payment_status='PAID')
        first_paid_at = order.paid_at
        assert first_paid_at is not None

        order = update_order(order_id=order.id, patch={'delivery_note': 'x'})
        assert order.paid_at == first_paid_at

        order = mark_order(order_id=order.id, paid=False)
        assert order.payment_status == PaymentStatus.UNPAID
        assert order.paid_at is None

    def test_not_found(self, db):
        with pytest.raises(OrderNotFoundError):
            update_order(order_id=uuid4(), patch={})


@pytest.mark.django_db
class TestDeleteOrder:

    def test_delete_delivered_restores_stock(self, apple):
        order = create_order(items=[line(apple, 7)], delivered=True)

        delete_order(order_id=order.id)

        assert stock_of(apple) == 50
        assert not Order.objects.exists()
        assert not OrderItem.objects.exists()

    def test_delete_pending_leaves_stock(self, apple):
        order = create_order(items=[line(apple, 7)])

        delete_order(order_id=order.id)

        assert stock_of(apple) == 50


@pytest.mark.django_db
class TestSearchOrders:

    def test_search_party_and_note(self, apple, customer):
        mine = create_order(customer={'id': customer.id}, items=[line(apple, 1)])
        noted = create_order(items=[line(apple, 1)], delivery_note='Leave at Bandung office')
        create_order(items=[line(apple, 1)])

        assert set(search_orders(search='bandung')) == {mine, noted}
        assert list(search_orders(search='6281234')) == [mine]


# =============================================================================
# Seller orders
# =============================================================================

@pytest.mark.django_db
class TestSellerOrders:

    def test_total_includes_delivery_fee(self, apple):
        order = create_seller_order(items=[line(apple, 10)], discount=5000, delivery_fee=15000)

        assert order.subtotal == 70000
        assert order.total == 80000

    def test_delivery_receives_stock(self, apple):
        order = create_seller_order(items=[line(apple, 10)])

        mark_seller_order(order_id=order.id, delivery_status='delivered')
        assert stock_of(apple) == 60

        mark_seller_order(order_id=order.id, delivered=False)
        assert stock_of(apple) == 50

    def test_update_keeps_snapshot_and_fee(self, apple, banana):
        order = create_seller_order(items=[line(apple, 2)], delivery_fee=3000)
        apple.price = 1
        apple.save()

        order = update_seller_order(order_id=order.id, patch={'items': [line(apple, 4), line(banana, 2)]})

        assert order.items.get(item=apple).price == 7000
        assert order.delivery_fee == 3000
        assert order.total == 4 * 7000 + 2 * 2500 + 3000

    def test_delete_delivered_removes_received_stock(self, apple):
        order = create_seller_order(items=[line(apple, 10)], delivered=True)
        assert stock_of(apple) == 60

        delete_seller_order(order_id=order.id)

        assert stock_of(apple) == 50
        assert not SellerOrder.objects.exists()

    def test_seller_connects_by_whatsapp(self, apple, seller):
        order = create_seller_order(seller={'whatsapp': '085700001111'}, items=[line(apple, 1)])

        assert order.seller_id == seller.id

    def test_list_without_items_counts_lines(self, apple, banana):
        create_seller_order(items=[line(apple, 1), line(banana, 1)])

        row = search_seller_orders(include_items=False).get()
        assert row.items_count == 2
