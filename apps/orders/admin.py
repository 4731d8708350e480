from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Order,
    OrderItem,
    SellerOrder,
    SellerOrderItem,
    PaymentStatus,
    DeliveryStatus,
)
from .services import mark_order, mark_seller_order

BADGE_COLORS = {
    PaymentStatus.UNPAID: ('#E5C49A', '#2C1810'),
    PaymentStatus.PAID: ('#6B8E5E', 'white'),
    PaymentStatus.REFUNDED: ('#A47449', 'white'),
    DeliveryStatus.PENDING: ('#E5C49A', '#2C1810'),
    DeliveryStatus.DELIVERED: ('#6B8E5E', 'white'),
    DeliveryStatus.FAILED: ('#B85C5C', 'white'),
}


def badge(value, label):
    bg, fg = BADGE_COLORS.get(value, ('#ccc', '#666'))
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, label
    )


class LineInline(admin.TabularInline):
    """Lines are written by the order services only."""
    extra = 0
    fields = ['item', 'qty', 'price', 'amount']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class OrderItemInline(LineInline):
    model = OrderItem


class SellerOrderItemInline(LineInline):
    model = SellerOrderItem


class OrderAdminBase(admin.ModelAdmin):
    """
    Read-mostly order admin.

    Amounts and stock are owned by the services; the actions below go through
    them so delivery changes still reconcile stock.
    """

    list_filter = ['payment_status', 'delivery_status', 'payment_type', 'created_at']
    readonly_fields = [
        'id',
        'payment_status',
        'delivery_status',
        'paid_at',
        'delivered_at',
        'subtotal',
        'discount',
        'delivery_fee',
        'total',
        'created_at',
        'updated_at',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    actions = ['mark_paid', 'mark_delivered', 'mark_pending']

    mark_service = None

    def has_add_permission(self, request):
        return False

    @admin.display(description='Payment', ordering='payment_status')
    def payment_badge(self, obj):
        return badge(obj.payment_status, obj.get_payment_status_display())

    @admin.display(description='Delivery', ordering='delivery_status')
    def delivery_badge(self, obj):
        return badge(obj.delivery_status, obj.get_delivery_status_display())

    def _mark(self, request, queryset, **status):
        for order in queryset:
            type(self).mark_service(order_id=order.id, **status)
        self.message_user(request, f'Updated {queryset.count()} order(s).')

    @admin.action(description='Mark as paid')
    def mark_paid(self, request, queryset):
        self._mark(request, queryset, payment_status=PaymentStatus.PAID)

    @admin.action(description='Mark as delivered')
    def mark_delivered(self, request, queryset):
        self._mark(request, queryset, delivery_status=DeliveryStatus.DELIVERED)

    @admin.action(description='Mark as pending delivery')
    def mark_pending(self, request, queryset):
        self._mark(request, queryset, delivery_status=DeliveryStatus.PENDING)


@admin.register(Order)
class OrderAdmin(OrderAdminBase):
    list_display = ['id', 'customer', 'total', 'payment_badge', 'delivery_badge', 'payment_type', 'created_at']
    search_fields = ['customer__name', 'customer__whatsapp', 'customer__address', 'delivery_note']
    list_select_related = ['customer']
    inlines = [OrderItemInline]
    mark_service = mark_order


@admin.register(SellerOrder)
class SellerOrderAdmin(OrderAdminBase):
    list_display = ['id', 'seller', 'total', 'payment_badge', 'delivery_badge', 'payment_type', 'created_at']
    search_fields = ['seller__name', 'seller__whatsapp', 'seller__address', 'delivery_note']
    list_select_related = ['seller']
    inlines = [SellerOrderItemInline]
    mark_service = mark_seller_order
