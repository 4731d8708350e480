from decimal import Decimal, ROUND_HALF_UP

from django.db import models
import uuid

from apps.catalog.models import Item
from apps.contacts.models import Customer, Seller


class PaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'
    REFUNDED = 'refunded', 'Refunded'


class DeliveryStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    DELIVERED = 'delivered', 'Delivered'
    FAILED = 'failed', 'Failed'


class PaymentType(models.TextChoices):
    CASH = 'CASH', 'Cash'
    TRANSFER = 'TRANSFER', 'Bank transfer'
    QRIS = 'QRIS', 'QRIS'


class OrderBase(models.Model):
    """
    Header fields shared by customer orders and seller orders.

    Money is whole currency units. ``subtotal`` and ``total`` are derived from
    the lines by the order services and never edited directly.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID
    )
    delivery_status = models.CharField(
        max_length=10,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.PENDING
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    payment_type = models.CharField(
        max_length=8,
        choices=PaymentType.choices,
        null=True,
        blank=True
    )
    delivery_note = models.TextField(null=True, blank=True)

    subtotal = models.PositiveBigIntegerField(default=0)
    discount = models.PositiveBigIntegerField(default=0)
    delivery_fee = models.PositiveBigIntegerField(default=0)
    total = models.PositiveBigIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-created_at']

    @property
    def is_paid(self):
        return self.payment_status == PaymentStatus.PAID

    @property
    def is_delivered(self):
        return self.delivery_status == DeliveryStatus.DELIVERED


class OrderLineBase(models.Model):
    """An item on an order with its quantity and price snapshot."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Whole number for PCS, up to 0.001 for KG
    qty = models.DecimalField(max_digits=12, decimal_places=3)
    # Unit price captured when the line was added
    price = models.PositiveIntegerField()

    class Meta:
        abstract = True

    @property
    def amount(self):
        return int((self.qty * self.price).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class Order(OrderBase):
    """Customer sales order; delivery consumes tracked stock."""

    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='orders'
    )

    class Meta(OrderBase.Meta):
        db_table = 'orders'
        indexes = [
            models.Index(fields=['-created_at'], name='orders_created_idx'),
            models.Index(fields=['payment_status', '-created_at'], name='orders_payment_idx'),
            models.Index(fields=['delivery_status', '-created_at'], name='orders_delivery_idx'),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.total})"


class OrderItem(OrderLineBase):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    item = models.ForeignKey(Item, on_delete=models.PROTECT, related_name='order_lines')

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.item_id} x {self.qty}"


class SellerOrder(OrderBase):
    """Purchase from a seller; delivery adds to tracked stock."""

    seller = models.ForeignKey(
        Seller,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='seller_orders'
    )

    class Meta(OrderBase.Meta):
        db_table = 'seller_orders'
        indexes = [
            models.Index(fields=['-created_at'], name='seller_orders_created_idx'),
        ]

    def __str__(self):
        return f"Seller order {self.id} ({self.total})"


class SellerOrderItem(OrderLineBase):
    order = models.ForeignKey(SellerOrder, on_delete=models.CASCADE, related_name='items')
    item = models.ForeignKey(Item, on_delete=models.PROTECT, related_name='seller_order_lines')

    class Meta:
        db_table = 'seller_order_items'

    def __str__(self):
        return f"{self.item_id} x {self.qty}"
