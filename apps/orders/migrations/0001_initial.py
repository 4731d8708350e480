from django.db import migrations, models
import django.db.models.deletion
import uuid


def order_header_fields():
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('payment_status', models.CharField(choices=[('unpaid', 'Unpaid'), ('paid', 'Paid'), ('refunded', 'Refunded')], default='unpaid', max_length=10)),
        ('delivery_status', models.CharField(choices=[('pending', 'Pending'), ('delivered', 'Delivered'), ('failed', 'Failed')], default='pending', max_length=10)),
        ('paid_at', models.DateTimeField(blank=True, null=True)),
        ('delivered_at', models.DateTimeField(blank=True, null=True)),
        ('payment_type', models.CharField(blank=True, choices=[('CASH', 'Cash'), ('TRANSFER', 'Bank transfer'), ('QRIS', 'QRIS')], max_length=8, null=True)),
        ('delivery_note', models.TextField(blank=True, null=True)),
        ('subtotal', models.PositiveBigIntegerField(default=0)),
        ('discount', models.PositiveBigIntegerField(default=0)),
        ('delivery_fee', models.PositiveBigIntegerField(default=0)),
        ('total', models.PositiveBigIntegerField(default=0)),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
    ]


def order_line_fields():
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('qty', models.DecimalField(decimal_places=3, max_digits=12)),
        ('price', models.PositiveIntegerField()),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('contacts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=order_header_fields() + [
                ('customer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='contacts.customer')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['-created_at'], name='orders_created_idx'),
                    models.Index(fields=['payment_status', '-created_at'], name='orders_payment_idx'),
                    models.Index(fields=['delivery_status', '-created_at'], name='orders_delivery_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=order_line_fields() + [
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_lines', to='catalog.item')),
            ],
            options={
                'db_table': 'order_items',
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='SellerOrder',
            fields=order_header_fields() + [
                ('seller', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='seller_orders', to='contacts.seller')),
            ],
            options={
                'db_table': 'seller_orders',
                'ordering': ['-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['-created_at'], name='seller_orders_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SellerOrderItem',
            fields=order_line_fields() + [
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.sellerorder')),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='seller_order_lines', to='catalog.item')),
            ],
            options={
                'db_table': 'seller_order_items',
                'abstract': False,
            },
        ),
    ]
