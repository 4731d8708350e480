# Generated manually for catalog app

import uuid
from decimal import Decimal
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'categories',
                'ordering': ['name'],
                'verbose_name_plural': 'categories',
            },
        ),
        migrations.CreateModel(
            name='Item',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('price', models.PositiveIntegerField(default=0)),
                ('cost_price', models.PositiveIntegerField(default=0)),
                ('unit', models.CharField(choices=[('PCS', 'Pieces'), ('KG', 'Kilogram')], default='PCS', max_length=3)),
                ('stock_mode', models.CharField(choices=[('TRACK', 'Track stock'), ('RESELL', 'Resell (no stock)')], default='TRACK', max_length=6)),
                ('stock', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='items', to='catalog.category')),
            ],
            options={
                'db_table': 'items',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['name'], name='items_name_idx'),
                    models.Index(fields=['category', 'name'], name='items_category_name_idx'),
                ],
            },
        ),
    ]
