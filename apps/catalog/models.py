from django.db import models
from decimal import Decimal, ROUND_DOWN
import uuid


class Unit(models.TextChoices):
    PCS = 'PCS', 'Pieces'
    KG = 'KG', 'Kilogram'


class StockMode(models.TextChoices):
    TRACK = 'TRACK', 'Track stock'
    RESELL = 'RESELL', 'Resell (no stock)'


class Category(models.Model):
    """Item grouping shown in the POS catalog."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'categories'
        ordering = ['name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return self.name


class Item(models.Model):
    """
    Sellable catalog item.

    ``KG`` items are always ``RESELL``; ``TRACK`` items are always ``PCS`` and
    hold a whole-number stock. ``save()`` enforces both.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)

    # Whole currency units (Rupiah)
    price = models.PositiveIntegerField(default=0)
    cost_price = models.PositiveIntegerField(default=0)

    unit = models.CharField(max_length=3, choices=Unit.choices, default=Unit.PCS)
    stock_mode = models.CharField(
        max_length=6,
        choices=StockMode.choices,
        default=StockMode.TRACK
    )
    # Signed: delivered orders may oversell
    stock = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        ordering = ['name']
        indexes = [
            models.Index(fields=['name'], name='items_name_idx'),
            models.Index(fields=['category', 'name'], name='items_category_name_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.unit})"

    @property
    def is_tracked(self):
        return self.stock_mode == StockMode.TRACK

    def normalize_inventory(self):
        """Apply the unit/stock-mode invariants in place."""
        if self.unit == Unit.KG:
            self.stock_mode = StockMode.RESELL
        if self.stock_mode == StockMode.TRACK:
            self.unit = Unit.PCS
            # Sign is kept; only user input is clamped at zero
            self.stock = Decimal(self.stock or 0).quantize(Decimal('1'), rounding=ROUND_DOWN)
        else:
            self.stock = Decimal('0')

    def save(self, *args, **kwargs):
        self.normalize_inventory()
        super().save(*args, **kwargs)
