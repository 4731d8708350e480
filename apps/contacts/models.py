from django.db import models
import uuid


class Party(models.Model):
    """Shared contact fields; the WhatsApp number is the natural dedup key."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, blank=True)
    # Normalized digits, e.g. 6281234567890
    whatsapp = models.CharField(max_length=32, unique=True, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    def __str__(self):
        return self.name or self.whatsapp or str(self.id)


class Customer(Party):
    """A buyer referenced by customer orders."""

    class Meta:
        db_table = 'customers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['name'], name='customers_name_idx'),
            models.Index(fields=['-created_at'], name='customers_created_idx'),
        ]


class Seller(Party):
    """A supplier referenced by seller (purchase) orders."""

    class Meta:
        db_table = 'sellers'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='sellers_created_idx'),
        ]
