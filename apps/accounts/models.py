from django.contrib.auth.hashers import check_password, make_password
from django.db import models
import uuid


class Admin(models.Model):
    """
    POS operator account unlocked with a numeric PIN.

    There is normally a single row; ``set_admin_pin`` creates or rotates it.
    The PIN is stored with Django's password hasher, never in clear text.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True, default='admin')
    pin_hash = models.CharField(max_length=128)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'admins'
        ordering = ['name']

    def __str__(self):
        return self.name

    def set_pin(self, raw_pin):
        self.pin_hash = make_password(raw_pin)

    def check_pin(self, raw_pin):
        return check_password(raw_pin, self.pin_hash)
