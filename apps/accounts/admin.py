from django.contrib import admin
from .models import Admin


@admin.register(Admin)
class AdminAccountAdmin(admin.ModelAdmin):
    """PINs are set with ``manage.py set_admin_pin``; the hash is read-only here."""

    list_display = ['name', 'created_at', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['id', 'pin_hash', 'created_at', 'updated_at']
    ordering = ['name']
