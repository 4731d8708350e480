from django.contrib import admin
from .models import Customer, Seller


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'whatsapp', 'address', 'created_at']
    search_fields = ['name', 'whatsapp', 'address']
    readonly_fields = ['id', 'created_at']
    ordering = ['name']


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ['name', 'whatsapp', 'address', 'created_at']
    search_fields = ['name', 'whatsapp', 'address']
    readonly_fields = ['id', 'created_at']
    ordering = ['-created_at']
