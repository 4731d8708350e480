from django.contrib import admin
from django.db.models import Count
from .models import Category, Item


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'items_count', 'created_at']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_items_count=Count('items'))

    @admin.display(description='Items', ordering='_items_count')
    def items_count(self, obj):
        return obj._items_count


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Inventory items; unit/stock-mode invariants are applied on save."""

    list_display = ['name', 'category', 'price', 'cost_price', 'unit', 'stock_mode', 'stock', 'updated_at']
    list_filter = ['unit', 'stock_mode', 'category']
    search_fields = ['name', 'category__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    list_select_related = ['category']

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'category')
        }),
        ('Pricing', {
            'fields': ('price', 'cost_price')
        }),
        ('Inventory', {
            'fields': ('unit', 'stock_mode', 'stock')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
