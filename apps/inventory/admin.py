from django.contrib import admin
from .models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'branch', 'category', 'quantity', 'unit', 'low_stock_threshold', 'last_updated_by']
    list_filter = ['branch', 'category']
    search_fields = ['name', 'notes']
