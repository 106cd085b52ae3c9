from django.contrib import admin
from .models import AppendedOrder, Order, OrderItem, OrderNote, OrderStats


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['item_id', 'name', 'price', 'quantity', 'status', 'item_type', 'appended_order']
    readonly_fields = ['appended_order']


class OrderNoteInline(admin.TabularInline):
    model = OrderNote
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer_name', 'branch', 'order_type', 'is_paid', 'payment_method', 'created_at']
    list_filter = ['branch', 'is_paid', 'payment_method', 'order_type']
    search_fields = ['customer_name', 'order_taker_name']
    readonly_fields = ['order_number', 'version', 'all_items_served_at', 'created_at', 'updated_at']
    inlines = [OrderItemInline, OrderNoteInline]
    date_hierarchy = 'created_at'


@admin.register(AppendedOrder)
class AppendedOrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'order', 'is_paid', 'payment_method', 'created_at']
    list_filter = ['is_paid']


@admin.register(OrderStats)
class OrderStatsAdmin(admin.ModelAdmin):
    list_display = ['branch', 'completed_orders_count', 'total_wait_time_ms', 'updated_at']
