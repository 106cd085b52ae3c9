from django.contrib import admin
from .models import Withdrawal


@admin.register(Withdrawal)
class WithdrawalAdmin(admin.ModelAdmin):
    list_display = ['type', 'amount', 'charged_to', 'payment_method', 'branch', 'created_by_name', 'created_at']
    list_filter = ['type', 'charged_to', 'branch']
    search_fields = ['description', 'created_by_name']
    date_hierarchy = 'created_at'
