from django.contrib import admin
from .models import DailyReportValidation


@admin.register(DailyReportValidation)
class DailyReportValidationAdmin(admin.ModelAdmin):
    list_display = ['date', 'branch', 'is_validated', 'validated_at', 'validated_by_name']
    list_filter = ['branch', 'is_validated']
    date_hierarchy = 'date'
