from django.contrib import admin
from .models import DTRRecord


@admin.register(DTRRecord)
class DTRRecordAdmin(admin.ModelAdmin):
    list_display = ['user', 'branch', 'date', 'clock_in_time', 'clock_out_time', 'status']
    list_filter = ['branch', 'status', 'date']
    search_fields = ['user__email', 'user__name', 'notes']
    raw_id_fields = ['user']
