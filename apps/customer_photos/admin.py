from django.contrib import admin
from .models import CustomerPhoto


@admin.register(CustomerPhoto)
class CustomerPhotoAdmin(admin.ModelAdmin):
    list_display = ['display_order', 'alt_text', 'is_active', 'created_at']
    list_filter = ['is_active']
    ordering = ['display_order']
