from django.contrib import admin
from .models import Category, MenuItem


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'created_at']
    search_fields = ['id', 'name']


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'owner', 'is_best_seller', 'is_public']
    list_filter = ['category', 'owner', 'is_best_seller', 'is_public']
    search_fields = ['name']
    list_editable = ['is_best_seller', 'is_public']
