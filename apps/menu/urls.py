from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'menu'

router = DefaultRouter()
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'menu-items', views.MenuItemViewSet, basename='menu-item')

urlpatterns = [
    # GET/POST          /api/categories/
    # GET/PUT/DELETE    /api/categories/{id}/
    # GET/POST          /api/menu-items/
    # GET/PUT/DELETE    /api/menu-items/{id}/
    path('', include(router.urls)),
]
