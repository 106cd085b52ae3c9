from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'inventory'

router = DefaultRouter()
router.register(r'', views.InventoryViewSet, basename='inventory-item')

urlpatterns = [
    # GET    /api/inventory/                 - List (category, stock_status, branch)
    # POST   /api/inventory/                 - Create item
    # GET    /api/inventory/stats/           - Stock counts
    # GET/PUT/DELETE /api/inventory/{id}/
    # PATCH  /api/inventory/{id}/quantity/   - Adjust stock
    path('', include(router.urls)),
]
