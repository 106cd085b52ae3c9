from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # GET    /api/orders/                                         - List orders
    # POST   /api/orders/                                         - Create order
    # GET    /api/orders/summary/                                 - Summary stats
    # GET    /api/orders/stats/                                   - Wait-time stats
    # GET/PUT/DELETE /api/orders/{id}/                            - One order
    # POST   /api/orders/{id}/append/                             - Append items
    # PUT    /api/orders/{id}/items/{item_id}/status/             - Item status
    # PUT    /api/orders/{id}/appended/{aid}/items/{item_id}/status/
    # PUT    /api/orders/{id}/payment/                            - Order payment
    # PUT    /api/orders/{id}/appended/{aid}/payment/             - Appended payment
    # DELETE /api/orders/{id}/appended/{aid}/                     - Remove appended order
    # POST   /api/orders/{id}/notes/                              - Add note
    path('', include(router.urls)),
]
