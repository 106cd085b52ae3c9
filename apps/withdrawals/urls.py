from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'withdrawals'

router = DefaultRouter()
router.register(r'', views.WithdrawalViewSet, basename='withdrawal')

urlpatterns = [
    # GET    /api/withdrawals/          - List (type, charged_to, search, dates)
    # POST   /api/withdrawals/          - Record withdrawal or purchase
    # GET    /api/withdrawals/totals/   - Totals by type and owner
    # GET/PATCH/DELETE /api/withdrawals/{id}/
    path('', include(router.urls)),
]
