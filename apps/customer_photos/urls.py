from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customer_photos'

router = DefaultRouter()
router.register(r'', views.CustomerPhotoViewSet, basename='customer-photo')

urlpatterns = [
    # GET    /api/customer-photos/           - All photos
    # GET    /api/customer-photos/active/    - Active photos
    # POST   /api/customer-photos/           - Add photo (super admin)
    # PUT    /api/customer-photos/reorder/   - Batch reorder (super admin)
    # GET/PUT/DELETE /api/customer-photos/{id}/
    path('', include(router.urls)),
]
