"""
URL configuration for the order-taking backend.

REST endpoints live under ``/api/``; the realtime order feed is routed
separately in ``config.asgi`` (``/ws/orders/``).
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import api_root, health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/branches/', include('apps.branches.urls')),
    path('api/upload/', include('apps.uploads.urls')),
    path('api/orders/', include('apps.orders.urls')),
    path('api/withdrawals/', include('apps.withdrawals.urls')),
    path('api/inventory/', include('apps.inventory.urls')),
    path('api/dtr/', include('apps.dtr.urls')),
    path('api/customer-photos/', include('apps.customer_photos.urls')),
    path('api/reports/', include('apps.reports.urls')),
    # categories/ and menu-items/
    path('api/', include('apps.menu.urls')),

    path('', api_root, name='home'),
]

# Uploaded images (development only; served by the reverse proxy in production)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
