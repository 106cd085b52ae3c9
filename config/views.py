from django.http import JsonResponse
from django.utils import timezone


def health_check(request):
    """Liveness probe."""
    return JsonResponse({
        'status': 'ok',
        'message': 'Server is running',
        'timestamp': timezone.now().isoformat(),
    })


def api_root(request):
    """List the top-level API endpoints."""
    return JsonResponse({
        'message': 'Order Taker API',
        'version': '1.0.0',
        'endpoints': {
            'health': '/api/health/',
            'auth': '/api/auth/',
            'branches': '/api/branches/',
            'categories': '/api/categories/',
            'menu_items': '/api/menu-items/',
            'upload': '/api/upload/',
            'orders': '/api/orders/',
            'withdrawals': '/api/withdrawals/',
            'inventory': '/api/inventory/',
            'dtr': '/api/dtr/',
            'customer_photos': '/api/customer-photos/',
            'reports': '/api/reports/',
            'docs': '/api/docs/',
            'realtime': '/ws/orders/',
        },
    })


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Internal server error',
        'status': 500
    }, status=500)
