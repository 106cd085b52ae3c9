"""
WSGI config for the Order Taker project.

Serves the REST API only; realtime order events need the ASGI entry point.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
