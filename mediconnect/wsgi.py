"""
WSGI entry point for the MediConnect backend, e.g.
``gunicorn mediconnect.wsgi:application``.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mediconnect.settings')

application = get_wsgi_application()
