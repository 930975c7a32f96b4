"""
ASGI config for the MediConnect project.

Every route is plain request/response HTTP, so the Django ASGI handler is
served directly without a protocol router.
"""
import os

# Configure settings before any Django import
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mediconnect.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
