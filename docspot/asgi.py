"""
ASGI config for docspot project.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'docspot.settings')

application = get_asgi_application()

from docspot.startup import ensure_database  # noqa: E402

ensure_database()
