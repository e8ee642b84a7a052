"""
WSGI config for docspot project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'docspot.settings')

application = get_wsgi_application()

from docspot.startup import ensure_database  # noqa: E402

ensure_database()
