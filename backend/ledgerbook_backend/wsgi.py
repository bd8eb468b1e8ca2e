"""WSGI entry point for the Ledgerbook backend."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ledgerbook_backend.settings")

application = get_wsgi_application()
