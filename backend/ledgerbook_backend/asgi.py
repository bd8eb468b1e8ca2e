"""ASGI entry point for the Ledgerbook backend."""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ledgerbook_backend.settings")

application = get_asgi_application()
