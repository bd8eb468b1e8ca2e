# parties/apps.py
"""Parties app configuration."""

from django.apps import AppConfig


class PartiesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "parties"
    verbose_name = "Customers & Vendors"
