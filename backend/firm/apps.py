# firm/apps.py
"""Firm settings app configuration."""

from django.apps import AppConfig


class FirmConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "firm"
    verbose_name = "Firm Settings"
