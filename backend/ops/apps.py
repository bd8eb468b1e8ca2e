"""Ops app configuration."""

from django.apps import AppConfig


class OpsConfig(AppConfig):
    """Operations & observability: logging config and health probes."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "ops"
    verbose_name = "Operations"
