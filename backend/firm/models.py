# firm/models.py
"""
Firm settings singleton.

One row (pk=1) holding three JSON sections. Missing keys fall back to
the defaults below when read through FirmSettings.load().
"""
from django.db import models


PROFILE_DEFAULTS = {
    "firm_name": "",
    "legal_name": "",
    "address": "",
    "phone": "",
    "email": "",
    "gst_number": "",
    "pan_number": "",
    "bank_name": "",
    "bank_account": "",
    "ifsc": "",
}

SECURITY_DEFAULTS = {
    "password_hint": "",
    "two_factor_enabled": True,
    "two_factor_method": "email",
    "backup_email": "",
    "backup_phone": "",
}

PREFERENCE_DEFAULTS = {
    "currency": "INR",
    "currency_symbol": "₹",
    "date_format": "yyyy-MM-dd",
    "enable_dark_mode": False,
    "enable_notifications": True,
}

SECTION_DEFAULTS = {
    "profile": PROFILE_DEFAULTS,
    "security": SECURITY_DEFAULTS,
    "preferences": PREFERENCE_DEFAULTS,
}

TWO_FACTOR_METHODS = ("email", "sms", "totp")


class FirmSettings(models.Model):
    SINGLETON_ID = 1

    profile = models.JSONField(default=dict, blank=True)
    security = models.JSONField(default=dict, blank=True)
    preferences = models.JSONField(default=dict, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "firm settings"
        verbose_name_plural = "firm settings"

    def __str__(self):
        return self.profile.get("firm_name") or "Firm settings"

    @classmethod
    def load(cls) -> "FirmSettings":
        settings_row, _ = cls.objects.get_or_create(pk=cls.SINGLETON_ID)
        return settings_row

    def section(self, name: str) -> dict:
        """Stored values layered over the section defaults."""
        return {**SECTION_DEFAULTS[name], **(getattr(self, name) or {})}

    def as_dict(self) -> dict:
        return {name: self.section(name) for name in SECTION_DEFAULTS}
