# tests/test_firm.py
"""
Tests for firm settings and the application reset.
"""

import pytest
from django.test import override_settings

from accounting.commands import DEFAULT_CHART_OF_ACCOUNTS, create_account
from accounting.models import Account, JournalEntry
from firm.commands import firm_display_name, get_firm_settings, reset_all_data, upsert_firm_settings
from invoicing.models import Invoice
from parties.commands import create_party
from parties.models import Party


@pytest.mark.django_db
class TestFirmSettings:
    def test_defaults(self):
        data = get_firm_settings().data

        assert set(data) == {"profile", "security", "preferences"}
        assert data["preferences"]["currency"] == "INR"
        assert data["security"]["two_factor_enabled"] is True

    def test_partial_update_merges(self):
        upsert_firm_settings(profile={"firm_name": "Sharma & Sons", "phone": "12345"})
        result = upsert_firm_settings(profile={"phone": "67890"})

        profile = result.data["profile"]
        assert profile["firm_name"] == "Sharma & Sons"
        assert profile["phone"] == "67890"

    def test_unknown_key_rejected(self):
        result = upsert_firm_settings(preferences={"theme": "blue"})
        assert not result.success
        assert "theme" in result.error

    def test_boolean_keys_must_be_boolean(self):
        assert not upsert_firm_settings(preferences={"enable_dark_mode": "yes"}).success

    def test_two_factor_method(self):
        assert not upsert_firm_settings(security={"two_factor_method": "pigeon"}).success
        assert upsert_firm_settings(security={"two_factor_method": "sms"}).success

    @override_settings(DEFAULT_FIRM_NAME="Fallback Firm")
    def test_display_name(self):
        assert firm_display_name() == "Fallback Firm"
        upsert_firm_settings(profile={"firm_name": "Sharma & Sons"})
        assert firm_display_name() == "Sharma & Sons"


@pytest.mark.django_db
def test_reset_restores_fresh_install(cash_sale):
    create_account(name="Custom", account_type="ASSET")
    create_party(name="Someone")
    upsert_firm_settings(profile={"firm_name": "Old Name"})

    result = reset_all_data()

    assert result.success
    assert result.data["seeded_accounts"] == len(DEFAULT_CHART_OF_ACCOUNTS)
    assert JournalEntry.objects.count() == 0
    assert Invoice.objects.count() == 0
    assert Party.objects.count() == 0
    assert Account.objects.count() == len(DEFAULT_CHART_OF_ACCOUNTS)
    assert not Account.objects.filter(name="Custom").exists()
    assert get_firm_settings().data["profile"]["firm_name"] == ""
