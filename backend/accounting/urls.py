# accounting/urls.py
"""
URL configuration for accounting API.

Endpoints:
- /accounts/ - Chart of Accounts CRUD
- /journal-entries/ - Journal entry list/create/delete
"""
from django.urls import path

from .views import (
    AccountDetailView,
    AccountListCreateView,
    JournalEntryDetailView,
    JournalEntryListCreateView,
)

app_name = "accounting"

urlpatterns = [
    # ==========================================================================
    # Accounts (Chart of Accounts)
    # ==========================================================================
    path("accounts/", AccountListCreateView.as_view(), name="account-list"),
    path("accounts/<int:pk>/", AccountDetailView.as_view(), name="account-detail"),

    # ==========================================================================
    # Journal Entries
    # ==========================================================================
    path("journal-entries/", JournalEntryListCreateView.as_view(), name="journal-entry-list"),
    path("journal-entries/<int:pk>/", JournalEntryDetailView.as_view(), name="journal-entry-detail"),
]
