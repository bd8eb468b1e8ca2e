# accounting/admin.py
"""
Django admin configuration for accounting models.

The admin is for viewing only. All mutations go through the command
layer (accounting/commands.py), which validates balance and logs.
"""
from django.contrib import admin

from .models import Account, JournalEntry, JournalLine


class ReadOnlyModelAdmin(admin.ModelAdmin):
    """Base admin class for models that must be changed through commands."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class JournalLineInline(admin.TabularInline):
    model = JournalLine
    extra = 0
    # account_id, not account: lines may point at a removed account
    readonly_fields = ["line_no", "account_id", "description", "debit", "credit"]
    fields = ["line_no", "account_id", "description", "debit", "credit"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Account)
class AccountAdmin(ReadOnlyModelAdmin):
    list_display = ["code", "name", "account_type", "normal_balance", "is_system"]
    list_filter = ["account_type", "is_system"]
    search_fields = ["code", "name", "description"]
    ordering = ["code", "name"]


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyModelAdmin):
    list_display = ["reference", "date", "narration", "created_at"]
    search_fields = ["reference", "narration"]
    date_hierarchy = "date"
    inlines = [JournalLineInline]
