from django.contrib import admin

from .models import Party


@admin.register(Party)
class PartyAdmin(admin.ModelAdmin):
    list_display = ["name", "party_type", "contact", "email", "gstin"]
    list_filter = ["party_type"]
    search_fields = ["name", "contact", "email", "gstin"]
