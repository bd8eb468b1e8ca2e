# accounting/views.py
"""
Thin views that delegate to the commands layer.

Views handle: HTTP parsing, response formatting.
Commands handle: business logic, validation.

All mutations (create, update, delete) go through commands.
Views never call .save() on models directly.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from reports.filters import filter_entries_by_date, search_entries
from reports.repository import OrmLedgerRepository

from .commands import (
    create_account,
    create_journal_entry,
    delete_account,
    delete_journal_entry,
    update_account,
)
from .models import Account, JournalEntry
from .serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    AccountUpdateSerializer,
    JournalEntryCreateSerializer,
    JournalEntrySerializer,
)


def _account_names() -> dict:
    return dict(Account.objects.values_list("id", "name"))


# =============================================================================
# Account Views
# =============================================================================

class AccountListCreateView(APIView):
    """
    GET /api/accounting/accounts/ -> list the chart of accounts
    POST /api/accounting/accounts/ -> create account
    """

    def get(self, request):
        accounts = Account.objects.order_by("code", "name", "id")
        serializer = AccountSerializer(accounts, many=True)
        return Response(serializer.data)

    def post(self, request):
        input_serializer = AccountCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = create_account(**input_serializer.validated_data)

        if not result.success:
            return Response(
                {"detail": result.error},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(AccountSerializer(result.data).data, status=status.HTTP_201_CREATED)


class AccountDetailView(APIView):
    """
    GET /api/accounting/accounts/<id>/ -> retrieve account
    PATCH /api/accounting/accounts/<id>/ -> update account
    DELETE /api/accounting/accounts/<id>/ -> delete account
    """

    def get(self, request, pk):
        account = get_object_or_404(Account, pk=pk)
        return Response(AccountSerializer(account).data)

    def patch(self, request, pk):
        get_object_or_404(Account, pk=pk)

        input_serializer = AccountUpdateSerializer(data=request.data, partial=True)
        input_serializer.is_valid(raise_exception=True)

        result = update_account(pk, **input_serializer.validated_data)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AccountSerializer(result.data).data)

    def delete(self, request, pk):
        get_object_or_404(Account, pk=pk)

        result = delete_account(pk)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Journal Entry Views
# =============================================================================

class JournalEntryListCreateView(APIView):
    """
    GET /api/accounting/journal-entries/ -> list entries, newest first
        ?from_date=YYYY-MM-DD&to_date=YYYY-MM-DD&q=<search>
    POST /api/accounting/journal-entries/ -> create balanced entry
    """

    def get(self, request):
        repository = OrmLedgerRepository()
        entries = filter_entries_by_date(
            repository.list_journal_entries(),
            request.query_params.get("from_date"),
            request.query_params.get("to_date"),
        )
        entries = search_entries(entries, request.query_params.get("q"), repository.list_accounts())

        queryset = (
            JournalEntry.objects.filter(id__in=[entry.id for entry in entries])
            .prefetch_related("lines")
            .order_by("-date", "-id")
        )
        serializer = JournalEntrySerializer(
            queryset, many=True, context={"account_names": _account_names()}
        )
        return Response(serializer.data)

    def post(self, request):
        input_serializer = JournalEntryCreateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = create_journal_entry(**input_serializer.validated_data)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        entry = JournalEntry.objects.prefetch_related("lines").get(pk=result.data.pk)
        return Response(JournalEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class JournalEntryDetailView(APIView):
    """
    GET /api/accounting/journal-entries/<id>/ -> retrieve entry
    DELETE /api/accounting/journal-entries/<id>/ -> delete entry

    Entries are immutable once created; there is no PATCH.
    """

    def get(self, request, pk):
        entry = get_object_or_404(JournalEntry.objects.prefetch_related("lines"), pk=pk)
        return Response(JournalEntrySerializer(entry).data)

    def delete(self, request, pk):
        get_object_or_404(JournalEntry, pk=pk)

        result = delete_journal_entry(pk)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
