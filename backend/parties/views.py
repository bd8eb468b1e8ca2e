# parties/views.py
"""
Thin views over the party commands.
"""
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .commands import create_party, delete_party, update_party
from .models import Party
from .search import search_parties
from .serializers import PartyInputSerializer, PartySerializer


class PartyListCreateView(APIView):
    """
    GET /api/parties/?type=customer|vendor&q=<search> -> list, sorted by name
    POST /api/parties/ -> create party
    """

    def get(self, request):
        parties = search_parties(
            Party.objects.all(),
            term=request.query_params.get("q"),
            party_type=request.query_params.get("type"),
        )
        return Response(PartySerializer(parties, many=True).data)

    def post(self, request):
        input_serializer = PartyInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        data = dict(input_serializer.validated_data)
        result = create_party(
            name=data.pop("name", ""),
            party_type=data.pop("party_type", Party.PartyType.CUSTOMER),
            **data,
        )

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PartySerializer(result.data).data, status=status.HTTP_201_CREATED)


class PartyDetailView(APIView):
    """
    GET /api/parties/<id>/ -> retrieve
    PATCH /api/parties/<id>/ -> update
    DELETE /api/parties/<id>/ -> delete
    """

    def get(self, request, pk):
        return Response(PartySerializer(get_object_or_404(Party, pk=pk)).data)

    def patch(self, request, pk):
        get_object_or_404(Party, pk=pk)

        input_serializer = PartyInputSerializer(data=request.data, partial=True)
        input_serializer.is_valid(raise_exception=True)

        result = update_party(pk, **input_serializer.validated_data)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PartySerializer(result.data).data)

    def delete(self, request, pk):
        get_object_or_404(Party, pk=pk)

        result = delete_party(pk)

        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
