# firm/views.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .commands import get_firm_settings, reset_all_data, upsert_firm_settings
from .serializers import FirmSettingsInputSerializer, ResetSerializer


class FirmSettingsView(APIView):
    """
    GET /api/firm/settings/ -> {profile, security, preferences}
    PUT /api/firm/settings/ -> merge the given sections
    """

    def get(self, request):
        return Response(get_firm_settings().data)

    def put(self, request):
        input_serializer = FirmSettingsInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = upsert_firm_settings(**input_serializer.validated_data)
        if not result.success:
            return Response({"detail": result.error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(result.data)


class ResetView(APIView):
    """
    POST /api/firm/reset/ {"confirm": true} -> wipe all data and reseed the chart
    """

    def post(self, request):
        input_serializer = ResetSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        result = reset_all_data()
        return Response(result.data)
