# firm/serializers.py
from rest_framework import serializers


class FirmSettingsInputSerializer(serializers.Serializer):
    """Each section is a partial mapping; key checks happen in the command."""
    profile = serializers.DictField(required=False)
    security = serializers.DictField(required=False)
    preferences = serializers.DictField(required=False)


class ResetSerializer(serializers.Serializer):
    confirm = serializers.BooleanField()

    def validate_confirm(self, value):
        if not value:
            raise serializers.ValidationError("Reset must be confirmed.")
        return value
