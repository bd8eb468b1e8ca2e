# parties/serializers.py
from rest_framework import serializers

from .models import Party


class PartySerializer(serializers.ModelSerializer):
    class Meta:
        model = Party
        fields = [
            "id", "party_type", "name", "address", "contact", "email",
            "gstin", "credit_terms", "created_at", "updated_at",
        ]
        read_only_fields = fields


class PartyInputSerializer(serializers.Serializer):
    """
    Input for create and update.

    Format checks (required name, email shape) live in the commands so
    they apply to every caller.
    """
    party_type = serializers.ChoiceField(choices=Party.PartyType.choices, required=False)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    gstin = serializers.CharField(max_length=20, required=False, allow_blank=True)
    credit_terms = serializers.CharField(max_length=100, required=False, allow_blank=True)
