"""
Serializers for Tournament model.
"""
from rest_framework import serializers
from apps.tournaments.models import Tournament


class TournamentSerializer(serializers.ModelSerializer):
    """Serializer for Tournament model."""

    class Meta:
        model = Tournament
        fields = ['id', 'name', 'is_active', 'display_order', 'starts_at']
        read_only_fields = fields
