"""
Serializers for Booking model.
"""
from rest_framework import serializers
from apps.bookings.models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Serializer for Booking model."""

    class Meta:
        model = Booking
        fields = ['id', 'customer_name', 'customer_email', 'quantity', 'status', 'created_at']
        read_only_fields = fields
