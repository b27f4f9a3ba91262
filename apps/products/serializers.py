"""
Serializers for Product model.
"""
import logging
from rest_framework import serializers
from rest_framework.fields import empty
from apps.bookings.serializers import BookingSerializer
from apps.images.exceptions import StorageError
from apps.images.services import get_image_upload_service
from apps.images.validators import IMAGE_VALIDATORS
from apps.products.models import Product
from apps.products.selectors import get_product_by_sku
from apps.tournaments.models import Tournament
from apps.tournaments.serializers import TournamentSerializer

logger = logging.getLogger(__name__)

OPTIONAL_TEXT_FIELDS = ('description', 'sku', 'weight', 'dimensions')


class OptionalBooleanField(serializers.BooleanField):
    """Boolean that is skipped when form input leaves it out, as with JSON."""
    default_empty_html = empty


class ProductSerializer(serializers.ModelSerializer):
    """Serializer for Product model."""
    tournament = TournamentSerializer(read_only=True)
    image_url = serializers.SerializerMethodField()
    gallery_image_urls = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'price', 'stock', 'tournament_id', 'tournament',
            'image', 'image_url', 'gallery_images', 'gallery_image_urls',
            'sku', 'weight', 'dimensions', 'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def _image_service(self):
        # Kept in the root context so a whole list shares one service
        service = self.context.get('image_service')
        if service is None:
            service = self.context['image_service'] = get_image_upload_service()
        return service

    def _url_for(self, reference):
        try:
            return self._image_service().url_for(reference)
        except StorageError as e:
            logger.warning(f"Could not build URL for image {reference}: {str(e)}")
            return None

    def get_image_url(self, product):
        return self._url_for(product.image)

    def get_gallery_image_urls(self, product):
        return [self._url_for(reference) for reference in product.gallery_images or []]


class ProductDetailSerializer(ProductSerializer):
    """Product with its bookings, for the detail view."""
    bookings = BookingSerializer(many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ['bookings']
        read_only_fields = fields


class ProductCreateUpdateSerializer(serializers.ModelSerializer):
    """
    Serializer for creating/updating products.

    `image` and `gallery_images` take uploaded files; the services turn them
    into stored references.
    """
    tournament_id = serializers.PrimaryKeyRelatedField(
        source='tournament',
        queryset=Tournament.objects.all()
    )
    image = serializers.ImageField(
        required=False,
        allow_null=True,
        write_only=True,
        validators=IMAGE_VALIDATORS
    )
    gallery_images = serializers.ListField(
        child=serializers.ImageField(validators=IMAGE_VALIDATORS),
        required=False,
        allow_empty=True,
        write_only=True
    )
    # Left out means unchanged on update and the model default on create
    is_active = OptionalBooleanField(required=False)

    class Meta:
        model = Product
        fields = [
            'name', 'description', 'price', 'stock', 'tournament_id', 'image', 'gallery_images',
            'sku', 'weight', 'dimensions', 'is_active'
        ]

    def validate_sku(self, value):
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        exclude_id = self.instance.id if self.instance is not None else None
        if get_product_by_sku(value, exclude_id=exclude_id):
            raise serializers.ValidationError('The sku has already been taken.')
        return value

    def validate(self, attrs):
        # Blank optional text is stored as NULL
        for field in OPTIONAL_TEXT_FIELDS:
            if attrs.get(field) == '':
                attrs[field] = None
        return attrs
