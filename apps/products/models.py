from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower


class Product(models.Model):
    """Product sold for a tournament, with a primary image and an image gallery."""
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    stock = models.PositiveIntegerField(validators=[MinValueValidator(0)])
    tournament = models.ForeignKey(
        'tournaments.Tournament',
        on_delete=models.PROTECT,
        related_name='products',
    )
    image = models.CharField(max_length=500, blank=True, null=True)  # image reference in the blob store
    gallery_images = models.JSONField(default=list, blank=True)  # ordered image references
    sku = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    weight = models.CharField(max_length=100, blank=True, null=True)
    dimensions = models.CharField(max_length=100, blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['created_at'], name='products_created_at_idx'),
        ]
        constraints = [
            models.UniqueConstraint(Lower('sku'), name='products_sku_lower_unique'),
        ]

    def __str__(self):
        return f"{self.sku or '-'} - {self.name}"

    @property
    def image_references(self):
        """Every image reference this product owns, primary first."""
        references = [self.image] if self.image else []
        return references + list(self.gallery_images or [])
