"""
Services for Product write operations.
All database write operations should be placed here.
Services can call selectors for read operations.

Image handling order: new files are uploaded first, the row is written, and
only then are the replaced or removed images deleted. If an upload or the
write fails, the images uploaded for this call are removed again and the
stored row is left as it was.
"""
import logging
from django.db import transaction
from apps.images.services import (
    PRODUCT_GALLERY_NAMESPACE,
    PRODUCT_IMAGE_NAMESPACE,
    get_image_upload_service,
)
from apps.products.models import Product
from apps.products.selectors import get_product_by_id

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'name', 'description', 'price', 'stock', 'tournament',
    'sku', 'weight', 'dimensions', 'is_active',
)


def _upload_new_images(image_service, image, gallery_images, uploaded):
    """
    Upload the primary image and gallery files that were supplied.

    References are appended to `uploaded` as they are stored so the caller
    can remove them if anything later fails.

    Returns:
        dict: 'image' and/or 'gallery_images' for the files that were given
    """
    references = {}
    if image:
        references['image'] = image_service.upload_image(image, PRODUCT_IMAGE_NAMESPACE)
        uploaded.append(references['image'])
    if gallery_images:
        references['gallery_images'] = image_service.upload_images(gallery_images, PRODUCT_GALLERY_NAMESPACE)
        uploaded.extend(references['gallery_images'])
    return references


def create_product(image=None, gallery_images=None, image_service=None, **fields):
    """
    Create a new product, storing its images first.

    Args:
        image: Optional uploaded primary image
        gallery_images: Optional list of uploaded gallery images
        image_service: ImageUploadService to use (default: from settings)
        **fields: Validated product fields (name, price, stock, tournament, ...)

    Returns:
        Product: The created product

    Raises:
        StorageError: If an image could not be stored (no product is created)
    """
    image_service = image_service or get_image_upload_service()
    uploaded = []

    try:
        fields.update(_upload_new_images(image_service, image, gallery_images, uploaded))
        with transaction.atomic():
            product = Product.objects.create(**fields)
    except Exception:
        image_service.delete_images(uploaded)
        raise

    logger.info(f"Created product {product.id} ({product.name}) with {len(uploaded)} image(s)")
    return product


def update_product(product_id, image=None, gallery_images=None, image_service=None, **kwargs):
    """
    Update an existing product.

    A new primary image replaces the old one; new gallery files replace the
    whole gallery, in the order given.

    Args:
        product_id: ID of product to update
        image: Optional uploaded replacement primary image
        gallery_images: Optional list of uploaded replacement gallery images
        image_service: ImageUploadService to use (default: from settings)
        **kwargs: Fields to update (name, description, price, stock, tournament,
            sku, weight, dimensions, is_active)

    Returns:
        Product instance or None if not found

    Raises:
        StorageError: If a new image could not be stored (the product is unchanged)
    """
    product = get_product_by_id(product_id)
    if not product:
        return None

    image_service = image_service or get_image_upload_service()
    old_image = product.image
    old_gallery = list(product.gallery_images or [])
    uploaded = []

    try:
        changes = {field: value for field, value in kwargs.items() if field in UPDATABLE_FIELDS}
        changes.update(_upload_new_images(image_service, image, gallery_images, uploaded))
        with transaction.atomic():
            for field, value in changes.items():
                setattr(product, field, value)
            product.save()
    except Exception:
        image_service.delete_images(uploaded)
        raise

    if 'image' in changes and old_image:
        image_service.delete_image(old_image)
    if 'gallery_images' in changes and old_gallery:
        image_service.delete_images(old_gallery)

    logger.info(f"Updated product {product.id} ({product.name})")
    return product


def _delete_product_images(product, image_service):
    image_service.delete_images(product.image_references)


def delete_product(product_id, image_service=None):
    """
    Delete a product by ID, removing its primary and gallery images.

    Image delete failures are logged and do not stop the row from being deleted.

    Returns:
        bool: True if deleted, False if not found
    """
    product = get_product_by_id(product_id)
    if not product:
        return False

    image_service = image_service or get_image_upload_service()
    _delete_product_images(product, image_service)
    product.delete()

    logger.info(f"Deleted product {product_id}")
    return True


def delete_products(products, image_service=None):
    """
    Delete several products (e.g. an admin queryset) with their images.

    Returns:
        int: Number of products deleted
    """
    image_service = image_service or get_image_upload_service()
    count = 0
    for product in products:
        _delete_product_images(product, image_service)
        product.delete()
        count += 1
    return count
