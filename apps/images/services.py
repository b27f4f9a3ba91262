"""
Image upload service.

Turns uploaded files into stored image references and removes them again.
Uploads must succeed or raise; deletes are best-effort and never raise.
"""
import logging
import mimetypes
import os
import uuid

from apps.images.exceptions import StorageError
from apps.images.storage import get_image_store

logger = logging.getLogger(__name__)

PRODUCT_IMAGE_NAMESPACE = 'products'
PRODUCT_GALLERY_NAMESPACE = 'products/gallery'


def build_image_key(namespace, file_name):
    """
    Generate a fresh key for an upload.

    Args:
        namespace: Key prefix, e.g. 'products/gallery'
        file_name: Original file name (only the extension is kept)

    Returns:
        str: '<namespace>/<32 hex chars><ext>'
    """
    _, ext = os.path.splitext(file_name or '')
    return f"{namespace.strip('/')}/{uuid.uuid4().hex}{ext.lower()}"


def _content_type_for(file_obj):
    content_type = getattr(file_obj, 'content_type', None)
    if content_type:
        return content_type
    guessed, _ = mimetypes.guess_type(getattr(file_obj, 'name', '') or '')
    return guessed or 'application/octet-stream'


class ImageUploadService:
    """Stores and removes product images through an ImageStore."""

    def __init__(self, store):
        self.store = store

    def upload_image(self, file_obj, namespace):
        """
        Store an uploaded file under a new key in namespace.

        Returns:
            str: The image reference

        Raises:
            StorageError: If the store could not save the file
        """
        key = build_image_key(namespace, getattr(file_obj, 'name', ''))
        reference = self.store.save(key, file_obj, _content_type_for(file_obj))
        logger.info(f"Uploaded image {getattr(file_obj, 'name', '<unnamed>')} as {reference}")
        return reference

    def upload_images(self, files, namespace):
        """
        Upload several files, keeping their order.

        If one upload fails the ones already stored by this call are removed
        before the StorageError is re-raised.
        """
        references = []
        try:
            for file_obj in files:
                references.append(self.upload_image(file_obj, namespace))
        except StorageError:
            logger.error(
                f"Upload to {namespace} failed after {len(references)} image(s), removing them",
                exc_info=True
            )
            self.delete_images(references)
            raise
        return references

    def delete_image(self, reference):
        """
        Delete a stored image.

        Returns:
            bool: True if the store accepted the delete, False if the reference
            was empty or the store failed (the failure is logged, not raised)
        """
        if not reference:
            return False
        try:
            self.store.delete(reference)
        except StorageError as e:
            logger.warning(f"Could not delete image {reference}: {str(e)}")
            return False
        return True

    def delete_images(self, references):
        """Delete every reference; returns how many deletes went through."""
        return sum(1 for reference in references or [] if self.delete_image(reference))

    def url_for(self, reference):
        if not reference:
            return None
        return self.store.url(reference)


def get_image_upload_service():
    """Image service backed by the store from settings."""
    return ImageUploadService(get_image_store())
