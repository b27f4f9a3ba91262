"""
Blob stores for product images.

Each store keeps raw file bytes under a key and hands the key back as the
image reference. The backend is picked by the IMAGE_STORAGE_BACKEND setting.
"""
import io
import logging
from abc import ABC, abstractmethod

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.files import File
from django.core.files.storage import FileSystemStorage
from smart_open import open as smart_open

from apps.images.exceptions import StorageError

logger = logging.getLogger(__name__)


class ImageStore(ABC):
    """Interface every image backend implements."""

    @abstractmethod
    def save(self, key, file_obj, content_type):
        """Store the bytes of file_obj under key and return the reference."""

    @abstractmethod
    def delete(self, reference):
        """Remove a blob. Deleting a missing blob is not an error."""

    @abstractmethod
    def exists(self, reference):
        """Return True if a blob is stored under reference."""

    @abstractmethod
    def open(self, reference):
        """Open a stored blob for binary reading."""

    @abstractmethod
    def url(self, reference):
        """Return a URL the blob can be fetched from."""


def get_s3_client():
    """
    Get configured S3 client.

    Returns:
        boto3.client: Configured S3 client
    """
    return boto3.client(
        's3',
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_S3_REGION_NAME,
        endpoint_url=settings.AWS_S3_ENDPOINT_URL,
    )


class S3ImageStore(ImageStore):
    """Images in an S3 (or S3-compatible) bucket."""

    def __init__(self, client=None, bucket_name=None):
        self._client = client
        self.bucket_name = bucket_name or settings.AWS_STORAGE_BUCKET_NAME
        if not self.bucket_name:
            raise ImproperlyConfigured('AWS_STORAGE_BUCKET_NAME must be set to store images in S3')

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    def save(self, key, file_obj, content_type):
        try:
            file_obj.seek(0)
            self.client.upload_fileobj(
                file_obj,
                self.bucket_name,
                key,
                ExtraArgs={'ContentType': content_type}
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading image to S3: {key}: {str(e)}", exc_info=True)
            raise StorageError(f"S3 upload failed for {key}: {str(e)}") from e

        logger.info(f"Uploaded image to S3: s3://{self.bucket_name}/{key}")
        return key

    def delete(self, reference):
        # S3 answers 204 for keys that are already gone
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=reference)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 delete failed for {reference}: {str(e)}") from e
        logger.info(f"Deleted image from S3: s3://{self.bucket_name}/{reference}")

    def exists(self, reference):
        try:
            self.client.head_object(Bucket=self.bucket_name, Key=reference)
        except ClientError as e:
            if e.response.get('Error', {}).get('Code') in ('404', 'NoSuchKey', 'NotFound'):
                return False
            raise StorageError(f"S3 lookup failed for {reference}: {str(e)}") from e
        except BotoCoreError as e:
            raise StorageError(f"S3 lookup failed for {reference}: {str(e)}") from e
        return True

    def open(self, reference):
        # smart_open streams the object instead of downloading it up front
        return smart_open(
            f"s3://{self.bucket_name}/{reference}",
            'rb',
            transport_params={
                'client': self.client
            }
        )

    def url(self, reference):
        if settings.AWS_S3_CUSTOM_DOMAIN:
            return f"https://{settings.AWS_S3_CUSTOM_DOMAIN}/{reference}"
        try:
            return self.client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': reference},
                ExpiresIn=3600
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Could not build URL for {reference}: {str(e)}") from e


class LocalImageStore(ImageStore):
    """Images on the local disk under MEDIA_ROOT."""

    def __init__(self, location=None, base_url=None):
        self.storage = FileSystemStorage(
            location=location or settings.MEDIA_ROOT,
            base_url=base_url or settings.MEDIA_URL,
        )

    def save(self, key, file_obj, content_type):
        if not isinstance(file_obj, File):
            file_obj = File(file_obj, name=key)
        try:
            saved_name = self.storage.save(key, file_obj)
        except OSError as e:
            logger.error(f"Error writing image to disk: {key}: {str(e)}", exc_info=True)
            raise StorageError(f"Local upload failed for {key}: {str(e)}") from e

        logger.info(f"Stored image on disk: {saved_name}")
        return saved_name

    def delete(self, reference):
        try:
            self.storage.delete(reference)
        except OSError as e:
            raise StorageError(f"Local delete failed for {reference}: {str(e)}") from e
        logger.info(f"Deleted image from disk: {reference}")

    def exists(self, reference):
        return self.storage.exists(reference)

    def open(self, reference):
        try:
            return self.storage.open(reference, 'rb')
        except OSError as e:
            raise StorageError(f"Could not open {reference}: {str(e)}") from e

    def url(self, reference):
        return self.storage.url(reference)


class InMemoryImageStore(ImageStore):
    """Images kept in a dict. Used by the test settings."""

    def __init__(self):
        self._blobs = {}

    def save(self, key, file_obj, content_type):
        file_obj.seek(0)
        self._blobs[key] = (file_obj.read(), content_type)
        return key

    def delete(self, reference):
        self._blobs.pop(reference, None)

    def exists(self, reference):
        return reference in self._blobs

    def open(self, reference):
        try:
            data, _ = self._blobs[reference]
        except KeyError:
            raise StorageError(f"No image stored under {reference}")
        return io.BytesIO(data)

    def url(self, reference):
        return f"{settings.MEDIA_URL}{reference}"

    def keys(self):
        return list(self._blobs)

    def clear(self):
        self._blobs.clear()


_memory_store = None


def get_image_store(backend=None):
    """
    Build the image store configured by IMAGE_STORAGE_BACKEND.

    The in-memory store is shared for the whole process so references
    survive from one request to the next.
    """
    global _memory_store

    backend = backend or settings.IMAGE_STORAGE_BACKEND
    if backend == 's3':
        return S3ImageStore()
    if backend == 'local':
        return LocalImageStore()
    if backend == 'memory':
        if _memory_store is None:
            _memory_store = InMemoryImageStore()
        return _memory_store
    raise ImproperlyConfigured(f"Unknown IMAGE_STORAGE_BACKEND: {backend!r}")
