"""
Validators applied to uploaded product images.
"""
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator


def validate_image_extension(file_obj):
    """Only allow the configured image extensions (jpg, jpeg, png, gif, webp)."""
    FileExtensionValidator(allowed_extensions=settings.IMAGE_ALLOWED_EXTENSIONS)(file_obj)


def validate_image_size(file_obj):
    """Reject files larger than IMAGE_MAX_UPLOAD_KB kilobytes."""
    max_kb = settings.IMAGE_MAX_UPLOAD_KB
    if file_obj.size > max_kb * 1024:
        raise ValidationError(
            f'The image may not be greater than {max_kb} kilobytes.',
            code='max_size',
        )


IMAGE_VALIDATORS = [validate_image_extension, validate_image_size]
