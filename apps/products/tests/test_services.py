"""
Tests for product write services and their image handling.
"""
from decimal import Decimal
from unittest.mock import MagicMock

from django.db import IntegrityError
from django.test import TestCase

from apps.bookings.models import Booking
from apps.images.exceptions import StorageError
from apps.images.services import ImageUploadService
from apps.images.storage import InMemoryImageStore
from apps.products.models import Product
from apps.products.services import create_product, delete_product, delete_products, update_product
from apps.products.tests.factories import BookingFactory, ProductFactory, TournamentFactory, make_image_file


class FailingSaveStore(InMemoryImageStore):
    """Memory store whose saves fail from the `fail_from`th call on."""

    def __init__(self, fail_from=None):
        super().__init__()
        self.fail_from = fail_from
        self.saves = 0

    def save(self, key, file_obj, content_type):
        self.saves += 1
        if self.fail_from is not None and self.saves >= self.fail_from:
            raise StorageError("bucket unavailable")
        return super().save(key, file_obj, content_type)


class ProductServiceTestCase(TestCase):

    def setUp(self):
        self.store = InMemoryImageStore()
        self.image_service = ImageUploadService(self.store)
        self.tournament = TournamentFactory()

    def product_fields(self, **overrides):
        fields = {
            'name': 'Team Jersey',
            'description': 'Home kit',
            'price': Decimal('49.99'),
            'stock': 20,
            'tournament': self.tournament,
            'sku': 'JERSEY-01',
        }
        fields.update(overrides)
        return fields

    def create_with_images(self, gallery_count=2, **overrides):
        return create_product(
            image=make_image_file('main.png'),
            gallery_images=[make_image_file(f'g{i}.png') for i in range(gallery_count)],
            image_service=self.image_service,
            **self.product_fields(**overrides)
        )


class CreateProductTest(ProductServiceTestCase):

    def test_create_without_images(self):
        product = create_product(image_service=self.image_service, **self.product_fields())

        self.assertEqual(Product.objects.count(), 1)
        self.assertIsNone(product.image)
        self.assertEqual(product.gallery_images, [])
        self.assertEqual(self.store.keys(), [])

    def test_primary_image_reference_resolves_to_uploaded_bytes(self):
        upload = make_image_file('main.png', color='blue')
        expected = upload.read()

        product = create_product(image=upload, image_service=self.image_service, **self.product_fields())

        product.refresh_from_db()
        self.assertTrue(product.image.startswith('products/'))
        self.assertEqual(self.store.open(product.image).read(), expected)

    def test_gallery_references_follow_upload_order(self):
        uploads = [make_image_file(f'g{i}.png', color=color) for i, color in enumerate(['red', 'green', 'blue'])]
        expected = [upload.read() for upload in uploads]

        product = create_product(gallery_images=uploads, image_service=self.image_service, **self.product_fields())

        product.refresh_from_db()
        self.assertEqual(len(product.gallery_images), 3)
        for reference, data in zip(product.gallery_images, expected):
            self.assertTrue(reference.startswith('products/gallery/'))
            self.assertEqual(self.store.open(reference).read(), data)

    def test_storage_failure_creates_nothing(self):
        store = FailingSaveStore(fail_from=3)
        service = ImageUploadService(store)
        uploads = [make_image_file(f'g{i}.png') for i in range(3)]

        with self.assertRaises(StorageError):
            create_product(
                image=make_image_file('main.png'),
                gallery_images=uploads,
                image_service=service,
                **self.product_fields()
            )

        self.assertEqual(Product.objects.count(), 0)
        self.assertEqual(store.keys(), [])

    def test_database_failure_removes_uploaded_images(self):
        ProductFactory(sku='DUPLICATE')

        with self.assertRaises(IntegrityError):
            create_product(
                image=make_image_file('main.png'),
                image_service=self.image_service,
                **self.product_fields(sku='duplicate')
            )

        self.assertEqual(self.store.keys(), [])


class UpdateProductTest(ProductServiceTestCase):

    def test_update_missing_product_returns_none(self):
        self.assertIsNone(update_product(999999, name='Nope', image_service=self.image_service))

    def test_update_fields_keeps_images(self):
        product = self.create_with_images()
        image, gallery = product.image, list(product.gallery_images)

        updated = update_product(product.id, name='Away Jersey', stock=3, image_service=self.image_service)

        updated.refresh_from_db()
        self.assertEqual(updated.name, 'Away Jersey')
        self.assertEqual(updated.stock, 3)
        self.assertEqual(updated.image, image)
        self.assertEqual(updated.gallery_images, gallery)
        self.assertEqual(len(self.store.keys()), 3)

    def test_replace_primary_image(self):
        product = self.create_with_images(gallery_count=0)
        old_image = product.image
        replacement = make_image_file('new.jpg', image_format='JPEG')
        expected = replacement.read()

        updated = update_product(product.id, image=replacement, image_service=self.image_service)

        updated.refresh_from_db()
        self.assertNotEqual(updated.image, old_image)
        self.assertTrue(updated.image.endswith('.jpg'))
        self.assertFalse(self.store.exists(old_image))
        self.assertEqual(self.store.keys(), [updated.image])
        self.assertEqual(self.store.open(updated.image).read(), expected)

    def test_replace_gallery_swaps_whole_sequence(self):
        product = self.create_with_images(gallery_count=3)
        old_gallery = list(product.gallery_images)
        uploads = [make_image_file(f'n{i}.gif', image_format='GIF') for i in range(2)]
        expected = [upload.read() for upload in uploads]

        updated = update_product(product.id, gallery_images=uploads, image_service=self.image_service)

        updated.refresh_from_db()
        self.assertEqual(len(updated.gallery_images), 2)
        self.assertTrue(set(updated.gallery_images).isdisjoint(old_gallery))
        for reference in old_gallery:
            self.assertFalse(self.store.exists(reference))
        for reference, data in zip(updated.gallery_images, expected):
            self.assertEqual(self.store.open(reference).read(), data)
        self.assertTrue(self.store.exists(updated.image))

    def test_upload_failure_leaves_product_and_old_images(self):
        store = FailingSaveStore()
        service = ImageUploadService(store)
        product = create_product(
            image=make_image_file('main.png'),
            gallery_images=[make_image_file('g.png')],
            image_service=service,
            **self.product_fields()
        )
        old_keys = sorted(store.keys())
        store.fail_from = store.saves + 1

        with self.assertRaises(StorageError):
            update_product(
                product.id,
                name='Renamed',
                image=make_image_file('new.png'),
                image_service=service
            )

        product.refresh_from_db()
        self.assertEqual(product.name, 'Team Jersey')
        self.assertEqual(sorted(store.keys()), old_keys)
        self.assertEqual(sorted(product.image_references), old_keys)

    def test_delete_failure_does_not_block_update(self):
        product = self.create_with_images(gallery_count=1)
        old_image = product.image
        self.store.delete = MagicMock(side_effect=StorageError("access denied"))

        updated = update_product(product.id, image=make_image_file('new.png'), image_service=self.image_service)

        updated.refresh_from_db()
        self.assertNotEqual(updated.image, old_image)
        self.store.delete.assert_called_once_with(old_image)


class DeleteProductTest(ProductServiceTestCase):

    def test_delete_missing_product_returns_false(self):
        self.assertFalse(delete_product(999999, image_service=self.image_service))

    def test_delete_removes_every_image(self):
        product = self.create_with_images(gallery_count=3)
        store = MagicMock(wraps=self.store)
        service = ImageUploadService(store)

        self.assertTrue(delete_product(product.id, image_service=service))

        self.assertFalse(Product.objects.filter(id=product.id).exists())
        self.assertEqual(store.delete.call_count, 4)
        self.assertEqual(self.store.keys(), [])

    def test_delete_without_images_makes_no_delete_calls(self):
        product = ProductFactory(tournament=self.tournament)
        store = MagicMock()

        delete_product(product.id, image_service=ImageUploadService(store))

        store.delete.assert_not_called()

    def test_delete_failure_still_deletes_product(self):
        product = self.create_with_images(gallery_count=2)
        store = MagicMock()
        store.delete.side_effect = StorageError("access denied")

        self.assertTrue(delete_product(product.id, image_service=ImageUploadService(store)))

        self.assertFalse(Product.objects.filter(id=product.id).exists())
        self.assertEqual(store.delete.call_count, 3)

    def test_delete_cascades_to_bookings(self):
        booking = BookingFactory(product__tournament=self.tournament)

        delete_product(booking.product_id, image_service=self.image_service)

        self.assertFalse(Booking.objects.filter(id=booking.id).exists())

    def test_delete_products(self):
        first = self.create_with_images(gallery_count=1, sku='A-1')
        second = self.create_with_images(gallery_count=2, sku='A-2')
        ProductFactory(tournament=self.tournament)

        count = delete_products(
            Product.objects.filter(id__in=[first.id, second.id]),
            image_service=self.image_service
        )

        self.assertEqual(count, 2)
        self.assertEqual(Product.objects.count(), 1)
        self.assertEqual(self.store.keys(), [])
