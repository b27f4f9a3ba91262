"""
API views for Product endpoints.
These views handle request/response only and delegate to services/selectors.
"""
import logging
from django.conf import settings
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from apps.images.exceptions import StorageError
from apps.images.services import get_image_upload_service
from apps.products.serializers import (
    ProductSerializer,
    ProductDetailSerializer,
    ProductCreateUpdateSerializer
)
from apps.products.selectors import list_products, get_product_by_id, get_product_with_relations
from apps.products.services import create_product, update_product, delete_product
from apps.tournaments.selectors import list_active_tournaments
from apps.tournaments.serializers import TournamentSerializer

logger = logging.getLogger(__name__)


class ProductImageServiceMixin:
    """
    Gives views an image service.

    Pass one in with `as_view(image_service=...)`; otherwise the service
    configured in settings is used.
    """
    image_service = None

    def get_image_service(self):
        if self.image_service is None:
            self.image_service = get_image_upload_service()
        return self.image_service

    def get_serializer_context(self):
        return {'request': self.request, 'image_service': self.get_image_service()}

    def storage_error_response(self, error):
        logger.error(f"Error storing product images: {str(error)}", exc_info=True)
        return Response(
            {'error': f'Failed to store product images: {str(error)}'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class ProductListCreateAPIView(ProductImageServiceMixin, APIView):
    """List products or create a new product."""

    def get(self, request):
        """List products newest first with filtering and pagination."""
        # Extract filters from query params
        filters = {
            'name': request.query_params.get('name'),
            'sku': request.query_params.get('sku'),
            'tournament_id': request.query_params.get('tournament_id'),
            'is_active': request.query_params.get('is_active'),
        }

        # Remove None values
        filters = {k: v for k, v in filters.items() if v is not None}

        # Convert is_active to boolean if provided
        if 'is_active' in filters:
            filters['is_active'] = filters['is_active'].lower() in ('true', '1', 'yes')

        # Ignore a tournament filter that is not an id
        if 'tournament_id' in filters:
            try:
                filters['tournament_id'] = int(filters['tournament_id'])
            except ValueError:
                del filters['tournament_id']

        # Pagination
        page = request.query_params.get('page', 1)
        page_size = request.query_params.get('page_size', settings.PRODUCTS_PAGE_SIZE)

        try:
            page = max(int(page), 1)
            page_size = min(max(int(page_size), 1), settings.PRODUCTS_MAX_PAGE_SIZE)
        except (ValueError, TypeError):
            page = 1
            page_size = settings.PRODUCTS_PAGE_SIZE

        queryset, total_count = list_products(filters=filters, page=page, page_size=page_size)
        serializer = ProductSerializer(queryset, many=True, context=self.get_serializer_context())

        return Response({
            'results': serializer.data,
            'count': total_count,
            'page': page,
            'page_size': page_size
        })

    def post(self, request):
        """Create a new product."""
        serializer = ProductCreateUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = create_product(image_service=self.get_image_service(), **serializer.validated_data)
        except StorageError as e:
            return self.storage_error_response(e)

        response_serializer = ProductSerializer(product, context=self.get_serializer_context())
        return Response(
            {'message': 'Product created successfully.', 'product': response_serializer.data},
            status=status.HTTP_201_CREATED
        )


class ProductFormAPIView(APIView):
    """Data needed to build the create form."""

    def get(self, request):
        serializer = TournamentSerializer(list_active_tournaments(), many=True)
        return Response({'tournaments': serializer.data})


class ProductDetailAPIView(ProductImageServiceMixin, APIView):
    """Retrieve, update or delete a product."""

    def get(self, request, product_id):
        """Retrieve a product with its tournament and bookings."""
        product = get_product_with_relations(product_id)
        if not product:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = ProductDetailSerializer(product, context=self.get_serializer_context())
        return Response(serializer.data)

    def put(self, request, product_id):
        """Update a product."""
        return self._update(request, product_id, partial=False)

    def patch(self, request, product_id):
        """Partially update a product."""
        return self._update(request, product_id, partial=True)

    def _update(self, request, product_id, partial):
        product = get_product_by_id(product_id)
        if not product:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = ProductCreateUpdateSerializer(product, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = update_product(product_id, image_service=self.get_image_service(), **serializer.validated_data)
        except StorageError as e:
            return self.storage_error_response(e)
        if not product:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)

        response_serializer = ProductSerializer(product, context=self.get_serializer_context())
        return Response({'message': 'Product updated successfully.', 'product': response_serializer.data})

    def delete(self, request, product_id):
        """Delete a product and its images."""
        success = delete_product(product_id, image_service=self.get_image_service())
        if not success:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response({'message': 'Product deleted successfully.'}, status=status.HTTP_200_OK)


class ProductEditAPIView(ProductImageServiceMixin, APIView):
    """Data needed to build the edit form: the product and active tournaments."""

    def get(self, request, product_id):
        product = get_product_with_relations(product_id)
        if not product:
            return Response({'error': 'Product not found'}, status=status.HTTP_404_NOT_FOUND)

        return Response({
            'product': ProductSerializer(product, context=self.get_serializer_context()).data,
            'tournaments': TournamentSerializer(list_active_tournaments(), many=True).data,
        })
