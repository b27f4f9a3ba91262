"""
Selectors for Product read operations.
All database read queries should be placed here.
"""
from django.conf import settings
from apps.products.models import Product


def get_product_by_id(product_id):
    """Get a single product by ID."""
    try:
        return Product.objects.get(id=product_id)
    except Product.DoesNotExist:
        return None


def get_product_with_relations(product_id):
    """Get a product with its tournament and bookings loaded (detail view)."""
    try:
        return (
            Product.objects
            .select_related('tournament')
            .prefetch_related('bookings')
            .get(id=product_id)
        )
    except Product.DoesNotExist:
        return None


def get_product_by_sku(sku, exclude_id=None):
    """Get a product by SKU (case-insensitive), optionally ignoring one product."""
    queryset = Product.objects.filter(sku__iexact=sku)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.first()


def list_products(filters=None, page=1, page_size=None):
    """
    List products newest first with optional filtering and pagination.

    Args:
        filters: dict with keys: name, sku, tournament_id, is_active
        page: page number (1-indexed)
        page_size: number of items per page (defaults to PRODUCTS_PAGE_SIZE)

    Returns:
        tuple: (queryset, total_count)
    """
    queryset = Product.objects.select_related('tournament').order_by('-created_at', '-id')

    if filters:
        if filters.get('name'):
            queryset = queryset.filter(name__icontains=filters['name'])
        if filters.get('sku'):
            queryset = queryset.filter(sku__icontains=filters['sku'])
        if filters.get('tournament_id'):
            queryset = queryset.filter(tournament_id=filters['tournament_id'])
        if filters.get('is_active') is not None:
            queryset = queryset.filter(is_active=filters['is_active'])

    total_count = queryset.count()

    page_size = page_size or settings.PRODUCTS_PAGE_SIZE
    page = max(page or 1, 1)
    start = (page - 1) * page_size
    queryset = queryset[start:start + page_size]

    return queryset, total_count
