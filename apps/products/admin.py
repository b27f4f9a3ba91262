from django.contrib import admin
from apps.products.models import Product
from apps.products.services import delete_product, delete_products


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'sku', 'tournament', 'price', 'stock', 'is_active', 'created_at')
    list_filter = ('is_active', 'tournament', 'created_at')
    list_select_related = ('tournament',)
    search_fields = ('sku', 'name', 'description')
    readonly_fields = ('image', 'gallery_images', 'created_at', 'updated_at')

    # Deletes go through the service so stored images are removed too
    def delete_model(self, request, obj):
        delete_product(obj.id)

    def delete_queryset(self, request, queryset):
        delete_products(queryset)
