"""
URL routing for Product endpoints.
"""
from django.urls import path
from apps.products.api import (
    ProductListCreateAPIView,
    ProductFormAPIView,
    ProductDetailAPIView,
    ProductEditAPIView
)

app_name = 'products'

urlpatterns = [
    path('', ProductListCreateAPIView.as_view(), name='list-create'),
    path('form/', ProductFormAPIView.as_view(), name='form'),
    path('<int:product_id>/', ProductDetailAPIView.as_view(), name='detail'),
    path('<int:product_id>/edit/', ProductEditAPIView.as_view(), name='edit'),
]
