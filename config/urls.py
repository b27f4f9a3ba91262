"""
URL configuration for product admin project.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    # API endpoints
    path('api/products/', include('apps.products.urls')),
    path('api/tournaments/', include('apps.tournaments.urls')),
]

# Serves locally stored product images while DEBUG is on
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
