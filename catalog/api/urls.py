"""
URL configuration for the alternative URL REST API.

Endpoints:
- POST /api/v1/alt-urls/generate/            - Regenerate alternative URLs
- GET  /api/v1/alt-urls/<kind>/<entity_id>/  - Current alternative URLs of an entity
"""

from django.urls import path

from catalog.api.views import generate_alt_urls, get_alt_urls

app_name = 'catalog_api'

urlpatterns = [
    path('alt-urls/generate/', generate_alt_urls, name='generate_alt_urls'),
    path('alt-urls/<str:kind>/<str:entity_id>/', get_alt_urls, name='get_alt_urls'),
]
