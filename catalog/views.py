"""
Catalog service views.

Includes the health check endpoint for monitoring and load balancer checks.
"""

from django.db import connection
from django.http import JsonResponse

from catalog.models import CategoryContent, ContentAssoc, EntityContentType, ProductContent


def get_celery_worker_count():
    """
    Get the count of active Celery workers.

    Returns:
        int: Number of active workers, 0 if Celery not available.
    """
    try:
        from config.celery import app as celery_app

        active = celery_app.control.inspect(timeout=1.0).active()
        if active:
            return len(active)
        return 0
    except Exception:
        return 0


def health_check(request):
    """
    Health check endpoint for the catalog service.

    Endpoint: GET /api/health/
    No authentication required (for load balancer checks).

    Response fields:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "error"
        - celery_workers: integer count of active workers
        - alt_url_products / alt_url_categories: entities with alternative URLs
        - alternate_locales: number of alternate-locale associations

    Returns:
        JsonResponse: HTTP 200 for healthy, HTTP 503 for unhealthy
    """
    status = "healthy"
    http_status = 200

    database_status = "connected"
    try:
        connection.ensure_connection()
    except Exception:
        database_status = "error"
        status = "unhealthy"
        http_status = 503

    celery_workers = get_celery_worker_count()

    alt_url_products = None
    alt_url_categories = None
    alternate_locales = None
    if database_status == "connected":
        alt_url_products = (
            ProductContent.objects.current()
            .filter(content_type=EntityContentType.ALTERNATIVE_URL)
            .values("product_id").distinct().count()
        )
        alt_url_categories = (
            CategoryContent.objects.current()
            .filter(content_type=EntityContentType.ALTERNATIVE_URL)
            .values("category_id").distinct().count()
        )
        alternate_locales = ContentAssoc.objects.current().count()

    response_data = {
        "status": status,
        "database": database_status,
        "celery_workers": celery_workers,
        "alt_url_products": alt_url_products,
        "alt_url_categories": alt_url_categories,
        "alternate_locales": alternate_locales,
    }

    return JsonResponse(response_data, status=http_status)
