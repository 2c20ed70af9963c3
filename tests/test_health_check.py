"""
Tests for the health check endpoint used by monitoring and load balancers.
"""

from unittest.mock import patch

from django.test import Client, TestCase

from catalog.models import Product
from catalog.services.alt_urls import generate_product_alt_urls
from catalog.tests.builders import add_names


class TestHealthyStatusResponse(TestCase):
    """Test the healthy response of the health endpoint."""

    def setUp(self):
        """Set up test client."""
        self.client = Client()

    @patch("catalog.views.get_celery_worker_count", return_value=2)
    def test_healthy_status_returns_200(self, mock_workers):
        response = self.client.get("/api/health/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["celery_workers"] == 2

    @patch("catalog.views.get_celery_worker_count", return_value=0)
    def test_no_authentication_required(self, mock_workers):
        response = self.client.get("/api/health/")

        assert response.status_code == 200

    @patch("catalog.views.get_celery_worker_count", return_value=0)
    def test_reports_alt_url_counts(self, mock_workers):
        product = Product.objects.create(id="P-1")
        add_names(product, "en_US", "Hat", {"fr_FR": "Chapeau"})
        generate_product_alt_urls(product)

        data = self.client.get("/api/health/").json()

        assert data["alt_url_products"] == 1
        assert data["alt_url_categories"] == 0
        # one name association and one alternative URL association
        assert data["alternate_locales"] == 2


class TestUnhealthyStatusResponse(TestCase):
    """Test the response when the database cannot be reached."""

    @patch("catalog.views.get_celery_worker_count", return_value=0)
    @patch("catalog.views.connection")
    def test_database_error_returns_503(self, mock_connection, mock_workers):
        mock_connection.ensure_connection.side_effect = Exception("connection refused")

        response = Client().get("/api/health/")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["database"] == "error"
        assert data["alt_url_products"] is None


class TestCeleryWorkerCount(TestCase):
    """Test the worker count helper."""

    @patch("config.celery.app.control.inspect")
    def test_counts_active_workers(self, mock_inspect):
        from catalog.views import get_celery_worker_count

        mock_inspect.return_value.active.return_value = {"w1@host": [], "w2@host": []}

        assert get_celery_worker_count() == 2

    @patch("config.celery.app.control.inspect", side_effect=Exception("no broker"))
    def test_returns_zero_when_unavailable(self, mock_inspect):
        from catalog.views import get_celery_worker_count

        assert get_celery_worker_count() == 0
