"""
Tests for the alternative URL REST API.
"""

import pytest
from django.urls import reverse
from rest_framework import status

from catalog.tests.builders import add_alt_urls, alt_urls_of


GENERATE_URL = "/api/v1/alt-urls/generate/"


@pytest.mark.django_db
class TestGenerateEndpoint:
    """Tests for POST /api/v1/alt-urls/generate/."""

    def test_requires_authentication(self, api_client):
        response = api_client.post(GENERATE_URL, {"scope": "all"}, format="json")

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_url_name(self):
        assert reverse("catalog_api:generate_alt_urls") == GENERATE_URL

    def test_invalid_scope(self, auth_client):
        response = auth_client.post(GENERATE_URL, {"scope": "galaxy"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Invalid scope" in response.json()["error"]

    def test_unknown_option(self, auth_client):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "all", "options": {"moment": "2020-01-01"}},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "moment" in response.json()["error"]

    def test_non_boolean_option(self, auth_client, catalog_tree):
        add_alt_urls(catalog_tree["P-1"], None, "keep-me")

        response = auth_client.post(
            GENERATE_URL,
            {"scope": "product", "id": "P-1", "options": {"replace_existing": "false"}},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "replace_existing" in response.json()["error"]
        assert alt_urls_of(catalog_tree["P-1"])[0].text_data == "keep-me"

    def test_catalog_ids_must_be_a_list(self, auth_client, catalog_tree):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "website", "catalog_ids": "CAT-A"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "catalog_ids must be a list of strings"
        assert alt_urls_of(catalog_tree["P-1"]) is None

    def test_catalog_ids_must_hold_strings(self, auth_client, catalog_tree):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "website", "catalog_ids": [1, 2], "async": True},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_type_must_be_a_list(self, auth_client, catalog_tree):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "all", "type": {"product": True}},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_product_requires_id(self, auth_client):
        response = auth_client.post(GENERATE_URL, {"scope": "product"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_generate_product(self, auth_client, catalog_tree):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "product", "id": "P-VIRT", "options": {"do_child_products": True}},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "success"
        assert data["num_processed"] == 3
        assert "main_content_id" in data
        assert alt_urls_of(catalog_tree["P-VAR-1"]) is not None

    def test_generate_unknown_product(self, auth_client, catalog_tree):
        response = auth_client.post(GENERATE_URL, {"scope": "product", "id": "NOPE"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["status"] == "error"

    def test_generate_website(self, auth_client, catalog_tree):
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "website", "web_site_id": "WebStore", "type": ["category"]},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["num_processed"] == 3
        assert alt_urls_of(catalog_tree["C-SHARED"]) is not None
        assert alt_urls_of(catalog_tree["P-1"]) is None

    def test_generate_website_async(self, auth_client, catalog_tree):
        """Queued runs execute eagerly under the test settings."""
        response = auth_client.post(
            GENERATE_URL,
            {"scope": "website", "catalog_ids": ["CAT-A"], "async": True},
            format="json",
        )

        assert response.status_code == status.HTTP_202_ACCEPTED
        data = response.json()
        assert data["status"] == "queued"
        assert data["task_id"]
        assert alt_urls_of(catalog_tree["P-2"]) is not None

    def test_generate_all(self, auth_client, catalog_tree):
        response = auth_client.post(GENERATE_URL, {"scope": "all"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["num_processed"] == 9


@pytest.mark.django_db
class TestGetAltUrlsEndpoint:
    """Tests for GET /api/v1/alt-urls/<kind>/<entity_id>/."""

    def test_returns_records(self, auth_client, catalog_tree):
        add_alt_urls(catalog_tree["P-1"], "en_US", "blue-shirt", {"fr_FR": "chemise-bleue"})

        response = auth_client.get(
            reverse("catalog_api:get_alt_urls", kwargs={"kind": "product", "entity_id": "P-1"})
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["main"]["text"] == "blue-shirt"
        assert data["alternates"][0]["locale"] == "fr_FR"

    def test_invalid_kind(self, auth_client):
        response = auth_client.get("/api/v1/alt-urls/brand/B-1/")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_entity(self, auth_client, catalog_tree):
        response = auth_client.get("/api/v1/alt-urls/category/NOPE/")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_entity_without_alt_urls(self, auth_client, catalog_tree):
        response = auth_client.get("/api/v1/alt-urls/category/C-ROOT-A/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "No alternative URLs" in response.json()["error"]
