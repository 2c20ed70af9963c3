"""
Pytest configuration and fixtures for the project-level test suite.
"""

import pytest


@pytest.fixture(scope="session")
def django_db_setup(django_db_blocker):
    """Configure the test database and run migrations."""
    from django.core.management import call_command

    with django_db_blocker.unblock():
        call_command("migrate", "--run-syncdb", verbosity=0)


@pytest.fixture(autouse=True)
def clear_cache():
    """Throttle counters and resolved names live in the cache."""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Create a test API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def api_user(db):
    """Create a staff user for authenticated API calls."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username="catalog-admin",
        password="not-a-secret",
        is_staff=True,
    )


@pytest.fixture
def auth_client(api_client, api_user):
    """API client authenticated as api_user."""
    api_client.force_authenticate(user=api_user)
    return api_client


@pytest.fixture
def catalog_tree(db):
    """The WebStore catalog DAG (see catalog.tests.builders)."""
    from catalog.tests.builders import build_catalog_tree

    return build_catalog_tree()
