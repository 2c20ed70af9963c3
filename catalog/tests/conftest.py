"""
Fixtures for the catalog app tests.
"""

import pytest
from django.core.cache import cache

from catalog.tests.builders import build_catalog_tree


@pytest.fixture(autouse=True)
def clear_cache():
    """Resolved names are cached across tests otherwise."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def catalog_tree(db):
    """The WebStore catalog DAG from builders.build_catalog_tree."""
    return build_catalog_tree()


@pytest.fixture
def sanitizer():
    from catalog.services.sanitizer import AltUrlSanitizer

    return AltUrlSanitizer()
