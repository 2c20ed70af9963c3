"""
Services module for catalog alternative URLs.

Contains:
- sanitizer: Name to slug conversion
- name_resolver: Localized name lookup for products and categories
- reconciler: Create / update / delete of alternative URL content
- traversal: Catalog hierarchy walk with deduplication and error isolation
- generator / exporter: Concrete traversals
- stats: Run counters and the service result contract
- alt_urls: Top-level operations
"""

from catalog.services.alt_urls import (
    export_all_alt_urls,
    export_alt_urls_from_config,
    export_alt_urls_to_file,
    export_website_alt_urls,
    generate_all_alt_urls,
    generate_category_alt_urls,
    generate_product_alt_urls,
    generate_website_alt_urls,
)
from catalog.services.exporter import AltUrlExporter, JsonLinesSink, ListSink
from catalog.services.generator import AltUrlGenerator
from catalog.services.sanitizer import AltUrlSanitizer, SanitizerOptions, get_alt_url_sanitizer
from catalog.services.stats import ResultStatus, ServiceResult, TraversalStats
from catalog.services.traversal import CatalogTraverser, GenerationConfig, get_target_catalogs

__all__ = [
    "export_all_alt_urls",
    "export_alt_urls_from_config",
    "export_alt_urls_to_file",
    "export_website_alt_urls",
    "generate_all_alt_urls",
    "generate_category_alt_urls",
    "generate_product_alt_urls",
    "generate_website_alt_urls",
    "AltUrlExporter",
    "JsonLinesSink",
    "ListSink",
    "AltUrlGenerator",
    "AltUrlSanitizer",
    "SanitizerOptions",
    "get_alt_url_sanitizer",
    "ResultStatus",
    "ServiceResult",
    "TraversalStats",
    "CatalogTraverser",
    "GenerationConfig",
    "get_target_catalogs",
]
