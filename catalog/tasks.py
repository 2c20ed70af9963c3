"""
Celery tasks for alternative URL generation.

- generate_website_alt_urls_task: Regenerate the catalogs of a web site or store
- generate_all_alt_urls_task: Regenerate every category and product
- export_alt_urls_from_config_task: Run the configured file exports

Each task runs one complete traversal inside a single transaction and
returns ServiceResult.to_dict().
"""

import logging
from typing import Any, Dict, List, Optional

from celery import shared_task
from django.db import transaction

from catalog.services.alt_urls import (
    export_alt_urls_from_config,
    generate_all_alt_urls,
    generate_website_alt_urls,
)

logger = logging.getLogger(__name__)


@shared_task(name="catalog.tasks.generate_website_alt_urls_task")
def generate_website_alt_urls_task(
    type_generate: Optional[List[str]] = None,
    web_site_id: Optional[str] = None,
    store_id: Optional[str] = None,
    catalog_ids: Optional[List[str]] = None,
    **options: Any,
) -> Dict[str, Any]:
    """
    Regenerate alternative URLs for the catalogs of a web site or store.

    Returns:
        ServiceResult as a dict
    """
    logger.info(f"Starting alternative URL generation for web site={web_site_id} store={store_id}")

    with transaction.atomic():
        result = generate_website_alt_urls(
            type_generate or ["all"],
            web_site_id=web_site_id,
            store_id=store_id,
            catalog_ids=catalog_ids,
            **options,
        )

    logger.info(f"Alternative URL generation task finished with status {result.status}")
    return result.to_dict()


@shared_task(name="catalog.tasks.generate_all_alt_urls_task")
def generate_all_alt_urls_task(type_generate: Optional[List[str]] = None, **options: Any) -> Dict[str, Any]:
    """Regenerate alternative URLs for the whole system."""
    logger.info("Starting system-wide alternative URL generation")

    with transaction.atomic():
        result = generate_all_alt_urls(type_generate or ["all"], **options)

    logger.info(f"System-wide alternative URL generation finished with status {result.status}")
    return result.to_dict()


@shared_task(name="catalog.tasks.export_alt_urls_from_config_task")
def export_alt_urls_from_config_task(config_names: Optional[List[str]] = None) -> Dict[str, Any]:
    """Run the ALT_URL_EXPORT_CONFIGS file exports."""
    result = export_alt_urls_from_config(config_names)
    logger.info(f"Alternative URL export: {result.message}")
    return result.to_dict()
