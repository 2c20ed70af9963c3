"""
Alternative URL service operations.

Entry points used by the management commands, Celery tasks and REST API.
Every operation returns a ServiceResult:

- success: the run completed without entity errors
- failure: the run completed, some entities failed (num_error > 0)
- error: the run could not be carried out
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from django.conf import settings
from django.db import DatabaseError, transaction

from catalog.exceptions import AltUrlError, EntityNotFoundError, TraversalConfigError
from catalog.models import ENTITY_MODELS, Category, EntityKind, Product
from catalog.services.exporter import AltUrlExporter, JsonLinesSink
from catalog.services.generator import AltUrlGenerator
from catalog.services.stats import ResultStatus, ServiceResult, TraversalStats
from catalog.services.traversal import GenerationConfig, get_target_catalogs

logger = logging.getLogger(__name__)

SCOPE_WEBSITE = "website"
SCOPE_ALL = "all"


def get_entity(kind: str, entity_or_id):
    """
    Return the entity instance for an instance or an id.

    Raises:
        EntityNotFoundError: no entity has the given id
    """
    model = ENTITY_MODELS[kind]
    if isinstance(entity_or_id, model):
        return entity_or_id
    entity = model.objects.filter(pk=entity_or_id).first()
    if entity is None:
        raise EntityNotFoundError(kind, entity_or_id)
    return entity


# ============================================================
# Generation
# ============================================================


def _aborted(message: str, stats: TraversalStats) -> ServiceResult:
    """Error result for a run cut short, keeping the counts reached so far."""
    result = stats.to_result(message)
    result.status = ResultStatus.ERROR
    result.num_error += 1
    return result


def _generate_single(kind: str, entity_or_id, options: Dict[str, Any]) -> ServiceResult:
    try:
        config = GenerationConfig.from_options(**options)
        entity = get_entity(kind, entity_or_id)
    except AltUrlError as e:
        logger.error(f"Cannot generate alternative URLs for {kind}: {e}")
        return ServiceResult.error(str(e))

    generator = AltUrlGenerator(config)
    try:
        with transaction.atomic():
            reconciled = generator.generate_entity(kind, entity)
    except Exception as e:
        message = f"Error while generating alternative links: {e}"
        logger.exception(f"{kind} {entity.pk}: {message}")
        return ServiceResult.error(message, num_error=1)

    stats = AltUrlGenerator.entity_stats(reconciled)
    stats.num_processed = 1

    if kind == EntityKind.PRODUCT:
        generator.visited.add((kind, entity.pk))
        try:
            stats.add(generator.traverse_variants(entity))
        except DatabaseError as e:
            message = f"Error while generating alternative links for variants of {entity.pk}: {e}"
            logger.exception(message)
            stats.add(generator.stats)
            return _aborted(message, stats)

    result = stats.to_result(
        f"Alternative URL generation for {kind} '{entity.pk}' finished. {stats.to_message()}"
    )
    if reconciled is not None:
        result.main_content_id = reconciled.main_content.pk
    return result


def generate_product_alt_urls(product: Union[Product, str], **options: Any) -> ServiceResult:
    """
    Regenerate the alternative URLs of one product.

    With do_child_products=True the variants of a virtual product are
    regenerated as well.

    Args:
        product: Product instance or product id
        **options: GenerationConfig options
    """
    return _generate_single(EntityKind.PRODUCT, product, options)


def generate_category_alt_urls(category: Union[Category, str], **options: Any) -> ServiceResult:
    """Regenerate the alternative URLs of one category."""
    return _generate_single(EntityKind.CATEGORY, category, options)


def generate_website_alt_urls(
    type_generate: Iterable[str],
    web_site_id: Optional[str] = None,
    store_id: Optional[str] = None,
    catalog_id: Optional[str] = None,
    catalog_ids: Optional[Iterable[str]] = None,
    locale: Optional[str] = None,
    **options: Any,
) -> ServiceResult:
    """
    Regenerate alternative URLs for the catalogs of a web site or store.

    Variants are always included, since category membership does not reach
    them.

    Args:
        type_generate: Collection of "product", "category", "all"
        web_site_id: Web site whose store supplies the catalogs
        store_id: Store that supplies the catalogs
        catalog_id: Single catalog ("all" means not given)
        catalog_ids: Explicit catalog ids
        locale: Locale for the result message
        **options: GenerationConfig options
    """
    try:
        config = GenerationConfig.from_options(type_generate, **options).with_overrides(
            do_child_products=True
        )
        generator = AltUrlGenerator(config)
        catalogs = get_target_catalogs(catalog_id, catalog_ids, store_id, web_site_id, config.moment)
    except AltUrlError as e:
        message = f"Error preparing to generate alternative links: {e}"
        logger.error(message)
        return ServiceResult.error(message)

    try:
        stats = generator.traverse_catalogs_depth_first(catalogs)
    except DatabaseError as e:
        message = f"Error while generating alternative links: {e}"
        logger.exception(message)
        return _aborted(message, generator.stats)

    target = web_site_id or store_id or ", ".join(c.pk for c in catalogs)
    message = f"Alternative URL generation for website '{target}' finished. {stats.to_message(locale)}"
    logger.info(message)
    return stats.to_result(message)


def generate_all_alt_urls(
    type_generate: Iterable[str],
    locale: Optional[str] = None,
    **options: Any,
) -> ServiceResult:
    """Regenerate alternative URLs for every category and product in the system."""
    try:
        config = GenerationConfig.from_options(type_generate, **options).with_overrides(
            do_child_products=False
        )
    except AltUrlError as e:
        message = f"Error preparing to generate alternative links: {e}"
        logger.error(message)
        return ServiceResult.error(message)

    generator = AltUrlGenerator(config)
    try:
        stats = generator.traverse_all_in_system()
    except DatabaseError as e:
        message = f"Error while generating alternative links: {e}"
        logger.exception(message)
        return _aborted(message, generator.stats)

    message = f"System-wide alternative URL generation finished. {stats.to_message(locale)}"
    logger.info(message)
    return stats.to_result(message)


# ============================================================
# Export
# ============================================================


def export_website_alt_urls(
    sink,
    type_export: Iterable[str],
    web_site_id: Optional[str] = None,
    store_id: Optional[str] = None,
    catalog_id: Optional[str] = None,
    catalog_ids: Optional[Iterable[str]] = None,
    locale: Optional[str] = None,
    **options: Any,
) -> ServiceResult:
    """
    Write the current alternative URLs of a web site's catalogs to a sink.

    The sink is flushed once when the run ends, whatever the outcome.
    """
    try:
        config = GenerationConfig.from_options(type_export, **options).with_overrides(
            do_child_products=True
        )
        exporter = AltUrlExporter(config, sink)
        catalogs = get_target_catalogs(catalog_id, catalog_ids, store_id, web_site_id, config.moment)
        stats = exporter.traverse_catalogs_depth_first(catalogs)
    except (AltUrlError, DatabaseError) as e:
        message = f"Error while exporting alternative URLs: {e}"
        logger.error(message)
        return ServiceResult.error(message)
    finally:
        sink.flush()

    message = f"Exported alternative URLs: {stats.to_message(locale)}"
    logger.info(message)
    return stats.to_result(message)


def export_all_alt_urls(
    sink,
    type_export: Iterable[str],
    locale: Optional[str] = None,
    **options: Any,
) -> ServiceResult:
    """Write the current alternative URLs of every category and product to a sink."""
    try:
        config = GenerationConfig.from_options(type_export, **options).with_overrides(
            do_child_products=False
        )
        stats = AltUrlExporter(config, sink).traverse_all_in_system()
    except (AltUrlError, DatabaseError) as e:
        message = f"Error while exporting alternative URLs: {e}"
        logger.error(message)
        return ServiceResult.error(message)
    finally:
        sink.flush()

    message = f"Exported alternative URLs: {stats.to_message(locale)}"
    logger.info(message)
    return stats.to_result(message)


def export_alt_urls_to_file(
    out_file: Union[str, Path],
    type_export: Iterable[str],
    scope: str = SCOPE_WEBSITE,
    line_prefix: str = "",
    **kwargs: Any,
) -> ServiceResult:
    """
    Export alternative URLs to a JSON Lines file.

    Args:
        out_file: Destination path; parent directories are created
        type_export: Collection of "product", "category", "all"
        scope: "website" for a catalog walk, "all" for a whole-system scan
        line_prefix: Text prepended to every line
        **kwargs: Arguments of export_website_alt_urls / export_all_alt_urls
    """
    if scope not in (SCOPE_WEBSITE, SCOPE_ALL):
        return ServiceResult.error(f"Unknown export scope: {scope}")

    path = Path(out_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as stream:
            sink = JsonLinesSink(stream, line_prefix=line_prefix)
            if scope == SCOPE_ALL:
                result = export_all_alt_urls(sink, type_export, **kwargs)
            else:
                result = export_website_alt_urls(sink, type_export, **kwargs)
    except OSError as e:
        message = f"Error exporting alternative URLs: {e}"
        logger.error(message)
        return ServiceResult.error(message)

    if not result.is_error:
        logger.info(f"Exported alternative URL file: {path}")
    return result


def get_export_config(name: str) -> Dict[str, Any]:
    """
    Look up a named entry of the ALT_URL_EXPORT_CONFIGS setting.

    Raises:
        TraversalConfigError: no entry has that name
    """
    configs = getattr(settings, "ALT_URL_EXPORT_CONFIGS", {}) or {}
    if name not in configs:
        raise TraversalConfigError(f"Could not read export config '{name}'")
    return dict(configs[name])


def export_alt_urls_from_config(
    config_names: Optional[Iterable[str]] = None,
    **options: Any,
) -> ServiceResult:
    """
    Run one file export per named ALT_URL_EXPORT_CONFIGS entry.

    Each entry may hold: file (required, relative to ALT_URL_EXPORT_DIR),
    scope, type, web_site_id, store_id, catalog_id, catalog_ids,
    line_prefix and options (GenerationConfig options, overriding the
    ones passed here).

    Args:
        config_names: Entries to run; all entries when empty
        **options: GenerationConfig options applied to every entry

    Returns:
        success when every export succeeded, failure when some completed
        with entity errors, error as soon as one export could not run
    """
    config_names = list(config_names or [])
    if not config_names:
        config_names = list((getattr(settings, "ALT_URL_EXPORT_CONFIGS", {}) or {}).keys())
        logger.info(f"No export config names given, running all configs: {config_names}")

    export_dir = Path(getattr(settings, "ALT_URL_EXPORT_DIR", "exports"))
    succeeded = 0
    failed = 0

    for name in config_names:
        try:
            conf = get_export_config(name)
            out_file = conf.pop("file")
        except (AltUrlError, KeyError) as e:
            message = f"Error exporting alternative URLs for config '{name}': {e}"
            logger.error(message)
            return ServiceResult.error(message)

        result = export_alt_urls_to_file(
            export_dir / out_file,
            conf.pop("type", ["all"]),
            scope=conf.pop("scope", SCOPE_WEBSITE),
            line_prefix=conf.pop("line_prefix", ""),
            **{**options, **conf.pop("options", {}), **conf},
        )
        if result.is_error:
            message = f"Error exporting alternative URLs for config '{name}': {result.message}"
            logger.error(message)
            return ServiceResult.error(message)
        if result.status == ResultStatus.FAILURE:
            failed += 1
        else:
            succeeded += 1

    message = f"Export configs succeeded: {succeeded}; failed: {failed}"
    logger.info(message)
    return ServiceResult(
        status=ResultStatus.FAILURE if failed else ResultStatus.SUCCESS,
        message=message,
    )
