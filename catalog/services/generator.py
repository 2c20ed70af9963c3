"""
Alternative URL generator.

Regenerates the alternative URL records of every product and category a
traversal reaches: resolve the localized names, turn them into slugs and
reconcile the stored records against them.
"""

import logging
from typing import Dict, Optional, Tuple

from django.db import DatabaseError

from catalog.exceptions import AltUrlStorageError
from catalog.models import (
    CONTENT_LINK_MODELS,
    Category,
    EntityContentType,
    EntityKind,
    Product,
    content_links,
)
from catalog.services.name_resolver import ResolvedName, resolve_name
from catalog.services.reconciler import ReconcileResult, reconcile
from catalog.services.sanitizer import AltUrlSanitizer, get_alt_url_sanitizer
from catalog.services.stats import TraversalStats
from catalog.services.traversal import CatalogTraverser, GenerationConfig

logger = logging.getLogger(__name__)


class AltUrlGenerator(CatalogTraverser):
    """Traversal that regenerates alternative URLs."""

    def __init__(self, config: GenerationConfig, sanitizer: Optional[AltUrlSanitizer] = None):
        super().__init__(config)
        self.sanitizer = sanitizer or get_alt_url_sanitizer()
        # Lives as long as this run; a new run resolves names afresh
        self.name_memo: Dict[Tuple[str, str], ResolvedName] = {}

    def visit_product(self, product: Product) -> TraversalStats:
        return self.entity_stats(self.generate_entity(EntityKind.PRODUCT, product))

    def visit_category(self, category: Category) -> TraversalStats:
        return self.entity_stats(self.generate_entity(EntityKind.CATEGORY, category))

    @staticmethod
    def entity_stats(result: Optional[ReconcileResult]) -> TraversalStats:
        # One entity is one unit, however many locales changed
        if result is None:
            return TraversalStats(num_skipped=1)
        return TraversalStats(num_updated=1)

    def generate_entity(self, kind: str, entity) -> Optional[ReconcileResult]:
        """
        Regenerate the alternative URLs of one product or category.

        Args:
            kind: EntityKind value
            entity: Product or Category instance

        Returns:
            ReconcileResult, or None when the entity already has alternative
            URLs and replace_existing is off

        Raises:
            AltUrlValidationError: a name or URL record has no text body
            AltUrlStorageError: a write failed
        """
        config = self.config
        moment = config.moment

        link = content_links(kind, entity.pk, EntityContentType.ALTERNATIVE_URL, moment).first()
        if link is not None and not config.replace_existing:
            logger.debug(f"{kind} {entity.pk} already has alternative URLs, replace disabled")
            return None

        resolved = resolve_name(
            kind, entity, moment=moment, memo=self.name_memo if config.use_cache else None
        )

        locale_slug_map = self.sanitizer.slugs(resolved.locale_text_map, url_kind=kind)
        default_slug = self.sanitizer.slug(
            resolved.default_name, locale=resolved.default_locale, url_kind=kind
        )

        result = reconcile(
            link.content if link is not None else None,
            resolved.default_locale,
            default_slug,
            locale_slug_map,
            remove_old_locales=config.remove_old_locales,
            moment=moment,
        )

        if link is None:
            link_model, entity_field = CONTENT_LINK_MODELS[kind]
            try:
                link_model.objects.create(
                    **{entity_field: entity},
                    content=result.main_content,
                    content_type=EntityContentType.ALTERNATIVE_URL,
                    from_date=moment,
                )
            except DatabaseError as e:
                raise AltUrlStorageError(
                    f"Cannot link alternative URL content to {kind} {entity.pk}: {e}"
                ) from e

        logger.debug(
            f"Generated alternative URLs for {kind} {entity.pk}: "
            f"created={len(result.created)} updated={len(result.updated)} "
            f"deleted={len(result.deleted)}"
        )
        return result
