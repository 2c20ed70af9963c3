"""
Catalog traversal engine.

Walks the catalog hierarchy and hands every reachable category and product
to a visitor exactly once per run.

Modes:
- Hierarchical: catalog -> top categories (sequence order) -> category
  members -> variants of virtual products -> sub-categories, depth first.
- Whole-system: every category, then every product, in id order. Variant
  descent is disabled because the product scan already reaches variants.

Each entity is processed inside its own savepoint. An error in one entity
is logged and counted; siblings and ancestors keep going. Only failure to
resolve the traversal roots aborts a run.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Callable, FrozenSet, Iterable, List, Optional, Set, Tuple

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from catalog.exceptions import TraversalConfigError
from catalog.models import (
    Catalog,
    CatalogCategory,
    Category,
    CategoryMember,
    CategoryRollup,
    EntityKind,
    Product,
    ProductVariantAssoc,
    Store,
    StoreCatalog,
    WebSite,
)
from catalog.services.stats import TraversalStats

logger = logging.getLogger(__name__)

TYPE_ALL = "all"
TYPE_CHOICES = (EntityKind.PRODUCT.value, EntityKind.CATEGORY.value, TYPE_ALL)

SCAN_BATCH_SIZE = 500


def parse_entity_types(entity_types: Optional[Iterable[str]]) -> Tuple[bool, bool]:
    """
    Decode a type_generate / type_export collection.

    Returns:
        (do_product, do_category)

    Raises:
        TraversalConfigError: an unknown type name was given
    """
    if isinstance(entity_types, str):
        entity_types = [entity_types]
    entity_types = set(entity_types or [])

    unknown = entity_types - set(TYPE_CHOICES)
    if unknown:
        raise TraversalConfigError(
            f"Unknown entity type(s): {', '.join(sorted(unknown))}; "
            f"expected one of {', '.join(TYPE_CHOICES)}"
        )

    do_all = TYPE_ALL in entity_types
    return (
        do_all or EntityKind.PRODUCT in entity_types,
        do_all or EntityKind.CATEGORY in entity_types,
    )


@dataclass(frozen=True)
class GenerationConfig:
    """
    Validated options of one generation or export run.

    Attributes:
        replace_existing: Regenerate entities that already have alternative URLs
        remove_old_locales: Delete alternate records for locales no longer named
        do_product: Visit products
        do_category: Visit categories
        do_child_products: Descend into variants of virtual products
        include_variant: Include variants when descending into child products
        prevent_duplicates: Visit each entity at most once per run
        use_cache: Memoize resolved names for the length of one run
        moment: Timestamp deciding which records are current
    """

    replace_existing: bool = True
    remove_old_locales: bool = True
    do_product: bool = True
    do_category: bool = True
    do_child_products: bool = False
    include_variant: bool = True
    prevent_duplicates: bool = True
    use_cache: bool = False
    moment: datetime = field(default_factory=timezone.now)

    @classmethod
    def option_names(cls) -> FrozenSet[str]:
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_options(cls, entity_types: Optional[Iterable[str]] = None, **options: Any) -> "GenerationConfig":
        """
        Build a config from keyword options over the ALT_URL_DEFAULTS setting.

        Args:
            entity_types: Collection of "product", "category", "all"; when
                given it decides do_product / do_category
            **options: Any GenerationConfig field

        Raises:
            TraversalConfigError: unknown option, option of the wrong type,
                or unknown entity type
        """
        known = cls.option_names()

        defaults = {
            key.lower(): value
            for key, value in (getattr(settings, "ALT_URL_DEFAULTS", {}) or {}).items()
        }
        unknown = (set(defaults) | set(options)) - known
        if unknown:
            raise TraversalConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        values = {**defaults, **options}
        if entity_types is not None:
            values["do_product"], values["do_category"] = parse_entity_types(entity_types)
        if values.get("moment") is None:
            values.pop("moment", None)

        for name, value in values.items():
            expected = datetime if name == "moment" else bool
            if not isinstance(value, expected):
                raise TraversalConfigError(
                    f"Option '{name}' must be a {expected.__name__}, got {type(value).__name__}"
                )

        return cls(**values)

    def with_overrides(self, **changes: Any) -> "GenerationConfig":
        return replace(self, **changes)


def get_target_catalogs(
    catalog_id: Optional[str] = None,
    catalog_ids: Optional[Iterable[str]] = None,
    store_id: Optional[str] = None,
    web_site_id: Optional[str] = None,
    moment=None,
) -> List[Catalog]:
    """
    Resolve the catalogs a hierarchical traversal starts from.

    Explicit catalog ids win ("all" as the single catalog id counts as not
    given). Otherwise the store, given directly or through the web site,
    supplies its current catalogs in sequence order.

    Raises:
        TraversalConfigError: unknown id, or nothing to traverse
    """
    if catalog_id == TYPE_ALL:
        catalog_id = None

    requested = []
    if catalog_id:
        requested.append(catalog_id)
    for cid in catalog_ids or []:
        if cid and cid not in requested:
            requested.append(cid)

    if requested:
        found = {catalog.pk: catalog for catalog in Catalog.objects.filter(pk__in=requested)}
        missing = [cid for cid in requested if cid not in found]
        if missing:
            raise TraversalConfigError(f"Catalog not found for ID: {', '.join(missing)}")
        return [found[cid] for cid in requested]

    if not store_id and web_site_id:
        web_site = WebSite.objects.filter(pk=web_site_id).first()
        if web_site is None:
            raise TraversalConfigError(f"Web site not found for ID: {web_site_id}")
        store_id = web_site.store_id
        if not store_id:
            raise TraversalConfigError(f"Web site '{web_site_id}' has no store")

    if not store_id:
        raise TraversalConfigError(
            "No catalogs to traverse: give a catalog, a store or a web site"
        )

    if not Store.objects.filter(pk=store_id).exists():
        raise TraversalConfigError(f"Store not found for ID: {store_id}")

    catalogs = [
        link.catalog
        for link in StoreCatalog.objects.current(moment)
        .filter(store_id=store_id)
        .select_related("catalog")
        .order_by("sequence_num", "id")
    ]
    if not catalogs:
        raise TraversalConfigError(f"Store '{store_id}' has no current catalogs")
    return catalogs


class CatalogTraverser:
    """
    Base class for catalog walks.

    Subclasses implement visit_product and visit_category; each returns a
    TraversalStats holding the entity's updated / skipped counts (the
    traverser itself counts processed entities and errors).
    """

    def __init__(self, config: GenerationConfig):
        self.config = config
        self.stats = TraversalStats()
        self.visited: Set[Tuple[str, str]] = set()

    def visit_product(self, product: Product) -> TraversalStats:
        raise NotImplementedError

    def visit_category(self, category: Category) -> TraversalStats:
        raise NotImplementedError

    # ----------------------------------------------------------------
    # Entry points
    # ----------------------------------------------------------------

    def traverse_catalogs_depth_first(self, catalogs: Iterable[Catalog]) -> TraversalStats:
        """Walk the given catalogs top down."""
        for catalog in catalogs:
            logger.info(f"Traversing catalog {catalog.pk}")
            for category in self._top_categories(catalog):
                self._traverse_category(category, path=frozenset())
        return self.stats

    def traverse_all_in_system(self) -> TraversalStats:
        """Scan every category, then every product, in id order."""
        if self.config.do_child_products:
            self.config = self.config.with_overrides(do_child_products=False)

        if self.config.do_category:
            for category in self._scan(Category):
                if self._mark_visited(EntityKind.CATEGORY, category.pk, counts=True):
                    self._process(EntityKind.CATEGORY, category, self.visit_category)

        if self.config.do_product:
            for product in self._scan(Product):
                if self._mark_visited(EntityKind.PRODUCT, product.pk, counts=True):
                    self._process(EntityKind.PRODUCT, product, self.visit_product)

        return self.stats

    def traverse_products(self, products: Iterable[Product]) -> TraversalStats:
        """Process the given products (and their variants if configured)."""
        for product in products:
            self._traverse_product(product)
        return self.stats

    def traverse_variants(self, product: Product) -> TraversalStats:
        """Process the current variants of a virtual product."""
        if self.config.do_child_products and self.config.include_variant and product.is_virtual:
            for variant in self._variants(product):
                self._traverse_product(variant)
        return self.stats

    # ----------------------------------------------------------------
    # Walk
    # ----------------------------------------------------------------

    def _traverse_category(self, category: Category, path: FrozenSet[str]) -> None:
        if category.pk in path:
            logger.warning(f"Category cycle detected at {category.pk}, not descending again")
            return

        if not self._mark_visited(EntityKind.CATEGORY, category.pk, counts=self.config.do_category):
            return

        if self.config.do_category:
            self._process(EntityKind.CATEGORY, category, self.visit_category)

        if self.config.do_product:
            for product in self._members(category):
                self._traverse_product(product)

        path = path | {category.pk}
        for child in self._children(category):
            self._traverse_category(child, path)

    def _traverse_product(self, product: Product) -> None:
        if not self._mark_visited(EntityKind.PRODUCT, product.pk, counts=True):
            return

        self._process(EntityKind.PRODUCT, product, self.visit_product)
        self.traverse_variants(product)

    def _mark_visited(self, kind: str, entity_id: str, counts: bool) -> bool:
        """
        Record an encounter. Returns False when the entity was already seen
        and duplicates are prevented; the repeat counts as a skip if `counts`.
        """
        key = (kind, entity_id)
        if self.config.prevent_duplicates and key in self.visited:
            logger.debug(f"Skipping duplicate {kind} {entity_id}")
            if counts:
                self.stats.num_skipped += 1
            return False
        self.visited.add(key)
        return True

    def _process(self, kind: str, entity, visit: Callable[[Any], TraversalStats]) -> None:
        self.stats.num_processed += 1
        try:
            with transaction.atomic():
                outcome = visit(entity)
        except Exception as e:
            logger.exception(f"Error processing {kind} {entity.pk}: {e}")
            self.stats.num_error += 1
            return
        self.stats.num_updated += outcome.num_updated
        self.stats.num_skipped += outcome.num_skipped
        self.stats.num_error += outcome.num_error

    # ----------------------------------------------------------------
    # Hierarchy queries
    # ----------------------------------------------------------------

    def _scan(self, model, batch_size: int = SCAN_BATCH_SIZE):
        """Yield every row of an entity table in id order, one batch at a time."""
        last_id = None
        while True:
            queryset = model.objects.order_by("id")
            if last_id is not None:
                queryset = queryset.filter(id__gt=last_id)
            batch = list(queryset[:batch_size])
            if not batch:
                return
            yield from batch
            last_id = batch[-1].pk

    def _top_categories(self, catalog: Catalog) -> List[Category]:
        return [
            link.category
            for link in CatalogCategory.objects.current(self.config.moment)
            .filter(catalog=catalog)
            .select_related("category")
            .order_by("sequence_num", "id")
        ]

    def _members(self, category: Category) -> List[Product]:
        return [
            link.product
            for link in CategoryMember.objects.current(self.config.moment)
            .filter(category=category)
            .select_related("product")
            .order_by("sequence_num", "id")
        ]

    def _children(self, category: Category) -> List[Category]:
        return [
            link.child
            for link in CategoryRollup.objects.current(self.config.moment)
            .filter(parent=category)
            .select_related("child")
            .order_by("sequence_num", "id")
        ]

    def _variants(self, product: Product) -> List[Product]:
        return [
            link.variant
            for link in ProductVariantAssoc.objects.current(self.config.moment)
            .filter(product=product)
            .select_related("variant")
            .order_by("sequence_num", "id")
        ]
