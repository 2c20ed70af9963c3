"""
Django models for the catalog and its localized content.

Models: Catalog, Category, Product, Store, WebSite, StoreCatalog,
        CatalogCategory, CategoryRollup, CategoryMember, ProductVariantAssoc,
        Content, ContentAssoc, ProductContent, CategoryContent

The catalog hierarchy is a DAG: a category may belong to several catalogs or
parent categories and a product may be a member of several categories. Every
relation carries a validity window [from_date, thru_date); a record is
"current" at a moment when that moment falls inside the window.
"""

from django.db import models
from django.db.models import Q
from django.utils import timezone

from catalog.exceptions import AltUrlValidationError


class EntityKind(models.TextChoices):
    """Kinds of catalog entities that carry alternative URLs."""

    PRODUCT = "product", "Product"
    CATEGORY = "category", "Category"


class EntityContentType(models.TextChoices):
    """Roles a content record can play for a product or category."""

    NAME = "name", "Name"
    ALTERNATIVE_URL = "alternative_url", "Alternative URL"


class ContentAssocType(models.TextChoices):
    """Types of content-to-content associations."""

    ALTERNATE_LOCALE = "alternate_locale", "Alternate Locale"


# ============================================================
# Validity windows
# ============================================================


class ValidityQuerySet(models.QuerySet):
    """QuerySet for records with a [from_date, thru_date) validity window."""

    def current(self, moment=None):
        """Filter to records valid at the given moment (defaults to now)."""
        if moment is None:
            moment = timezone.now()
        return self.filter(from_date__lte=moment).filter(
            Q(thru_date__isnull=True) | Q(thru_date__gt=moment)
        )


class DatedRelation(models.Model):
    """Abstract base for relations that are only valid for a period of time."""

    from_date = models.DateTimeField(default=timezone.now)
    thru_date = models.DateTimeField(null=True, blank=True)

    objects = ValidityQuerySet.as_manager()

    class Meta:
        abstract = True

    def is_current(self, moment=None) -> bool:
        """Check if the relation is valid at the given moment."""
        if moment is None:
            moment = timezone.now()
        if self.from_date > moment:
            return False
        return self.thru_date is None or self.thru_date > moment


# ============================================================
# Catalog entities
# ============================================================


class Catalog(models.Model):
    """A product catalog: the root of a category tree."""

    id = models.CharField(max_length=60, primary_key=True)
    name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "catalogs"
        ordering = ["id"]

    def __str__(self):
        return self.name or self.id


class Category(models.Model):
    """
    A product category.

    `name` is the optional direct name; localized names are attached through
    CategoryContent records of type NAME.
    """

    id = models.CharField(max_length=60, primary_key=True)
    name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    def save(self, *args, **kwargs):
        self.updated_at = timezone.now()
        super().save(*args, **kwargs)

    class Meta:
        db_table = "categories"
        ordering = ["id"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name or self.id


class Product(models.Model):
    """
    A catalog product.

    Virtual products own variants through ProductVariantAssoc; a variant with
    no name content of its own borrows its parent's name texts.
    """

    id = models.CharField(max_length=60, primary_key=True)
    name = models.CharField(max_length=255, blank=True, default="")
    is_variant = models.BooleanField(default=False, db_index=True)
    is_virtual = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    def save(self, *args, **kwargs):
        self.updated_at = timezone.now()
        super().save(*args, **kwargs)

    class Meta:
        db_table = "products"
        ordering = ["id"]

    def __str__(self):
        return self.name or self.id


class Store(models.Model):
    """A store that publishes one or more catalogs."""

    id = models.CharField(max_length=60, primary_key=True)
    name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "stores"
        ordering = ["id"]

    def __str__(self):
        return self.name or self.id


class WebSite(models.Model):
    """A web site front end; its store decides which catalogs it shows."""

    id = models.CharField(max_length=60, primary_key=True)
    name = models.CharField(max_length=255, blank=True, default="")
    store = models.ForeignKey(
        Store,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="web_sites",
    )

    class Meta:
        db_table = "web_sites"
        ordering = ["id"]

    def __str__(self):
        return self.name or self.id


# ============================================================
# Hierarchy relations
# ============================================================


class StoreCatalog(DatedRelation):
    """Assigns a catalog to a store."""

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="catalog_links")
    catalog = models.ForeignKey(Catalog, on_delete=models.CASCADE, related_name="store_links")
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "store_catalogs"
        indexes = [models.Index(fields=["store", "from_date"], name="store_catalog_store_idx")]

    def __str__(self):
        return f"{self.store_id} -> {self.catalog_id}"


class CatalogCategory(DatedRelation):
    """A top-level category of a catalog."""

    catalog = models.ForeignKey(Catalog, on_delete=models.CASCADE, related_name="category_links")
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="catalog_links")
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "catalog_categories"
        indexes = [models.Index(fields=["catalog", "from_date"], name="catalog_category_catalog_idx")]

    def __str__(self):
        return f"{self.catalog_id} -> {self.category_id}"


class CategoryRollup(DatedRelation):
    """Parent/child edge between categories."""

    parent = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="child_links")
    child = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="parent_links")
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "category_rollups"
        indexes = [models.Index(fields=["parent", "from_date"], name="category_rollup_parent_idx")]

    def __str__(self):
        return f"{self.parent_id} -> {self.child_id}"


class CategoryMember(DatedRelation):
    """Membership of a product in a category."""

    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="member_links")
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="category_links")
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "category_members"
        indexes = [models.Index(fields=["category", "from_date"], name="category_member_category_idx")]

    def __str__(self):
        return f"{self.category_id} -> {self.product_id}"


class ProductVariantAssoc(DatedRelation):
    """Links a virtual product to one of its variants."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="variant_links")
    variant = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="parent_links")
    sequence_num = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "product_variant_assocs"
        indexes = [
            models.Index(fields=["product", "from_date"], name="variant_assoc_product_idx"),
            models.Index(fields=["variant", "from_date"], name="variant_assoc_variant_idx"),
        ]

    def __str__(self):
        return f"{self.product_id} -> {self.variant_id}"


# ============================================================
# Localized content
# ============================================================


class Content(models.Model):
    """
    A localized simple-text record.

    Used both for entity names and for alternative URL slugs. `text_data` is
    the text body; a record whose body is missing is invalid and cannot be
    read or updated.
    """

    locale = models.CharField(max_length=20, null=True, blank=True, db_index=True)
    text_data = models.TextField(null=True, blank=True)
    description = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    def save(self, *args, **kwargs):
        self.updated_at = timezone.now()
        super().save(*args, **kwargs)

    class Meta:
        db_table = "contents"

    def __str__(self):
        return f"Content {self.pk} [{self.locale or '-'}]"

    def require_text(self) -> str:
        """Return the text body, failing if the record has none."""
        if self.text_data is None:
            raise AltUrlValidationError(
                f"Simple text content '{self.pk}' has no text body"
            )
        return self.text_data

    def alternate_locale_assocs(self, moment=None):
        """Current ALTERNATE_LOCALE associations pointing away from this record."""
        return (
            ContentAssoc.objects.current(moment)
            .filter(content=self, assoc_type=ContentAssocType.ALTERNATE_LOCALE)
            .select_related("content_to")
            .order_by("from_date", "id")
        )


class ContentAssoc(DatedRelation):
    """Directed association between two content records."""

    content = models.ForeignKey(Content, on_delete=models.CASCADE, related_name="assocs_from")
    content_to = models.ForeignKey(Content, on_delete=models.CASCADE, related_name="assocs_to")
    assoc_type = models.CharField(
        max_length=30,
        choices=ContentAssocType.choices,
        default=ContentAssocType.ALTERNATE_LOCALE,
    )

    class Meta:
        db_table = "content_assocs"
        indexes = [models.Index(fields=["content", "assoc_type"], name="content_assoc_content_idx")]

    def __str__(self):
        return f"{self.content_id} -[{self.assoc_type}]-> {self.content_to_id}"


class ProductContent(DatedRelation):
    """Attaches a content record to a product in a given role."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="content_links")
    content = models.ForeignKey(Content, on_delete=models.CASCADE, related_name="product_links")
    content_type = models.CharField(max_length=30, choices=EntityContentType.choices)

    class Meta:
        db_table = "product_contents"
        indexes = [models.Index(fields=["product", "content_type"], name="product_content_product_idx")]

    def __str__(self):
        return f"{self.product_id} [{self.content_type}] {self.content_id}"


class CategoryContent(DatedRelation):
    """Attaches a content record to a category in a given role."""

    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="content_links")
    content = models.ForeignKey(Content, on_delete=models.CASCADE, related_name="category_links")
    content_type = models.CharField(max_length=30, choices=EntityContentType.choices)

    class Meta:
        db_table = "category_contents"
        indexes = [models.Index(fields=["category", "content_type"], name="category_content_category_idx")]

    def __str__(self):
        return f"{self.category_id} [{self.content_type}] {self.content_id}"


ENTITY_MODELS = {
    EntityKind.PRODUCT: Product,
    EntityKind.CATEGORY: Category,
}

# Content link model and its entity foreign key field, per entity kind
CONTENT_LINK_MODELS = {
    EntityKind.PRODUCT: (ProductContent, "product"),
    EntityKind.CATEGORY: (CategoryContent, "category"),
}


def content_links(kind, entity_id, content_type, moment=None):
    """Current content links of the given type for one entity."""
    link_model, entity_field = CONTENT_LINK_MODELS[kind]
    return (
        link_model.objects.current(moment)
        .filter(**{f"{entity_field}_id": entity_id, "content_type": content_type})
        .select_related("content")
        .order_by("from_date", "id")
    )
