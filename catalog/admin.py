"""
Django admin configuration for catalog and content models.

Provides management of the catalog hierarchy and of name / alternative URL
content, with actions to regenerate alternative URLs from the admin.
"""

from django.contrib import admin, messages
from django.db import transaction

from catalog.models import (
    Catalog,
    CatalogCategory,
    Category,
    CategoryContent,
    CategoryMember,
    CategoryRollup,
    Content,
    ContentAssoc,
    Product,
    ProductContent,
    ProductVariantAssoc,
    Store,
    StoreCatalog,
    WebSite,
)
from catalog.services.alt_urls import generate_category_alt_urls, generate_product_alt_urls
from catalog.services.stats import ResultStatus


def _report_results(modeladmin, request, results):
    """Summarize per-entity generation results in one admin message."""
    failed = [result for result in results if result.status != ResultStatus.SUCCESS]
    for result in failed:
        modeladmin.message_user(request, result.message, level=messages.ERROR)
    modeladmin.message_user(
        request,
        f"Regenerated alternative URLs for {len(results) - len(failed)} of {len(results)} item(s).",
    )


class CatalogCategoryInline(admin.TabularInline):
    model = CatalogCategory
    extra = 0
    autocomplete_fields = ["category"]


class StoreCatalogInline(admin.TabularInline):
    model = StoreCatalog
    extra = 0


class CategoryRollupInline(admin.TabularInline):
    model = CategoryRollup
    fk_name = "parent"
    extra = 0
    autocomplete_fields = ["child"]
    verbose_name = "sub-category"


class CategoryMemberInline(admin.TabularInline):
    model = CategoryMember
    extra = 0
    autocomplete_fields = ["product"]


class CategoryContentInline(admin.TabularInline):
    model = CategoryContent
    extra = 0
    raw_id_fields = ["content"]


class ProductContentInline(admin.TabularInline):
    model = ProductContent
    extra = 0
    raw_id_fields = ["content"]


class ProductVariantInline(admin.TabularInline):
    model = ProductVariantAssoc
    fk_name = "product"
    extra = 0
    autocomplete_fields = ["variant"]
    verbose_name = "variant"


class ContentAssocInline(admin.TabularInline):
    model = ContentAssoc
    fk_name = "content"
    extra = 0
    raw_id_fields = ["content_to"]


@admin.register(Catalog)
class CatalogAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "created_at"]
    search_fields = ["id", "name"]
    inlines = [CatalogCategoryInline]


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ["id", "name"]
    search_fields = ["id", "name"]
    inlines = [StoreCatalogInline]


@admin.register(WebSite)
class WebSiteAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "store"]
    search_fields = ["id", "name"]
    list_select_related = ["store"]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "updated_at"]
    search_fields = ["id", "name"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [CategoryRollupInline, CategoryMemberInline, CategoryContentInline]
    actions = ["regenerate_alt_urls"]

    @admin.action(description="Regenerate alternative URLs")
    def regenerate_alt_urls(self, request, queryset):
        with transaction.atomic():
            results = [generate_category_alt_urls(category) for category in queryset]
        _report_results(self, request, results)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products, with variant and content links."""

    list_display = ["id", "name", "is_virtual", "is_variant", "updated_at"]
    list_filter = ["is_virtual", "is_variant"]
    search_fields = ["id", "name"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [ProductVariantInline, ProductContentInline]
    actions = ["regenerate_alt_urls"]

    @admin.action(description="Regenerate alternative URLs (including variants)")
    def regenerate_alt_urls(self, request, queryset):
        with transaction.atomic():
            results = [
                generate_product_alt_urls(product, do_child_products=True)
                for product in queryset
            ]
        _report_results(self, request, results)


@admin.register(Content)
class ContentAdmin(admin.ModelAdmin):
    list_display = ["id", "locale", "text_data", "description", "updated_at"]
    list_filter = ["locale", "description"]
    search_fields = ["text_data"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [ContentAssocInline]
