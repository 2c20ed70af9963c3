"""
Tests for localized name resolution.
"""

import pytest

from catalog.exceptions import AltUrlValidationError
from catalog.models import Category, Content, EntityKind, Product
from catalog.services.name_resolver import (
    determine_default_name,
    get_parent_product_id,
    get_primary_name_content,
    resolve_name,
)
from catalog.tests.builders import add_names, add_variant, past


@pytest.mark.django_db
class TestResolveName:
    """Tests for resolve_name."""

    def test_falls_back_to_entity_id(self, sanitizer):
        """An entity with no name of any kind is named by its id."""
        product = Product.objects.create(id="PROD-100")

        resolved = resolve_name(EntityKind.PRODUCT, product)

        assert resolved.default_name == "PROD-100"
        assert resolved.default_locale is None
        assert resolved.locale_text_map == {}
        assert sanitizer.slug(resolved.default_name) == "prod-100"

    def test_collects_locale_texts(self):
        category = Category.objects.create(id="CAT-10")
        add_names(category, "en_US", "Shoes", {"fr_FR": "Chaussures", "de_DE": "Schuhe"})

        resolved = resolve_name(EntityKind.CATEGORY, category)

        assert resolved.default_locale == "en_US"
        assert resolved.default_name == "Shoes"
        assert resolved.locale_text_map == {
            "en_US": "Shoes",
            "fr_FR": "Chaussures",
            "de_DE": "Schuhe",
        }

    def test_entity_name_wins_over_localized_text(self):
        product = Product.objects.create(id="P-1", name="Direct Name")
        add_names(product, "en_US", "Localized Name")

        resolved = resolve_name(EntityKind.PRODUCT, product)

        assert resolved.default_name == "Direct Name"
        assert resolved.locale_text_map == {"en_US": "Localized Name"}

    def test_untagged_content_body_used_as_default_name(self):
        product = Product.objects.create(id="P-2")
        add_names(product, None, "Raw Name", {"fr_FR": "Nom"})

        resolved = resolve_name(EntityKind.PRODUCT, product)

        assert resolved.default_locale is None
        assert resolved.default_name == "Raw Name"
        assert resolved.locale_text_map == {"fr_FR": "Nom"}

    def test_alternate_without_text_is_ignored(self):
        product = Product.objects.create(id="P-3")
        add_names(product, "en_US", "Hat", {"fr_FR": None, "es_ES": ""})

        resolved = resolve_name(EntityKind.PRODUCT, product)

        assert resolved.locale_text_map == {"en_US": "Hat"}

    def test_expired_name_content_is_ignored(self):
        product = Product.objects.create(id="P-4")
        add_names(product, "en_US", "Old Name", from_date=past(10), thru_date=past(1))

        resolved = resolve_name(EntityKind.PRODUCT, product)

        assert resolved.default_name == "P-4"
        assert resolved.locale_text_map == {}

    def test_variant_borrows_parent_names(self, sanitizer):
        """A variant without names of its own uses its virtual parent's."""
        parent = Product.objects.create(id="SHIRT", is_virtual=True)
        variant = Product.objects.create(id="SHIRT-S", is_variant=True)
        add_variant(parent, variant)
        add_names(parent, "en_US", "Red Shirt")

        resolved = resolve_name(EntityKind.PRODUCT, variant)

        assert resolved.default_name == "Red Shirt"
        assert resolved.default_locale == "en_US"
        assert sanitizer.slugs(resolved.locale_text_map) == {"en_US": "red-shirt"}

    def test_variant_own_names_win(self):
        parent = Product.objects.create(id="SHIRT", is_virtual=True)
        variant = Product.objects.create(id="SHIRT-S", is_variant=True)
        add_variant(parent, variant)
        add_names(parent, "en_US", "Red Shirt")
        add_names(variant, "en_US", "Red Shirt Small")

        resolved = resolve_name(EntityKind.PRODUCT, variant)

        assert resolved.default_name == "Red Shirt Small"

    def test_non_variant_does_not_borrow(self):
        parent = Product.objects.create(id="SHIRT", is_virtual=True)
        child = Product.objects.create(id="SHIRT-S", is_variant=False)
        add_variant(parent, child)
        add_names(parent, "en_US", "Red Shirt")

        resolved = resolve_name(EntityKind.PRODUCT, child)

        assert resolved.default_name == "SHIRT-S"

    def test_missing_text_body_raises(self):
        product = Product.objects.create(id="P-5")
        add_names(product, "en_US", None)

        with pytest.raises(AltUrlValidationError):
            resolve_name(EntityKind.PRODUCT, product)

    def test_memo_reused_within_run(self):
        product = Product.objects.create(id="P-6")
        main = add_names(product, "en_US", "First")
        memo = {}

        first = resolve_name(EntityKind.PRODUCT, product, memo=memo)
        Content.objects.filter(pk=main.pk).update(text_data="Second")
        memoized = resolve_name(EntityKind.PRODUCT, product, memo=memo)
        next_run = resolve_name(EntityKind.PRODUCT, product, memo={})

        assert first.default_name == "First"
        assert memoized.default_name == "First"
        assert next_run.default_name == "Second"
        assert list(memo) == [(EntityKind.PRODUCT, "P-6")]

    def test_no_memo_always_queries(self):
        product = Product.objects.create(id="P-7")
        main = add_names(product, "en_US", "First")

        resolve_name(EntityKind.PRODUCT, product)
        Content.objects.filter(pk=main.pk).update(text_data="Second")

        assert resolve_name(EntityKind.PRODUCT, product).default_name == "Second"


@pytest.mark.django_db
class TestNameLookups:
    """Tests for the lookup helpers."""

    def test_get_parent_product_id(self):
        parent = Product.objects.create(id="SHIRT", is_virtual=True)
        variant = Product.objects.create(id="SHIRT-S", is_variant=True)
        add_variant(parent, variant)

        assert get_parent_product_id("SHIRT-S") == "SHIRT"
        assert get_parent_product_id("SHIRT") is None

    def test_primary_name_content_none_without_names(self):
        category = Category.objects.create(id="CAT-EMPTY")

        assert get_primary_name_content(EntityKind.CATEGORY, category) is None


class TestDetermineDefaultName:
    """Tests for the default name precedence."""

    def test_locale_text_before_raw_body(self):
        content = Content(locale="en_US", text_data="Body")
        name = determine_default_name("ID", "", "en_US", content, {"en_US": "Localized"})
        assert name == "Localized"

    def test_raw_body_when_locale_has_no_text(self):
        content = Content(locale="en_US", text_data="Body")
        assert determine_default_name("ID", None, "en_US", content, {}) == "Body"

    def test_id_as_last_resort(self):
        assert determine_default_name("ID", None, None, None, {}) == "ID"
