"""
Migration: Initial catalog and localized content schema.

Creates the catalog hierarchy tables (catalogs, categories, products, stores,
web sites and their dated relations) and the content tables used for names
and alternative URLs.
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


def _dated_fields():
    return [
        ("from_date", models.DateTimeField(default=django.utils.timezone.now)),
        ("thru_date", models.DateTimeField(blank=True, null=True)),
    ]


def _id_field():
    return (
        "id",
        models.BigAutoField(
            auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
        ),
    )


ENTITY_CONTENT_TYPE_CHOICES = [
    ("name", "Name"),
    ("alternative_url", "Alternative URL"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Catalog",
            fields=[
                ("id", models.CharField(max_length=60, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "catalogs",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.CharField(max_length=60, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "categories",
                "ordering": ["id"],
                "verbose_name_plural": "categories",
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.CharField(max_length=60, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("is_variant", models.BooleanField(db_index=True, default=False)),
                ("is_virtual", models.BooleanField(db_index=True, default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "products",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.CharField(max_length=60, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
            ],
            options={
                "db_table": "stores",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Content",
            fields=[
                _id_field(),
                ("locale", models.CharField(blank=True, db_index=True, max_length=20, null=True)),
                ("text_data", models.TextField(blank=True, null=True)),
                ("description", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "contents",
            },
        ),
        migrations.CreateModel(
            name="WebSite",
            fields=[
                ("id", models.CharField(max_length=60, primary_key=True, serialize=False)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "store",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="web_sites",
                        to="catalog.store",
                    ),
                ),
            ],
            options={
                "db_table": "web_sites",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="StoreCatalog",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("sequence_num", models.IntegerField(blank=True, null=True)),
                (
                    "catalog",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="store_links",
                        to="catalog.catalog",
                    ),
                ),
                (
                    "store",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="catalog_links",
                        to="catalog.store",
                    ),
                ),
            ],
            options={
                "db_table": "store_catalogs",
                "indexes": [
                    models.Index(fields=["store", "from_date"], name="store_catalog_store_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CatalogCategory",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("sequence_num", models.IntegerField(blank=True, null=True)),
                (
                    "catalog",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="category_links",
                        to="catalog.catalog",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="catalog_links",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "db_table": "catalog_categories",
                "indexes": [
                    models.Index(fields=["catalog", "from_date"], name="catalog_category_catalog_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CategoryRollup",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("sequence_num", models.IntegerField(blank=True, null=True)),
                (
                    "child",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="parent_links",
                        to="catalog.category",
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="child_links",
                        to="catalog.category",
                    ),
                ),
            ],
            options={
                "db_table": "category_rollups",
                "indexes": [
                    models.Index(fields=["parent", "from_date"], name="category_rollup_parent_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CategoryMember",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("sequence_num", models.IntegerField(blank=True, null=True)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="member_links",
                        to="catalog.category",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="category_links",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "category_members",
                "indexes": [
                    models.Index(fields=["category", "from_date"], name="category_member_category_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductVariantAssoc",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("sequence_num", models.IntegerField(blank=True, null=True)),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="variant_links",
                        to="catalog.product",
                    ),
                ),
                (
                    "variant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="parent_links",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "product_variant_assocs",
                "indexes": [
                    models.Index(fields=["product", "from_date"], name="variant_assoc_product_idx"),
                    models.Index(fields=["variant", "from_date"], name="variant_assoc_variant_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ContentAssoc",
            fields=[
                _id_field(),
                *_dated_fields(),
                (
                    "assoc_type",
                    models.CharField(
                        choices=[("alternate_locale", "Alternate Locale")],
                        default="alternate_locale",
                        max_length=30,
                    ),
                ),
                (
                    "content",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assocs_from",
                        to="catalog.content",
                    ),
                ),
                (
                    "content_to",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="assocs_to",
                        to="catalog.content",
                    ),
                ),
            ],
            options={
                "db_table": "content_assocs",
                "indexes": [
                    models.Index(fields=["content", "assoc_type"], name="content_assoc_content_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductContent",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("content_type", models.CharField(choices=ENTITY_CONTENT_TYPE_CHOICES, max_length=30)),
                (
                    "content",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="product_links",
                        to="catalog.content",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="content_links",
                        to="catalog.product",
                    ),
                ),
            ],
            options={
                "db_table": "product_contents",
                "indexes": [
                    models.Index(fields=["product", "content_type"], name="product_content_product_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="CategoryContent",
            fields=[
                _id_field(),
                *_dated_fields(),
                ("content_type", models.CharField(choices=ENTITY_CONTENT_TYPE_CHOICES, max_length=30)),
                (
                    "category",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="content_links",
                        to="catalog.category",
                    ),
                ),
                (
                    "content",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="category_links",
                        to="catalog.content",
                    ),
                ),
            ],
            options={
                "db_table": "category_contents",
                "indexes": [
                    models.Index(fields=["category", "content_type"], name="category_content_category_idx"),
                ],
            },
        ),
    ]
