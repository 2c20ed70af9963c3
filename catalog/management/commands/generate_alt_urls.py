"""
Management command to regenerate alternative URLs.

Usage:
    python manage.py generate_alt_urls --product=PROD-100
    python manage.py generate_alt_urls --product=PROD-100 --include-children
    python manage.py generate_alt_urls --category=CAT-10
    python manage.py generate_alt_urls --website=WebStore --type=product
    python manage.py generate_alt_urls --catalog=CAT-A --catalog=CAT-B
    python manage.py generate_alt_urls --all --type=all --dry-run
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from catalog.services.alt_urls import (
    generate_all_alt_urls,
    generate_category_alt_urls,
    generate_product_alt_urls,
    generate_website_alt_urls,
)
from catalog.services.stats import ResultStatus
from catalog.services.traversal import TYPE_CHOICES


class Command(BaseCommand):
    help = "Regenerate alternative URLs for products and categories"

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument("--product", type=str, help="Regenerate a single product")
        target.add_argument("--category", type=str, help="Regenerate a single category")
        target.add_argument("--website", type=str, help="Regenerate the catalogs of a web site")
        target.add_argument("--store", type=str, help="Regenerate the catalogs of a store")
        target.add_argument(
            "--catalog",
            action="append",
            dest="catalogs",
            help="Regenerate a catalog (repeatable)",
        )
        target.add_argument(
            "--all",
            action="store_true",
            help="Regenerate every category and product in the system",
        )

        parser.add_argument(
            "--type",
            action="append",
            dest="types",
            choices=TYPE_CHOICES,
            help="Entity types for catalog and system runs (repeatable, default: all)",
        )
        parser.add_argument(
            "--include-children",
            action="store_true",
            help="With --product, also regenerate the variants of a virtual product",
        )
        parser.add_argument(
            "--no-replace",
            action="store_true",
            help="Skip entities that already have alternative URLs",
        )
        parser.add_argument(
            "--keep-old-locales",
            action="store_true",
            help="Keep alternate locale records that are no longer named",
        )
        parser.add_argument(
            "--allow-duplicates",
            action="store_true",
            help="Process entities reachable through several parents each time",
        )
        parser.add_argument(
            "--use-cache",
            action="store_true",
            help="Cache resolved names during the run",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Run the generation and roll back all changes",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        entity_types = options["types"] or ["all"]

        gen_options = {
            "replace_existing": not options["no_replace"],
            "remove_old_locales": not options["keep_old_locales"],
            "use_cache": options["use_cache"],
        }

        if dry_run:
            self.stdout.write(self.style.WARNING("DRY RUN - All changes will be rolled back"))

        with transaction.atomic():
            if options["product"]:
                result = generate_product_alt_urls(
                    options["product"],
                    do_child_products=options["include_children"],
                    **gen_options,
                )
            elif options["category"]:
                result = generate_category_alt_urls(options["category"], **gen_options)
            elif options["all"]:
                result = generate_all_alt_urls(entity_types, **gen_options)
            else:
                result = generate_website_alt_urls(
                    entity_types,
                    web_site_id=options["website"],
                    store_id=options["store"],
                    catalog_ids=options["catalogs"],
                    prevent_duplicates=not options["allow_duplicates"],
                    **gen_options,
                )

            if dry_run:
                transaction.set_rollback(True)

        if result.status == ResultStatus.ERROR:
            raise CommandError(result.message)

        self.stdout.write(
            f"Processed: {result.num_processed}, updated: {result.num_updated}, "
            f"skipped: {result.num_skipped}, errors: {result.num_error}"
        )
        if result.status == ResultStatus.FAILURE:
            self.stdout.write(self.style.WARNING(result.message))
        else:
            self.stdout.write(self.style.SUCCESS(result.message))
