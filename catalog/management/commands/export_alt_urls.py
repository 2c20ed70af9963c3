"""
Management command to export alternative URLs as JSON Lines.

Usage:
    python manage.py export_alt_urls --website=WebStore
    python manage.py export_alt_urls --store=STORE-1 --type=product --out=exports/store.jsonl
    python manage.py export_alt_urls --all --line-prefix="  "
    python manage.py export_alt_urls --config=nightly --config=products
    python manage.py export_alt_urls --config-all
"""

from django.core.management.base import BaseCommand, CommandError

from catalog.services.alt_urls import (
    SCOPE_ALL,
    SCOPE_WEBSITE,
    export_all_alt_urls,
    export_alt_urls_from_config,
    export_alt_urls_to_file,
    export_website_alt_urls,
)
from catalog.services.exporter import JsonLinesSink
from catalog.services.stats import ResultStatus
from catalog.services.traversal import TYPE_CHOICES


class Command(BaseCommand):
    help = "Export current alternative URLs as JSON Lines"

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument("--website", type=str, help="Export the catalogs of a web site")
        target.add_argument("--store", type=str, help="Export the catalogs of a store")
        target.add_argument(
            "--catalog",
            action="append",
            dest="catalogs",
            help="Export a catalog (repeatable)",
        )
        target.add_argument(
            "--all",
            action="store_true",
            help="Export every category and product in the system",
        )
        target.add_argument(
            "--config",
            action="append",
            dest="configs",
            help="Run a named ALT_URL_EXPORT_CONFIGS entry (repeatable)",
        )
        target.add_argument(
            "--config-all",
            action="store_true",
            help="Run every ALT_URL_EXPORT_CONFIGS entry",
        )

        parser.add_argument(
            "--type",
            action="append",
            dest="types",
            choices=TYPE_CHOICES,
            help="Entity types to export (repeatable, default: all)",
        )
        parser.add_argument(
            "--out",
            type=str,
            help="Output file (default: standard output)",
        )
        parser.add_argument(
            "--line-prefix",
            type=str,
            default="",
            help="Text prepended to every exported line",
        )

    def handle(self, *args, **options):
        if options["configs"] or options["config_all"]:
            result = export_alt_urls_from_config(options["configs"])
            self._report(result)
            return

        entity_types = options["types"] or ["all"]
        scope = SCOPE_ALL if options["all"] else SCOPE_WEBSITE
        kwargs = {}
        if scope == SCOPE_WEBSITE:
            kwargs = {
                "web_site_id": options["website"],
                "store_id": options["store"],
                "catalog_ids": options["catalogs"],
            }

        if options["out"]:
            result = export_alt_urls_to_file(
                options["out"],
                entity_types,
                scope=scope,
                line_prefix=options["line_prefix"],
                **kwargs,
            )
        else:
            sink = JsonLinesSink(self.stdout, line_prefix=options["line_prefix"])
            if scope == SCOPE_ALL:
                result = export_all_alt_urls(sink, entity_types)
            else:
                result = export_website_alt_urls(sink, entity_types, **kwargs)

        self._report(result)

    def _report(self, result):
        if result.status == ResultStatus.ERROR:
            raise CommandError(result.message)

        # Summary goes to stderr so that stdout stays valid JSON Lines
        style = self.style.WARNING if result.status == ResultStatus.FAILURE else self.style.SUCCESS
        self.stderr.write(style(result.message))
