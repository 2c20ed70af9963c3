"""
Tests for the generate_alt_urls and export_alt_urls management commands.
"""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from catalog.models import ProductContent
from catalog.tests.builders import add_alt_urls, alt_urls_of


def run(*args):
    out = StringIO()
    err = StringIO()
    call_command(*args, stdout=out, stderr=err)
    return out.getvalue(), err.getvalue()


@pytest.mark.django_db
class TestGenerateAltUrlsCommand:
    """Tests for `manage.py generate_alt_urls`."""

    def test_product(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--product", "P-1")

        assert "Processed: 1, updated: 1, skipped: 0, errors: 0" in out
        assert alt_urls_of(catalog_tree["P-1"])[0].text_data == "blue-shirt"

    def test_product_with_children(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--product", "P-VIRT", "--include-children")

        assert "Processed: 3" in out

    def test_category(self, catalog_tree):
        run("generate_alt_urls", "--category", "C-SHARED")

        assert alt_urls_of(catalog_tree["C-SHARED"])[0].text_data == "sale"

    def test_website(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--website", "WebStore", "--type", "product")

        assert "Processed: 5, updated: 5, skipped: 1, errors: 0" in out
        assert "WebStore" in out

    def test_catalogs(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--catalog", "CAT-A", "--catalog", "CAT-B")

        assert "Processed: 8" in out

    def test_allow_duplicates(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--store", "STORE-1", "--allow-duplicates")

        assert "Processed: 12" in out

    def test_all(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--all")

        assert "Processed: 9" in out

    def test_no_replace(self, catalog_tree):
        add_alt_urls(catalog_tree["P-1"], None, "keep-me")

        out, _ = run("generate_alt_urls", "--product", "P-1", "--no-replace")

        assert "skipped: 1" in out
        assert alt_urls_of(catalog_tree["P-1"])[0].text_data == "keep-me"

    def test_dry_run_rolls_back(self, catalog_tree):
        out, _ = run("generate_alt_urls", "--website", "WebStore", "--dry-run")

        assert "DRY RUN" in out
        assert "Processed: 8" in out
        assert not ProductContent.objects.filter(content_type="alternative_url").exists()

    def test_unknown_product(self, catalog_tree):
        with pytest.raises(CommandError, match="NOPE"):
            run("generate_alt_urls", "--product", "NOPE")

    def test_unknown_catalog(self, catalog_tree):
        with pytest.raises(CommandError, match="Error preparing"):
            run("generate_alt_urls", "--catalog", "NOPE")


@pytest.mark.django_db
class TestExportAltUrlsCommand:
    """Tests for `manage.py export_alt_urls`."""

    def test_stdout_is_json_lines(self, catalog_tree):
        run("generate_alt_urls", "--website", "WebStore")

        out, err = run("export_alt_urls", "--website", "WebStore", "--type", "category")

        records = [json.loads(line) for line in out.splitlines()]
        assert [record["id"] for record in records] == ["C-ROOT-A", "C-SHARED", "C-ROOT-B"]
        assert "Exported alternative URLs" in err

    def test_line_prefix(self, catalog_tree):
        run("generate_alt_urls", "--all")

        out, _ = run("export_alt_urls", "--all", "--type", "product", "--line-prefix", "# ")

        lines = out.splitlines()
        assert len(lines) == 6
        assert all(line.startswith("# {") for line in lines)

    def test_out_file(self, catalog_tree, tmp_path):
        run("generate_alt_urls", "--all")
        out_file = tmp_path / "store.jsonl"

        out, _ = run("export_alt_urls", "--store", "STORE-1", "--out", str(out_file))

        assert out == ""
        assert len(out_file.read_text().splitlines()) == 8

    def test_config(self, catalog_tree, settings, tmp_path):
        run("generate_alt_urls", "--all")
        settings.ALT_URL_EXPORT_DIR = tmp_path
        settings.ALT_URL_EXPORT_CONFIGS = {
            "nightly": {"file": "nightly.jsonl", "scope": "all"},
        }

        _, err = run("export_alt_urls", "--config", "nightly")

        assert "Export configs succeeded: 1; failed: 0" in err
        assert (tmp_path / "nightly.jsonl").exists()

    def test_unknown_config(self, settings):
        settings.ALT_URL_EXPORT_CONFIGS = {}

        with pytest.raises(CommandError, match="nightly"):
            run("export_alt_urls", "--config", "nightly")

    def test_unknown_store(self, db):
        with pytest.raises(CommandError):
            run("export_alt_urls", "--store", "NOPE")
