"""
Tests for the alternative URL Celery tasks.

Tasks run eagerly under config.settings.test.
"""

import pytest

from catalog.tasks import (
    export_alt_urls_from_config_task,
    generate_all_alt_urls_task,
    generate_website_alt_urls_task,
)
from catalog.tests.builders import alt_urls_of


@pytest.mark.django_db
class TestGenerateTasks:
    """Tests for the generation tasks."""

    def test_website_task_via_delay(self, catalog_tree):
        result = generate_website_alt_urls_task.delay(["all"], web_site_id="WebStore").get()

        assert result["status"] == "success"
        assert result["num_processed"] == 8
        assert alt_urls_of(catalog_tree["P-VAR-2"]) is not None

    def test_website_task_defaults_to_all_types(self, catalog_tree):
        result = generate_website_alt_urls_task(store_id="STORE-1")

        assert result["num_processed"] == 8

    def test_website_task_error(self, catalog_tree):
        result = generate_website_alt_urls_task(["all"], catalog_ids=["NOPE"])

        assert result["status"] == "error"

    def test_all_task(self, catalog_tree):
        result = generate_all_alt_urls_task(["product"], replace_existing=True)

        assert result["num_processed"] == 6
        assert alt_urls_of(catalog_tree["C-ROOT-A"]) is None

    def test_task_names(self):
        assert generate_website_alt_urls_task.name == "catalog.tasks.generate_website_alt_urls_task"
        assert generate_all_alt_urls_task.name == "catalog.tasks.generate_all_alt_urls_task"


@pytest.mark.django_db
class TestExportTask:
    """Tests for the configured export task."""

    def test_runs_all_configs(self, catalog_tree, settings, tmp_path):
        generate_all_alt_urls_task()
        settings.ALT_URL_EXPORT_DIR = tmp_path
        settings.ALT_URL_EXPORT_CONFIGS = {
            "categories": {"file": "categories.jsonl", "scope": "all", "type": ["category"]},
        }

        result = export_alt_urls_from_config_task.delay().get()

        assert result["status"] == "success"
        assert len((tmp_path / "categories.jsonl").read_text().splitlines()) == 3
