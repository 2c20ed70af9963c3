"""
Tests for the environment-specific settings modules.
"""

import importlib

from django.conf import settings


class TestTestSettings:
    """The settings the test suite itself runs under."""

    def test_database_is_in_memory(self):
        assert settings.DATABASES["default"]["NAME"] == ":memory:"

    def test_celery_runs_eagerly(self):
        assert settings.CELERY_TASK_ALWAYS_EAGER is True
        assert settings.CELERY_TASK_EAGER_PROPAGATES is True

    def test_sentry_disabled(self):
        assert settings.SENTRY_DSN == ""

    def test_names_are_not_cached_across_runs(self):
        assert not hasattr(settings, "ALT_URL_NAME_CACHE_TTL")


class TestEnvironmentModules:
    """Development and production settings only declare what the service uses."""

    def test_development_uses_sqlite_and_local_exports(self):
        development = importlib.import_module("config.settings.development")

        assert development.DATABASES["default"]["ENGINE"] == "django.db.backends.sqlite3"
        assert development.ALT_URL_EXPORT_DIR == development.BASE_DIR / "exports"
        assert not hasattr(development, "EMAIL_BACKEND")
        assert not hasattr(development, "INTERNAL_IPS")

    def test_production_uses_postgres_and_redis(self):
        production = importlib.import_module("config.settings.production")

        assert production.DATABASES["default"]["ENGINE"] == "django.db.backends.postgresql"
        assert production.CACHES["default"]["BACKEND"] == "django.core.cache.backends.redis.RedisCache"
        assert production.DEBUG is False
        assert not hasattr(production, "ALT_URL_NAME_CACHE_TTL")
