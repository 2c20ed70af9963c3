"""
Catalog Django application.

This app holds the catalog hierarchy (catalogs, categories, products and
variants) and keeps the localized alternative URLs of products and
categories in sync with their names.
"""

default_app_config = "catalog.apps.CatalogConfig"
