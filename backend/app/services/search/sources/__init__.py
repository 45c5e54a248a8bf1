"""Catalog sources: the internal catalog and third-party product lookups."""

from app.services.search.sources.base import CatalogSource, HttpCatalogSource
from app.services.search.sources.instacart import InstacartSource
from app.services.search.sources.local import LocalCatalogSource
from app.services.search.sources.openfoodfacts import OpenFoodFactsSource

__all__ = [
    "CatalogSource",
    "HttpCatalogSource",
    "InstacartSource",
    "LocalCatalogSource",
    "OpenFoodFactsSource",
]
