from app.config import Settings, settings as default_settings
from app.logging import get_logger
from app.services.search.pipeline import RankingPipeline, SearchConfig
from app.services.search.sources.base import CatalogSource
from app.services.search.sources.instacart import InstacartSource
from app.services.search.sources.local import LocalCatalogSource
from app.services.search.sources.openfoodfacts import OpenFoodFactsSource
from app.services.search.synonyms import default_resolver
from app.storage import db

logger = get_logger(__name__)


def build_default_sources(settings: Settings = default_settings) -> list[CatalogSource]:
    """Local catalog always; Open Food Facts when enabled; Instacart when an API key is set."""
    config = SearchConfig.from_settings(settings)
    timeout_s = settings.search_per_source_timeout_s
    # Resolved per call so tests can swap the session factory
    sources: list[CatalogSource] = [
        LocalCatalogSource(
            session_factory=lambda: db.get_session(),
            freshness_window_ms=config.freshness_window_ms,
            row_limit=settings.local_catalog_row_limit,
        )
    ]
    if settings.openfoodfacts_enabled:
        sources.append(
            OpenFoodFactsSource(
                base_url=settings.openfoodfacts_base_url,
                timeout_s=timeout_s,
                page_size=settings.search_default_max_results,
                default_currency=settings.default_currency,
            )
        )
    if settings.instacart_api_key:
        sources.append(
            InstacartSource(
                base_url=settings.instacart_base_url,
                api_key=settings.instacart_api_key,
                postal_code=settings.default_postal_code,
                retailer_slug=settings.instacart_retailer_slug,
                timeout_s=timeout_s,
                default_currency=settings.default_currency,
            )
        )
    logger.info("search.sources configured=%s", [s.store.id for s in sources])
    return sources


def build_pipeline(settings: Settings = default_settings) -> RankingPipeline:
    return RankingPipeline(
        sources=build_default_sources(settings),
        config=SearchConfig.from_settings(settings),
        synonyms=default_resolver,
    )
