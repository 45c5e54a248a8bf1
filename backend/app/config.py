from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "pantry-finder"
    env: str = "local"
    log_level: str = "INFO"
    # Comma-separated loggers capped at WARNING
    log_quiet_loggers: str = "httpx,httpcore"

    database_url: str = "sqlite:///./catalog.db"

    # Ranking pipeline. Freshness applies to last-known price data.
    search_freshness_window_hours: int = 168
    search_score_threshold: float = 0.1
    search_per_source_timeout_s: float = 5.0
    search_default_max_results: int = 10

    # Upper bound on rows the internal catalog returns per query
    local_catalog_row_limit: int = 20
    default_currency: str = "USD"

    openfoodfacts_enabled: bool = True
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org/cgi"

    # Instacart (parse.bot) source is only wired in when an API key is set
    instacart_api_key: str = ""
    instacart_base_url: str = "https://api.parse.bot/scraper/fe062683-8089-4dd2-98b2-48603e6795f8"
    instacart_retailer_slug: str = "costco"
    default_postal_code: str = "10001"

    class Config:
        env_file = ".env"


settings = Settings()
