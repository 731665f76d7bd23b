"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
        "https://suitegenie.in",
    ]

    # Public site (canonical URLs, external-link detection)
    site_url: str = "https://suitegenie.in"
    site_domain: str = "suitegenie.in"

    # Content source: a directory tree of <post>.json files
    content_dir: str = "content/blog/posts"
    content_cache_ttl: float = 300  # seconds

    # Listing / rendering
    posts_per_page: int = 10
    words_per_minute: int = 200
    unique_heading_ids: bool = False  # suffix repeated heading anchors (-2, -3, ...)

    model_config = {"env_file": ".env", "env_prefix": "GENIEBLOG_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
