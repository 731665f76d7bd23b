"""Shared fixtures for genieblog tests."""

from datetime import datetime, timezone

import pytest

from genieblog.models.blog import BlogPost, PostStatus


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from genieblog.config import get_settings

    get_settings.cache_clear()

    # 2. Content snapshot cache
    import genieblog.services.content_store as store_mod

    store_mod._cache = None


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    """Provide a Settings object with safe test defaults."""
    from genieblog.config import Settings, get_settings

    test_settings = Settings(
        site_url="https://suitegenie.in",
        site_domain="suitegenie.in",
        content_dir=str(tmp_path / "posts"),
        content_cache_ttl=60,
        posts_per_page=10,
        words_per_minute=200,
        unique_heading_ids=False,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("genieblog.config.get_settings", lambda: test_settings)

    # Patch get_settings in every module that imports it directly
    # (from genieblog.config import get_settings creates a local binding that
    # the genieblog.config monkeypatch above does not affect)
    for mod_path in [
        "genieblog.services.content_store",
        "genieblog.routers.blog",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def make_post():
    """Factory for published BlogPost records with sensible defaults."""

    def _make(
        post_id: str = "post-1",
        title: str = "Test Post",
        *,
        category: str = "guides",
        excerpt: str = "",
        body: str = "",
        tags: list[str] | None = None,
        day: int = 1,
        status: PostStatus = PostStatus.PUBLISHED,
        **extra,
    ) -> BlogPost:
        return BlogPost(
            id=post_id,
            title=title,
            category=category,
            excerpt=excerpt,
            body=body,
            tags=tags or [],
            publish_date=datetime(2026, 2, day, 12, 0, tzinfo=timezone.utc),
            status=status,
            **extra,
        )

    return _make
