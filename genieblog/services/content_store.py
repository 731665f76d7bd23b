"""File-backed blog content: loads post records from a tree of JSON files.

One JSON object per file, in the layout the authoring tools write
(camelCase keys are accepted, see ``BlogPost``). Loaded content is kept as
an immutable ``ContentSnapshot`` that also carries the precomputed search
index; snapshots are cached per content directory for
``content_cache_ttl`` seconds. ``invalidate_content_cache`` forces a reload
after posts change on disk.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from genieblog.config import get_settings
from genieblog.models.blog import BlogPost
from genieblog.services.cache import TTLCache
from genieblog.services.categories import is_known_category
from genieblog.services.search import build_search_index

logger = logging.getLogger(__name__)

# Lazy singleton, sized from settings on first use
_cache: TTLCache | None = None


@dataclass(frozen=True)
class ContentSnapshot:
    """Published posts (newest first) plus their search index."""

    posts: tuple[BlogPost, ...] = ()
    search_index: dict[str, str] = field(default_factory=dict)
    skipped: tuple[str, ...] = ()

    def get_post(self, category: str, slug: str) -> BlogPost | None:
        for post in self.posts:
            if post.category == category and post.slug == slug:
                return post
        return None

    def in_category(self, category: str) -> list[BlogPost]:
        return [post for post in self.posts if post.category == category]


def _get_cache() -> TTLCache:
    global _cache
    if _cache is None:
        _cache = TTLCache(ttl=get_settings().content_cache_ttl, max_size=4)
    return _cache


def iter_post_files(content_dir: Path) -> list[Path]:
    """All ``*.json`` files below ``content_dir``, in a stable order."""
    if not content_dir.is_dir():
        logger.warning("Blog content directory not found at %s", content_dir)
        return []
    return sorted(
        path for path in content_dir.rglob("*") if path.is_file() and path.suffix.lower() == ".json"
    )


def load_post_file(path: Path) -> BlogPost | None:
    """Parse one post file; returns None (and logs why) when it is unusable."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read blog post %s: %s", path, exc)
        return None

    try:
        post = BlogPost.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "Invalid blog post %s (%d errors): %s", path, exc.error_count(), exc.errors()[0]["msg"]
        )
        return None

    if not is_known_category(post.category):
        logger.warning(
            "Skipping blog post %s: unknown category %r", post.id, post.category
        )
        return None
    return post


def load_posts(content_dir: Path) -> tuple[list[BlogPost], list[str]]:
    """Load every usable post below ``content_dir``, drafts included.

    Returns ``(posts, skipped_paths)``. When two posts share a
    ``category/slug`` route, the first file (by path) wins.
    """
    posts: list[BlogPost] = []
    skipped: list[str] = []
    seen_routes: dict[str, str] = {}

    for path in iter_post_files(content_dir):
        post = load_post_file(path)
        if post is None:
            skipped.append(str(path))
            continue
        if post.route_key in seen_routes:
            logger.warning(
                "Skipping blog post %s: route %s already used by %s",
                post.id,
                post.route_key,
                seen_routes[post.route_key],
            )
            skipped.append(str(path))
            continue
        seen_routes[post.route_key] = post.id
        posts.append(post)

    return posts, skipped


def build_snapshot(posts: list[BlogPost], skipped: list[str] | None = None) -> ContentSnapshot:
    """Keep published posts, newest first, and index their bodies."""
    published = sorted(
        (post for post in posts if post.is_published),
        key=lambda post: post.publish_date,
        reverse=True,
    )
    return ContentSnapshot(
        posts=tuple(published),
        search_index=build_search_index(published),
        skipped=tuple(skipped or ()),
    )


def load_snapshot(content_dir: Path) -> ContentSnapshot:
    posts, skipped = load_posts(content_dir)
    snapshot = build_snapshot(posts, skipped)
    logger.info(
        "Loaded %d published blog posts from %s (%d skipped)",
        len(snapshot.posts),
        content_dir,
        len(skipped),
    )
    return snapshot


async def get_blog_content(force_reload: bool = False) -> ContentSnapshot:
    """Return the cached content snapshot, loading it from disk on a miss."""
    content_dir = Path(get_settings().content_dir)
    key = str(content_dir.resolve())
    cache = _get_cache()

    if not force_reload:
        cached = cache.get(key)
        if cached is not None:
            return cached

    snapshot = await asyncio.to_thread(load_snapshot, content_dir)
    cache.set(key, snapshot)
    return snapshot


def invalidate_content_cache() -> None:
    if _cache is not None:
        _cache.clear()


def check_content_directory() -> bool:
    """Lightweight health check: the content directory exists and is readable."""
    content_dir = Path(get_settings().content_dir)
    if not content_dir.is_dir():
        return False
    try:
        next(content_dir.iterdir(), None)
    except OSError:
        return False
    return True
