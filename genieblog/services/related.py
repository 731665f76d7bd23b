"""Read-next suggestions for a post."""

from collections.abc import Sequence

from genieblog.models.blog import BlogPost

RELATED_POSTS_LIMIT = 3


def related_posts(
    post: BlogPost, posts: Sequence[BlogPost], limit: int = RELATED_POSTS_LIMIT
) -> list[BlogPost]:
    """Other posts, same category first, then newest first."""
    candidates = [p for p in posts if p.id != post.id]
    candidates.sort(
        key=lambda p: (p.category == post.category, p.publish_date), reverse=True
    )
    return candidates[: max(0, limit)]
