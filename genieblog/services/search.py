"""Weighted substring search over blog posts.

Each query term scores a post for every field it appears in (title 6,
excerpt 4, tags 3, body 1); scores add up across terms. Matching is plain
case-insensitive substring containment: no stemming, no fuzziness.
"""

from collections.abc import Iterable, Mapping, Sequence

from genieblog.models.blog import BlogPost
from genieblog.services.text import strip_markdown

TITLE_WEIGHT = 6
EXCERPT_WEIGHT = 4
TAGS_WEIGHT = 3
BODY_WEIGHT = 1

# route key ("category/slug") → lowercased plain-text body
SearchIndex = Mapping[str, str]


def normalize_query(query: str) -> list[str]:
    return query.strip().lower().split()


def plain_body(post: BlogPost) -> str:
    return strip_markdown(post.body).lower()


def build_search_index(posts: Iterable[BlogPost]) -> dict[str, str]:
    """Precompute searchable body text for ``posts``.

    The index is a snapshot: rebuild it whenever a post body changes.
    """
    return {post.route_key: plain_body(post) for post in posts}


def score_post(terms: Sequence[str], post: BlogPost, body_text: str) -> int:
    title = post.title.lower()
    excerpt = post.excerpt.lower()
    tags = " ".join(post.tags).lower()

    score = 0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if term in excerpt:
            score += EXCERPT_WEIGHT
        if term in tags:
            score += TAGS_WEIGHT
        if term in body_text:
            score += BODY_WEIGHT
    return score


def search_posts(
    query: str,
    posts: Sequence[BlogPost],
    index: SearchIndex | None = None,
) -> list[BlogPost]:
    """Return the posts matching ``query``, best match first.

    Ties go to the more recently published post. An empty query returns
    ``posts`` in their original order. Posts missing from ``index`` fall
    back to stripping their body on the fly.
    """
    terms = normalize_query(query)
    if not terms:
        return list(posts)

    scored: list[tuple[int, BlogPost]] = []
    for post in posts:
        body_text = index.get(post.route_key) if index is not None else None
        if body_text is None:
            body_text = plain_body(post)
        score = score_post(terms, post, body_text)
        if score > 0:
            scored.append((score, post))

    scored.sort(key=lambda entry: (entry[0], entry[1].publish_date), reverse=True)
    return [post for _, post in scored]
