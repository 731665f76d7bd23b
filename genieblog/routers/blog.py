"""Blog endpoints: listings, search, post detail, preview rendering, sitemap."""

import logging

from fastapi import APIRouter, HTTPException, Path, Query
from fastapi.responses import Response

from genieblog.config import get_settings
from genieblog.models.blog import (
    CategoryList,
    CategoryMeta,
    Page,
    PostDetail,
    PostSummary,
    RenderRequest,
    RenderResponse,
)
from genieblog.services.categories import (
    ALL_CATEGORY,
    CATEGORY_META,
    get_category_meta,
    is_known_category,
    ordered_categories,
)
from genieblog.services.content_store import get_blog_content
from genieblog.services.pagination import paginate
from genieblog.services.related import related_posts
from genieblog.services.renderer import render
from genieblog.services.search import search_posts
from genieblog.services.sitemap import generate_sitemap_xml, post_url
from genieblog.services.text import calculate_read_time, count_words
from genieblog.services.toc import extract_table_of_contents

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blog", tags=["blog"])

_SLUG_PATTERN = r"^[a-z0-9_-]+$"


def _summaries(posts, words_per_minute: int) -> list[PostSummary]:
    return [PostSummary.from_post(post, words_per_minute) for post in posts]


@router.get("/posts", response_model=Page[PostSummary])
async def list_posts(
    category: str | None = Query(
        default=None,
        description="Only posts in this category ('all' for every category)",
    ),
    q: str = Query(default="", max_length=200, description="Optional search query"),
    page: int = Query(default=1, ge=1, description="1-based page; clamped to the last page"),
    page_size: int | None = Query(default=None, ge=1, le=50),
):
    """List published posts, newest first, optionally filtered and searched."""
    settings = get_settings()
    content = await get_blog_content()

    posts = list(content.posts)
    if category and category != ALL_CATEGORY:
        if not is_known_category(category):
            raise HTTPException(status_code=404, detail="Category not found")
        posts = content.in_category(category)

    results = search_posts(q, posts, content.search_index)
    result_page = paginate(results, page, page_size or settings.posts_per_page)
    return Page[PostSummary](
        page=result_page.page,
        total=result_page.total,
        total_pages=result_page.total_pages,
        items=_summaries(result_page.items, settings.words_per_minute),
    )


@router.get("/search", response_model=Page[PostSummary])
async def search_blog(
    q: str = Query(default="", max_length=200),
    page: int = Query(default=1, ge=1),
):
    """Search every published post. A blank query returns an empty page."""
    settings = get_settings()
    if not q.strip():
        return Page[PostSummary](page=1, total=0, total_pages=1, items=[])

    content = await get_blog_content()
    results = search_posts(q, content.posts, content.search_index)
    logger.info("Blog search %r matched %d posts", q, len(results))
    result_page = paginate(results, page, settings.posts_per_page)
    return Page[PostSummary](
        page=result_page.page,
        total=result_page.total,
        total_pages=result_page.total_pages,
        items=_summaries(result_page.items, settings.words_per_minute),
    )


@router.get("/categories", response_model=CategoryList)
async def list_categories():
    """Categories in navigation order."""
    return CategoryList(categories=ordered_categories())


@router.get("/categories/{key}", response_model=CategoryMeta)
async def get_category(key: str = Path(..., max_length=50)):
    if key not in CATEGORY_META:
        raise HTTPException(status_code=404, detail="Category not found")
    return CATEGORY_META[key]


@router.get("/posts/{category}/{slug}", response_model=PostDetail)
async def get_post(
    category: str = Path(..., max_length=50),
    slug: str = Path(..., pattern=_SLUG_PATTERN, max_length=200),
):
    """A single post with rendered HTML, table of contents and related posts."""
    settings = get_settings()
    content = await get_blog_content()
    post = content.get_post(category, slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Blog post not found")

    summary = PostSummary.from_post(post, settings.words_per_minute)
    return PostDetail(
        **summary.model_dump(),
        category_label=get_category_meta(post.category).label,
        canonical_url=post_url(post, settings.site_url),
        html=render(
            post.body,
            site_domain=settings.site_domain,
            unique_ids=settings.unique_heading_ids,
        ),
        toc=extract_table_of_contents(post.body, unique_ids=settings.unique_heading_ids),
        related=_summaries(related_posts(post, content.posts), settings.words_per_minute),
    )


@router.post("/render", response_model=RenderResponse)
async def render_preview(request: RenderRequest):
    """Render arbitrary Markdown the way a post body would be rendered."""
    settings = get_settings()
    unique_ids = (
        settings.unique_heading_ids if request.unique_ids is None else request.unique_ids
    )
    return RenderResponse(
        html=render(request.body, site_domain=settings.site_domain, unique_ids=unique_ids),
        toc=extract_table_of_contents(request.body, unique_ids=unique_ids),
        word_count=count_words(request.body),
        read_time_minutes=calculate_read_time(request.body, settings.words_per_minute),
    )


@router.get("/sitemap.xml")
async def get_sitemap():
    """Sitemap of every published post."""
    settings = get_settings()
    content = await get_blog_content()
    xml = generate_sitemap_xml(content.posts, settings.site_url)
    return Response(content=xml + "\n", media_type="application/xml")
