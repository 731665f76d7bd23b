"""Blog sitemap generation.

Only published posts are listed. Each entry uses the post's canonical URL
when one is set, else ``{base_url}/blogs/{category}/{slug}``.
"""

from collections.abc import Iterable
from datetime import timezone
from xml.sax.saxutils import escape

from genieblog.models.blog import BlogPost

SITE_URL = "https://suitegenie.in"
CHANGE_FREQUENCY = "weekly"
PRIORITY = "0.9"


def post_url(post: BlogPost, base_url: str = SITE_URL) -> str:
    if post.canonical_url:
        return post.canonical_url
    return f"{base_url.rstrip('/')}/blogs/{post.route_key}"


def generate_sitemap_xml(posts: Iterable[BlogPost], base_url: str = SITE_URL) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for post in posts:
        if not post.is_published:
            continue
        modified = post.last_modified or post.publish_date
        lastmod = modified.astimezone(timezone.utc).date().isoformat()
        lines.append("  <url>")
        lines.append(f"    <loc>{escape(post_url(post, base_url))}</loc>")
        lines.append(f"    <lastmod>{lastmod}</lastmod>")
        lines.append(f"    <changefreq>{CHANGE_FREQUENCY}</changefreq>")
        lines.append(f"    <priority>{PRIORITY}</priority>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines)
