"""Write the blog sitemap from the post files on disk.

Usage:
    python -m scripts.generate_sitemap
    python -m scripts.generate_sitemap --content-dir content/blog/posts --output public/sitemap-blog.xml
"""

import argparse
import logging
import sys
from pathlib import Path

from genieblog.config import get_settings
from genieblog.services.content_store import load_posts
from genieblog.services.sitemap import generate_sitemap_xml

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--content-dir", default=settings.content_dir)
    parser.add_argument("--output", default="public/sitemap-blog.xml")
    parser.add_argument("--base-url", default=settings.site_url)
    args = parser.parse_args(argv)

    posts, skipped = load_posts(Path(args.content_dir))
    published = [post for post in posts if post.is_published]
    if not published:
        print(f"ERROR: no published posts found in {args.content_dir}")
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(generate_sitemap_xml(posts, args.base_url) + "\n", encoding="utf-8")

    print(f"Generated {output}")
    print(f"  Published: {len(published)}")
    print(f"  Drafts:    {len(posts) - len(published)}")
    print(f"  Skipped:   {len(skipped)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
