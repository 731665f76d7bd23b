"""Inline markup: images, links, bold, italic and code spans within one line.

The line is escaped once up front; every later substitution works on the
escaped text and inserts its captures as-is, so nothing is escaped twice.
Author backslash escapes (``\\*``, ``\\[`` ...) are set aside before any
pattern runs and put back as literal characters at the end. Built images
are set aside the same way so later patterns never reach into their
attributes. NUL characters in the input become U+FFFD, which keeps the
NUL-delimited placeholders unforgeable.
"""

import html
import re
from urllib.parse import urlsplit

from genieblog.services.text import MARKDOWN_ESCAPE_RE, escape_html

SITE_DOMAIN = "suitegenie.in"

_PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")
_IMAGE_PLACEHOLDER_RE = re.compile("\x00img(\\d+)\x00")
_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)

_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_ITALIC_RE = re.compile(r"\*(.+?)\*")
_CODE_RE = re.compile(r"`([^`]+)`")

EXTERNAL_LINK_ATTRS = 'target="_blank" rel="noopener noreferrer" class="blog-link blog-link-external"'
INTERNAL_LINK_ATTRS = 'class="blog-link blog-link-internal"'


def is_external_url(url: str, site_domain: str = SITE_DOMAIN) -> bool:
    """True for http(s) URLs whose host is not on the site's own domain."""
    if not url or not _ABSOLUTE_URL_RE.match(url):
        return False
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return True
    return site_domain.lower() not in host


def _protect_escapes(text: str) -> tuple[str, list[str]]:
    literals: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        literals.append(match.group(1))
        return f"\x00{len(literals) - 1}\x00"

    return MARKDOWN_ESCAPE_RE.sub(_stash, text), literals


def _restore_escapes(text: str, literals: list[str]) -> str:
    return _PLACEHOLDER_RE.sub(lambda m: escape_html(literals[int(m.group(1))]), text)


def render_inline(text: str, site_domain: str = SITE_DOMAIN) -> str:
    """Convert one line of raw text to HTML."""
    protected, literals = _protect_escapes(text.replace("\x00", "\ufffd"))
    out = escape_html(protected)

    images: list[str] = []

    def _image(match: re.Match[str]) -> str:
        images.append(
            f'<img src="{match.group(2)}" alt="{match.group(1)}" '
            'loading="lazy" class="blog-inline-image" />'
        )
        return f"\x00img{len(images) - 1}\x00"

    out = _IMAGE_RE.sub(_image, out)

    def _link(match: re.Match[str]) -> str:
        label, url = match.group(1), match.group(2)
        raw_url = _restore_escapes(url, literals)
        external = is_external_url(html.unescape(raw_url), site_domain)
        attrs = EXTERNAL_LINK_ATTRS if external else INTERNAL_LINK_ATTRS
        return f'<a href="{url}" {attrs}>{label}</a>'

    out = _LINK_RE.sub(_link, out)
    out = _BOLD_RE.sub(r"<strong>\1</strong>", out)
    out = _ITALIC_RE.sub(r"<em>\1</em>", out)
    out = _CODE_RE.sub(r'<code class="blog-inline-code">\1</code>', out)

    out = _IMAGE_PLACEHOLDER_RE.sub(lambda m: images[int(m.group(1))], out)
    return _restore_escapes(out, literals)
