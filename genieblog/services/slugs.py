"""Heading text → URL-safe anchor identifiers."""

import re

from genieblog.services.text import decode_markdown_escapes

_NON_SLUG_CHARS_RE = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")
_HYPHEN_RUN_RE = re.compile(r"-+")


def slugify(text: str) -> str:
    """Lowercase, drop punctuation, and hyphenate whitespace.

    ``slugify("Hello, World!") == "hello-world"``. Deterministic: two
    headings with identical text produce the same slug.
    """
    slug = decode_markdown_escapes(text).lower().strip()
    slug = _NON_SLUG_CHARS_RE.sub("", slug)
    slug = _WHITESPACE_RE.sub("-", slug)
    return _HYPHEN_RUN_RE.sub("-", slug)


class SlugRegistry:
    """Hands out per-document unique slugs.

    The first heading keeps its plain slug; later headings with the same
    text get ``-2``, ``-3`` and so on. Use one registry per document so the
    renderer and the table of contents agree on anchors.
    """

    def __init__(self) -> None:
        self._seen: dict[str, int] = {}

    def claim(self, text: str) -> str:
        base = slugify(text)
        count = self._seen.get(base, 0) + 1
        self._seen[base] = count
        if count == 1:
            return base
        candidate = f"{base}-{count}"
        # A literal "foo-2" heading may already hold the suffixed form
        while candidate in self._seen:
            count += 1
            candidate = f"{base}-{count}"
        self._seen[base] = count
        self._seen[candidate] = 1
        return candidate


def make_slugger(unique: bool = False):
    """Return a ``text -> slug`` callable for one document."""
    if unique:
        return SlugRegistry().claim
    return slugify
