"""Text escaping and plain-text helpers shared by the renderer and search.

Everything here is a pure function of its input.
"""

import math
import re

WORDS_PER_MINUTE = 200

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}
_HTML_ESCAPE_RE = re.compile(r"[&<>\"']")

# Characters an author may backslash-escape to keep them literal
MARKDOWN_ESCAPE_RE = re.compile(r"\\([\\`*_\[\]()#+\-.!])")

_FENCED_CODE_RE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`]+`")
_IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MARKUP_CHARS_RE = re.compile(r"[*_>#|-]")
_WHITESPACE_RE = re.compile(r"\s+")


def escape_html(value: str) -> str:
    """Replace the five markup-significant characters with entities.

    Callers must apply this exactly once to raw text; ``&amp;`` in the
    input becomes ``&amp;amp;``.
    """
    return _HTML_ESCAPE_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], value)


def decode_markdown_escapes(value: str) -> str:
    r"""Turn author-written escapes such as ``\*`` or ``\_`` into the bare character."""
    return MARKDOWN_ESCAPE_RE.sub(r"\1", value)


def strip_markdown(value: str) -> str:
    """Reduce markup to plain words for word counts and search."""
    text = _FENCED_CODE_RE.sub(" ", value)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(" ", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _MARKUP_CHARS_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def count_words(value: str) -> int:
    return len(strip_markdown(value).split())


def calculate_read_time(value: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimated reading time in whole minutes (rounded up, at least 1)."""
    rate = max(1, words_per_minute)
    return max(1, math.ceil(count_words(value) / rate))
