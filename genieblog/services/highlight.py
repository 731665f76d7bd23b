"""Minimal syntax highlighting for fenced code blocks.

JavaScript/TypeScript-family code is split into a flat token stream in a
single scan (comments, string literals, words, integers); each token is
escaped and wrapped exactly once. A keyword inside a string or comment stays
part of that string or comment. Other languages are escaped only.
"""

import re
from typing import NamedTuple

from genieblog.services.text import escape_html

DEFAULT_LANGUAGE = "text"

HIGHLIGHTED_LANGUAGES = frozenset(
    {"js", "jsx", "ts", "tsx", "javascript", "typescript"}
)

KEYWORDS = frozenset(
    {
        "const", "let", "var", "function", "return", "if", "else", "for",
        "while", "async", "await", "import", "export", "from", "class",
        "new", "try", "catch", "throw",
    }
)  # fmt: skip

_TOKEN_RE = re.compile(
    r"""
    (?P<comment>//[^\n]*)
    | (?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)
    | (?P<word>[A-Za-z_$][\w$]*)
    | (?P<number>\d+)
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    kind: str  # keyword, string, number, comment, text
    value: str


def normalize_language(language: str | None) -> str:
    return (language or "").strip().lower() or DEFAULT_LANGUAGE


def tokenize(code: str) -> list[Token]:
    """Split code into tokens; unmatched stretches become ``text`` tokens."""
    tokens: list[Token] = []
    pos = 0
    for match in _TOKEN_RE.finditer(code):
        if match.start() > pos:
            tokens.append(Token("text", code[pos : match.start()]))
        kind = match.lastgroup or "text"
        value = match.group(0)
        if kind == "word":
            kind = "keyword" if value in KEYWORDS else "text"
        tokens.append(Token(kind, value))
        pos = match.end()
    if pos < len(code):
        tokens.append(Token("text", code[pos:]))
    return tokens


def highlight_code(code: str, language: str | None = DEFAULT_LANGUAGE) -> str:
    """Return ``<code class="blog-code language-X">`` markup for a code block."""
    lang = normalize_language(language)
    css = f"blog-code language-{escape_html(lang)}"

    if lang not in HIGHLIGHTED_LANGUAGES:
        return f'<code class="{css}">{escape_html(code)}</code>'

    parts = []
    for token in tokenize(code):
        escaped = escape_html(token.value)
        if token.kind == "text":
            parts.append(escaped)
        else:
            parts.append(f'<span class="blog-token-{token.kind}">{escaped}</span>')
    return f'<code class="{css}">{"".join(parts)}</code>'
