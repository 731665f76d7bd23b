"""Block-level Markdown → HTML renderer for blog post bodies.

A line-oriented state machine. ``ParserState`` holds the only state that
carries between lines: which list (if any) is open and the code fence being
collected. Each line is routed to the first rule that claims it, in this
order: fence, blank, table, heading, blockquote, unordered item, ordered
item, horizontal rule, paragraph. Every line lands somewhere, so rendering
never fails.

Each non-blank paragraph line becomes its own ``<p>``.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from genieblog.services.highlight import DEFAULT_LANGUAGE, highlight_code
from genieblog.services.inline import SITE_DOMAIN, render_inline
from genieblog.services.slugs import make_slugger
from genieblog.services.text import decode_markdown_escapes

FENCE = "```"

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
BLOCKQUOTE_RE = re.compile(r"^>\s+(.*)$")
UNORDERED_ITEM_RE = re.compile(r"^[-*]\s+(.+)$")
ORDERED_ITEM_RE = re.compile(r"^\d+\.\s+(.+)$")
HORIZONTAL_RULE_RE = re.compile(r"^---+$")
TABLE_SEPARATOR_RE = re.compile(r"^\s*\|?[\s:-]+\|[\s|:-]*$")


class ListMode(str, Enum):
    NONE = "none"
    UNORDERED = "unordered"
    ORDERED = "ordered"


_LIST_TAGS = {
    ListMode.UNORDERED: ('<ul class="blog-list">', "</ul>"),
    ListMode.ORDERED: ('<ol class="blog-ordered-list">', "</ol>"),
}


@dataclass
class ParserState:
    list_mode: ListMode = ListMode.NONE
    in_code_block: bool = False
    code_language: str = DEFAULT_LANGUAGE
    code_buffer: list[str] = field(default_factory=list)


def close_list(state: ParserState, out: list[str]) -> None:
    if state.list_mode is not ListMode.NONE:
        out.append(_LIST_TAGS[state.list_mode][1])
        state.list_mode = ListMode.NONE


def open_list(state: ParserState, mode: ListMode, out: list[str]) -> None:
    """Make ``mode`` the open list, closing a list of the other kind first."""
    if state.list_mode is mode:
        return
    close_list(state, out)
    out.append(_LIST_TAGS[mode][0])
    state.list_mode = mode


def open_code_block(state: ParserState, language: str) -> None:
    state.in_code_block = True
    state.code_language = language or DEFAULT_LANGUAGE
    state.code_buffer = []


def close_code_block(state: ParserState, out: list[str]) -> None:
    if not state.in_code_block:
        return
    code = "\n".join(state.code_buffer)
    out.append(
        f'<pre class="blog-code-block">{highlight_code(code, state.code_language)}</pre>'
    )
    state.in_code_block = False
    state.code_language = DEFAULT_LANGUAGE
    state.code_buffer = []


def _split_cells(line: str, site_domain: str) -> list[str]:
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|"):
        stripped = stripped[:-1]
    return [render_inline(cell.strip(), site_domain) for cell in stripped.split("|")]


def is_table_start(lines: list[str], index: int) -> bool:
    if index + 1 >= len(lines):
        return False
    return "|" in lines[index] and bool(TABLE_SEPARATOR_RE.match(lines[index + 1]))


def table_end(lines: list[str], index: int) -> int:
    """Index of the first line after the table whose header is ``lines[index]``.

    Rows run until a line without a pipe or a code fence.
    """
    cursor = index + 2
    while cursor < len(lines):
        row = lines[cursor]
        if "|" not in row or row.strip().startswith(FENCE):
            break
        cursor += 1
    return cursor


def render_table(lines: list[str], index: int, site_domain: str) -> tuple[str, int]:
    """Render the table whose header is ``lines[index]``.

    Returns the HTML and the index of the first line after the table.
    """
    headers = _split_cells(lines[index], site_domain)
    cursor = table_end(lines, index)
    rows = [_split_cells(row, site_domain) for row in lines[index + 2 : cursor]]

    head = "".join(f"<th>{cell}</th>" for cell in headers)
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>" for cells in rows
    )
    table = (
        '<div class="blog-table-wrap"><table class="blog-table">'
        f"<thead><tr>{head}</tr></thead><tbody>{body}</tbody>"
        "</table></div>"
    )
    return table, cursor


def render(raw_text: str, *, site_domain: str = SITE_DOMAIN, unique_ids: bool = False) -> str:
    """Render a post body to an HTML fragment."""
    lines = raw_text.replace("\r\n", "\n").split("\n")
    slug_for = make_slugger(unique_ids)
    state = ParserState()
    out: list[str] = []

    index = 0
    while index < len(lines):
        line = lines[index]
        trimmed = line.strip()
        index += 1

        if state.in_code_block:
            if trimmed.startswith(FENCE):
                close_code_block(state, out)
            else:
                state.code_buffer.append(line)
            continue

        if trimmed.startswith(FENCE):
            close_list(state, out)
            open_code_block(state, trimmed[len(FENCE) :].strip())
            continue

        if not trimmed:
            close_list(state, out)
            continue

        if is_table_start(lines, index - 1):
            close_list(state, out)
            table, index = render_table(lines, index - 1, site_domain)
            out.append(table)
            continue

        match = HEADING_RE.match(trimmed)
        if match:
            close_list(state, out)
            level = len(match.group(1))
            text = match.group(2).strip()
            anchor = slug_for(decode_markdown_escapes(text))
            out.append(
                f'<h{level} id="{anchor}" class="blog-h{level}">'
                f"{render_inline(text, site_domain)}</h{level}>"
            )
            continue

        match = BLOCKQUOTE_RE.match(trimmed)
        if match:
            close_list(state, out)
            out.append(
                '<blockquote class="blog-blockquote">'
                f"{render_inline(match.group(1), site_domain)}</blockquote>"
            )
            continue

        match = UNORDERED_ITEM_RE.match(trimmed)
        if match:
            open_list(state, ListMode.UNORDERED, out)
            out.append(f"<li>{render_inline(match.group(1), site_domain)}</li>")
            continue

        match = ORDERED_ITEM_RE.match(trimmed)
        if match:
            open_list(state, ListMode.ORDERED, out)
            out.append(f"<li>{render_inline(match.group(1), site_domain)}</li>")
            continue

        if HORIZONTAL_RULE_RE.match(trimmed):
            close_list(state, out)
            out.append('<hr class="blog-divider" />')
            continue

        close_list(state, out)
        out.append(f'<p class="blog-paragraph">{render_inline(trimmed, site_domain)}</p>')

    # Unterminated fence: emit what was collected
    close_code_block(state, out)
    close_list(state, out)
    return "\n".join(out)
