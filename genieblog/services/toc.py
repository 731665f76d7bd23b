"""Table-of-contents extraction from raw post bodies."""

from genieblog.models.blog import TocEntry
from genieblog.services.renderer import FENCE, HEADING_RE, is_table_start, table_end
from genieblog.services.slugs import make_slugger
from genieblog.services.text import decode_markdown_escapes

TOC_LEVELS = (2, 3)


def extract_table_of_contents(raw_text: str, *, unique_ids: bool = False) -> list[TocEntry]:
    """List the ``##`` and ``###`` headings in document order.

    Anchors match the ``id`` attributes :func:`render` gives the same
    headings. Lines inside fenced code blocks and tables are skipped, since
    the renderer never turns them into headings.
    """
    lines = raw_text.replace("\r\n", "\n").split("\n")
    slug_for = make_slugger(unique_ids)
    entries: list[TocEntry] = []
    in_fence = False

    index = 0
    while index < len(lines):
        trimmed = lines[index].strip()
        index += 1
        if trimmed.startswith(FENCE):
            in_fence = not in_fence
            continue
        if in_fence or not trimmed:
            continue
        if is_table_start(lines, index - 1):
            index = table_end(lines, index - 1)
            continue

        match = HEADING_RE.match(trimmed)
        if not match:
            continue
        title = decode_markdown_escapes(match.group(2).strip())
        # Every heading claims its anchor so repeated-title suffixes line up
        anchor = slug_for(title)
        level = len(match.group(1))
        if level in TOC_LEVELS:
            entries.append(TocEntry(id=anchor, title=title, level=level))

    return entries
