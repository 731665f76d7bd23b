"""Tests for table-of-contents extraction."""

from genieblog.models.blog import TocEntry
from genieblog.services.renderer import render
from genieblog.services.toc import extract_table_of_contents


def test_only_level_two_and_three_headings_in_order():
    toc = extract_table_of_contents("# Title\n## A\n### A1\n## B")
    assert [(e.title, e.level) for e in toc] == [("A", 2), ("A1", 3), ("B", 2)]
    assert [e.id for e in toc] == ["a", "a1", "b"]


def test_entries_are_toc_models():
    assert extract_table_of_contents("## Why We Built It") == [
        TocEntry(id="why-we-built-it", title="Why We Built It", level=2)
    ]


def test_deeper_headings_are_excluded():
    assert extract_table_of_contents("#### Deep\n##### Deeper") == []


def test_escapes_are_decoded_in_title_and_id():
    toc = extract_table_of_contents(r"## Use \*args \& kwargs")
    assert toc[0].title == r"Use *args \& kwargs"
    assert toc[0].id == "use-args-kwargs"


def test_indented_headings_are_found():
    toc = extract_table_of_contents("   ## Indented")
    assert toc[0].title == "Indented"


def test_headings_inside_code_fences_are_ignored():
    text = "## Real\n```bash\n## just a comment\n```\n## Also real"
    assert [e.title for e in extract_table_of_contents(text)] == ["Real", "Also real"]


def test_empty_text():
    assert extract_table_of_contents("") == []


def test_ids_match_rendered_heading_anchors():
    text = "# Guide\n## Step 1: Connect\n### Sub-step\n## FAQ\n## FAQ"
    html = render(text)
    for entry in extract_table_of_contents(text):
        assert f'id="{entry.id}"' in html


def test_unique_ids_match_renderer():
    text = "# FAQ\n## FAQ\n### FAQ"
    toc = extract_table_of_contents(text, unique_ids=True)
    html = render(text, unique_ids=True)
    assert [e.id for e in toc] == ["faq-2", "faq-3"]
    assert 'id="faq-2"' in html
    assert 'id="faq-3"' in html


def test_heading_like_table_lines_are_skipped():
    text = "## Plans | Price\n|---|---|\n## Pro | $10\n\n## Pricing"
    toc = extract_table_of_contents(text)
    assert [e.id for e in toc] == ["pricing"]
    assert 'id="pricing"' in render(text)


def test_table_rows_do_not_shift_unique_ids():
    text = "## FAQ\n| a | b |\n|---|---|\n## FAQ | row\n## FAQ"
    toc = extract_table_of_contents(text, unique_ids=True)
    html = render(text, unique_ids=True)
    assert [e.id for e in toc] == ["faq", "faq-2"]
    assert 'id="faq-2"' in html
    assert 'id="faq-3"' not in html
