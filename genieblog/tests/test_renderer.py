"""Tests for the block renderer state machine."""

from genieblog.services.renderer import (
    ListMode,
    ParserState,
    close_code_block,
    close_list,
    open_list,
    render,
)

P = '<p class="blog-paragraph">{}</p>'


class TestParagraphs:
    def test_plain_text_renders_as_single_paragraph(self):
        assert render("Just some plain words here.") == P.format("Just some plain words here.")

    def test_plain_text_is_escaped(self):
        assert render("Fish & chips <b>") == P.format("Fish &amp; chips &lt;b&gt;")

    def test_entities_are_escaped_exactly_once(self):
        assert render("&amp;") == P.format("&amp;amp;")

    def test_each_non_blank_line_is_its_own_paragraph(self):
        assert render("one\ntwo\n\nthree") == "\n".join(
            [P.format("one"), P.format("two"), P.format("three")]
        )

    def test_empty_input(self):
        assert render("") == ""
        assert render("\n\n   \n") == ""

    def test_crlf_line_endings(self):
        assert render("a\r\nb") == "\n".join([P.format("a"), P.format("b")])

    def test_nul_characters_never_break_rendering(self):
        assert render("x \x003\x00 y") == P.format("x \ufffd3\ufffd y")
        assert render("\\* \x000\x00") == P.format("* \ufffd0\ufffd")


class TestHeadings:
    def test_heading_levels_and_anchor(self):
        assert render("## Hello, World!") == (
            '<h2 id="hello-world" class="blog-h2">Hello, World!</h2>'
        )
        assert render("###### Six") == '<h6 id="six" class="blog-h6">Six</h6>'

    def test_heading_needs_space_after_hashes(self):
        assert render("#hashtag") == P.format("#hashtag")

    def test_heading_escapes_are_decoded_for_anchor(self):
        assert render(r"## Use \*args") == '<h2 id="use-args" class="blog-h2">Use *args</h2>'

    def test_heading_inline_formatting(self):
        assert render("# The **best** tool") == (
            '<h1 id="the-best-tool" class="blog-h1">The <strong>best</strong> tool</h1>'
        )

    def test_repeated_headings_share_anchor_by_default(self):
        html = render("## FAQ\n## FAQ")
        assert html.count('id="faq"') == 2

    def test_unique_ids_suffix_repeats(self):
        html = render("## FAQ\n## FAQ", unique_ids=True)
        assert 'id="faq"' in html
        assert 'id="faq-2"' in html


class TestLists:
    def test_unordered_list(self):
        assert render("- a\n* b") == '<ul class="blog-list">\n<li>a</li>\n<li>b</li>\n</ul>'

    def test_ordered_list(self):
        assert render("1. one\n2. two") == (
            '<ol class="blog-ordered-list">\n<li>one</li>\n<li>two</li>\n</ol>'
        )

    def test_blank_line_closes_list_before_paragraph(self):
        assert render("- a\n\nparagraph") == "\n".join(
            ['<ul class="blog-list">', "<li>a</li>", "</ul>", P.format("paragraph")]
        )

    def test_paragraph_line_closes_list(self):
        html = render("- a\nafter")
        assert html.index("</ul>") < html.index("<p")

    def test_switching_list_kinds_closes_previous_list(self):
        assert render("- a\n1. b") == "\n".join(
            [
                '<ul class="blog-list">',
                "<li>a</li>",
                "</ul>",
                '<ol class="blog-ordered-list">',
                "<li>b</li>",
                "</ol>",
            ]
        )

    def test_list_items_get_inline_formatting(self):
        assert "<li><strong>Bold</strong> item</li>" in render("- **Bold** item")

    def test_list_open_at_end_of_input_is_closed(self):
        assert render("1. last").endswith("</ol>")


class TestCodeBlocks:
    def test_fenced_block_with_language(self):
        assert render("```js\nconst x = 1;\n```") == (
            '<pre class="blog-code-block"><code class="blog-code language-js">'
            '<span class="blog-token-keyword">const</span> x = '
            '<span class="blog-token-number">1</span>;</code></pre>'
        )

    def test_unterminated_fence_is_flushed_at_end(self):
        html = render("```js\nconst x = 1;")
        assert html.startswith('<pre class="blog-code-block">')
        assert '<span class="blog-token-keyword">const</span> x = ' in html

    def test_fence_suppresses_block_rules(self):
        html = render("```\n# not a heading\n- not a list\n```")
        assert html == (
            '<pre class="blog-code-block"><code class="blog-code language-text">'
            "# not a heading\n- not a list</code></pre>"
        )

    def test_code_lines_keep_indentation(self):
        html = render("```python\ndef f():\n    return 1\n```")
        assert "def f():\n    return 1" in html

    def test_fence_closes_open_list(self):
        html = render("- item\n```\ncode\n```")
        assert html.index("</ul>") < html.index("<pre")


class TestOtherBlocks:
    def test_blockquote(self):
        assert render("> Quote *here*") == (
            '<blockquote class="blog-blockquote">Quote <em>here</em></blockquote>'
        )

    def test_horizontal_rule(self):
        assert render("---") == '<hr class="blog-divider" />'
        assert render("-----") == '<hr class="blog-divider" />'

    def test_horizontal_rule_closes_list(self):
        assert render("- a\n---") == (
            '<ul class="blog-list">\n<li>a</li>\n</ul>\n<hr class="blog-divider" />'
        )

    def test_table(self):
        html = render("| Day | Slot |\n|-----|:----:|\n| Tue | **10:30** |\n| Thu | 6 PM |")
        assert html == (
            '<div class="blog-table-wrap"><table class="blog-table">'
            "<thead><tr><th>Day</th><th>Slot</th></tr></thead>"
            "<tbody><tr><td>Tue</td><td><strong>10:30</strong></td></tr>"
            "<tr><td>Thu</td><td>6 PM</td></tr></tbody>"
            "</table></div>"
        )

    def test_table_ends_at_first_non_table_line(self):
        html = render("| A | B |\n|---|---|\n| 1 | 2 |\nafter")
        assert html.endswith(P.format("after"))
        assert html.count("<tr>") == 2

    def test_pipe_without_separator_is_a_paragraph(self):
        assert render("a | b") == P.format("a | b")

    def test_table_closes_open_list(self):
        html = render("- item\n| A | B |\n|---|---|")
        assert html.index("</ul>") < html.index("<table")


class TestStateTransitions:
    def test_open_list_is_idempotent(self):
        state, out = ParserState(), []
        open_list(state, ListMode.UNORDERED, out)
        open_list(state, ListMode.UNORDERED, out)
        assert out == ['<ul class="blog-list">']

    def test_open_list_switches_kind(self):
        state, out = ParserState(list_mode=ListMode.ORDERED), []
        open_list(state, ListMode.UNORDERED, out)
        assert out == ["</ol>", '<ul class="blog-list">']
        assert state.list_mode is ListMode.UNORDERED

    def test_close_list_without_open_list_is_noop(self):
        state, out = ParserState(), []
        close_list(state, out)
        assert out == []

    def test_close_code_block_resets_state(self):
        state = ParserState(in_code_block=True, code_language="js", code_buffer=["1"])
        out: list[str] = []
        close_code_block(state, out)
        assert len(out) == 1
        assert state == ParserState()


def test_mixed_document():
    text = "\n".join(
        [
            "# Title",
            "",
            "Intro with a [link](https://x.com).",
            "",
            "## Steps",
            "1. First",
            "2. Second",
            "",
            "> Tip: batch your posts",
        ]
    )
    html = render(text)
    assert html.splitlines() == [
        '<h1 id="title" class="blog-h1">Title</h1>',
        P.format(
            'Intro with a <a href="https://x.com" target="_blank" rel="noopener noreferrer" '
            'class="blog-link blog-link-external">link</a>.'
        ),
        '<h2 id="steps" class="blog-h2">Steps</h2>',
        '<ol class="blog-ordered-list">',
        "<li>First</li>",
        "<li>Second</li>",
        "</ol>",
        '<blockquote class="blog-blockquote">Tip: batch your posts</blockquote>',
    ]
