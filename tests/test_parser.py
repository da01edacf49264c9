"""Tests for wiki/parser.py."""

from loadstone.wiki.parser import clean_heading, parse_wiki_content


def _wrap(body: str) -> str:
    return f'<div class="mw-parser-output">{body}</div>'


class TestSectioning:
    def test_empty_document(self):
        assert parse_wiki_content("") == {}
        assert parse_wiki_content(_wrap("")) == {}

    def test_whitespace_only_summary(self):
        assert parse_wiki_content(_wrap("<p>   </p>\n<div> </div>")) == {}

    def test_summary_only(self):
        assert parse_wiki_content(_wrap("<p>  The whip is a weapon. </p>")) == {
            "Summary": "The whip is a weapon."
        }

    def test_sections_in_document_order(self):
        html = _wrap(
            "<p>Intro.</p>"
            "<h2>Stats</h2><p>Strong.</p>"
            "<h2>Drop sources</h2><p>Demons.</p>"
        )
        result = parse_wiki_content(html)
        assert list(result) == ["Summary", "Stats", "Drop sources"]
        assert result["Stats"] == "Strong."
        assert result["Drop sources"] == "Demons."

    def test_empty_summary_omitted(self):
        result = parse_wiki_content(_wrap("<h2>Stats</h2><p>Content</p>"))
        assert result == {"Stats": "Content"}

    def test_empty_section_omitted(self):
        result = parse_wiki_content(_wrap("<h2>Empty</h2><h2>Full</h2><p>x</p>"))
        assert "Empty" not in result
        assert result["Full"] == "x"

    def test_subheadings_inlined(self):
        html = _wrap("<h2>Quest</h2><p>Start.</p><h3>Part one</h3><p>Go.</p><h4>Detail</h4><p>More.</p>")
        result = parse_wiki_content(html)
        assert list(result) == ["Quest"]
        assert result["Quest"] == "Start.\n\n=== Part one ===\nGo.\n\n=== Detail ===\nMore."

    def test_without_wrapper_uses_whole_document(self):
        result = parse_wiki_content("<p>Top</p><h2>Next</h2><p>Body</p>")
        assert result == {"Summary": "Top", "Next": "Body"}

    def test_full_html_document(self):
        html = "<html><body><p>Top</p><h2>Next</h2><p>Body</p></body></html>"
        assert parse_wiki_content(html) == {"Summary": "Top", "Next": "Body"}

    def test_bare_text_counts_as_summary(self):
        assert parse_wiki_content("Just some text") == {"Summary": "Just some text"}

    def test_duplicate_headings_are_merged(self):
        html = _wrap("<h2>Trivia</h2><p>One.</p><h2>Other</h2><p>x</p><h2>Trivia</h2><p>Two.</p>")
        result = parse_wiki_content(html)
        assert list(result) == ["Trivia", "Other"]
        assert result["Trivia"] == "One.\n\nTwo."

    def test_modern_heading_wrapper(self):
        html = _wrap(
            '<p>Intro.</p>'
            '<div class="mw-heading mw-heading2"><h2 id="Stats">Stats</h2>'
            '<span class="mw-editsection">[<a href="#">edit</a>]</span></div>'
            "<p>Strong.</p>"
            '<div class="mw-heading mw-heading3"><h3>Bonuses</h3></div><p>+5</p>'
        )
        result = parse_wiki_content(html)
        assert list(result) == ["Summary", "Stats"]
        assert result["Stats"] == "Strong.\n\n=== Bonuses ===\n+5"


class TestHeadings:
    def test_edit_link_suffix_stripped(self):
        result = parse_wiki_content(_wrap("<h2>Section Title [edit]</h2><p>x</p>"))
        assert list(result) == ["Section Title"]

    def test_edit_source_suffix_stripped(self):
        result = parse_wiki_content(_wrap("<h2>Section Title [edit | edit source]</h2><p>x</p>"))
        assert list(result) == ["Section Title"]

    def test_editsection_span_removed(self):
        html = _wrap(
            '<h2><span class="mw-headline">Combat</span>'
            '<span class="mw-editsection">[<a href="#">edit</a> | <a href="#">edit source</a>]</span></h2>'
            "<p>x</p>"
        )
        assert list(parse_wiki_content(html)) == ["Combat"]

    def test_clean_heading(self):
        assert clean_heading("  Drops [edit]  ") == "Drops"
        assert clean_heading("Drops") == "Drops"


class TestTablesAndLists:
    def test_table_rows(self):
        html = _wrap(
            "<h2>Stats</h2>"
            "<table><tr><th>Name</th><th>Value</th></tr>"
            "<tr><td>Attack</td><td>70</td></tr></table>"
        )
        text = parse_wiki_content(html)["Stats"]
        assert "Name | Value" in text
        assert "Attack | 70" in text
        assert text.index("Name | Value") < text.index("Attack | 70")

    def test_table_cell_whitespace_collapsed(self):
        html = _wrap("<table><tr><td>  Level\n\n  requirement </td><td>\t70 </td></tr></table>")
        assert parse_wiki_content(html) == {"Summary": "Level requirement | 70"}

    def test_empty_rows_skipped(self):
        html = _wrap("<table><tr></tr><tr><td>a</td></tr></table>")
        assert parse_wiki_content(html) == {"Summary": "a"}

    def test_list_items(self):
        html = _wrap("<h2>Items</h2><ul><li>Item 1</li><li>Item 2</li></ul>")
        assert parse_wiki_content(html)["Items"] == "• Item 1\n• Item 2"

    def test_ordered_list_direct_children_only(self):
        html = _wrap("<ol><li> First <ul><li>nested</li></ul></li><li>Second</li></ol>")
        text = parse_wiki_content(html)["Summary"]
        lines = text.splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("• First")
        assert lines[1] == "• Second"


class TestNoise:
    def test_noise_never_appears(self):
        html = _wrap(
            "<style>.x{color:red}</style>"
            "<script>alert(1)</script>"
            "<noscript>enable js</noscript>"
            "<p>Real text.</p>"
            '<div class="navbox">Navigation junk</div>'
            '<div class="thumb"><a class="magnify">Enlarge</a>Caption</div>'
        )
        result = parse_wiki_content(html)
        assert result == {"Summary": "Real text.\nCaption"}
        for text in result.values():
            assert "<script" not in text
            assert "<style" not in text
            assert "navbox" not in text
            assert "Navigation junk" not in text

    def test_nested_navbox_removed(self):
        html = _wrap('<h2>See also</h2><div><p>Keep</p><table class="navbox"><tr><td>Drop</td></tr></table></div>')
        assert parse_wiki_content(html) == {"See also": "Keep"}
