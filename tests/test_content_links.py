"""Tests for in-body link extraction."""

from __future__ import annotations

from booktree.content_links import extract_links


class TestExtractLinks:
    """Tests for extract_links."""

    def test_inline_links_in_order(self) -> None:
        """Inline links and images come back in source order."""
        text = "See [one](a.md) and [two](../b.md#part), then ![diagram](img/d.png)."

        assert extract_links(text) == ["a.md", "../b.md#part", "img/d.png"]

    def test_link_with_title(self) -> None:
        """A quoted link title is not part of the target."""
        assert extract_links('[Templates Overview](../templates/README.md "Templates")') == [
            "../templates/README.md"
        ]

    def test_angle_bracket_target(self) -> None:
        """Angle-bracket targets are returned verbatim."""
        assert extract_links("[x](<with space.md>)") == ["<with space.md>"]

    def test_reference_definitions(self) -> None:
        """Reference definitions yield their targets."""
        text = "Read the [guide][g].\n\n[g]: ../guide/README.md\n  [cpp]: <https://isocpp.org>\n"

        assert extract_links(text) == ["../guide/README.md", "<https://isocpp.org>"]

    def test_autolinks(self) -> None:
        """Autolinks yield the bare URL."""
        assert extract_links("Visit <https://en.cppreference.com/w/>.") == [
            "https://en.cppreference.com/w/"
        ]

    def test_skips_fenced_code(self) -> None:
        """Backtick and tilde fences hide their contents."""
        text = (
            "Before [a](a.md).\n"
            "```cpp\n"
            "auto f = [&](int x) { return x; };\n"
            "int arr[3](values);\n"
            "```\n"
            "~~~~\n"
            "[not](a-link.md)\n"
            "```\n"
            "still code [nope](nope.md)\n"
            "~~~~\n"
            "After [b](b.md).\n"
        )

        assert extract_links(text) == ["a.md", "b.md"]

    def test_unclosed_fence_swallows_rest(self) -> None:
        """An unclosed fence runs to the end of the document."""
        assert extract_links("```\n[a](a.md)\n") == []

    def test_skips_inline_code(self) -> None:
        """Code spans of any backtick length are skipped."""
        text = "Use `[&](auto v)` or ``[x](y.md)`` but follow [real](real.md)."

        assert extract_links(text) == ["real.md"]

    def test_inline_html(self) -> None:
        """href and src of inline a/img tags are collected."""
        text = 'Click <a href="../memory/README.md">here</a> or see <img src="fig.png" alt="x">.'

        assert extract_links(text) == ["../memory/README.md", "fig.png"]

    def test_html_without_target(self) -> None:
        """An anchor tag with no href yields nothing."""
        assert extract_links('<a name="top"></a>') == []

    def test_html_comments_ignored(self) -> None:
        """Links inside HTML comments are ignored."""
        assert extract_links("<!-- [old](old.md)\n[older](older.md) -->\n[new](new.md)") == [
            "new.md"
        ]

    def test_plain_prose(self) -> None:
        """Brackets and parentheses alone are not links."""
        assert extract_links("No links here, just [brackets] and (parens).") == []

    def test_footnote_definitions_are_not_links(self) -> None:
        """Footnote markers and definitions yield nothing."""
        assert extract_links("Uses RAII.[^1]\n\n[^1]: See the standard for details.\n") == []

    def test_footnote_beside_reference_definition(self) -> None:
        """Only the reference definition counts when both kinds are present."""
        text = "[^note]: Background reading.\n[std]: ../reference/standard.md\n"

        assert extract_links(text) == ["../reference/standard.md"]

    def test_skips_indented_code(self) -> None:
        """A block indented four spaces after a blank line is code."""
        text = (
            "Text\n"
            "\n"
            "    auto f = [&](x) { };\n"
            "\n"
            "    int arr[3](values);\n"
            "\n"
            "After [b](b.md).\n"
        )

        assert extract_links(text) == ["b.md"]

    def test_indented_list_continuation_is_prose(self) -> None:
        """Indented paragraphs under a list item are still scanned."""
        text = (
            "- First item\n"
            "\n"
            "    Continued, see [details](details.md).\n"
        )

        assert extract_links(text) == ["details.md"]

    def test_indented_line_without_blank_is_prose(self) -> None:
        """An indented line directly after a paragraph continues it."""
        assert extract_links("Intro line\n    with [a link](a.md)\n") == ["a.md"]
