"""Tests for manifest parsing."""

from __future__ import annotations

import pytest

from booktree.exceptions import ManifestSyntaxError
from booktree.manifest import parse_manifest, parse_manifest_title, read_manifest
from booktree.schemas import ChapterEntry, DividerEntry

from conftest import SAMPLE_SUMMARY


def _shape(entries) -> list[tuple[str, int, str]]:
    return [(entry.kind, entry.depth, entry.title) for entry in entries]


class TestParseManifest:
    """Tests for parse_manifest."""

    def test_sample_summary(self) -> None:
        """The sample manifest yields chapters and part dividers at their depths."""
        entries = parse_manifest(SAMPLE_SUMMARY)

        assert _shape(entries) == [
            ("chapter", 0, "Introduction"),
            ("divider", 0, "Basics"),
            ("chapter", 1, "Types and Declarations"),
            ("chapter", 2, "Initialization"),
            ("chapter", 1, "Control Flow"),
            ("chapter", 2, "Switch"),
            ("divider", 0, "Abstraction"),
            ("chapter", 1, "Templates"),
            ("chapter", 1, "Memory"),
        ]
        assert entries[0].target == "README.md"
        assert entries[3].target == "basics/initialization.md"

    def test_first_heading_is_title_not_entry(self) -> None:
        """A leading heading becomes the title, not an entry."""
        parsed = read_manifest(SAMPLE_SUMMARY)

        assert parsed.title == "Summary"
        assert all(entry.title != "Summary" for entry in parsed.entries)

    def test_heading_after_entries_is_divider(self) -> None:
        """A heading after the first entry is a part divider."""
        text = (
            "- [Intro](introduction.md)\n"
            "# Getting Started\n"
            "- [Getting Started](getting-started/README.md)\n"
            "  - [Installation and Setup](getting-started/installation.md)\n"
        )
        parsed = read_manifest(text)

        assert parsed.title is None
        assert _shape(parsed.entries) == [
            ("chapter", 0, "Intro"),
            ("divider", 0, "Getting Started"),
            ("chapter", 1, "Getting Started"),
            ("chapter", 2, "Installation and Setup"),
        ]

    def test_preserves_source_order(self) -> None:
        """Entries keep manifest order, not alphabetical order."""
        titles = ["Zeta", "Alpha", "Mu", "Beta"]
        text = "\n".join(f"- [{title}]({title.lower()}.md)" for title in titles)

        assert [entry.title for entry in parse_manifest(text)] == titles

    def test_records_line_numbers(self) -> None:
        """Each entry records its 1-based line."""
        entries = parse_manifest("# Book\n\n- [One](one.md)\n\n- [Two](two.md)\n")

        assert [entry.line for entry in entries] == [3, 5]

    def test_prose_title_line_keeps_first_part(self) -> None:
        """A leading prose line is the title, so the next heading is a part."""
        text = (
            "A Tour of C++\n"
            "\n"
            "# Getting Started\n"
            "- [Basics](basics.md)\n"
            "# Abstraction\n"
            "- [Templates](templates.md)\n"
        )
        parsed = read_manifest(text)

        assert parsed.title == "A Tour of C++"
        assert _shape(parsed.entries) == [
            ("divider", 0, "Getting Started"),
            ("chapter", 1, "Basics"),
            ("divider", 0, "Abstraction"),
            ("chapter", 1, "Templates"),
        ]

    def test_heading_after_title_and_prose_is_divider(self) -> None:
        """Prose between the title and a heading does not make it a second title."""
        text = "# Summary\n\nRead in order.\n\n# Part One\n- [One](one.md)\n"
        parsed = read_manifest(text)

        assert parsed.title == "Summary"
        assert _shape(parsed.entries) == [("divider", 0, "Part One"), ("chapter", 1, "One")]

    def test_ignores_blank_lines_rules_and_prose(self) -> None:
        """Blank lines, rules and prose after the title produce no entries."""
        text = (
            "# Summary\n"
            "\n"
            "Some introductory prose that is not structural.\n"
            "- [One](one.md)\n"
            "\n"
            "---\n"
            "More prose.\n"
            "- [Two](two.md)\n"
        )
        assert _shape(parse_manifest(text)) == [("chapter", 0, "One"), ("chapter", 0, "Two")]

    @pytest.mark.parametrize("marker", ["-", "*", "+"])
    def test_list_markers(self, marker: str) -> None:
        """All three bullet markers are accepted."""
        entries = parse_manifest(f"{marker} [One](one.md)")

        assert isinstance(entries[0], ChapterEntry)

    @pytest.mark.parametrize("target", ["", "   ", "<>"])
    def test_empty_target_is_divider(self, target: str) -> None:
        """A list item with an empty target is a draft chapter."""
        entries = parse_manifest(f"- [Draft chapter]({target})")

        assert isinstance(entries[0], DividerEntry)
        assert entries[0].title == "Draft chapter"

    def test_link_title_attribute_is_dropped(self) -> None:
        """A quoted link title is not part of the target."""
        entries = parse_manifest('- [One](one.md "The first chapter")')

        assert entries[0].target == "one.md"

    def test_escaped_brackets_in_title(self) -> None:
        """Backslash escapes in titles are unescaped."""
        entries = parse_manifest(r"- [Arrays \[\] and spans](arrays.md)")

        assert entries[0].title == "Arrays [] and spans"

    def test_configurable_indent_unit(self) -> None:
        """Depth follows the configured indent unit."""
        text = "- [One](one.md)\n    - [Two](two.md)\n        - [Three](three.md)\n"

        entries = parse_manifest(text, indent_unit=4)

        assert [entry.depth for entry in entries] == [0, 1, 2]

    def test_tab_counts_as_one_level(self) -> None:
        """A tab is one nesting level."""
        entries = parse_manifest("- [One](one.md)\n\t- [Two](two.md)\n")

        assert [entry.depth for entry in entries] == [0, 1]

    def test_custom_extensions(self) -> None:
        """Accepted content extensions are configurable."""
        entries = parse_manifest("- [One](one.rst)", extensions=(".rst",))

        assert entries[0].target == "one.rst"

    def test_invalid_indent_unit(self) -> None:
        """A non-positive indent unit is rejected."""
        with pytest.raises(ValueError, match="indent_unit"):
            parse_manifest("- [One](one.md)", indent_unit=0)


class TestManifestSyntaxErrors:
    """Lines that break the manifest grammar."""

    def test_indent_not_multiple_of_unit(self) -> None:
        """Indentation between levels is a syntax error with its line."""
        with pytest.raises(ManifestSyntaxError, match="line 2: indentation of 3 spaces") as excinfo:
            parse_manifest("- [One](one.md)\n   - [Two](two.md)\n")
        assert excinfo.value.line == 2

    def test_list_item_without_link(self) -> None:
        """A bullet that is not a link is a syntax error."""
        with pytest.raises(ManifestSyntaxError, match=r"expected '\[Title\]\(path\)'"):
            parse_manifest("- Just some text")

    def test_empty_title(self) -> None:
        """A link with a blank title is a syntax error."""
        with pytest.raises(ManifestSyntaxError, match="title is empty"):
            parse_manifest("- [ ](one.md)")

    def test_target_without_content_extension(self) -> None:
        """A chapter target must be a content file."""
        with pytest.raises(ManifestSyntaxError, match="not a content file"):
            parse_manifest("- [Site](https://example.com)")


class TestParseManifestTitle:
    """Tests for parse_manifest_title."""

    def test_returns_leading_heading(self) -> None:
        """The leading heading is the title, trailing hashes removed."""
        assert parse_manifest_title("\n# A Tour of C++ ##\n- [One](one.md)") == "A Tour of C++"

    def test_none_when_entries_come_first(self) -> None:
        """No title when an entry comes first."""
        assert parse_manifest_title("- [One](one.md)\n# Part") is None

    def test_returns_leading_prose_line(self) -> None:
        """A leading prose line is the title."""
        assert parse_manifest_title("A Tour of C++\n\n# Getting Started\n") == "A Tour of C++"

    def test_agrees_with_read_manifest(self) -> None:
        """Both entry points pick the same title."""
        for text in (SAMPLE_SUMMARY, "Intro prose\n# Part\n- [A](a.md)\n", "- [A](a.md)\n# Part\n"):
            assert parse_manifest_title(text) == read_manifest(text).title
