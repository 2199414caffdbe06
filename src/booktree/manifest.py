"""Parse an mdBook-style ``SUMMARY.md`` navigation manifest into entries."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from booktree.config import BOOKTREE_CONTENT_EXTENSIONS, BOOKTREE_INDENT_UNIT
from booktree.exceptions import ManifestSyntaxError
from booktree.paths import has_content_extension, normalize_link_text
from booktree.schemas import ChapterEntry, DividerEntry, ManifestEntry, ParsedManifest

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(?P<text>.+?)\s*$")
_RULE_RE = re.compile(r"^\s*([-*_])(\s*\1){2,}\s*$")
_LIST_ITEM_RE = re.compile(r"^(?P<indent>[ \t]*)[-*+]\s+(?P<body>.*?)\s*$")
_LINK_RE = re.compile(r"^\[(?P<title>(?:[^\[\]\\]|\\.)*)\]\((?P<target>[^)]*)\)$")
_LINK_TITLE_RE = re.compile(r"""^(?P<target>\S+)\s+(?:"[^"]*"|'[^']*')$""")
_ESCAPE_RE = re.compile(r"\\(.)")


def parse_manifest(
    text: str,
    *,
    indent_unit: int = BOOKTREE_INDENT_UNIT,
    extensions: Iterable[str] = BOOKTREE_CONTENT_EXTENSIONS,
) -> list[ManifestEntry]:
    """Parse manifest text into entries in source order.

    Raises:
        ManifestSyntaxError: If a line breaks the manifest grammar.
    """
    return list(read_manifest(text, indent_unit=indent_unit, extensions=extensions).entries)


def parse_manifest_title(text: str) -> str | None:
    """Return the book title: the first line, when it is a heading or prose."""
    for line in text.splitlines():
        if not line.strip() or _RULE_RE.match(line):
            continue
        return _title_text(line)
    return None


def read_manifest(
    text: str,
    *,
    indent_unit: int = BOOKTREE_INDENT_UNIT,
    extensions: Iterable[str] = BOOKTREE_CONTENT_EXTENSIONS,
) -> ParsedManifest:
    """Parse manifest text into its title and ordered entries.

    Line shapes:

    * the first non-blank line is the book title when it is a heading or
      prose; every later heading is a part divider at depth 0;
    * a list item ``- [Title](path.md)`` sits at ``indent // indent_unit``
      levels, pushed one level down once a part heading has been seen;
    * a bare ``[Title](path.md)`` line is a top-level chapter.

    Blank lines, horizontal rules and later prose are ignored. A list item with an
    empty target is a divider (a draft chapter).
    """
    if indent_unit < 1:
        raise ValueError(f"indent_unit must be positive, got {indent_unit}")
    extensions = tuple(extensions)

    title: str | None = None
    entries: list[ManifestEntry] = []
    in_part = False
    seen_structure = False

    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip() or _RULE_RE.match(line):
            continue

        if not seen_structure:
            seen_structure = True
            title = _title_text(line)
            if title is not None:
                continue

        heading = _HEADING_RE.match(line)
        if heading:
            entries.append(DividerEntry(depth=0, title=_heading_text(heading), line=line_no))
            in_part = True
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            level = _indent_level(item.group("indent"), indent_unit, line_no)
            depth = level + 1 if in_part else level
            entries.append(
                _link_entry(item.group("body"), depth=depth, line_no=line_no, extensions=extensions)
            )
            continue

        if not line[0].isspace() and _LINK_RE.match(line.strip()):
            entries.append(
                _link_entry(line.strip(), depth=0, line_no=line_no, extensions=extensions)
            )

    logger.debug("Parsed %d manifest entries (title=%r)", len(entries), title)
    return ParsedManifest(title=title, entries=tuple(entries))


def _heading_text(match: re.Match[str]) -> str:
    return match.group("text").rstrip("#").strip()


def _title_text(line: str) -> str | None:
    heading = _HEADING_RE.match(line)
    if heading:
        return _heading_text(heading)
    if _LIST_ITEM_RE.match(line) or _LINK_RE.match(line.strip()):
        return None
    return line.strip()


def _indent_level(indent: str, indent_unit: int, line_no: int) -> int:
    width = 0
    for char in indent:
        width += indent_unit if char == "\t" else 1
    if width % indent_unit:
        raise ManifestSyntaxError(
            f"indentation of {width} spaces is not a multiple of {indent_unit}",
            line=line_no,
        )
    return width // indent_unit


def _link_entry(
    body: str, *, depth: int, line_no: int, extensions: tuple[str, ...]
) -> ManifestEntry:
    link = _LINK_RE.match(body)
    if not link:
        raise ManifestSyntaxError(f"expected '[Title](path)', got {body!r}", line=line_no)

    title = _ESCAPE_RE.sub(r"\1", link.group("title")).strip()
    if not title:
        raise ManifestSyntaxError("link title is empty", line=line_no)

    target = normalize_link_text(link.group("target"))
    titled = _LINK_TITLE_RE.match(target)
    if titled:
        target = titled.group("target")
    if not target:
        return DividerEntry(depth=depth, title=title, line=line_no)

    path_part = target.split("#", 1)[0].split("?", 1)[0]
    if not has_content_extension(path_part, extensions):
        expected = ", ".join(extensions)
        raise ManifestSyntaxError(
            f"target {target!r} is not a content file (expected one of {expected})",
            line=line_no,
        )
    return ChapterEntry(depth=depth, title=title, target=target, line=line_no)
