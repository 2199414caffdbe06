"""Extract raw link targets from Markdown chapter bodies."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for inline HTML links (pip install beautifulsoup4)."
    ) from exc


_FENCE_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})")
_INDENTED_CODE_RE = re.compile(r"^(?: {4}|\t)")
_LIST_MARKER_RE = re.compile(r"^ {0,3}(?:[-*+]|\d+[.)])\s")
_CODE_SPAN_RE = re.compile(r"(`+)(?:(?!\1).)+?\1")
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_INLINE_LINK_RE = re.compile(
    r"""!?\[[^\]]*\]\(\s*(?P<target><[^>]*>|[^()\s]+)(?:\s+(?:"[^"]*"|'[^']*'))?\s*\)"""
)
_REFERENCE_DEF_RE = re.compile(r"^ {0,3}\[(?!\^)[^\]]+\]:\s*(?P<target><[^>]*>|\S+)")
_AUTOLINK_RE = re.compile(r"<(?P<target>[A-Za-z][A-Za-z0-9+.\-]*:[^<>\s]+)>")
_HTML_TAG_RE = re.compile(r"<(?:a|img)\b[^>]*>", re.IGNORECASE)


def extract_links(markdown: str) -> list[str]:
    """Return every raw link target in ``markdown`` in source order.

    Inline links and images, reference definitions, autolinks and the
    ``href``/``src`` of inline ``<a>``/``<img>`` tags are collected. Fenced
    and indented code blocks and inline code spans are skipped, so code such
    as ``[&](int x)`` is never mistaken for a link. Footnote definitions
    (``[^1]: ...``) are not links.
    """
    links: list[str] = []
    for line in _prose_lines(_HTML_COMMENT_RE.sub("", markdown)):
        line = _CODE_SPAN_RE.sub(lambda match: " " * len(match.group(0)), line)
        found: list[tuple[int, str]] = []

        reference = _REFERENCE_DEF_RE.match(line)
        if reference:
            links.append(reference.group("target"))
            continue

        spans: list[tuple[int, int]] = []
        for match in _INLINE_LINK_RE.finditer(line):
            found.append((match.start("target"), match.group("target")))
            spans.append(match.span())
        for match in _AUTOLINK_RE.finditer(line):
            if any(start <= match.start() < end for start, end in spans):
                continue
            found.append((match.start("target"), match.group("target")))
        for match in _HTML_TAG_RE.finditer(line):
            target = _html_target(match.group(0))
            if target is not None:
                found.append((match.start(), target))

        links.extend(target for _, target in sorted(found, key=lambda item: item[0]))
    return links


def _prose_lines(markdown: str) -> list[str]:
    """Drop fenced and indented code blocks, keeping every other line."""
    lines: list[str] = []
    fence: str | None = None
    after_blank = True
    in_code = False
    in_list = False
    for line in markdown.splitlines():
        match = _FENCE_RE.match(line)
        if fence is not None:
            if match and match.group("fence")[0] == fence[0] and len(match.group("fence")) >= len(fence):
                if not line.strip().strip(fence[0]):
                    fence = None
            continue
        if match:
            fence = match.group("fence")
            continue

        if not line.strip():
            after_blank = True
            continue
        # An indented line opens a code block only after a blank line, and
        # never inside a list, where indentation continues the item.
        if _INDENTED_CODE_RE.match(line) and (in_code or (after_blank and not in_list)):
            in_code = True
            continue

        in_code = False
        after_blank = False
        in_list = bool(_LIST_MARKER_RE.match(line)) or (in_list and line[0].isspace())
        lines.append(line)
    return lines


def _html_target(tag_html: str) -> str | None:
    soup = BeautifulSoup(tag_html, "html.parser")
    tag = soup.find(["a", "img"])
    if tag is None:
        return None
    value = tag.get("href") if tag.name == "a" else tag.get("src")
    if not value or not isinstance(value, str):
        return None
    return value
