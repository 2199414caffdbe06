"""Local configuration for booktree."""

from __future__ import annotations

import os


DEFAULT_MANIFEST_NAME = "SUMMARY.md"
DEFAULT_INDENT_UNIT = 2
DEFAULT_CONTENT_EXTENSIONS = ".md,.markdown"
DEFAULT_LOG_LEVEL = "WARNING"


def _parse_extensions(value: str) -> tuple[str, ...]:
    extensions: list[str] = []
    for item in value.split(","):
        item = item.strip().lower()
        if not item:
            continue
        if not item.startswith("."):
            item = "." + item
        extensions.append(item)
    return tuple(extensions)


BOOKTREE_MANIFEST_NAME = os.getenv("BOOKTREE_MANIFEST_NAME", DEFAULT_MANIFEST_NAME)
# Spaces per nesting level in the manifest's list indentation.
BOOKTREE_INDENT_UNIT = int(os.getenv("BOOKTREE_INDENT_UNIT", str(DEFAULT_INDENT_UNIT)))
BOOKTREE_CONTENT_EXTENSIONS = _parse_extensions(
    os.getenv("BOOKTREE_CONTENT_EXTENSIONS", DEFAULT_CONTENT_EXTENSIONS)
)
BOOKTREE_LOG_LEVEL = os.getenv("BOOKTREE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
