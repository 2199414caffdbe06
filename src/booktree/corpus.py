"""Filesystem boundary: existence checks and link lookups for a book checkout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from booktree.config import BOOKTREE_CONTENT_EXTENSIONS
from booktree.content_links import extract_links

logger = logging.getLogger(__name__)

FileExists = Callable[[str], bool]
ContentLinks = Callable[[str], list[str]]


def file_exists_under(root: Path) -> FileExists:
    """Return a predicate telling whether a repository-relative file exists."""

    def file_exists(path: str) -> bool:
        return (root / path).is_file()

    return file_exists


def content_links_under(root: Path, encoding: str = "utf-8") -> ContentLinks:
    """Return a lookup of the raw links in a repository-relative document.

    Unreadable documents are logged and yield no links.
    """

    def content_links(path: str) -> list[str]:
        try:
            text = (root / path).read_text(encoding=encoding, errors="replace")
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return []
        return extract_links(text)

    return content_links


def list_content_files(
    root: Path,
    base: str = "",
    extensions: Iterable[str] = BOOKTREE_CONTENT_EXTENSIONS,
    *,
    exclude: Iterable[str] = (),
) -> list[str]:
    """List content files under ``root / base`` as sorted repository-relative paths."""
    suffixes = {ext.lower() for ext in extensions}
    skipped = set(exclude)
    search_root = root / base if base else root
    files: list[str] = []
    for path in search_root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in suffixes:
            continue
        relative = path.relative_to(root).as_posix()
        if relative in skipped:
            continue
        if any(part.startswith(".") for part in path.relative_to(root).parts):
            continue
        files.append(relative)
    return sorted(files)
