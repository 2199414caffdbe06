"""Validate a document tree against the files of the book."""

from __future__ import annotations

import logging
import posixpath
from collections import Counter
from typing import Callable, Iterable

from booktree.exceptions import MalformedLinkError, PathEscapesRootError
from booktree.paths import PathResolver
from booktree.schemas import (
    DanglingCrossReference,
    DocumentTree,
    MissingTarget,
    ValidationReport,
)

logger = logging.getLogger(__name__)


def validate_tree(
    tree: DocumentTree,
    file_exists: Callable[[str], bool],
    content_links: Callable[[str], Iterable[str]],
    *,
    resolver: PathResolver | None = None,
    available_files: Iterable[str] | None = None,
) -> ValidationReport:
    """Collect every missing chapter file and dangling cross-reference.

    Never raises on findings and never stops at the first one.

    Args:
        tree: The document tree to check. It is only read.
        file_exists: Predicate over repository-relative paths.
        content_links: Returns the raw links found in a chapter body.
        resolver: Resolver for in-body links. Defaults to one rooted at ``.``.
        available_files: When given, content files not referenced by any
            chapter are reported as unlisted documents.

    Returns:
        The ValidationReport for this tree.
    """
    resolver = resolver or PathResolver()
    missing: set[MissingTarget] = set()
    dangling: set[DanglingCrossReference] = set()

    for chapter in tree.chapters():
        if not file_exists(chapter.path):
            missing.add(MissingTarget(node_id=chapter.id, path=chapter.path))
            continue
        dangling.update(_check_cross_references(chapter.path, content_links, file_exists, resolver))

    unlisted: frozenset[str] = frozenset()
    if available_files is not None:
        unlisted = find_unlisted_documents(tree, available_files)

    report = ValidationReport(
        missing_targets=frozenset(missing),
        dangling_cross_references=frozenset(dangling),
        duplicate_paths=find_duplicate_paths(tree),
        unlisted_documents=unlisted,
    )
    logger.debug(
        "Validated %d chapters: %d finding(s)", len(tree.chapters()), report.finding_count()
    )
    return report


def find_duplicate_paths(tree: DocumentTree) -> frozenset[str]:
    """Paths referenced by more than one chapter node."""
    counts = Counter(chapter.path for chapter in tree.chapters())
    return frozenset(path for path, count in counts.items() if count > 1)


def find_unlisted_documents(tree: DocumentTree, available_files: Iterable[str]) -> frozenset[str]:
    """Content files that no chapter of ``tree`` points at."""
    listed = {chapter.path for chapter in tree.chapters()}
    listed.add(tree.manifest_path)
    return frozenset(path for path in available_files if path not in listed)


def _check_cross_references(
    source: str,
    content_links: Callable[[str], Iterable[str]],
    file_exists: Callable[[str], bool],
    resolver: PathResolver,
) -> set[DanglingCrossReference]:
    base = posixpath.dirname(source)
    dangling: set[DanglingCrossReference] = set()
    for raw_link in content_links(source):
        try:
            resolved = resolver.resolve(base, raw_link)
        except MalformedLinkError:
            dangling.add(DanglingCrossReference(source=source, link=raw_link, reason="malformed"))
            continue
        except PathEscapesRootError:
            dangling.add(DanglingCrossReference(source=source, link=raw_link, reason="escapes root"))
            continue
        if not resolved.is_internal or resolved.path is None:
            continue
        if not _target_exists(resolved.path, file_exists):
            dangling.add(DanglingCrossReference(source=source, link=raw_link, reason="missing"))
    return dangling


def _target_exists(path: str, file_exists: Callable[[str], bool]) -> bool:
    # A link to a directory counts when the directory has an index page.
    if file_exists(path):
        return True
    return file_exists(posixpath.join(path, "README.md")) or file_exists(
        posixpath.join(path, "index.md")
    )
