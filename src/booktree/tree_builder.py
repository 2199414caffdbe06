"""Assemble manifest entries into a frozen document tree."""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Iterable

from booktree.config import BOOKTREE_MANIFEST_NAME
from booktree.exceptions import LinkResolutionError, StructuralError, StructuralErrorKind
from booktree.paths import PathResolver, manifest_base
from booktree.schemas import (
    ChapterEntry,
    ChapterNode,
    DividerNode,
    DocumentNode,
    DocumentTree,
    ManifestEntry,
)

logger = logging.getLogger(__name__)


def slugify(title: str) -> str:
    """Convert a title into a lowercase, URL-safe slug."""
    value = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    value = value.strip().lower()
    value = re.sub(r"`+", "", value)
    value = re.sub(r"[^\w\s-]", "", value)
    value = re.sub(r"[\s_]+", "-", value)
    return re.sub(r"-{2,}", "-", value).strip("-")


@dataclass
class _Draft:
    entry: ManifestEntry
    id: str
    code: str
    sequence_index: int
    parent: int | None
    path: str | None
    children: list[int] = field(default_factory=list)


def build_tree(
    entries: Iterable[ManifestEntry],
    resolver: PathResolver | None = None,
    *,
    manifest_path: str = BOOKTREE_MANIFEST_NAME,
    title: str | None = None,
) -> DocumentTree:
    """Build a document tree from manifest entries in one linear pass.

    Each entry becomes a child of the nearest preceding entry one level
    shallower. Sibling order is manifest order. Chapter targets are resolved
    against the manifest's own directory.

    Args:
        entries: Parsed manifest entries in source order.
        resolver: Resolver for chapter targets. Defaults to a resolver rooted
            at the current directory.
        manifest_path: Repository-relative path of the manifest.
        title: Book title to record on the tree.

    Returns:
        The frozen DocumentTree.

    Raises:
        StructuralError: If nesting skips a level, two chapters share a file,
            or a chapter target cannot be resolved inside the repository.
    """
    resolver = resolver or PathResolver()
    base = manifest_base(manifest_path)

    drafts: list[_Draft] = []
    roots: list[int] = []
    stack: list[int] = []
    seen_paths: dict[str, int] = {}
    used_ids: set[str] = set()

    for entry in entries:
        if entry.depth > len(stack):
            raise StructuralError(
                StructuralErrorKind.SKIPPED_DEPTH,
                f"'{entry.title}' is at depth {entry.depth} but the deepest open level is {len(stack)}",
                entry=entry,
            )
        del stack[entry.depth :]

        parent = stack[-1] if stack else None
        siblings = drafts[parent].children if parent is not None else roots

        path = None
        if isinstance(entry, ChapterEntry):
            path = _resolve_target(entry, resolver, base)
            if path in seen_paths:
                first = drafts[seen_paths[path]].entry
                raise StructuralError(
                    StructuralErrorKind.DUPLICATE_PATH,
                    f"'{entry.title}' points at {path}, already used by '{first.title}' on line {first.line}",
                    entry=entry,
                )
            seen_paths[path] = len(drafts)

        sequence_index = len(siblings)
        parent_code = drafts[parent].code if parent is not None else None
        code = f"{parent_code}.{sequence_index + 1}" if parent_code else str(sequence_index + 1)

        index = len(drafts)
        drafts.append(
            _Draft(
                entry=entry,
                id=_unique_id(entry, used_ids),
                code=code,
                sequence_index=sequence_index,
                parent=parent,
                path=path,
            )
        )
        siblings.append(index)
        stack.append(index)

    nodes = tuple(_freeze(index, draft) for index, draft in enumerate(drafts))
    logger.debug("Built document tree with %d nodes, %d roots", len(nodes), len(roots))
    return DocumentTree(
        title=title,
        manifest_path=manifest_path,
        nodes=nodes,
        roots=tuple(roots),
    )


def _resolve_target(entry: ChapterEntry, resolver: PathResolver, base: str) -> str:
    try:
        resolved = resolver.resolve(base, entry.target)
    except LinkResolutionError as exc:
        raise StructuralError(
            StructuralErrorKind.UNRESOLVABLE_TARGET,
            f"'{entry.title}' has an unusable target: {exc}",
            entry=entry,
        ) from exc
    if not resolved.is_internal or resolved.path is None:
        raise StructuralError(
            StructuralErrorKind.UNRESOLVABLE_TARGET,
            f"'{entry.title}' must point at a file in the book, got {entry.target!r}",
            entry=entry,
        )
    return resolved.path


def _unique_id(entry: ManifestEntry, used_ids: set[str]) -> str:
    slug = slugify(entry.title) or entry.kind
    candidate = slug
    suffix = 1
    while candidate in used_ids:
        suffix += 1
        candidate = f"{slug}-{suffix}"
    used_ids.add(candidate)
    return candidate


def _freeze(index: int, draft: _Draft) -> DocumentNode:
    common = {
        "index": index,
        "id": draft.id,
        "code": draft.code,
        "title": draft.entry.title,
        "depth": draft.entry.depth,
        "sequence_index": draft.sequence_index,
        "parent": draft.parent,
        "children": tuple(draft.children),
    }
    if draft.path is not None:
        return ChapterNode(path=draft.path, **common)
    return DividerNode(**common)
