"""Shared schemas for booktree."""

from booktree.schemas.links import LinkKind, ResolvedLink
from booktree.schemas.manifest import ChapterEntry, DividerEntry, ManifestEntry, ParsedManifest
from booktree.schemas.report import DanglingCrossReference, MissingTarget, ValidationReport
from booktree.schemas.tree import ChapterNode, DividerNode, DocumentNode, DocumentTree

__all__ = [
    "ChapterEntry",
    "ChapterNode",
    "DanglingCrossReference",
    "DividerEntry",
    "DividerNode",
    "DocumentNode",
    "DocumentTree",
    "LinkKind",
    "ManifestEntry",
    "MissingTarget",
    "ParsedManifest",
    "ResolvedLink",
    "ValidationReport",
]
