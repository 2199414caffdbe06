"""booktree: assemble and validate the document tree of a Markdown book."""

from booktree.exceptions import (
    BooktreeError,
    LinkResolutionError,
    MalformedLinkError,
    ManifestError,
    ManifestNotFoundError,
    ManifestSyntaxError,
    PathEscapesRootError,
    StructuralError,
    StructuralErrorKind,
)
from booktree.manifest import parse_manifest, read_manifest
from booktree.paths import PathResolver
from booktree.pipeline import CheckOptions, CheckResult, check_book, load_tree
from booktree.schemas import (
    ChapterEntry,
    ChapterNode,
    DividerEntry,
    DividerNode,
    DocumentTree,
    LinkKind,
    ResolvedLink,
    ValidationReport,
)
from booktree.tree_builder import build_tree
from booktree.validator import validate_tree

__all__ = [
    "BooktreeError",
    "ChapterEntry",
    "ChapterNode",
    "CheckOptions",
    "CheckResult",
    "DividerEntry",
    "DividerNode",
    "DocumentTree",
    "LinkKind",
    "LinkResolutionError",
    "MalformedLinkError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestSyntaxError",
    "PathEscapesRootError",
    "PathResolver",
    "ResolvedLink",
    "StructuralError",
    "StructuralErrorKind",
    "ValidationReport",
    "build_tree",
    "check_book",
    "load_tree",
    "parse_manifest",
    "read_manifest",
    "validate_tree",
]
