"""Custom exceptions for booktree."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from booktree.schemas import ManifestEntry


class BooktreeError(Exception):
    """Base exception for booktree operations."""


class LinkResolutionError(BooktreeError):
    """Error while resolving a link target to a repository path."""

    def __init__(self, message: str, *, raw_link: str) -> None:
        super().__init__(message)
        self.raw_link = raw_link


class MalformedLinkError(LinkResolutionError):
    """Link text is empty or contains characters no filesystem accepts."""


class PathEscapesRootError(LinkResolutionError):
    """Normalized link climbs above the repository root."""


class ManifestError(BooktreeError):
    """Error reading the navigation manifest."""


class ManifestNotFoundError(ManifestError):
    """The navigation manifest does not exist."""


class ManifestSyntaxError(ManifestError):
    """A manifest line does not match the manifest grammar."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class StructuralErrorKind(str, Enum):
    """Reasons a manifest cannot be assembled into a document tree."""

    SKIPPED_DEPTH = "skipped-depth"
    DUPLICATE_PATH = "duplicate-path"
    UNRESOLVABLE_TARGET = "unresolvable-target"


class StructuralError(BooktreeError):
    """The manifest nesting or targets do not form a valid tree."""

    def __init__(
        self,
        kind: StructuralErrorKind,
        message: str,
        *,
        entry: ManifestEntry | None = None,
    ) -> None:
        self.kind = kind
        self.entry = entry
        if entry is not None:
            message = f"line {entry.line}: {message}"
        super().__init__(message)
