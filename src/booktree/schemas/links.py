"""Resolved link model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LinkKind(str, Enum):
    """Classification of a raw link target."""

    INTERNAL = "internal"
    EXTERNAL = "external"
    ANCHOR = "anchor"


class ResolvedLink(BaseModel):
    """Outcome of resolving a raw link against a base directory.

    Attributes:
        kind: Whether the link points into the repository, outside it, or at
            an anchor on the same page.
        raw: The link text exactly as written.
        path: Canonical repository-relative POSIX path for internal links.
        fragment: Text after ``#`` for internal links that carry one.
    """

    model_config = ConfigDict(frozen=True)

    kind: LinkKind
    raw: str
    path: str | None = None
    fragment: str | None = None

    @property
    def is_internal(self) -> bool:
        return self.kind is LinkKind.INTERNAL
