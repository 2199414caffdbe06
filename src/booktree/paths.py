"""Resolve link targets into canonical repository-relative paths."""

from __future__ import annotations

import posixpath
import re
from pathlib import Path, PurePosixPath
from typing import Iterable
from urllib.parse import unquote

from booktree.exceptions import MalformedLinkError, PathEscapesRootError
from booktree.schemas import LinkKind, ResolvedLink

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def normalize_link_text(raw_link: str) -> str:
    """Strip whitespace and the optional ``<...>`` wrapper around a link target."""
    text = raw_link.strip()
    if len(text) >= 2 and text.startswith("<") and text.endswith(">"):
        text = text[1:-1].strip()
    return text


def is_external(link: str) -> bool:
    """Return True for links with a URI scheme or a protocol-relative prefix."""
    return bool(_SCHEME_RE.match(link)) or link.startswith("//")


def has_content_extension(path: str, extensions: Iterable[str]) -> bool:
    return PurePosixPath(path).suffix.lower() in {ext.lower() for ext in extensions}


def manifest_base(manifest_path: str) -> str:
    """Directory that manifest targets are resolved against."""
    return posixpath.dirname(PurePosixPath(manifest_path).as_posix())


def _collapse(path: str, *, raw_link: str) -> str:
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in {"", "."}:
            continue
        if segment == "..":
            if not segments:
                raise PathEscapesRootError(
                    f"Link {raw_link!r} resolves outside the repository root",
                    raw_link=raw_link,
                )
            segments.pop()
            continue
        segments.append(segment)
    return "/".join(segments) or "."


class PathResolver:
    """Resolve raw link targets relative to a document's directory.

    Resolution is pure string manipulation: the filesystem is never consulted.
    Results are POSIX paths relative to ``root``.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = PurePosixPath(Path(root).as_posix())

    def resolve(self, base_path: str | Path, raw_link: str) -> ResolvedLink:
        """Resolve ``raw_link`` found in a document living in ``base_path``.

        Args:
            base_path: Directory containing the linking document, relative to
                the repository root (``""`` or ``"."`` for the root itself).
            raw_link: The link target exactly as written.

        Returns:
            A ResolvedLink. External URLs and same-page anchors are returned
            unchanged with ``path`` unset.

        Raises:
            MalformedLinkError: If the link is empty or holds control characters.
            PathEscapesRootError: If the link climbs above the repository root.
        """
        text = normalize_link_text(raw_link)
        if not text:
            raise MalformedLinkError("Link target is empty", raw_link=raw_link)
        if _CONTROL_RE.search(text):
            raise MalformedLinkError(
                f"Link {raw_link!r} contains control characters", raw_link=raw_link
            )

        if text.startswith("#"):
            return ResolvedLink(kind=LinkKind.ANCHOR, raw=raw_link, fragment=text[1:] or None)
        if is_external(text):
            return ResolvedLink(kind=LinkKind.EXTERNAL, raw=raw_link)

        path_part, _, fragment = text.partition("#")
        path_part = path_part.split("?", 1)[0]
        if not path_part:
            raise MalformedLinkError(f"Link {raw_link!r} has no path", raw_link=raw_link)
        path_part = unquote(path_part)
        if _CONTROL_RE.search(path_part):
            raise MalformedLinkError(
                f"Link {raw_link!r} contains control characters", raw_link=raw_link
            )

        if path_part.startswith("/"):
            joined = path_part
        else:
            joined = posixpath.join(self._relative_base(base_path, raw_link), path_part)
        canonical = _collapse(joined, raw_link=raw_link)
        return ResolvedLink(
            kind=LinkKind.INTERNAL,
            raw=raw_link,
            path=canonical,
            fragment=fragment or None,
        )

    def _relative_base(self, base_path: str | Path, raw_link: str) -> str:
        base = PurePosixPath(Path(base_path).as_posix()) if base_path else PurePosixPath(".")
        if base.is_absolute():
            try:
                base = base.relative_to(self.root)
            except ValueError as exc:
                raise PathEscapesRootError(
                    f"Base directory {str(base_path)!r} is outside the repository root",
                    raw_link=raw_link,
                ) from exc
        collapsed = _collapse(base.as_posix(), raw_link=raw_link)
        return "" if collapsed == "." else collapsed
