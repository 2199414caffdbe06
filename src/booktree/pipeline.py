"""Parse -> build -> validate pipeline for a book checkout."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from booktree.config import (
    BOOKTREE_CONTENT_EXTENSIONS,
    BOOKTREE_INDENT_UNIT,
    BOOKTREE_MANIFEST_NAME,
)
from booktree.corpus import content_links_under, file_exists_under, list_content_files
from booktree.exceptions import ManifestError, ManifestNotFoundError, ManifestSyntaxError
from booktree.manifest import read_manifest
from booktree.paths import PathResolver, manifest_base
from booktree.schemas import DocumentTree, ValidationReport
from booktree.tree_builder import build_tree
from booktree.validator import validate_tree

logger = logging.getLogger(__name__)


@dataclass
class CheckOptions:
    """Options for checking a book.

    Attributes:
        manifest: Manifest path, relative to the book root.
        indent_unit: Spaces per nesting level in the manifest.
        extensions: File extensions that count as content files.
        strict_cross_refs: If True, any validation finding fails the run.
        report_unlisted: If True, report content files missing from the manifest.
    """

    manifest: str = BOOKTREE_MANIFEST_NAME
    indent_unit: int = BOOKTREE_INDENT_UNIT
    extensions: tuple[str, ...] = field(default_factory=lambda: tuple(BOOKTREE_CONTENT_EXTENSIONS))
    strict_cross_refs: bool = False
    report_unlisted: bool = False


@dataclass(frozen=True)
class CheckResult:
    """A built tree and the findings validating it produced."""

    tree: DocumentTree
    report: ValidationReport
    strict: bool = False

    @property
    def failed(self) -> bool:
        return self.strict and not self.report.is_empty()


def load_tree(root: Path, options: CheckOptions | None = None) -> DocumentTree:
    """Read, parse and build the document tree of the book at ``root``.

    Raises:
        ManifestNotFoundError: If the manifest file does not exist.
        ManifestSyntaxError: If the manifest is not UTF-8 or cannot be parsed.
        ManifestError: If the manifest cannot be read.
        StructuralError: If the manifest does not describe a valid tree.
    """
    opts = options or CheckOptions()
    manifest_path = Path(opts.manifest).as_posix()
    manifest_file = root / manifest_path
    if not manifest_file.is_file():
        raise ManifestNotFoundError(f"Manifest not found: {manifest_file}")

    try:
        text = manifest_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestSyntaxError(f"{manifest_path} is not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {manifest_file}: {exc}") from exc
    parsed = read_manifest(text, indent_unit=opts.indent_unit, extensions=opts.extensions)
    return build_tree(
        parsed.entries,
        PathResolver(root),
        manifest_path=manifest_path,
        title=parsed.title,
    )


def check_book(root: Path, options: CheckOptions | None = None) -> CheckResult:
    """Build the document tree of the book at ``root`` and validate it."""
    opts = options or CheckOptions()
    tree = load_tree(root, opts)
    logger.info("Loaded %s: %d nodes", tree.manifest_path, len(tree))

    available = None
    if opts.report_unlisted:
        available = list_content_files(root, manifest_base(tree.manifest_path), opts.extensions)

    report = validate_tree(
        tree,
        file_exists_under(root),
        content_links_under(root),
        resolver=PathResolver(root),
        available_files=available,
    )
    return CheckResult(tree=tree, report=report, strict=opts.strict_cross_refs)
