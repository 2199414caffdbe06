"""Format document trees and validation reports for the terminal."""

from __future__ import annotations

import json
from typing import Iterable

from booktree.exceptions import (
    BooktreeError,
    ManifestError,
    ManifestNotFoundError,
    ManifestSyntaxError,
    StructuralError,
)
from booktree.schemas import ChapterNode, DocumentTree, ValidationReport


def format_summary(tree: DocumentTree, report: ValidationReport) -> str:
    """Create a short human-readable summary of a check."""
    summary_lines = []
    if tree.title:
        summary_lines.append(f"Title: {tree.title}")
    summary_lines.append(f"Manifest: {tree.manifest_path}")
    summary_lines.append(f"Chapters: {count_chapters(tree)}")
    summary_lines.append(f"Parts: {len(tree) - count_chapters(tree)}")
    summary_lines.append(f"Findings: {report.finding_count()}")
    return "\n".join(summary_lines)


def count_chapters(tree: DocumentTree) -> int:
    return len(tree.chapters())


def format_outline(tree: DocumentTree) -> str:
    """Render the tree as a numbered, indented outline."""
    return _render_outline(tree, tree.roots)


def _render_outline(tree: DocumentTree, indices: Iterable[int], indent: int = 0) -> str:
    lines: list[str] = []
    for index in indices:
        node = tree.node(index)
        line = "  " * indent + f"{node.code}. {node.title}"
        if isinstance(node, ChapterNode):
            line += f" ({node.path})"
        lines.append(line)
        if node.children:
            lines.append(_render_outline(tree, node.children, indent + 1))
    return "\n".join(lines)


def format_report_text(report: ValidationReport) -> list[str]:
    """One ``<path>: <kind> — <detail>`` line per finding."""
    return [f"{path}: {kind} — {detail}" for path, kind, detail in report.findings()]


def format_report_json(tree: DocumentTree, report: ValidationReport, *, failed: bool) -> str:
    payload = {
        "manifest": tree.manifest_path,
        "title": tree.title,
        "chapters": count_chapters(tree),
        "failed": failed,
        "findings": [
            {"path": path, "kind": kind, "detail": detail}
            for path, kind, detail in report.findings()
        ],
        "missing_targets": sorted(
            ({"node_id": item.node_id, "path": item.path} for item in report.missing_targets),
            key=lambda item: (item["path"], item["node_id"]),
        ),
        "dangling_cross_references": sorted(
            (
                {"source": item.source, "link": item.link, "reason": item.reason}
                for item in report.dangling_cross_references
            ),
            key=lambda item: (item["source"], item["link"]),
        ),
        "duplicate_paths": sorted(report.duplicate_paths),
        "unlisted_documents": sorted(report.unlisted_documents),
    }
    return json.dumps(payload, indent=2)


def format_error_text(error: BooktreeError, *, manifest_path: str) -> str:
    return f"{manifest_path}: {_error_kind(error)} — {error}"


def format_error_json(error: BooktreeError, *, manifest_path: str) -> str:
    payload = {
        "manifest": manifest_path,
        "failed": True,
        "error": {"kind": _error_kind(error), "detail": str(error)},
    }
    line = getattr(error, "line", None)
    if line is None and isinstance(error, StructuralError) and error.entry is not None:
        line = error.entry.line
    if line is not None:
        payload["error"]["line"] = line
    return json.dumps(payload, indent=2)


def _error_kind(error: BooktreeError) -> str:
    if isinstance(error, StructuralError):
        return f"structural-error({error.kind.value})"
    if isinstance(error, ManifestSyntaxError):
        return "manifest-syntax-error"
    if isinstance(error, ManifestNotFoundError):
        return "manifest-not-found"
    if isinstance(error, ManifestError):
        return "manifest-error"
    return "error"
