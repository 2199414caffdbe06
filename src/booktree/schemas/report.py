"""Validation report models."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict


class MissingTarget(BaseModel):
    """A chapter whose file is absent from the corpus."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    path: str


class DanglingCrossReference(BaseModel):
    """An in-body link that does not resolve to an existing file."""

    model_config = ConfigDict(frozen=True)

    source: str
    link: str
    reason: str = "missing"


class ValidationReport(BaseModel):
    """Non-fatal findings collected while validating a document tree.

    All collections are unordered sets; ``findings`` sorts them for output.
    """

    model_config = ConfigDict(frozen=True)

    missing_targets: frozenset[MissingTarget] = frozenset()
    dangling_cross_references: frozenset[DanglingCrossReference] = frozenset()
    duplicate_paths: frozenset[str] = frozenset()
    unlisted_documents: frozenset[str] = frozenset()

    def is_empty(self) -> bool:
        return self.finding_count() == 0

    def finding_count(self) -> int:
        return (
            len(self.missing_targets)
            + len(self.dangling_cross_references)
            + len(self.duplicate_paths)
            + len(self.unlisted_documents)
        )

    def findings(self) -> Iterator[tuple[str, str, str]]:
        """Yield ``(path, kind, detail)`` for every finding in a stable order."""
        rows: list[tuple[str, str, str]] = []
        for missing in self.missing_targets:
            rows.append((missing.path, "missing-target", f"chapter '{missing.node_id}' points at a file that does not exist"))
        for dangling in self.dangling_cross_references:
            rows.append((dangling.source, "dangling-cross-reference", f"{dangling.link} ({dangling.reason})"))
        for path in self.duplicate_paths:
            rows.append((path, "duplicate-path", "referenced by more than one chapter"))
        for path in self.unlisted_documents:
            rows.append((path, "unlisted-document", "not referenced by the manifest"))
        yield from sorted(rows)
