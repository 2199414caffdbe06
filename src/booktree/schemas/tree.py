"""Document tree models.

Nodes live in a flat arena (``DocumentTree.nodes``) and refer to each other by
arena index: ``parent`` is the index of the owning node and ``children`` the
ordered indices of owned nodes. The tree is frozen once built.
"""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _NodeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    id: str
    code: str
    title: str
    depth: int = Field(..., ge=0)
    sequence_index: int = Field(..., ge=0)
    parent: int | None = None
    children: tuple[int, ...] = ()


class ChapterNode(_NodeBase):
    """A node backed by a content file."""

    kind: Literal["chapter"] = "chapter"
    path: str


class DividerNode(_NodeBase):
    """A grouping node with no content file."""

    kind: Literal["divider"] = "divider"


DocumentNode = Annotated[Union[ChapterNode, DividerNode], Field(discriminator="kind")]


class DocumentTree(BaseModel):
    """Ordered forest of document nodes built from a manifest.

    Attributes:
        title: Book title taken from the manifest's leading heading.
        manifest_path: Repository-relative path of the manifest.
        nodes: All nodes in reading (pre-order) order.
        roots: Indices of the top-level nodes in manifest order.
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    manifest_path: str = "SUMMARY.md"
    nodes: tuple[DocumentNode, ...] = ()
    roots: tuple[int, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, index: int) -> ChapterNode | DividerNode:
        return self.nodes[index]

    def root_nodes(self) -> list[ChapterNode | DividerNode]:
        return [self.nodes[index] for index in self.roots]

    def children_of(self, node: ChapterNode | DividerNode) -> list[ChapterNode | DividerNode]:
        return [self.nodes[index] for index in node.children]

    def parent_of(self, node: ChapterNode | DividerNode) -> ChapterNode | DividerNode | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def ancestors(self, node: ChapterNode | DividerNode) -> list[ChapterNode | DividerNode]:
        """Return the ancestors of ``node``, nearest first."""
        result: list[ChapterNode | DividerNode] = []
        current = self.parent_of(node)
        while current is not None:
            result.append(current)
            current = self.parent_of(current)
        return result

    def walk(self) -> Iterator[ChapterNode | DividerNode]:
        """Yield every node in reading order."""
        stack = list(reversed(self.roots))
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def chapters(self) -> list[ChapterNode]:
        return [node for node in self.walk() if isinstance(node, ChapterNode)]

    def find_by_id(self, node_id: str) -> ChapterNode | DividerNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def find_by_path(self, path: str) -> ChapterNode | None:
        for node in self.chapters():
            if node.path == path:
                return node
        return None

    # Arena indices follow manifest order, which is also pre-order.
    def next_chapter(self, node: ChapterNode | DividerNode) -> ChapterNode | None:
        """Return the chapter that follows ``node`` in reading order."""
        for candidate in self.nodes[node.index + 1 :]:
            if isinstance(candidate, ChapterNode):
                return candidate
        return None

    def previous_chapter(self, node: ChapterNode | DividerNode) -> ChapterNode | None:
        """Return the chapter that precedes ``node`` in reading order."""
        for candidate in reversed(self.nodes[: node.index]):
            if isinstance(candidate, ChapterNode):
                return candidate
        return None

    def depths(self) -> list[int]:
        """Depth of every node in reading order."""
        return [node.depth for node in self.walk()]
