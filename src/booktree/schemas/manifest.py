"""Manifest entry models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _EntryBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    depth: int = Field(..., ge=0)
    title: str = Field(..., min_length=1)
    line: int = Field(default=0, ge=0)


class ChapterEntry(_EntryBase):
    """A manifest line that points at a content file."""

    kind: Literal["chapter"] = "chapter"
    target: str = Field(..., min_length=1)


class DividerEntry(_EntryBase):
    """A part heading or draft chapter: a title with no content file."""

    kind: Literal["divider"] = "divider"


ManifestEntry = Annotated[Union[ChapterEntry, DividerEntry], Field(discriminator="kind")]


class ParsedManifest(BaseModel):
    """Book title plus the ordered entries of a manifest."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    entries: tuple[ManifestEntry, ...] = ()
