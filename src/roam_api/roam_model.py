"""Payload models for the Roam backend write API.

Defines the primitive type aliases shared by the client (Uid, Order, ...), the
block and page field shapes, and one envelope model per write action.

Wire names that contain hyphens (``parent-uid``, ``text-align``,
``children-view-type``) are declared as aliases: models accept either the
alias or the Python field name, and serialize by alias via ``to_wire``.

Scalar fields are strict: values are sent exactly as the caller gave them, and a
value of the wrong type (``"3"`` for an order, ``"yes"`` for ``open``) is rejected
rather than converted.

SPDX-FileCopyrightText: © 2026 roam-api contributors
SPDX-License-Identifier: MIT
"""

from __future__ import annotations

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

Uid: TypeAlias = StrictStr
"""Nine-character alphanumeric stable block/page identifier (:block/uid)."""

Order: TypeAlias = StrictInt | Literal["first", "last"]
"""Position of a block among its siblings: a zero-based index, or ``"first"``/``"last"``."""

HeadingLevel: TypeAlias = StrictInt
"""Heading level: 0 = normal text, 1 = H1, 2 = H2, 3 = H3 (:block/heading)."""

PageTitle: TypeAlias = StrictStr
"""Page title string (:node/title)."""

ChildrenViewType: TypeAlias = Literal["bullet", "numbered", "document"]
"""How the children of a block or page are rendered (:children/view-type)."""

WriteAction: TypeAlias = Literal[
    "create-block",
    "move-block",
    "update-block",
    "delete-block",
    "create-page",
    "update-page",
    "delete-page",
]
"""Discriminator of a request sent to the ``write`` route."""


class RoamPayload(BaseModel):
    """Base for every payload model: immutable, populated by field name or alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict sent to the backend (aliases, no None values)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class _OpenPayload(RoamPayload):
    """Field model that passes unknown attributes through to the backend untouched."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class BlockLocation(RoamPayload):
    """Where a block is placed: under ``parent-uid`` at position ``order``."""

    parent_uid: Uid = Field(..., alias="parent-uid", description="Uid of the parent block or page")
    order: Order = Field(..., description="Zero-based index, or 'first' / 'last'")


class Block(_OpenPayload):
    """Fields of a block being created.

    Attributes:
        string: Block text content (:block/string). Required.
        uid: Caller-chosen uid; the backend generates one when absent.
        open: Whether the block is expanded.
        heading: Heading level 0-3.
        text_align: Alignment of the block text. Serialized as ``'text-align'``.
        children_view_type: Rendering of the block's children.
            Serialized as ``'children-view-type'``.
    """

    string: StrictStr = Field(..., description=":block/string: block text")
    uid: Uid | None = Field(default=None, description=":block/uid: optional caller-chosen uid")
    open: StrictBool | None = Field(default=None, description=":block/open: expanded/collapsed state")
    heading: HeadingLevel | None = Field(default=None, ge=0, le=3, description=":block/heading: heading level")
    text_align: StrictStr | None = Field(default=None, alias="text-align", description=":block/text-align")
    children_view_type: ChildrenViewType | None = Field(
        default=None, alias="children-view-type", description=":children/view-type"
    )


class BlockUpdate(_OpenPayload):
    """Fields of an existing block being updated; only ``uid`` is required."""

    uid: Uid = Field(..., min_length=1, description=":block/uid of the block to update")
    string: StrictStr | None = Field(default=None)
    open: StrictBool | None = Field(default=None)
    heading: HeadingLevel | None = Field(default=None, ge=0, le=3)
    text_align: StrictStr | None = Field(default=None, alias="text-align")
    children_view_type: ChildrenViewType | None = Field(default=None, alias="children-view-type")


class BlockRef(RoamPayload):
    """Identifies an existing block by uid."""

    uid: Uid = Field(..., min_length=1)


class Page(_OpenPayload):
    """Fields of a page being created."""

    title: PageTitle = Field(..., min_length=1, description=":node/title")
    uid: Uid | None = Field(default=None, description="Optional caller-chosen uid")
    children_view_type: ChildrenViewType | None = Field(default=None, alias="children-view-type")


class PageUpdate(_OpenPayload):
    """Fields of an existing page being updated; only ``uid`` is required."""

    uid: Uid = Field(..., min_length=1)
    title: PageTitle | None = Field(default=None, min_length=1)
    children_view_type: ChildrenViewType | None = Field(default=None, alias="children-view-type")


class PageRef(RoamPayload):
    """Identifies an existing page by uid."""

    uid: Uid = Field(..., min_length=1)


# Action envelopes. Any ``action`` key supplied by the caller is dropped at
# validation time; the write wrappers stamp the correct one.


class CreateBlock(RoamPayload):
    location: BlockLocation
    block: Block


class MoveBlock(RoamPayload):
    location: BlockLocation
    block: BlockRef


class UpdateBlock(RoamPayload):
    block: BlockUpdate


class DeleteBlock(RoamPayload):
    block: BlockRef


class CreatePage(RoamPayload):
    page: Page


class UpdatePage(RoamPayload):
    page: PageUpdate


class DeletePage(RoamPayload):
    page: PageRef
