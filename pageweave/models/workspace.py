"""
Page and workspace models for Pageweave.

Pages form a tree, but a workspace stores them as a flat arena: every page
lives in ``Workspace.pages`` and refers to its relatives by id through
``parent_id`` and ``child_ids``.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field

from .blocks import Block, BlockType, FrozenModel, generate_id, new_block
from ..config import config


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Page(FrozenModel):
    """
    A document: an ordered run of blocks plus its place in the page tree.
    """

    id: str = Field(..., description="Unique page identifier")

    title: str = Field(default="Untitled", description="Page title shown above the blocks")

    icon: Optional[str] = Field(default=None, description="Optional emoji or icon name")

    blocks: List[Block] = Field(
        default_factory=list,
        description="Blocks owned by this page; positions are dense from 0"
    )

    parent_id: Optional[str] = Field(
        default=None,
        description="Id of the parent page, None for root pages"
    )

    child_ids: List[str] = Field(
        default_factory=list,
        description="Ordered ids of the child pages"
    )

    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Timestamp of the last mutation"
    )

    archived: bool = False


class Template(FrozenModel):
    """
    A reusable block sequence. Stored with the workspace, not edited here.
    """

    id: str
    name: str
    description: str = ""
    category: str = ""
    blocks: List[Block] = Field(default_factory=list)
    preview: Optional[str] = None


class Workspace(FrozenModel):
    """
    The root aggregate holding every page and template.
    """

    id: str = Field(..., description="Workspace identifier")

    name: str = Field(..., description="Display name")

    pages: List[Page] = Field(
        default_factory=list,
        description="Flat arena of all pages; roots keep their list order"
    )

    templates: List[Template] = Field(default_factory=list)


def new_page(title: Optional[str] = None, parent_id: Optional[str] = None,
             icon: Optional[str] = None) -> Page:
    """
    Create an empty page holding a single empty paragraph at position 0.

    Args:
        title: Page title, defaults to the configured new page title
        parent_id: Optional parent page id
        icon: Optional page icon

    Returns:
        The new page
    """
    now = utc_now()
    return Page(
        id=generate_id(),
        title=title if title is not None else config.new_page_title,
        icon=icon,
        blocks=[new_block(BlockType.PARAGRAPH)],
        parent_id=parent_id,
        created_at=now,
        updated_at=now,
    )


def new_workspace(name: str, workspace_id: Optional[str] = None) -> Workspace:
    """Create a workspace with no pages."""
    return Workspace(id=workspace_id or generate_id(), name=name)
