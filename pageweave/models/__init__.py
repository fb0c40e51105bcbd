"""Data models for Pageweave."""

from .blocks import (
    Block,
    BlockMetadata,
    BlockType,
    CalloutBlock,
    CalloutContent,
    CodeBlock,
    CodeContent,
    DividerBlock,
    DividerContent,
    ImageBlock,
    ImageContent,
    TextBlock,
    TextContent,
    TodoBlock,
    TodoContent,
    block_text,
    default_metadata,
    generate_id,
    new_block,
)
from .workspace import Page, Template, Workspace, new_page, new_workspace, utc_now

__all__ = [
    "Block",
    "BlockMetadata",
    "BlockType",
    "CalloutBlock",
    "CalloutContent",
    "CodeBlock",
    "CodeContent",
    "DividerBlock",
    "DividerContent",
    "ImageBlock",
    "ImageContent",
    "TextBlock",
    "TextContent",
    "TodoBlock",
    "TodoContent",
    "block_text",
    "default_metadata",
    "generate_id",
    "new_block",
    "Page",
    "Template",
    "Workspace",
    "new_page",
    "new_workspace",
    "utc_now",
]
