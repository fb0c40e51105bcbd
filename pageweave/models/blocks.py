"""
Block models for Pageweave.

A block is the smallest unit of content on a page. Its ``type`` decides the
shape of its ``content`` payload, so blocks are modelled as a discriminated
union with one class per payload shape.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import config


class FrozenModel(BaseModel):
    """Base for every document model: immutable, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class BlockType(str, Enum):
    """The closed set of block variants."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading-1"
    HEADING_2 = "heading-2"
    HEADING_3 = "heading-3"
    BULLETED_LIST = "bulleted-list"
    NUMBERED_LIST = "numbered-list"
    TO_DO = "to-do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    DIVIDER = "divider"
    IMAGE = "image"
    CODE = "code"
    TABLE = "table"
    CALLOUT = "callout"


HEADING_LEVELS = {
    BlockType.HEADING_1: 1,
    BlockType.HEADING_2: 2,
    BlockType.HEADING_3: 3,
}


# Content payloads

class TextContent(FrozenModel):
    text: str = ""


class TodoContent(FrozenModel):
    text: str = ""
    checked: bool = False


class CodeContent(FrozenModel):
    text: str = ""
    language: str = "javascript"


class ImageContent(FrozenModel):
    url: str = ""
    alt: str = ""
    caption: str = ""


class CalloutContent(FrozenModel):
    text: str = ""
    emoji: str = "💡"
    color: str = "blue"


class DividerContent(FrozenModel):
    pass


class BlockMetadata(FrozenModel):
    """
    Optional display hints kept next to the content payload.

    ``checked``, ``language`` and ``color`` duplicate content fields for
    older snapshots; the editing engine keeps both copies equal.
    """

    level: Optional[int] = Field(default=None, description="Heading level (1-3)")
    checked: Optional[bool] = Field(default=None, description="To-do completion flag")
    language: Optional[str] = Field(default=None, description="Code block language")
    style: Optional[str] = Field(default=None, description="Free-form style hint")
    color: Optional[str] = Field(default=None, description="Callout color")


# Block variants

class BaseBlock(FrozenModel):
    id: str = Field(..., description="Identifier, unique within the owning page")
    position: int = Field(..., ge=0, description="Zero-based rank among siblings")
    metadata: Optional[BlockMetadata] = None


class TextBlock(BaseBlock):
    type: Literal[
        "paragraph",
        "heading-1",
        "heading-2",
        "heading-3",
        "bulleted-list",
        "numbered-list",
        "toggle",
        "quote",
        "table",
    ]
    content: TextContent = Field(default_factory=TextContent)


class TodoBlock(BaseBlock):
    type: Literal["to-do"]
    content: TodoContent = Field(default_factory=TodoContent)


class CodeBlock(BaseBlock):
    type: Literal["code"]
    content: CodeContent = Field(default_factory=CodeContent)


class ImageBlock(BaseBlock):
    type: Literal["image"]
    content: ImageContent = Field(default_factory=ImageContent)


class CalloutBlock(BaseBlock):
    type: Literal["callout"]
    content: CalloutContent = Field(default_factory=CalloutContent)


class DividerBlock(BaseBlock):
    type: Literal["divider"]
    content: DividerContent = Field(default_factory=DividerContent)


Block = Annotated[
    Union[TextBlock, TodoBlock, CodeBlock, ImageBlock, CalloutBlock, DividerBlock],
    Field(discriminator="type"),
]


BLOCK_CLASSES = {
    BlockType.TO_DO: TodoBlock,
    BlockType.CODE: CodeBlock,
    BlockType.IMAGE: ImageBlock,
    BlockType.CALLOUT: CalloutBlock,
    BlockType.DIVIDER: DividerBlock,
}


def generate_id() -> str:
    """Return a new collision-resistant identifier."""
    return str(uuid.uuid4())


def default_content(block_type: BlockType) -> BaseModel:
    """
    Build the empty payload for a block type.

    Args:
        block_type: The variant to build content for

    Returns:
        A content model carrying the configured defaults
    """
    if block_type == BlockType.TO_DO:
        return TodoContent()
    if block_type == BlockType.CODE:
        return CodeContent(language=config.default_code_language)
    if block_type == BlockType.IMAGE:
        return ImageContent()
    if block_type == BlockType.CALLOUT:
        return CalloutContent(
            emoji=config.default_callout_emoji,
            color=config.default_callout_color,
        )
    if block_type == BlockType.DIVIDER:
        return DividerContent()
    return TextContent()


def default_metadata(block_type: BlockType, content: BaseModel) -> BlockMetadata:
    """
    Build the metadata a block of this type starts with.

    Args:
        block_type: The variant
        content: The payload the metadata mirrors

    Returns:
        Metadata with the fields that the variant uses filled in
    """
    if block_type in HEADING_LEVELS:
        return BlockMetadata(level=HEADING_LEVELS[block_type])
    if block_type == BlockType.TO_DO:
        return BlockMetadata(checked=content.checked)
    if block_type == BlockType.CODE:
        return BlockMetadata(language=content.language)
    if block_type == BlockType.CALLOUT:
        return BlockMetadata(color=content.color)
    return BlockMetadata()


def new_block(block_type: Union[BlockType, str], position: int = 0) -> Block:
    """
    Create a block with a fresh id and type-appropriate defaults.

    Args:
        block_type: The variant to create
        position: Rank to start with; the engine renumbers on insertion

    Returns:
        The new block

    Raises:
        ValueError: If block_type is not a known variant
    """
    block_type = BlockType(block_type)
    content = default_content(block_type)
    block_class = BLOCK_CLASSES.get(block_type, TextBlock)
    return block_class(
        id=generate_id(),
        type=block_type.value,
        content=content,
        position=position,
        metadata=default_metadata(block_type, content),
    )


def block_text(block: Block) -> str:
    """Return the text payload of a block, or "" for variants without text."""
    return getattr(block.content, "text", "") or ""
