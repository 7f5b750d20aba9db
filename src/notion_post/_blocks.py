"""Block variants produced by the factory and consumed by the renderer.

Every variant is a frozen dataclass carrying a ``type`` discriminant equal to
the Notion block type it was built from.  The renderer and the spacing rule
dispatch on that tag, never on the Python class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Union

# ── Rich Text ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RichTextSpan:
    """An inline run of text with style flags and an optional link target."""

    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    strikethrough: bool = False
    link: str | None = None
    equation: bool = False


# ── Text blocks ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Paragraph:
    type: ClassVar[Literal["paragraph"]] = "paragraph"
    id: str
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Heading:
    type: ClassVar[Literal["heading"]] = "heading"
    id: str
    level: int
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Quote:
    type: ClassVar[Literal["quote"]] = "quote"
    id: str
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Callout:
    """A highlighted note; ``icon`` (an emoji) selects its kind."""

    type: ClassVar[Literal["callout"]] = "callout"
    id: str
    icon: str = ""
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Toggle:
    type: ClassVar[Literal["toggle"]] = "toggle"
    id: str
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


# ── List items ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class BulletedListItem:
    type: ClassVar[Literal["bulleted_list_item"]] = "bulleted_list_item"
    id: str
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class NumberedListItem:
    """A numbered list item.  Its ordinal comes from its position among
    consecutive numbered siblings at render time and is not stored here."""

    type: ClassVar[Literal["numbered_list_item"]] = "numbered_list_item"
    id: str
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class ToDo:
    type: ClassVar[Literal["to_do"]] = "to_do"
    id: str
    checked: bool = False
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = ()


# ── Leaf blocks ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Code:
    type: ClassVar[Literal["code"]] = "code"
    id: str
    text: str
    language: str = "plain text"


@dataclass(frozen=True)
class Image:
    type: ClassVar[Literal["image"]] = "image"
    id: str
    url: str
    caption: str = ""


@dataclass(frozen=True)
class Divider:
    type: ClassVar[Literal["divider"]] = "divider"
    id: str


@dataclass(frozen=True)
class Embed:
    type: ClassVar[Literal["embed"]] = "embed"
    id: str
    url: str
    provider: str = ""


@dataclass(frozen=True)
class Bookmark:
    type: ClassVar[Literal["bookmark"]] = "bookmark"
    id: str
    url: str
    caption: tuple[RichTextSpan, ...] = ()


@dataclass(frozen=True)
class Equation:
    type: ClassVar[Literal["equation"]] = "equation"
    id: str
    expression: str


# ── Union of all blocks ───────────────────────────────────────────────────

Block = Union[
    Paragraph,
    Heading,
    Quote,
    Callout,
    Toggle,
    BulletedListItem,
    NumberedListItem,
    ToDo,
    Code,
    Image,
    Divider,
    Embed,
    Bookmark,
    Equation,
]
"""Union of every block variant."""

LIST_ITEM_TYPES: frozenset[str] = frozenset(
    {BulletedListItem.type, NumberedListItem.type},
)
"""Discriminants joined by a single newline when a sibling of the same type follows."""
