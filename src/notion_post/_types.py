"""TypedDict definitions for the raw Notion records this package consumes.

The shapes follow what the Notion API returns for ``blocks.children.list``
and ``pages.retrieve``, restricted to the fields the publisher reads.  They
are documentation and type-checking aids only: nothing is validated against
them at runtime.
"""

from __future__ import annotations

from typing import Any, Literal, TypedDict, Union

from typing_extensions import NotRequired

# ── Rich Text ──────────────────────────────────────────────────────────────


class RawLink(TypedDict):
    url: str


class RawTextContent(TypedDict):
    content: str
    link: NotRequired[RawLink | None]


class RawAnnotations(TypedDict, total=False):
    bold: bool
    italic: bool
    strikethrough: bool
    underline: bool
    code: bool
    color: str


class RawRichTextText(TypedDict):
    type: Literal["text"]
    text: RawTextContent
    annotations: NotRequired[RawAnnotations]
    plain_text: NotRequired[str]
    href: NotRequired[str | None]


class RawEquationContent(TypedDict):
    expression: str


class RawRichTextEquation(TypedDict):
    type: Literal["equation"]
    equation: RawEquationContent
    annotations: NotRequired[RawAnnotations]
    plain_text: NotRequired[str]


class RawRichTextMention(TypedDict):
    type: Literal["mention"]
    mention: dict[str, Any]
    annotations: NotRequired[RawAnnotations]
    plain_text: str
    href: NotRequired[str | None]


RawRichText = Union[RawRichTextText, RawRichTextEquation, RawRichTextMention]
"""Union of the rich-text item variants the factory understands."""

# ── Blocks ─────────────────────────────────────────────────────────────────


class RawBlock(TypedDict):
    """A block record as fetched from the Notion API.

    The payload lives under the key named by ``type``; its shape differs per
    block type (``rich_text``, ``language``, ``url``, ``icon``…).  Children
    are attached by the retrieval layer, either inside the payload or at the
    top level.
    """

    id: str
    type: str
    object: NotRequired[Literal["block"]]
    has_children: NotRequired[bool]
    children: NotRequired[list[RawBlock]]


# ── Page properties ────────────────────────────────────────────────────────


class RawSelectOption(TypedDict):
    name: str
    color: NotRequired[str]


class RawDate(TypedDict):
    start: str
    end: NotRequired[str | None]


class RawProperty(TypedDict, total=False):
    """One entry of a page's ``properties`` map; keyed by its ``type``."""

    id: str
    type: str
    title: list[RawRichText]
    rich_text: list[RawRichText]
    select: RawSelectOption | None
    multi_select: list[RawSelectOption]
    checkbox: bool
    number: float | None
    url: str | None
    email: str | None
    phone_number: str | None
    date: RawDate | None


RawProperties = dict[str, Any]
"""A page's ``properties`` map, or an already flattened key/value mapping."""
