"""Build block variants from raw Notion block records.

Each raw block is dispatched on its ``type`` discriminant to a builder
function.  Children are built before their parent, so a block is only ever
constructed from fully resolved content.  Unknown discriminants raise
:class:`~notion_post._errors.UnsupportedBlockType`; nothing is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlsplit

from notion_post._blocks import (
    Block,
    Bookmark,
    BulletedListItem,
    Callout,
    Code,
    Divider,
    Embed,
    Equation,
    Heading,
    Image,
    NumberedListItem,
    Paragraph,
    Quote,
    RichTextSpan,
    ToDo,
    Toggle,
)
from notion_post._errors import RenderError, UnsupportedBlockType, ValidationError
from notion_post._options import DEFAULT_OPTIONS

if TYPE_CHECKING:
    from notion_post._types import RawBlock, RawRichText

logger = logging.getLogger(__name__)

# ── Rich Text ──────────────────────────────────────────────────────────────


def parse_rich_text(items: Iterable[RawRichText]) -> tuple[RichTextSpan, ...]:
    """Convert raw Notion rich-text items to :class:`RichTextSpan` values."""
    return tuple(_parse_span(cast("dict[str, Any]", item)) for item in items)


def _parse_span(d: dict[str, Any]) -> RichTextSpan:
    item_type: str = d.get("type", "text")
    ann: dict[str, Any] = d.get("annotations") or {}
    styles = {
        "bold": bool(ann.get("bold")),
        "italic": bool(ann.get("italic")),
        "code": bool(ann.get("code")),
        "strikethrough": bool(ann.get("strikethrough")),
    }

    if item_type == "text":
        text_obj: dict[str, Any] = d.get("text") or {}
        link_obj = text_obj.get("link")
        link = link_obj.get("url") if isinstance(link_obj, dict) else None
        return RichTextSpan(text=text_obj.get("content", ""), link=link or None, **styles)

    if item_type == "equation":
        eq: dict[str, Any] = d.get("equation") or {}
        return RichTextSpan(text=eq.get("expression", ""), equation=True, **styles)

    # Mentions and any newer item types carry a rendered ``plain_text``.
    plain = d.get("plain_text")
    if plain is None:
        raise RenderError(f"Rich-text item of type {item_type!r} has no plain_text")
    return RichTextSpan(text=plain, link=d.get("href") or None, **styles)


# ── Helpers ────────────────────────────────────────────────────────────────


def _payload(raw: dict[str, Any]) -> dict[str, Any]:
    return cast("dict[str, Any]", raw.get(raw.get("type", ""), None) or {})


def _raw_children(raw: dict[str, Any]) -> list[Any]:
    payload = _payload(raw)
    children = payload.get("children")
    if children is None:
        children = raw.get("children")
    if children is None:
        if raw.get("has_children"):
            raise ValidationError(
                "children",
                f"Block {raw.get('id')} has children that were not retrieved.",
            )
        return []
    return cast("list[Any]", children)


def _file_url(payload: dict[str, Any]) -> str:
    source: str = payload.get("type", "external")
    obj = payload.get(source) or payload.get("external") or payload.get("file") or {}
    return cast("str", obj.get("url", ""))


def _plain(spans: Iterable[RichTextSpan]) -> str:
    return "".join(span.text for span in spans)


_PROVIDER_ALIASES: dict[str, str] = {
    "youtu.be": "youtube",
    "x.com": "twitter",
    "gist.github.com": "gist",
    "open.spotify.com": "spotify",
}


def embed_provider(url: str) -> str:
    """Name the service an embed URL points at, e.g. ``youtube``."""
    host = (urlsplit(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if host in _PROVIDER_ALIASES:
        return _PROVIDER_ALIASES[host]
    labels = host.split(".")
    return labels[-2] if len(labels) >= 2 else host


# ── Builders ───────────────────────────────────────────────────────────────

_Builder = Callable[[dict[str, Any], tuple[Block, ...]], Block]


def _text_kwargs(raw: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": raw.get("id", ""),
        "rich_text": parse_rich_text(_payload(raw).get("rich_text", [])),
    }


def _build_paragraph(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    return Paragraph(children=children, **_text_kwargs(raw))


def _heading_builder(level: int) -> _Builder:
    def build(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
        return Heading(level=level, children=children, **_text_kwargs(raw))

    return build


def _build_bulleted_list_item(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    return BulletedListItem(children=children, **_text_kwargs(raw))


def _build_numbered_list_item(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    return NumberedListItem(children=children, **_text_kwargs(raw))


def _build_to_do(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    checked = bool(_payload(raw).get("checked", False))
    return ToDo(checked=checked, children=children, **_text_kwargs(raw))


def _build_toggle(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    return Toggle(children=children, **_text_kwargs(raw))


def _build_quote(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    return Quote(children=children, **_text_kwargs(raw))


def _build_callout(raw: dict[str, Any], children: tuple[Block, ...]) -> Block:
    icon_obj = _payload(raw).get("icon") or {}
    icon: str = icon_obj.get("emoji", "") if isinstance(icon_obj, dict) else ""
    return Callout(icon=icon, children=children, **_text_kwargs(raw))


def _build_code(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    payload = _payload(raw)
    return Code(
        id=raw.get("id", ""),
        text=_plain(parse_rich_text(payload.get("rich_text", []))),
        language=payload.get("language") or "plain text",
    )


def _build_image(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    payload = _payload(raw)
    caption = _plain(parse_rich_text(payload.get("caption", [])))
    return Image(id=raw.get("id", ""), url=_file_url(payload), caption=caption)


def _build_divider(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    return Divider(id=raw.get("id", ""))


def _build_embed(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    url: str = _payload(raw).get("url", "")
    return Embed(id=raw.get("id", ""), url=url, provider=embed_provider(url))


def _build_bookmark(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    payload = _payload(raw)
    return Bookmark(
        id=raw.get("id", ""),
        url=payload.get("url", ""),
        caption=parse_rich_text(payload.get("caption", [])),
    )


def _build_equation(raw: dict[str, Any], _children: tuple[Block, ...]) -> Block:
    return Equation(id=raw.get("id", ""), expression=_payload(raw).get("expression", ""))


_BUILDERS: dict[str, _Builder] = {
    "paragraph": _build_paragraph,
    "heading_1": _heading_builder(1),
    "heading_2": _heading_builder(2),
    "heading_3": _heading_builder(3),
    "bulleted_list_item": _build_bulleted_list_item,
    "numbered_list_item": _build_numbered_list_item,
    "to_do": _build_to_do,
    "toggle": _build_toggle,
    "quote": _build_quote,
    "callout": _build_callout,
    "code": _build_code,
    "image": _build_image,
    "divider": _build_divider,
    "embed": _build_embed,
    "bookmark": _build_bookmark,
    "equation": _build_equation,
}

SUPPORTED_TYPES: frozenset[str] = frozenset(_BUILDERS)


# ── Public entry points ───────────────────────────────────────────────────


def create_block(raw: RawBlock, *, max_depth: int = DEFAULT_OPTIONS.max_depth) -> Block:
    """Build the block variant for one raw Notion block record.

    Parameters
    ----------
    raw:
        A block dict as returned by the Notion API, with any children
        already attached.
    max_depth:
        Deepest nesting accepted below this block.

    Raises
    ------
    UnsupportedBlockType
        If the block's ``type`` (or that of any descendant) is not supported.
    ValidationError
        If children were announced but not attached, or nesting is too deep.
    """
    return _create(cast("dict[str, Any]", raw), 0, max_depth)


def create_blocks(
    raws: Iterable[RawBlock],
    *,
    max_depth: int = DEFAULT_OPTIONS.max_depth,
) -> list[Block]:
    """Build block variants for an ordered sequence of raw records."""
    return [create_block(raw, max_depth=max_depth) for raw in raws]


def _create(raw: dict[str, Any], depth: int, max_depth: int) -> Block:
    block_type: str = raw.get("type", "")
    block_id: str | None = raw.get("id")
    builder = _BUILDERS.get(block_type)
    if builder is None:
        raise UnsupportedBlockType(block_type, block_id)
    if depth > max_depth:
        raise ValidationError(
            "children",
            f"Block {block_id} is nested deeper than {max_depth} levels.",
        )

    children = tuple(_create(child, depth + 1, max_depth) for child in _raw_children(raw))
    logger.debug("Built %s block %s with %d children", block_type, block_id, len(children))
    return builder(raw, children)
