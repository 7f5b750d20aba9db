"""Render block variants to Markdown.

Each block variant is dispatched on its ``type`` discriminant to a renderer
function that returns the block's Markdown without trailing newlines.
Sequences of sibling blocks are joined with :func:`trailing_newlines`, the
same separator policy the post assembler applies to top-level blocks.

Public entry points: :func:`render_block` and :func:`render_blocks`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import Any, cast

from notion_post._blocks import (
    LIST_ITEM_TYPES,
    Block,
    Bookmark,
    BulletedListItem,
    Callout,
    Code,
    Embed,
    Equation,
    Heading,
    Image,
    NumberedListItem,
    Paragraph,
    Quote,
    ToDo,
    Toggle,
)
from notion_post._errors import RenderError
from notion_post._options import DEFAULT_OPTIONS, RenderOptions
from notion_post._rich_text import link_target, render_rich_text

# ── Separator policy ──────────────────────────────────────────────────────


def trailing_newlines(blocks: Sequence[Block], index: int) -> str:
    """Return the separator that follows ``blocks[index]``.

    List items are followed by a single newline when the next block is a
    list item of the same type, keeping the list contiguous.  Everything
    else, including two different list types side by side, gets a blank
    line.
    """
    block = blocks[index]
    if block.type not in LIST_ITEM_TYPES:
        return "\n\n"
    if index + 1 >= len(blocks):
        return "\n\n"
    if blocks[index + 1].type == block.type:
        return "\n"
    return "\n\n"


def ordinals(blocks: Sequence[Block]) -> list[int]:
    """1-based position of each block within its run of same-type siblings."""
    result: list[int] = []
    prev_type = ""
    for block in blocks:
        result.append(result[-1] + 1 if block.type == prev_type else 1)
        prev_type = block.type
    return result


# ── Public entry points ───────────────────────────────────────────────────


def render_blocks(blocks: Sequence[Block], options: RenderOptions = DEFAULT_OPTIONS) -> str:
    """Render sibling blocks to Markdown joined by the separator policy.

    Parameters
    ----------
    blocks:
        Sibling blocks in document order.
    options:
        Templates and layout settings.

    Returns
    -------
    str
        Markdown text without a trailing newline.
    """
    numbers = ordinals(blocks)
    parts: list[str] = []
    for i, block in enumerate(blocks):
        parts.append(render_block(block, options, ordinal=numbers[i]))
        parts.append(trailing_newlines(blocks, i))
    return "".join(parts).rstrip("\n")


def render_block(
    block: Block,
    options: RenderOptions = DEFAULT_OPTIONS,
    ordinal: int = 1,
) -> str:
    """Render one block, including its children, to Markdown.

    ``ordinal`` is only used by numbered list items.
    """
    renderer = _RENDERERS.get(block.type)
    if renderer is None:
        raise RenderError(f"No renderer for block type {block.type!r}", block.id)
    return renderer(block, options, ordinal)


# ── Helpers ────────────────────────────────────────────────────────────────

_BACKTICK_RUN = re.compile(r"`+")


def _indent(text: str, width: int) -> str:
    prefix = " " * width
    return "\n".join(prefix + line if line else "" for line in text.split("\n"))


def _quote_lines(text: str) -> str:
    return "\n".join(f"> {line}" if line else ">" for line in text.split("\n"))


def _with_children(text: str, children: Sequence[Block], options: RenderOptions) -> str:
    if not children:
        return text
    child_md = render_blocks(children, options)
    return f"{text}\n\n{child_md}" if text else child_md


def _list_item(marker: str, block: Any, options: RenderOptions) -> str:
    width = max(options.list_indent, len(marker))
    lines = render_rich_text(block.rich_text).split("\n")
    result = marker + lines[0]
    for line in lines[1:]:
        result += "\n" + (" " * width + line if line else "")
    if block.children:
        result += "\n" + _indent(render_blocks(block.children, options), width)
    return result


def _format(template: str, block: Block, **fields: str) -> str:
    try:
        return template.format(**fields)
    except (KeyError, IndexError, ValueError) as exc:
        msg = f"Cannot render {block.type} template {template!r}: {exc}"
        raise RenderError(msg, block.id) from exc


# ── Block renderers ───────────────────────────────────────────────────────

_BlockRenderer = Callable[[Any, RenderOptions, int], str]


def _render_paragraph(block: Paragraph, options: RenderOptions, _ordinal: int) -> str:
    return _with_children(render_rich_text(block.rich_text), block.children, options)


def _render_heading(block: Heading, options: RenderOptions, _ordinal: int) -> str:
    text = " ".join(render_rich_text(block.rich_text).split("\n"))
    heading = f"{'#' * block.level} {text}"
    return _with_children(heading, block.children, options)


def _render_bulleted_list_item(
    block: BulletedListItem,
    options: RenderOptions,
    _ordinal: int,
) -> str:
    return _list_item("- ", block, options)


def _render_numbered_list_item(
    block: NumberedListItem,
    options: RenderOptions,
    ordinal: int,
) -> str:
    return _list_item(f"{ordinal}. ", block, options)


def _render_to_do(block: ToDo, options: RenderOptions, _ordinal: int) -> str:
    return _list_item("- [x] " if block.checked else "- [ ] ", block, options)


def _render_toggle(block: Toggle, options: RenderOptions, _ordinal: int) -> str:
    summary = " ".join(render_rich_text(block.rich_text).split("\n"))
    parts = ["<details>", f"<summary>{summary}</summary>"]
    if block.children:
        parts.append("\n" + render_blocks(block.children, options) + "\n")
    parts.append("</details>")
    return "\n".join(parts)


def _render_quote(block: Quote, options: RenderOptions, _ordinal: int) -> str:
    text = _with_children(render_rich_text(block.rich_text), block.children, options)
    return _quote_lines(text)


def _render_callout(block: Callout, options: RenderOptions, _ordinal: int) -> str:
    label = options.callout_label(block.icon)
    marker = _format(options.callout_marker, block, label=label, icon=block.icon)
    body = _with_children(render_rich_text(block.rich_text), block.children, options)
    return _quote_lines(f"{marker}\n{body}" if body else marker)


def _render_code(block: Code, _options: RenderOptions, _ordinal: int) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN.findall(block.text)), default=0)
    fence = "`" * max(3, longest + 1)
    # Don't emit a language tag for plain text
    lang_tag = "" if block.language == "plain text" else block.language
    return f"{fence}{lang_tag}\n{block.text}\n{fence}"


def _render_image(block: Image, _options: RenderOptions, _ordinal: int) -> str:
    alt = block.caption.replace("\n", " ").replace("[", "\\[").replace("]", "\\]")
    return f"![{alt}]({link_target(block.url)})"


def _render_divider(_block: Any, _options: RenderOptions, _ordinal: int) -> str:
    return "---"


def _render_embed(block: Embed, options: RenderOptions, _ordinal: int) -> str:
    return _format(options.embed_template, block, url=block.url, provider=block.provider)


def _render_bookmark(block: Bookmark, _options: RenderOptions, _ordinal: int) -> str:
    label = render_rich_text(block.caption) or block.url
    return f"[{label}]({link_target(block.url)})"


def _render_equation(block: Equation, _options: RenderOptions, _ordinal: int) -> str:
    return f"$$\n{block.expression}\n$$"


# ── Renderer registry ─────────────────────────────────────────────────────

_RENDERERS: dict[str, _BlockRenderer] = cast(
    "dict[str, _BlockRenderer]",
    {
        "paragraph": _render_paragraph,
        "heading": _render_heading,
        "bulleted_list_item": _render_bulleted_list_item,
        "numbered_list_item": _render_numbered_list_item,
        "to_do": _render_to_do,
        "toggle": _render_toggle,
        "quote": _render_quote,
        "callout": _render_callout,
        "code": _render_code,
        "image": _render_image,
        "divider": _render_divider,
        "embed": _render_embed,
        "bookmark": _render_bookmark,
        "equation": _render_equation,
    },
)
