"""Render rich-text spans to inline Markdown.

Each :class:`~notion_post._blocks.RichTextSpan` becomes a Markdown string
with its formatting markers applied in a fixed order, so combined styles
always nest the same way whatever order the flags were set in.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notion_post._blocks import RichTextSpan

_BACKTICK_RUN = re.compile(r"`+")


def render_rich_text(spans: Iterable[RichTextSpan]) -> str:
    """Convert a sequence of rich-text spans to a Markdown string.

    Adjacent spans with identical styles and link are rendered as one, so
    their markers do not run into each other.

    Parameters
    ----------
    spans:
        The spans of one block, in reading order.

    Returns
    -------
    str
        The concatenated inline Markdown.
    """
    return "".join(render_span(span) for span in merge_spans(spans))


def merge_spans(spans: Iterable[RichTextSpan]) -> list[RichTextSpan]:
    """Join neighbouring spans that share every style flag and link."""
    merged: list[RichTextSpan] = []
    for span in spans:
        if merged and _style_key(merged[-1]) == _style_key(span) and not span.equation:
            merged[-1] = replace(merged[-1], text=merged[-1].text + span.text)
        else:
            merged.append(span)
    return merged


def render_span(span: RichTextSpan) -> str:
    """Render a single span to Markdown."""
    if not span.text:
        # Empty text with a link target renders as an empty link
        return f"[]({link_target(span.link)})" if span.link else ""

    if span.equation:
        return f"${span.text}$"

    # Code content is literal, whitespace included
    if span.code:
        return _apply_formatting(span.text, span)

    # Markers cannot open or close on whitespace, so keep it outside them.
    core = span.text.strip()
    if not core:
        return span.text

    start = span.text.index(core)
    lead, trail = span.text[:start], span.text[start + len(core) :]
    return lead + _apply_formatting(core, span) + trail


def _style_key(span: RichTextSpan) -> tuple[bool, bool, bool, bool, bool, str | None]:
    return (span.bold, span.italic, span.code, span.strikethrough, span.equation, span.link)


def _code_span(content: str) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    fence = "`" * (longest + 1)
    edge_backtick = content.startswith("`") or content.endswith("`")
    # A single leading and trailing space is stripped from code spans
    edge_spaces = content.startswith(" ") and content.endswith(" ") and bool(content.strip(" "))
    pad = " " if edge_backtick or edge_spaces else ""
    return f"{fence}{pad}{content}{pad}{fence}"


def _apply_formatting(content: str, span: RichTextSpan) -> str:
    """Wrap *content* in the markers for *span*'s flags."""
    result = content

    # Code is innermost; its content is literal
    if span.code:
        result = _code_span(result)

    if span.strikethrough:
        result = f"~~{result}~~"

    if span.bold:
        result = f"**{result}**"

    if span.italic:
        result = f"*{result}*"

    # Link wraps everything
    if span.link:
        result = f"[{result}]({link_target(span.link)})"

    return result


def link_target(url: str) -> str:
    """Return *url* as a Markdown link destination."""
    if any(ch in url for ch in " ()<>"):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url
