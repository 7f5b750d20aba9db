"""Rendering options for the presentation conventions that vary per site."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

DEFAULT_CALLOUT_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "💡": "TIP",
        "⚠️": "WARNING",
        "⚠": "WARNING",
        "❗": "IMPORTANT",
        "‼️": "IMPORTANT",
        "🚨": "CAUTION",
        "🛑": "CAUTION",
        "ℹ️": "NOTE",
        "📝": "NOTE",
    },
)


@dataclass(frozen=True)
class RenderOptions:
    """Templates and layout knobs used by the block renderer.

    Parameters
    ----------
    list_indent:
        Spaces used to indent list continuation lines and nested children.
    callout_marker:
        First line of a callout, formatted with ``{label}`` and ``{icon}``.
        The default produces GitHub alert syntax (``[!TIP]``).
    callout_labels:
        Maps a callout's emoji icon to its label.
    default_callout_label:
        Label for icons missing from ``callout_labels``.
    embed_template:
        Text emitted for an embed, formatted with ``{url}`` and
        ``{provider}``.  The default is a static-site shortcode.
    max_depth:
        Deepest block nesting the factory accepts.
    """

    list_indent: int = 4
    callout_marker: str = "[!{label}]"
    callout_labels: Mapping[str, str] = field(default_factory=lambda: DEFAULT_CALLOUT_LABELS)
    default_callout_label: str = "NOTE"
    embed_template: str = '{{% embed "{url}" %}}'
    max_depth: int = 32

    def callout_label(self, icon: str) -> str:
        return self.callout_labels.get(icon, self.default_callout_label)


DEFAULT_OPTIONS = RenderOptions()
