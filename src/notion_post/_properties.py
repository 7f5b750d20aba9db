"""Post metadata: mapping Notion page properties and dumping frontmatter."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from notion_post._errors import RenderError
from notion_post._factory import parse_rich_text

if TYPE_CHECKING:
    import datetime

    from notion_post._types import RawProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostProperties:
    """Metadata written to a post's frontmatter.

    ``title`` and ``description`` are required by :class:`~notion_post.Post`;
    ``extra`` holds any further scalar fields, passed through verbatim.  The
    publication date is not stored here: the post assigns it when assembled.
    """

    title: str = ""
    description: str = ""
    tags: tuple[str, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict)

    def to_frontmatter(
        self,
        date: datetime.date,
        omit: Collection[str] = (),
    ) -> dict[str, Any]:
        """Return the frontmatter mapping, without the keys named in *omit*."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            title=self.title,
            description=self.description,
            tags=list(self.tags),
            date=date,
        )
        return {key: value for key, value in data.items() if key not in omit}


def dump_frontmatter(
    properties: PostProperties,
    date: datetime.date,
    omit: Collection[str] = (),
) -> str:
    """Serialise *properties* to YAML with keys in lexicographic order."""
    try:
        return yaml.safe_dump(
            properties.to_frontmatter(date, omit),
            sort_keys=True,
            allow_unicode=True,
            default_flow_style=False,
        )
    except yaml.YAMLError as exc:
        raise RenderError(f"Cannot serialise properties of {properties.title!r}: {exc}") from exc


# ── Notion property mapping ───────────────────────────────────────────────


def _plain_text(items: Any) -> str:
    return "".join(span.text for span in parse_rich_text(items or []))


def _option_name(option: Any) -> str | None:
    return option.get("name") if isinstance(option, dict) else None


def _date_start(value: Any) -> str | None:
    return value.get("start") if isinstance(value, dict) else None


def _formula(value: Any) -> Any:
    if not isinstance(value, dict):
        return None
    return value.get(value.get("type", ""))


_PropertyReader = Callable[[Any], Any]

_READERS: dict[str, _PropertyReader] = {
    "title": _plain_text,
    "rich_text": _plain_text,
    "select": _option_name,
    "status": _option_name,
    "multi_select": lambda value: [_option_name(option) for option in value or []],
    "checkbox": bool,
    "number": lambda value: value,
    "url": lambda value: value,
    "email": lambda value: value,
    "phone_number": lambda value: value,
    "date": _date_start,
    "created_time": lambda value: value,
    "last_edited_time": lambda value: value,
    "formula": _formula,
}


def _field_name(key: str) -> str:
    return re.sub(r"[\s-]+", "_", key.strip()).lower()


def map_properties(raw: RawProperties) -> PostProperties:
    """Build :class:`PostProperties` from a Notion page's ``properties`` map.

    Notion property objects (dicts with a ``type``) are reduced to plain
    values; anything else is passed through unchanged.  Keys are lowercased
    with spaces replaced by underscores, and whichever property has the
    ``title`` type becomes the title.  Property types with no scalar form
    (relations, people, files…) are skipped.
    """
    fields: dict[str, Any] = {}
    for key, value in raw.items():
        name = _field_name(key)
        if not (isinstance(value, dict) and "type" in value):
            fields[name] = value
            continue

        prop_type: str = value["type"]
        reader = _READERS.get(prop_type)
        if reader is None:
            logger.warning("Skipping property %r of unsupported type %r", key, prop_type)
            continue
        fields["title" if prop_type == "title" else name] = reader(value.get(prop_type))

    if "date" in fields:
        logger.warning("Ignoring 'date' property; the publication date is set on assembly")
        del fields["date"]

    tags = fields.pop("tags", None) or ()
    if isinstance(tags, str):
        tags = (tags,)
    return PostProperties(
        title=fields.pop("title", None) or "",
        description=fields.pop("description", None) or "",
        tags=tuple(str(tag) for tag in tags if tag),
        extra=fields,
    )
