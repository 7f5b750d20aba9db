"""Assemble a publishable post from blocks and page properties.

A :class:`Post` is built once and never changes: its ``filename`` and
``content`` are computed in the constructor, after validation.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Collection, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from notion_post._errors import ValidationError
from notion_post._factory import create_blocks
from notion_post._filename import post_filename, slugify
from notion_post._format import normalize_markdown
from notion_post._options import DEFAULT_OPTIONS, RenderOptions
from notion_post._properties import PostProperties, dump_frontmatter, map_properties
from notion_post._renderer import render_blocks

if TYPE_CHECKING:
    from notion_post._blocks import Block

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


class BlockSource(Protocol):
    """Retrieves a page's blocks and properties from the content source."""

    async def fetch_blocks(self, page_id: str) -> Sequence[Any]: ...

    async def fetch_properties(self, page_id: str) -> dict[str, Any]: ...


class Post:
    """A post ready to be written to the site's posts directory.

    Parameters
    ----------
    id:
        Identifier of the source page, used in error messages.
    blocks:
        Top-level blocks in document order.
    properties:
        Frontmatter metadata; ``title`` and ``description`` are required.
    date:
        Publication date; defaults to today.
    options:
        Rendering templates and layout settings.
    omit:
        Property keys left out of the frontmatter.

    Raises
    ------
    ValidationError
        If the title or description is missing, the title yields an empty
        slug, or there are no blocks.
    """

    def __init__(
        self,
        id: str,  # noqa: A002
        blocks: Sequence[Block],
        properties: PostProperties,
        date: datetime.date | None = None,
        options: RenderOptions = DEFAULT_OPTIONS,
        omit: Collection[str] = (),
    ) -> None:
        self._validate(id, blocks, properties)
        self._id = id
        self._date = date or datetime.date.today()
        self._filename = post_filename(properties.title, self._date)
        self._content = self._build_content(blocks, properties, options, omit)
        logger.info("Assembled post %s from page %s (%d blocks)", self.filename, id, len(blocks))

    def __repr__(self) -> str:
        return f"Post(id={self.id!r}, filename={self.filename!r})"

    # ── Attributes ────────────────────────────────────────────────────────

    @property
    def id(self) -> str:
        """Identifier of the source page."""
        return self._id

    @property
    def date(self) -> datetime.date:
        """Publication date."""
        return self._date

    @property
    def filename(self) -> str:
        """``{YYYY-MM-DD}-{slug}.md``, from the date and title."""
        return self._filename

    @property
    def content(self) -> str:
        """Frontmatter and Markdown body, normalised."""
        return self._content

    # ── Content ───────────────────────────────────────────────────────────

    def _build_content(
        self,
        blocks: Sequence[Block],
        properties: PostProperties,
        options: RenderOptions,
        omit: Collection[str],
    ) -> str:
        frontmatter = dump_frontmatter(properties, self._date, omit)
        body = render_blocks(blocks, options)
        document = f"{FRONTMATTER_DELIMITER}\n{frontmatter}{FRONTMATTER_DELIMITER}\n\n{body}"
        return normalize_markdown(document)

    # ── Writing to file ───────────────────────────────────────────────────

    def write_to(self, directory: str | Path) -> Path:
        """Write the post into *directory* and return the file's path."""
        path = Path(directory) / self.filename
        path.write_text(self.content, encoding="utf-8")
        logger.info("Wrote %s", path)
        return path

    # ── Validation ────────────────────────────────────────────────────────

    @staticmethod
    def _validate(
        id: str,  # noqa: A002
        blocks: Sequence[Block],
        properties: PostProperties,
    ) -> None:
        if not properties.title:
            raise ValidationError("title", f"Notion page {id} is missing a title.", id)
        if not slugify(properties.title):
            raise ValidationError(
                "title",
                f"Title {properties.title!r} of Notion page {id} has no usable characters.",
                id,
            )
        if not properties.description:
            msg = f"{properties.title} is missing a description."
            raise ValidationError("description", msg, id)
        if len(blocks) == 0:
            msg = f"{properties.title} is missing content (0 blocks)."
            raise ValidationError("blocks", msg, id)

    # ── Construction from a content source ────────────────────────────────

    @classmethod
    async def create(
        cls,
        page_id: str,
        source: BlockSource,
        date: datetime.date | None = None,
        options: RenderOptions = DEFAULT_OPTIONS,
        omit: Collection[str] = (),
    ) -> Post:
        """Fetch a page's blocks and properties and assemble its post.

        The whole block tree is built before anything is rendered, so an
        unsupported block anywhere in the page aborts the post.
        """
        raw_blocks = await source.fetch_blocks(page_id)
        blocks = create_blocks(raw_blocks, max_depth=options.max_depth)
        properties = map_properties(await source.fetch_properties(page_id))
        return cls(page_id, blocks, properties, date=date, options=options, omit=omit)
