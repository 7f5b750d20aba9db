"""Turn Notion pages into Markdown blog posts with YAML frontmatter.

.. code-block:: python

    from notion_post import Post, create_blocks, map_properties

    blocks = create_blocks(raw_blocks)        # Notion API block dicts
    properties = map_properties(raw_props)    # Notion page ``properties``
    post = Post(page_id, blocks, properties)

    post.filename   # → "2024-01-01-hello-world.md"
    post.content    # → "---\\ndate: 2024-01-01\\n…---\\n\\n# Hello…\\n"
    post.write_to("src/posts")

With an async client for the Notion API, :meth:`Post.create` does the
fetching too::

    post = await Post.create(page_id, source)
"""

from notion_post._blocks import (
    LIST_ITEM_TYPES,
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
from notion_post._errors import PostError, RenderError, UnsupportedBlockType, ValidationError
from notion_post._factory import SUPPORTED_TYPES, create_block, create_blocks, parse_rich_text
from notion_post._filename import post_filename, slugify
from notion_post._format import normalize_markdown
from notion_post._options import DEFAULT_OPTIONS, RenderOptions
from notion_post._post import BlockSource, Post
from notion_post._properties import PostProperties, dump_frontmatter, map_properties
from notion_post._renderer import render_block, render_blocks, trailing_newlines
from notion_post._rich_text import render_rich_text
from notion_post._types import RawBlock, RawProperties, RawRichText

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_OPTIONS",
    "LIST_ITEM_TYPES",
    "SUPPORTED_TYPES",
    "Block",
    "BlockSource",
    "Bookmark",
    "BulletedListItem",
    "Callout",
    "Code",
    "Divider",
    "Embed",
    "Equation",
    "Heading",
    "Image",
    "NumberedListItem",
    "Paragraph",
    "Post",
    "PostError",
    "PostProperties",
    "Quote",
    "RawBlock",
    "RawProperties",
    "RawRichText",
    "RenderError",
    "RenderOptions",
    "RichTextSpan",
    "ToDo",
    "Toggle",
    "UnsupportedBlockType",
    "ValidationError",
    "__version__",
    "create_block",
    "create_blocks",
    "dump_frontmatter",
    "map_properties",
    "normalize_markdown",
    "parse_rich_text",
    "post_filename",
    "render_block",
    "render_blocks",
    "render_rich_text",
    "slugify",
    "trailing_newlines",
]
