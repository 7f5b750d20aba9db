"""Tests for _post.py — separator policy, validation and post assembly."""

from __future__ import annotations

import asyncio
import dataclasses
import datetime

import mistune
import pytest

from notion_post import (
    DEFAULT_OPTIONS,
    BulletedListItem,
    Callout,
    Divider,
    Embed,
    Heading,
    NumberedListItem,
    Paragraph,
    Post,
    PostProperties,
    RenderError,
    RichTextSpan,
    ToDo,
    UnsupportedBlockType,
    ValidationError,
    normalize_markdown,
    trailing_newlines,
)

DATE = datetime.date(2024, 1, 1)
PROPS = PostProperties(title="Hello World", description="A post", tags=("python",))

_ast = mistune.create_markdown(renderer="ast")


class TestTrailingNewlines:
    def test_non_list_block(self):
        blocks = [_p("a"), _p("b")]
        assert trailing_newlines(blocks, 0) == "\n\n"

    def test_last_list_item(self):
        blocks = [_p("a"), _bullet("b")]
        assert trailing_newlines(blocks, 1) == "\n\n"

    def test_same_list_type(self):
        blocks = [_bullet("a"), _bullet("b")]
        assert trailing_newlines(blocks, 0) == "\n"

    def test_numbered_followed_by_numbered(self):
        blocks = [_number("a"), _number("b")]
        assert trailing_newlines(blocks, 0) == "\n"

    def test_bulleted_then_numbered(self):
        blocks = [_bullet("a"), _number("b")]
        assert trailing_newlines(blocks, 0) == "\n\n"

    def test_numbered_then_bulleted(self):
        blocks = [_number("a"), _bullet("b")]
        assert trailing_newlines(blocks, 0) == "\n\n"

    def test_list_item_then_paragraph(self):
        blocks = [_bullet("a"), _p("b")]
        assert trailing_newlines(blocks, 0) == "\n\n"

    def test_paragraph_then_list_item(self):
        blocks = [_p("a"), _bullet("b")]
        assert trailing_newlines(blocks, 0) == "\n\n"

    def test_to_do_items_are_not_list_separated(self):
        blocks = [ToDo("a"), ToDo("b"), _bullet("c")]
        assert [trailing_newlines(blocks, i) for i in range(3)] == ["\n\n", "\n\n", "\n\n"]

    @pytest.mark.parametrize("n", [2, 3, 7])
    def test_run_then_paragraph(self, n):
        for item in (_bullet, _number):
            blocks = [item(str(i)) for i in range(n)] + [_p("end")]
            seps = [trailing_newlines(blocks, i) for i in range(n)]
            assert seps == ["\n"] * (n - 1) + ["\n\n"]


class TestValidation:
    def test_missing_title(self):
        with pytest.raises(ValidationError) as exc_info:
            Post("page-1", [_p("x")], PostProperties(description="d"), date=DATE)
        assert exc_info.value.field == "title"
        assert exc_info.value.document_id == "page-1"
        assert "page-1" in str(exc_info.value)

    def test_missing_description(self):
        with pytest.raises(ValidationError) as exc_info:
            Post("page-1", [_p("x")], PostProperties(title="T"), date=DATE)
        assert exc_info.value.field == "description"
        assert str(exc_info.value) == "T is missing a description."

    def test_no_blocks(self):
        with pytest.raises(ValidationError) as exc_info:
            Post("page-1", [], PROPS, date=DATE)
        assert exc_info.value.field == "blocks"

    def test_title_without_slug(self):
        with pytest.raises(ValidationError) as exc_info:
            Post("page-1", [_p("x")], PostProperties(title="🎉", description="d"), date=DATE)
        assert exc_info.value.field == "title"

    def test_validated_before_rendering(self):
        options = dataclasses.replace(DEFAULT_OPTIONS, embed_template="{bad}")
        blocks = [Embed("e", "https://youtu.be/1", "youtube")]
        with pytest.raises(ValidationError):
            Post("page-1", blocks, PostProperties(title="T"), date=DATE, options=options)


class TestRenderFailure:
    def test_render_error_aborts_post(self):
        options = dataclasses.replace(DEFAULT_OPTIONS, callout_marker="{missing}")
        blocks = [_p("fine"), Callout("c1", "💡", (RichTextSpan("x"),))]
        with pytest.raises(RenderError) as exc_info:
            Post("page-1", blocks, PROPS, date=DATE, options=options)
        assert exc_info.value.block_id == "c1"


class TestContent:
    BLOCKS = [
        Heading("h", 1, (RichTextSpan("Hello"),)),
        Paragraph("p", (RichTextSpan("Intro "), RichTextSpan("bold", bold=True))),
        BulletedListItem("b1", (RichTextSpan("a"),)),
        BulletedListItem("b2", (RichTextSpan("b"),)),
        NumberedListItem("n1", (RichTextSpan("one"),)),
        NumberedListItem("n2", (RichTextSpan("two"),)),
        Paragraph("end", (RichTextSpan("End"),)),
    ]

    EXPECTED = (
        "---\n"
        "date: 2024-01-01\n"
        "description: A post\n"
        "tags:\n"
        "- python\n"
        "title: Hello World\n"
        "---\n"
        "\n"
        "# Hello\n"
        "\n"
        "Intro **bold**\n"
        "\n"
        "- a\n"
        "- b\n"
        "\n"
        "1. one\n"
        "2. two\n"
        "\n"
        "End\n"
    )

    def test_full_document(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        assert post.content == self.EXPECTED

    def test_filename(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        assert post.filename == "2024-01-01-hello-world.md"

    def test_one_header_and_body(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        header, body = post.content.split("---\n", 2)[1:]
        assert header.startswith("date: ")
        assert body.strip()
        assert post.content.count("---\n") == 2

    def test_deterministic(self):
        first = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        second = Post("page-1", list(self.BLOCKS), PROPS, date=DATE)
        assert (first.filename, first.content) == (second.filename, second.content)

    def test_normaliser_is_idempotent_on_output(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        assert normalize_markdown(post.content) == post.content

    def test_lists_parse_as_single_lists(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        body = post.content.split("---\n", 2)[2]
        tokens = [t for t in _ast(body) if t["type"] != "blank_line"]
        assert [t["type"] for t in tokens] == ["heading", "paragraph", "list", "list", "paragraph"]
        bullets, numbers = tokens[2], tokens[3]
        assert not bullets["attrs"]["ordered"]
        assert len(bullets["children"]) == 2
        assert numbers["attrs"]["ordered"]
        assert len(numbers["children"]) == 2

    def test_omit(self):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE, omit=("tags",))
        assert "tags" not in post.content

    def test_divider_stays_in_body(self):
        post = Post("page-1", [_p("a"), Divider("d"), _p("b")], PROPS, date=DATE)
        assert post.content.endswith("\na\n\n---\n\nb\n")

    def test_default_date_is_today(self):
        post = Post("page-1", [_p("x")], PROPS)
        assert post.date == datetime.date.today()
        assert post.filename.startswith(datetime.date.today().isoformat())

    @pytest.mark.parametrize("attr", ["id", "date", "filename", "content"])
    def test_read_only(self, attr):
        post = Post("page-1", self.BLOCKS, PROPS, date=DATE)
        with pytest.raises(AttributeError):
            setattr(post, attr, "changed")

    def test_immutable_inputs_not_mutated(self):
        blocks = list(self.BLOCKS)
        Post("page-1", blocks, PROPS, date=DATE)
        assert blocks == self.BLOCKS


class TestWriteTo:
    def test_writes_file(self, tmp_path):
        post = Post("page-1", [_p("Hi")], PROPS, date=DATE)
        path = post.write_to(tmp_path)
        assert path == tmp_path / "2024-01-01-hello-world.md"
        assert path.read_text(encoding="utf-8") == post.content


class TestCreate:
    def test_from_source(self):
        source = _FakeSource(
            blocks=[
                _raw("heading_2", {"rich_text": [_rt("Intro")]}),
                _raw("paragraph", {"rich_text": [_rt("Body")]}),
            ],
            properties={
                "Name": {"type": "title", "title": [_rt("From Notion")]},
                "Description": {"type": "rich_text", "rich_text": [_rt("Fetched")]},
            },
        )
        post = asyncio.run(Post.create("page-9", source, date=DATE))
        assert source.requested == ["page-9", "page-9"]
        assert post.filename == "2024-01-01-from-notion.md"
        assert post.content.endswith("---\n\n## Intro\n\nBody\n")

    def test_unsupported_block_aborts(self):
        source = _FakeSource(
            blocks=[_raw("paragraph", {"rich_text": []}), _raw("child_page", {"title": "x"})],
            properties={"title": "T", "description": "D"},
        )
        with pytest.raises(UnsupportedBlockType) as exc_info:
            asyncio.run(Post.create("page-9", source, date=DATE))
        assert exc_info.value.block_type == "child_page"

    def test_missing_description_reports_page(self):
        source = _FakeSource(blocks=[_raw("divider", {})], properties={"title": "T"})
        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(Post.create("page-9", source, date=DATE))
        assert exc_info.value.field == "description"
        assert exc_info.value.document_id == "page-9"


# ── Helpers ────────────────────────────────────────────────────────────────


class _FakeSource:
    def __init__(self, blocks, properties):
        self.blocks = blocks
        self.properties = properties
        self.requested = []

    async def fetch_blocks(self, page_id):
        self.requested.append(page_id)
        return self.blocks

    async def fetch_properties(self, page_id):
        self.requested.append(page_id)
        return self.properties


def _p(text):
    return Paragraph("p", (RichTextSpan(text),))


def _bullet(text):
    return BulletedListItem("b", (RichTextSpan(text),))


def _number(text):
    return NumberedListItem("n", (RichTextSpan(text),))


def _rt(content):
    return {"type": "text", "text": {"content": content}, "plain_text": content}


def _raw(block_type, payload):
    return {"object": "block", "id": block_type, "type": block_type, block_type: payload}
