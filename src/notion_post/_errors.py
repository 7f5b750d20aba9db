"""Exception hierarchy for notion-post.

Every failure aborts the post being assembled; nothing here is retried.
"""

from __future__ import annotations


class PostError(Exception):
    """Base exception for all notion-post errors."""


class ValidationError(PostError):
    """Raised when the input is not enough to publish a post.

    ``field`` names the offending input (``title``, ``description``,
    ``blocks``, ``children``) and ``document_id`` the source page, when known.
    """

    def __init__(self, field: str, message: str, document_id: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.document_id = document_id


class UnsupportedBlockType(PostError):
    """Raised when a raw block carries a discriminant with no block variant."""

    def __init__(self, block_type: str, block_id: str | None) -> None:
        super().__init__(f"Unsupported block type {block_type!r} (block {block_id})")
        self.block_type = block_type
        self.block_id = block_id


class RenderError(PostError):
    """Raised when a block or rich-text span cannot be turned into Markdown."""

    def __init__(self, message: str, block_id: str | None = None) -> None:
        super().__init__(message)
        self.block_id = block_id
