"""Tests for _filename.py — slugs and post filenames."""

from __future__ import annotations

import datetime

import pytest

from notion_post._filename import post_filename, slugify


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World", "hello-world"),
        ("Hello, World!", "hello-world"),
        ("snake_case_title", "snake-case-title"),
        ("  leading and trailing  ", "leading-and-trailing"),
        ("multiple---hyphens", "multiple-hyphens"),
        ("Crème Brûlée", "creme-brulee"),
        ("Straße", "strasse"),
        ("Tom & Jerry", "tom-and-jerry"),
        ("Python 3.12: What's New?", "python-312-whats-new"),
        ("🎉", ""),
        ("", ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


class TestPostFilename:
    def test_format(self):
        assert post_filename("Hello, World!", datetime.date(2024, 1, 1)) == "2024-01-01-hello-world.md"

    def test_deterministic(self):
        date = datetime.date(2023, 12, 31)
        assert post_filename("Same Title", date) == post_filename("Same Title", date)

    def test_zero_padded_date(self):
        assert post_filename("x", datetime.date(2024, 3, 5)).startswith("2024-03-05-")
