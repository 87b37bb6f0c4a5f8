"""Unit tests for core/utils/slug.py"""

import pytest

from pubarchive.core.utils.slug import slugify


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("Special! Ch@rs#", "special-chrs"),
    ("my_file_name", "myfilename"),
    ("Café au lait", "caf-au-lait"),
    ("two  spaces", "two--spaces"),
    ("", ""),
    ("!!!", ""),
])
def test_slugify_basic(text, expected):
    """slugify keeps ASCII alphanumerics, turns spaces into hyphens and lowercases."""
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["Hello World", "A - B", "Über 9000!", "--x--", "2024-03-01"])
def test_slugify_is_idempotent(text):
    """Re-slugifying an already-produced slug yields the same slug."""
    slug = slugify(text)
    assert slugify(slug) == slug


def test_slugify_output_is_ascii_url_safe():
    slug = slugify("Ünïcödé & <html> \"quotes\" / slashes")
    assert slug.isascii()
    assert all(c.isalnum() or c == "-" for c in slug)


def test_slugify_strips_leading_trailing_hyphens():
    assert slugify(" -leading and trailing- ") == "leading-and-trailing"
