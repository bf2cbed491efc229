"""Unit tests for core/utils/slug.py"""

import pytest

from manupub.core.utils.slug import heading_slug


@pytest.mark.parametrize("text,expected", [
    ("Getting Started!", "getting-started-"),
    ("Hello World", "hello-world"),
    ("my_file_name", "my_file_name"),
    ("Webpack & React: 101", "webpack-react-101"),
    ("  padded  ", "-padded-"),
    ("", ""),
])
def test_heading_slug(text, expected):
    """heading_slug lowercases and replaces non-word runs with one hyphen."""
    assert heading_slug(text) == expected


def test_heading_slug_is_stable():
    """Identical input always yields the identical slug."""
    assert {heading_slug("Getting Started!") for _ in range(10)} == {"getting-started-"}


def test_heading_slug_idempotent():
    """A slug is already in slug form."""
    assert heading_slug(heading_slug("Why? Because!")) == heading_slug("Why? Because!")
