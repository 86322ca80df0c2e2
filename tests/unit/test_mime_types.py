"""
Unit tests for MIME type detection.
"""

import pytest

from minihttp.http.mime_types import DEFAULT_MIME_TYPE, get_extension, get_mime_type


@pytest.mark.parametrize("path, expected", [
    ("static/index.html", "text/html"),
    ("static/style.css", "text/css"),
    ("static/app.js", "application/javascript"),
    ("static/data.json", "application/json"),
    ("static/logo.png", "image/png"),
    ("static/photo.jpg", "image/jpeg"),
    ("static/photo.jpeg", "image/jpeg"),
    ("static/notes.txt", "text/plain"),
])
def test_known_extensions(path, expected):
    assert get_mime_type(path) == expected


@pytest.mark.parametrize("path", [
    "static/archive.tar.gz",
    "static/image.gif",
    "static/README",
    "static/",
    "",
    "static/trailing.",
])
def test_unknown_or_missing_extension(path):
    assert get_mime_type(path) == DEFAULT_MIME_TYPE


def test_matching_is_case_sensitive():
    assert get_mime_type("static/INDEX.HTML") == DEFAULT_MIME_TYPE
    assert get_mime_type("static/logo.PNG") == DEFAULT_MIME_TYPE


def test_last_dot_wins():
    assert get_mime_type("static/app.min.js") == "application/javascript"
    assert get_mime_type("static/data.json.txt") == "text/plain"


def test_dot_in_directory_name():
    """A dot in a directory does not make an extension."""
    assert get_mime_type("static/v1.2/readme") == DEFAULT_MIME_TYPE


def test_get_extension():
    assert get_extension("a/b.c") == "c"
    assert get_extension("noext") == "noext"
    assert get_extension("") == ""
