"""
=============================================================================
MIME TYPE DETECTION
=============================================================================

Maps a file extension to the Content-Type sent with a static file.

    ┌────────────────────────────────────────────────────────────────────┐
    │  EXTENSION          MIME TYPE                                      │
    ├────────────────────────────────────────────────────────────────────┤
    │  html               text/html                                      │
    │  css                text/css                                       │
    │  js                 application/javascript                         │
    │  json               application/json                               │
    │  png                image/png                                      │
    │  jpg, jpeg          image/jpeg                                     │
    │  txt                text/plain                                     │
    │  (anything else)    application/octet-stream                       │
    └────────────────────────────────────────────────────────────────────┘

The extension is whatever follows the LAST "." in the path, and matching
is exact and case-sensitive: "logo.PNG" is application/octet-stream.

=============================================================================
"""

MIME_TYPES = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "txt": "text/plain",
}

# application/octet-stream = "I don't know what this is, treat as binary"
DEFAULT_MIME_TYPE = "application/octet-stream"


def get_extension(path: str) -> str:
    """
    Return the substring after the last ".", or the whole path if there
    is none.

        >>> get_extension("static/app.min.js")
        'js'
        >>> get_extension("README")
        'README'
    """
    return path.rsplit(".", 1)[-1]


def get_mime_type(path: str) -> str:
    """
    Get the MIME type for a file path.

    Examples:
        >>> get_mime_type("static/style.css")
        'text/css'

        >>> get_mime_type("static/photo.jpeg")
        'image/jpeg'

        >>> get_mime_type("static/archive.tar.gz")
        'application/octet-stream'
    """
    return MIME_TYPES.get(get_extension(path), DEFAULT_MIME_TYPE)
