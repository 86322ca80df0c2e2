"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Serves text files from the "static" directory under a document root
(the process working directory unless configured otherwise).

=============================================================================
URL → FILE MAPPING
=============================================================================

    GET /static/css/style.css
         │
         └── drop the leading "/"  →  static/css/style.css
                                       │
                                       └── relative to the document root

=============================================================================
PATH TRAVERSAL PROTECTION
=============================================================================

Without a containment check, ".." segments walk out of the static
directory:

    GET /static/../secret.txt   →   <root>/secret.txt      (!)
    GET /static/../../etc/passwd →  /etc/passwd            (!!)

We resolve the full path (following ".." and symlinks) and require the
result to still be inside <root>/static. Anything else gets 403 Forbidden
and the file is never opened.

=============================================================================
FAILURE MODES
=============================================================================

    ┌──────────────────────────────┬──────────────────────────────────────┐
    │  Condition                   │  Response                            │
    ├──────────────────────────────┼──────────────────────────────────────┤
    │  Escapes <root>/static       │  403 "403 Forbidden"                 │
    │  Missing file                │  404 "404 File Not Found"            │
    │  Permission denied           │  404 "404 File Not Found"            │
    │  Directory                   │  404 "404 File Not Found"            │
    │  Not valid UTF-8             │  404 "404 File Not Found"            │
    └──────────────────────────────┴──────────────────────────────────────┘

Only the traversal case is distinguished; every read failure collapses
into the same 404.

=============================================================================
"""

from pathlib import Path
from typing import Optional, Union

from ..http.mime_types import get_mime_type
from ..http.response import HTTPResponse, forbidden, not_found, ok
from ..observer import ServerObserver


STATIC_PREFIX = "/static/"
FILE_NOT_FOUND = "404 File Not Found"


class StaticFileHandler:
    """
    Handler for GET requests under /static/.

    Usage:
        static = StaticFileHandler(root_dir="/srv/site")
        response = static.handle("/static/index.html")
    """

    def __init__(
        self,
        root_dir: Union[str, Path] = ".",
        observer: Optional[ServerObserver] = None,
    ):
        """
        Args:
            root_dir: Document root. Request paths are resolved relative
                      to it, and only files under <root_dir>/static are
                      ever served.
            observer: Receives path traversal events.
        """
        self.root_dir = Path(root_dir).resolve()
        self.static_dir = (self.root_dir / STATIC_PREFIX.strip("/")).resolve()
        self.observer = observer or ServerObserver()

    def resolve(self, path: str) -> Optional[Path]:
        """
        Map a request path to a file inside the static directory.

        Returns:
            The resolved filesystem path, or None if it escapes the
            static directory.
        """
        relative = path[1:]
        full_path = (self.root_dir / relative).resolve()
        try:
            full_path.relative_to(self.static_dir)
        except ValueError:
            return None
        return full_path

    def handle(self, path: str) -> HTTPResponse:
        """
        Serve the file named by a /static/... request path.

        Args:
            path: Request path, starting with "/static/".

        Returns:
            200 with the file contents, 403 on traversal, 404 otherwise.
        """
        try:
            full_path = self.resolve(path)
        except (OSError, ValueError, RuntimeError):
            # Null bytes, symlink loops and the like: nothing to serve.
            return not_found(FILE_NOT_FOUND)

        if full_path is None:
            self.observer.path_traversal_blocked(path)
            return forbidden()

        # Read bytes and validate as UTF-8 ourselves; text mode would
        # translate line endings and change the body.
        try:
            content = full_path.read_bytes()
            content.decode("utf-8")
        except (OSError, ValueError):  # UnicodeDecodeError is a ValueError
            return not_found(FILE_NOT_FOUND)

        return ok(content, get_mime_type(path))
