"""
=============================================================================
REQUEST HANDLERS
=============================================================================

    StaticFileHandler  GET /static/*   files from <root>/static
    SubmitHandler      POST /submit    echoes JSON or form bodies

=============================================================================
"""

from .static import StaticFileHandler, STATIC_PREFIX, FILE_NOT_FOUND
from .submit import SubmitHandler, SUBMIT_PATH


__all__ = [
    "StaticFileHandler",
    "STATIC_PREFIX",
    "FILE_NOT_FOUND",
    "SubmitHandler",
    "SUBMIT_PATH",
]
