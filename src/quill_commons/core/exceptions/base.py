"""Base exceptions for quill-commons.

Every library error carries a machine-readable code and a details mapping
so handlers can log it without parsing the message.
"""

from typing import Any, Dict, Optional


class QuillCommonsError(Exception):
    """Base exception for all quill-commons errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class CacheError(QuillCommonsError):
    """Base class for cache platform errors."""
