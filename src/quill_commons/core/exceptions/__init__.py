"""Core exceptions for quill-commons."""

from .base import QuillCommonsError, CacheError

__all__ = [
    "QuillCommonsError",
    "CacheError",
]
