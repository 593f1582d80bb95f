"""Configuration for quill-commons."""

from .settings import QuillSettings, get_settings
from .logging_config import configure_logging

__all__ = [
    "QuillSettings",
    "get_settings",
    "configure_logging",
]
