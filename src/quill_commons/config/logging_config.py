"""Logging configuration for quill-commons and the services using it.

Installs loguru sinks from settings: a stderr sink always, and a rotating
file sink when ``log_file`` is set.
"""

import sys
from typing import List, Optional

from loguru import logger

from .settings import QuillSettings, get_settings


def configure_logging(settings: Optional[QuillSettings] = None) -> List[int]:
    """Replace loguru's sinks with the configured ones.

    Args:
        settings: Settings to read, defaults to get_settings()

    Returns:
        Ids of the installed sinks
    """
    settings = settings or get_settings()

    logger.remove()
    sink_ids = [
        logger.add(
            sys.stderr,
            level=settings.log_level,
            format=settings.log_format,
            backtrace=False,
            diagnose=False,
        )
    ]

    if settings.log_file:
        sink_ids.append(
            logger.add(
                settings.log_file,
                level=settings.log_level,
                format=settings.log_format,
                rotation=settings.log_rotation,
                retention=settings.log_retention,
                enqueue=True,
                colorize=False,
            )
        )

    logger.debug(f"Logging configured at {settings.log_level}")
    return sink_ids
