"""
Logging for rag_llm_lib.

Every module logs through a child of the ``rag_llm_lib`` logger. The library
only attaches a ``NullHandler``; applications opt in to output with
:func:`setup_logging`.
"""

import logging
import os
import sys
from typing import Optional, TextIO, Union

_LOGGER_NAME = "rag_llm_lib"
LOG_LEVEL_ENV = "RAG_LLM_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the library logger, or one of its children.

    Args:
        name: Usually ``__name__``. Names already under ``rag_llm_lib`` are used as is,
            anything else is nested below it.
    """
    if not name or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    if name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(
    level: Union[int, str, None] = None,
    stream: Optional[TextIO] = None,
    format_str: str = DEFAULT_FORMAT,
) -> logging.Handler:
    """Send the library's log records to a stream.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Level name or number. Defaults to ``$RAG_LLM_LOG_LEVEL``, then ``INFO``.
        stream: Target stream, ``sys.stdout`` by default.
        format_str: Record format.

    Returns:
        The installed handler.
    """
    logger = logging.getLogger(_LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, "_rag_llm_lib_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(format_str))
    handler._rag_llm_lib_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    resolved = level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO")
    logger.setLevel(resolved.upper() if isinstance(resolved, str) else resolved)
    return handler


logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
