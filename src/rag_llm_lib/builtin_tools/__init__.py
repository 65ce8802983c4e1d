"""Tools every agent gets."""

from typing import Optional

from rag_llm_lib.interfaces import EmbeddingService, VectorSearchService
from rag_llm_lib.llm_core import ToolRegistry, get_logger
from .current_time import CURRENT_TIME_TOOL_NAME, create_current_time_tool
from .search_documents import SEARCH_DOCUMENTS_TOOL_NAME, create_search_documents_tool

logger = get_logger(__name__)


def register_builtin_tools(
    registry: ToolRegistry,
    search: Optional[VectorSearchService] = None,
    embeddings: Optional[EmbeddingService] = None,
) -> None:
    """
    Registers the built-in tools globally.

    ``get_current_time`` is always registered. ``search_documents`` needs both
    services and is skipped without them.
    """
    registry.register(create_current_time_tool())

    if search is not None and embeddings is not None:
        registry.register(create_search_documents_tool(search, embeddings))
    else:
        logger.info("Search services not configured; 'search_documents' is not registered.")


__all__ = [
    "register_builtin_tools",
    "create_current_time_tool",
    "create_search_documents_tool",
    "CURRENT_TIME_TOOL_NAME",
    "SEARCH_DOCUMENTS_TOOL_NAME",
]
