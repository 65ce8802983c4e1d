from typing import Any, Dict, List

from rag_llm_lib.interfaces import EmbeddingService, VectorSearchService
from rag_llm_lib.llm_core import Tool, ToolContext, create_tool, get_logger

logger = get_logger(__name__)

SEARCH_DOCUMENTS_TOOL_NAME = "search_documents"
DEFAULT_SEARCH_LIMIT = 5


def create_search_documents_tool(search: VectorSearchService, embeddings: EmbeddingService) -> Tool:
    """
    Builds the ``search_documents`` tool.

    The search is always scoped to the documents of the calling agent
    (``context.agent_id``).

    Args:
        search: Vector search over document chunks.
        embeddings: Embeds the query text.

    Returns:
        The tool. It returns a list of ``{filename, content, score}`` with scores
        rounded to two decimals.
    """

    async def handler(arguments: Dict[str, Any], context: ToolContext) -> List[Dict[str, Any]]:
        query = arguments["query"]
        limit = int(arguments.get("limit") or DEFAULT_SEARCH_LIMIT)

        embedding = await embeddings.generate_embedding(query)
        hits = await search.search_similar_chunks(context.agent_id, embedding, limit)
        logger.debug(f"search_documents found {len(hits)} chunk(s) for agent '{context.agent_id}'.")

        return [{"filename": hit.filename, "content": hit.content, "score": round(hit.score, 2)} for hit in hits]

    return create_tool(
        name=SEARCH_DOCUMENTS_TOOL_NAME,
        description=(
            "Search the knowledge base for relevant documents. Use this when you need to find "
            "specific information from uploaded documents."
        ),
        parameters={
            "query": {
                "type": "string",
                "description": "The search query to find relevant documents",
                "required": True,
            },
            "limit": {
                "type": "number",
                "description": "Maximum number of results to return (default: 5)",
                "required": False,
                "default": DEFAULT_SEARCH_LIMIT,
            },
        },
        handler=handler,
    )
