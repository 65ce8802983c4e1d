"""Prompt and source formatting for answers grounded in retrieved documents."""

from typing import Any, Dict, List, Sequence

from rag_llm_lib.interfaces import SearchHit

BASE_SYSTEM_PROMPT = (
    "You are a helpful AI assistant. Answer questions clearly and concisely.\n"
    "If you don't know something, say so. Be friendly and professional."
)

SOURCE_PREVIEW_LENGTH = 200


def format_context(hits: Sequence[SearchHit]) -> str:
    """
    Formats search hits into a context block for the system prompt.

    Each hit becomes ``[Source N: filename]`` followed by its content; hits are
    separated by ``---`` lines.
    """
    return "\n\n---\n\n".join(
        f"[Source {i}: {hit.filename}]\n{hit.content}" for i, hit in enumerate(hits, start=1)
    )


def build_rag_prompt(base_prompt: str, context: str) -> str:
    return (
        f"{base_prompt}\n\n"
        f"CONTEXT FROM DOCUMENTS:\n"
        f"{context}\n\n"
        f"---\n"
        f"Answer the user's question based on the above context. If the context doesn't contain "
        f"enough information, say so clearly."
    )


def format_sources(hits: Sequence[SearchHit]) -> List[Dict[str, Any]]:
    """
    Formats search hits as sources to show next to an answer.

    Args:
        hits: The hits the answer was grounded on.

    Returns:
        ``{document_id, filename, content, score}`` per hit. Content longer than 200
        characters is cut and ends with ``...``; scores are rounded to two decimals.
    """
    sources = []
    for hit in hits:
        content = hit.content[:SOURCE_PREVIEW_LENGTH]
        if len(hit.content) > SOURCE_PREVIEW_LENGTH:
            content += "..."
        sources.append(
            {
                "document_id": hit.document_id,
                "filename": hit.filename,
                "content": content,
                "score": round(hit.score, 2),
            }
        )
    return sources
