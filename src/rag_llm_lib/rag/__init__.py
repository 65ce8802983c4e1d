from .prompts import BASE_SYSTEM_PROMPT, build_rag_prompt, format_context, format_sources

__all__ = ["BASE_SYSTEM_PROMPT", "build_rag_prompt", "format_context", "format_sources"]
