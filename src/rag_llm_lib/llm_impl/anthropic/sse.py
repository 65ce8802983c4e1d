"""Read ``data: {json}`` records from a server-sent-event response."""

import json
from typing import Any, AsyncIterator, Dict

from rag_llm_lib.llm_core import get_logger

logger = get_logger(__name__)

DONE_SENTINEL = "[DONE]"


async def iter_sse_data(lines: AsyncIterator[str]) -> AsyncIterator[Dict[str, Any]]:
    """Yield the decoded JSON payload of every ``data:`` line, in order.

    ``event:`` lines, comments and blank separators are skipped. Iteration stops at
    the ``[DONE]`` sentinel or when the line source is exhausted. Undecodable
    records are logged and skipped.

    Args:
        lines: Lines of the response body without trailing newlines, e.g.
            ``httpx.Response.aiter_lines()``.
    """
    async for line in lines:
        if not line.startswith("data:"):
            continue

        data = line[len("data:"):].strip()
        if not data:
            continue
        if data == DONE_SENTINEL:
            return

        try:
            record = json.loads(data)
        except json.JSONDecodeError:
            logger.warning(f"Skipping undecodable stream record: {data[:100]}")
            continue

        if isinstance(record, dict):
            yield record
