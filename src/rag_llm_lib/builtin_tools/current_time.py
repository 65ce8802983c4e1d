from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rag_llm_lib.llm_core import Tool, ToolContext, create_tool, get_logger

logger = get_logger(__name__)

CURRENT_TIME_TOOL_NAME = "get_current_time"
DEFAULT_TIMEZONE = "UTC"

_FORMAT = "%A, %B %d, %Y, %I:%M:%S %p %Z"


def _utc_now() -> datetime:
    return datetime.now(dt_timezone.utc)


def create_current_time_tool(now: Callable[[], datetime] = _utc_now) -> Tool:
    """
    Builds the ``get_current_time`` tool.

    Args:
        now: Returns the current time as an aware datetime.

    Returns:
        The tool. An unknown timezone falls back to UTC instead of failing the call.
    """

    def handler(arguments: Dict[str, Any], context: ToolContext) -> Dict[str, str]:
        requested = arguments.get("timezone") or DEFAULT_TIMEZONE
        current = now().astimezone(dt_timezone.utc)

        try:
            tz_name = str(requested)
            local = current.astimezone(ZoneInfo(tz_name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{requested}', falling back to UTC.")
            tz_name = DEFAULT_TIMEZONE
            local = current

        return {
            "iso": current.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "formatted": local.strftime(_FORMAT),
            "timezone": tz_name,
        }

    return create_tool(
        name=CURRENT_TIME_TOOL_NAME,
        description="Get the current date and time. Use this when the user asks about the current time or date.",
        parameters={
            "timezone": {
                "type": "string",
                "description": 'Timezone (e.g., "America/New_York", "UTC"). Default is UTC.',
                "required": False,
                "default": DEFAULT_TIMEZONE,
            },
        },
        handler=handler,
    )
