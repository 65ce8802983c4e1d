"""
Clean tool parameter schemas before they are declared to Gemini on Vertex AI.

The Gemini schema dialect rejects JSON-schema keywords it does not know and
``required`` entries that name undefined properties.
"""

from typing import Any, Dict, FrozenSet, List

UNSUPPORTED_KEYS: FrozenSet[str] = frozenset({"additionalProperties", "$schema"})


def sanitize(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a cleaned deep copy of a tool parameter schema.

    At every nesting level, unsupported keywords are dropped and ``required`` is
    reduced to the names defined in ``properties`` (in their original order); an
    empty ``required`` is removed entirely.

    Args:
        schema: The ``{"type": "object", "properties": ..., "required": ...}`` schema.

    Returns:
        The sanitized schema. The input is left untouched.
    """
    return _clean_object(schema, frozenset())


def _clean(node: Any, ancestors: FrozenSet[int]) -> Any:
    if isinstance(node, dict):
        return _clean_object(node, ancestors)
    if isinstance(node, list):
        if id(node) in ancestors:
            return node
        inner = ancestors | {id(node)}
        return [_clean(item, inner) for item in node]
    return node


def _clean_object(node: Dict[str, Any], ancestors: FrozenSet[int]) -> Dict[str, Any]:
    if id(node) in ancestors:
        # self-referencing schema, leave the cycle as is
        return node
    inner = ancestors | {id(node)}

    cleaned = {key: _clean(value, inner) for key, value in node.items() if key not in UNSUPPORTED_KEYS}

    if "required" in cleaned:
        required = _defined_required(cleaned)
        if required:
            cleaned["required"] = required
        else:
            del cleaned["required"]
    return cleaned


def _defined_required(node: Dict[str, Any]) -> List[str]:
    properties = node.get("properties") or {}
    return [name for name in node["required"] or [] if name in properties]
