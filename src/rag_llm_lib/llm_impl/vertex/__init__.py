"""Gemini on Vertex AI implementation."""

from .core import VertexProvider, DEFAULT_VERTEX_MODEL
from .adapter import VertexToolAdapter
from .declarations import to_vertex_declaration, to_vertex_tools

__all__ = ["VertexProvider", "DEFAULT_VERTEX_MODEL", "VertexToolAdapter", "to_vertex_declaration", "to_vertex_tools"]
