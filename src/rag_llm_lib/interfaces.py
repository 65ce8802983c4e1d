"""
Services the library consumes but does not implement.

The host application supplies these, e.g. a vector database for
``search_documents``. Only their shape is defined here.
"""

from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel


class SearchHit(BaseModel):
    """A document chunk returned by a similarity search.

    Attributes:
        content: Text of the chunk.
        filename: Name of the document the chunk belongs to.
        document_id: Id of that document.
        score: Similarity score, higher is more similar.
    """

    content: str
    filename: str
    document_id: str
    score: float


class AuthResult(BaseModel):
    valid: bool
    uid: Optional[str] = None
    email: Optional[str] = None


@runtime_checkable
class VectorSearchService(Protocol):
    async def search_similar_chunks(self, agent_id: str, embedding: List[float], limit: int) -> List[SearchHit]:
        """Returns the ``limit`` chunks of the agent's documents most similar to ``embedding``."""
        ...


@runtime_checkable
class EmbeddingService(Protocol):
    async def generate_embedding(self, text: str) -> List[float]: ...


@runtime_checkable
class AuthVerifier(Protocol):
    async def validate_token(self, authorization_header: Optional[str]) -> AuthResult:
        """Verifies a bearer token from an ``Authorization`` header."""
        ...
