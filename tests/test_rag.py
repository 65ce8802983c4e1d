from rag_llm_lib import SearchHit
from rag_llm_lib.rag import BASE_SYSTEM_PROMPT, build_rag_prompt, format_context, format_sources

HITS = [
    SearchHit(content="Refunds take 5 days.", filename="faq.md", document_id="doc-1", score=0.91234),
    SearchHit(content="x" * 250, filename="long.txt", document_id="doc-2", score=0.4),
]


def test_format_context():
    context = format_context(HITS[:1] + [SearchHit(content="Free.", filename="b.md", document_id="d", score=0.1)])

    assert context == "[Source 1: faq.md]\nRefunds take 5 days.\n\n---\n\n[Source 2: b.md]\nFree."


def test_format_context_empty():
    assert format_context([]) == ""


def test_build_rag_prompt():
    prompt = build_rag_prompt(BASE_SYSTEM_PROMPT, "[Source 1: faq.md]\nRefunds take 5 days.")

    assert prompt.startswith(BASE_SYSTEM_PROMPT + "\n\nCONTEXT FROM DOCUMENTS:\n[Source 1: faq.md]")
    assert prompt.endswith("If the context doesn't contain enough information, say so clearly.")


def test_format_sources():
    sources = format_sources(HITS)

    assert sources[0] == {
        "document_id": "doc-1",
        "filename": "faq.md",
        "content": "Refunds take 5 days.",
        "score": 0.91,
    }
    assert sources[1]["content"] == "x" * 200 + "..."
    assert sources[1]["score"] == 0.4


def test_format_sources_exactly_at_limit():
    hit = SearchHit(content="y" * 200, filename="f", document_id="d", score=1.0)

    assert format_sources([hit])[0]["content"] == "y" * 200
