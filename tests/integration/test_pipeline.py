"""
Integration tests for the retrieval core.

These tests verify that chunkers, the vector store, query transformers and
rerankers work correctly together. Embeddings come from a bag-of-words stub.
"""

from unittest.mock import MagicMock

import pytest

from ragcore.query import MultiQueryGenerator
from ragcore.reranking import LLMReranker, ScoreReranker
from ragcore.retrieval import InMemoryVectorStore, MarkdownChunker
from ragcore.schemas import StoredDocument

VOCABULARY = ["harq", "process", "carrier", "aggregation", "timer", "rrc", "paging"]


def embed(text: str) -> list[float]:
    lowered = text.lower()
    return [float(lowered.count(word)) for word in VOCABULARY]


MANUAL = """# Radio manual

## HARQ
A HARQ process handles one transport block. Each HARQ process has its own buffer.

## Carrier aggregation
Carrier aggregation combines several component carriers for higher throughput.

## RRC timers
The RRC timer T311 starts after radio link failure. Paging uses a separate cycle.
"""


@pytest.fixture
def populated_store():
    chunks = MarkdownChunker(chunk_size=120, overlap=0).chunk(MANUAL)
    store = InMemoryVectorStore()
    store.add(
        StoredDocument(
            id=f"manual:{i}",
            text=chunk,
            embedding=embed(chunk),
            metadata={"source": "radio manual", "chunk_index": i},
        )
        for i, chunk in enumerate(chunks)
    )
    return store


@pytest.mark.integration
class TestRetrievalFlow:
    """Tests for chunk -> store -> search -> rerank."""

    def test_ingest_creates_one_entry_per_chunk(self, populated_store):
        assert populated_store.count() == 3

    def test_search_then_score_rerank(self, populated_store):
        query = "harq process"
        candidates = populated_store.search(embed(query), top_k=3)

        reranked = ScoreReranker().rerank(query, candidates, top_k=2)

        assert len(reranked) == 2
        assert "HARQ process" in reranked[0].text
        assert {d.id for d in reranked} <= {d.id for d in candidates}

    def test_multi_query_search_then_llm_rerank(self, populated_store):
        llm = MagicMock()
        llm.invoke.side_effect = [
            "1. How does carrier aggregation work?\n2. What is carrier aggregation?",
            "2",
            "9",
            "1",
        ]

        queries = MultiQueryGenerator(llm=llm, num_queries=2).generate("carrier aggregation")
        assert queries[0] == "carrier aggregation"

        seen: dict[str, object] = {}
        for variant in queries:
            for document in populated_store.search(embed(variant), top_k=3):
                seen.setdefault(document.id, document)
        candidates = list(seen.values())[:3]

        reranked = LLMReranker(llm=llm).rerank("carrier aggregation", candidates, top_k=1)

        assert len(reranked) == 1
        assert reranked[0].score == 9.0
        assert reranked[0].id == candidates[1].id
