"""Reranker protocol shared by all reranking strategies."""

from typing import Protocol, Sequence, runtime_checkable

from ragcore.schemas import ScoredDocument


@runtime_checkable
class Reranker(Protocol):
    """Reorder candidate documents for a query and keep the best top_k."""

    def rerank(
        self,
        query: str,
        documents: Sequence[ScoredDocument],
        top_k: int | None = None,
    ) -> list[ScoredDocument]:
        ...
