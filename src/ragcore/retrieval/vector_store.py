"""
In-memory vector store with exact cosine similarity search.

Documents are upserted by id and searched brute force against a query
embedding, with optional metadata filtering. Dimension mismatches and zero
vectors are scored 0.0 rather than rejected, so embeddings from
heterogeneous sources can share one store.
"""

import copy
import logging
from typing import Any, Iterable, Mapping, Protocol, Sequence

import numpy as np

from ragcore.config import settings
from ragcore.schemas import ScoredDocument, StoredDocument

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors.

    Returns 0.0 when the vectors differ in length, are empty, contain
    non-numeric values, or either has zero norm.
    """
    try:
        va = np.asarray(a, dtype=np.float64)
        vb = np.asarray(b, dtype=np.float64)
    except (TypeError, ValueError):
        return 0.0

    if va.ndim != 1 or va.shape != vb.shape or va.size == 0:
        return 0.0

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0 or not np.isfinite(norm_a * norm_b):
        return 0.0

    similarity = float(np.dot(va, vb) / (norm_a * norm_b))
    # Guard against rounding just outside [-1, 1]
    return max(-1.0, min(1.0, similarity))


def matches_filters(metadata: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    """
    Check metadata against exact-match filters.

    A list, tuple or set filter value matches when the metadata value is one
    of its members. A missing key never matches.
    """
    if not filters:
        return True

    for key, expected in filters.items():
        if key not in metadata:
            return False
        actual = metadata[key]
        if isinstance(expected, (list, tuple, set, frozenset)):
            if not any(actual == member for member in expected):
                return False
        elif actual != expected:
            return False

    return True


class VectorStore(Protocol):
    """Protocol for vector stores."""

    def add(self, documents: Iterable[StoredDocument]) -> None:
        ...

    def search(
        self,
        query_embedding: Sequence[float],
        top_k: int | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> list[ScoredDocument]:
        ...

    def delete(self, ids: Iterable[str]) -> None:
        ...

    def clear(self) -> None:
        ...

    def count(self) -> int:
        ...


class InMemoryVectorStore:
    """
    Exact nearest-neighbour store held in a dict keyed by document id.

    Mutating calls on one instance must be serialized by the caller; the
    store does no locking.

    Example:
        >>> store = InMemoryVectorStore()
        >>> store.add([StoredDocument(id="a", text="hello", embedding=[1.0, 0.0])])
        >>> store.search([1.0, 0.0], top_k=1)[0].score
        1.0
    """

    def __init__(self) -> None:
        self._documents: dict[str, StoredDocument] = {}

    def add(self, documents: Iterable[StoredDocument]) -> None:
        """
        Upsert documents by id.

        A document with an existing id fully replaces the stored entry.
        The store keeps its own copies of embeddings and metadata.
        """
        added = 0
        for document in documents:
            self._documents[document.id] = StoredDocument(
                id=document.id,
                text=document.text,
                embedding=list(document.embedding),
                metadata=copy.deepcopy(dict(document.metadata or {})),
            )
            added += 1
        logger.debug(f"Upserted {added} documents ({len(self._documents)} stored)")

    def get(self, document_id: str) -> StoredDocument | None:
        """Return a copy of a stored document, or None if absent."""
        document = self._documents.get(document_id)
        if document is None:
            return None
        return copy.deepcopy(document)

    def search(
        self,
        query_embedding: Sequence[float],
        top_k: int | None = None,
        filters: Mapping[str, Any] | None = None,
        min_score: float | None = None,
    ) -> list[ScoredDocument]:
        """
        Rank stored documents by cosine similarity to the query.

        Args:
            query_embedding: Query vector
            top_k: Maximum results to return (default from settings)
            filters: Metadata key to required value, or to a list of accepted values
            min_score: Optional similarity floor

        Returns:
            Up to top_k results sorted by descending score; ties keep insertion order
        """
        if top_k is None:
            top_k = settings.retrieval_top_k
        if top_k <= 0 or not self._documents:
            return []

        scored: list[tuple[float, StoredDocument]] = [
            (cosine_similarity(query_embedding, document.embedding), document)
            for document in self._documents.values()
            if matches_filters(document.metadata, filters)
        ]
        if not scored:
            return []

        # sorted() is stable, so equal scores keep insertion order
        ranked = sorted(scored, key=lambda item: item[0], reverse=True)

        results: list[ScoredDocument] = []
        for score, document in ranked:
            if min_score is not None and score < min_score:
                continue
            results.append(
                ScoredDocument(
                    id=document.id,
                    text=document.text,
                    score=score,
                    metadata=copy.deepcopy(document.metadata),
                )
            )
            if len(results) >= top_k:
                break

        return results

    def delete(self, ids: Iterable[str]) -> None:
        """Remove documents by id. Unknown ids are ignored."""
        if isinstance(ids, str):
            ids = [ids]
        for document_id in ids:
            self._documents.pop(document_id, None)

    def clear(self) -> None:
        """Remove every document."""
        self._documents.clear()

    def count(self) -> int:
        """Number of stored documents."""
        return len(self._documents)

    def __len__(self) -> int:
        return len(self._documents)
