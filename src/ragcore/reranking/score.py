"""
Deterministic multi-factor reranker.

Scores each candidate with a weighted sum of four signals and makes no
network calls:
    - keyword density: query keyword occurrences per word of document text
    - exact match: the whole query appears verbatim in the text
    - title match: query keywords found in the document's `source` metadata
    - recency: linear decay over a window based on `timestamp` metadata
"""

import logging
import math
import re
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from ragcore.config import settings
from ragcore.schemas import ScoredDocument

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0
MIN_KEYWORD_LENGTH = 3


def _pick(value, default):
    return default if value is None else value


def extract_keywords(query: str) -> list[str]:
    """Lower-cased query words longer than two characters."""
    return [w for w in re.split(r"\W+", query.lower()) if len(w) >= MIN_KEYWORD_LENGTH]


def _to_epoch(value: Any) -> float | None:
    """Convert a timestamp (epoch seconds, datetime or ISO string) to finite epoch seconds."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            seconds = float(value)
        except OverflowError:
            return None
        return seconds if math.isfinite(seconds) else None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    if isinstance(value, str):
        try:
            return _to_epoch(float(value))
        except ValueError:
            pass
        try:
            return _to_epoch(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


class ScoreReranker:
    """
    Rerank documents with keyword, exact match, source and recency signals.

    Example:
        >>> reranker = ScoreReranker()
        >>> top = reranker.rerank("harq processes", candidates, top_k=3)
    """

    def __init__(
        self,
        keyword_weight: float | None = None,
        exact_match_weight: float | None = None,
        title_weight: float | None = None,
        recency_weight: float | None = None,
        recency_window_days: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the reranker.

        Args:
            keyword_weight: Weight of keyword density (default 1.0)
            exact_match_weight: Bonus for a verbatim query match (default 2.0)
            title_weight: Bonus per keyword found in metadata["source"] (default 1.5)
            recency_weight: Weight of the recency signal (default 0.5)
            recency_window_days: Days until recency decays to zero (default 365)
            clock: Returns the current time in epoch seconds
        """
        self.keyword_weight = _pick(keyword_weight, settings.keyword_weight)
        self.exact_match_weight = _pick(exact_match_weight, settings.exact_match_weight)
        self.title_weight = _pick(title_weight, settings.title_weight)
        self.recency_weight = _pick(recency_weight, settings.recency_weight)
        self.recency_window_days = _pick(recency_window_days, settings.recency_window_days)
        if self.recency_window_days <= 0:
            raise ValueError(
                f"recency_window_days must be positive, got {self.recency_window_days}"
            )
        self.clock = clock

    def keyword_density(self, keywords: list[str], text: str) -> float:
        word_count = len(text.split())
        if word_count == 0 or not keywords:
            return 0.0
        text_lower = text.lower()
        occurrences = sum(text_lower.count(keyword) for keyword in keywords)
        return occurrences / word_count

    def recency(self, metadata: dict[str, Any]) -> float:
        """Return 1.0 for a document from now, falling linearly to 0.0 at the window edge."""
        timestamp = _to_epoch(metadata.get("timestamp"))
        if timestamp is None:
            return 0.0
        age_days = (self.clock() - timestamp) / SECONDS_PER_DAY
        return max(0.0, min(1.0, 1.0 - age_days / self.recency_window_days))

    def score(self, query: str, document: ScoredDocument) -> float:
        """Weighted relevance score of one document."""
        keywords = extract_keywords(query)
        text = document.text or ""
        metadata = document.metadata or {}

        total = self.keyword_weight * self.keyword_density(keywords, text)

        query_lower = query.lower().strip()
        if query_lower and query_lower in text.lower():
            total += self.exact_match_weight

        source = str(metadata.get("source") or "").lower()
        if source:
            total += self.title_weight * sum(1 for keyword in keywords if keyword in source)

        total += self.recency_weight * self.recency(metadata)
        return total

    def rerank(
        self,
        query: str,
        documents: Sequence[ScoredDocument],
        top_k: int | None = None,
    ) -> list[ScoredDocument]:
        """
        Reorder documents by weighted score and keep the best top_k.

        Ties keep their input order. Returned documents are copies with
        `score` set to the weighted total.
        """
        if top_k is None:
            top_k = settings.retrieval_top_k
        if top_k <= 0 or not documents:
            return []

        scored = [replace(document, score=self.score(query, document)) for document in documents]
        ranked = sorted(scored, key=lambda document: document.score, reverse=True)

        logger.debug(f"Score reranked {len(documents)} documents, keeping {min(top_k, len(ranked))}")
        return ranked[:top_k]
