"""
LLM reranker: asks the model to rate each candidate from 0 to 10.

One completion call per document. Ratings are clamped into [0, 10]. A
failed call, an unparseable rating or an empty response gives the document
the neutral default score, flagged with `fallback=True` so callers can tell
it apart from a real mid-range judgment.
"""

import logging
import re
from dataclasses import replace
from typing import Sequence

from ragcore.config import settings
from ragcore.llm import LLMProtocol, create_llm
from ragcore.schemas import RelevanceJudgment, ScoredDocument

logger = logging.getLogger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 10.0
MAX_DOCUMENT_CHARS = 2000

RERANK_PROMPT = """Rate how relevant the following document is to the query on a scale from 0 to 10,
where 0 means completely irrelevant and 10 means it directly answers the query.

Query: {query}

Document:
{document}

Respond with only the number."""

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def parse_score(response: str) -> float | None:
    """Extract the first number from a rating response, or None if there is none."""
    match = _NUMBER.search(response)
    if match is None:
        return None
    return float(match.group(0))


class LLMReranker:
    """Rerank documents by per-document LLM relevance ratings."""

    def __init__(
        self,
        llm: LLMProtocol | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        default_score: float | None = None,
    ) -> None:
        """
        Initialize the reranker.

        Args:
            llm: Completion client (default built by create_llm)
            model: Model identifier used when building the default client
            max_tokens: Output token budget per rating (default from settings)
            default_score: Neutral score used on failure (default 5.0)

        Raises:
            ValueError: If default_score is outside [0, 10]
        """
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.rerank_max_tokens
        self.default_score = (
            default_score if default_score is not None else settings.rerank_default_score
        )
        if not MIN_SCORE <= self.default_score <= MAX_SCORE:
            raise ValueError(
                f"default_score must be between {MIN_SCORE} and {MAX_SCORE}, got {self.default_score}"
            )
        self.llm = llm or create_llm(model=self.model, max_tokens=self.max_tokens)

    def judge(self, query: str, text: str) -> RelevanceJudgment:
        """
        Rate one document's relevance to the query.

        Never raises; failures return the default score with fallback=True.
        """
        prompt = RERANK_PROMPT.format(query=query, document=text[:MAX_DOCUMENT_CHARS])

        try:
            response = self.llm.invoke(prompt)
        except Exception as e:
            logger.warning(f"Relevance call failed, using default score: {e!s}")
            return self._fallback()

        if not isinstance(response, str) or not response.strip():
            logger.warning("Relevance call returned no text, using default score")
            return self._fallback()

        value = parse_score(response)
        if value is None:
            logger.warning(f"Unparseable relevance score {response.strip()[:50]!r}, using default")
            return self._fallback()

        return RelevanceJudgment(score=max(MIN_SCORE, min(MAX_SCORE, value)))

    def _fallback(self) -> RelevanceJudgment:
        return RelevanceJudgment(score=self.default_score, fallback=True)

    def rerank(
        self,
        query: str,
        documents: Sequence[ScoredDocument],
        top_k: int | None = None,
    ) -> list[ScoredDocument]:
        """
        Reorder documents by LLM rating and keep the best top_k.

        Issues one completion call per document, so latency grows linearly
        with the number of candidates. Returned documents are copies with
        `score` set to the rating.
        """
        if top_k is None:
            top_k = settings.retrieval_top_k
        if top_k <= 0 or not documents:
            return []

        judged = []
        for document in documents:
            judgment = self.judge(query, document.text or "")
            judged.append(replace(document, score=judgment.score, fallback=judgment.fallback))

        ranked = sorted(judged, key=lambda document: document.score, reverse=True)

        fallbacks = sum(1 for document in judged if document.fallback)
        if fallbacks:
            logger.info(f"LLM rerank used the default score for {fallbacks}/{len(judged)} documents")

        return ranked[:top_k]
