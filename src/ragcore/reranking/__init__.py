"""
Reranking strategies.

Components:
    - score: Deterministic keyword/exact-match/source/recency scorer
    - llm: Per-document LLM relevance ratings
"""

from ragcore.reranking.base import Reranker
from ragcore.reranking.llm import LLMReranker
from ragcore.reranking.score import ScoreReranker

__all__ = [
    "Reranker",
    "LLMReranker",
    "ScoreReranker",
]
