"""
Data types shared by the store, the rerankers and the query transformers.

StoredDocument and ScoredDocument are plain dataclasses that flow through
search and rerank. RelevanceJudgment is a Pydantic model because it is
built from LLM output and must be range-checked.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, Field


@dataclass
class StoredDocument:
    """A document held by a vector store."""

    id: str
    """Caller-assigned identifier, unique within a store."""

    text: str
    """The text the embedding was computed from."""

    embedding: list[float]
    """Dense vector produced by an external embedder."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Arbitrary metadata used for filtering and reranking."""


@dataclass
class ScoredDocument:
    """A search or rerank result. Never persisted."""

    text: str
    """The document text."""

    score: float = 0.0
    """Cosine similarity after search, relevance score after rerank."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Metadata carried over from the stored document."""

    id: Optional[str] = None
    """Identifier of the stored document, if any."""

    fallback: bool = False
    """True when the score is a neutral default rather than a real judgment."""


class RelevanceJudgment(BaseModel):
    """Outcome of one LLM relevance call."""

    score: float = Field(
        ge=0.0,
        le=10.0,
        description="Relevance on a 0-10 scale",
    )
    fallback: bool = Field(
        default=False,
        description="Whether the score is the neutral default after a failed call",
    )
