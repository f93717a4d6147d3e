"""
HyDE (Hypothetical Document Embeddings) generator.

Asks the LLM to write a short passage that would answer the query. The
passage is embedded in place of (or alongside) the query, since it tends
to sit closer to real answers in embedding space than the question does.
"""

import logging

from ragcore.config import settings
from ragcore.llm import LLMProtocol, create_llm

logger = logging.getLogger(__name__)


HYDE_PROMPT = """Write a short, factual passage that directly answers the question below,
as it might appear in a reference document.

Question: {query}

Provide only the passage, nothing else."""


class HyDEGenerator:
    """Generate hypothetical answer passages for retrieval."""

    def __init__(
        self,
        llm: LLMProtocol | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.transform_max_tokens
        self.llm = llm or create_llm(model=self.model, max_tokens=self.max_tokens)

    def generate(self, query: str) -> str:
        """
        Write a hypothetical passage answering the query.

        Returns:
            The trimmed passage, or the original query on failure or empty output
        """
        try:
            response = self.llm.invoke(HYDE_PROMPT.format(query=query))
        except Exception as e:
            logger.warning(f"HyDE generation failed, using original query: {e!s}")
            return query

        if not isinstance(response, str) or not response.strip():
            logger.warning("HyDE generation returned no text, using original query")
            return query

        return response.strip()

    def augment_query(self, query: str) -> str:
        """Return the query followed by a blank line and the hypothetical passage."""
        passage = self.generate(query)
        if passage == query:
            return query
        return f"{query}\n\n{passage}"
