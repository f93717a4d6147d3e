"""
Multi-query generator: paraphrases a query to broaden recall.

The original query is always returned first, followed by up to
`num_queries` distinct paraphrases.
"""

import logging

from ragcore.config import settings
from ragcore.llm import LLMProtocol, create_llm
from ragcore.query.parsing import parse_numbered_lines

logger = logging.getLogger(__name__)


MULTI_QUERY_PROMPT = """Generate {num_queries} different ways to ask the following question.
Each variation should keep the same meaning but use different wording or perspective.

Original question: {query}

Return the variations as a numbered list, one per line, with no other text."""


class MultiQueryGenerator:
    """Generate paraphrased variants of a query with an LLM."""

    def __init__(
        self,
        llm: LLMProtocol | None = None,
        num_queries: int | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            llm: Completion client (default built by create_llm)
            num_queries: Paraphrases to request (default from settings)
            model: Model identifier used when building the default client
            max_tokens: Output token budget (default from settings)
        """
        self.num_queries = num_queries if num_queries is not None else settings.num_queries
        if self.num_queries < 1:
            raise ValueError(f"num_queries must be at least 1, got {self.num_queries}")
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.transform_max_tokens
        self.llm = llm or create_llm(model=self.model, max_tokens=self.max_tokens)

    def generate(self, query: str) -> list[str]:
        """
        Produce the query plus its paraphrases.

        Args:
            query: The user's question

        Returns:
            [query, *variants] with at most num_queries variants; [query] on failure
        """
        prompt = MULTI_QUERY_PROMPT.format(num_queries=self.num_queries, query=query)

        try:
            response = self.llm.invoke(prompt)
        except Exception as e:
            logger.warning(f"Multi-query generation failed, using original query: {e!s}")
            return [query]

        if not isinstance(response, str):
            logger.warning("Multi-query generation returned no text, using original query")
            return [query]

        variants = [line for line in parse_numbered_lines(response) if line != query]
        return [query, *variants[: self.num_queries]]
