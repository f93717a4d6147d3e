"""
Query decomposer: splits a compound question into sub-questions.

Each sub-question can be retrieved for independently. Any provider failure
or unusable response degrades to the original query.
"""

import logging
import re

from ragcore.config import settings
from ragcore.llm import LLMProtocol, create_llm
from ragcore.query.parsing import parse_numbered_lines

logger = logging.getLogger(__name__)


DECOMPOSER_PROMPT = """Break down the following complex question into simpler, independent sub-questions.
Each sub-question should be answerable on its own.

Question: {query}

Return the sub-questions as a numbered list, one per line, with no other text."""

COMPOUND_INDICATORS = (
    "and",
    "compare",
    "difference between",
    "both",
    "each",
    "multiple",
    "as well as",
)

_INDICATOR_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(i) for i in COMPOUND_INDICATORS) + r")\b",
    re.IGNORECASE,
)

LONG_QUERY_WORDS = 20


class QueryDecomposer:
    """
    Decompose compound questions with an LLM.

    Example:
        >>> decomposer = QueryDecomposer(llm)
        >>> decomposer.decompose("What is PHP and how does it compare to Python?")
        ['What is PHP?', 'What is Python?', 'How do PHP and Python compare?']
    """

    def __init__(
        self,
        llm: LLMProtocol | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        """
        Initialize the decomposer.

        Args:
            llm: Completion client (default built by create_llm)
            model: Model identifier used when building the default client
            max_tokens: Output token budget (default from settings)
        """
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.transform_max_tokens
        self.llm = llm or create_llm(model=self.model, max_tokens=self.max_tokens)

    def decompose(self, query: str) -> list[str]:
        """
        Split a query into independently answerable sub-questions.

        Args:
            query: The user's question

        Returns:
            Sub-questions, or [query] when decomposition fails or yields nothing
        """
        try:
            response = self.llm.invoke(DECOMPOSER_PROMPT.format(query=query))
        except Exception as e:
            logger.warning(f"Query decomposition failed, using original query: {e!s}")
            return [query]

        if not isinstance(response, str):
            logger.warning("Query decomposition returned no text, using original query")
            return [query]

        sub_queries = parse_numbered_lines(response)
        if not sub_queries:
            return [query]

        logger.debug(f"Decomposed query into {len(sub_queries)} sub-questions")
        return sub_queries

    def should_decompose(self, query: str) -> bool:
        """
        Guess whether a query is compound.

        Advisory only: flags conjunction/comparison words, more than one
        question mark, or more than twenty words.
        """
        if _INDICATOR_PATTERN.search(query):
            return True
        if query.count("?") > 1:
            return True
        return len(query.split()) > LONG_QUERY_WORDS
