"""Unit tests for HyDE generator."""

import pytest

from ragcore.query.hyde import HyDEGenerator


@pytest.mark.unit
class TestHyDEGenerator:
    """Tests for HyDEGenerator."""

    def test_generate_hypothetical_document(self, mock_llm):
        mock_llm.invoke.return_value = "The capital of France is Paris, a major European city..."

        result = HyDEGenerator(llm=mock_llm).generate("What is the capital of France?")

        assert "Paris" in result

    def test_generate_trims_whitespace(self, mock_llm):
        mock_llm.invoke.return_value = "  \n  Answer with whitespace  \n  "

        assert HyDEGenerator(llm=mock_llm).generate("Test question") == "Answer with whitespace"

    def test_falls_back_on_error(self, failing_llm):
        query = "What is machine learning?"

        assert HyDEGenerator(llm=failing_llm).generate(query) == query

    @pytest.mark.parametrize("response", [None, "", "   "])
    def test_falls_back_on_empty_response(self, mock_llm, response):
        mock_llm.invoke.return_value = response

        assert HyDEGenerator(llm=mock_llm).generate("Test query") == "Test query"

    def test_augment_query(self, mock_llm):
        mock_llm.invoke.return_value = "PHP is a server-side scripting language used for web development."

        result = HyDEGenerator(llm=mock_llm).augment_query("What is PHP?")

        assert result == (
            "What is PHP?\n\nPHP is a server-side scripting language used for web development."
        )

    def test_augment_query_on_failure(self, failing_llm):
        assert HyDEGenerator(llm=failing_llm).augment_query("What is PHP?") == "What is PHP?"
