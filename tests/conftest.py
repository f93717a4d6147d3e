"""
Pytest configuration and shared fixtures.

Provides common fixtures for:
    - Configuration with test values
    - Mock completion provider clients
    - Sample stored and scored documents
"""

from unittest.mock import MagicMock, patch

import pytest


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def mock_settings():
    """Provide test settings without requiring .env file."""
    with patch.dict(
        "os.environ",
        {
            "LLM_MODEL": "test-model",
            "CHUNK_SIZE": "500",
            "CHUNK_OVERLAP": "50",
            "NUM_QUERIES": "4",
            "LOG_LEVEL": "DEBUG",
        },
    ):
        from ragcore.config import Settings
        yield Settings()


# =============================================================================
# Mock LLM Fixtures
# =============================================================================

@pytest.fixture
def mock_llm():
    """Provide a completion client stub with no configured response."""
    return MagicMock()


@pytest.fixture
def make_llm():
    """Build a completion client stub that returns the given responses in order."""
    def _make(*responses):
        llm = MagicMock()
        llm.invoke.side_effect = list(responses)
        return llm
    return _make


@pytest.fixture
def failing_llm():
    """Provide a completion client stub that always raises."""
    llm = MagicMock()
    llm.invoke.side_effect = ConnectionError("API Error")
    return llm


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def sample_stored_documents():
    """Provide stored documents with 2-dimensional embeddings."""
    from ragcore.schemas import StoredDocument

    return [
        StoredDocument(id="A", text="Paris is the capital of France.", embedding=[1.0, 0.0],
                       metadata={"lang": "en", "category": "geo"}),
        StoredDocument(id="B", text="Berlin is the capital of Germany.", embedding=[0.0, 1.0],
                       metadata={"lang": "en", "category": "geo"}),
        StoredDocument(id="C", text="La tour Eiffel est a Paris.", embedding=[0.7, 0.7],
                       metadata={"lang": "fr", "category": "travel"}),
    ]


@pytest.fixture
def sample_candidates():
    """Provide candidate documents for reranking."""
    from ragcore.schemas import ScoredDocument

    return [
        ScoredDocument(id="1", text="PHP is a programming language", score=0.9),
        ScoredDocument(id="2", text="Python is also a programming language", score=0.8),
        ScoredDocument(id="3", text="PHP stands for Hypertext Preprocessor", score=0.7),
    ]


@pytest.fixture
def sample_text():
    """Provide multi-paragraph prose for chunking."""
    return (
        "Retrieval augmented generation combines search with text generation. "
        "Documents are split into chunks before they are embedded.\n\n"
        "Each chunk is stored with its embedding. At query time the query is "
        "embedded and compared against every stored chunk.\n\n"
        "The best matches are reranked and passed to the generator. "
        "Overlap between chunks keeps context that spans a boundary."
    )
