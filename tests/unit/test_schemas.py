"""Unit tests for shared data types."""

import pytest

from ragcore.schemas import RelevanceJudgment, ScoredDocument, StoredDocument


@pytest.mark.unit
class TestDocuments:
    """Tests for StoredDocument and ScoredDocument dataclasses."""

    def test_stored_document_defaults(self):
        document = StoredDocument(id="a", text="hello", embedding=[0.1, 0.2])

        assert document.metadata == {}

    def test_scored_document_defaults(self):
        document = ScoredDocument(text="hello")

        assert document.id is None
        assert document.score == 0.0
        assert document.metadata == {}
        assert document.fallback is False

    def test_metadata_not_shared(self):
        first = ScoredDocument(text="a")
        second = ScoredDocument(text="b")
        first.metadata["k"] = "v"

        assert second.metadata == {}


@pytest.mark.unit
class TestRelevanceJudgment:
    """Tests for RelevanceJudgment Pydantic model."""

    def test_valid_score(self):
        judgment = RelevanceJudgment(score=7.5)

        assert judgment.score == 7.5
        assert judgment.fallback is False

    @pytest.mark.parametrize("score", [0.0, 10.0])
    def test_boundaries(self, score):
        assert RelevanceJudgment(score=score).score == score

    @pytest.mark.parametrize("score", [-0.1, 10.5])
    def test_out_of_range_rejected(self, score):
        with pytest.raises(ValueError):
            RelevanceJudgment(score=score)
