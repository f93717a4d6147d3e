"""
Query transformation strategies.

Components:
    - decomposer: Split compound questions into sub-questions
    - multi_query: Paraphrase a query to broaden recall
    - hyde: Hypothetical answer passages for embedding
"""

from ragcore.query.decomposer import QueryDecomposer
from ragcore.query.hyde import HyDEGenerator
from ragcore.query.multi_query import MultiQueryGenerator

__all__ = [
    "QueryDecomposer",
    "MultiQueryGenerator",
    "HyDEGenerator",
]
