"""
Document retrieval components for the RAG pipeline.

Components:
    - chunker: Recursive and sentence-aware token chunkers
    - presets: Code- and markdown-aware separator cascades
    - vector_store: In-memory exact cosine similarity search
"""

from ragcore.retrieval.chunker import Chunker, RecursiveChunker, TokenChunker, split_text
from ragcore.retrieval.presets import CodeChunker, MarkdownChunker
from ragcore.retrieval.vector_store import InMemoryVectorStore, VectorStore, cosine_similarity

__all__ = [
    "Chunker",
    "RecursiveChunker",
    "TokenChunker",
    "split_text",
    "CodeChunker",
    "MarkdownChunker",
    "InMemoryVectorStore",
    "VectorStore",
    "cosine_similarity",
]
