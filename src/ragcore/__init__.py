"""
ragcore: retrieval core for RAG pipelines

Turns raw documents into searchable chunks, stores and searches dense
vectors, expands or decomposes user queries, and reranks candidates before
they are handed to a generative step.

Key Components:
    - retrieval: Chunkers (recursive, token, code, markdown) and the in-memory vector store
    - query: Query decomposition, multi-query paraphrasing and HyDE
    - reranking: Deterministic score reranker and LLM-judged reranker
    - llm: Generative-completion provider clients

Embeddings are computed elsewhere; this package only stores, compares and
consumes them.

Example:
    >>> from ragcore.retrieval import RecursiveChunker, InMemoryVectorStore
    >>> chunks = RecursiveChunker(chunk_size=500, overlap=50).chunk(text)
"""

__version__ = "0.1.0"

from ragcore.config import settings

__all__ = [
    "__version__",
    "settings",
]
