"""
Text chunking for ingestion.

Splits documents into bounded chunks ready for embedding while keeping
natural boundaries intact:
    - RecursiveChunker: separator cascade (paragraphs, lines, sentences, words, characters)
    - TokenChunker: whole sentences packed into an approximate token budget

Chunks are plain strings. Empty or whitespace-only input yields no chunks,
and no chunk is ever empty or whitespace-only.
"""

import math
import re
from typing import Protocol, Sequence, runtime_checkable

from ragcore.config import settings

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", ". ", " ", "")

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


@runtime_checkable
class Chunker(Protocol):
    """Protocol that all chunkers implement."""

    def chunk(self, text: str) -> list[str]:
        """Split text into chunks."""
        ...

    def get_chunk_size(self) -> int:
        """Return the configured chunk budget."""
        ...

    def get_overlap(self) -> int:
        """Return the configured overlap."""
        ...


def _validate(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap < 0:
        raise ValueError(f"overlap must be non-negative, got {overlap}")
    if overlap >= chunk_size:
        raise ValueError(
            f"overlap ({overlap}) must be less than chunk_size ({chunk_size})"
        )


def _default_overlap(configured: int, chunk_size: int) -> int:
    # Configured overlap only applies when it fits the requested budget
    return configured if configured < chunk_size else 0


def _split_fixed(text: str, chunk_size: int) -> list[str]:
    """Slice text into fixed-size character windows."""
    pieces = (text[i : i + chunk_size].strip() for i in range(0, len(text), chunk_size))
    return [piece for piece in pieces if piece]


def split_text(
    text: str,
    chunk_size: int,
    overlap: int,
    separators: Sequence[str],
) -> list[str]:
    """
    Recursively split text on a cascade of separators.

    Fragments produced by the first separator are packed greedily into
    chunks of at most chunk_size characters. A fragment that is too large
    on its own is split again with the remaining, finer separators. A new
    chunk starts with the last `overlap` characters of the previous one.
    An empty separator (or an exhausted cascade) falls back to fixed-size
    character slicing.

    Args:
        text: Text to split
        chunk_size: Maximum chunk length in characters
        overlap: Characters carried over from the previous chunk
        separators: Separators ordered from coarsest to finest

    Returns:
        List of trimmed, non-empty chunks in document order
    """
    if not text or not text.strip():
        return []

    if len(text) <= chunk_size:
        return [text.strip()]

    if not separators or separators[0] == "":
        return _split_fixed(text, chunk_size)

    separator = separators[0]
    remaining = separators[1:]

    chunks: list[str] = []
    buffer = ""

    for fragment in text.split(separator):
        candidate = buffer + separator + fragment if buffer else fragment
        if len(candidate) <= chunk_size:
            buffer = candidate
            continue

        flushed = buffer.strip()
        if flushed:
            chunks.append(flushed)

        if len(fragment) > chunk_size and remaining:
            chunks.extend(split_text(fragment, chunk_size, overlap, remaining))
            buffer = ""
        else:
            tail = flushed[-overlap:] if overlap > 0 and flushed else ""
            buffer = tail + separator + fragment if tail else fragment

    flushed = buffer.strip()
    if flushed:
        chunks.append(flushed)

    return chunks


class RecursiveChunker:
    """
    Boundary-preserving chunker driven by an ordered separator cascade.

    Example:
        >>> chunker = RecursiveChunker(chunk_size=10, overlap=0, separators=[" "])
        >>> chunker.chunk("the quick brown fox jumps")
        ['the quick', 'brown fox', 'jumps']
    """

    def __init__(
        self,
        chunk_size: int | None = None,
        overlap: int | None = None,
        separators: Sequence[str] | None = None,
    ) -> None:
        """
        Initialize the chunker.

        Args:
            chunk_size: Maximum chunk length in characters (default from settings)
            overlap: Characters repeated between chunks (default from settings)
            separators: Separator cascade, coarsest first

        Raises:
            ValueError: If chunk_size <= 0 or overlap is negative or >= chunk_size
        """
        self.chunk_size = chunk_size if chunk_size is not None else settings.chunk_size
        self.overlap = (
            overlap
            if overlap is not None
            else _default_overlap(settings.chunk_overlap, self.chunk_size)
        )
        _validate(self.chunk_size, self.overlap)
        self.separators: tuple[str, ...] = tuple(
            separators if separators is not None else DEFAULT_SEPARATORS
        )

    def chunk(self, text: str) -> list[str]:
        """Split text into chunks of at most chunk_size characters where boundaries allow."""
        return split_text(text, self.chunk_size, self.overlap, self.separators)

    def get_chunk_size(self) -> int:
        return self.chunk_size

    def get_overlap(self) -> int:
        return self.overlap


class TokenChunker:
    """
    Sentence-aware chunker with an approximate token budget.

    Token length is estimated at a fixed number of characters per token, so
    no tokenizer is required. Sentences are never cut; a single sentence
    longer than the budget becomes its own chunk.
    """

    def __init__(
        self,
        chunk_size: int | None = None,
        overlap: int | None = None,
        chars_per_token: int | None = None,
    ) -> None:
        """
        Initialize the chunker.

        Args:
            chunk_size: Token budget per chunk (default from settings)
            overlap: Tokens repeated between chunks (default from settings)
            chars_per_token: Characters counted as one token (default from settings)

        Raises:
            ValueError: If the budget or ratio is invalid
        """
        self.chunk_size = chunk_size if chunk_size is not None else settings.token_chunk_size
        self.overlap = (
            overlap
            if overlap is not None
            else _default_overlap(settings.token_chunk_overlap, self.chunk_size)
        )
        self.chars_per_token = (
            chars_per_token if chars_per_token is not None else settings.chars_per_token
        )
        _validate(self.chunk_size, self.overlap)
        if self.chars_per_token <= 0:
            raise ValueError(f"chars_per_token must be positive, got {self.chars_per_token}")

    def count_tokens(self, text: str) -> int:
        """Approximate the token count of text."""
        return math.ceil(len(text) / self.chars_per_token)

    def chunk(self, text: str) -> list[str]:
        """Pack whole sentences into chunks of roughly chunk_size tokens."""
        if not text or not text.strip():
            return []

        sentences = [s.strip() for s in SENTENCE_BOUNDARY.split(text.strip())]
        sentences = [s for s in sentences if s]

        max_chars = self.chunk_size * self.chars_per_token
        chunks: list[str] = []
        buffer = ""

        for sentence in sentences:
            if not buffer:
                buffer = sentence
                continue
            if len(buffer) + len(sentence) <= max_chars:
                buffer = f"{buffer} {sentence}"
                continue

            flushed = buffer.strip()
            chunks.append(flushed)
            seed = self._overlap_words(flushed)
            buffer = f"{seed} {sentence}" if seed else sentence

        if buffer.strip():
            chunks.append(buffer.strip())

        return chunks

    def _overlap_words(self, chunk: str) -> str:
        """Return the trailing words of chunk that fill the overlap budget, at least one."""
        words = chunk.split()
        if not words:
            return ""
        average_word_length = sum(len(w) for w in words) / len(words)
        overlap_chars = self.overlap * self.chars_per_token
        count = max(1, int(overlap_chars / average_word_length))
        return " ".join(words[-count:])

    def get_chunk_size(self) -> int:
        return self.chunk_size

    def get_overlap(self) -> int:
        return self.overlap
