"""
Domain-specific chunker presets.

Each preset only picks a separator cascade and delegates to
RecursiveChunker. Code separators come from LangChain's per-language
tables; markdown separators follow heading levels and fenced blocks.
"""

from langchain_text_splitters import Language, RecursiveCharacterTextSplitter

from ragcore.retrieval.chunker import RecursiveChunker

MARKDOWN_SEPARATORS: tuple[str, ...] = (
    "\n# ",  # H1
    "\n## ",  # H2
    "\n### ",  # H3
    "\n#### ",  # H4
    "\n##### ",  # H5
    "\n###### ",  # H6
    "```\n",  # Fenced code block
    "\n\n",  # Paragraph breaks
    "\n",  # Single newline
    " ",  # Space
    "",  # Character-level fallback
)

# Languages whose LangChain separators are regular expressions rather than
# literal strings. RecursiveChunker splits on literals only.
PATTERN_SEPARATOR_LANGUAGES = frozenset({"markdown", "latex", "rst", "visualbasic6"})


def code_separators(language: str) -> list[str]:
    """
    Look up the separator cascade for a programming language.

    Args:
        language: LangChain language name (e.g. "python", "js", "php", "go")

    Returns:
        Separators ordered from class/function boundaries down to characters

    Raises:
        ValueError: If the language is unknown or its separators are regex patterns
    """
    try:
        lang = Language(language.lower())
    except ValueError as e:
        supported = ", ".join(
            sorted(item.value for item in Language if item.value not in PATTERN_SEPARATOR_LANGUAGES)
        )
        raise ValueError(f"Unsupported language '{language}'. Supported: {supported}") from e
    if lang.value in PATTERN_SEPARATOR_LANGUAGES:
        hint = " Use MarkdownChunker instead." if lang is Language.MARKDOWN else ""
        raise ValueError(
            f"Unsupported language '{language}': its separators are regex patterns.{hint}"
        )
    return RecursiveCharacterTextSplitter.get_separators_for_language(lang)


class CodeChunker:
    """Chunker that splits source code on class and function boundaries first."""

    def __init__(
        self,
        language: str = "python",
        chunk_size: int | None = None,
        overlap: int | None = None,
    ) -> None:
        self.language = language
        self._chunker = RecursiveChunker(
            chunk_size=chunk_size,
            overlap=overlap,
            separators=code_separators(language),
        )

    @property
    def separators(self) -> tuple[str, ...]:
        return self._chunker.separators

    def chunk(self, text: str) -> list[str]:
        return self._chunker.chunk(text)

    def get_chunk_size(self) -> int:
        return self._chunker.get_chunk_size()

    def get_overlap(self) -> int:
        return self._chunker.get_overlap()


class MarkdownChunker:
    """Chunker that splits markdown on headings and fenced blocks first."""

    def __init__(
        self,
        chunk_size: int | None = None,
        overlap: int | None = None,
    ) -> None:
        self._chunker = RecursiveChunker(
            chunk_size=chunk_size,
            overlap=overlap,
            separators=MARKDOWN_SEPARATORS,
        )

    @property
    def separators(self) -> tuple[str, ...]:
        return self._chunker.separators

    def chunk(self, text: str) -> list[str]:
        return self._chunker.chunk(text)

    def get_chunk_size(self) -> int:
        return self._chunker.get_chunk_size()

    def get_overlap(self) -> int:
        return self._chunker.get_overlap()
