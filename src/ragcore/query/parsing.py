"""Helpers for turning list-style LLM output into clean lines."""

import re

NUMBERING = re.compile(r"^\s*\d+\s*[.)]\s*")


def strip_numbering(line: str) -> str:
    """Remove a leading "1." or "2)" style prefix and surrounding whitespace."""
    return NUMBERING.sub("", line).strip()


def parse_numbered_lines(text: str) -> list[str]:
    """
    Split a numbered list into its items.

    Blank lines and lines that are empty once numbering is removed are
    dropped.
    """
    items = (strip_numbering(line) for line in text.splitlines())
    return [item for item in items if item]
