#!/usr/bin/env python3
"""
md.py
-------------------
Markdown-specific utilities for hugocheck.

Provides functions for splitting Hugo pages into YAML front matter and body,
and for parsing the body into a markdown-it token stream so prose can be
separated from code before language checks.
"""
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Tuple

# --- Third party imports ---
from markdown_it import MarkdownIt
from markdown_it.token import Token

# --- Local imports ---
from hugocheck.core.exceptions import DocumentParseError

FRONTMATTER_DELIMITER = "---"

_parser = MarkdownIt("commonmark")


# ----- YAML Frontmatter Parsing -----
def split_frontmatter(content: str) -> Tuple[str, str]:
    """
    Split a Hugo page into YAML front matter and body.

    Expected format:
        ---
        title: Hello
        ---

        Body content here...

    Leading blank lines are allowed before the opening delimiter.

    Args:
        content: Full markdown file content

    Returns:
        Tuple of (header_text, body_text), both stripped of surrounding
        whitespace

    Raises:
        DocumentParseError: If the opening or closing delimiter is missing

    Examples:
        >>> split_frontmatter("---\\ntitle: Hello\\n---\\n\\nBody text\\n")
        ('title: Hello', 'Body text')
    """
    lines = content.lstrip("\ufeff").splitlines()

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start >= len(lines) or lines[start].strip() != FRONTMATTER_DELIMITER:
        raise DocumentParseError(
            f"Starting '{FRONTMATTER_DELIMITER}' not found for header"
        )

    end = None
    for i in range(start + 1, len(lines)):
        if lines[i].strip() == FRONTMATTER_DELIMITER:
            end = i
            break

    if end is None:
        raise DocumentParseError(
            f"Ending '{FRONTMATTER_DELIMITER}' not found for header"
        )

    header = "\n".join(lines[start + 1 : end]).strip()
    body = "\n".join(lines[end + 1 :]).strip()
    return header, body


# ----- Body Parsing -----
def parse_body(body: str) -> List[Token]:
    """Parse a Markdown body into block-level markdown-it tokens."""
    return _parser.parse(body)


def extract_prose(tokens: List[Token]) -> str:
    """
    Collect the human-language text of a parsed body.

    Fenced and indented code blocks, inline code and raw HTML are skipped,
    so only text a translator would touch remains.

    Args:
        tokens: Tokens produced by parse_body

    Returns:
        Prose text, one paragraph/heading/list item per line
    """
    parts = []
    for token in tokens:
        if token.type != "inline" or not token.children:
            continue
        text = "".join(
            child.content
            for child in token.children
            if child.type == "text"
        ).strip()
        if text:
            parts.append(text)
    return "\n".join(parts)
