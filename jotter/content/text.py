"""Plain-text extraction from content trees."""
from typing import Any

from jotter.content.nodes import BLOCK_TYPES, Visit, load_content, walk


def extract_text(content: Any) -> str:
    """Linearize a content tree to plain text.

    Text runs are appended verbatim; a newline follows every paragraph,
    heading, blockquote and list item that has a child list. The result is
    stripped. Unreadable input gives an empty string.
    """
    root = load_content(content)
    if root is None:
        return ""

    parts = []
    for visit, node in walk(root):
        if visit is Visit.ENTER:
            if node.text:
                parts.append(node.text)
        elif node.content is not None and node.kind in BLOCK_TYPES:
            parts.append("\n")

    return "".join(parts).strip()


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def count_words(text: str) -> int:
    return len(text.split())
