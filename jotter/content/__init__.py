from jotter.content.nodes import ContentNode, NodeType, load_content
from jotter.content.text import extract_text, truncate_text, count_words
from jotter.content.diff import DiffSegment, DiffType, diff_texts, summarize_diff
from jotter.content.preview import (
    PreviewElement, PreviewKind, PreviewProfile, HOVER, THUMBNAIL, PROFILES,
    extract_structural_elements
)

__all__ = [
    "ContentNode", "NodeType", "load_content",
    "extract_text", "truncate_text", "count_words",
    "DiffSegment", "DiffType", "diff_texts", "summarize_diff",
    "PreviewElement", "PreviewKind", "PreviewProfile", "HOVER", "THUMBNAIL", "PROFILES",
    "extract_structural_elements"
]
