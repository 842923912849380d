"""
Structural previews of a document: the first few headings, paragraphs,
images, lists and quotes in document order, for thumbnails and hover cards.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from jotter.content.nodes import LIST_TYPES, ContentNode, NodeType, iter_nodes, load_content


class PreviewKind(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    LIST = "list"
    BLOCKQUOTE = "blockquote"


@dataclass(frozen=True)
class PreviewElement:
    type: PreviewKind
    text: Optional[str] = None
    level: Optional[int] = None
    src: Optional[str] = None
    alt: Optional[str] = None
    is_bold: Optional[bool] = None


@dataclass(frozen=True)
class PreviewProfile:
    name: str
    heading_length: int
    paragraph_length: int
    max_elements: int


HOVER = PreviewProfile("hover", heading_length=60, paragraph_length=100, max_elements=8)
THUMBNAIL = PreviewProfile("thumbnail", heading_length=40, paragraph_length=60, max_elements=4)

PROFILES = {p.name: p for p in (HOVER, THUMBNAIL)}


def _heading_level(node: ContentNode) -> int:
    level = node.attrs.get("level")
    if isinstance(level, int) and not isinstance(level, bool) and level > 0:
        return level
    return 1


def _classify(node: ContentNode, profile: PreviewProfile) -> Optional[PreviewElement]:
    kind = node.kind

    if kind is NodeType.HEADING and node.content is not None:
        text = node.inline_text()
        if text.strip():
            return PreviewElement(
                PreviewKind.HEADING,
                text=text[: profile.heading_length],
                level=_heading_level(node),
            )
    elif kind is NodeType.PARAGRAPH and node.content is not None:
        text = node.inline_text()
        if text.strip():
            return PreviewElement(
                PreviewKind.PARAGRAPH,
                text=text[: profile.paragraph_length],
                is_bold=any(child.has_mark("bold") for child in node.children),
            )
    elif kind is NodeType.IMAGE:
        src = node.attrs.get("src")
        if isinstance(src, str) and src:
            alt = node.attrs.get("alt")
            return PreviewElement(
                PreviewKind.IMAGE, src=src, alt=alt if isinstance(alt, str) else None
            )
    elif kind in LIST_TYPES:
        return PreviewElement(PreviewKind.LIST)
    elif kind is NodeType.BLOCKQUOTE:
        return PreviewElement(PreviewKind.BLOCKQUOTE)
    return None


def extract_structural_elements(
    content: Any,
    max_elements: Optional[int] = None,
    profile: PreviewProfile = HOVER,
) -> List[PreviewElement]:
    """Collect up to ``max_elements`` preview elements in pre-order.

    Children of every node are visited, so the paragraphs inside a list or a
    quote follow its marker. Traversal stops as soon as the bound is reached.
    """
    if max_elements is None:
        max_elements = profile.max_elements
    if max_elements <= 0:
        return []

    root = load_content(content)
    if root is None:
        return []

    elements: List[PreviewElement] = []
    for node in iter_nodes(root):
        element = _classify(node, profile)
        if element is not None:
            elements.append(element)
            if len(elements) >= max_elements:
                break
    return elements
