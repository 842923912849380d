"""
Content tree model for rich-text documents.

Documents are stored as TipTap/ProseMirror JSON: every node is an object with
an optional ``type``, an optional ``text`` (leaf runs), an optional ``content``
list of child nodes, ``attrs`` (heading level, image src/alt) and ``marks``
(inline styles). The editor owns the schema, so the API only reads these trees
and must cope with partial or malformed input.
"""
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Tuple


class NodeType(str, Enum):
    DOC = "doc"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BLOCKQUOTE = "blockquote"
    LIST_ITEM = "listItem"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    IMAGE = "image"
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    CODE_BLOCK = "codeBlock"
    HORIZONTAL_RULE = "horizontalRule"


_KNOWN_TYPES = {t.value: t for t in NodeType}

# Nodes after which plain-text extraction inserts a line break
BLOCK_TYPES = frozenset(
    {NodeType.PARAGRAPH, NodeType.HEADING, NodeType.BLOCKQUOTE, NodeType.LIST_ITEM}
)

LIST_TYPES = frozenset({NodeType.BULLET_LIST, NodeType.ORDERED_LIST})


@dataclass(frozen=True)
class ContentNode:
    type: Optional[str] = None
    text: Optional[str] = None
    # None means the node had no child list at all, () an empty one
    content: Optional[Tuple["ContentNode", ...]] = None
    attrs: Mapping[str, Any] = field(default_factory=dict)
    marks: Tuple[str, ...] = ()

    @property
    def kind(self) -> Optional[NodeType]:
        """Known node type, or None for missing/unrecognized types."""
        if self.type is None:
            return None
        return _KNOWN_TYPES.get(self.type)

    @property
    def children(self) -> Tuple["ContentNode", ...]:
        return self.content or ()

    def has_mark(self, mark: str) -> bool:
        return mark in self.marks

    def inline_text(self) -> str:
        """Concatenated text of the direct children."""
        return "".join(child.text or "" for child in self.children)

    @classmethod
    def from_json(cls, raw: Any) -> Optional["ContentNode"]:
        """Build a node tree from a decoded JSON value.

        Returns None when ``raw`` is not an object. Fields of the wrong shape
        are dropped and non-object children are skipped. Parsing is iterative:
        objects are numbered breadth-first, so every child gets a larger index
        than its parent, and nodes are then built from the last index back.
        """
        if not isinstance(raw, Mapping):
            return None

        objects = [raw]
        child_indexes: list = []
        index = 0
        while index < len(objects):
            raw_content = objects[index].get("content")
            if isinstance(raw_content, list):
                indexes = []
                for child in raw_content:
                    if isinstance(child, Mapping):
                        indexes.append(len(objects))
                        objects.append(child)
                child_indexes.append(indexes)
            else:
                child_indexes.append(None)
            index += 1

        built: list = [None] * len(objects)
        for index in range(len(objects) - 1, -1, -1):
            indexes = child_indexes[index]
            content = None if indexes is None else tuple(built[i] for i in indexes)
            built[index] = cls._from_fields(objects[index], content)
        return built[0]

    @classmethod
    def _from_fields(cls, raw: Mapping, content: Optional[Tuple["ContentNode", ...]]) -> "ContentNode":
        node_type = raw.get("type")
        text = raw.get("text")
        attrs = raw.get("attrs")

        return cls(
            type=node_type if isinstance(node_type, str) else None,
            text=text if isinstance(text, str) else None,
            content=content,
            attrs=dict(attrs) if isinstance(attrs, Mapping) else {},
            marks=_parse_marks(raw.get("marks")),
        )


def _parse_marks(raw: Any) -> Tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    marks = []
    for mark in raw:
        if isinstance(mark, Mapping) and isinstance(mark.get("type"), str):
            marks.append(mark["type"])
        elif isinstance(mark, str):
            marks.append(mark)
    return tuple(marks)


def load_content(content: Any) -> Optional[ContentNode]:
    """Accept a node, a decoded JSON object or a JSON string.

    Anything that cannot be interpreted as a tree yields None.
    """
    if content is None or content == "":
        return None
    if isinstance(content, ContentNode):
        return content
    if isinstance(content, (str, bytes, bytearray)):
        try:
            content = json.loads(content)
        except (ValueError, TypeError, RecursionError):
            return None
    return ContentNode.from_json(content)


class Visit(str, Enum):
    ENTER = "enter"
    LEAVE = "leave"


def walk(root: ContentNode) -> Iterator[Tuple[Visit, ContentNode]]:
    """Depth-first traversal yielding ENTER before and LEAVE after children.

    Uses an explicit stack so that arbitrarily deep trees are safe. Closing
    the generator stops the traversal.
    """
    stack = [(Visit.ENTER, root)]
    while stack:
        visit, node = stack.pop()
        yield visit, node
        if visit is Visit.ENTER:
            stack.append((Visit.LEAVE, node))
            for child in reversed(node.children):
                stack.append((Visit.ENTER, child))


def iter_nodes(root: ContentNode) -> Iterator[ContentNode]:
    """Pre-order iteration over every node of the tree."""
    for visit, node in walk(root):
        if visit is Visit.ENTER:
            yield node
