"""
Построители тестовых данных: деревья содержимого и пользователи
"""
from typing import Any, Dict, List, Optional

from jotter.core.security import create_access_token


def text(value: str, *marks: str) -> Dict[str, Any]:
    node: Dict[str, Any] = {"type": "text", "text": value}
    if marks:
        node["marks"] = [{"type": m} for m in marks]
    return node


def paragraph(*children: Any) -> Dict[str, Any]:
    return {"type": "paragraph", "content": [text(c) if isinstance(c, str) else c for c in children]}


def heading(value: str, level: Optional[int] = 1) -> Dict[str, Any]:
    node: Dict[str, Any] = {"type": "heading", "content": [text(value)]}
    if level is not None:
        node["attrs"] = {"level": level}
    return node


def image(src: str, alt: Optional[str] = None) -> Dict[str, Any]:
    attrs = {"src": src}
    if alt is not None:
        attrs["alt"] = alt
    return {"type": "image", "attrs": attrs}


def bullet_list(*items: str) -> Dict[str, Any]:
    return {
        "type": "bulletList",
        "content": [{"type": "listItem", "content": [paragraph(i)]} for i in items],
    }


def blockquote(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "blockquote", "content": list(children)}


def doc(*children: Any) -> Dict[str, Any]:
    return {"type": "doc", "content": [paragraph(c) if isinstance(c, str) else c for c in children]}


def bearer_headers(subject: str, email: str = "", name: str = "") -> Dict[str, str]:
    claims = {"sub": subject}
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


def paragraphs(content: Dict[str, Any]) -> List[str]:
    return [
        "".join(child.get("text", "") for child in node.get("content", []))
        for node in content.get("content", [])
        if node.get("type") == "paragraph"
    ]
