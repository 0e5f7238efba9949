"""Plain-text extraction from rich-text document trees."""

import json
import re

from loguru import logger

from kb_core.config import FALLBACK_TEXT_LIMIT, MAX_TREE_DEPTH, PREVIEW_LENGTH
from kb_core.models.richtext import NodeType, RichTextNode, parse_node

_WHITESPACE_RE = re.compile(r"\s+")


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text)


def _extract(node: RichTextNode | None, depth: int, in_code: bool = False) -> str:
    if node is None:
        return ""
    if depth > MAX_TREE_DEPTH:
        logger.debug("Skipping text below depth {}", MAX_TREE_DEPTH)
        return ""

    if node.type is NodeType.TEXT:
        return node.text or ""
    if node.type is NodeType.LINEBREAK:
        return "\n" if in_code else ""
    if node.type is NodeType.CODE:
        return _extract_code(node, depth)
    if node.children:
        parts = []
        for child in node.children:
            parts.append(_extract(child, depth + 1, in_code))
        return " ".join(parts)
    return ""


def _extract_code(node: RichTextNode, depth: int) -> str:
    """Rebuild the line layout of a code block.

    Line breaks anywhere below the code node become newlines.
    """
    pieces: list[str] = []
    last = len(node.children) - 1
    for i, child in enumerate(node.children):
        pieces.append(_extract(child, depth + 1, in_code=True))
        if child.type is NodeType.PARAGRAPH and i != last:
            pieces.append("\n")
    return "".join(pieces)


def extract_text(node: RichTextNode | None) -> str:
    """Return the plain text of a document subtree.

    Children are joined with single spaces, except inside code blocks where
    line breaks and paragraph boundaries become newlines. The result is not
    whitespace-normalized.
    """
    return _extract(node, 0)


def _fallback_text(raw: str) -> str:
    return _collapse_whitespace(raw[:FALLBACK_TEXT_LIMIT])


def extract_from_serialized(serialized: str) -> str:
    """Extract searchable text from a stored article body.

    The body is expected to be a JSON envelope ``{"root": {...}}``. Its text is
    extracted, whitespace runs are collapsed to single spaces and the result is
    trimmed.

    Anything that is not such an envelope (legacy plain text, invalid JSON,
    JSON without a ``root`` object) is treated as plain text: the first
    ``FALLBACK_TEXT_LIMIT`` characters with whitespace runs collapsed.

    Never raises.
    """
    if not isinstance(serialized, str):
        return ""

    try:
        data = json.loads(serialized)
    except (ValueError, RecursionError):
        return _fallback_text(serialized)

    if not isinstance(data, dict) or not isinstance(data.get("root"), dict):
        return _fallback_text(serialized)

    text = extract_text(parse_node(data["root"]))
    return _collapse_whitespace(text).strip()


def preview_text(serialized: str, *, length: int = PREVIEW_LENGTH) -> str:
    """Return a short plain-text preview of an article body, with "..." when cut."""
    text = extract_from_serialized(serialized)
    if len(text) > length:
        return text[:length] + "..."
    return text
