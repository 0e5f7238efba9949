"""Rich-text document tree model."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from loguru import logger

from kb_core.config import MAX_TREE_DEPTH


class NodeType(StrEnum):
    """Kinds of document node the extractor distinguishes."""

    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    LIST = "list"
    LISTITEM = "listitem"
    CODE = "code"
    QUOTE = "quote"
    LINEBREAK = "linebreak"
    ROOT = "root"
    GENERIC = "generic"


_KNOWN_TYPES = {t.value: t for t in NodeType}


@dataclass(frozen=True)
class RichTextNode:
    """A single node of a rich-text document.

    Only ``text`` nodes carry text. Unrecognised node kinds become ``GENERIC``
    containers that keep their children and nothing else.
    """

    type: NodeType
    text: str | None = None
    children: tuple["RichTextNode", ...] = ()


def parse_node(raw: Any, *, max_depth: int = MAX_TREE_DEPTH) -> RichTextNode | None:
    """Convert a decoded JSON object into a node tree.

    Malformed parts degrade instead of raising: a non-dict yields None, an
    unknown or missing ``type`` yields a generic node, a non-string ``text`` is
    dropped and non-dict children are skipped. Nodes nested deeper than
    ``max_depth`` are cut off.

    Args:
        raw: Decoded JSON value, normally a dict with ``type``/``text``/``children``.
        max_depth: Nesting limit below ``raw``.

    Returns:
        The parsed node, or None if ``raw`` is not a node.
    """
    if not isinstance(raw, dict):
        return None
    if max_depth < 0:
        logger.debug("Document nested too deeply, dropping subtree")
        return None

    type_name = raw.get("type")
    node_type = NodeType.GENERIC
    if isinstance(type_name, str):
        node_type = _KNOWN_TYPES.get(type_name, NodeType.GENERIC)

    text = raw.get("text")
    if not isinstance(text, str):
        text = None

    children: list[RichTextNode] = []
    raw_children = raw.get("children")
    if isinstance(raw_children, list):
        for child in raw_children:
            node = parse_node(child, max_depth=max_depth - 1)
            if node is not None:
                children.append(node)

    return RichTextNode(type=node_type, text=text, children=tuple(children))
