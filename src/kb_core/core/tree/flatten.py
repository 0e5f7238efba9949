"""Flatten a category forest into a depth-annotated list."""

from collections.abc import Collection, Sequence

from kb_core.models.content import CategoryNode, FlatCategory


def flatten(
    forest: Sequence[CategoryNode],
    collapsed: Collection[str] = frozenset(),
) -> list[FlatCategory]:
    """Walk the forest in pre-order.

    Args:
        forest: Top-level nodes, already sorted.
        collapsed: Ids whose subtrees are hidden. The collapsed node itself is still emitted.

    Returns:
        One entry per visible category, with depth 0 for top-level categories.
    """
    result: list[FlatCategory] = []
    stack: list[tuple[CategoryNode, int]] = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        result.append(
            FlatCategory(record=node.record, depth=depth, child_count=len(node.children))
        )
        if node.id in collapsed:
            continue
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return result
