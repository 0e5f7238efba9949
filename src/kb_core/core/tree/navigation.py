"""Category navigation: breadcrumbs, option labels, collapse state."""

from collections.abc import Collection, Iterable, Sequence

from kb_core.core.tree.builder import is_top_level
from kb_core.core.tree.flatten import flatten
from kb_core.models.content import Breadcrumb, CategoryNode, CategoryRecord, ForestStats


def get_breadcrumbs(
    records: Iterable[CategoryRecord],
    category_id: str,
) -> tuple[Breadcrumb, ...]:
    """Get the trail from the top-level ancestor down to a category.

    Returns breadcrumbs in order from root to the category itself (included).
    Each href is the slash-joined slugs up to that point. The walk stops at an
    unknown parent or at a parent chain that loops, so the trail then starts at
    the highest ancestor reached.
    """
    by_id: dict[str, CategoryRecord] = {}
    for record in records:
        by_id.setdefault(record.id, record)

    current = by_id.get(category_id)
    if current is None:
        return ()

    chain: list[CategoryRecord] = []
    seen: set[str] = set()
    while current is not None and current.id not in seen:
        chain.append(current)
        seen.add(current.id)
        if is_top_level(current):
            break
        current = by_id.get(current.parent_id or "")

    crumbs: list[Breadcrumb] = []
    href = ""
    for record in reversed(chain):
        href += f"/{record.slug or record.id}"
        crumbs.append(Breadcrumb(category_id=record.id, name=record.name, href=href))
    return tuple(crumbs)


def option_labels(forest: Sequence[CategoryNode]) -> list[tuple[str, str]]:
    """Return (id, label) pairs for a category picker, indented two spaces per level."""
    labels: list[tuple[str, str]] = []
    for entry in flatten(forest):
        record = entry.record
        text = f"{record.icon} {record.name}" if record.icon else record.name
        labels.append((record.id, "  " * entry.depth + text))
    return labels


def default_collapsed(forest: Sequence[CategoryNode]) -> frozenset[str]:
    """Collapse every top-level category."""
    return frozenset(node.id for node in forest)


def toggle_collapsed(collapsed: Collection[str], category_id: str) -> frozenset[str]:
    """Return a new collapsed set with ``category_id`` flipped."""
    if category_id in collapsed:
        return frozenset(c for c in collapsed if c != category_id)
    return frozenset(collapsed) | {category_id}


def forest_stats(forest: Sequence[CategoryNode]) -> ForestStats:
    return ForestStats(roots=len(forest), total=len(flatten(forest)))
