"""Build a sorted category forest from flat category records."""

from collections.abc import Iterable

from loguru import logger

from kb_core.config import ROOT_PARENT_ID
from kb_core.models.content import CategoryNode, CategoryRecord, TreeDiagnostics


def is_top_level(record: CategoryRecord) -> bool:
    """True if the record sits at the top of the hierarchy."""
    return not record.parent_id or record.parent_id == ROOT_PARENT_ID


def _sort_siblings(records: list[CategoryRecord], *, visible_first: bool) -> list[CategoryRecord]:
    # sorted() is stable, so equal orders keep their input order
    if visible_first:
        return sorted(records, key=lambda r: (not r.is_visible, r.order or 0))
    return sorted(records, key=lambda r: r.order or 0)


def _classify_unreached(
    record: CategoryRecord,
    by_id: dict[str, CategoryRecord],
) -> str:
    """Walk up the parent chain of an unreachable record.

    Returns "cyclic" if the chain loops and "dangling" if it ends at an unknown id.
    """
    seen: set[str] = set()
    current = record
    while True:
        if current.id in seen:
            return "cyclic"
        seen.add(current.id)
        parent = by_id.get(current.parent_id or "")
        if parent is None:
            return "dangling"
        current = parent


def build_forest(
    records: Iterable[CategoryRecord],
    *,
    visible_first: bool = False,
    diagnostics: TreeDiagnostics | None = None,
) -> list[CategoryNode]:
    """Arrange category records into trees rooted at top-level categories.

    Siblings are ordered by ``order`` (ties keep input order). With
    ``visible_first``, visible siblings come before hidden ones.

    Records that cannot be reached from a top-level category, because their
    parent id is unknown or their parent chain loops, are left out of the
    forest. They are logged and, if ``diagnostics`` is given, recorded there.
    Later records repeating an already seen id are dropped the same way.

    Args:
        records: Flat category records. Not modified.
        visible_first: Put hidden categories after visible siblings.
        diagnostics: Optional collector for dropped record ids.

    Returns:
        Top-level category nodes with their subtrees.
    """
    unique: list[CategoryRecord] = []
    by_id: dict[str, CategoryRecord] = {}
    for record in records:
        if record.id in by_id:
            logger.warning("Dropping duplicate category id {!r}", record.id)
            if diagnostics is not None:
                diagnostics.duplicates.append(record.id)
            continue
        by_id[record.id] = record
        unique.append(record)

    roots: list[CategoryRecord] = []
    children_of: dict[str, list[CategoryRecord]] = {}
    for record in unique:
        if is_top_level(record):
            roots.append(record)
        else:
            children_of.setdefault(record.parent_id or "", []).append(record)

    sorted_children: dict[str, list[CategoryRecord]] = {}
    reached: list[CategoryRecord] = []
    visited: set[str] = set()
    roots = _sort_siblings(roots, visible_first=visible_first)
    todo = list(reversed(roots))
    while todo:
        record = todo.pop()
        if record.id in visited:
            continue
        visited.add(record.id)
        reached.append(record)

        kids = _sort_siblings(children_of.get(record.id, []), visible_first=visible_first)
        kids = [k for k in kids if k.id not in visited]
        sorted_children[record.id] = kids
        todo.extend(reversed(kids))

    # Parents come before their children in `reached`, so build bottom-up
    nodes: dict[str, CategoryNode] = {}
    for record in reversed(reached):
        nodes[record.id] = CategoryNode(
            record=record,
            children=tuple(nodes[k.id] for k in sorted_children[record.id]),
        )

    for record in unique:
        if record.id in visited:
            continue
        kind = _classify_unreached(record, by_id)
        logger.warning(
            "Dropping category {!r} (parent {!r}): {}",
            record.id,
            record.parent_id,
            "parent chain loops" if kind == "cyclic" else "ancestor not found",
        )
        if diagnostics is None:
            continue
        if kind == "cyclic":
            diagnostics.cyclic.append(record.id)
        else:
            diagnostics.dangling.append(record.id)

    return [nodes[r.id] for r in roots]
