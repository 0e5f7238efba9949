"""Parse content-store JSON exports into domain models."""

import json
from pathlib import Path
from typing import Any

from loguru import logger

from kb_core.models.content import CategoryRecord, ContentItem


def load_json(path: Path) -> Any:
    """Read and decode a JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = f"File not found: {path}"
        raise FileNotFoundError(msg) from None
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ValueError(msg) from exc


def _entries(data: Any, *keys: str) -> list[Any]:
    """Accept either a bare list or an object wrapping the list under one of ``keys``."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in keys:
            value = data.get(key)
            if isinstance(value, list):
                return value
    msg = f"Expected a list or an object with one of {list(keys)!r}"
    raise ValueError(msg)


def _str(raw: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str):
            return value
    return ""


def _status(raw: dict[str, Any]) -> str:
    status = raw.get("status")
    if isinstance(status, str) and status:
        return status
    # Legacy records only carry a boolean flag
    if "published" in raw:
        return "published" if raw["published"] else "draft"
    return "published"


def parse_content_items(data: Any) -> list[ContentItem]:
    """Parse exported articles into ContentItems.

    Args:
        data: A list of article dicts, or ``{"items": [...]}`` / ``{"articles": [...]}``.

    Returns:
        Items in input order. Entries without a string ``id`` are skipped.
    """
    items: list[ContentItem] = []
    for raw in _entries(data, "items", "articles"):
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
            logger.warning("Skipping article without id: {!r}", raw)
            continue

        category_id = _str(raw, "categoryId", "category_id")
        category_ids = raw.get("categoryIds")
        if isinstance(category_ids, list) and category_ids and isinstance(category_ids[0], str):
            category_id = category_ids[0]

        items.append(
            ContentItem(
                id=raw["id"],
                title=_str(raw, "title"),
                body=_str(raw, "body", "content"),
                slug=_str(raw, "slug"),
                category_id=category_id,
                status=_status(raw),
            )
        )
    return items


def _order(raw: dict[str, Any]) -> int:
    value = raw.get("order")
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def parse_category_records(data: Any) -> list[CategoryRecord]:
    """Parse exported categories into CategoryRecords.

    Args:
        data: A list of category dicts, or ``{"categories": [...]}``.

    Returns:
        Records in input order. Entries without a string ``id`` are skipped.
    """
    records: list[CategoryRecord] = []
    for raw in _entries(data, "categories"):
        if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
            logger.warning("Skipping category without id: {!r}", raw)
            continue

        parent_id = raw.get("parentId", raw.get("parent_id"))
        visible = raw.get("isVisible", raw.get("is_visible"))
        records.append(
            CategoryRecord(
                id=raw["id"],
                parent_id=parent_id if isinstance(parent_id, str) else None,
                order=_order(raw),
                name=_str(raw, "name"),
                slug=_str(raw, "slug"),
                description=_str(raw, "description"),
                icon=_str(raw, "icon"),
                color=_str(raw, "color"),
                is_visible=visible is not False,
            )
        )
    return records
