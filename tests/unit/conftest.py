"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from kb_core.models.content import CategoryRecord, ContentItem
from tests.unit.fakes import document, paragraph


ARTICLES: list[dict[str, Any]] = [
    {
        "id": "a1",
        "title": "Network Segmentation",
        "slug": "network-segmentation",
        "categoryId": "c-net",
        "status": "published",
        "content": document(paragraph("Split networks to limit", "lateral movement.")),
    },
    {
        "id": "a2",
        "title": "Firewall Rules",
        "slug": "firewall-rules",
        "categoryId": "c-net",
        "status": "published",
        "content": document(paragraph("Default deny on every network interface.")),
    },
    {
        "id": "a3",
        "title": "Prompt Injection",
        "slug": "prompt-injection",
        "categoryId": "c-ai",
        "status": "draft",
        "content": "Legacy plain text about model security.",
    },
]

CATEGORIES: list[dict[str, Any]] = [
    {"id": "c-sec", "name": "Security", "slug": "security", "parentId": "root", "order": 1},
    {"id": "c-ai", "name": "AI", "slug": "ai", "icon": "🤖", "parentId": "root", "order": 0},
    {"id": "c-net", "name": "Network", "slug": "network", "parentId": "c-sec", "order": 0},
    {
        "id": "c-cloud",
        "name": "Cloud",
        "slug": "cloud",
        "parentId": "c-sec",
        "order": 1,
        "isVisible": False,
    },
]


@pytest.fixture
def content_items() -> list[ContentItem]:
    return [
        ContentItem(
            id=a["id"],
            title=a["title"],
            body=a["content"],
            slug=a["slug"],
            category_id=a["categoryId"],
            status=a["status"],
        )
        for a in ARTICLES
    ]


@pytest.fixture
def category_records() -> list[CategoryRecord]:
    return [
        CategoryRecord(
            id=c["id"],
            parent_id=c["parentId"],
            order=c["order"],
            name=c["name"],
            slug=c["slug"],
            icon=c.get("icon", ""),
            is_visible=c.get("isVisible", True),
        )
        for c in CATEGORIES
    ]


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Return a directory with articles.json and categories.json exports."""
    (tmp_path / "articles.json").write_text(json.dumps({"articles": ARTICLES}))
    (tmp_path / "categories.json").write_text(json.dumps(CATEGORIES))
    return tmp_path
