"""Tests for the kb-core CLI."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from kb_core.cli import app
from tests.unit.fakes import document, paragraph

runner = CliRunner()


@pytest.fixture(autouse=True)
def _detach_log_sinks() -> Iterator[None]:
    """Drop sinks bound to the runner's captured stderr once a test ends."""
    yield
    logger.remove()


def test_extract_prints_document_text(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    path.write_text(document(paragraph("Hello", "World")))
    result = runner.invoke(app, ["extract", str(path)])
    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == "Hello World"


def test_extract_missing_file_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_search_json_output(export_dir: Path) -> None:
    result = runner.invoke(
        app, ["search", "network", "--items", str(export_dir / "articles.json"), "--json"]
    )
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.stdout)
    assert parsed["count"] == 2
    assert [r["id"] for r in parsed["results"]] == ["a1", "a2"]
    assert parsed["results"][0]["score"] == 11


def test_search_skips_drafts(export_dir: Path) -> None:
    result = runner.invoke(
        app, ["search", "model", "--items", str(export_dir / "articles.json"), "--json"]
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["count"] == 0


def test_search_text_output(export_dir: Path) -> None:
    result = runner.invoke(app, ["search", "firewall", "--items", str(export_dir / "articles.json")])
    assert result.exit_code == 0, result.output
    assert "Firewall Rules" in result.output
    assert "id=a2" in result.output


def test_search_with_cache_serves_stale_file(export_dir: Path, tmp_path: Path) -> None:
    items_file = export_dir / "articles.json"
    data_dir = tmp_path / "data"
    args = ["search", "firewall", "--items", str(items_file), "--cache", "--data-dir", str(data_dir)]

    first = runner.invoke(app, [*args, "--json"])
    assert first.exit_code == 0, first.output
    assert (data_dir / "cache.db").exists()

    items_file.write_text("[]")
    second = runner.invoke(app, [*args, "--json"])
    assert json.loads(second.stdout)["count"] == 1

    cleared = runner.invoke(app, ["cache-clear", "--data-dir", str(data_dir)])
    assert cleared.exit_code == 0, cleared.output
    third = runner.invoke(app, [*args, "--json"])
    assert json.loads(third.stdout)["count"] == 0


def test_search_missing_items_file_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["search", "x", "--items", str(tmp_path / "none.json")])
    assert result.exit_code == 1


def test_search_rejects_negative_limit(export_dir: Path) -> None:
    result = runner.invoke(
        app, ["search", "network", "--items", str(export_dir / "articles.json"), "--limit=-1"]
    )
    assert result.exit_code == 2


def test_tree_prints_hierarchy(export_dir: Path) -> None:
    result = runner.invoke(app, ["tree", "--categories", str(export_dir / "categories.json")])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0].startswith("- 🤖 AI")
    assert lines[2].startswith("  - Network")
    assert "Root: 2 categories, subcategories: 2" in result.output


def test_tree_json_with_collapsed_roots(export_dir: Path) -> None:
    result = runner.invoke(
        app,
        ["tree", "--categories", str(export_dir / "categories.json"), "--collapse-roots", "--json"],
    )
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.stdout)
    assert [c["id"] for c in parsed["categories"]] == ["c-ai", "c-sec"]
    assert parsed["categories"][1]["children"] == 2
    assert parsed["dropped"]["dangling"] == []


def test_tree_reports_dropped_records(tmp_path: Path) -> None:
    path = tmp_path / "categories.json"
    path.write_text(json.dumps([{"id": "a", "parentId": "root"}, {"id": "b", "parentId": "zz"}]))
    result = runner.invoke(app, ["tree", "--categories", str(path), "--json"])
    assert result.exit_code == 0, result.output
    parsed = json.loads(result.stdout)
    assert parsed["dropped"]["dangling"] == ["b"]


def test_breadcrumbs_command(export_dir: Path) -> None:
    result = runner.invoke(
        app, ["breadcrumbs", "c-net", "--categories", str(export_dir / "categories.json")]
    )
    assert result.exit_code == 0, result.output
    assert "Security > Network" in result.output
    assert "/security/network" in result.output


def test_breadcrumbs_unknown_category(export_dir: Path) -> None:
    result = runner.invoke(
        app, ["breadcrumbs", "nope", "--categories", str(export_dir / "categories.json")]
    )
    assert result.exit_code == 1
