"""CLI for kb-core (extract, search, category tree)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from kb_core.config import resolve_data_directory
from kb_core.core.importer.json_reader import (
    load_json,
    parse_category_records,
    parse_content_items,
)
from kb_core.core.richtext.extractor import extract_from_serialized, preview_text
from kb_core.core.search.cache import ItemCache
from kb_core.core.search.searcher import filter_published, rank_items
from kb_core.core.storage.sqlite import SqliteStorage
from kb_core.core.tree.builder import build_forest
from kb_core.core.tree.flatten import flatten
from kb_core.core.tree.navigation import default_collapsed, forest_stats, get_breadcrumbs
from kb_core.logging_config import configure_logging
from kb_core.models.content import CategoryRecord, ContentItem, TreeDiagnostics

app = typer.Typer(help="Knowledge-base tools: text extraction, article search, category trees.")

_CACHE_DB_NAME = "cache.db"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _read_items(path: Path) -> list[ContentItem]:
    return parse_content_items(load_json(path))


def _load_categories(path: Path) -> list[CategoryRecord]:
    try:
        return parse_category_records(load_json(path))
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Cannot read categories from {}: {}", path, exc)
        raise typer.Exit(1) from exc


@app.command()
def extract(
    document: Path = typer.Argument(..., help="File holding a serialized document or plain text"),
) -> None:
    """Print the searchable text of an article body."""
    try:
        raw = document.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.error("File not found: {}", document)
        raise typer.Exit(1) from None
    typer.echo(extract_from_serialized(raw))


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Search query")],
    items_file: Annotated[
        Path,
        typer.Option("--items", "-i", help="JSON file with exported articles"),
    ],
    limit: int = typer.Option(15, "--limit", "-n", min=0, help="Max results"),
    use_cache: bool = typer.Option(
        False, "--cache/--no-cache", help="Serve articles through the one-hour search cache"
    ),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory holding the cache database"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search published articles by title and body."""
    try:
        if use_cache:
            storage = SqliteStorage.open((data_dir or resolve_data_directory()) / _CACHE_DB_NAME)
            try:
                items = ItemCache(storage).fetch_and_cache(lambda: _read_items(items_file))
            finally:
                storage.close()
        else:
            items = filter_published(_read_items(items_file))
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Cannot read articles from {}: {}", items_file, exc)
        raise typer.Exit(1) from exc

    hits = rank_items(items, query)[:limit]

    if output_json:
        data = {
            "results": [
                {
                    "id": h.item.id,
                    "title": h.item.title,
                    "slug": h.item.slug,
                    "category_id": h.item.category_id,
                    "score": h.score,
                    "preview": preview_text(h.item.body),
                }
                for h in hits
            ],
            "count": len(hits),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {len(hits)} results:\n")
    for h in hits:
        typer.echo(f"  {h.item.title or '(untitled)'}  [score={h.score}]")
        preview = preview_text(h.item.body)
        if preview:
            typer.echo(f"    {preview}")
        typer.echo(f"    id={h.item.id}")
        typer.echo()


@app.command()
def tree(
    categories_file: Annotated[
        Path,
        typer.Option("--categories", "-c", help="JSON file with exported categories"),
    ],
    collapse: Annotated[
        list[str] | None,
        typer.Option("--collapse", "-C", help="Hide the subtree of this category id"),
    ] = None,
    collapse_roots: bool = typer.Option(
        False, "--collapse-roots", help="Hide the subtrees of all top-level categories"
    ),
    visible_first: bool = typer.Option(
        False, "--visible-first", help="List hidden categories after visible siblings"
    ),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Print the category hierarchy."""
    records = _load_categories(categories_file)
    diagnostics = TreeDiagnostics()
    forest = build_forest(records, visible_first=visible_first, diagnostics=diagnostics)

    collapsed = set(collapse or ())
    if collapse_roots:
        collapsed |= default_collapsed(forest)
    entries = flatten(forest, collapsed)
    stats = forest_stats(forest)

    if output_json:
        data = {
            "categories": [
                {
                    "id": e.record.id,
                    "name": e.record.name,
                    "depth": e.depth,
                    "children": e.child_count,
                    "collapsed": e.record.id in collapsed,
                }
                for e in entries
            ],
            "roots": stats.roots,
            "subcategories": stats.subcategories,
            "dropped": {
                "dangling": diagnostics.dangling,
                "cyclic": diagnostics.cyclic,
                "duplicates": diagnostics.duplicates,
            },
        }
        typer.echo(json.dumps(data, indent=2))
        return

    for e in entries:
        marker = "+" if e.child_count and e.record.id in collapsed else "-"
        label = f"{e.record.icon} {e.record.name}" if e.record.icon else e.record.name
        typer.echo(f"{'  ' * e.depth}{marker} {label or e.record.id}  [id={e.record.id}]")
    typer.echo(f"\nRoot: {stats.roots} categories, subcategories: {stats.subcategories}")


@app.command()
def breadcrumbs(
    category_id: Annotated[str, typer.Argument(help="Category id")],
    categories_file: Annotated[
        Path,
        typer.Option("--categories", "-c", help="JSON file with exported categories"),
    ],
) -> None:
    """Print the path from the top-level category down to a category."""
    crumbs = get_breadcrumbs(_load_categories(categories_file), category_id)
    if not crumbs:
        typer.echo(f"Category '{category_id}' not found.")
        raise typer.Exit(1)
    typer.echo(" > ".join(c.name or c.category_id for c in crumbs))
    typer.echo(crumbs[-1].href)


@app.command(name="cache-clear")
def cache_clear(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory holding the cache database"),
    ] = None,
) -> None:
    """Drop the cached article list."""
    db_path = (data_dir or resolve_data_directory()) / _CACHE_DB_NAME
    if not db_path.exists():
        typer.echo("No search cache.")
        return
    storage = SqliteStorage.open(db_path)
    try:
        ItemCache(storage).clear()
    finally:
        storage.close()
    typer.echo("Search cache cleared.")
