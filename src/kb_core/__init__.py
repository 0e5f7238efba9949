"""Knowledge-base core: document text extraction, article search, category trees."""

from kb_core.core.richtext.extractor import extract_from_serialized, extract_text, preview_text
from kb_core.core.search.cache import ItemCache, SystemClock
from kb_core.core.search.searcher import rank_items, search
from kb_core.core.tree.builder import build_forest
from kb_core.core.tree.flatten import flatten
from kb_core.protocols import ClockProtocol, StorageProtocol

__all__ = [
    "ClockProtocol",
    "ItemCache",
    "StorageProtocol",
    "SystemClock",
    "build_forest",
    "extract_from_serialized",
    "extract_text",
    "flatten",
    "preview_text",
    "rank_items",
    "search",
]
