"""Time-boxed cache of the searchable article set."""

import json
import time
from collections.abc import Callable
from dataclasses import asdict

from loguru import logger

from kb_core.config import CACHE_DURATION_MS, CACHE_KEY, CACHE_TIMESTAMP_KEY
from kb_core.core.search.searcher import filter_published
from kb_core.models.content import ContentItem
from kb_core.protocols import ClockProtocol, StorageProtocol


class SystemClock:
    """Wall-clock time source."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class ItemCache:
    """Cache the unfiltered published-article list in a key-value store.

    Two keys are used: one for the serialized items and one for the time they
    were stored. Entries older than ``max_age_ms`` count as absent, and so do
    entries that cannot be decoded; in both cases both keys are cleared.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        *,
        clock: ClockProtocol | None = None,
        key: str = CACHE_KEY,
        timestamp_key: str = CACHE_TIMESTAMP_KEY,
        max_age_ms: int = CACHE_DURATION_MS,
    ) -> None:
        self.storage = storage
        self.clock = clock or SystemClock()
        self.key = key
        self.timestamp_key = timestamp_key
        self.max_age_ms = max_age_ms

    def get(self) -> list[ContentItem] | None:
        """Return the cached items, or None on a miss."""
        raw = self.storage.get(self.key)
        raw_timestamp = self.storage.get(self.timestamp_key)
        if raw is None or raw_timestamp is None:
            return None

        try:
            timestamp = int(raw_timestamp)
        except ValueError:
            logger.warning("Discarding search cache: bad timestamp {!r}", raw_timestamp)
            self.clear()
            return None

        age = self.clock.now_ms() - timestamp
        if age > self.max_age_ms:
            logger.debug("Search cache expired ({} ms old)", age)
            self.clear()
            return None

        try:
            items = _decode_items(raw)
        except (ValueError, TypeError) as exc:
            logger.warning("Discarding corrupt search cache: {}", exc)
            self.clear()
            return None

        logger.debug("Filled {} items from search cache", len(items))
        return items

    def set(self, items: list[ContentItem]) -> None:
        """Store items with the current time.

        Storage failures are logged and otherwise ignored; the next lookup is a miss.
        """
        try:
            self.storage.set(self.key, json.dumps([asdict(item) for item in items]))
            self.storage.set(self.timestamp_key, str(self.clock.now_ms()))
        except Exception:
            logger.opt(exception=True).warning("Could not save search cache")

    def clear(self) -> None:
        """Remove both cache keys."""
        self.storage.delete(self.key)
        self.storage.delete(self.timestamp_key)

    def fetch_and_cache(self, fetch: Callable[[], list[ContentItem]]) -> list[ContentItem]:
        """Return cached items, or fetch, keep the published ones and cache them.

        Errors raised by ``fetch`` propagate to the caller.
        """
        cached = self.get()
        if cached is not None:
            return cached

        try:
            items = filter_published(fetch())
        except Exception as exc:
            logger.error("Error fetching published articles: {}", exc)
            raise

        self.set(items)
        return items


def _decode_items(raw: str) -> list[ContentItem]:
    data = json.loads(raw)
    if not isinstance(data, list):
        msg = f"expected a list of items, got {type(data).__name__}"
        raise ValueError(msg)
    return [_decode_item(entry) for entry in data]


def _decode_item(entry: object) -> ContentItem:
    if not isinstance(entry, dict):
        msg = f"expected an item object, got {type(entry).__name__}"
        raise ValueError(msg)
    for name, value in entry.items():
        if not isinstance(value, str):
            msg = f"item field {name!r} is {type(value).__name__}, expected str"
            raise ValueError(msg)
    return ContentItem(**entry)
