"""In-memory relevance search over knowledge-base articles."""

from collections.abc import Iterable, Sequence

from kb_core.config import BODY_MATCH_WEIGHT, MAX_SEARCH_RESULTS, TITLE_MATCH_WEIGHT
from kb_core.core.richtext.extractor import extract_from_serialized
from kb_core.models.content import ContentItem, SearchHit


def prepare_query_words(query: str) -> list[str]:
    """Split a user query into lowercase search words.

    - Whitespace separates words; empty tokens are dropped
    - Repeated words are kept once, in first-seen order
    """
    if not isinstance(query, str) or not query.strip():
        return []
    words: list[str] = []
    for word in query.lower().split():
        if word not in words:
            words.append(word)
    return words


def _score_item(item: ContentItem, words: Sequence[str]) -> int | None:
    """Score one item, or return None if some word matches neither field."""
    title = (item.title or "").lower()
    body = extract_from_serialized(item.body or "").lower()

    score = 0
    for word in words:
        in_title = word in title
        in_body = word in body
        if not (in_title or in_body):
            return None
        if in_title:
            score += TITLE_MATCH_WEIGHT
        if in_body:
            score += BODY_MATCH_WEIGHT
    return score


def rank_items(items: Iterable[ContentItem], query: str) -> list[SearchHit]:
    """Return every item matching all query words, best first.

    A word matches when it is a substring of the lowercased title or of the
    lowercased extracted body. Each word adds ``TITLE_MATCH_WEIGHT`` for a
    title match and ``BODY_MATCH_WEIGHT`` for a body match. Equal scores keep
    their input order.
    """
    words = prepare_query_words(query)
    if not words:
        return []

    hits: list[SearchHit] = []
    for item in items:
        score = _score_item(item, words)
        if score is not None:
            hits.append(SearchHit(item=item, score=score))

    # list.sort is stable, so ties stay in input order
    hits.sort(key=lambda hit: hit.score, reverse=True)
    return hits


def search(
    items: Iterable[ContentItem],
    query: str,
    *,
    limit: int = MAX_SEARCH_RESULTS,
) -> list[ContentItem]:
    """Search articles by title and body.

    Args:
        items: Articles to search. Not modified.
        query: Search text. Words are ANDed; an empty query matches nothing.
        limit: Max results to return. Negative values return nothing.

    Returns:
        Matching articles ordered by descending relevance.
    """
    return [hit.item for hit in rank_items(items, query)[: max(limit, 0)]]


def filter_published(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Keep only articles whose status is ``published``."""
    return [item for item in items if item.status == "published"]
