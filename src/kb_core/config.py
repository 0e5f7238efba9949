"""Configuration constants for kb-core."""

import os
from pathlib import Path

# Parent id marking a top-level category. Empty or missing parent ids count as top level too.
ROOT_PARENT_ID: str = "root"

# Search ranking.
MAX_SEARCH_RESULTS: int = 15
TITLE_MATCH_WEIGHT: int = 10
BODY_MATCH_WEIGHT: int = 1

# Bodies that are not a serialized document tree are cut to this many characters.
FALLBACK_TEXT_LIMIT: int = 1000

PREVIEW_LENGTH: int = 100

# Deeper document nodes are skipped during text extraction.
MAX_TREE_DEPTH: int = 200

# Search cache.
CACHE_KEY: str = "kb_search_cache"
CACHE_TIMESTAMP_KEY: str = "kb_search_cache_timestamp"
CACHE_DURATION_MS: int = 3_600_000

# Directory with the cache database. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/kb-core").expanduser(),
    Path("~/.kb-core").expanduser(),
    Path("~/.config/kb-core").expanduser(),
]

DATA_DIR_ENV: str = "KB_CORE_DATA_DIR"


def resolve_data_directory() -> Path:
    """Return the data directory to use.

    ``KB_CORE_DATA_DIR`` wins when set. Otherwise the first existing entry of
    ``DATA_DIRECTORIES`` is used, falling back to the first entry.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
