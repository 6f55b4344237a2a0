"""Shared constants for the daily-snippets application.

For environment-based configuration (tokens, endpoints, etc.), use the env module:
    from common.env import env
    url = env.daily_snippet_url()
"""

from pathlib import Path

# Working directories (relative to the snippets root)
SNIPPETS_DIRNAME = "snippets"
CACHE_DIRNAME = ".cache"
EXPORT_MAP_FILENAME = "notion-map.json"
UPLOAD_STATE_FILENAME = ".snippet_state.json"
DEFAULT_AUTHORS_FILE = Path("./snippet_authors.json")

# Local snippet files
DEFAULT_EXTENSION = "txt"
UPLOADABLE_EXTENSIONS: set[str] = {".md", ".txt", ".markdown"}
SNIPPET_SEPARATOR = "\n\n---\n\n"
DEFAULT_SNIPPET_TITLE = "Daily Snippet"

# Remote datastore
NOTION_PAGE_SIZE = 100
UNPROCESSED_FILTER_MODES: set[str] = {"equals_false", "false_or_empty"}

# Upload endpoint
DEFAULT_TEAM_NAME = "7기-2팀"
DEFAULT_UPLOAD_TIMEOUT = 30.0

# The ingestion proxy expects a minimal LLM request alongside the snippet
INGEST_INPUT: dict = {
    "model": "gpt-4o-mini",
    "messages": [{"role": "user", "content": "ingest snippet"}],
    "temperature": 0.0,
}

# Process exit codes
EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_NO_CANDIDATES = 2
EXIT_ALL_FAILED = 3
