"""Environment configuration interface for daily-snippets.

This module provides a clean interface for accessing environment variables,
centralizing all environment variable access in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from common.constants import (
    DEFAULT_AUTHORS_FILE,
    DEFAULT_EXTENSION,
    DEFAULT_SNIPPET_TITLE,
    DEFAULT_TEAM_NAME,
    DEFAULT_UPLOAD_TIMEOUT,
    UNPROCESSED_FILTER_MODES,
)

# Load environment variables from .env file if it exists
load_dotenv()


class ConfigError(Exception):
    """A required setting is missing or invalid."""

    pass


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def require(name: str) -> str:
        """Get a required environment variable.

        Args:
            name: Variable name

        Returns:
            The non-empty value

        Raises:
            ConfigError: If the variable is unset or blank
        """
        value = os.getenv(name, "").strip()
        if not value:
            raise ConfigError(f"{name} is missing")
        return value

    @staticmethod
    def notion_token() -> str | None:
        """Get the Notion integration token, or None if not configured."""
        return os.getenv("NOTION_TOKEN") or None

    @staticmethod
    def notion_database_id() -> str | None:
        """Get the Notion database id holding snippet pages."""
        return os.getenv("NOTION_DB_ID") or None

    @staticmethod
    def target_date() -> str | None:
        """Get the export target date.

        Returns:
            First 10 characters of TARGET_DATE (YYYY-MM-DD), or None if unset
        """
        value = os.getenv("TARGET_DATE", "").strip()[:10]
        return value or None

    @staticmethod
    def daily_snippet_url() -> str | None:
        """Get the upload endpoint URL."""
        return os.getenv("DAILY_SNIPPET_URL") or None

    @staticmethod
    def daily_snippet_api_key() -> str | None:
        """Get the bearer token for the upload endpoint (None means no auth)."""
        return os.getenv("DAILY_SNIPPET_API_KEY") or None

    @staticmethod
    def api_id() -> str | None:
        """Get the api_id sent in every upload body."""
        return os.getenv("API_ID") or None

    @staticmethod
    def team_name() -> str:
        """Get the team name sent with each upload.

        Returns:
            Team name, defaults to '7기-2팀'
        """
        return os.getenv("TEAM_NAME", DEFAULT_TEAM_NAME)

    @staticmethod
    def debug() -> bool:
        """Whether DEBUG=1 is set."""
        return _flag("DEBUG")

    @staticmethod
    def force_full() -> bool:
        """Whether FORCE_FULL=1 is set (re-upload everything)."""
        return _flag("FORCE_FULL")

    @staticmethod
    def snippets_root() -> Path:
        """Get the working root holding snippets/ and the state files.

        Returns:
            Path, defaults to the current directory
        """
        return Path(os.getenv("SNIPPETS_ROOT", "."))

    @staticmethod
    def authors_file() -> Path:
        """Get the path of the folder -> email directory file.

        Returns:
            Path, defaults to ./snippet_authors.json
        """
        return Path(os.getenv("SNIPPET_AUTHORS_FILE", str(DEFAULT_AUTHORS_FILE)))

    @staticmethod
    def snippet_extension() -> str:
        """Get the extension for exported files (without the dot).

        Returns:
            Extension, defaults to 'txt'
        """
        return os.getenv("SNIPPET_EXTENSION", DEFAULT_EXTENSION).lstrip(".")

    @staticmethod
    def snippet_title() -> str:
        """Get the title used in 'title - date - email' header lines."""
        return os.getenv("SNIPPET_TITLE", DEFAULT_SNIPPET_TITLE)

    @staticmethod
    def unprocessed_filter() -> str:
        """Get the unprocessed-record predicate mode.

        Returns:
            'equals_false' (default) or 'false_or_empty'

        Raises:
            ConfigError: If the value is not a known mode
        """
        mode = os.getenv("UNPROCESSED_FILTER", "equals_false").strip().lower()
        if mode not in UNPROCESSED_FILTER_MODES:
            raise ConfigError(
                f"UNPROCESSED_FILTER must be one of {sorted(UNPROCESSED_FILTER_MODES)}, got {mode!r}"
            )
        return mode

    @staticmethod
    def upload_timeout() -> float:
        """Get the upload request timeout in seconds.

        Returns:
            Timeout, defaults to 30
        """
        return float(os.getenv("UPLOAD_TIMEOUT", str(DEFAULT_UPLOAD_TIMEOUT)))

    @staticmethod
    def notion_date_property() -> str:
        return os.getenv("NOTION_DATE_PROPERTY", "Date")

    @staticmethod
    def notion_email_property() -> str:
        return os.getenv("NOTION_EMAIL_PROPERTY", "Email")

    @staticmethod
    def notion_people_property() -> str:
        return os.getenv("NOTION_PEOPLE_PROPERTY", "Author")

    @staticmethod
    def notion_processed_property() -> str:
        return os.getenv("NOTION_PROCESSED_PROPERTY", "Posted")

    @staticmethod
    def notion_processed_at_property() -> str:
        return os.getenv("NOTION_PROCESSED_AT_PROPERTY", "Posted At")


# Singleton instance for convenient access
env = Environment()
