"""Upload changed snippet files to the ingestion webhook."""

import json
import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import requests

from common.constants import DEFAULT_TEAM_NAME, DEFAULT_UPLOAD_TIMEOUT, INGEST_INPUT
from common.logger import get_logger
from source.status import RemoteStatusUpdater

from .models import UploadCandidate, UploadResult, UploadStateEntry

logger = get_logger(__name__)

FILENAME_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")


class UploadError(Exception):
    """Posting a snippet to the endpoint failed."""

    pass


def snippet_date_for(path: Path) -> str:
    """Date a snippet file belongs to.

    Priority: a YYYY-MM-DD in the file name, then the file's modification
    date, then today. Both fallbacks use the local calendar date, not UTC.
    """
    match = FILENAME_DATE_RE.search(path.name)
    if match:
        return match.group(1)

    try:
        return datetime.fromtimestamp(path.stat().st_mtime).strftime("%Y-%m-%d")
    except OSError:
        return date.today().isoformat()


def build_payload(
    candidate: UploadCandidate,
    snippet_date: str,
    team_name: str = DEFAULT_TEAM_NAME,
    api_id: str | None = None,
) -> dict[str, Any]:
    """Request body for one snippet."""
    payload: dict[str, Any] = {}
    if api_id:
        payload["api_id"] = api_id
    payload.update(
        {
            "user_email": candidate.identity,
            "snippet_date": snippet_date,
            "content": candidate.content,
            "team_name": team_name,
            "input": INGEST_INPUT,
        }
    )
    return payload


class SnippetEndpoint:
    """HTTP client for the snippet ingestion webhook.

    Sends exactly one POST per snippet; there is no retry.
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout: float = DEFAULT_UPLOAD_TIMEOUT,
    ):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if api_key:
            self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Post one snippet.

        Args:
            payload: JSON body

        Returns:
            Parsed JSON response, or {"ok": True, "text": <raw body>} when the
            response is not JSON

        Raises:
            UploadError: On a network error or a non-2xx response
        """
        if logger.isEnabledFor(logging.DEBUG):
            safe_headers = dict(self.session.headers)
            if "Authorization" in safe_headers:
                safe_headers["Authorization"] = "Bearer ****"
            logger.debug(f"POST {self.url}")
            logger.debug(f"HEADERS {safe_headers}")
            logger.debug(f"BODY {json.dumps(payload, ensure_ascii=False)}")

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise UploadError(f"Request failed: {e}") from e

        text = response.text
        logger.debug(f"RESP {response.status_code} {response.reason} {text}")

        if not response.ok:
            raise UploadError(f"HTTP {response.status_code} {response.reason}\n{text}")

        try:
            return response.json()
        except ValueError:
            return {"ok": True, "text": text}


class UploadDispatcher:
    """Uploads candidates one by one and updates the in-memory state.

    A failing file is logged and counted; it never stops the batch. The
    caller persists the state once the batch is done.
    """

    def __init__(
        self,
        endpoint: SnippetEndpoint,
        state: dict[str, UploadStateEntry],
        team_name: str = DEFAULT_TEAM_NAME,
        api_id: str | None = None,
        status_updater: RemoteStatusUpdater | None = None,
    ):
        self.endpoint = endpoint
        self.state = state
        self.team_name = team_name
        self.api_id = api_id
        self.status_updater = status_updater

    def dispatch(self, candidates: list[UploadCandidate]) -> UploadResult:
        result = UploadResult(candidates=len(candidates))

        for candidate in candidates:
            label = f"{candidate.folder}/{candidate.path.name}"
            snippet_date = snippet_date_for(candidate.path)
            payload = build_payload(candidate, snippet_date, self.team_name, self.api_id)

            logger.info(f"↗ {label} → {candidate.identity} @ {snippet_date}")

            try:
                response = self.endpoint.post(payload)
            except UploadError as e:
                logger.error(f"Failed {label}: {e}")
                result.failed += 1
                continue

            result.uploaded += 1
            self.state[candidate.state_key] = UploadStateEntry(
                hash=candidate.fingerprint,
                at=datetime.now(timezone.utc).isoformat(),
            )
            logger.info(f"Uploaded {label}: {response}")

            if self.status_updater is not None:
                result.marked += self.status_updater.mark_processed(
                    candidate.identity, snippet_date
                )

        return result
