"""Client for the dependency submission API."""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Mapping, Optional, Protocol, cast

import requests  # type: ignore[import]

from dependency_snapshot.config import (DEFAULT_API_URL,
                                        SUBMISSION_TIMEOUT_SECONDS)
from dependency_snapshot.errors import ConfigurationError, SubmissionError

_REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
_API_VERSION = "2022-11-28"


class _SessionWithPost(Protocol):
    def post(
        self,
        url: str,
        json: Any,
        timeout: int,
        headers: Optional[dict[str, str]] = None,
    ) -> Any: ...


class DependencySubmissionClient:
    """Upload snapshot documents to a repository's dependency graph."""

    def __init__(
        self,
        token: Optional[str],
        *,
        api_url: str = DEFAULT_API_URL,
        session: Optional[_SessionWithPost] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not token:
            raise ConfigurationError(
                "GITHUB_TOKEN is required to submit dependency snapshots"
            )
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._session: _SessionWithPost = cast(
            _SessionWithPost, session or requests.Session()
        )
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    def submission_url(self, repository: str) -> str:
        normalized = (repository or "").strip().strip("/")
        if not _REPOSITORY_PATTERN.match(normalized):
            raise ConfigurationError(
                f"Repository '{repository}' is not in owner/repo form"
            )
        return f"{self._api_url}/repos/{normalized}/dependency-graph/snapshots"

    def submit(
        self, repository: str, payload: Mapping[str, Any]
    ) -> dict[str, Any]:
        """POST ``payload`` and return the decoded API response.

        Raises:
            SubmissionError: when the API answers with a non-2xx status.
        """
        url = self.submission_url(repository)
        started_at = time.perf_counter()
        try:
            response = self._session.post(
                url,
                json=dict(payload),
                timeout=SUBMISSION_TIMEOUT_SECONDS,
                headers=self._headers(),
            )
        except requests.RequestException as exc:
            raise SubmissionError(
                f"Failed to reach dependency submission API: {exc}"
            ) from exc
        finally:
            elapsed_ms = (time.perf_counter() - started_at) * 1000.0
            self._logger.debug("Submission to %s took %.2f ms", url, elapsed_ms)

        status = response.status_code
        if status < 200 or status >= 300:
            raise SubmissionError(
                f"Dependency submission rejected: {status}",
                status_code=status,
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        self._logger.info(
            "Submitted snapshot %s to %s (%s)",
            body.get("id"),
            repository,
            body.get("result", "unknown"),
        )
        return body

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": _API_VERSION,
        }
