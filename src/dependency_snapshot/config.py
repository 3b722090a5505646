"""
Dependency Snapshot Repository
Introductory remarks: This module is part of the Dependency Snapshot codebase.

Central configuration constants and runtime settings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dependency_snapshot.errors import ConfigurationError
from dependency_snapshot.utils.env import load_dotenv

# Package identifier ---------------------------------------------------------

PACKAGE_TYPE = "maven"
"""Package-manager tag used for every component identifier."""

REPOSITORY_URL_QUALIFIER = "repository_url"
"""Qualifier key carrying the repository a component was fetched from."""

REPOSITORY_URL_PROPERTY = "URL"
"""Repository property holding its base URL."""

# Detector / report ----------------------------------------------------------

DETECTOR_NAME = "dependency-snapshot"
DETECTOR_URL = "https://github.com/dependency-snapshot/dependency-snapshot"

REPORT_DIRECTORY = "dependency-graph-reports"
REPORT_FILE_NAME = "dependency-snapshot.json"

# Submission API -------------------------------------------------------------

DEFAULT_API_URL = "https://api.github.com"
SUBMISSION_TIMEOUT_SECONDS = 30

_LOGGER = logging.getLogger(__name__)

_REQUIRED_METADATA = (
    "GITHUB_JOB",
    "GITHUB_RUN_NUMBER",
    "GITHUB_SHA",
    "GITHUB_REF",
    "GITHUB_WORKSPACE",
)


@dataclass(frozen=True)
class SnapshotSettings:
    """Runtime settings resolved from the environment."""

    job_name: str
    run_number: str
    sha: str
    ref: str
    workspace: Path
    output_dir: Path
    repository: Optional[str] = None
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "SnapshotSettings":
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: when a snapshot metadata variable is unset.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        values: dict[str, str] = {}
        for key in _REQUIRED_METADATA:
            value = (environ.get(key) or "").strip()
            if not value:
                raise ConfigurationError(f"{key} is empty or unset")
            values[key] = value

        workspace = Path(values["GITHUB_WORKSPACE"])
        output_raw = (environ.get("DEPENDENCY_SNAPSHOT_DIR") or "").strip()
        output_dir = Path(output_raw) if output_raw else workspace / "build"

        api_url = (environ.get("GITHUB_API_URL") or "").strip()
        if not api_url:
            api_url = DEFAULT_API_URL

        settings = cls(
            job_name=values["GITHUB_JOB"],
            run_number=values["GITHUB_RUN_NUMBER"],
            sha=values["GITHUB_SHA"],
            ref=values["GITHUB_REF"],
            workspace=workspace,
            output_dir=output_dir,
            repository=_optional(environ, "GITHUB_REPOSITORY"),
            token=_optional(environ, "GITHUB_TOKEN"),
            api_url=api_url.rstrip("/"),
        )
        _LOGGER.debug(
            "Resolved settings for job=%s run=%s ref=%s",
            settings.job_name,
            settings.run_number,
            settings.ref,
        )
        return settings


def _optional(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = (environ.get(key) or "").strip()
    return value or None
