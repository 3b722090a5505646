"""
Dependency Snapshot Repository
Introductory remarks: This module is part of the Dependency Snapshot codebase.

Shared fixtures for the test suite.
"""

from __future__ import annotations

import pytest

from dependency_snapshot.utils import env


@pytest.fixture(autouse=True)
def _isolated_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    _isolated_runtime_env: Keep developer settings out of the tests.
    :param monkeypatch:
    :returns:
    """

    monkeypatch.setattr(env, "_ENV_LOADED", True)
    monkeypatch.setenv("LOG_LEVEL", "0")
    monkeypatch.delenv("DEPENDENCY_SNAPSHOT_SUBMIT", raising=False)
    monkeypatch.delenv("DEPENDENCY_SNAPSHOT_DIR", raising=False)
