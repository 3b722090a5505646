"""Look up the repository a resolved component was fetched from."""

from __future__ import annotations

from typing import Optional, Sequence

from dependency_snapshot.models.events import (ResolveConfigurationDetails,
                                               ResolveConfigurationResult)
from dependency_snapshot.models.graph import Component, Repository


class RepositoryUrlLookup:
    """Resolve component repository URLs for one configuration resolution."""

    def __init__(
        self,
        details: ResolveConfigurationDetails,
        result: ResolveConfigurationResult,
    ) -> None:
        self._repositories: Sequence[Repository] = details.repositories
        self._result = result

    def _url_for_id(self, repository_id: str) -> Optional[str]:
        for repository in self._repositories:
            if repository.id == repository_id:
                return repository.url
        return None

    def __call__(self, component: Component) -> Optional[str]:
        """Return the URL of the repository ``component`` came from."""
        repository_id = self._result.get_repository_id(component)
        if repository_id is None:
            return None
        return self._url_for_id(repository_id)


def resolve_repository_url(
    component: Component,
    details: ResolveConfigurationDetails,
    result: ResolveConfigurationResult,
) -> Optional[str]:
    """Convenience wrapper for a single lookup."""
    return RepositoryUrlLookup(details, result)(component)
