"""Graph walking and identifier construction for resolved configurations."""

from .collector import ConfigurationDependencyCollector, collect
from .purl import build_identifier
from .repository import RepositoryUrlLookup, resolve_repository_url

__all__ = [
    "ConfigurationDependencyCollector",
    "RepositoryUrlLookup",
    "build_identifier",
    "collect",
    "resolve_repository_url",
]
