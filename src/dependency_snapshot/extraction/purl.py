"""Build package URLs for resolved module coordinates.

Identifiers take the form ``pkg:<type>/<namespace>/<name>@<version>`` with an
optional ``repository_url`` qualifier. Every component is percent-encoded.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from dependency_snapshot.config import PACKAGE_TYPE, REPOSITORY_URL_QUALIFIER
from dependency_snapshot.errors import InvalidIdentifier
from dependency_snapshot.models.graph import ModuleVersion

_CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


def build_identifier(
    coordinates: Optional[ModuleVersion],
    repository_url: Optional[str] = None,
) -> str:
    """Return the package URL for ``coordinates``.

    An empty group falls back to the artifact name as namespace, so
    ``(group="", name="foo")`` and ``(group="foo", name="foo")`` map to the
    same identifier.

    Raises:
        InvalidIdentifier: when coordinates are missing or a value cannot be
            encoded.
    """
    if coordinates is None:
        raise InvalidIdentifier("Component has no module coordinates")

    name = _encode("name", coordinates.name)
    version = _encode("version", coordinates.version)
    namespace = _encode("namespace", coordinates.group or coordinates.name)

    purl = f"pkg:{PACKAGE_TYPE}/{namespace}/{name}@{version}"
    if repository_url is not None:
        qualifier = _encode(REPOSITORY_URL_QUALIFIER, repository_url)
        purl = f"{purl}?{REPOSITORY_URL_QUALIFIER}={qualifier}"
    return purl


def _encode(label: str, value: str) -> str:
    if not value:
        raise InvalidIdentifier(f"Package {label} cannot be empty")
    if _CONTROL_CHARACTERS.search(value):
        raise InvalidIdentifier(
            f"Package {label} {value!r} contains control characters"
        )
    try:
        return quote(value, safe="", errors="strict")
    except UnicodeEncodeError as exc:
        raise InvalidIdentifier(
            f"Package {label} {value!r} cannot be percent-encoded"
        ) from exc
