"""Decode recorded build operation events.

Each record is a JSON object ``{"details": {...}, "result": {...}}`` whose
halves carry a ``kind`` tag. Resolved graphs are recorded as a flat
component list and linked back into a graph here, so recordings may contain
shared and cyclic edges.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import (Any, Dict, Iterator, List, Mapping, Optional, Sequence,
                    TextIO, Tuple)

from dependency_snapshot.config import REPOSITORY_URL_PROPERTY
from dependency_snapshot.errors import EventDecodeError
from dependency_snapshot.models.events import (LoadProjectsDetails,
                                               LoadProjectsResult,
                                               OperationKind, ProjectNode,
                                               ResolveConfigurationDetails,
                                               ResolveConfigurationResult,
                                               UnknownOperation)
from dependency_snapshot.models.graph import (Component, ComponentIdentifier,
                                              DependencyResult, ModuleVersion,
                                              Repository)

_LOGGER = logging.getLogger(__name__)


def decode_event(record: Mapping[str, Any]) -> Tuple[object, object]:
    """Return the ``(details, result)`` pair encoded in ``record``."""
    if not isinstance(record, Mapping):
        raise EventDecodeError("Event record must be a JSON object")
    details = _require_mapping(record, "details")
    result = _require_mapping(record, "result")
    return _decode_details(details), _decode_result(result)


def read_events(stream: TextIO) -> Iterator[Tuple[object, object]]:
    """Yield decoded events from newline-delimited JSON."""
    for line_number, line in enumerate(stream, start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            record = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise EventDecodeError(
                f"Line {line_number} is not valid JSON: {exc.msg}"
            ) from exc
        try:
            yield decode_event(record)
        except EventDecodeError as exc:
            raise EventDecodeError(f"Line {line_number}: {exc}") from exc


def _kind(payload: Mapping[str, Any]) -> Optional[OperationKind]:
    raw = payload.get("kind")
    try:
        return OperationKind(raw)
    except ValueError:
        return None


def _decode_details(payload: Mapping[str, Any]) -> object:
    kind = _kind(payload)
    if kind is OperationKind.RESOLVE_CONFIGURATION:
        name = payload.get("configuration_name")
        if not isinstance(name, str) or not name:
            raise EventDecodeError("configuration_name is required")
        repositories = [
            _decode_repository(item)
            for item in _sequence(payload, "repositories")
        ]
        return ResolveConfigurationDetails(
            configuration_name=name, repositories=repositories
        )
    if kind is OperationKind.LOAD_PROJECTS:
        return LoadProjectsDetails(build_path=str(payload.get("build_path", ":")))
    return UnknownOperation(name=str(payload.get("kind", "unknown")))


def _decode_result(payload: Mapping[str, Any]) -> object:
    kind = _kind(payload)
    if kind is OperationKind.RESOLVE_CONFIGURATION:
        return _decode_resolution(payload)
    if kind is OperationKind.LOAD_PROJECTS:
        return LoadProjectsResult(
            root_project=_decode_project_tree(
                _require_mapping(payload, "root_project")
            )
        )
    _LOGGER.debug("Unrecognised result kind %r", payload.get("kind"))
    return UnknownOperation(name=str(payload.get("kind", "unknown")))


def _decode_repository(item: Any) -> Repository:
    if not isinstance(item, Mapping) or not item.get("id"):
        raise EventDecodeError("Repository entries require an id")
    url = item.get("url")
    if url is None and isinstance(item.get("properties"), Mapping):
        url = item["properties"].get(REPOSITORY_URL_PROPERTY)
    return Repository(
        id=str(item["id"]),
        name=item.get("name"),
        url=str(url) if url is not None else None,
    )


def _decode_resolution(payload: Mapping[str, Any]) -> ResolveConfigurationResult:
    entries = _sequence(payload, "components")
    components: Dict[str, Component] = {}
    repository_ids: Dict[str, str] = {}

    for entry in entries:
        if not isinstance(entry, Mapping):
            raise EventDecodeError("Component entries must be objects")
        component_id = entry.get("id")
        if not isinstance(component_id, str) or not component_id:
            raise EventDecodeError("Component entries require an id")
        if component_id in components:
            raise EventDecodeError(f"Duplicate component '{component_id}'")
        project_path = entry.get("project_path")
        if project_path is not None and not isinstance(project_path, str):
            raise EventDecodeError(
                f"project_path of '{component_id}' must be a string"
            )
        components[component_id] = Component(
            id=ComponentIdentifier(
                display_name=component_id,
                project_path=project_path,
            ),
            module_version=_decode_module_version(entry),
        )
        repository_id = entry.get("repository_id")
        if isinstance(repository_id, str) and repository_id:
            repository_ids[component_id] = repository_id

    for entry in entries:
        component = components[entry["id"]]
        for edge in _sequence(entry, "dependencies"):
            component.dependencies.append(_decode_edge(edge, components))

    root_id = payload.get("root")
    if not isinstance(root_id, str) or root_id not in components:
        raise EventDecodeError(f"Root component '{root_id}' is not declared")
    return ResolveConfigurationResult(
        root_component=components[root_id],
        repository_ids=repository_ids,
    )


def _decode_module_version(entry: Mapping[str, Any]) -> Optional[ModuleVersion]:
    name = entry.get("name")
    version = entry.get("version")
    if name is None and version is None:
        return None
    return ModuleVersion(
        group=str(entry.get("group") or ""),
        name=str(name or ""),
        version=str(version or ""),
    )


def _decode_edge(edge: Any, components: Mapping[str, Component]) -> DependencyResult:
    if isinstance(edge, str):
        requested: Any = edge
        selected_id: Any = edge
    elif isinstance(edge, Mapping):
        requested = edge.get("requested")
        selected_id = edge.get("selected")
    else:
        raise EventDecodeError("Dependency edges must be strings or objects")

    if selected_id is None:
        return DependencyResult(requested=str(requested), selected=None)
    if not isinstance(selected_id, str):
        raise EventDecodeError(
            f"Selected component of '{requested}' must be a string id"
        )
    selected = components.get(selected_id)
    if selected is None:
        raise EventDecodeError(
            f"Dependency '{selected_id}' is not a declared component"
        )
    return DependencyResult(
        requested=str(requested or selected_id), selected=selected
    )


def _decode_project_tree(root: Mapping[str, Any]) -> ProjectNode:
    # Explicit stack so deep hierarchies do not exhaust the interpreter stack.
    root_node = _decode_project(root)
    stack: List[Tuple[Mapping[str, Any], ProjectNode]] = [(root, root_node)]
    while stack:
        payload, node = stack.pop()
        for child in _sequence(payload, "children"):
            if not isinstance(child, Mapping):
                raise EventDecodeError("Project children must be objects")
            child_node = _decode_project(child)
            node.children.append(child_node)
            stack.append((child, child_node))
    return root_node


def _decode_project(payload: Mapping[str, Any]) -> ProjectNode:
    identity_path = payload.get("identity_path")
    build_file = payload.get("build_file")
    if not isinstance(identity_path, str) or not identity_path:
        raise EventDecodeError("Projects require an identity_path")
    if not isinstance(build_file, str) or not build_file:
        raise EventDecodeError(
            f"Project '{identity_path}' requires a build_file"
        )
    return ProjectNode(identity_path=identity_path, build_file=Path(build_file))


def _require_mapping(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if not isinstance(value, Mapping):
        raise EventDecodeError(f"'{key}' must be a JSON object")
    return value


def _sequence(payload: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = payload.get(key)
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise EventDecodeError(f"'{key}' must be a JSON array")
    return value
