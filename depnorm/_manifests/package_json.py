"""Declared dependencies of package.json manifests."""

import json
from typing import Any

from .._versioning import normalize_npm_version
from ..logging_config import logger
from ..models import (
    DEPENDENCY_TYPE_NPM,
    SCOPE_DEV,
    SCOPE_OPTIONAL,
    SCOPE_PEER,
    SCOPE_PROD,
    Dependency,
    ManifestNameSets,
)

SOURCE_FILE = "package.json"

# package.json section -> scope, in the order sections are reported
_SECTIONS = (
    ("dependencies", SCOPE_PROD),
    ("devDependencies", SCOPE_DEV),
    ("peerDependencies", SCOPE_PEER),
    ("optionalDependencies", SCOPE_OPTIONAL),
)


def _load(content: bytes | str) -> dict[str, Any]:
    try:
        data = json.loads(content)
    except ValueError as e:
        logger.debug(f"Malformed package.json: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def parse_package_json_name_sets(content: bytes | str) -> ManifestNameSets:
    """Collect the names declared in each dependency section.

    Malformed JSON yields empty name sets.
    """
    data = _load(content)
    name_sets = ManifestNameSets()
    for key, scope in _SECTIONS:
        name_sets.for_scope(scope).update(_section(data, key))
    return name_sets


def parse_package_json(content: bytes | str) -> list[Dependency]:
    """
    Parse the declared dependencies of a package.json.

    Every entry is direct. Versions are the declared specifiers passed
    through normalize_npm_version, so ranges stay as written.

    Returns:
        One Dependency per declared name, in section order.
    """
    data = _load(content)
    dependencies: list[Dependency] = []
    for key, scope in _SECTIONS:
        for name, specifier in _section(data, key).items():
            dependencies.append(
                Dependency(
                    type=DEPENDENCY_TYPE_NPM,
                    name=name,
                    version=normalize_npm_version(str(specifier or "")),
                    scope=scope,
                    direct=True,
                    source_file=SOURCE_FILE,
                )
            )
    return dependencies


def get_workspace_patterns(content: bytes | str) -> list[str]:
    """Return the ``workspaces`` globs of a package.json.

    Both the array form and the ``{"packages": [...]}`` object form are read.
    """
    workspaces = _load(content).get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [pattern for pattern in workspaces if isinstance(pattern, str)]


def is_workspace_project(content: bytes | str) -> bool:
    data = _load(content)
    if isinstance(data.get("workspace"), str):
        return True
    return bool(get_workspace_patterns(content))
