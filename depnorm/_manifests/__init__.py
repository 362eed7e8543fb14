"""Manifest parsing: declared dependencies and name sets.

The name sets feed the lockfile parsers, which use them to tell direct
dependencies from transitive ones.
"""

from ..models import ManifestNameSets
from .gemfile import GemfileParser
from .package_json import (
    get_workspace_patterns,
    is_workspace_project,
    parse_package_json,
    parse_package_json_name_sets,
)

__all__ = [
    "GemfileParser",
    "ManifestNameSets",
    "get_workspace_patterns",
    "is_workspace_project",
    "parse_package_json",
    "parse_package_json_name_sets",
]
