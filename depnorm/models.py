"""Data models for normalized dependencies."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

# Dependency scopes
SCOPE_PROD = "prod"
SCOPE_DEV = "dev"
SCOPE_PEER = "peer"
SCOPE_OPTIONAL = "optional"
SCOPE_SYSTEM = "system"
SCOPE_IMPORT = "import"
SCOPE_BUILD = "build"

ALL_SCOPES = (
    SCOPE_PROD,
    SCOPE_DEV,
    SCOPE_PEER,
    SCOPE_OPTIONAL,
    SCOPE_SYSTEM,
    SCOPE_IMPORT,
    SCOPE_BUILD,
)

# Dependency types (ecosystem tags)
DEPENDENCY_TYPE_NPM = "npm"
DEPENDENCY_TYPE_RUBY = "ruby"
DEPENDENCY_TYPE_MAVEN = "maven"
DEPENDENCY_TYPE_PYTHON = "python"
DEPENDENCY_TYPE_GOLANG = "golang"

_PEP503_SEPARATORS = re.compile(r"[-_.]+")


@dataclass
class Dependency:
    """A normalized dependency record.

    ``version`` is always the post-normalization string form: a declared
    constraint when it comes from a manifest, a pinned version when it comes
    from a lockfile. ``metadata`` is descriptive only and does not take part
    in equality.
    """

    type: str
    name: str
    version: str
    scope: str = SCOPE_PROD
    direct: bool = False
    source_file: str = ""
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def key(self) -> tuple[str, str]:
        """Identity used for deduplication."""
        return (self.type, self.name)

    def to_list(self) -> list[Any]:
        """Render the compact ``[type, name, version, scope, direct, metadata]`` form.

        The source file is folded into the metadata as ``source`` unless the
        metadata already names one.
        """
        metadata = dict(self.metadata)
        if self.source_file and "source" not in metadata:
            metadata["source"] = self.source_file
        return [self.type, self.name, self.version, self.scope, self.direct, metadata]


@dataclass
class RawPackage:
    """A package record as read from a lockfile, before filtering.

    ``dev`` and ``optional`` are the lockfile's own flags for the entry and
    only matter when the manifest does not declare the name. ``path`` is kept
    for traceability of nested entries.
    """

    name: str
    version: str
    dev: bool = False
    optional: bool = False
    bundled: bool = False
    path: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


# Aliases accepted by ManifestNameSets.from_mapping
_CATEGORY_ALIASES = {
    "prod": SCOPE_PROD,
    "dependencies": SCOPE_PROD,
    "dev": SCOPE_DEV,
    "devdependencies": SCOPE_DEV,
    "peer": SCOPE_PEER,
    "peerdependencies": SCOPE_PEER,
    "optional": SCOPE_OPTIONAL,
    "optionaldependencies": SCOPE_OPTIONAL,
}


@dataclass
class ManifestNameSets:
    """Declared dependency names of a manifest, grouped by scope category.

    An ecosystem may populate only a subset of the categories.
    """

    prod: set[str] = field(default_factory=set)
    dev: set[str] = field(default_factory=set)
    peer: set[str] = field(default_factory=set)
    optional: set[str] = field(default_factory=set)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "ManifestNameSets":
        """Build name sets from a ``category -> names`` mapping.

        Category keys are matched case-insensitively and may use either the
        scope name (``prod``, ``dev``, ...) or the package.json section name
        (``dependencies``, ``devDependencies``, ...). Unknown categories are
        ignored.
        """
        name_sets = cls()
        for category, names in mapping.items():
            scope = _CATEGORY_ALIASES.get(category.lower())
            if scope is None:
                continue
            name_sets.for_scope(scope).update(names)
        return name_sets

    def for_scope(self, scope: str) -> set[str]:
        """Return the mutable name set backing ``scope``."""
        if scope == SCOPE_PROD:
            return self.prod
        if scope == SCOPE_DEV:
            return self.dev
        if scope == SCOPE_PEER:
            return self.peer
        if scope == SCOPE_OPTIONAL:
            return self.optional
        raise ValueError(f"Unsupported manifest scope: {scope}")

    def all_names(self) -> set[str]:
        return self.prod | self.dev | self.peer | self.optional

    def is_empty(self) -> bool:
        return not (self.prod or self.dev or self.peer or self.optional)


def normalize_package_name(name: str, ecosystem: str) -> str:
    """Normalize a package name for matching across manifest and lockfile.

    Different ecosystems have different normalization rules:
    - python: case-insensitive, runs of "-", "_" and "." are equivalent (PEP 503)
    - npm: case-insensitive (scoped packages normalize scope and name together)
    - cargo: case-insensitive, "-" and "_" are equivalent
    - everything else: unchanged

    Args:
        name: Package name to normalize
        ecosystem: Dependency type ("python", "npm", ...)

    Returns:
        Normalized package name for comparison.
    """
    if ecosystem in (DEPENDENCY_TYPE_PYTHON, "pypi"):
        return _PEP503_SEPARATORS.sub("-", name).lower()
    if ecosystem == DEPENDENCY_TYPE_NPM:
        return name.lower()
    if ecosystem == "cargo":
        return name.lower().replace("-", "_")
    return name
