"""Scope resolution and direct/transitive filtering of lockfile records."""

from collections.abc import Callable

from ..config import ParseOptions
from ..models import (
    SCOPE_DEV,
    SCOPE_OPTIONAL,
    SCOPE_PEER,
    SCOPE_PROD,
    Dependency,
    ManifestNameSets,
    RawPackage,
)

# Checked in this order; the first declared set containing the name wins
_SCOPE_PRIORITY = (SCOPE_PEER, SCOPE_OPTIONAL, SCOPE_DEV, SCOPE_PROD)


def _identity(name: str) -> str:
    return name


class DependencyFilter:
    """Turns raw lockfile records into final dependencies.

    Built per parse call from the manifest's declared name sets. For each
    record it skips bundled entries, resolves the scope, applies the
    direct/transitive inclusion policy and drops repeated ``(type, name)``
    pairs, keeping the first one seen.

    ``name_key`` maps a name to the form used for matching, for ecosystems
    where manifests and lockfiles spell the same package differently.

    Example:
        dep_filter = DependencyFilter(name_sets, options)
        for package in raw_packages:
            dep_filter.add("npm", package, "package-lock.json")
        return dep_filter.dependencies
    """

    def __init__(
        self,
        name_sets: ManifestNameSets | None = None,
        options: ParseOptions | None = None,
        name_key: Callable[[str], str] | None = None,
    ) -> None:
        self._options = options or ParseOptions()
        self._key = name_key or _identity
        self._declared = ManifestNameSets()
        self._seen: set[tuple[str, str]] = set()
        self.dependencies: list[Dependency] = []
        if name_sets is not None:
            self.add_name_sets(name_sets)

    @property
    def include_transitive(self) -> bool:
        return self._options.include_transitive

    @property
    def direct_names(self) -> set[str]:
        return self._declared.all_names()

    def add_direct_dependency(self, name: str, scope: str = SCOPE_PROD) -> None:
        """Declare ``name`` as a direct dependency in ``scope``."""
        self._declared.for_scope(scope).add(self._key(name))

    def add_name_sets(self, name_sets: ManifestNameSets) -> None:
        for scope in _SCOPE_PRIORITY:
            for name in name_sets.for_scope(scope):
                self.add_direct_dependency(name, scope)

    def is_direct(self, name: str) -> bool:
        key = self._key(name)
        return any(key in self._declared.for_scope(scope) for scope in _SCOPE_PRIORITY)

    def resolve_scope(self, package: RawPackage) -> str:
        """Resolve the scope of a record.

        Declared sets win in ``peer > optional > dev > prod`` order. Names
        the manifest does not declare fall back to the record's own flags,
        then to ``prod``.
        """
        key = self._key(package.name)
        for scope in _SCOPE_PRIORITY:
            if key in self._declared.for_scope(scope):
                return scope
        if package.optional:
            return SCOPE_OPTIONAL
        if package.dev:
            return SCOPE_DEV
        return SCOPE_PROD

    def should_include(self, name: str) -> bool:
        return self.include_transitive or self.is_direct(name)

    def add(self, dependency_type: str, package: RawPackage, source_file: str) -> Dependency | None:
        """
        Filter one record and append the resulting dependency.

        Returns:
            The appended Dependency, or None when the record was skipped.
        """
        if package.bundled or not package.name:
            return None
        if not self.should_include(package.name):
            return None

        seen_key = (dependency_type, self._key(package.name))
        if seen_key in self._seen:
            return None
        self._seen.add(seen_key)

        dependency = Dependency(
            type=dependency_type,
            name=package.name,
            version=package.version,
            scope=self.resolve_scope(package),
            direct=self.is_direct(package.name),
            source_file=source_file,
            metadata=dict(package.metadata),
        )
        self.dependencies.append(dependency)
        return dependency
