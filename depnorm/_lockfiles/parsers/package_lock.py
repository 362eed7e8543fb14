"""Parser for package-lock.json files (npm)."""

import json
from typing import Any

from ...config import ParseOptions
from ...logging_config import logger
from ...models import DEPENDENCY_TYPE_NPM, Dependency, ManifestNameSets, RawPackage
from ..detection import NpmLockFormat, detect_npm_lock_format
from ..filter import DependencyFilter

NODE_MODULES = "node_modules/"

# Root package sections of lockfileVersion 2/3, mirrored from package.json
_ROOT_SECTIONS = {
    "dependencies": "prod",
    "devDependencies": "dev",
    "peerDependencies": "peer",
    "optionalDependencies": "optional",
}


class PackageLockParser:
    """Parser for package-lock.json files.

    package-lock.json v2/v3 is a JSON file with structure:
    {
        "packages": {
            "": {"dependencies": {...}, "devDependencies": {...}},
            "node_modules/package-name": {
                "version": "1.2.3",
                "dev": true
            },
            "node_modules/package-name/node_modules/nested": {...}
        }
    }

    v1 uses a nested "dependencies" tree instead of "packages".
    """

    name = "npm-package-lock"
    supported_files = ("package-lock.json",)
    ecosystem = DEPENDENCY_TYPE_NPM

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        """Parse package-lock.json content.

        The direct set is the caller's manifest names plus the names the
        root package entry declares (v2/v3 lockfiles copy package.json into
        the ``""`` entry).

        Args:
            content: Raw package-lock.json bytes
            name_sets: Declared names from package.json
            options: Inclusion options

        Returns:
            List of npm dependencies.
        """
        try:
            data = json.loads(content)
        except ValueError as e:
            logger.debug(f"Malformed package-lock.json: {e}")
            return []

        lock_format = detect_npm_lock_format(data)
        logger.debug(f"Detected package-lock.json format: {lock_format.value}")

        dep_filter = DependencyFilter(name_sets, options)

        if lock_format is NpmLockFormat.PACKAGES:
            self._add_root_declarations(data["packages"].get(""), dep_filter)
            self._parse_packages(data["packages"], dep_filter, options)
        elif lock_format is NpmLockFormat.DEPENDENCIES:
            if options.include_transitive:
                self._parse_dependencies(data["dependencies"], "", dep_filter, options, depth=0, ancestors=set())
            else:
                for name, pkg_data in data["dependencies"].items():
                    if isinstance(pkg_data, dict):
                        dep_filter.add(self.ecosystem, self._raw_package(name, pkg_data, ""), self.supported_files[0])

        return dep_filter.dependencies

    @staticmethod
    def _add_root_declarations(root: Any, dep_filter: DependencyFilter) -> None:
        if not isinstance(root, dict):
            return
        for section, scope in _ROOT_SECTIONS.items():
            declared = root.get(section)
            if isinstance(declared, dict):
                for name in declared:
                    dep_filter.add_direct_dependency(name, scope)

    def _parse_packages(self, packages: dict, dep_filter: DependencyFilter, options: ParseOptions) -> None:
        """Parse the v2/v3 ``packages`` map."""
        for pkg_path, pkg_data in packages.items():
            # Skip the root package (empty path)
            if not pkg_path or not isinstance(pkg_data, dict):
                continue

            name = extract_name_from_node_modules_path(pkg_path)
            if not name:
                continue

            # Without transitive mode only top-level installs are considered
            if not options.include_transitive and pkg_path.count(NODE_MODULES) != 1:
                continue

            dep_filter.add(self.ecosystem, self._raw_package(name, pkg_data, pkg_path), self.supported_files[0])

    def _parse_dependencies(
        self,
        dependencies: dict,
        path: str,
        dep_filter: DependencyFilter,
        options: ParseOptions,
        depth: int,
        ancestors: set[int],
    ) -> None:
        """Walk the v1 nested ``dependencies`` tree.

        Nested trees are bounded by ``options.max_depth``. A nested mapping
        that is already on the current path is not entered again; repeated
        ``name@version`` copies in different places are all walked.
        """
        if depth >= options.max_depth:
            logger.debug(f"Stopping package-lock.json walk at depth {depth}: {path}")
            return

        for name, pkg_data in dependencies.items():
            if not isinstance(pkg_data, dict):
                continue

            package = self._raw_package(name, pkg_data, path)
            dep_filter.add(self.ecosystem, package, self.supported_files[0])

            nested = pkg_data.get("dependencies")
            if not isinstance(nested, dict) or not nested or package.bundled:
                continue

            identity = id(nested)
            if identity in ancestors:
                continue

            nested_path = f"{path}{NODE_MODULES}{name}/"
            self._parse_dependencies(nested, nested_path, dep_filter, options, depth + 1, ancestors | {identity})

    @staticmethod
    def _raw_package(name: str, pkg_data: dict, path: str) -> RawPackage:
        version = pkg_data.get("version")
        return RawPackage(
            name=name,
            version=version if isinstance(version, str) else "",
            dev=bool(pkg_data.get("dev")),
            optional=bool(pkg_data.get("optional")),
            bundled=bool(pkg_data.get("bundled") or pkg_data.get("inBundle")),
            path=path,
        )


def extract_name_from_node_modules_path(pkg_path: str) -> str:
    """
    Extract the package name from a package-lock.json path.

    "node_modules/express" -> "express"
    "node_modules/@babel/core" -> "@babel/core"
    "node_modules/express/node_modules/accepts" -> "accepts"
    """
    segments = pkg_path.split(NODE_MODULES)
    if len(segments) < 2:
        return ""

    last_segment = segments[-1].strip()
    if not last_segment:
        return ""

    parts = last_segment.split("/")
    if last_segment.startswith("@") and len(parts) >= 2:
        return "/".join(parts[:2])
    return parts[0]
