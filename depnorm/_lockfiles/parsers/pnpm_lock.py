"""Parser for pnpm-lock.yaml files (pnpm)."""

from typing import Any

import yaml

from ...config import ParseOptions
from ...logging_config import logger
from ...models import (
    DEPENDENCY_TYPE_NPM,
    SCOPE_DEV,
    SCOPE_OPTIONAL,
    SCOPE_PROD,
    Dependency,
    ManifestNameSets,
    RawPackage,
)
from ..detection import PnpmLockFormat, detect_pnpm_lock_format
from ..filter import DependencyFilter

ROOT_IMPORTER = "."

_IMPORTER_SECTIONS = {
    "dependencies": SCOPE_PROD,
    "devDependencies": SCOPE_DEV,
    "optionalDependencies": SCOPE_OPTIONAL,
}


class PnpmLockParser:
    """Parser for pnpm-lock.yaml files.

    pnpm-lock.yaml with a packages table (v9+):
    importers:
      .:
        dependencies:
          express: {specifier: ^4.18.0, version: 4.18.2}
    packages:
      express@4.18.2:
        resolution: {integrity: sha512-...}
      '@babel/core@7.22.5':
        resolution: {integrity: sha512-...}
        dev: true

    Importers only (v6 shape): the root importer lists its dependencies
    with inline versions and there is no packages table.
    """

    name = "pnpm-lock"
    supported_files = ("pnpm-lock.yaml",)
    ecosystem = DEPENDENCY_TYPE_NPM

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        """Parse pnpm-lock.yaml content.

        The root importer's sections are added to the direct set on top of
        the caller's manifest names.

        Args:
            content: Raw pnpm-lock.yaml bytes
            name_sets: Declared names from package.json
            options: Inclusion options

        Returns:
            List of npm dependencies.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.debug(f"Malformed pnpm-lock.yaml: {e}")
            return []

        if not isinstance(data, dict):
            return []

        lock_format = detect_pnpm_lock_format(data)
        logger.debug(f"Detected pnpm-lock.yaml format: {lock_format.value}")

        root_importer = self._root_importer(data)
        dep_filter = DependencyFilter(name_sets, options)
        for section, scope in _IMPORTER_SECTIONS.items():
            for name in _mapping(root_importer.get(section)):
                dep_filter.add_direct_dependency(name, scope)

        if lock_format is PnpmLockFormat.V9:
            self._parse_packages(data["packages"], dep_filter)
        else:
            self._parse_importer(root_importer, dep_filter)

        return dep_filter.dependencies

    @staticmethod
    def _root_importer(data: dict) -> dict:
        importers = _mapping(data.get("importers"))
        if ROOT_IMPORTER in importers:
            return _mapping(importers[ROOT_IMPORTER])
        # Single-project lockfiles keep the root sections at the top level
        return data

    def _parse_packages(self, packages: dict, dep_filter: DependencyFilter) -> None:
        for pkg_key, pkg_data in packages.items():
            if not isinstance(pkg_key, str):
                continue
            pkg_data = _mapping(pkg_data)

            name = extract_package_name_from_pnpm_path(pkg_key)
            if not name:
                continue

            raw_version = pkg_data.get("version")
            if not isinstance(raw_version, str) or not raw_version:
                raw_version = _version_from_key(pkg_key)

            package = RawPackage(
                name=name,
                version=parse_pnpm_version(raw_version, _mapping(pkg_data.get("resolution"))),
                dev=bool(pkg_data.get("dev")),
                optional=bool(pkg_data.get("optional")),
                path=pkg_key,
            )
            dep_filter.add(self.ecosystem, package, self.supported_files[0])

    def _parse_importer(self, importer: dict, dep_filter: DependencyFilter) -> None:
        for section in _IMPORTER_SECTIONS:
            for name, dep in _mapping(importer.get(section)).items():
                # v6+ entries are {specifier, version}; older lockfiles use a bare version
                if isinstance(dep, dict):
                    raw_version = dep.get("version", "")
                else:
                    raw_version = dep
                raw_version = "" if raw_version is None else str(raw_version)

                package = RawPackage(name=str(name), version=parse_pnpm_version(raw_version, {}))
                dep_filter.add(self.ecosystem, package, self.supported_files[0])


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _strip_key(pkg_key: str) -> str:
    key = pkg_key[1:] if pkg_key.startswith("/") else pkg_key
    # Remove peer dependency suffix: "react-dom@18.2.0(react@18.2.0)"
    return key.split("(", 1)[0]


def _version_from_key(pkg_key: str) -> str:
    key = _strip_key(pkg_key)
    # Find the @ that separates name from version
    at_pos = key.find("@", 1) if key.startswith("@") else key.find("@")
    if at_pos == -1:
        # pnpm v5 keys separate name and version with "/": "lodash/4.17.21"
        name, _, version = key.rpartition("/")
        return version if name else ""
    return key[at_pos + 1 :]


def extract_package_name_from_pnpm_path(pkg_key: str) -> str:
    """
    Extract the package name from a pnpm packages key.

    "express@4.18.2" -> "express"
    "/@babel/core@7.22.5" -> "@babel/core"
    "/lodash/4.17.21" -> "lodash"
    "./packages/ui" -> "ui"
    """
    # Workspace packages are keyed by relative path
    if pkg_key.startswith("."):
        parts = pkg_key.split("/")
        for i, part in enumerate(parts):
            if part == "packages" and i + 1 < len(parts):
                return parts[i + 1]
        return ""

    parts = _strip_key(pkg_key).split("/")
    if parts[0].startswith("@") and len(parts) > 1:
        return parts[0] + "/" + parts[1].split("@", 1)[0]
    return parts[0].split("@", 1)[0]


def parse_pnpm_version(version: str, resolution: dict) -> str:
    """
    Normalize a pnpm version using its resolution.

    Args:
        version: Version as recorded in the lockfile
        resolution: The package's ``resolution`` mapping (may be empty)

    Returns:
        "workspace", "git:<url>", "local", "tarball", "latest" or the version as written
    """
    if resolution.get("directory"):
        return "workspace"
    if resolution.get("git"):
        return f"git:{resolution['git']}"
    tarball = resolution.get("tarball")
    if tarball:
        return "local" if str(tarball).startswith("file:") else "tarball"

    version = version.strip()
    if version in ("", "*"):
        return "latest"
    return version
