"""Parser for Pipfile.lock files (Python Pipenv)."""

import json

from ..._versioning import PyPI, normalize
from ...config import ParseOptions
from ...logging_config import logger
from ...models import (
    DEPENDENCY_TYPE_PYTHON,
    Dependency,
    ManifestNameSets,
    RawPackage,
    normalize_package_name,
)
from ..filter import DependencyFilter


class PipfileLockParser:
    """Parser for Pipfile.lock files.

    Pipfile.lock is a JSON file with structure:
    {
        "default": {
            "package-name": {
                "hashes": ["sha256:...", "sha256:..."],
                "version": "==1.2.3"
            },
            "vcs-package": {"git": "https://...", "ref": "abc123"}
        },
        "develop": { ... }
    }

    Both sections hold the full resolved closure, so directness comes from
    the Pipfile name sets. Entries of the ``develop`` section are flagged
    dev for names the Pipfile does not declare.
    """

    name = "pipfile-lock"
    supported_files = ("Pipfile.lock",)
    ecosystem = DEPENDENCY_TYPE_PYTHON

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        try:
            data = json.loads(content)
        except ValueError as e:
            logger.debug(f"Malformed Pipfile.lock: {e}")
            return []

        if not isinstance(data, dict):
            return []

        dep_filter = DependencyFilter(name_sets, options, name_key=_pypi_name_key)

        # Process both default and develop sections
        for section in ["default", "develop"]:
            packages = data.get(section)
            if not isinstance(packages, dict):
                continue
            for name, pkg_data in packages.items():
                if not isinstance(pkg_data, dict):
                    continue
                package = self._raw_package(name, pkg_data)
                package.dev = section == "develop"
                dep_filter.add(self.ecosystem, package, self.supported_files[0])

        return dep_filter.dependencies

    @staticmethod
    def _raw_package(name: str, pkg_data: dict) -> RawPackage:
        metadata: dict[str, object] = {}

        if pkg_data.get("git"):
            metadata["git"] = pkg_data["git"]
            if pkg_data.get("ref"):
                metadata["ref"] = pkg_data["ref"]
            version = f"git:{pkg_data['git']}"
        elif pkg_data.get("path") or pkg_data.get("file"):
            metadata["path"] = pkg_data.get("path") or pkg_data.get("file")
            version = "local"
        else:
            # Version has == prefix, e.g., "==5.1.1"
            version = str(pkg_data.get("version") or "")
            if version.startswith("=="):
                version = version[2:]
            elif version.startswith("="):
                version = version[1:]
            version = normalize(PyPI, version) if version else "latest"

        if pkg_data.get("editable"):
            metadata["editable"] = True
        if pkg_data.get("markers"):
            metadata["markers"] = pkg_data["markers"]

        return RawPackage(name=name, version=version, metadata=metadata)


def _pypi_name_key(name: str) -> str:
    return normalize_package_name(name, DEPENDENCY_TYPE_PYTHON)
