"""Parser for yarn.lock files (Yarn Classic and Berry)."""

import re

from ...config import ParseOptions
from ...logging_config import logger
from ...models import DEPENDENCY_TYPE_NPM, Dependency, ManifestNameSets, RawPackage
from ..detection import YarnLockFormat, detect_yarn_lock_format
from ..filter import DependencyFilter

# "lodash@npm:^4.17.21":, "my-app@workspace:.":, "pkg@patch:pkg@npm%3A1.0.0#..."
_BERRY_HEADER = re.compile(r'^"((?:@[^/]+/)?[^@]+)@([^:]+):([^"]+)"')
_BERRY_VERSION = re.compile(r'^\s+version:\s+"?([^"\s]+)"?')
_BERRY_RESOLUTION = re.compile(r'^\s+resolution:\s+"([^"]+)"')

# "@babel/core@^7.0.0", "@babel/core@^7.1.0":   or   lodash@^4.17.21:
_CLASSIC_HEADER = re.compile(r'^"?((?:@[^/"\s]+/)?[^@"\s]+)@[^\n]*:\s*$')
# version "4.17.21"   or   version: 4.17.21
_CLASSIC_VERSION = re.compile(r'^version:?\s+"?([^"\s]+)"?')


class YarnLockParser:
    """Parser for yarn.lock files.

    Classic (v1) entries:
        "@babel/core@^7.0.0":
          version "7.22.5"
          resolved "https://registry.yarnpkg.com/..."

    Berry (v2+) entries:
        "@babel/core@npm:^7.0.0":
          version: 7.22.5
          resolution: "@babel/core@npm:7.22.5"

    yarn.lock does not record which packages are direct, so the parser
    needs the package.json name sets and returns nothing without them.
    """

    name = "yarn-lock"
    supported_files = ("yarn.lock",)
    ecosystem = DEPENDENCY_TYPE_NPM

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        if name_sets is None:
            logger.debug("Skipping yarn.lock: no package.json name sets supplied")
            return []

        text = content.decode("utf-8", errors="replace")
        lock_format = detect_yarn_lock_format(text)
        logger.debug(f"Detected yarn.lock format: {lock_format.value}")

        dep_filter = DependencyFilter(name_sets, options)
        if lock_format is YarnLockFormat.BERRY:
            packages = parse_berry_entries(text)
        else:
            packages = parse_classic_entries(text)

        for package in packages:
            dep_filter.add(self.ecosystem, package, self.supported_files[0])
        return dep_filter.dependencies


def parse_berry_entries(text: str) -> list[RawPackage]:
    """Read ``name@specType:spec`` entries; each closes at its ``version:`` line."""
    packages: list[RawPackage] = []
    current_name = ""
    current_spec_type = ""
    current_resolution = ""

    for line in text.splitlines():
        header = _BERRY_HEADER.match(line)
        if header:
            current_name, current_spec_type = header.group(1), header.group(2)
            current_resolution = ""
            continue

        if not current_name:
            continue

        version_match = _BERRY_VERSION.match(line)
        if version_match:
            version = normalize_yarn_version(version_match.group(1), current_spec_type, current_resolution)
            packages.append(
                RawPackage(
                    name=current_name,
                    version=version,
                    metadata={"spec_type": current_spec_type},
                )
            )
            current_name = ""
            continue

        resolution_match = _BERRY_RESOLUTION.match(line)
        if resolution_match:
            current_resolution = resolution_match.group(1)

    return packages


def parse_classic_entries(text: str) -> list[RawPackage]:
    """Read ``"name@range":`` entries; each closes at its ``version`` line."""
    packages: list[RawPackage] = []
    current_name = ""

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        # The closing version line may be indented or not
        if current_name:
            version_match = _CLASSIC_VERSION.match(stripped)
            if version_match:
                packages.append(RawPackage(name=current_name, version=version_match.group(1)))
                current_name = ""
                continue

        if not line[0].isspace():
            header = _CLASSIC_HEADER.match(stripped)
            current_name = header.group(1) if header else ""

    return packages


def normalize_yarn_version(version: str, spec_type: str, resolution: str) -> str:
    """
    Normalize a Berry entry's version by its specifier protocol.

    Args:
        version: Value of the entry's ``version:`` line
        spec_type: Protocol from the entry header (npm, workspace, patch, git, file, tarball)
        resolution: Value of a ``resolution:`` line seen before the version, if any

    Returns:
        Normalized version string
    """
    version = version.strip()

    if spec_type == "workspace":
        return "workspace"
    if spec_type == "patch":
        return "patch"
    if spec_type == "git":
        return f"git:{resolution}" if resolution else "git"
    if spec_type == "file":
        return "local"
    if spec_type == "tarball":
        return "local" if resolution.startswith("file:") else "tarball"

    # npm and unknown protocols keep the version as written
    if version in ("", "*"):
        return "latest"
    return version
