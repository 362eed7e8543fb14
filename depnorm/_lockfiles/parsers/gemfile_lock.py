"""Parser for Gemfile.lock files (Ruby Bundler)."""

import re
from typing import Any

from ...config import ParseOptions
from ...logging_config import logger
from ...models import DEPENDENCY_TYPE_RUBY, SCOPE_PROD, Dependency, ManifestNameSets, RawPackage
from ..filter import DependencyFilter

# Top-level specs are indented by exactly four spaces: "    rails (7.1.0)".
# Their own dependencies sit at six spaces and are ignored.
_SPEC_LINE = re.compile(r"^\s{4}(\S+)\s+\(([^)]+)\)")
_REMOTE_LINE = re.compile(r"^\s{2}(remote|revision|branch|ref|tag):\s*(\S+)")

# Sections whose specs are resolved gems
_SPEC_SECTIONS = ("GEM", "GIT", "PATH")

SOURCE_FILE = "Gemfile.lock"


class GemfileLockParser:
    """Parser for Gemfile.lock files.

    Gemfile.lock structure:
    GEM
      remote: https://rubygems.org/
      specs:
        actionpack (7.1.0)
          rack (>= 2.2.4)
        rails (7.1.0)
          actionpack (= 7.1.0)

    PLATFORMS
      ruby

    DEPENDENCIES
      rails (~> 7.1)

    BUNDLED WITH
       2.4.10

    DEPENDENCIES names the direct gems. Every lockfile entry has scope
    ``prod``: group membership only exists in the Gemfile.
    """

    name = "gemfile-lock"
    supported_files = ("Gemfile.lock",)
    ecosystem = DEPENDENCY_TYPE_RUBY

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        """Parse Gemfile.lock content.

        ``name_sets`` is not consulted: the DEPENDENCIES section is the
        authoritative direct set for a Gemfile.lock.
        """
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
        lines = text.splitlines()

        direct_names = parse_direct_dependencies(lines)
        dep_filter = DependencyFilter(options=options)
        for gem_name in direct_names:
            dep_filter.add_direct_dependency(gem_name, SCOPE_PROD)

        for package in parse_specs(lines):
            package.metadata["direct"] = package.name in direct_names
            dep_filter.add(self.ecosystem, package, SOURCE_FILE)

        logger.debug(f"Gemfile.lock: {len(direct_names)} direct gem(s), {len(dep_filter.dependencies)} kept")
        return dep_filter.dependencies

    def parse_with_metadata(
        self,
        content: bytes,
        options: ParseOptions,
    ) -> tuple[list[Dependency], dict[str, Any]]:
        """Parse Gemfile.lock and also return lockfile-level metadata.

        Returns:
            (dependencies, metadata) where metadata may hold ``platforms``
            and ``bundler_version``.
        """
        dependencies = self.parse(content, None, options)

        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content
        sections = _split_sections(text.splitlines())

        metadata: dict[str, Any] = {}
        platforms = [line.strip() for line in sections.get("PLATFORMS", []) if line.strip()]
        if platforms:
            metadata["platforms"] = platforms

        bundler_lines = [line.strip() for line in sections.get("BUNDLED WITH", []) if line.strip()]
        if bundler_lines:
            metadata["bundler_version"] = bundler_lines[0]

        return dependencies, metadata


def _split_sections(lines: list[str]) -> dict[str, list[str]]:
    """Group indented lines under the unindented section header above them."""
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    for line in lines:
        if not line.strip():
            continue
        if not line[0].isspace():
            current = sections.setdefault(line.strip(), [])
            continue
        if current is not None:
            current.append(line)
    return sections


def parse_direct_dependencies(lines: list[str]) -> set[str]:
    """
    Extract direct gem names from the DEPENDENCIES section.

    "  rails (~> 7.1)" -> "rails"; "  my_gem!" -> "my_gem"
    """
    direct: set[str] = set()
    for line in _split_sections(lines).get("DEPENDENCIES", []):
        parts = line.split()
        if parts:
            # Gems from git/path sources carry a trailing "!"
            gem_name = parts[0].rstrip("!")
            if gem_name:
                direct.add(gem_name)
    return direct


def parse_specs(lines: list[str]) -> list[RawPackage]:
    """Read the resolved top-level specs of the GEM, GIT and PATH sections."""
    packages: list[RawPackage] = []
    section = ""
    source: dict[str, str] = {}

    for line in lines:
        if not line.strip():
            continue

        if not line[0].isspace():
            section = line.strip()
            source = {}
            continue

        if section not in _SPEC_SECTIONS:
            continue

        remote = _REMOTE_LINE.match(line)
        if remote:
            source[remote.group(1)] = remote.group(2)
            continue

        spec = _SPEC_LINE.match(line)
        if not spec:
            continue

        metadata: dict[str, Any] = {"source": SOURCE_FILE}
        if section != "GEM":
            metadata["source_type"] = section.lower()
            metadata.update(source)

        packages.append(RawPackage(name=spec.group(1), version=spec.group(2), metadata=metadata))

    return packages
