"""Line-oriented parser for Ruby Gemfiles."""

import re
from typing import Any

from ..logging_config import logger
from ..models import DEPENDENCY_TYPE_RUBY, SCOPE_DEV, SCOPE_PROD, Dependency, ManifestNameSets

_GEM_WITH_VERSION = re.compile(r"""gem ['"]([^'"]+)['"],\s*['"]([^'"]+)['"]""")
_GEM_WITHOUT_VERSION = re.compile(r"""gem ['"]([^'"]+)['"]""")
_GROUP_BLOCK = re.compile(r"^group\b(.*?)\s*\bdo\b")
_GROUP_NAME = re.compile(r"""^:?['"]?(\w+)['"]?$""")
_GIT = re.compile(r"""git:\s*['"]([^'"]+)['"]""")
_BRANCH = re.compile(r"""branch:\s*['"]([^'"]+)['"]""")
_PATH = re.compile(r"""path:\s*['"]([^'"]+)['"]""")
_PLATFORMS = re.compile(r"platforms?:\s*\[([^\]]+)\]")

# Gems in any of these groups are development dependencies
_DEV_GROUPS = ("test", "development")

SOURCE_FILE = "Gemfile"


class GemfileParser:
    """Parser for Gemfile manifests.

    Reads ``gem`` declarations line by line and tracks ``group ... do``
    blocks to assign scopes:

        gem 'rails', '~> 7.1'

        group :development, :test do
          gem 'rspec-rails'
        end

    Gems without a version constraint get ``latest``.
    """

    def parse(self, content: bytes | str) -> list[Dependency]:
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content

        dependencies: list[Dependency] = []
        # One entry per open group block; the innermost block is active
        group_stack: list[list[str]] = []

        for raw_line in text.splitlines():
            line = raw_line.strip()

            group = _GROUP_BLOCK.match(line)
            if group:
                group_stack.append(_group_names(group.group(1)))
                continue

            if line == "end" and group_stack:
                group_stack.pop()
                continue

            groups = group_stack[-1] if group_stack else []

            if not line or line.startswith("#"):
                continue

            match = _GEM_WITH_VERSION.search(line)
            if match:
                gem_name, version = match.group(1), match.group(2)
            else:
                match = _GEM_WITHOUT_VERSION.search(line)
                if not match:
                    continue
                gem_name, version = match.group(1), "latest"

            dependencies.append(
                Dependency(
                    type=DEPENDENCY_TYPE_RUBY,
                    name=gem_name,
                    version=version,
                    scope=map_gemfile_groups_to_scope(groups),
                    direct=True,
                    source_file=SOURCE_FILE,
                    metadata=_gem_metadata(line, groups),
                )
            )

        logger.debug(f"Gemfile: {len(dependencies)} gem(s)")
        return dependencies

    def name_sets(self, content: bytes | str) -> ManifestNameSets:
        """Declared gem names, split into prod and dev by group."""
        name_sets = ManifestNameSets()
        for dependency in self.parse(content):
            name_sets.for_scope(dependency.scope).add(dependency.name)
        return name_sets


def _group_names(declaration: str) -> list[str]:
    """
    Read group names from the text between ``group`` and ``do``.

    ":development, :test" -> ["development", "test"]; options such as
    "optional: true" are skipped.
    """
    names = []
    for item in declaration.split(","):
        match = _GROUP_NAME.match(item.strip())
        if match:
            names.append(match.group(1))
    return names


def map_gemfile_groups_to_scope(groups: list[str]) -> str:
    if any(group in _DEV_GROUPS for group in groups):
        return SCOPE_DEV
    return SCOPE_PROD


def _gem_metadata(line: str, groups: list[str]) -> dict[str, Any]:
    metadata: dict[str, Any] = {"source": SOURCE_FILE}
    if groups:
        metadata["groups"] = list(groups)

    for key, pattern in (("git", _GIT), ("branch", _BRANCH), ("path", _PATH)):
        match = pattern.search(line)
        if match:
            metadata[key] = match.group(1)

    if "require: false" in line or "require:false" in line:
        metadata["require"] = False

    match = _PLATFORMS.search(line)
    if match:
        platforms = [p.strip().strip(":").strip("\"'") for p in match.group(1).split(",")]
        platforms = [p for p in platforms if p]
        if platforms:
            metadata["platforms"] = platforms

    return metadata
