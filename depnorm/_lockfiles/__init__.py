"""Lockfile parsing into normalized dependencies.

Supported lockfile formats:
- JavaScript: package-lock.json, yarn.lock (classic and Berry), pnpm-lock.yaml
- Ruby: Gemfile.lock
- Java: dependency-list.txt (output of ``mvn dependency:list``)
- Python: Pipfile.lock

Example usage:
    from depnorm._lockfiles import parse_lockfile
    from depnorm.models import ManifestNameSets

    deps = parse_lockfile(
        "package-lock.json",
        content,
        ManifestNameSets(prod={"express"}, dev={"jest"}),
    )
"""

from .detection import (
    NpmLockFormat,
    PnpmLockFormat,
    YarnLockFormat,
    detect_npm_lock_format,
    detect_pnpm_lock_format,
    detect_yarn_lock_format,
    get_npm_lockfile_version,
    get_pnpm_lockfile_version,
)
from .filter import DependencyFilter
from .protocol import LockfileParser
from .registry import ParserRegistry
from .resolver import create_default_registry, parse_lockfile

__all__ = [
    # Main API
    "parse_lockfile",
    # Classes for advanced usage
    "DependencyFilter",
    "LockfileParser",
    "ParserRegistry",
    # Format detection
    "NpmLockFormat",
    "PnpmLockFormat",
    "YarnLockFormat",
    "detect_npm_lock_format",
    "detect_pnpm_lock_format",
    "detect_yarn_lock_format",
    "get_npm_lockfile_version",
    "get_pnpm_lockfile_version",
    # Factory
    "create_default_registry",
]
