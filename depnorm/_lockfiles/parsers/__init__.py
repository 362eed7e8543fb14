"""Lockfile dependency parsers for various ecosystems."""

from .gemfile_lock import GemfileLockParser
from .maven_dependency_list import MavenDependencyListParser
from .package_lock import PackageLockParser
from .pipfile_lock import PipfileLockParser
from .pnpm_lock import PnpmLockParser
from .yarn_lock import YarnLockParser

__all__ = [
    "GemfileLockParser",
    "MavenDependencyListParser",
    "PackageLockParser",
    "PipfileLockParser",
    "PnpmLockParser",
    "YarnLockParser",
]
