"""Structural sniffing of lockfile format generations.

The same lockfile name can hold several incompatible schema generations, so
parsers pick their walking strategy from the content rather than the name.
"""

import json
from enum import Enum
from typing import Any

import yaml

from ..logging_config import logger


class NpmLockFormat(Enum):
    """package-lock.json layouts."""

    PACKAGES = "packages"  # lockfileVersion 2/3: flat map keyed by node_modules paths
    DEPENDENCIES = "dependencies"  # lockfileVersion 1: nested dependency tree
    UNKNOWN = "unknown"


class YarnLockFormat(Enum):
    """yarn.lock grammars."""

    CLASSIC = "classic"  # yarn v1
    BERRY = "berry"  # yarn v2+


class PnpmLockFormat(Enum):
    """pnpm-lock.yaml layouts."""

    V9 = "v9"  # populated packages table
    V6 = "v6"  # importers only
    UNKNOWN = "unknown"


_BERRY_MARKERS = ("__metadata:", "specifiers", "@workspace:", "@patch:")


def detect_npm_lock_format(data: Any) -> NpmLockFormat:
    """Classify decoded package-lock.json data."""
    if not isinstance(data, dict):
        return NpmLockFormat.UNKNOWN
    packages = data.get("packages")
    if isinstance(packages, dict) and packages:
        return NpmLockFormat.PACKAGES
    dependencies = data.get("dependencies")
    if isinstance(dependencies, dict) and dependencies:
        return NpmLockFormat.DEPENDENCIES
    return NpmLockFormat.UNKNOWN


def get_npm_lockfile_version(content: bytes | str) -> int:
    """Return ``lockfileVersion`` of a package-lock.json, 1 when it cannot be read."""
    try:
        data = json.loads(content)
    except ValueError:
        return 1
    if not isinstance(data, dict):
        return 1
    version = data.get("lockfileVersion")
    if isinstance(version, bool) or not isinstance(version, int):
        return 1
    return version


def detect_yarn_lock_format(content: str) -> YarnLockFormat:
    """Classify yarn.lock text as Classic or Berry."""
    # Classic lockfiles may reference npm aliases but never carry __metadata
    if '"@npm:' in content and "__metadata:" not in content:
        return YarnLockFormat.CLASSIC
    if any(marker in content for marker in _BERRY_MARKERS):
        return YarnLockFormat.BERRY
    return YarnLockFormat.CLASSIC


def detect_pnpm_lock_format(data: Any) -> PnpmLockFormat:
    """Classify decoded pnpm-lock.yaml data."""
    if not isinstance(data, dict):
        return PnpmLockFormat.UNKNOWN
    packages = data.get("packages")
    if isinstance(packages, dict) and packages:
        return PnpmLockFormat.V9
    importers = data.get("importers")
    if isinstance(importers, dict) and importers:
        return PnpmLockFormat.V6
    return PnpmLockFormat.UNKNOWN


def get_pnpm_lockfile_version(content: bytes | str) -> str:
    """Return ``lockfileVersion`` of a pnpm-lock.yaml as a string, "6" when it cannot be read."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug(f"Could not read pnpm lockfileVersion: {e}")
        return "6"
    if not isinstance(data, dict) or data.get("lockfileVersion") is None:
        return "6"
    return str(data["lockfileVersion"])
