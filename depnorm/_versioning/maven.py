"""Maven version canonicalization.

Based on https://maven.apache.org/pom.html#Dependency_Version_Requirement_Specification

Ordering is a plain string comparison of the canonical forms. It is not full
Maven ordering: "1.0.0-snapshot" sorts after "1.0.0" here.
"""

import re
from dataclasses import dataclass

from ..exceptions import VersionParseError
from .protocol import OrderedVersion

SYSTEM_NAME = "Maven"

# Patterns are applied with fullmatch and ASCII digits only.

# [1.0,2.0), (1.0,2.0], [1.0,], (,2.0]
_RANGE_PATTERN = re.compile(r"[\[(]([^,\]]*),([^\])]*)[\])]", re.ASCII)

# 1.0.0-RELEASE, 1.0.0.FINAL, 1.0.0-SNAPSHOT, 1.0-M1
_QUALIFIER_PATTERN = re.compile(
    r"(\d+(?:\.\d+)*)(?:[-.]?(RELEASE|FINAL|SNAPSHOT|GA|BUILD|SP|RC|M\d+|PRE))?", re.ASCII
)

# 1.0.0-20131201.121010-1
_TIMESTAMP_PATTERN = re.compile(r"(\d+(?:\.\d+)*)(?:[-.]?(\d{8}\.\d{6})-(\d+))?", re.ASCII)

_DROPPED_QUALIFIERS = {"RELEASE", "FINAL", "GA"}


@dataclass(frozen=True, eq=False)
class MavenVersion(OrderedVersion):
    """A Maven version or version range in canonical form."""

    original: str
    canonical: str
    is_range: bool = False

    def canon(self, include_epoch: bool = True) -> str:
        return self.canonical

    def sort_key(self) -> tuple:
        return (self.canonical,)

    def __str__(self) -> str:
        return self.original


class MavenSystem:
    """Maven versioning system."""

    name = SYSTEM_NAME

    def parse(self, version: str) -> MavenVersion:
        return parse_maven_version(version)


def parse_maven_version(version: str) -> MavenVersion:
    """
    Parse and canonicalize a Maven version or version range.

    Raises:
        VersionParseError: If the string is empty
    """
    if not version:
        raise VersionParseError(SYSTEM_NAME, version, "empty version string")

    if is_maven_version_range(version):
        return MavenVersion(original=version, canonical=canonicalize_maven_range(version), is_range=True)
    return MavenVersion(original=version, canonical=canonicalize_maven_version(version))


def is_maven_version_range(version: str) -> bool:
    return _RANGE_PATTERN.fullmatch(version) is not None


def canonicalize_maven_range(range_text: str) -> str:
    """Render a range as ``lower-upper``, ``>=lower``, ``<=upper`` or ``*``."""
    match = _RANGE_PATTERN.fullmatch(range_text)
    if not match:
        return range_text

    lower = match.group(1).strip()
    upper = match.group(2).strip()
    if lower:
        lower = canonicalize_maven_version(lower)
    if upper:
        upper = canonicalize_maven_version(upper)

    if not lower and not upper:
        return "*"
    if not lower:
        return "<=" + upper
    if not upper:
        return ">=" + lower
    return f"{lower}-{upper}"


def canonicalize_maven_version(version: str) -> str:
    """Canonicalize a plain Maven version; unknown shapes are returned unchanged."""
    match = _TIMESTAMP_PATTERN.fullmatch(version)
    if match:
        base, timestamp, build_number = match.groups()
        if timestamp and build_number:
            return f"{base}-build.{build_number}"
        return base

    match = _QUALIFIER_PATTERN.fullmatch(version)
    if match:
        base, qualifier = match.groups()
        if not qualifier or qualifier in _DROPPED_QUALIFIERS:
            return base
        if qualifier == "SNAPSHOT":
            return base + "-snapshot"
        if qualifier == "BUILD":
            return base + "-build"
        return f"{base}-{qualifier.lower()}"

    return version
