"""npm (semver 2.0.0) version parsing.

Based on https://github.com/npm/node-semver and https://semver.org.
"""

from dataclasses import dataclass

from ..exceptions import VersionParseError
from .protocol import OrderedVersion, parse_number

SYSTEM_NAME = "npm"


@dataclass(frozen=True, eq=False)
class NPMVersion(OrderedVersion):
    """A semver version: ``[v]major.minor.patch[-prerelease][+build]``."""

    original: str
    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def canon(self, include_epoch: bool = True) -> str:
        result = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            result += "-" + ".".join(self.prerelease)
        if self.build:
            result += "+" + ".".join(self.build)
        return result

    def sort_key(self) -> tuple:
        # Build metadata never affects precedence
        if not self.prerelease:
            pre_key: tuple = (1,)
        else:
            pre_key = (0, tuple(_identifier_key(part) for part in self.prerelease))
        return (self.major, self.minor, self.patch, pre_key)

    def __str__(self) -> str:
        return self.original


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers always have lower precedence than alphanumeric ones
    number = parse_number(identifier)
    if number is not None:
        return (0, number, "")
    return (1, 0, identifier)


class NPMSystem:
    """npm semver versioning system."""

    name = SYSTEM_NAME

    def parse(self, version: str) -> NPMVersion:
        return parse_npm_version(version)


def parse_npm_version(version: str) -> NPMVersion:
    """
    Parse an npm semver string.

    Args:
        version: Version string, e.g. "v1.2.3-beta.1+build.5"

    Returns:
        Parsed version

    Raises:
        VersionParseError: If the string is not a valid version
    """
    if not version:
        raise VersionParseError(SYSTEM_NAME, version, "empty version string")

    s = version.strip()
    if s[:1] in ("v", "V", "="):
        s = s[1:]

    build: tuple[str, ...] = ()
    if "+" in s:
        s, build_text = s.split("+", 1)
        if build_text:
            build = tuple(build_text.split("."))

    prerelease: tuple[str, ...] = ()
    if "-" in s:
        s, pre_text = s.split("-", 1)
        if pre_text:
            prerelease = tuple(pre_text.split("."))

    parts = s.split(".")
    if len(parts) > 3:
        raise VersionParseError(SYSTEM_NAME, version, "invalid version format")

    numbers = []
    for label, part in zip(("major", "minor", "patch"), parts):
        number = parse_number(part)
        if number is None:
            raise VersionParseError(SYSTEM_NAME, version, f"invalid {label} version: {part}")
        numbers.append(number)
    numbers.extend([0] * (3 - len(numbers)))

    return NPMVersion(
        original=version,
        major=numbers[0],
        minor=numbers[1],
        patch=numbers[2],
        prerelease=prerelease,
        build=build,
    )


def normalize_npm_version(version: str) -> str:
    """
    Normalize an npm dependency specifier for display.

    Protocol specifiers are collapsed to a short marker (``workspace``,
    ``local``, ``link``), git/GitHub/HTTP references are preserved in full,
    ``npm:`` aliases lose their prefix, and plain versions are canonicalized.
    Ranges and anything else that does not parse are returned unchanged.

    Args:
        version: Specifier as written in a manifest or lockfile

    Returns:
        Normalized specifier
    """
    version = version.strip()

    if version.startswith("workspace:"):
        return "workspace"
    if version.startswith("file:"):
        return "local"
    if version.startswith("npm:"):
        return version[len("npm:") :]
    if version.startswith(("git:", "git+", "github:", "http:", "https:")):
        return version
    if version.startswith("link:"):
        return "link"
    if version in ("", "*", "latest"):
        return "latest"

    try:
        return parse_npm_version(version).canon(True)
    except VersionParseError:
        return version
