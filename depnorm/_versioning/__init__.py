"""Version parsing, canonicalization and comparison per ecosystem.

Supported systems:
- PyPI: PEP 440
- npm: semver 2.0.0
- Maven: qualifier and range canonicalization
- cargo: placeholder, always fails to parse

Example usage:
    from depnorm._versioning import NPM, normalize

    NPM.parse("1.0.0").compare(NPM.parse("1.0.0-alpha"))  # 1
    normalize(NPM, "v2.1")  # "2.1.0"
"""

from ..exceptions import VersionParseError
from .cargo import CargoSystem
from .maven import MavenSystem, MavenVersion
from .npm import NPMSystem, NPMVersion, normalize_npm_version
from .protocol import Version, VersionSystem
from .pypi import PyPISystem, PyPIVersion

# Shared stateless instances
PyPI: VersionSystem = PyPISystem()
NPM: VersionSystem = NPMSystem()
Maven: VersionSystem = MavenSystem()
Cargo: VersionSystem = CargoSystem()

_SYSTEMS_BY_NAME = {
    "pypi": PyPI,
    "python": PyPI,
    "npm": NPM,
    "maven": Maven,
    "cargo": Cargo,
}


def get_version_system(name: str) -> VersionSystem:
    """
    Look up a version system by name (case-insensitive).

    Raises:
        ValueError: If no system has that name
    """
    try:
        return _SYSTEMS_BY_NAME[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown version system: {name}") from None


def normalize(system: VersionSystem, version: str) -> str:
    """Return the canonical form of ``version``, or ``version`` unchanged if it does not parse."""
    try:
        return system.parse(version).canon(True)
    except VersionParseError:
        return version


__all__ = [
    "PyPI",
    "NPM",
    "Maven",
    "Cargo",
    "Version",
    "VersionSystem",
    "VersionParseError",
    "PyPIVersion",
    "NPMVersion",
    "MavenVersion",
    "get_version_system",
    "normalize",
    "normalize_npm_version",
]
