"""depnorm: normalize dependencies from manifests and lockfiles across ecosystems."""

from ._lockfiles import ParserRegistry, create_default_registry, parse_lockfile
from ._manifests import GemfileParser, parse_package_json, parse_package_json_name_sets
from ._versioning import NPM, Cargo, Maven, PyPI, get_version_system, normalize
from .config import ParseOptions, load_options
from .exceptions import (
    ConfigurationError,
    DepnormError,
    FileProcessingError,
    LockfileParseError,
    VersionParseError,
)
from .models import Dependency, ManifestNameSets


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import version

        return version("depnorm")
    except Exception:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        from pathlib import Path

        import tomllib

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
    except Exception:
        pass

    # Final fallback
    return "unknown"


__version__ = _get_version()

__all__ = [
    "Cargo",
    "ConfigurationError",
    "Dependency",
    "DepnormError",
    "FileProcessingError",
    "GemfileParser",
    "LockfileParseError",
    "ManifestNameSets",
    "Maven",
    "NPM",
    "ParseOptions",
    "ParserRegistry",
    "PyPI",
    "VersionParseError",
    "create_default_registry",
    "get_version_system",
    "load_options",
    "normalize",
    "parse_lockfile",
    "parse_package_json",
    "parse_package_json_name_sets",
]
