"""Default parser wiring and the lockfile parsing entry point."""

from ..config import ParseOptions
from ..models import Dependency, ManifestNameSets
from .parsers import (
    GemfileLockParser,
    MavenDependencyListParser,
    PackageLockParser,
    PipfileLockParser,
    PnpmLockParser,
    YarnLockParser,
)
from .registry import ParserRegistry


def create_default_registry() -> ParserRegistry:
    """Create registry with all default parsers."""
    registry = ParserRegistry()

    # JavaScript/Node.js
    registry.register(PackageLockParser())
    registry.register(YarnLockParser())
    registry.register(PnpmLockParser())

    # Ruby
    registry.register(GemfileLockParser())

    # Java
    registry.register(MavenDependencyListParser())

    # Python
    registry.register(PipfileLockParser())

    return registry


def parse_lockfile(
    lock_file_name: str,
    content: bytes,
    name_sets: ManifestNameSets | None = None,
    options: ParseOptions | None = None,
) -> list[Dependency]:
    """Parse one lockfile with a freshly built default registry.

    Example:
        deps = parse_lockfile(
            "package-lock.json",
            content,
            ManifestNameSets(prod={"express"}),
        )
    """
    return create_default_registry().parse_lockfile(lock_file_name, content, name_sets, options)
