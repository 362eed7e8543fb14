"""Protocol definition for lockfile parsers."""

from typing import Protocol

from ..config import ParseOptions
from ..models import Dependency, ManifestNameSets


class LockfileParser(Protocol):
    """Protocol for lockfile parsing plugins.

    Each parser implements this protocol to turn one lockfile format into
    normalized dependencies. Parsers are registered with ParserRegistry
    and selected based on the lockfile name.

    Example:
        class GemfileLockParser:
            name = "gemfile-lock"
            supported_files = ("Gemfile.lock",)
            ecosystem = "ruby"

            def supports(self, lock_file_name: str) -> bool:
                return lock_file_name in self.supported_files

            def parse(self, content, name_sets, options) -> list[Dependency]:
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this parser.

        Used for logging and diagnostics.
        Examples: "npm-package-lock", "yarn-lock", "gemfile-lock"
        """
        ...

    @property
    def supported_files(self) -> tuple[str, ...]:
        """Lock file names this parser handles.

        Each entry is a filename (not a path), e.g., "yarn.lock".
        """
        ...

    @property
    def ecosystem(self) -> str:
        """Dependency type emitted by this parser, e.g. "npm", "ruby", "maven"."""
        ...

    def supports(self, lock_file_name: str) -> bool:
        """Check if this parser can handle the given lockfile name."""
        ...

    def parse(
        self,
        content: bytes,
        name_sets: ManifestNameSets | None,
        options: ParseOptions,
    ) -> list[Dependency]:
        """Parse lockfile content into dependencies.

        Implementations should:
        1. Decode the content and sniff which structural variant it is
        2. Walk the format's tree and build raw package records
        3. Pass the records through a DependencyFilter

        Args:
            content: Raw lockfile bytes
            name_sets: Declared dependency names from the matching manifest
            options: Inclusion options

        Returns:
            List of Dependency objects. Empty list when the content is
            malformed or has an unexpected shape.
        """
        ...
