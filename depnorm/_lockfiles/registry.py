"""Registry for lockfile dependency parsers."""

from pathlib import Path

from ..config import ParseOptions
from ..exceptions import FileProcessingError, LockfileParseError
from ..logging_config import logger
from ..models import Dependency, ManifestNameSets
from .protocol import LockfileParser


class ParserRegistry:
    """Registry for lockfile dependency parsers.

    Manages parser instances and dispatches parsing to the appropriate
    parser based on lockfile name. A registry is a plain value: build one
    with create_default_registry() or register parsers by hand.

    Example:
        registry = ParserRegistry()
        registry.register(PackageLockParser())
        registry.register(GemfileLockParser())

        deps = registry.parse_lockfile("Gemfile.lock", content)
    """

    def __init__(self) -> None:
        self._parsers: list[LockfileParser] = []

    def register(self, parser: LockfileParser) -> None:
        """Register a parser.

        Args:
            parser: Parser instance implementing LockfileParser protocol.
        """
        self._parsers.append(parser)
        logger.debug(f"Registered lockfile parser: {parser.name} for {parser.supported_files}")

    def get_parser_for(self, lock_file_name: str) -> LockfileParser | None:
        """Get the parser that supports this lockfile.

        Args:
            lock_file_name: Filename (not full path) to find parser for

        Returns:
            Parser instance if found, None otherwise.
        """
        for parser in self._parsers:
            if parser.supports(lock_file_name):
                return parser
        return None

    def get_parser(self, name: str) -> LockfileParser | None:
        """Get a registered parser by its name, e.g. "yarn-lock"."""
        for parser in self._parsers:
            if parser.name == name:
                return parser
        return None

    def parse_lockfile(
        self,
        lock_file_name: str,
        content: bytes,
        name_sets: ManifestNameSets | None = None,
        options: ParseOptions | None = None,
        strict: bool = False,
    ) -> list[Dependency]:
        """Parse lockfile content using the appropriate parser.

        Args:
            lock_file_name: Lockfile name, used to select the parser
            content: Raw lockfile bytes
            name_sets: Declared dependency names from the matching manifest
            options: Inclusion options, defaults to ParseOptions()
            strict: Raise LockfileParseError instead of returning [] when
                the parser fails

        Returns:
            List of Dependency objects extracted from the lockfile.
            Empty list if no parser found or the content could not be parsed.
        """
        options = options or ParseOptions()
        options.validate()

        parser = self.get_parser_for(lock_file_name)
        if parser is None:
            logger.debug(f"No parser found for lockfile: {lock_file_name}")
            return []

        logger.debug(f"Using {parser.name} to parse {lock_file_name}")
        try:
            dependencies = parser.parse(content, name_sets, options)
        except LockfileParseError as e:
            if strict:
                raise
            logger.warning(f"Failed to parse {lock_file_name}: {e}")
            return []
        except Exception as e:
            if strict:
                raise LockfileParseError(f"Failed to parse {lock_file_name}: {e}") from e
            logger.warning(f"Failed to parse {lock_file_name}: {e}")
            return []

        logger.debug(f"Extracted {len(dependencies)} dependenc(ies) from {lock_file_name}")
        return dependencies

    def parse_lockfile_path(
        self,
        lock_file_path: str | Path,
        name_sets: ManifestNameSets | None = None,
        options: ParseOptions | None = None,
        strict: bool = False,
    ) -> list[Dependency]:
        """Read a lockfile from disk and parse it.

        Raises:
            FileProcessingError: If the file cannot be read
        """
        path = Path(lock_file_path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise FileProcessingError(f"Failed to read lockfile {path}: {e}") from e
        return self.parse_lockfile(path.name, content, name_sets, options, strict)

    @property
    def registered_parsers(self) -> list[str]:
        """Get names of all registered parsers."""
        return [p.name for p in self._parsers]

    @property
    def supported_files(self) -> set[str]:
        """Get all supported lockfile names."""
        result: set[str] = set()
        for parser in self._parsers:
            result.update(parser.supported_files)
        return result
