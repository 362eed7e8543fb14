"""Protocol definitions for version systems."""

from typing import Any, Protocol


class Version(Protocol):
    """A parsed, immutable version of one versioning system.

    Comparisons are only meaningful between two versions produced by the
    same system. Comparing against a version of another system returns 0.
    """

    def canon(self, include_epoch: bool = True) -> str:
        """Return the canonical string form of the version."""
        ...

    def compare(self, other: "Version") -> int:
        """Return -1, 0 or 1 when this version sorts before, equal to or after ``other``."""
        ...

    def __str__(self) -> str:
        """Return the original, unmodified input."""
        ...


class VersionSystem(Protocol):
    """Protocol for ecosystem version grammars.

    Example:
        class NPMSystem:
            name = "npm"

            def parse(self, version: str) -> NPMVersion:
                ...
    """

    @property
    def name(self) -> str:
        """Name of the versioning system, e.g. "PyPI", "npm", "Maven"."""
        ...

    def parse(self, version: str) -> Version:
        """Parse a version string.

        Raises:
            VersionParseError: If the string violates the system's grammar.
        """
        ...


class OrderedVersion:
    """Comparison support for versions ordered by a ``sort_key`` tuple.

    Subclasses provide ``sort_key()``; two versions compare equal when their
    keys are equal, so ``compare`` and ``==`` always agree.
    """

    def sort_key(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def compare(self, other: Any) -> int:
        if type(other) is not type(self):
            return 0
        mine, theirs = self.sort_key(), other.sort_key()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.compare(other) >= 0


def parse_number(text: str) -> int | None:
    """Parse a non-negative ASCII integer, returning None for anything else."""
    if text and text.isascii() and text.isdigit():
        return int(text)
    return None
