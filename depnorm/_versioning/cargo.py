"""Cargo version system placeholder."""

from ..exceptions import VersionParseError
from .protocol import Version

SYSTEM_NAME = "cargo"


class CargoSystem:
    """Cargo (Rust) versioning system.

    Parsing is not implemented yet; every call raises, so ``normalize``
    returns cargo versions unchanged.
    """

    name = SYSTEM_NAME

    def parse(self, version: str) -> Version:
        raise VersionParseError(SYSTEM_NAME, version, "not yet implemented")
