"""PEP 440 version parsing for PyPI.

Based on https://peps.python.org/pep-0440/. Parsing strips components from
the end of the string in a fixed order (epoch, local, dev, post, pre, release)
because their delimiters overlap: the local segment has to go before the
dev/post/pre search, or a local label such as ``+ubuntu.dev1`` would be read
as a dev release.
"""

import re
from dataclasses import dataclass

from ..exceptions import VersionParseError
from .protocol import OrderedVersion, parse_number

SYSTEM_NAME = "PyPI"

# Search order decides ties between overlapping tokens ("rc" before "c", "beta" before "b")
_PRE_PHASES = ("rc", "c", "beta", "b", "alpha", "a")
_PHASE_ALIASES = {"alpha": "a", "a": "a", "beta": "b", "b": "b", "c": "rc", "rc": "rc"}
_PHASE_ORDER = {"a": 1, "b": 2, "rc": 3}

_RELEASE_SEPARATORS = re.compile(r"[._-]")


@dataclass(frozen=True, eq=False)
class PyPIVersion(OrderedVersion):
    """A PEP 440 version."""

    original: str
    release: tuple[int, ...]
    epoch: int = 0
    pre: tuple[str, int] | None = None
    post: int | None = None
    dev: int | None = None
    local: str = ""

    def canon(self, include_epoch: bool = True) -> str:
        parts = []
        if include_epoch and self.epoch > 0:
            parts.append(f"{self.epoch}!")
        parts.append(".".join(str(n) for n in self.release))
        if self.pre is not None:
            phase, number = self.pre
            parts.append(f"{phase}{number}")
        if self.post is not None:
            parts.append(f".post{self.post}")
        if self.dev is not None:
            parts.append(f".dev{self.dev}")
        if self.local:
            parts.append(f"+{self.local}")
        return "".join(parts)

    def sort_key(self) -> tuple:
        # A final release sorts after its pre-releases, a post release after the
        # plain release, and a dev release before everything it is attached to.
        if self.pre is None:
            pre_key: tuple = (1,)
        else:
            pre_key = (0, _PHASE_ORDER[self.pre[0]], self.pre[1])
        post_key = (0,) if self.post is None else (1, self.post)
        dev_key = (1,) if self.dev is None else (0, self.dev)
        return (self.epoch, self.release, pre_key, post_key, dev_key)

    def __str__(self) -> str:
        return self.original


class PyPISystem:
    """PEP 440 versioning system."""

    name = SYSTEM_NAME

    def parse(self, version: str) -> PyPIVersion:
        return parse_pypi_version(version)


def parse_pypi_version(version: str) -> PyPIVersion:
    """
    Parse a PEP 440 version string.

    Args:
        version: Version string, e.g. "1!2.0.0rc1.post2.dev3+local"

    Returns:
        Parsed version

    Raises:
        VersionParseError: If the string is not a valid version
    """
    if not version:
        raise VersionParseError(SYSTEM_NAME, version, "empty version string")

    s = version.strip().lower()

    epoch, s = _strip_epoch(s, version)
    local, s = _strip_local(s)
    dev, s = _strip_dev(s, version)
    post, s = _strip_post(s, version)
    pre, s = _strip_pre(s, version)
    release = _parse_release(s, version)

    return PyPIVersion(
        original=version,
        release=release,
        epoch=epoch,
        pre=pre,
        post=post,
        dev=dev,
        local=local,
    )


def _strip_epoch(s: str, version: str) -> tuple[int, str]:
    idx = s.find("!")
    if idx <= 0:
        return 0, s
    epoch = parse_number(s[:idx])
    if epoch is None:
        raise VersionParseError(SYSTEM_NAME, version, f"invalid epoch: {s[:idx]}")
    return epoch, s[idx + 1 :]


def _strip_local(s: str) -> tuple[str, str]:
    idx = s.find("+")
    if idx < 0:
        return "", s
    return s[idx + 1 :], s[:idx]


def _strip_optional_number(s: str, prefixes: tuple[str, ...], version: str, component: str) -> tuple[int | None, str]:
    """Strip ``<prefix><N>`` from ``s``; a missing number means 0."""
    for prefix in prefixes:
        idx = s.find(prefix)
        if idx < 0:
            continue
        number_text = s[idx + len(prefix) :]
        if not number_text:
            return 0, s[:idx]
        number = parse_number(number_text)
        if number is None:
            raise VersionParseError(SYSTEM_NAME, version, f"invalid {component} number: {number_text}")
        return number, s[:idx]
    return None, s


def _strip_dev(s: str, version: str) -> tuple[int | None, str]:
    return _strip_optional_number(s, (".dev", "dev"), version, "dev")


def _strip_post(s: str, version: str) -> tuple[int | None, str]:
    post, rest = _strip_optional_number(s, (".post", "post"), version, "post")
    if post is not None:
        return post, rest

    # Implicit post release: "1.0-1"
    idx = s.rfind("-")
    if idx >= 0:
        number = parse_number(s[idx + 1 :])
        if number is not None:
            return number, s[:idx]
    return None, s


def _strip_pre(s: str, version: str) -> tuple[tuple[str, int] | None, str]:
    found_idx = -1
    found_phase = ""
    for phase in _PRE_PHASES:
        idx = s.find(phase)
        if idx >= 0 and (found_idx == -1 or idx < found_idx):
            found_idx, found_phase = idx, phase

    if found_idx < 0:
        return None, s

    # Separators between phase and number are allowed: "1.0-alpha.1"
    number_text = s[found_idx + len(found_phase) :].lstrip("._-")
    number = 0
    if number_text:
        parsed = parse_number(number_text)
        if parsed is None:
            raise VersionParseError(SYSTEM_NAME, version, f"invalid pre-release number: {number_text}")
        number = parsed

    return (_PHASE_ALIASES[found_phase], number), s[:found_idx]


def _parse_release(s: str, version: str) -> tuple[int, ...]:
    s = s.rstrip(".")
    if not s:
        raise VersionParseError(SYSTEM_NAME, version, "no release numbers found")

    release = []
    for part in _RELEASE_SEPARATORS.split(s):
        if not part:
            continue
        number = parse_number(part)
        if number is None:
            raise VersionParseError(SYSTEM_NAME, version, f"invalid release number: {part}")
        release.append(number)

    if not release:
        raise VersionParseError(SYSTEM_NAME, version, "no valid release numbers")

    return tuple(release)
