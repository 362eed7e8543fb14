"""Tests for ParserRegistry and the parse_lockfile entry point."""

import logging

import pytest

from depnorm import parse_lockfile
from depnorm._lockfiles import ParserRegistry, create_default_registry
from depnorm._lockfiles.parsers import GemfileLockParser
from depnorm.config import ParseOptions
from depnorm.exceptions import ConfigurationError, FileProcessingError, LockfileParseError
from depnorm.models import ManifestNameSets


class ExplodingParser:
    name = "exploding"
    supported_files = ("boom.lock",)
    ecosystem = "npm"

    def supports(self, lock_file_name):
        return lock_file_name in self.supported_files

    def parse(self, content, name_sets, options):
        raise RuntimeError("unexpected shape")


class TestParserRegistry:
    """Tests for ParserRegistry."""

    def test_default_registry_has_parsers(self):
        registry = create_default_registry()

        assert registry.registered_parsers == [
            "npm-package-lock",
            "yarn-lock",
            "pnpm-lock",
            "gemfile-lock",
            "maven-dependency-list",
            "pipfile-lock",
        ]
        assert registry.supported_files == {
            "package-lock.json",
            "yarn.lock",
            "pnpm-lock.yaml",
            "Gemfile.lock",
            "dependency-list.txt",
            "Pipfile.lock",
        }

    def test_registry_returns_none_for_unknown(self):
        registry = create_default_registry()
        assert registry.get_parser_for("Cargo.lock") is None
        assert registry.get_parser_for("requirements.txt") is None

    def test_get_parser_by_name(self):
        registry = create_default_registry()
        assert isinstance(registry.get_parser("gemfile-lock"), GemfileLockParser)
        assert registry.get_parser("missing") is None

    def test_registries_are_independent(self):
        registry = ParserRegistry()
        registry.register(GemfileLockParser())

        assert registry.registered_parsers == ["gemfile-lock"]
        assert len(create_default_registry().registered_parsers) == 6

    def test_unknown_lockfile_returns_empty(self):
        assert create_default_registry().parse_lockfile("Cargo.lock", b"[[package]]") == []

    def test_dispatch(self, package_lock_v3, express_name_sets):
        deps = create_default_registry().parse_lockfile("package-lock.json", package_lock_v3, express_name_sets)
        assert [d.name for d in deps] == ["express"]

    def test_options_default_to_direct_only(self, gemfile_lock_content):
        deps = create_default_registry().parse_lockfile("Gemfile.lock", gemfile_lock_content)
        assert [d.name for d in deps] == ["pg", "rails"]

    def test_invalid_options(self, gemfile_lock_content):
        with pytest.raises(ConfigurationError):
            create_default_registry().parse_lockfile(
                "Gemfile.lock", gemfile_lock_content, options=ParseOptions(max_depth=0)
            )

    def test_parser_failure_is_logged(self, caplog):
        registry = ParserRegistry()
        registry.register(ExplodingParser())

        with caplog.at_level(logging.WARNING, logger="depnorm"):
            assert registry.parse_lockfile("boom.lock", b"") == []

        assert "Failed to parse boom.lock: unexpected shape" in caplog.text

    def test_strict_mode_raises(self):
        registry = ParserRegistry()
        registry.register(ExplodingParser())

        with pytest.raises(LockfileParseError, match="boom.lock"):
            registry.parse_lockfile("boom.lock", b"", strict=True)

    def test_parse_lockfile_path(self, tmp_path, gemfile_lock_content):
        lock_file = tmp_path / "Gemfile.lock"
        lock_file.write_bytes(gemfile_lock_content)

        deps = create_default_registry().parse_lockfile_path(lock_file, options=ParseOptions(include_transitive=True))

        assert len(deps) == 4

    def test_parse_lockfile_path_missing_file(self, tmp_path):
        with pytest.raises(FileProcessingError):
            create_default_registry().parse_lockfile_path(tmp_path / "package-lock.json")


class TestParseLockfile:
    """Tests for the module-level entry point."""

    def test_parse_lockfile(self, package_lock_v3):
        deps = parse_lockfile(
            "package-lock.json",
            package_lock_v3,
            ManifestNameSets(prod={"express"}),
            ParseOptions(include_transitive=True),
        )
        assert {d.name for d in deps} == {"express", "accepts", "body-parser"}

    def test_direct_names_round_trip(self, package_lock_v3):
        """Every declared name present in the lockfile comes back as a direct dependency."""
        name_sets = ManifestNameSets(prod={"express"}, dev={"body-parser"})

        deps = parse_lockfile("package-lock.json", package_lock_v3, name_sets, ParseOptions(include_transitive=True))

        direct = {d.name for d in deps if d.direct}
        assert direct == {"express", "body-parser"}
