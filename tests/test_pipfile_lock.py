"""Tests for the Pipfile.lock parser."""

import json

import pytest

from depnorm._lockfiles.parsers import PipfileLockParser
from depnorm.models import ManifestNameSets


@pytest.fixture
def pipfile_lock_content():
    return json.dumps(
        {
            "_meta": {"hash": {"sha256": "abc"}, "pipfile-spec": 6},
            "default": {
                "django": {"hashes": ["sha256:aaa"], "version": "==5.1.1"},
                "asgiref": {"hashes": ["sha256:bbb"], "version": "==3.8.1"},
                "mylib": {"git": "https://github.com/me/mylib.git", "ref": "abc123"},
                "localpkg": {"path": "./localpkg", "editable": True},
                "legacy": {"version": "==2.0.0-1"},
            },
            "develop": {
                "pytest": {"version": "==8.3.2", "markers": "python_version >= '3.8'"},
            },
        }
    ).encode()


@pytest.fixture
def pipfile_name_sets():
    return ManifestNameSets(prod={"Django", "mylib", "localpkg", "legacy"}, dev={"pytest"})


class TestPipfileLockParser:
    def test_supports(self):
        assert PipfileLockParser().supports("Pipfile.lock")
        assert not PipfileLockParser().supports("Pipfile")

    def test_default_keeps_declared(self, pipfile_lock_content, pipfile_name_sets, default_options):
        deps = PipfileLockParser().parse(pipfile_lock_content, pipfile_name_sets, default_options)

        assert [(d.name, d.version, d.scope) for d in deps] == [
            ("django", "5.1.1", "prod"),
            ("mylib", "git:https://github.com/me/mylib.git", "prod"),
            ("localpkg", "local", "prod"),
            ("legacy", "2.0.0.post1", "prod"),
            ("pytest", "8.3.2", "dev"),
        ]
        assert all(d.type == "python" for d in deps)
        assert all(d.direct for d in deps)
        assert all(d.source_file == "Pipfile.lock" for d in deps)

    def test_transitive(self, pipfile_lock_content, pipfile_name_sets, transitive_options):
        deps = PipfileLockParser().parse(pipfile_lock_content, pipfile_name_sets, transitive_options)

        asgiref = next(d for d in deps if d.name == "asgiref")
        assert asgiref.version == "3.8.1"
        assert asgiref.direct is False
        assert asgiref.scope == "prod"

    def test_develop_section_flags_undeclared_entries(self, pipfile_lock_content, transitive_options):
        deps = PipfileLockParser().parse(pipfile_lock_content, ManifestNameSets(), transitive_options)

        scopes = {d.name: d.scope for d in deps}
        assert scopes["pytest"] == "dev"
        assert scopes["django"] == "prod"

    def test_without_name_sets_returns_nothing(self, pipfile_lock_content, default_options):
        assert PipfileLockParser().parse(pipfile_lock_content, None, default_options) == []

    def test_metadata(self, pipfile_lock_content, pipfile_name_sets, default_options):
        deps = PipfileLockParser().parse(pipfile_lock_content, pipfile_name_sets, default_options)
        by_name = {d.name: d for d in deps}

        assert by_name["mylib"].metadata == {"git": "https://github.com/me/mylib.git", "ref": "abc123"}
        assert by_name["localpkg"].metadata == {"path": "./localpkg", "editable": True}
        assert by_name["pytest"].metadata == {"markers": "python_version >= '3.8'"}

    def test_missing_version_is_latest(self, transitive_options):
        content = json.dumps({"default": {"requests": {}}}).encode()

        deps = PipfileLockParser().parse(content, None, transitive_options)

        assert [(d.name, d.version) for d in deps] == [("requests", "latest")]

    def test_malformed_json(self, default_options):
        assert PipfileLockParser().parse(b"{", ManifestNameSets(), default_options) == []
