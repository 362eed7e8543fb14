"""Tests for DependencyFilter scope resolution and inclusion."""

import pytest

from depnorm._lockfiles import DependencyFilter
from depnorm.config import ParseOptions
from depnorm.models import ManifestNameSets, RawPackage, normalize_package_name


class TestScopeResolution:
    """Tests for resolve_scope."""

    def test_priority_peer_over_optional_over_dev_over_prod(self):
        name_sets = ManifestNameSets(
            prod={"a", "b", "c", "d"},
            dev={"a", "b", "c"},
            optional={"a", "b"},
            peer={"a"},
        )
        dep_filter = DependencyFilter(name_sets)
        assert dep_filter.resolve_scope(RawPackage("a", "1")) == "peer"
        assert dep_filter.resolve_scope(RawPackage("b", "1")) == "optional"
        assert dep_filter.resolve_scope(RawPackage("c", "1")) == "dev"
        assert dep_filter.resolve_scope(RawPackage("d", "1")) == "prod"

    def test_undeclared_name_uses_record_flags(self):
        dep_filter = DependencyFilter(ManifestNameSets())
        assert dep_filter.resolve_scope(RawPackage("x", "1", optional=True, dev=True)) == "optional"
        assert dep_filter.resolve_scope(RawPackage("x", "1", dev=True)) == "dev"
        assert dep_filter.resolve_scope(RawPackage("x", "1")) == "prod"

    def test_declared_set_beats_record_flags(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"x"}))
        assert dep_filter.resolve_scope(RawPackage("x", "1", dev=True)) == "prod"


class TestInclusion:
    """Tests for add()."""

    def test_default_mode_keeps_only_direct(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"express"}))
        assert dep_filter.add("npm", RawPackage("express", "4.18.2"), "package-lock.json") is not None
        assert dep_filter.add("npm", RawPackage("accepts", "1.3.8"), "package-lock.json") is None

        assert [d.name for d in dep_filter.dependencies] == ["express"]
        assert dep_filter.dependencies[0].direct is True

    def test_transitive_mode_marks_directness(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"express"}), ParseOptions(include_transitive=True))
        dep_filter.add("npm", RawPackage("express", "4.18.2"), "package-lock.json")
        dep_filter.add("npm", RawPackage("accepts", "1.3.8"), "package-lock.json")

        by_name = {d.name: d for d in dep_filter.dependencies}
        assert by_name["express"].direct is True
        assert by_name["accepts"].direct is False

    def test_bundled_is_skipped(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"a"}), ParseOptions(include_transitive=True))
        assert dep_filter.add("npm", RawPackage("a", "1", bundled=True), "package-lock.json") is None
        assert dep_filter.dependencies == []

    def test_empty_name_is_skipped(self):
        dep_filter = DependencyFilter(options=ParseOptions(include_transitive=True))
        assert dep_filter.add("npm", RawPackage("", "1"), "package-lock.json") is None

    def test_first_seen_wins(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"a"}))
        dep_filter.add("npm", RawPackage("a", "1.0.0"), "package-lock.json")
        dep_filter.add("npm", RawPackage("a", "2.0.0"), "package-lock.json")

        assert len(dep_filter.dependencies) == 1
        assert dep_filter.dependencies[0].version == "1.0.0"

    def test_dedup_is_per_type(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"a"}))
        dep_filter.add("npm", RawPackage("a", "1.0.0"), "package-lock.json")
        dep_filter.add("python", RawPackage("a", "1.0.0"), "Pipfile.lock")
        assert len(dep_filter.dependencies) == 2

    def test_source_file_and_metadata(self):
        dep_filter = DependencyFilter(ManifestNameSets(prod={"a"}))
        dep = dep_filter.add("npm", RawPackage("a", "1", metadata={"spec_type": "npm"}), "yarn.lock")
        assert dep.source_file == "yarn.lock"
        assert dep.metadata == {"spec_type": "npm"}

    def test_add_direct_dependency(self):
        dep_filter = DependencyFilter()
        dep_filter.add_direct_dependency("jest", "dev")
        assert dep_filter.is_direct("jest")
        assert dep_filter.direct_names == {"jest"}
        assert dep_filter.resolve_scope(RawPackage("jest", "29.0.0")) == "dev"

    def test_add_direct_dependency_rejects_unknown_scope(self):
        with pytest.raises(ValueError):
            DependencyFilter().add_direct_dependency("x", "system")

    def test_name_key(self):
        def key(name):
            return normalize_package_name(name, "python")

        dep_filter = DependencyFilter(ManifestNameSets(prod={"Django", "zope.interface"}), name_key=key)
        dep_filter.add("python", RawPackage("django", "5.1.1"), "Pipfile.lock")
        dep_filter.add("python", RawPackage("zope-interface", "6.0"), "Pipfile.lock")
        dep_filter.add("python", RawPackage("Zope_Interface", "6.1"), "Pipfile.lock")

        assert [(d.name, d.version) for d in dep_filter.dependencies] == [
            ("django", "5.1.1"),
            ("zope-interface", "6.0"),
        ]
        assert all(d.direct for d in dep_filter.dependencies)


class TestNormalizePackageName:
    """Tests for package name normalization."""

    def test_python_normalization(self):
        assert normalize_package_name("Django", "python") == "django"
        assert normalize_package_name("django_rest.framework", "pypi") == "django-rest-framework"
        assert normalize_package_name("zope.interface", "python") == "zope-interface"

    def test_npm_normalization(self):
        assert normalize_package_name("Lodash", "npm") == "lodash"
        # Scoped packages are also case-insensitive
        assert normalize_package_name("@Scope/Package", "npm") == "@scope/package"

    def test_cargo_normalization(self):
        assert normalize_package_name("serde-json", "cargo") == "serde_json"

    def test_other_ecosystems_unchanged(self):
        assert normalize_package_name("Rails", "ruby") == "Rails"
