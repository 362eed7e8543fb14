"""Tests for manifest parsing and name sets."""

import json

from depnorm._manifests import (
    GemfileParser,
    get_workspace_patterns,
    is_workspace_project,
    parse_package_json,
    parse_package_json_name_sets,
)

PACKAGE_JSON = json.dumps(
    {
        "name": "test-app",
        "version": "1.0.0",
        "dependencies": {
            "express": "^4.18.0",
            "local-pkg": "workspace:*",
            "file-pkg": "file:../local-package",
            "npm-pkg": "npm:package@^1.0.0",
        },
        "devDependencies": {"typescript": ">=4.5.0 <5.0.0", "jest": "^29.0.0"},
        "peerDependencies": {"react": ">=16.0.0"},
        "optionalDependencies": {"fsevents": "*"},
    }
).encode()

RAILS_GEMFILE = """source 'https://rubygems.org'
git_source(:github) { |repo| "https://github.com/#{repo}.git" }

ruby '3.0.0'

# Bundle edge Rails instead: gem 'rails', github: 'rails/rails', branch: 'main'
gem 'rails', '~> 6.1.4'
gem 'pg', '~> 1.1'
gem 'puma', '~> 5.0'
gem 'bootsnap', '>= 1.4.4', require: false
gem 'my_gem', git: 'https://github.com/user/my_gem.git', branch: 'develop'
gem 'local_gem', path: '../local_gem'

group :development, :test do
  # Call 'byebug' anywhere in the code to stop execution
  gem 'byebug', platforms: [:mri, :mingw, :x64_mingw]
end

group :development do
  gem 'web-console', '>= 4.1.0'
end

group :production do
  gem 'lograge'
end
"""


class TestPackageJson:
    def test_name_sets(self):
        name_sets = parse_package_json_name_sets(PACKAGE_JSON)

        assert name_sets.prod == {"express", "local-pkg", "file-pkg", "npm-pkg"}
        assert name_sets.dev == {"typescript", "jest"}
        assert name_sets.peer == {"react"}
        assert name_sets.optional == {"fsevents"}

    def test_name_sets_of_malformed_json_are_empty(self):
        assert parse_package_json_name_sets(b"{oops").is_empty()
        assert parse_package_json_name_sets(b"[]").is_empty()

    def test_declared_dependencies(self):
        deps = parse_package_json(PACKAGE_JSON)

        assert [(d.name, d.version, d.scope) for d in deps] == [
            ("express", "^4.18.0", "prod"),
            ("local-pkg", "workspace", "prod"),
            ("file-pkg", "local", "prod"),
            ("npm-pkg", "package@^1.0.0", "prod"),
            ("typescript", ">=4.5.0 <5.0.0", "dev"),
            ("jest", "^29.0.0", "dev"),
            ("react", ">=16.0.0", "peer"),
            ("fsevents", "latest", "optional"),
        ]
        assert all(d.direct for d in deps)
        assert all(d.source_file == "package.json" for d in deps)

    def test_empty_manifest(self):
        assert parse_package_json(b'{"name": "empty-app", "version": "1.0.0"}') == []

    def test_workspaces(self):
        content = b'{"name": "monorepo", "workspaces": ["packages/*", "apps/*"]}'
        assert get_workspace_patterns(content) == ["packages/*", "apps/*"]
        assert is_workspace_project(content)

    def test_workspaces_object_form(self):
        content = b'{"workspaces": {"packages": ["packages/*"]}}'
        assert get_workspace_patterns(content) == ["packages/*"]

    def test_not_a_workspace(self):
        assert not is_workspace_project(b'{"name": "regular-app"}')
        assert not is_workspace_project(b'{"workspaces": []}')
        assert is_workspace_project(b'{"workspace": "."}')


class TestGemfileParser:
    def test_rails_gemfile(self):
        deps = GemfileParser().parse(RAILS_GEMFILE)
        by_name = {d.name: d for d in deps}

        assert len(deps) == 9
        assert by_name["rails"].version == "~> 6.1.4"
        assert by_name["rails"].scope == "prod"
        assert by_name["lograge"].version == "latest"
        assert by_name["lograge"].scope == "prod"
        assert by_name["byebug"].scope == "dev"
        assert by_name["web-console"].scope == "dev"
        assert all(d.type == "ruby" and d.direct for d in deps)
        assert all(d.source_file == "Gemfile" for d in deps)

    def test_metadata(self):
        by_name = {d.name: d for d in GemfileParser().parse(RAILS_GEMFILE)}

        assert by_name["rails"].metadata == {"source": "Gemfile"}
        assert by_name["bootsnap"].metadata["require"] is False
        assert by_name["my_gem"].metadata["git"] == "https://github.com/user/my_gem.git"
        assert by_name["my_gem"].metadata["branch"] == "develop"
        assert by_name["my_gem"].version == "latest"
        assert by_name["local_gem"].metadata["path"] == "../local_gem"
        assert by_name["byebug"].metadata["groups"] == ["development", "test"]
        assert by_name["byebug"].metadata["platforms"] == ["mri", "mingw", "x64_mingw"]
        assert by_name["lograge"].metadata["groups"] == ["production"]

    def test_group_without_names(self):
        deps = GemfileParser().parse("group do\n  gem 'rails', '6.1.4'\nend\n")

        assert len(deps) == 1
        assert deps[0].scope == "prod"
        assert "groups" not in deps[0].metadata

    def test_nested_groups_restore_outer_group(self):
        content = """
group :production do
  group :test do
    gem 'a'
  end
  gem 'x'
end
gem 'z'
"""
        deps = {d.name: d for d in GemfileParser().parse(content)}

        assert deps["a"].scope == "dev"
        assert deps["a"].metadata["groups"] == ["test"]
        assert deps["x"].scope == "prod"
        assert deps["x"].metadata["groups"] == ["production"]
        assert deps["z"].scope == "prod"
        assert "groups" not in deps["z"].metadata

    def test_empty_values_are_omitted(self):
        deps = GemfileParser().parse("gem 'partial_git', git: ''\ngem 'no_platforms', platforms: [ ]\n")

        assert [d.name for d in deps] == ["partial_git", "no_platforms"]
        assert "git" not in deps[0].metadata
        assert "platforms" not in deps[1].metadata

    def test_empty_gem_name_is_skipped(self):
        deps = GemfileParser().parse("gem 'rails', '6.1.4'\ngem \"\"  # empty\ngem 'valid_gem', '2.0.0'\n")

        assert [d.name for d in deps] == ["rails", "valid_gem"]

    def test_comments_and_empty_content(self):
        assert GemfileParser().parse("") == []
        assert GemfileParser().parse("# gem 'rails'\n# only comments") == []

    def test_bytes_input(self):
        deps = GemfileParser().parse(b"gem 'rake'\n")
        assert [(d.name, d.version) for d in deps] == [("rake", "latest")]

    def test_name_sets(self):
        name_sets = GemfileParser().name_sets(RAILS_GEMFILE)

        assert "rails" in name_sets.prod
        assert "lograge" in name_sets.prod
        assert name_sets.dev == {"byebug", "web-console"}
        assert name_sets.peer == set()
